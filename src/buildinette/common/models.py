"""Common models used across buildinette."""

import platform
from typing import Literal

from pydantic import BaseModel, Field

from buildinette.constants import APP_NAME


class AppInfo(BaseModel):
    project_name: str = APP_NAME
    version: str = "0.1.0"
    environment: Literal["test", "dev", "prod"] = "prod"


class AppPaths(BaseModel):
    config_dir_name: str = APP_NAME
    data_dir_name: str = APP_NAME
    config_filename: str = "config.yaml"
    log_filename: str = f"{APP_NAME}.log"


def _default_c_compiler() -> str:
    return "cc" if platform.system() == "Darwin" else "gcc"


def _default_cpp_compiler() -> str:
    return "c++" if platform.system() == "Darwin" else "g++"


class Toolchain(BaseModel):
    """Host toolchain defaults, resolved once at start-up."""

    platform: str = Field(default_factory=platform.system)
    c_compiler: str = Field(default_factory=_default_c_compiler)
    cpp_compiler: str = Field(default_factory=_default_cpp_compiler)

    @property
    def is_darwin(self) -> bool:
        return self.platform == "Darwin"
