"""Process-wide settings, overridable with BUILDINETTE_* environment variables.

``BUILDINETTE_TOOLCHAIN__C_COMPILER=clang`` changes the default C compiler,
``BUILDINETTE_APP__ENVIRONMENT=dev`` turns on loguru diagnostics.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from buildinette.common import AppInfo, AppPaths, Toolchain


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BUILDINETTE_",
        env_nested_delimiter="__",
        case_sensitive=False,
        nested_model_default_partial_update=True,
        # BUILDINETTE_CONFIG__* belongs to the config file overrides
        extra="ignore",
    )

    app: AppInfo = AppInfo()
    paths: AppPaths = AppPaths()
    toolchain: Toolchain = Toolchain()


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


settings = get_settings()


__all__ = [
    "AppInfo",
    "AppPaths",
    "Settings",
    "Toolchain",
    "get_settings",
    "settings",
]
