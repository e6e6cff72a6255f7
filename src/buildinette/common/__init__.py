"""Common models and types used across buildinette modules."""

from .fields import GitUrl, JsonDict, NonEmptyString, ProjectName, RemoteName
from .logging import (
    LoggingConfig,
    create_logger,
    disable_library_logging,
    enable_library_logging,
    resolve_log_file,
    setup_cli_logging,
)
from .models import AppInfo, AppPaths, Toolchain
from .paths import get_data_directory, get_global_config_root, resolve_working_directory

__all__ = [
    "AppInfo",
    "AppPaths",
    "GitUrl",
    "JsonDict",
    "LoggingConfig",
    "NonEmptyString",
    "ProjectName",
    "RemoteName",
    "Toolchain",
    "create_logger",
    "disable_library_logging",
    "enable_library_logging",
    "get_data_directory",
    "get_global_config_root",
    "resolve_log_file",
    "resolve_working_directory",
    "setup_cli_logging",
]
