"""Loguru setup.

The CLI writes to a rotating file under the XDG data directory; the package
itself stays silent unless a caller opts in with ``buildinette.enable_logging()``.
"""

import sys
from pathlib import Path
from typing import Any, Literal

import loguru
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from buildinette.constants import APP_NAME

from .models import AppInfo, AppPaths
from .paths import get_data_directory

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]

_TEXT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[scope]: <18} | {message} | {extra}\n{exception}"


class LoggingConfig(BaseModel):
    """``logging`` section of config.yaml."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    log_level: LogLevel = "INFO"
    log_file: str | None = Field(default=None, description="Defaults to <data dir>/logs/buildinette.log")
    rotation: str = "1 MB"
    retention: str = "7 days"
    format: Literal["json", "text"] = "text"


def resolve_log_file(config: LoggingConfig, paths: AppPaths) -> Path:
    if config.log_file:
        return Path(config.log_file).expanduser()
    return get_data_directory(paths) / "logs" / paths.log_filename


def setup_cli_logging(app_info: AppInfo, config: LoggingConfig, paths: AppPaths) -> int:
    """Route every buildinette record to the log file; returns the sink id."""
    logger.enable(APP_NAME)
    logger.remove()
    logger.configure(extra={"scope": "cli", "env": app_info.environment, "version": app_info.version})

    log_file = resolve_log_file(config, paths)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler_id = logger.add(log_file, **_file_sink_options(app_info, config))
    logger.debug("CLI logging initialized", log_file=str(log_file), level=config.log_level, format=config.format)
    return handler_id


def _file_sink_options(app_info: AppInfo, config: LoggingConfig) -> dict[str, Any]:
    options: dict[str, Any] = {
        "level": config.log_level,
        "rotation": config.rotation,
        "retention": config.retention,
        "diagnose": app_info.environment == "dev",
    }
    if config.format == "json":
        options["serialize"] = True
    else:
        options["format"] = _TEXT_FORMAT
    return options


def disable_library_logging() -> None:
    logger.disable(APP_NAME)


def enable_library_logging(level: LogLevel = "INFO") -> int:
    logger.enable(APP_NAME)
    logger.remove()
    logger.configure(extra={"scope": "library"})
    return logger.add(sys.stderr, level=level, format=_TEXT_FORMAT, colorize=False)


def create_logger(scope: str) -> "loguru.Logger":
    return logger.bind(scope=scope)
