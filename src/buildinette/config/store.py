"""File-based configuration store implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from result import Err, Ok, Result, is_err

from buildinette.common import AppPaths, create_logger, get_global_config_root
from buildinette.utils import deep_merge

from .models import (
    BuildinetteConfig,
    ConfigError,
    ConfigIOError,
    ConfigValidationError,
    ConfigYamlError,
    DefaultAlreadySetError,
)
from .protocol import ConfigStore
from .resolver import env_overrides

logger = create_logger("config")


class FileConfigStore(ConfigStore):
    def __init__(self, paths: AppPaths, config_path: Path | None = None) -> None:
        self.paths = paths
        self.config_path = config_path or get_global_config_root(paths) / paths.config_filename

    def load(self) -> Result[BuildinetteConfig, ConfigError]:
        logger.debug("Loading config", path=str(self.config_path))

        return (
            self._read_raw()
            .map(lambda data: deep_merge(data, env_overrides()))
            .and_then(self._validate)
            .inspect_err(lambda error: logger.error("Config load failed", error=error.message))
        )

    def remember_library_url(self, url: str, *, force: bool = False) -> Result[Path, ConfigError]:
        """Persist url as the libft default.

        An existing default is only replaced when force is set; otherwise the
        file is left untouched and DefaultAlreadySetError is returned.
        """
        raw_result = self._read_raw()
        if is_err(raw_result):
            return raw_result

        data = raw_result.unwrap()
        current = data.get("libft_default")
        if current and not force:
            logger.warning("libft default already configured", path=str(self.config_path), current=current)
            return Err(
                DefaultAlreadySetError(
                    path=self.config_path,
                    current=str(current),
                    message=f"libft default is already configured in {self.config_path}.",
                )
            )

        updated = {**data, "libft_default": url}
        validation = self._validate(updated)
        if is_err(validation):
            return validation

        logger.info("Remembering libft default", url=url, force=force, path=str(self.config_path))
        return self._write(updated)

    def _read_raw(self) -> Result[dict[str, Any], ConfigError]:
        path = self.config_path
        if not path.is_file():
            logger.debug("Config file not found, using defaults", path=str(path))
            return Ok({})

        try:
            raw_text = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("Config file read error", path=str(path), error=str(exc))
            return Err(ConfigIOError(path=path, message=str(exc)))

        try:
            data = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            mark = getattr(exc, "problem_mark", None)
            line = getattr(mark, "line", None)
            column = getattr(mark, "column", None)
            logger.error("Config YAML parse error", path=str(path), line=line, column=column, error=str(exc))
            return Err(
                ConfigYamlError(
                    path=path,
                    line=(line + 1) if line is not None else None,
                    column=(column + 1) if column is not None else None,
                    message=str(exc),
                )
            )

        if data is None:
            data = {}

        if not isinstance(data, dict):
            logger.error("Config must be a mapping", path=str(path))
            return Err(
                ConfigValidationError(
                    path=path,
                    field=None,
                    message="Configuration root must be a mapping of keys to values.",
                )
            )

        return Ok(data)

    def _validate(self, data: dict[str, Any]) -> Result[BuildinetteConfig, ConfigError]:
        try:
            return Ok(BuildinetteConfig.model_validate(data))
        except ValidationError as exc:
            error_details = exc.errors()
            field = None
            message = str(exc)
            if error_details:
                first = error_details[0]
                loc = first.get("loc") or ()
                field = ".".join(str(part) for part in loc) or None
                message = first.get("msg", message)
            logger.error("Config validation error", path=str(self.config_path), field=field, error=message)
            return Err(ConfigValidationError(path=self.config_path, field=field, message=message))

    def _write(self, data: dict[str, Any]) -> Result[Path, ConfigError]:
        path = self.config_path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
            return Ok(path)
        except OSError as exc:
            logger.error("Config file write error", path=str(path), error=str(exc))
            return Err(ConfigIOError(path=path, message=str(exc)))
