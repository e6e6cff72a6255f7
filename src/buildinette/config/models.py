"""Pydantic models for the persisted buildinette configuration and its errors."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from buildinette.common import GitUrl, LoggingConfig
from buildinette.constants import MLX_DEFAULT_URL


class ConfigYamlError(BaseModel):
    """YAML parsing error in configuration file."""

    model_config = ConfigDict(extra="forbid")

    path: Path
    line: int | None = None
    column: int | None = None
    message: str


class ConfigValidationError(BaseModel):
    """Schema validation error in configuration."""

    model_config = ConfigDict(extra="forbid")

    path: Path
    field: str | None = None
    message: str


class ConfigIOError(BaseModel):
    """File I/O error reading or writing configuration."""

    model_config = ConfigDict(extra="forbid")

    path: Path
    message: str


class DefaultAlreadySetError(BaseModel):
    """A libft default is stored and the caller did not ask to override it."""

    model_config = ConfigDict(extra="forbid")

    path: Path
    current: str
    message: str


type ConfigError = ConfigYamlError | ConfigValidationError | ConfigIOError | DefaultAlreadySetError


class BuildinetteConfig(BaseModel):
    """Persisted configuration (~/.config/buildinette/config.yaml)."""

    model_config = ConfigDict(extra="allow")

    libft_default: GitUrl | None = None
    graphics_url: GitUrl = MLX_DEFAULT_URL
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
