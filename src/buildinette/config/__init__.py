"""Public configuration API for buildinette."""

from __future__ import annotations

from .models import (
    BuildinetteConfig,
    ConfigError,
    ConfigIOError,
    ConfigValidationError,
    ConfigYamlError,
    DefaultAlreadySetError,
)
from .protocol import ConfigStore, DefaultsWriter
from .store import FileConfigStore

__all__ = [
    "BuildinetteConfig",
    "ConfigError",
    "ConfigIOError",
    "ConfigStore",
    "ConfigValidationError",
    "ConfigYamlError",
    "DefaultAlreadySetError",
    "DefaultsWriter",
    "FileConfigStore",
]
