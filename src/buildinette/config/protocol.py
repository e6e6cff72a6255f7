"""Configuration storage protocol."""

from pathlib import Path
from typing import Protocol

from result import Result

from .models import BuildinetteConfig, ConfigError


class DefaultsWriter(Protocol):
    """Anything able to persist the remembered libft URL."""

    def remember_library_url(self, url: str, *, force: bool = False) -> Result[Path, ConfigError]: ...


class ConfigStore(DefaultsWriter, Protocol):
    """Protocol for configuration storage and retrieval."""

    def load(self) -> Result[BuildinetteConfig, ConfigError]:
        """Load the persisted configuration.

        Returns:
            Ok(BuildinetteConfig) with defaults when no file exists yet.
            Err(ConfigError) on any loading or validation errors.
        """
        ...
