"""Path discovery utilities for buildinette."""

from __future__ import annotations

import os
from pathlib import Path

from .models import AppPaths


def resolve_working_directory(working_dir: Path | None) -> Path:
    base = working_dir or Path.cwd()
    if base.is_file():
        base = base.parent
    try:
        return base.resolve(strict=False)
    except OSError:
        return base


def get_global_config_root(paths: AppPaths) -> Path:
    """Get global config root directory.

    Returns ~/.config/{config_dir_name} (or XDG_CONFIG_HOME/{config_dir_name} if set).
    """
    xdg_base = os.getenv("XDG_CONFIG_HOME")
    base_dir = Path(xdg_base).expanduser() if xdg_base else Path.home() / ".config"
    return base_dir / paths.config_dir_name


def get_data_directory(paths: AppPaths) -> Path:
    """Get XDG data directory.

    Returns ~/.local/share/{data_dir_name} (or XDG_DATA_HOME/{data_dir_name} if set).
    """
    xdg_data = os.getenv("XDG_DATA_HOME")
    base_dir = Path(xdg_data).expanduser() if xdg_data else Path.home() / ".local" / "share"
    return base_dir / paths.data_dir_name
