"""XDG-compliant path helpers for kanterm data storage."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

DATABASE_FILENAME = "kanterm.db"


def get_data_dir() -> Path:
    """Get the data directory for kanterm (database, debug log)."""
    override = os.environ.get("KANTERM_DATA_DIR")
    if override:
        return Path(override)
    return Path(user_data_dir("kanterm"))


def get_config_dir() -> Path:
    """Get the config directory for kanterm (config.toml)."""
    override = os.environ.get("KANTERM_CONFIG_DIR")
    if override:
        return Path(override)
    return Path(user_config_dir("kanterm"))


def get_database_path(folder: str | Path | None = None) -> Path:
    """Get the path to the SQLite database, optionally inside a custom folder."""
    base = Path(folder).expanduser() if folder else get_data_dir()
    return base / DATABASE_FILENAME


def get_config_path() -> Path:
    """Get the path to the main config file."""
    return get_config_dir() / "config.toml"


def get_debug_log_path() -> Path:
    """Get the path to the debug log file written with --debug."""
    return get_data_dir() / "debug.log"

