"""Filesystem locations derived from configuration."""

from __future__ import annotations

from pathlib import Path

from platformdirs import user_data_dir

from tasktrack.models.config_models import AppConfig

_APP_NAME = "tasktrack"


def default_data_dir() -> Path:
    return Path(user_data_dir(_APP_NAME))


def store_directory(config: AppConfig) -> Path:
    """Directory holding the local key-value store."""
    if config.storage.local_kv.directory:
        return Path(config.storage.local_kv.directory).expanduser()
    return default_data_dir() / "store"


def backup_directory(config: AppConfig) -> Path:
    """Directory holding pre-migration backups."""
    if config.migration.backup_directory:
        return Path(config.migration.backup_directory).expanduser()
    return default_data_dir() / "backups"
