"""Configuration service for tasktrack.

This module provides the ConfigService class, which loads and saves
config.json from the user config directory and layers environment variable
overrides on top. The core (repositories, migrations) never reads it
directly: callers pass the resulting AppConfig explicitly.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from platformdirs import user_config_dir
from pydantic import ValidationError as PydanticValidationError

from tasktrack.exceptions import ConfigurationError, UnsupportedBackendError
from tasktrack.models.config_models import AppConfig, StorageBackend
from tasktrack.utils.logger import get_logger

# Environment variable -> (section path, cast)
ENV_OVERRIDES: dict[str, tuple[tuple[str, ...], type]] = {
    "TASKTRACK_DATA_DIR": (("storage", "local_kv", "directory"), str),
    "TASKTRACK_BACKUP_DIR": (("migration", "backup_directory"), str),
    "TASKTRACK_DOCUMENT_STORE_URI": (("storage", "document_store", "uri"), str),
    "TASKTRACK_PG_HOST": (("storage", "relational", "host"), str),
    "TASKTRACK_PG_PORT": (("storage", "relational", "port"), int),
    "TASKTRACK_PG_DATABASE": (("storage", "relational", "database"), str),
    "TASKTRACK_PG_USERNAME": (("storage", "relational", "username"), str),
    "TASKTRACK_PG_PASSWORD": (("storage", "relational", "password"), str),
    "TASKTRACK_CLOUD_PROJECT_ID": (("storage", "cloud_document", "project_id"), str),
    "TASKTRACK_CLOUD_API_KEY": (("storage", "cloud_document", "api_key"), str),
}


def apply_env_overrides(config: AppConfig, environ: dict[str, str] | None = None) -> AppConfig:
    """Return a copy of config with environment variable overrides applied.

    Raises:
        UnsupportedBackendError: If TASKTRACK_DATABASE_TYPE is not a known backend
        ConfigurationError: If TASKTRACK_ENV or a numeric override is invalid
    """
    env = os.environ if environ is None else environ
    data = config.model_dump()

    if env.get("TASKTRACK_ENV"):
        data["environment"] = env["TASKTRACK_ENV"]

    if env.get("TASKTRACK_DATABASE_TYPE"):
        token = env["TASKTRACK_DATABASE_TYPE"]
        if token not in StorageBackend.tokens():
            raise UnsupportedBackendError(token)
        data["storage"]["type"] = token

    for var, (path, cast) in ENV_OVERRIDES.items():
        if not env.get(var):
            continue
        section = data
        for part in path[:-1]:
            section = section[part]
        try:
            section[path[-1]] = cast(env[var])
        except ValueError as e:
            raise ConfigurationError(f"{var} must be {cast.__name__}: {e}") from e

    try:
        return AppConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def validate_environment(config: AppConfig) -> list[str]:
    """Check the settings the selected backend needs.

    Returns:
        List of problems (empty when the configuration is usable)

    Raises:
        ConfigurationError: In production, if any problem is found
    """
    storage = config.storage
    errors: list[str] = []

    if storage.type == StorageBackend.DOCUMENT_STORE.value:
        if not storage.document_store.uri:
            errors.append("document store URI is not set (TASKTRACK_DOCUMENT_STORE_URI)")
    elif storage.type == StorageBackend.RELATIONAL.value:
        if not storage.relational.host or not storage.relational.database:
            errors.append(
                "relational host/database are not set "
                "(TASKTRACK_PG_HOST, TASKTRACK_PG_DATABASE)"
            )
    elif storage.type == StorageBackend.CLOUD_DOCUMENT.value:
        if not storage.cloud_document.project_id or not storage.cloud_document.api_key:
            errors.append(
                "cloud project id/API key are not set "
                "(TASKTRACK_CLOUD_PROJECT_ID, TASKTRACK_CLOUD_API_KEY)"
            )

    if errors:
        if config.is_production:
            raise ConfigurationError(f"Configuration errors: {', '.join(errors)}")
        get_logger().warning("configuration incomplete: %s", "; ".join(errors))
    return errors


class ConfigService:
    """Service for loading and saving the application configuration."""

    def __init__(self, config_dir: str | Path | None = None):
        """Initialize the config service.

        Args:
            config_dir: Directory holding config.json (defaults to the user config dir)
        """
        self.config_dir = Path(config_dir or user_config_dir("tasktrack"))
        self.config_path = self.config_dir / "config.json"
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._stored: AppConfig | None = None
        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load config.json (creating a default one) and apply env overrides."""
        if self._config is not None:
            return self._config

        try:
            stored = AppConfig.model_validate_json(
                self.config_path.read_text(encoding="utf-8")
            )
        except FileNotFoundError:
            # First run
            stored = AppConfig()
            self._write(stored)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Failed to load config: {e}") from e

        self._stored = stored
        self._config = apply_env_overrides(stored)
        return self._config

    def save_config(self) -> None:
        """Save the stored configuration.

        Environment overrides are never written to config.json; they are
        re-applied to the in-memory view after saving.
        """
        self.load_config()
        self._write(self._stored)
        self._config = apply_env_overrides(self._stored)

    def _write(self, config: AppConfig) -> None:
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(config.model_dump_json(indent=4), encoding="utf-8")
            self.config_path.chmod(0o600)
        except OSError as e:
            raise ConfigurationError(f"Failed to save config: {e}") from e

    def set_storage_type(self, token: str) -> None:
        """Switch the configured backend and persist it.

        Raises:
            UnsupportedBackendError: If token is not a known backend
        """
        if token not in StorageBackend.tokens():
            raise UnsupportedBackendError(token)
        self.load_config()
        self._stored.storage.type = token
        self.save_config()

    def reset_config(self) -> None:
        """Reset configuration to defaults."""
        self._stored = None
        self._config = None
        if self.config_path.exists():
            self.config_path.unlink()


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get the CLI's config service instance."""
    return ConfigService()
