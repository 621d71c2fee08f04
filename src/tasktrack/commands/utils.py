"""Shared helpers for commands."""

from tasktrack.repositories.data_repository import DataRepository
from tasktrack.services.config_service import get_config_service
from tasktrack.services.migration_service import DataMigration


def get_repository(storage_type: str | None = None) -> DataRepository:
    """Build a repository for the configured (or given) backend."""
    config = get_config_service().config
    return DataRepository(storage_type or config.storage.type, config)


def get_migration() -> DataMigration:
    """Build a migration service from the current configuration."""
    return DataMigration(get_config_service().config)
