"""tasktrack domain models.

This package contains the pydantic models and type aliases used at the
typed boundaries of the application: snapshots, statistics, migration
history and configuration.
"""

from .config_models import AppConfig, StorageBackend
from .core import (
    COLLECTIONS,
    PROJECTS,
    SNAPSHOT_VERSION,
    TASKS,
    USERS,
    IntegrityReport,
    Record,
    RepositoryStats,
    Snapshot,
)
from .migration import (
    BackupInfo,
    ConnectionTestResult,
    MigrationOptions,
    MigrationPhase,
    MigrationRecord,
    RecordsCount,
)

__all__ = [
    # Records and snapshots
    "Record",
    "Snapshot",
    "RepositoryStats",
    "IntegrityReport",
    "TASKS",
    "PROJECTS",
    "USERS",
    "COLLECTIONS",
    "SNAPSHOT_VERSION",
    # Migration models
    "MigrationPhase",
    "MigrationOptions",
    "MigrationRecord",
    "RecordsCount",
    "BackupInfo",
    "ConnectionTestResult",
    # Config models
    "AppConfig",
    "StorageBackend",
]
