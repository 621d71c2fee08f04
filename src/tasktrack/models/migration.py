"""Migration models: phases, history records and backup metadata."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class MigrationPhase(str, Enum):
    """Phases a single migration passes through."""

    IDLE = "idle"
    EXPORTING = "exporting"
    VALIDATING = "validating"
    BACKING_UP = "backing-up"
    CLEARING = "clearing"
    IMPORTING = "importing"
    VERIFYING = "verifying"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class MigrationOptions(BaseModel):
    """Options a migration was invoked with."""

    model_config = ConfigDict(frozen=True)

    create_backup: bool = True
    clear_target: bool = False


class RecordsCount(BaseModel):
    """Number of records carried by a migration."""

    model_config = ConfigDict(frozen=True)

    tasks: int = 0
    projects: int = 0
    users: int = 0


class MigrationRecord(BaseModel):
    """Immutable history entry for one migration attempt.

    Attributes:
        id: Migration identifier (also used in the backup key)
        from_type: Source backend token
        to_type: Target backend token
        start_time: ISO-8601 start timestamp
        end_time: ISO-8601 end timestamp
        duration_ms: Wall-clock duration in milliseconds
        status: "success" or "failed"
        records_count: Counts carried over (successful migrations only)
        error: Error message (failed migrations only)
        failed_phase: Phase that was running when the migration failed
        backup_key: Key of the pre-migration backup, if one was written
        options: Options the migration was invoked with
    """

    model_config = ConfigDict(frozen=True)

    id: str
    from_type: str
    to_type: str
    start_time: str
    end_time: str
    duration_ms: int
    status: Literal["success", "failed"]
    records_count: RecordsCount | None = None
    error: str | None = None
    failed_phase: MigrationPhase | None = None
    backup_key: str | None = None
    options: MigrationOptions = Field(default_factory=MigrationOptions)


class BackupInfo(BaseModel):
    """Summary of a stored pre-migration backup."""

    key: str
    migration_id: str | None = None
    created_at: str | None = None
    tasks_count: int = 0
    projects_count: int = 0


class ConnectionTestResult(BaseModel):
    """Outcome of probing one storage backend."""

    status: Literal["success", "error"]
    message: str
