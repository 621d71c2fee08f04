"""Domain models for tasktrack.

Records themselves are plain dictionaries persisted verbatim as JSON with
camelCase keys. The pydantic models here describe the typed boundaries:
the snapshot format shared by export, import, backup and migration, and
the derived values the repository returns.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Record = dict[str, Any]

TaskStatus = Literal["pending", "in-progress", "completed"]
TaskPriority = Literal["low", "medium", "high"]
ProjectStatus = Literal["active", "completed", "on-hold"]
UserRole = Literal["admin", "user"]

TASK_STATUSES: tuple[str, ...] = ("pending", "in-progress", "completed")
TASK_PRIORITIES: tuple[str, ...] = ("low", "medium", "high")

TASKS = "tasks"
PROJECTS = "projects"
USERS = "users"
COLLECTIONS: tuple[str, ...] = (TASKS, PROJECTS, USERS)

SNAPSHOT_VERSION = "1.0.0"


def _require_id(value: str | int) -> str | int:
    if not value:
        raise ValueError("id must not be empty")
    return value


class SnapshotTask(BaseModel):
    """Minimal shape every task in a snapshot must have.

    Attributes:
        id: Non-empty task identifier (string or number)
        title: Non-empty task title
        status: Non-empty task status
    """

    model_config = ConfigDict(extra="allow")

    id: str | int
    title: str = Field(min_length=1)
    status: str = Field(min_length=1)

    @field_validator("id")
    @classmethod
    def check_id(cls, value: str | int) -> str | int:
        return _require_id(value)


class SnapshotProject(BaseModel):
    """Minimal shape every project in a snapshot must have."""

    model_config = ConfigDict(extra="allow")

    id: str | int
    name: str = Field(min_length=1)

    @field_validator("id")
    @classmethod
    def check_id(cls, value: str | int) -> str | int:
        return _require_id(value)


class Snapshot(BaseModel):
    """Full exported state of a repository.

    Attributes:
        tasks: Task records
        projects: Project records
        users: Optional user records
        exportDate: ISO-8601 timestamp of the export
        version: Snapshot format version
    """

    model_config = ConfigDict(extra="allow")

    tasks: list[SnapshotTask]
    projects: list[SnapshotProject]
    users: list[Record] | None = None
    exportDate: str
    version: str


class RepositoryStats(BaseModel):
    """Aggregate counts over the tasks, projects and users collections."""

    total_tasks: int = 0
    completed_tasks: int = 0
    pending_tasks: int = 0
    in_progress_tasks: int = 0
    total_projects: int = 0
    total_users: int = 0
    high_priority_tasks: int = 0
    medium_priority_tasks: int = 0
    low_priority_tasks: int = 0
    last_updated: str | None = None


class IntegrityReport(BaseModel):
    """Result of a storage integrity check."""

    valid: bool = True
    issues: list[str] = Field(default_factory=list)
