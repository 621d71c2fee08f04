"""Custom exceptions for tasktrack."""

from __future__ import annotations


class TaskTrackError(Exception):
    """Base exception for all tasktrack errors."""


class NotFoundError(TaskTrackError):
    """Raised when an update or lookup targets a record that does not exist."""

    def __init__(self, collection: str, record_id: str):
        super().__init__(f"Record not found in '{collection}': {record_id}")
        self.collection = collection
        self.record_id = record_id


class BackendNotImplementedError(TaskTrackError, NotImplementedError):
    """Raised when an operation is invoked on a backend that has no implementation."""

    def __init__(self, backend: str, operation: str):
        super().__init__(f"{backend} adapter does not implement '{operation}' yet")
        self.backend = backend
        self.operation = operation


class ValidationError(TaskTrackError):
    """Raised when a snapshot or import payload is malformed."""


class IntegrityError(TaskTrackError):
    """Raised when post-migration verification finds a count or id mismatch."""


class UnsupportedBackendError(TaskTrackError):
    """Raised when a backend token is not one of the known storage backends."""

    def __init__(self, token: str):
        super().__init__(f"Unsupported storage backend: '{token}'")
        self.token = token


class ConfigurationError(TaskTrackError):
    """Raised when the configuration is incomplete for the selected backend."""


class BackupError(TaskTrackError):
    """Raised when a backup cannot be created, found, or read."""


class PartialDeleteError(TaskTrackError):
    """Raised when a project delete fails after some tasks were already detached.

    Attributes:
        project_id: Project that was being deleted
        detached_task_ids: Tasks whose ``project`` field was already cleared
    """

    def __init__(self, project_id: str, detached_task_ids: list[str], cause: Exception):
        super().__init__(
            f"Deleting project {project_id} failed after detaching "
            f"{len(detached_task_ids)} task(s): {cause}"
        )
        self.project_id = project_id
        self.detached_task_ids = detached_task_ids
