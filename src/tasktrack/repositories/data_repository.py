"""Data repository: entity helpers and snapshots over one storage adapter."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from tasktrack.adapters.factory import create_adapter
from tasktrack.exceptions import NotFoundError, PartialDeleteError, ValidationError
from tasktrack.models import (
    PROJECTS,
    SNAPSHOT_VERSION,
    TASKS,
    USERS,
    AppConfig,
    IntegrityReport,
    Record,
    RepositoryStats,
)
from tasktrack.repositories.repository import StorageAdapter
from tasktrack.utils.helpers import generate_id, now_iso, parse_iso
from tasktrack.utils.logger import get_logger

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _created_at(record: Record) -> datetime:
    try:
        return parse_iso(str(record.get("createdAt") or ""))
    except ValueError:
        return _EPOCH


class DataRepository:
    """Uniform CRUD plus task/project/user helpers over a single adapter.

    The adapter is chosen once, at construction, from a backend token.
    Adapter errors propagate unchanged; only get_stats() and
    test_connection() degrade to a default value on failure.
    """

    def __init__(
        self,
        storage_type: str = "local-kv",
        config: AppConfig | None = None,
        adapter: StorageAdapter | None = None,
    ):
        """Initialize the repository.

        Args:
            storage_type: Backend token selecting the adapter
            config: Application configuration (defaults are used when None)
            adapter: Pre-built adapter, bypassing the factory (mainly for tests)

        Raises:
            UnsupportedBackendError: If storage_type is not a known backend
        """
        self.storage_type = storage_type
        self.config = config or AppConfig()
        self.storage = adapter or create_adapter(storage_type, self.config)

    # -- generic operations ------------------------------------------------

    async def create(self, collection: str, data: Record) -> Record:
        return await self.storage.create(collection, data)

    async def find_all(
        self, collection: str, filters: dict[str, Any] | None = None
    ) -> list[Record]:
        return await self.storage.find_all(collection, filters or {})

    async def find_by_id(self, collection: str, record_id: str) -> Record | None:
        return await self.storage.find_by_id(collection, record_id)

    async def update(self, collection: str, record_id: str, data: Record) -> Record:
        return await self.storage.update(collection, record_id, data)

    async def delete(self, collection: str, record_id: str) -> bool:
        return await self.storage.delete(collection, record_id)

    async def delete_all(self, collection: str) -> bool:
        return await self.storage.delete_all(collection)

    # -- tasks ---------------------------------------------------------------

    async def create_task(self, task_data: Record) -> Record:
        """Create a task with a fresh id and timestamps.

        ``completedAt`` is derived from ``status``; any value supplied by the
        caller is ignored.
        """
        timestamp = now_iso()
        task = {
            **task_data,
            "id": generate_id(),
            "createdAt": timestamp,
            "updatedAt": timestamp,
        }
        task["completedAt"] = timestamp if task.get("status") == "completed" else None
        return await self.create(TASKS, task)

    async def get_tasks(self, filters: dict[str, Any] | None = None) -> list[Record]:
        return await self.find_all(TASKS, filters)

    async def get_task_by_id(self, task_id: str) -> Record | None:
        return await self.find_by_id(TASKS, task_id)

    async def update_task(self, task_id: str, task_data: Record) -> Record:
        """Update a task, re-stamping ``updatedAt`` and re-deriving ``completedAt``.

        A task that stays completed keeps its original completion time; a
        task that becomes completed gets the current time; any other status
        clears it.

        Raises:
            NotFoundError: If the task does not exist
        """
        existing = await self.get_task_by_id(task_id)
        if existing is None:
            raise NotFoundError(TASKS, task_id)

        timestamp = now_iso()
        update_data = {**task_data, "updatedAt": timestamp}
        update_data.pop("id", None)

        status = update_data.get("status", existing.get("status"))
        if status == "completed":
            already_completed = existing.get("status") == "completed"
            update_data["completedAt"] = (
                existing.get("completedAt") or timestamp if already_completed else timestamp
            )
        else:
            update_data["completedAt"] = None

        return await self.update(TASKS, task_id, update_data)

    async def delete_task(self, task_id: str) -> bool:
        return await self.delete(TASKS, task_id)

    async def get_tasks_by_project(self, project_id: str | None) -> list[Record]:
        return await self.get_tasks({"project": project_id})

    async def get_tasks_by_status(self, status: str) -> list[Record]:
        return await self.get_tasks({"status": status})

    async def get_tasks_by_priority(self, priority: str) -> list[Record]:
        return await self.get_tasks({"priority": priority})

    async def get_recent_tasks(self, limit: int = 5) -> list[Record]:
        """Return the most recently created tasks, newest first."""
        tasks = await self.get_tasks()
        tasks.sort(key=_created_at, reverse=True)
        return tasks[:limit]

    async def get_completed_tasks_in_period(
        self, start: datetime | str, end: datetime | str
    ) -> list[Record]:
        """Return completed tasks whose ``completedAt`` falls within [start, end]."""
        start_dt = parse_iso(start)
        end_dt = parse_iso(end)

        result = []
        for task in await self.get_tasks_by_status("completed"):
            completed_at = task.get("completedAt")
            if not completed_at:
                continue
            if start_dt <= parse_iso(completed_at) <= end_dt:
                result.append(task)
        return result

    # -- projects ------------------------------------------------------------

    async def create_project(self, project_data: Record) -> Record:
        timestamp = now_iso()
        project = {
            **project_data,
            "id": generate_id(),
            "createdAt": timestamp,
            "updatedAt": timestamp,
        }
        return await self.create(PROJECTS, project)

    async def get_projects(self, filters: dict[str, Any] | None = None) -> list[Record]:
        return await self.find_all(PROJECTS, filters)

    async def get_project_by_id(self, project_id: str) -> Record | None:
        return await self.find_by_id(PROJECTS, project_id)

    async def update_project(self, project_id: str, project_data: Record) -> Record:
        update_data = {**project_data, "updatedAt": now_iso()}
        update_data.pop("id", None)
        return await self.update(PROJECTS, project_id, update_data)

    async def delete_project(self, project_id: str) -> bool:
        """Detach every task from the project, then delete the project.

        Tasks are detached one at a time. If any step fails, the tasks
        already detached stay detached and PartialDeleteError reports them.

        Raises:
            PartialDeleteError: If a step fails after the first task was detached
        """
        detached: list[str] = []
        try:
            for task in await self.get_tasks_by_project(project_id):
                await self.update_task(task["id"], {"project": None})
                detached.append(task["id"])
            return await self.delete(PROJECTS, project_id)
        except Exception as e:
            if not detached:
                raise
            get_logger().error(
                "project delete %s failed after detaching %d task(s): %s",
                project_id,
                len(detached),
                e,
            )
            raise PartialDeleteError(project_id, detached, e) from e

    # -- users ---------------------------------------------------------------

    async def create_user(self, user_data: Record) -> Record:
        timestamp = now_iso()
        user = {
            "role": "user",
            **user_data,
            "id": generate_id(),
            "createdAt": timestamp,
            "updatedAt": timestamp,
        }
        return await self.create(USERS, user)

    async def get_users(self, filters: dict[str, Any] | None = None) -> list[Record]:
        return await self.find_all(USERS, filters)

    async def get_user_by_id(self, user_id: str) -> Record | None:
        return await self.find_by_id(USERS, user_id)

    async def get_user_by_username(self, username: str) -> Record | None:
        users = await self.find_all(USERS, {"username": username})
        return users[0] if users else None

    async def update_user(self, user_id: str, user_data: Record) -> Record:
        update_data = {**user_data, "updatedAt": now_iso()}
        update_data.pop("id", None)
        return await self.update(USERS, user_id, update_data)

    async def delete_user(self, user_id: str) -> bool:
        return await self.delete(USERS, user_id)

    # -- snapshots -----------------------------------------------------------

    async def export_data(self) -> dict[str, Any]:
        """Return a full snapshot of tasks, projects and users."""
        return {
            "tasks": await self.get_tasks(),
            "projects": await self.get_projects(),
            "users": await self.get_users(),
            "exportDate": now_iso(),
            "version": SNAPSHOT_VERSION,
        }

    async def import_data(self, data: Any) -> bool:
        """Replace tasks and projects with the snapshot's records.

        Records keep their original ids and timestamps. Users are never
        wiped; snapshot users whose id is not already stored are added.

        Raises:
            ValidationError: If data is not a snapshot mapping
        """
        if not isinstance(data, dict):
            raise ValidationError("Import payload must be a JSON object")

        await self.delete_all(TASKS)
        await self.delete_all(PROJECTS)

        tasks = data.get("tasks")
        if isinstance(tasks, list):
            for task in tasks:
                await self.create(TASKS, task)

        projects = data.get("projects")
        if isinstance(projects, list):
            for project in projects:
                await self.create(PROJECTS, project)

        users = data.get("users")
        if isinstance(users, list) and users:
            known = {user.get("id") for user in await self.get_users()}
            for user in users:
                if user.get("id") not in known:
                    await self.create(USERS, user)

        return True

    async def clear_all_data(self) -> bool:
        await self.delete_all(TASKS)
        await self.delete_all(PROJECTS)
        return True

    async def get_stats(self) -> RepositoryStats:
        """Aggregate counts; on failure logs and returns all-zero stats."""
        try:
            tasks = await self.get_tasks()
            projects = await self.get_projects()
            users = await self.get_users()
        except Exception as e:
            get_logger().error("failed to compute stats (%s): %s", self.storage_type, e)
            return RepositoryStats(last_updated=now_iso())

        def count(field: str, value: str) -> int:
            return sum(1 for t in tasks if t.get(field) == value)

        return RepositoryStats(
            total_tasks=len(tasks),
            completed_tasks=count("status", "completed"),
            pending_tasks=count("status", "pending"),
            in_progress_tasks=count("status", "in-progress"),
            total_projects=len(projects),
            total_users=len(users),
            high_priority_tasks=count("priority", "high"),
            medium_priority_tasks=count("priority", "medium"),
            low_priority_tasks=count("priority", "low"),
            last_updated=now_iso(),
        )

    # -- lifecycle hooks -----------------------------------------------------

    async def test_connection(self) -> bool:
        hook = getattr(self.storage, "test_connection", None)
        if hook is None:
            return True
        try:
            return await hook()
        except Exception as e:
            get_logger().error("connection test failed (%s): %s", self.storage_type, e)
            return False

    async def initialize_schema(self) -> bool:
        hook = getattr(self.storage, "initialize_schema", None)
        if hook is None:
            return True
        return await hook()

    async def verify_integrity(self) -> IntegrityReport:
        hook = getattr(self.storage, "verify_integrity", None)
        if hook is None:
            return IntegrityReport()
        return await hook()

    async def disconnect(self) -> bool:
        hook = getattr(self.storage, "disconnect", None)
        if hook is None:
            return True
        return await hook()
