"""Data migration between storage backends.

A migration exports a snapshot from the source repository, validates it,
optionally backs it up, optionally clears the target, imports the snapshot
into the target and finally verifies that both sides hold the same task and
project ids. Each attempt is a single best-effort pass: nothing is retried
and a target that was already written is not rolled back when verification
fails.
"""

from __future__ import annotations

import json
import time
import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from tasktrack.adapters.local_kv import JsonFileStore, KeyValueStore
from tasktrack.exceptions import BackupError, IntegrityError, ValidationError
from tasktrack.models import (
    TASKS,
    AppConfig,
    BackupInfo,
    ConnectionTestResult,
    MigrationOptions,
    MigrationPhase,
    MigrationRecord,
    RecordsCount,
    Snapshot,
    StorageBackend,
)
from tasktrack.repositories.data_repository import DataRepository
from tasktrack.utils.helpers import now_iso, parse_iso
from tasktrack.utils.logger import get_logger
from tasktrack.utils.paths import backup_directory

RepositoryFactory = Callable[[str, AppConfig], DataRepository]

BACKUP_PREFIX = "migration_backup_"


def _default_repository_factory(storage_type: str, config: AppConfig) -> DataRepository:
    return DataRepository(storage_type, config)


class DataMigration:
    """Moves snapshots between repositories and keeps pre-migration backups.

    The migration history lives in memory only and is lost when the
    process exits.
    """

    def __init__(
        self,
        config: AppConfig,
        backup_store: KeyValueStore | None = None,
        repository_factory: RepositoryFactory | None = None,
    ):
        """Initialize the migration service.

        Args:
            config: Application configuration passed to every repository
            backup_store: Store for backups (defaults to the configured backup directory)
            repository_factory: Callable building a repository from a backend token
        """
        self.config = config
        self.backup_store = backup_store or JsonFileStore(backup_directory(config))
        self.repository_factory = repository_factory or _default_repository_factory
        self.migration_history: list[MigrationRecord] = []
        self.phase = MigrationPhase.IDLE

    def _repository(self, storage_type: str) -> DataRepository:
        return self.repository_factory(storage_type, self.config)

    @staticmethod
    def generate_migration_id() -> str:
        return f"migration_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"

    async def migrate(
        self,
        from_type: str,
        to_type: str,
        *,
        create_backup: bool | None = None,
        clear_target: bool = False,
    ) -> MigrationRecord:
        """Migrate all data from one backend to another.

        Args:
            from_type: Source backend token
            to_type: Target backend token
            create_backup: Back up the source snapshot first (defaults to config)
            clear_target: Wipe the target's tasks and projects before importing

        Returns:
            The successful MigrationRecord

        Raises:
            ValidationError: If the source snapshot is malformed
            BackupError: If the backup could not be written
            IntegrityError: If the target does not match the source afterwards
            BackendNotImplementedError: If either backend has no implementation
            UnsupportedBackendError: If either token is unknown
        """
        logger = get_logger()
        if create_backup is None:
            create_backup = self.config.migration.backup_before_migration
        options = MigrationOptions(create_backup=create_backup, clear_target=clear_target)

        migration_id = self.generate_migration_id()
        start_time = now_iso()
        started = time.monotonic()
        backup_key: str | None = None
        logger.info("migration %s started: %s -> %s", migration_id, from_type, to_type)

        def finish(**fields: Any) -> MigrationRecord:
            record = MigrationRecord(
                id=migration_id,
                from_type=from_type,
                to_type=to_type,
                start_time=start_time,
                end_time=now_iso(),
                duration_ms=int((time.monotonic() - started) * 1000),
                backup_key=backup_key,
                options=options,
                **fields,
            )
            self.migration_history.append(record)
            return record

        try:
            self.phase = MigrationPhase.EXPORTING
            source = self._repository(from_type)
            target = self._repository(to_type)
            data = await source.export_data()

            self.phase = MigrationPhase.VALIDATING
            self.validate_migration_data(data)

            if create_backup:
                self.phase = MigrationPhase.BACKING_UP
                backup_key = self.create_backup(data, migration_id)

            if clear_target:
                self.phase = MigrationPhase.CLEARING
                await target.clear_all_data()

            self.phase = MigrationPhase.IMPORTING
            await target.import_data(data)

            self.phase = MigrationPhase.VERIFYING
            await self.verify_migration(source, target)
        except Exception as e:
            failed_phase = self.phase
            self.phase = MigrationPhase.FAILED
            finish(status="failed", error=str(e), failed_phase=failed_phase)
            logger.error(
                "migration %s failed during %s: %s", migration_id, failed_phase.value, e
            )
            raise

        self.phase = MigrationPhase.SUCCEEDED
        record = finish(
            status="success",
            records_count=RecordsCount(
                tasks=len(data.get("tasks") or []),
                projects=len(data.get("projects") or []),
                users=len(data.get("users") or []),
            ),
        )
        logger.info("migration %s succeeded in %dms", migration_id, record.duration_ms)
        return record

    def validate_migration_data(self, data: Any) -> Snapshot:
        """Check a snapshot's shape before it is imported anywhere.

        Raises:
            ValidationError: On the first missing field or malformed record
        """
        if not isinstance(data, dict):
            raise ValidationError("Migration data must be a JSON object")

        for field in ("tasks", "projects", "exportDate", "version"):
            if field not in data:
                raise ValidationError(f"Missing required field: {field}")

        try:
            return Snapshot.model_validate(data)
        except PydanticValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"])
            raise ValidationError(f"Invalid snapshot at {location}: {first['msg']}") from e

    def create_backup(self, data: dict[str, Any], migration_id: str) -> str:
        """Persist a snapshot under a migration-scoped key.

        Returns:
            The backup key

        Raises:
            BackupError: If the backup could not be written
        """
        backup_key = f"{BACKUP_PREFIX}{migration_id}"
        backup = {
            **data,
            "backupInfo": {
                "migrationId": migration_id,
                "createdAt": now_iso(),
                "type": "pre-migration-backup",
            },
        }
        try:
            self.backup_store.set_item(backup_key, json.dumps(backup))
        except (OSError, TypeError, ValueError) as e:
            raise BackupError(f"Failed to create backup: {e}") from e

        get_logger().info("backup created: %s", backup_key)
        return backup_key

    async def verify_migration(
        self, source: DataRepository, target: DataRepository
    ) -> None:
        """Compare task/project counts and id sets of source and target.

        Raises:
            IntegrityError: On any mismatch
        """
        source_data = await source.export_data()
        target_data = await target.export_data()

        for collection in ("tasks", "projects"):
            source_items = source_data[collection]
            target_items = target_data[collection]
            if len(source_items) != len(target_items):
                raise IntegrityError(
                    f"{collection} count mismatch: "
                    f"source={len(source_items)}, target={len(target_items)}"
                )
            source_ids = {item.get("id") for item in source_items}
            target_ids = {item.get("id") for item in target_items}
            if source_ids != target_ids:
                missing = len(source_ids - target_ids)
                extra = len(target_ids - source_ids)
                raise IntegrityError(
                    f"{collection} ids do not match after migration "
                    f"({missing} missing, {extra} unexpected)"
                )

    def _load_backup(self, backup_key: str) -> dict[str, Any]:
        raw = self.backup_store.get_item(backup_key)
        if raw is None:
            raise BackupError(f"Backup not found: {backup_key}")
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise BackupError(f"Backup is corrupt: {backup_key}") from e
        if not isinstance(data, dict):
            raise BackupError(f"Backup is corrupt: {backup_key}")
        return data

    async def restore_backup(self, backup_key: str, target_type: str) -> bool:
        """Import a saved backup into a target backend, without validation.

        Raises:
            BackupError: If the backup does not exist or cannot be read
        """
        data = self._load_backup(backup_key)
        target = self._repository(target_type)
        await target.import_data(data)
        get_logger().info("backup %s restored into %s", backup_key, target_type)
        return True

    def list_backups(self) -> list[BackupInfo]:
        """List stored backups, skipping (and logging) corrupt ones."""
        backups = []
        for key in self.backup_store.keys():
            if not key.startswith(BACKUP_PREFIX):
                continue
            try:
                data = self._load_backup(key)
            except BackupError:
                get_logger().warning("corrupt backup skipped: %s", key)
                continue
            info = data.get("backupInfo") or {}
            backups.append(
                BackupInfo(
                    key=key,
                    migration_id=info.get("migrationId"),
                    created_at=info.get("createdAt"),
                    tasks_count=len(data.get("tasks") or []),
                    projects_count=len(data.get("projects") or []),
                )
            )
        return backups

    def cleanup_backups(self, max_age: timedelta | None = None) -> int:
        """Delete backups older than max_age (default from config).

        Returns:
            Number of backups removed
        """
        if max_age is None:
            max_age = timedelta(days=self.config.migration.max_backup_age_days)
        now = datetime.now(UTC)
        cleaned = 0

        for backup in self.list_backups():
            if not backup.created_at:
                continue
            try:
                created = parse_iso(backup.created_at)
            except ValueError:
                continue
            if now - created > max_age:
                self.backup_store.remove_item(backup.key)
                cleaned += 1

        get_logger().info("%d old backup(s) removed", cleaned)
        return cleaned

    def get_migration_history(self) -> list[MigrationRecord]:
        return list(self.migration_history)

    async def test_connections(self) -> dict[str, ConnectionTestResult]:
        """Probe every known backend with a real read."""
        results: dict[str, ConnectionTestResult] = {}
        for token in StorageBackend.tokens():
            try:
                repo = self._repository(token)
                await repo.find_all(TASKS)
                results[token] = ConnectionTestResult(
                    status="success", message="Connection successful"
                )
            except Exception as e:
                results[token] = ConnectionTestResult(status="error", message=str(e))
        return results

    async def auto_migrate(self, target_type: str) -> bool:
        """Migrate from the configured backend to target_type if enabled.

        The caller is responsible for persisting the new backend selection.

        Returns:
            True if a migration ran
        """
        if not self.config.migration.auto_migrate:
            return False

        current = self.config.storage.type
        if current == target_type:
            get_logger().info("auto-migrate: nothing to do (%s)", current)
            return False

        get_logger().info("auto-migrate: %s -> %s", current, target_type)
        await self.migrate(
            current,
            target_type,
            create_backup=self.config.migration.backup_before_migration,
            clear_target=True,
        )
        return True
