"""System initializer: bootstraps storage for a fresh or existing install."""

from __future__ import annotations

import time

from pydantic import BaseModel, Field

from tasktrack.exceptions import ConfigurationError
from tasktrack.models import IntegrityReport
from tasktrack.models.config_models import AppConfig, StorageBackend
from tasktrack.repositories.data_repository import DataRepository
from tasktrack.services.config_service import validate_environment
from tasktrack.utils.logger import get_logger, set_log_level
from tasktrack.utils.paths import backup_directory, store_directory

DEFAULT_PROJECT = {
    "name": "General",
    "description": "Default project for general tasks",
    "status": "active",
    "color": "#007bff",
}

WELCOME_TASK = {
    "title": "Welcome to tasktrack",
    "description": "This is an example task. Edit or delete it whenever you like.",
    "status": "pending",
    "priority": "medium",
    "dueDate": None,
    "tags": ["example", "welcome"],
}


class InitializationResult(BaseModel):
    """Outcome of a system initialization."""

    success: bool
    environment: str
    storage_type: str
    fell_back: bool = False
    seeded: bool = False
    config_warnings: list[str] = Field(default_factory=list)
    integrity: IntegrityReport = Field(default_factory=IntegrityReport)
    initialization_time_ms: int = 0


class SystemInitializer:
    """Validates configuration and wires up a ready-to-use repository."""

    def __init__(self, config: AppConfig):
        self.config = config
        self.repository: DataRepository | None = None

    async def initialize(self) -> InitializationResult:
        """Run every bootstrap step in order.

        Raises:
            ConfigurationError: If the configuration is unusable
            BackendNotImplementedError: If the backend cannot be used and no
                fallback applies
        """
        logger = get_logger()
        started = time.monotonic()
        set_log_level(self.config.general.enable_logging)
        logger.info(
            "initializing (%s, storage=%s)",
            self.config.environment,
            self.config.storage.type,
        )

        warnings = validate_environment(self.config)
        self.create_directories()

        repository, fell_back = await self.connect()
        self.repository = repository

        await repository.initialize_schema()
        seeded = await self.create_initial_data(repository)
        integrity = await repository.verify_integrity()
        if not integrity.valid:
            for issue in integrity.issues:
                logger.warning("integrity: %s", issue)

        elapsed = int((time.monotonic() - started) * 1000)
        logger.info("initialized in %dms", elapsed)
        return InitializationResult(
            success=True,
            environment=self.config.environment,
            storage_type=repository.storage_type,
            fell_back=fell_back,
            seeded=seeded,
            config_warnings=warnings,
            integrity=integrity,
            initialization_time_ms=elapsed,
        )

    def create_directories(self) -> None:
        if self.config.storage.type == StorageBackend.LOCAL_KV.value:
            store_directory(self.config).mkdir(parents=True, exist_ok=True)
        backup_directory(self.config).mkdir(parents=True, exist_ok=True)

    async def connect(self) -> tuple[DataRepository, bool]:
        """Connect to the configured backend.

        In development a failing non-local backend falls back to local-kv.

        Returns:
            The repository and whether the fallback was used
        """
        storage_type = self.config.storage.type
        repository = DataRepository(storage_type, self.config)
        if await repository.test_connection():
            return repository, False

        local = StorageBackend.LOCAL_KV.value
        if self.config.environment == "development" and storage_type != local:
            get_logger().warning("%s unavailable, falling back to %s", storage_type, local)
            self.config.storage.type = local
            store_directory(self.config).mkdir(parents=True, exist_ok=True)
            return DataRepository(local, self.config), True

        raise ConfigurationError(f"Cannot connect to storage backend '{storage_type}'")

    async def create_initial_data(self, repository: DataRepository) -> bool:
        """Seed a default project and a welcome task into an empty store."""
        tasks = await repository.get_tasks()
        projects = await repository.get_projects()
        if tasks or projects:
            return False

        project = await repository.create_project(DEFAULT_PROJECT)
        await repository.create_task({**WELCOME_TASK, "project": project["id"]})
        get_logger().info("seeded initial data")
        return True
