"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real user directories:
config, store, backups and the log file all land under *tmp_path*.
"""

from __future__ import annotations

import logging
from unittest.mock import MagicMock, patch

import pytest

from tasktrack.adapters.local_kv import LocalKVAdapter, MemoryStore
from tasktrack.models.config_models import AppConfig
from tasktrack.repositories.data_repository import DataRepository
from tasktrack.services.migration_service import DataMigration

# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send the application log to tmp_path and reset the singleton."""
    import tasktrack.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("tasktrack").handlers.clear()
    with patch("tasktrack.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    for handler in logging.getLogger("tasktrack").handlers:
        handler.close()
    logging.getLogger("tasktrack").handlers.clear()
    logger_mod._logger = None


# ---------------------------------------------------------------------------
# Config helpers
# ---------------------------------------------------------------------------


def make_config(tmp_path, **overrides) -> AppConfig:
    """Build an AppConfig whose store and backups live under tmp_path."""
    config = AppConfig(
        storage={"type": "local-kv", "local_kv": {"directory": str(tmp_path / "store")}},
        migration={"backup_directory": str(tmp_path / "backups")},
    )
    return config.model_copy(update=overrides)


@pytest.fixture()
def app_config(tmp_path) -> AppConfig:
    return make_config(tmp_path)


@pytest.fixture()
def memory_repo() -> DataRepository:
    """Repository over an in-memory local-kv adapter."""
    return DataRepository("local-kv", adapter=LocalKVAdapter(MemoryStore()))


@pytest.fixture()
def file_repo(app_config) -> DataRepository:
    """Repository over the JSON-file local-kv store in tmp_path."""
    return DataRepository("local-kv", app_config)


class SharedRepositories:
    """Repository factory that keeps one in-memory adapter per backend token.

    ``working`` names the tokens that get a real LocalKVAdapter; every other
    token goes through the normal adapter factory.
    """

    def __init__(self, working=("local-kv", "relational")):
        self.working = set(working)
        self.adapters: dict[str, LocalKVAdapter] = {}

    def __call__(self, storage_type: str, config: AppConfig) -> DataRepository:
        if storage_type not in self.working:
            return DataRepository(storage_type, config)
        adapter = self.adapters.setdefault(storage_type, LocalKVAdapter(MemoryStore()))
        return DataRepository(storage_type, config, adapter=adapter)


@pytest.fixture()
def repositories() -> SharedRepositories:
    return SharedRepositories()


@pytest.fixture()
def migration(app_config, repositories) -> DataMigration:
    """DataMigration with in-memory backups and shared in-memory repositories."""
    return DataMigration(
        app_config, backup_store=MemoryStore(), repository_factory=repositories
    )


# ---------------------------------------------------------------------------
# CLI helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_config_service(app_config):
    """MagicMock standing in for get_config_service() in commands."""
    svc = MagicMock()
    svc.config = app_config
    svc.load_config.return_value = app_config
    return svc


@pytest.fixture()
def patch_config_service(mock_config_service):
    """Patch get_config_service wherever commands import it.

    Use explicitly in tests that invoke CLI commands:
        @pytest.mark.usefixtures('patch_config_service')
    """
    with patch(
        "tasktrack.commands.utils.get_config_service", return_value=mock_config_service
    ), patch(
        "tasktrack.commands.migrate.get_config_service", return_value=mock_config_service
    ), patch(
        "tasktrack.commands.system.get_config_service", return_value=mock_config_service
    ):
        yield mock_config_service
