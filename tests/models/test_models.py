"""Tests for config and migration models."""

import pytest
from pydantic import ValidationError

from tasktrack.models import MigrationOptions, MigrationPhase, MigrationRecord, Snapshot
from tasktrack.models.config_models import AppConfig, StorageBackend, StorageConfig


def test_backend_tokens():
    assert StorageBackend.tokens() == [
        "local-kv",
        "document-store",
        "relational",
        "cloud-document",
    ]


def test_default_config():
    config = AppConfig()
    assert config.environment == "development"
    assert config.storage.type == "local-kv"
    assert config.migration.backup_before_migration is True
    assert config.migration.max_backup_age_days == 7
    assert config.is_production is False


def test_storage_type_is_validated():
    with pytest.raises(ValidationError):
        StorageConfig(type="localStorage")


def test_snapshot_users_optional():
    snapshot = Snapshot.model_validate(
        {"tasks": [], "projects": [], "exportDate": "2024-01-01T00:00:00Z", "version": "1.0.0"}
    )
    assert snapshot.users is None


def test_migration_record_is_frozen():
    record = MigrationRecord(
        id="m1",
        from_type="local-kv",
        to_type="relational",
        start_time="2024-01-01T00:00:00Z",
        end_time="2024-01-01T00:00:01Z",
        duration_ms=1000,
        status="failed",
        error="boom",
        failed_phase=MigrationPhase.IMPORTING,
    )

    with pytest.raises(ValidationError):
        record.status = "success"
    assert record.options == MigrationOptions()


def test_migration_record_status_values():
    with pytest.raises(ValidationError):
        MigrationRecord(
            id="m1",
            from_type="a",
            to_type="b",
            start_time="s",
            end_time="e",
            duration_ms=0,
            status="partial",
        )
