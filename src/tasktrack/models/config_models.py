"""Configuration models for tasktrack.

The configuration selects one storage backend by token and carries the
settings every backend would need, plus migration and general options.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class StorageBackend(str, Enum):
    """Known storage backend tokens."""

    LOCAL_KV = "local-kv"
    DOCUMENT_STORE = "document-store"
    RELATIONAL = "relational"
    CLOUD_DOCUMENT = "cloud-document"

    @classmethod
    def tokens(cls) -> list[str]:
        return [backend.value for backend in cls]


class LocalKVConfig(BaseModel):
    """Local key-value store configuration."""

    directory: str | None = Field(
        default=None, description="Store directory (defaults to the user data dir)"
    )
    prefix: str = Field(default="tasktrack_")


class DocumentStoreConfig(BaseModel):
    """Remote document store configuration."""

    uri: str | None = None
    database: str = Field(default="tasktrack")
    timeout_ms: int = Field(default=5000)


class RelationalConfig(BaseModel):
    """Relational database configuration."""

    host: str | None = None
    port: int = Field(default=5432)
    database: str | None = None
    username: str = Field(default="postgres")
    password: str = Field(default="")
    ssl: bool = Field(default=False)


class CloudDocumentConfig(BaseModel):
    """Cloud document store configuration."""

    project_id: str | None = None
    api_key: str | None = None
    database_url: str | None = None


class StorageConfig(BaseModel):
    """Storage selection plus per-backend settings."""

    type: str = Field(default=StorageBackend.LOCAL_KV.value)
    local_kv: LocalKVConfig = Field(default_factory=LocalKVConfig)
    document_store: DocumentStoreConfig = Field(default_factory=DocumentStoreConfig)
    relational: RelationalConfig = Field(default_factory=RelationalConfig)
    cloud_document: CloudDocumentConfig = Field(default_factory=CloudDocumentConfig)

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        if v not in StorageBackend.tokens():
            raise ValueError(
                f"storage type must be one of {', '.join(StorageBackend.tokens())}"
            )
        return v


class MigrationConfig(BaseModel):
    """Migration and backup configuration."""

    auto_migrate: bool = Field(default=False)
    backup_before_migration: bool = Field(default=True)
    backup_directory: str | None = Field(
        default=None, description="Backup directory (defaults to <data dir>/backups)"
    )
    max_backup_age_days: int = Field(default=7, ge=0)


class GeneralConfig(BaseModel):
    """General operation settings.

    Timeouts and retries are declared for future backends; the local store
    never abandons an operation.
    """

    enable_logging: bool = Field(default=True)
    operation_timeout_ms: int = Field(default=10000)
    max_retries: int = Field(default=3)
    retry_interval_ms: int = Field(default=1000)


class AppConfig(BaseModel):
    """Main tasktrack configuration."""

    environment: Literal["development", "production", "test"] = Field(
        default="development"
    )
    storage: StorageConfig = Field(default_factory=StorageConfig)
    migration: MigrationConfig = Field(default_factory=MigrationConfig)
    general: GeneralConfig = Field(default_factory=GeneralConfig)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"
