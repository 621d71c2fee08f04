"""Placeholder adapters for backends that have no implementation yet.

Every operation fails loudly with BackendNotImplementedError so that callers
never mistake an unimplemented backend for an empty one.
"""

from __future__ import annotations

from typing import Any

from tasktrack.exceptions import BackendNotImplementedError
from tasktrack.models import IntegrityReport, Record
from tasktrack.models.config_models import (
    CloudDocumentConfig,
    DocumentStoreConfig,
    RelationalConfig,
)
from tasktrack.repositories.repository import ManagedStorageAdapter


class UnimplementedAdapter(ManagedStorageAdapter):
    """Base for adapters whose backend driver is not written yet."""

    backend = "unimplemented"

    def _fail(self, operation: str):
        raise BackendNotImplementedError(self.backend, operation)

    async def create(self, collection: str, record: Record) -> Record:
        self._fail("create")

    async def find_all(
        self, collection: str, filters: dict[str, Any] | None = None
    ) -> list[Record]:
        self._fail("find_all")

    async def find_by_id(self, collection: str, record_id: str) -> Record | None:
        self._fail("find_by_id")

    async def update(self, collection: str, record_id: str, patch: Record) -> Record:
        self._fail("update")

    async def delete(self, collection: str, record_id: str) -> bool:
        self._fail("delete")

    async def delete_all(self, collection: str) -> bool:
        self._fail("delete_all")

    async def test_connection(self) -> bool:
        self._fail("test_connection")

    async def initialize_schema(self) -> bool:
        self._fail("initialize_schema")

    async def verify_integrity(self) -> IntegrityReport:
        self._fail("verify_integrity")

    async def disconnect(self) -> bool:
        # Nothing was ever connected.
        return True


class DocumentStoreAdapter(UnimplementedAdapter):
    """Remote document store (MongoDB-style) adapter."""

    backend = "document-store"

    def __init__(self, config: DocumentStoreConfig):
        self.config = config


class RelationalAdapter(UnimplementedAdapter):
    """Relational database (PostgreSQL-style) adapter."""

    backend = "relational"

    def __init__(self, config: RelationalConfig):
        self.config = config


class CloudDocumentAdapter(UnimplementedAdapter):
    """Cloud document store (Firebase-style) adapter."""

    backend = "cloud-document"

    def __init__(self, config: CloudDocumentConfig):
        self.config = config
