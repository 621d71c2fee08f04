"""Storage adapter abstraction for tasktrack.

This module defines the abstract base class (interface) every storage backend
implements, following the Ports & Adapters pattern. The data repository talks
only to this contract, so backends can be swapped by configuration.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from tasktrack.models import IntegrityReport, Record


def matches_filters(record: Record, filters: dict[str, Any]) -> bool:
    """Check whether a record matches every key in ``filters``.

    A filter value of None matches records where the field is None or absent.
    """
    for key, expected in filters.items():
        if expected is None:
            if record.get(key) is not None:
                return False
        elif key not in record or record[key] != expected:
            return False
    return True


class StorageAdapter(ABC):
    """Abstract base class for storage backends.

    Every operation works on a named collection of plain dict records. The
    optional hooks (test_connection, initialize_schema, verify_integrity,
    disconnect) are not abstract: the repository falls back to a trivial
    default when an adapter does not override them.
    """

    backend: str = "abstract"

    @abstractmethod
    async def create(self, collection: str, record: Record) -> Record:
        """Append a record to a collection.

        Args:
            collection: Collection name (tasks, projects, users)
            record: Record to store, including its id

        Returns:
            The stored record

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "StorageAdapter.create() must be implemented by adapter"
        )

    @abstractmethod
    async def find_all(
        self, collection: str, filters: dict[str, Any] | None = None
    ) -> list[Record]:
        """List records, optionally filtered by exact field values.

        Args:
            collection: Collection name
            filters: Mapping of field to expected value; empty returns everything

        Returns:
            List of matching records

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "StorageAdapter.find_all() must be implemented by adapter"
        )

    @abstractmethod
    async def find_by_id(self, collection: str, record_id: str) -> Record | None:
        """Get a record by id.

        Returns:
            The record, or None when no record has that id

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "StorageAdapter.find_by_id() must be implemented by adapter"
        )

    @abstractmethod
    async def update(self, collection: str, record_id: str, patch: Record) -> Record:
        """Shallow-merge a patch over an existing record.

        Returns:
            The updated record

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            NotFoundError: If no record has that id
        """
        raise NotImplementedError(
            "StorageAdapter.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, collection: str, record_id: str) -> bool:
        """Remove a record. Succeeds even if nothing matched.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "StorageAdapter.delete() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_all(self, collection: str) -> bool:
        """Replace a collection with an empty one.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "StorageAdapter.delete_all() must be implemented by adapter"
        )


class ManagedStorageAdapter(StorageAdapter):
    """Storage adapter that also exposes lifecycle and maintenance hooks."""

    @abstractmethod
    async def test_connection(self) -> bool:
        """Probe the backend and return True when it is usable."""

    @abstractmethod
    async def initialize_schema(self) -> bool:
        """Create whatever collections/tables the backend needs."""

    @abstractmethod
    async def verify_integrity(self) -> IntegrityReport:
        """Check stored data for structural problems."""

    @abstractmethod
    async def disconnect(self) -> bool:
        """Release any resources held by the adapter."""
