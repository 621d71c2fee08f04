"""Local key-value implementation of StorageAdapter."""

from __future__ import annotations

import asyncio
import json
from collections import Counter
from typing import Any

from tasktrack.adapters.local_kv.store import KeyValueStore
from tasktrack.exceptions import NotFoundError
from tasktrack.models import COLLECTIONS, PROJECTS, TASKS, IntegrityReport, Record
from tasktrack.repositories.repository import ManagedStorageAdapter, matches_filters
from tasktrack.utils.logger import get_logger


class LocalKVAdapter(ManagedStorageAdapter):
    """Stores each collection as one JSON array under ``<prefix><collection>``.

    Every write re-serializes the whole collection. Writes to the same
    collection are serialized with a per-collection asyncio lock, which is
    enough for a single process; it does not protect a store shared between
    processes.
    """

    backend = "local-kv"

    def __init__(self, store: KeyValueStore, prefix: str = "tasktrack_"):
        """Initialize the adapter.

        Args:
            store: Key-value store holding the serialized collections
            prefix: Key prefix prepended to every collection name
        """
        self.store = store
        self.prefix = prefix
        self._locks: dict[str, asyncio.Lock] = {}

    def _key(self, collection: str) -> str:
        return f"{self.prefix}{collection}"

    def _lock(self, collection: str) -> asyncio.Lock:
        if collection not in self._locks:
            self._locks[collection] = asyncio.Lock()
        return self._locks[collection]

    def load_collection(self, collection: str) -> list[Record]:
        raw = self.store.get_item(self._key(collection))
        if raw is None:
            return []
        items = json.loads(raw)
        if not isinstance(items, list):
            raise ValueError(f"Collection '{collection}' is not a JSON array")
        return items

    def save_collection(self, collection: str, items: list[Record]) -> None:
        self.store.set_item(self._key(collection), json.dumps(items))

    async def create(self, collection: str, record: Record) -> Record:
        async with self._lock(collection):
            items = self.load_collection(collection)
            items.append(record)
            self.save_collection(collection, items)
        return dict(record)

    async def find_all(
        self, collection: str, filters: dict[str, Any] | None = None
    ) -> list[Record]:
        items = self.load_collection(collection)
        if not filters:
            return items
        return [item for item in items if matches_filters(item, filters)]

    async def find_by_id(self, collection: str, record_id: str) -> Record | None:
        for item in self.load_collection(collection):
            if item.get("id") == record_id:
                return item
        return None

    async def update(self, collection: str, record_id: str, patch: Record) -> Record:
        async with self._lock(collection):
            items = self.load_collection(collection)
            for index, item in enumerate(items):
                if item.get("id") == record_id:
                    items[index] = {**item, **patch}
                    self.save_collection(collection, items)
                    return dict(items[index])
        raise NotFoundError(collection, record_id)

    async def delete(self, collection: str, record_id: str) -> bool:
        async with self._lock(collection):
            items = self.load_collection(collection)
            remaining = [item for item in items if item.get("id") != record_id]
            self.save_collection(collection, remaining)
        return True

    async def delete_all(self, collection: str) -> bool:
        async with self._lock(collection):
            self.save_collection(collection, [])
        return True

    async def test_connection(self) -> bool:
        probe = f"{self.prefix}connection_probe"
        self.store.set_item(probe, "ok")
        value = self.store.get_item(probe)
        self.store.remove_item(probe)
        return value == "ok"

    async def initialize_schema(self) -> bool:
        for collection in COLLECTIONS:
            if self.store.get_item(self._key(collection)) is None:
                self.save_collection(collection, [])
        return True

    async def verify_integrity(self) -> IntegrityReport:
        issues: list[str] = []
        loaded: dict[str, list[Record]] = {}

        for collection in COLLECTIONS:
            try:
                loaded[collection] = self.load_collection(collection)
            except ValueError as e:
                issues.append(f"{collection}: unreadable collection ({e})")
                continue

            ids = Counter(item.get("id") for item in loaded[collection])
            for record_id, count in ids.items():
                if not record_id:
                    issues.append(f"{collection}: {count} record(s) without id")
                elif count > 1:
                    issues.append(f"{collection}: duplicate id {record_id} ({count}x)")

        project_ids = {p.get("id") for p in loaded.get(PROJECTS, [])}
        for task in loaded.get(TASKS, []):
            completed = task.get("status") == "completed"
            if completed != (task.get("completedAt") is not None):
                issues.append(f"tasks: {task.get('id')} has inconsistent completedAt")
            if PROJECTS in loaded and task.get("project") and task["project"] not in project_ids:
                issues.append(
                    f"tasks: {task.get('id')} references missing project {task['project']}"
                )

        if issues:
            get_logger().warning("integrity check found %d issue(s)", len(issues))
        return IntegrityReport(valid=not issues, issues=issues)

    async def disconnect(self) -> bool:
        return True
