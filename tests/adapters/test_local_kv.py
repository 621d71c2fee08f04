"""Tests for LocalKVAdapter."""

import asyncio
import json

import pytest

from tasktrack.adapters.local_kv import JsonFileStore, LocalKVAdapter, MemoryStore
from tasktrack.exceptions import NotFoundError


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def adapter(store):
    return LocalKVAdapter(store)


@pytest.mark.asyncio
async def test_create_appends_and_returns_copy(adapter, store):
    record = {"id": "t1", "title": "Write tests"}
    created = await adapter.create("tasks", record)

    assert created == record
    assert created is not record
    assert json.loads(store.get_item("tasktrack_tasks")) == [record]


@pytest.mark.asyncio
async def test_create_preserves_insertion_order(adapter):
    for i in range(3):
        await adapter.create("tasks", {"id": f"t{i}"})

    items = await adapter.find_all("tasks")
    assert [item["id"] for item in items] == ["t0", "t1", "t2"]


@pytest.mark.asyncio
async def test_find_all_on_missing_collection_is_empty(adapter):
    assert await adapter.find_all("tasks") == []


@pytest.mark.asyncio
async def test_find_all_filters_by_equality(adapter):
    await adapter.create("tasks", {"id": "t1", "status": "pending", "priority": "high"})
    await adapter.create("tasks", {"id": "t2", "status": "completed", "priority": "high"})
    await adapter.create("tasks", {"id": "t3", "status": "pending", "priority": "low"})

    result = await adapter.find_all("tasks", {"status": "pending", "priority": "high"})
    assert [t["id"] for t in result] == ["t1"]


@pytest.mark.asyncio
async def test_find_all_none_filter_matches_absent_and_null(adapter):
    await adapter.create("tasks", {"id": "t1", "project": None})
    await adapter.create("tasks", {"id": "t2"})
    await adapter.create("tasks", {"id": "t3", "project": "p1"})

    result = await adapter.find_all("tasks", {"project": None})
    assert {t["id"] for t in result} == {"t1", "t2"}


@pytest.mark.asyncio
async def test_find_all_filter_on_absent_key_excludes_record(adapter):
    await adapter.create("tasks", {"id": "t1"})
    assert await adapter.find_all("tasks", {"status": "pending"}) == []


@pytest.mark.asyncio
async def test_find_by_id(adapter):
    await adapter.create("projects", {"id": "p1", "name": "Home"})

    assert (await adapter.find_by_id("projects", "p1"))["name"] == "Home"
    assert await adapter.find_by_id("projects", "missing") is None


@pytest.mark.asyncio
async def test_update_shallow_merges(adapter):
    await adapter.create("tasks", {"id": "t1", "title": "Old", "tags": ["a"]})

    updated = await adapter.update("tasks", "t1", {"title": "New"})

    assert updated == {"id": "t1", "title": "New", "tags": ["a"]}
    assert await adapter.find_by_id("tasks", "t1") == updated


@pytest.mark.asyncio
async def test_update_missing_raises_not_found(adapter):
    with pytest.raises(NotFoundError) as exc_info:
        await adapter.update("tasks", "nope", {"title": "x"})
    assert exc_info.value.collection == "tasks"
    assert exc_info.value.record_id == "nope"


@pytest.mark.asyncio
async def test_delete_is_idempotent(adapter):
    await adapter.create("tasks", {"id": "t1"})

    assert await adapter.delete("tasks", "t1") is True
    assert await adapter.delete("tasks", "t1") is True
    assert await adapter.find_all("tasks") == []


@pytest.mark.asyncio
async def test_delete_all_only_touches_one_collection(adapter):
    await adapter.create("tasks", {"id": "t1"})
    await adapter.create("projects", {"id": "p1"})

    await adapter.delete_all("tasks")

    assert await adapter.find_all("tasks") == []
    assert len(await adapter.find_all("projects")) == 1


@pytest.mark.asyncio
async def test_corrupt_collection_raises(store, adapter):
    store.set_item("tasktrack_tasks", json.dumps({"not": "a list"}))
    with pytest.raises(ValueError):
        await adapter.find_all("tasks")


@pytest.mark.asyncio
async def test_custom_prefix(store):
    adapter = LocalKVAdapter(store, prefix="other_")
    await adapter.create("tasks", {"id": "t1"})
    assert store.keys() == ["other_tasks"]


@pytest.mark.asyncio
async def test_concurrent_creates_are_not_lost(adapter):
    await asyncio.gather(*(adapter.create("tasks", {"id": f"t{i}"}) for i in range(20)))
    assert len(await adapter.find_all("tasks")) == 20


class TestHooks:
    """Lifecycle hooks of the local adapter."""

    @pytest.mark.asyncio
    async def test_connection_probe_leaves_no_key(self, adapter, store):
        assert await adapter.test_connection() is True
        assert store.keys() == []

    @pytest.mark.asyncio
    async def test_initialize_schema_creates_empty_collections(self, adapter, store):
        await adapter.create("tasks", {"id": "t1"})
        assert await adapter.initialize_schema() is True

        assert sorted(store.keys()) == [
            "tasktrack_projects",
            "tasktrack_tasks",
            "tasktrack_users",
        ]
        assert len(await adapter.find_all("tasks")) == 1

    @pytest.mark.asyncio
    async def test_verify_integrity_clean(self, adapter):
        await adapter.create("projects", {"id": "p1"})
        await adapter.create(
            "tasks", {"id": "t1", "status": "pending", "completedAt": None, "project": "p1"}
        )

        report = await adapter.verify_integrity()
        assert report.valid is True
        assert report.issues == []

    @pytest.mark.asyncio
    async def test_verify_integrity_reports_problems(self, adapter):
        await adapter.create("tasks", {"id": "t1", "status": "completed", "completedAt": None})
        await adapter.create("tasks", {"id": "t1", "status": "pending", "completedAt": None})
        await adapter.create(
            "tasks", {"id": "t2", "status": "pending", "completedAt": None, "project": "gone"}
        )
        await adapter.create("projects", {"name": "No id"})

        report = await adapter.verify_integrity()

        assert report.valid is False
        joined = "\n".join(report.issues)
        assert "duplicate id t1" in joined
        assert "t1 has inconsistent completedAt" in joined
        assert "t2 references missing project gone" in joined
        assert "projects: 1 record(s) without id" in joined

    @pytest.mark.asyncio
    async def test_verify_integrity_reports_unreadable_collection(self, adapter, store):
        store.set_item("tasktrack_users", "{}")
        report = await adapter.verify_integrity()
        assert report.valid is False
        assert report.issues[0].startswith("users: unreadable collection")

    @pytest.mark.asyncio
    async def test_disconnect(self, adapter):
        assert await adapter.disconnect() is True


@pytest.mark.asyncio
async def test_data_survives_new_adapter_on_same_directory(tmp_path):
    first = LocalKVAdapter(JsonFileStore(tmp_path))
    await first.create("tasks", {"id": "t1", "title": "Persist me"})

    second = LocalKVAdapter(JsonFileStore(tmp_path))
    assert await second.find_by_id("tasks", "t1") == {"id": "t1", "title": "Persist me"}
