"""Tests for the adapter factory and the placeholder adapters."""

import pytest

from tasktrack.adapters.factory import create_adapter, resolve_backend
from tasktrack.adapters.local_kv import JsonFileStore, LocalKVAdapter
from tasktrack.adapters.unimplemented import (
    CloudDocumentAdapter,
    DocumentStoreAdapter,
    RelationalAdapter,
)
from tasktrack.exceptions import BackendNotImplementedError, UnsupportedBackendError
from tasktrack.models.config_models import StorageBackend


def test_resolve_backend_known_tokens():
    assert resolve_backend("local-kv") is StorageBackend.LOCAL_KV
    assert resolve_backend("cloud-document") is StorageBackend.CLOUD_DOCUMENT


@pytest.mark.parametrize("token", ["localStorage", "mongodb", "", "LOCAL-KV"])
def test_resolve_backend_rejects_unknown(token):
    with pytest.raises(UnsupportedBackendError) as exc_info:
        resolve_backend(token)
    assert exc_info.value.token == token


def test_local_kv_uses_configured_directory(app_config, tmp_path):
    adapter = create_adapter("local-kv", app_config)

    assert isinstance(adapter, LocalKVAdapter)
    assert isinstance(adapter.store, JsonFileStore)
    assert adapter.store.directory == tmp_path / "store"
    assert adapter.prefix == "tasktrack_"


@pytest.mark.parametrize(
    ("token", "cls"),
    [
        ("document-store", DocumentStoreAdapter),
        ("relational", RelationalAdapter),
        ("cloud-document", CloudDocumentAdapter),
    ],
)
def test_placeholder_backends(app_config, token, cls):
    adapter = create_adapter(token, app_config)
    assert isinstance(adapter, cls)
    assert adapter.backend == token


def test_unknown_token_does_not_fall_back(app_config):
    with pytest.raises(UnsupportedBackendError):
        create_adapter("sqlite", app_config)


class TestUnimplementedAdapters:
    """Every operation on a placeholder backend fails loudly."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("operation", "args"),
        [
            ("create", ("tasks", {"id": "t1"})),
            ("find_all", ("tasks",)),
            ("find_by_id", ("tasks", "t1")),
            ("update", ("tasks", "t1", {})),
            ("delete", ("tasks", "t1")),
            ("delete_all", ("tasks",)),
            ("test_connection", ()),
            ("initialize_schema", ()),
            ("verify_integrity", ()),
        ],
    )
    async def test_operation_raises(self, app_config, operation, args):
        adapter = create_adapter("document-store", app_config)

        with pytest.raises(BackendNotImplementedError) as exc_info:
            await getattr(adapter, operation)(*args)

        assert exc_info.value.backend == "document-store"
        assert exc_info.value.operation == operation

    @pytest.mark.asyncio
    async def test_not_implemented_is_also_builtin(self, app_config):
        adapter = create_adapter("relational", app_config)
        with pytest.raises(NotImplementedError):
            await adapter.find_all("projects")

    @pytest.mark.asyncio
    async def test_disconnect_succeeds(self, app_config):
        adapter = create_adapter("cloud-document", app_config)
        assert await adapter.disconnect() is True

    def test_keeps_backend_settings(self, app_config):
        adapter = create_adapter("relational", app_config)
        assert adapter.config.port == 5432
