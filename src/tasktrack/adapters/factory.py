"""Adapter factory: maps a backend token to a concrete StorageAdapter."""

from __future__ import annotations

from tasktrack.adapters.local_kv import JsonFileStore, LocalKVAdapter
from tasktrack.adapters.unimplemented import (
    CloudDocumentAdapter,
    DocumentStoreAdapter,
    RelationalAdapter,
)
from tasktrack.exceptions import UnsupportedBackendError
from tasktrack.models.config_models import AppConfig, StorageBackend
from tasktrack.repositories.repository import StorageAdapter
from tasktrack.utils.paths import store_directory


def resolve_backend(token: str) -> StorageBackend:
    """Convert a backend token into a StorageBackend.

    Raises:
        UnsupportedBackendError: If the token is not a known backend
    """
    try:
        return StorageBackend(token)
    except ValueError as e:
        raise UnsupportedBackendError(token) from e


def create_adapter(token: str, config: AppConfig) -> StorageAdapter:
    """Instantiate the adapter for a backend token.

    Args:
        token: Backend token (local-kv, document-store, relational, cloud-document)
        config: Application configuration carrying per-backend settings

    Returns:
        Concrete StorageAdapter

    Raises:
        UnsupportedBackendError: If the token is not a known backend
    """
    backend = resolve_backend(token)
    storage = config.storage

    if backend is StorageBackend.LOCAL_KV:
        return LocalKVAdapter(
            JsonFileStore(store_directory(config)), prefix=storage.local_kv.prefix
        )
    if backend is StorageBackend.DOCUMENT_STORE:
        return DocumentStoreAdapter(storage.document_store)
    if backend is StorageBackend.RELATIONAL:
        return RelationalAdapter(storage.relational)
    return CloudDocumentAdapter(storage.cloud_document)
