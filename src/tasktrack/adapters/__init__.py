"""Adapters module - StorageAdapter implementations for each backend.

This package contains concrete implementations of the storage contract:
- local_kv: local key-value store (implemented)
- unimplemented: document store, relational and cloud document placeholders
"""

from .factory import create_adapter
from .local_kv import JsonFileStore, KeyValueStore, LocalKVAdapter, MemoryStore
from .unimplemented import (
    CloudDocumentAdapter,
    DocumentStoreAdapter,
    RelationalAdapter,
    UnimplementedAdapter,
)

__all__ = [
    "create_adapter",
    # Local key-value adapter
    "LocalKVAdapter",
    "KeyValueStore",
    "JsonFileStore",
    "MemoryStore",
    # Placeholder adapters
    "UnimplementedAdapter",
    "DocumentStoreAdapter",
    "RelationalAdapter",
    "CloudDocumentAdapter",
]
