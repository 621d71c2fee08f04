"""Local key-value storage adapter."""

from .adapter import LocalKVAdapter
from .store import JsonFileStore, KeyValueStore, MemoryStore

__all__ = ["LocalKVAdapter", "KeyValueStore", "JsonFileStore", "MemoryStore"]
