"""Repository layer for tasktrack.

repository.StorageAdapter is the contract every backend implements (the
"Port"); data_repository.DataRepository wraps one adapter with entity
helpers. Import DataRepository from its module directly:

    from tasktrack.repositories.data_repository import DataRepository

Implementations (Adapters) are in tasktrack.adapters.
"""

from .repository import ManagedStorageAdapter, StorageAdapter, matches_filters

__all__ = ["StorageAdapter", "ManagedStorageAdapter", "matches_filters"]
