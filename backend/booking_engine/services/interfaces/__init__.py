"""
Service interfaces for dependency inversion.
Allows swapping implementations without changing business logic.
"""

from .snapshot_store import SnapshotStore, SnapshotStoreError
from .memory_snapshot_store import InMemorySnapshotStore

__all__ = ['SnapshotStore', 'SnapshotStoreError', 'InMemorySnapshotStore']
