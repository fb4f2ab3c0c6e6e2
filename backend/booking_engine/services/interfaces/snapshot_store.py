"""
Snapshot store interface.
Allows swapping where booking state is saved without touching the service.
"""

from abc import ABC, abstractmethod
from typing import Optional

from booking_engine.schemas.snapshot import SnapshotDocument


class SnapshotStoreError(RuntimeError):
    """The backing store could not be reached or returned unreadable data."""


class SnapshotStore(ABC):
    """
    Interface for snapshot persistence.

    Implementations:
    - InMemorySnapshotStore: process-local, lost on restart
    - RedisSnapshotStore: JSON document under a single Redis key
    """

    name: str = "abstract"

    @abstractmethod
    async def save(self, document: SnapshotDocument) -> None:
        """
        Persist a full snapshot, replacing any previous one.

        Raises:
            SnapshotStoreError: if the store is unavailable
        """
        pass

    @abstractmethod
    async def load(self) -> Optional[SnapshotDocument]:
        """
        Return the saved snapshot, or None if nothing was saved.

        Raises:
            SnapshotStoreError: if the store is unavailable or the data is corrupt
        """
        pass

    @abstractmethod
    async def clear(self) -> bool:
        """Delete the saved snapshot. Returns True if one existed."""
        pass

    async def status(self) -> dict:
        """Store status for the health endpoint."""
        return {"store": self.name, "status": "ok"}
