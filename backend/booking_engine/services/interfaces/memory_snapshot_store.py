"""
In-memory snapshot store - no external dependencies.
"""

from typing import Optional

from booking_engine.schemas.snapshot import SnapshotDocument
from booking_engine.services.interfaces.snapshot_store import SnapshotStore


class InMemorySnapshotStore(SnapshotStore):
    """
    Keeps the last saved snapshot in process memory.

    Use when:
    - Running tests
    - Local development without Redis
    """

    name = "memory"

    def __init__(self):
        self._document: Optional[SnapshotDocument] = None

    async def save(self, document: SnapshotDocument) -> None:
        # Copy so later edits to the caller's document are not persisted
        self._document = document.model_copy(deep=True)

    async def load(self) -> Optional[SnapshotDocument]:
        if self._document is None:
            return None
        return self._document.model_copy(deep=True)

    async def clear(self) -> bool:
        existed = self._document is not None
        self._document = None
        return existed
