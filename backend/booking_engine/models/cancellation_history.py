"""
LIFO history of cancellations, used for single-step undo.
"""

from typing import Optional

from booking_engine.models.ticket import CancellationSnapshot


class CancellationHistory:
    def __init__(self):
        self._stack: list[CancellationSnapshot] = []

    def push(self, snapshot: CancellationSnapshot) -> None:
        self._stack.append(snapshot)

    def pop(self) -> Optional[CancellationSnapshot]:
        """Remove and return the most recent snapshot, or None if there is nothing to undo."""
        if not self._stack:
            return None
        return self._stack.pop()

    def peek_all(self) -> list[CancellationSnapshot]:
        """Most recent first."""
        return list(reversed(self._stack))

    def is_empty(self) -> bool:
        return not self._stack

    def __len__(self) -> int:
        return len(self._stack)
