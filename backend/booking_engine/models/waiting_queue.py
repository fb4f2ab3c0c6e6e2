"""
FIFO waiting list of passengers who arrived while every seat was taken.
"""

from collections import deque
from typing import Iterable, Optional

from booking_engine.models.passenger import Passenger


class WaitingQueue:
    def __init__(self, passengers: Iterable[Passenger] = ()):
        self._queue: deque[Passenger] = deque(passengers)

    def enqueue(self, passenger: Passenger) -> Passenger:
        self._queue.append(passenger)
        return passenger

    def dequeue_if_room(self, inventory_is_full: bool) -> Optional[Passenger]:
        """
        Yield the head passenger only when a seat has already been freed.
        The queue never promotes anyone on its own.
        """
        if self._queue and not inventory_is_full:
            return self._queue.popleft()
        return None

    def remove(self, passenger_id: int) -> Optional[Passenger]:
        for passenger in self._queue:
            if passenger.passenger_id == passenger_id:
                self._queue.remove(passenger)
                return passenger
        return None

    def to_list(self) -> list[Passenger]:
        return list(self._queue)

    def is_empty(self) -> bool:
        return not self._queue

    def __len__(self) -> int:
        return len(self._queue)
