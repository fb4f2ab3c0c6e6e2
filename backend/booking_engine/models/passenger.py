"""
Passenger model.

Passengers are immutable once created. A passenger belongs to the ticket
that references it, or to the waiting list while it has no seat.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Passenger:
    passenger_id: int
    name: str
    age: int

    def __repr__(self) -> str:
        return f"<Passenger(id={self.passenger_id}, name={self.name})>"
