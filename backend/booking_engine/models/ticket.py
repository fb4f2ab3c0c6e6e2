"""
Ticket model and cancellation snapshots.

Key design decisions:
- Status is a closed enum, so every state transition is explicit
- CONFIRMED tickets always carry a seat number, WAITING tickets never do
- Ticket ids come from their own counter, separate from passenger ids
- Snapshots are frozen deep copies so later ledger edits cannot reach them
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from booking_engine.models.passenger import Passenger


class TicketStatus(str, Enum):
    CONFIRMED = "CONFIRMED"
    WAITING = "WAITING"


@dataclass
class Ticket:
    ticket_id: int
    passenger: Passenger
    seat_number: Optional[int] = None
    status: TicketStatus = TicketStatus.CONFIRMED
    booked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def confirm(self, seat_number: int) -> None:
        self.seat_number = seat_number
        self.status = TicketStatus.CONFIRMED

    def mark_waiting(self) -> None:
        self.seat_number = None
        self.status = TicketStatus.WAITING

    @property
    def is_confirmed(self) -> bool:
        return self.status is TicketStatus.CONFIRMED

    def __repr__(self) -> str:
        return f"<Ticket(id={self.ticket_id}, seat={self.seat_number}, status={self.status.value})>"


@dataclass(frozen=True)
class CancellationSnapshot:
    """Ticket and passenger exactly as they were when the ticket was cancelled."""

    ticket: Ticket
    passenger: Passenger

    @classmethod
    def capture(cls, ticket: Ticket) -> "CancellationSnapshot":
        frozen_ticket = copy.deepcopy(ticket)
        return cls(ticket=frozen_ticket, passenger=frozen_ticket.passenger)

    def restore(self) -> Ticket:
        """Return a fresh copy of the captured ticket; the snapshot stays untouched."""
        return copy.deepcopy(self.ticket)
