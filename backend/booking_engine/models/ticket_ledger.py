"""
Ticket ledger: the authoritative record of every live ticket.

Key design decisions:
- Backed by a plain dict, so iteration follows insertion order (oldest booking first)
- Inserting an existing id overwrites it; uniqueness is the caller's job
- find_waiting is a linear scan. A passenger_id -> ticket_id index would make
  it O(1) if ledgers ever grow large.
"""

from typing import Callable, Optional

from booking_engine.models.ticket import Ticket, TicketStatus


class TicketLedger:
    def __init__(self):
        self._tickets: dict[int, Ticket] = {}

    def insert(self, ticket_id: int, ticket: Ticket) -> None:
        self._tickets[ticket_id] = ticket

    def lookup(self, ticket_id: int) -> Optional[Ticket]:
        return self._tickets.get(ticket_id)

    def remove(self, ticket_id: int) -> Optional[Ticket]:
        return self._tickets.pop(ticket_id, None)

    def update(self, ticket_id: int, mutator: Callable[[Ticket], None]) -> Optional[Ticket]:
        """Apply mutator to the stored ticket in place and return it."""
        ticket = self._tickets.get(ticket_id)
        if ticket is None:
            return None
        mutator(ticket)
        return ticket

    def find_waiting(self, passenger_id: int) -> Optional[Ticket]:
        for ticket in self._tickets.values():
            if ticket.status is TicketStatus.WAITING and ticket.passenger.passenger_id == passenger_id:
                return ticket
        return None

    def values(self) -> list[Ticket]:
        return list(self._tickets.values())

    def items(self) -> list[tuple[int, Ticket]]:
        return list(self._tickets.items())

    def __contains__(self, ticket_id: int) -> bool:
        return ticket_id in self._tickets

    def __len__(self) -> int:
        return len(self._tickets)
