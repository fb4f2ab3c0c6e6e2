"""
Wire format for exporting and importing the complete booking state.

Every field is optional: a field left out of an import document keeps the
current state for that part. Send every field (or clear first) for an
exclusive restore, otherwise stale data survives the import.
"""

from typing import Optional
from pydantic import BaseModel

from booking_engine.schemas.booking import (
    CancellationResponse,
    PassengerResponse,
    TicketResponse,
)


class SnapshotDocument(BaseModel):
    seats: Optional[list[bool]] = None
    bookings: Optional[list[tuple[int, TicketResponse]]] = None
    # Most recent cancellation first, same order as the history listing
    cancelled_stack: Optional[list[CancellationResponse]] = None
    next_ticket_id: Optional[int] = None
    next_passenger_id: Optional[int] = None
    waiting_list: Optional[list[PassengerResponse]] = None
