from booking_engine.schemas.booking import (
    BookingCreate, BookingError, BookingResult, CancelResult, UndoResult,
    PassengerResponse, TicketResponse, CancellationResponse, SeatMapResponse,
)
from booking_engine.schemas.snapshot import SnapshotDocument

__all__ = [
    "BookingCreate", "BookingError", "BookingResult", "CancelResult", "UndoResult",
    "PassengerResponse", "TicketResponse", "CancellationResponse", "SeatMapResponse",
    "SnapshotDocument",
]
