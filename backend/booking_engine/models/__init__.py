from booking_engine.models.passenger import Passenger
from booking_engine.models.ticket import Ticket, TicketStatus, CancellationSnapshot
from booking_engine.models.seat_inventory import SeatInventory
from booking_engine.models.waiting_queue import WaitingQueue
from booking_engine.models.cancellation_history import CancellationHistory
from booking_engine.models.ticket_ledger import TicketLedger

__all__ = [
    "Passenger", "Ticket", "TicketStatus", "CancellationSnapshot",
    "SeatInventory", "WaitingQueue", "CancellationHistory", "TicketLedger",
]
