"""
Booking service coordinating seat inventory, waiting list, ticket ledger
and cancellation history.

CONSISTENCY MODEL: One Writer at a Time
=======================================

Problem:
  Cancellation is a multi-step sequence: release the seat, pull the head of
  the waiting list, claim the same seat for them, rewrite their ticket.
  Undo is another: pop the history, find a seat or re-queue, re-insert.
  A booking that lands between "release" and "claim" would grab the freed
  seat and the promoted passenger would be confirmed into an occupied seat.

Solution:
  Every public operation runs under a single re-entrant lock owned by the
  service instance. Nothing inside the lock blocks (no I/O), so holding it
  for the whole sequence costs microseconds.

  The four structures are private to one service instance. Callers only see
  pydantic copies, so nothing outside the lock can mutate them.

Failure reporting:
  Unknown tickets and an empty undo history are expected outcomes, returned
  as results with success=False and an error code. Nothing is mutated until
  the lookup that could fail has succeeded.

Waiting-ticket cancellation:
  Cancelling a WAITING ticket also drops the passenger from the waiting
  list. Otherwise the orphaned entry could later be promoted into a seat with
  no ticket behind it, and undoing that cancellation would queue the same
  passenger twice.
"""

import threading
from typing import Optional, Union

from booking_engine.core.logging import get_logger
from booking_engine.core.metrics import (
    record_booking,
    record_cancellation,
    record_inventory,
    record_undo,
)
from booking_engine.models import (
    CancellationHistory,
    CancellationSnapshot,
    Passenger,
    SeatInventory,
    Ticket,
    TicketLedger,
    TicketStatus,
    WaitingQueue,
)
from booking_engine.schemas.booking import (
    BookingError,
    BookingResult,
    CancellationResponse,
    CancelResult,
    PassengerResponse,
    SeatMapResponse,
    TicketResponse,
    UndoResult,
)
from booking_engine.schemas.snapshot import SnapshotDocument

logger = get_logger(__name__)

FIRST_TICKET_ID = 1000
FIRST_PASSENGER_ID = 1


class SnapshotImportError(ValueError):
    """Import document does not fit this service (e.g. wrong seat count)."""


def _passenger_from_record(record: PassengerResponse) -> Passenger:
    return Passenger(passenger_id=record.passenger_id, name=record.name, age=record.age)


def _ticket_from_record(record: TicketResponse) -> Ticket:
    return Ticket(
        ticket_id=record.ticket_id,
        passenger=_passenger_from_record(record.passenger),
        seat_number=record.seat_number,
        status=record.status,
        booked_at=record.booked_at,
    )


class BookingService:
    """Seat booking engine for one vehicle with a fixed number of seats."""

    def __init__(self, total_seats: int = 20, publish_gauges: bool = False):
        """
        Args:
            total_seats: Fixed capacity of the vehicle.
            publish_gauges: Mirror occupancy and waiting-list length into the
                process-wide Prometheus gauges. Only the service the app
                serves should set this; other instances (tests, scratch
                imports) would overwrite its readings.
        """
        self.total_seats = total_seats
        self.publish_gauges = publish_gauges
        self._lock = threading.RLock()
        self._reset()

    def _reset(self) -> None:
        self._inventory = SeatInventory(self.total_seats)
        self._waiting = WaitingQueue()
        self._history = CancellationHistory()
        self._ledger = TicketLedger()
        self._next_ticket_id = FIRST_TICKET_ID
        self._next_passenger_id = FIRST_PASSENGER_ID
        self._publish_gauges()

    def _publish_gauges(self) -> None:
        if not self.publish_gauges:
            return
        record_inventory(self._inventory.occupied_count(), len(self._waiting))

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def book_ticket(self, name: str, age: int) -> BookingResult:
        """
        Book a seat for a new passenger.
        Takes the lowest-numbered free seat, or puts the passenger on the
        waiting list when the vehicle is full. Booking itself never fails.
        """
        with self._lock:
            passenger = Passenger(passenger_id=self._next_passenger_id, name=name, age=age)
            self._next_passenger_id += 1
            ticket_id = self._next_ticket_id
            self._next_ticket_id += 1

            seat_number = self._inventory.find_first_free()
            if seat_number is not None and self._inventory.claim(seat_number):
                ticket = Ticket(ticket_id, passenger, seat_number, TicketStatus.CONFIRMED)
                message = f"Ticket booked successfully! Seat: {seat_number}"
            else:
                self._waiting.enqueue(passenger)
                ticket = Ticket(ticket_id, passenger, None, TicketStatus.WAITING)
                message = "No seats available. Added to waiting list."

            self._ledger.insert(ticket_id, ticket)
            waiting = not ticket.is_confirmed

            logger.info(
                "ticket_booked",
                ticket_id=ticket_id,
                passenger_id=passenger.passenger_id,
                seat=ticket.seat_number,
                status=ticket.status.value,
            )
            record_booking("waiting" if waiting else "confirmed")
            self._publish_gauges()

            return BookingResult(
                ticket_id=ticket_id,
                seat_number=ticket.seat_number,
                waiting=waiting,
                message=message,
                ticket=TicketResponse.model_validate(ticket),
            )

    def cancel_ticket(self, ticket_id: int) -> CancelResult:
        """
        Cancel a ticket and hand a freed seat to the head of the waiting list.
        The pre-cancellation ticket is pushed onto the history for undo.
        """
        with self._lock:
            ticket = self._ledger.lookup(ticket_id)
            if ticket is None:
                logger.warning("cancel_failed_not_found", ticket_id=ticket_id)
                record_cancellation(found=False)
                return CancelResult(
                    success=False,
                    ticket_id=ticket_id,
                    message="Ticket not found!",
                    error=BookingError.NOT_FOUND,
                )

            self._history.push(CancellationSnapshot.capture(ticket))

            promoted: Optional[Ticket] = None
            if ticket.is_confirmed and ticket.seat_number is not None:
                self._inventory.release(ticket.seat_number)
                promoted = self._promote_waiting(ticket.seat_number)
            elif ticket.status is TicketStatus.WAITING:
                self._waiting.remove(ticket.passenger.passenger_id)

            self._ledger.remove(ticket_id)

            logger.info(
                "ticket_cancelled",
                ticket_id=ticket_id,
                freed_seat=ticket.seat_number,
                promoted_ticket_id=promoted.ticket_id if promoted else None,
            )
            record_cancellation(found=True, promoted=promoted is not None)
            self._publish_gauges()

            return CancelResult(
                success=True,
                ticket_id=ticket_id,
                promoted_ticket_id=promoted.ticket_id if promoted else None,
                message="Ticket cancelled successfully!",
            )

    def _promote_waiting(self, seat_number: int) -> Optional[Ticket]:
        """Move the head of the waiting list into the seat that was just freed."""
        while True:
            passenger = self._waiting.dequeue_if_room(self._inventory.is_full())
            if passenger is None:
                return None

            waiting_ticket = self._ledger.find_waiting(passenger.passenger_id)
            if waiting_ticket is None:
                # Only reachable through an inconsistent imported snapshot
                logger.warning(
                    "promotion_skipped_no_ticket",
                    passenger_id=passenger.passenger_id,
                )
                continue

            self._inventory.claim(seat_number)
            self._ledger.update(waiting_ticket.ticket_id, lambda t: t.confirm(seat_number))
            logger.info(
                "waiting_passenger_promoted",
                ticket_id=waiting_ticket.ticket_id,
                passenger_id=passenger.passenger_id,
                seat=seat_number,
            )
            return waiting_ticket

    def undo_cancellation(self) -> UndoResult:
        """
        Restore the most recent cancellation.
        The ticket keeps its id but gets the first free seat (not necessarily
        its old one) or goes back on the waiting list. Promotions triggered
        by that cancellation are not reversed.
        """
        with self._lock:
            snapshot = self._history.pop()
            if snapshot is None:
                logger.info("undo_failed_empty_history")
                record_undo("empty")
                return UndoResult(
                    success=False,
                    message="No cancellations to undo!",
                    error=BookingError.EMPTY_HISTORY,
                )

            ticket = snapshot.restore()
            seat_number = self._inventory.find_first_free()
            if seat_number is not None and self._inventory.claim(seat_number):
                ticket.confirm(seat_number)
            else:
                ticket.mark_waiting()
                self._waiting.enqueue(ticket.passenger)

            self._ledger.insert(ticket.ticket_id, ticket)

            logger.info(
                "cancellation_undone",
                ticket_id=ticket.ticket_id,
                seat=ticket.seat_number,
                status=ticket.status.value,
            )
            record_undo(ticket.status.value.lower())
            self._publish_gauges()

            return UndoResult(
                success=True,
                ticket_id=ticket.ticket_id,
                seat_number=ticket.seat_number,
                status=ticket.status,
                message="Cancellation undone successfully!",
            )

    def clear_all(self) -> None:
        """Drop every ticket, queue entry and history item; restart both id counters."""
        with self._lock:
            self._reset()
            logger.info("booking_state_cleared", total_seats=self.total_seats)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def search_booking(self, ticket_id: int) -> Optional[TicketResponse]:
        with self._lock:
            ticket = self._ledger.lookup(ticket_id)
            return TicketResponse.model_validate(ticket) if ticket else None

    def list_all_bookings(self) -> list[TicketResponse]:
        """All live tickets, oldest booking first."""
        with self._lock:
            return [TicketResponse.model_validate(t) for t in self._ledger.values()]

    def list_waiting_list(self) -> list[PassengerResponse]:
        with self._lock:
            return [PassengerResponse.model_validate(p) for p in self._waiting.to_list()]

    def list_cancellation_history(self) -> list[CancellationResponse]:
        """Cancellation snapshots, most recent first."""
        with self._lock:
            return [CancellationResponse.model_validate(s) for s in self._history.peek_all()]

    def seat_map(self) -> SeatMapResponse:
        with self._lock:
            return SeatMapResponse(
                total_seats=self.total_seats,
                available=self._inventory.available_count(),
                occupied=self._inventory.occupied_count(),
                seats=self._inventory.flags(),
            )

    # ------------------------------------------------------------------
    # Persistence boundary
    # ------------------------------------------------------------------

    def export_snapshot(self) -> SnapshotDocument:
        with self._lock:
            return SnapshotDocument(
                seats=self._inventory.flags(),
                bookings=[
                    (ticket_id, TicketResponse.model_validate(ticket))
                    for ticket_id, ticket in self._ledger.items()
                ],
                cancelled_stack=[
                    CancellationResponse.model_validate(s) for s in self._history.peek_all()
                ],
                next_ticket_id=self._next_ticket_id,
                next_passenger_id=self._next_passenger_id,
                waiting_list=[
                    PassengerResponse.model_validate(p) for p in self._waiting.to_list()
                ],
            )

    def import_snapshot(self, data: Union[SnapshotDocument, dict]) -> None:
        """
        Replace each part of the state present in the document.
        Parts missing from the document are left as they are, so a partial
        document merges with current state rather than replacing it.

        Raises pydantic.ValidationError for malformed dicts and
        SnapshotImportError when the seat list does not match the capacity.
        Both are raised before any state changes.
        """
        if isinstance(data, SnapshotDocument):
            document = data
        else:
            document = SnapshotDocument.model_validate(data)

        if document.seats is not None and len(document.seats) != self.total_seats:
            raise SnapshotImportError(
                f"Snapshot has {len(document.seats)} seats, inventory has {self.total_seats}"
            )

        with self._lock:
            if document.seats is not None:
                self._inventory.load_flags(document.seats)
            if document.next_ticket_id is not None:
                self._next_ticket_id = document.next_ticket_id
            if document.next_passenger_id is not None:
                self._next_passenger_id = document.next_passenger_id

            if document.bookings is not None:
                self._ledger = TicketLedger()
                for ticket_id, record in document.bookings:
                    self._ledger.insert(ticket_id, _ticket_from_record(record))

            if document.cancelled_stack is not None:
                self._history = CancellationHistory()
                # Wire order is most recent first; push oldest first
                for record in reversed(document.cancelled_stack):
                    self._history.push(
                        CancellationSnapshot(
                            ticket=_ticket_from_record(record.ticket),
                            passenger=_passenger_from_record(record.passenger),
                        )
                    )

            if document.waiting_list is not None:
                self._waiting = WaitingQueue(
                    _passenger_from_record(p) for p in document.waiting_list
                )

            logger.info(
                "snapshot_imported",
                fields=sorted(document.model_dump(exclude_none=True).keys()),
                bookings=len(self._ledger),
                waiting=len(self._waiting),
                history=len(self._history),
            )
            self._publish_gauges()
