"""
Tests for the booking engine: seat assignment, promotion, undo and invariants.
"""

import random

from prometheus_client import REGISTRY

from booking_engine.models import TicketStatus
from booking_engine.schemas.booking import BookingError
from booking_engine.services.booking_service import (
    FIRST_PASSENGER_ID,
    FIRST_TICKET_ID,
    BookingService,
)


def assert_consistent(service: BookingService) -> None:
    """Seat flags, ledger and waiting list agree with each other."""
    seat_map = service.seat_map()
    tickets = service.list_all_bookings()
    confirmed = [t for t in tickets if t.status is TicketStatus.CONFIRMED]
    waiting = [t for t in tickets if t.status is TicketStatus.WAITING]
    queue = service.list_waiting_list()

    assert seat_map.occupied + seat_map.available == seat_map.total_seats
    seats = [t.seat_number for t in confirmed]
    assert len(seats) == len(set(seats)), "seat allocated twice"
    assert sorted(seats) == [i + 1 for i, flag in enumerate(seat_map.seats) if flag]
    assert all(t.seat_number is None for t in waiting)
    assert sorted(p.passenger_id for p in queue) == sorted(t.passenger.passenger_id for t in waiting)
    if queue:
        assert seat_map.available == 0


def test_scenario_fill_then_wait(small_service):
    """Two seats: A and B confirmed in seats 1 and 2, C waits."""
    a = small_service.book_ticket("A", 30)
    b = small_service.book_ticket("B", 31)
    c = small_service.book_ticket("C", 32)

    assert (a.seat_number, a.waiting) == (1, False)
    assert (b.seat_number, b.waiting) == (2, False)
    assert c.success is True
    assert c.waiting is True
    assert c.seat_number is None
    assert c.ticket.status is TicketStatus.WAITING
    assert [p.name for p in small_service.list_waiting_list()] == ["C"]
    assert_consistent(small_service)


def test_scenario_cancel_promotes_waiting(small_service):
    a = small_service.book_ticket("A", 30)
    small_service.book_ticket("B", 31)
    c = small_service.book_ticket("C", 32)

    result = small_service.cancel_ticket(a.ticket_id)

    assert result.success is True
    assert result.promoted_ticket_id == c.ticket_id
    promoted = small_service.search_booking(c.ticket_id)
    assert promoted.status is TicketStatus.CONFIRMED
    assert promoted.seat_number == 1
    assert small_service.list_waiting_list() == []
    assert small_service.search_booking(a.ticket_id) is None
    history = small_service.list_cancellation_history()
    assert [h.ticket.ticket_id for h in history] == [a.ticket_id]
    assert history[0].ticket.seat_number == 1
    assert history[0].ticket.status is TicketStatus.CONFIRMED
    assert_consistent(small_service)


def test_scenario_undo_when_full_requeues(small_service):
    a = small_service.book_ticket("A", 30)
    small_service.book_ticket("B", 31)
    small_service.book_ticket("C", 32)
    small_service.cancel_ticket(a.ticket_id)

    result = small_service.undo_cancellation()

    assert result.success is True
    assert result.ticket_id == a.ticket_id
    assert result.status is TicketStatus.WAITING
    assert result.seat_number is None
    restored = small_service.search_booking(a.ticket_id)
    assert restored.status is TicketStatus.WAITING
    assert restored.passenger.name == "A"
    assert [p.name for p in small_service.list_waiting_list()] == ["A"]
    assert small_service.list_cancellation_history() == []
    assert_consistent(small_service)


def test_cancel_unknown_ticket_changes_nothing(small_service):
    small_service.book_ticket("A", 30)
    before = small_service.export_snapshot()

    result = small_service.cancel_ticket(999)

    assert result.success is False
    assert result.error is BookingError.NOT_FOUND
    assert small_service.export_snapshot() == before


def test_undo_with_empty_history_changes_nothing(small_service):
    small_service.book_ticket("A", 30)
    before = small_service.export_snapshot()

    result = small_service.undo_cancellation()

    assert result.success is False
    assert result.error is BookingError.EMPTY_HISTORY
    assert small_service.export_snapshot() == before


def test_booking_takes_lowest_free_seat(service):
    ids = [service.book_ticket(f"P{i}", 20).ticket_id for i in range(6)]
    service.cancel_ticket(ids[4])
    service.cancel_ticket(ids[1])

    assert service.book_ticket("X", 20).seat_number == 2
    assert service.book_ticket("Y", 20).seat_number == 5
    assert service.book_ticket("Z", 20).seat_number == 7


def test_identifiers_are_never_reused(small_service):
    first = small_service.book_ticket("A", 30)
    small_service.cancel_ticket(first.ticket_id)
    second = small_service.book_ticket("B", 30)

    assert first.ticket_id == FIRST_TICKET_ID
    assert first.ticket.passenger.passenger_id == FIRST_PASSENGER_ID
    assert second.ticket_id == FIRST_TICKET_ID + 1
    assert second.ticket.passenger.passenger_id == FIRST_PASSENGER_ID + 1


def test_waiting_list_promotes_in_arrival_order(small_service):
    seated = [small_service.book_ticket(n, 30).ticket_id for n in ("A", "B")]
    waiting = [small_service.book_ticket(n, 30).ticket_id for n in ("C", "D", "E")]

    promoted = [small_service.cancel_ticket(seated[0]).promoted_ticket_id]
    promoted.append(small_service.cancel_ticket(seated[1]).promoted_ticket_id)
    promoted.append(small_service.cancel_ticket(promoted[0]).promoted_ticket_id)

    assert promoted == waiting
    assert small_service.list_waiting_list() == []


def test_undo_reverses_cancellations_last_first(service):
    ids = [service.book_ticket(f"P{i}", 20).ticket_id for i in range(5)]
    for ticket_id in ids[:3]:
        service.cancel_ticket(ticket_id)

    undone = [service.undo_cancellation() for _ in range(3)]

    assert [u.ticket_id for u in undone] == [ids[2], ids[1], ids[0]]
    # Restored tickets take the lowest free seat, not their old one
    assert [u.seat_number for u in undone] == [1, 2, 3]
    assert service.undo_cancellation().success is False
    assert_consistent(service)


def test_undo_does_not_reverse_promotion(small_service):
    a = small_service.book_ticket("A", 30)
    small_service.book_ticket("B", 30)
    c = small_service.book_ticket("C", 30)
    small_service.cancel_ticket(a.ticket_id)

    small_service.undo_cancellation()

    assert small_service.search_booking(c.ticket_id).seat_number == 1


def test_cancel_waiting_ticket_leaves_queue(small_service):
    small_service.book_ticket("A", 30)
    small_service.book_ticket("B", 30)
    c = small_service.book_ticket("C", 30)
    d = small_service.book_ticket("D", 30)

    result = small_service.cancel_ticket(c.ticket_id)

    assert result.success is True
    assert result.promoted_ticket_id is None
    assert [p.name for p in small_service.list_waiting_list()] == ["D"]
    assert small_service.list_cancellation_history()[0].ticket.status is TicketStatus.WAITING
    assert small_service.seat_map().occupied == 2
    assert_consistent(small_service)

    # Next free seat goes to D, not to the cancelled C
    a_id = small_service.list_all_bookings()[0].ticket_id
    assert small_service.cancel_ticket(a_id).promoted_ticket_id == d.ticket_id


def test_undo_waiting_cancellation_queues_once(small_service):
    small_service.book_ticket("A", 30)
    small_service.book_ticket("B", 30)
    c = small_service.book_ticket("C", 30)
    small_service.cancel_ticket(c.ticket_id)

    small_service.undo_cancellation()

    assert [p.name for p in small_service.list_waiting_list()] == ["C"]
    assert small_service.search_booking(c.ticket_id).status is TicketStatus.WAITING
    assert_consistent(small_service)


def test_undo_confirms_when_seat_free(service):
    first = service.book_ticket("A", 30)
    service.book_ticket("B", 30)
    service.cancel_ticket(first.ticket_id)

    result = service.undo_cancellation()

    assert result.status is TicketStatus.CONFIRMED
    assert result.seat_number == 1
    ticket = service.search_booking(first.ticket_id)
    assert ticket.booked_at == first.ticket.booked_at


def test_search_is_side_effect_free(small_service):
    booking = small_service.book_ticket("A", 30)
    before = small_service.export_snapshot()

    first = small_service.search_booking(booking.ticket_id)
    second = small_service.search_booking(booking.ticket_id)

    assert first == second
    assert small_service.search_booking(12345) is None
    assert small_service.export_snapshot() == before


def test_query_results_cannot_mutate_state(small_service):
    booking = small_service.book_ticket("A", 30)
    record = small_service.search_booking(booking.ticket_id)
    record.seat_number = 2
    small_service.list_all_bookings().clear()

    assert small_service.search_booking(booking.ticket_id).seat_number == 1
    assert len(small_service.list_all_bookings()) == 1


def test_list_all_bookings_oldest_first(service):
    ids = [service.book_ticket(n, 30).ticket_id for n in ("A", "B", "C")]
    assert [t.ticket_id for t in service.list_all_bookings()] == ids


def test_clear_all_resets_everything(small_service):
    for name in ("A", "B", "C"):
        small_service.book_ticket(name, 30)
    small_service.cancel_ticket(FIRST_TICKET_ID)

    small_service.clear_all()

    assert small_service.list_all_bookings() == []
    assert small_service.list_waiting_list() == []
    assert small_service.list_cancellation_history() == []
    assert small_service.seat_map().available == 2
    assert small_service.book_ticket("Z", 30).ticket_id == FIRST_TICKET_ID


def test_random_operations_keep_state_consistent():
    rng = random.Random(42)
    service = BookingService(total_seats=5)

    for step in range(400):
        live = [t.ticket_id for t in service.list_all_bookings()]
        roll = rng.random()
        if roll < 0.45 or not live:
            service.book_ticket(f"P{step}", rng.randint(1, 90))
        elif roll < 0.8:
            service.cancel_ticket(rng.choice(live))
        else:
            service.undo_cancellation()
        assert_consistent(service)


def test_only_publishing_service_drives_inventory_gauges():
    served = BookingService(total_seats=2, publish_gauges=True)
    for name in ("A", "B", "C"):
        served.book_ticket(name, 30)
    assert REGISTRY.get_sample_value("seats_occupied") == 2
    assert REGISTRY.get_sample_value("waiting_list_length") == 1

    scratch = BookingService(total_seats=5)
    scratch.book_ticket("X", 30)
    scratch.clear_all()

    assert REGISTRY.get_sample_value("seats_occupied") == 2
    assert REGISTRY.get_sample_value("waiting_list_length") == 1
