"""
Booking endpoints: book, search, list, cancel and undo.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from booking_engine.api.deps import get_booking_service
from booking_engine.schemas.booking import (
    BookingCreate,
    BookingResult,
    CancelResult,
    TicketResponse,
    UndoResult,
)
from booking_engine.services.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("/", response_model=BookingResult, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_data: BookingCreate,
    service: BookingService = Depends(get_booking_service),
):
    """
    Book a ticket.

    Assigns the lowest-numbered free seat. When the train is full the
    passenger is put on the waiting list and the result has waiting=true.
    """
    return service.book_ticket(booking_data.name, booking_data.age)


@router.get("/", response_model=list[TicketResponse])
async def list_bookings(service: BookingService = Depends(get_booking_service)):
    """All live tickets, oldest booking first."""
    return service.list_all_bookings()


@router.post("/undo", response_model=UndoResult)
async def undo_cancellation(service: BookingService = Depends(get_booking_service)):
    """Restore the most recently cancelled ticket."""
    result = service.undo_cancellation()
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=result.message,
        )
    return result


@router.get("/{ticket_id}", response_model=TicketResponse)
async def get_booking(
    ticket_id: int,
    service: BookingService = Depends(get_booking_service),
):
    ticket = service.search_booking(ticket_id)
    if ticket is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Ticket {ticket_id} not found",
        )
    return ticket


@router.delete("/{ticket_id}", response_model=CancelResult)
async def cancel_booking(
    ticket_id: int,
    service: BookingService = Depends(get_booking_service),
):
    """Cancel a ticket. A freed seat goes to the head of the waiting list."""
    result = service.cancel_ticket(ticket_id)
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=result.message,
        )
    return result
