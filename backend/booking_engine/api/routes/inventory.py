"""
Read-only views of the seat map, waiting list and cancellation history.
"""

from fastapi import APIRouter, Depends

from booking_engine.api.deps import get_booking_service
from booking_engine.schemas.booking import (
    CancellationResponse,
    PassengerResponse,
    SeatMapResponse,
)
from booking_engine.services.booking_service import BookingService

router = APIRouter(tags=["Inventory"])


@router.get("/seats", response_model=SeatMapResponse)
async def get_seat_map(service: BookingService = Depends(get_booking_service)):
    return service.seat_map()


@router.get("/waiting-list", response_model=list[PassengerResponse])
async def get_waiting_list(service: BookingService = Depends(get_booking_service)):
    """Waiting passengers in promotion order."""
    return service.list_waiting_list()


@router.get("/cancellations", response_model=list[CancellationResponse])
async def get_cancellation_history(service: BookingService = Depends(get_booking_service)):
    """Cancellations available for undo, most recent first."""
    return service.list_cancellation_history()
