"""
Pydantic schemas for booking requests, ticket records and operation results.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from booking_engine.models.ticket import TicketStatus


class BookingError(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    EMPTY_HISTORY = "EMPTY_HISTORY"
    INVALID_SEAT = "INVALID_SEAT"


class BookingCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    age: int = Field(..., gt=0, le=150)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class PassengerResponse(BaseModel):
    passenger_id: int
    name: str
    age: int

    model_config = {"from_attributes": True}


class TicketResponse(BaseModel):
    ticket_id: int
    passenger: PassengerResponse
    seat_number: Optional[int] = None
    status: TicketStatus
    booked_at: datetime

    model_config = {"from_attributes": True}


class CancellationResponse(BaseModel):
    ticket: TicketResponse
    passenger: PassengerResponse

    model_config = {"from_attributes": True}


class BookingResult(BaseModel):
    success: bool = True
    ticket_id: int
    seat_number: Optional[int] = None
    waiting: bool = False
    message: str
    ticket: TicketResponse


class CancelResult(BaseModel):
    success: bool
    ticket_id: int
    promoted_ticket_id: Optional[int] = None
    message: str
    error: Optional[BookingError] = None


class UndoResult(BaseModel):
    success: bool
    ticket_id: Optional[int] = None
    seat_number: Optional[int] = None
    status: Optional[TicketStatus] = None
    message: str
    error: Optional[BookingError] = None


class SeatMapResponse(BaseModel):
    total_seats: int
    available: int
    occupied: int
    seats: list[bool]
