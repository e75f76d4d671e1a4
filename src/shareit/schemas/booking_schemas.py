"""Booking schemas and the booking listing state filter.

This module defines the request body for new bookings with its period
validation, the booking response with booker and item summaries, and the
``BookingState`` values accepted by the listing endpoints.
"""

from datetime import datetime
from enum import Enum

from pydantic import Field, validator

from ..models.booking import BookingStatus
from .base import CamelModel


class BookingState(str, Enum):
    """Filter applied when listing bookings."""

    ALL = "ALL"
    CURRENT = "CURRENT"
    FUTURE = "FUTURE"
    PAST = "PAST"
    WAITING = "WAITING"
    REJECTED = "REJECTED"

    @classmethod
    def parse(cls, value: str) -> "BookingState":
        """Parse a state name.

        Raises:
            ValueError: If the value names no known state
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown state: {value}") from None


def _to_local_naive(value: datetime) -> datetime:
    # Stored timestamps are naive local time.
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class BookingCreate(CamelModel):
    """Schema for booking an item.

    ``start`` must not be in the past and ``end`` must come after ``start``.
    """

    item_id: int = Field(..., gt=0, description="ID of the item to book", examples=[7])
    start: datetime = Field(
        ..., description="Start of the rental period", examples=["2030-01-01T10:00:00"]
    )
    end: datetime = Field(
        ..., description="End of the rental period", examples=["2030-01-02T10:00:00"]
    )

    @validator("start")
    def validate_start(cls, v: datetime) -> datetime:
        """Validate that the booking does not start in the past."""
        v = _to_local_naive(v)
        if v < datetime.now():
            raise ValueError("Booking start cannot be in the past")
        return v

    @validator("end")
    def validate_end(cls, v: datetime, values: dict) -> datetime:
        """Validate that the booking ends after it starts."""
        v = _to_local_naive(v)
        start = values.get("start")
        if start is not None and v <= start:
            raise ValueError("Booking end must be after start")
        return v


class BookerSummary(CamelModel):
    """Booker shown in booking responses."""

    id: int = Field(..., description="User ID")
    name: str = Field(..., description="User's name")


class BookedItemSummary(CamelModel):
    """Item shown in booking responses."""

    id: int = Field(..., description="Item ID")
    name: str = Field(..., description="Item name")


class BookingResponse(CamelModel):
    """Schema for booking API responses."""

    id: int = Field(..., description="Booking ID")
    start: datetime = Field(..., description="Start of the rental period")
    end: datetime = Field(..., description="End of the rental period")
    status: BookingStatus = Field(..., description="Current booking status")
    booker: BookerSummary = Field(..., description="User who made the booking")
    item: BookedItemSummary = Field(..., description="Booked item")
