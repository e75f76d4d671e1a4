"""Pydantic schemas for API validation and serialization.

This module exports all API schemas for users, items, item requests and
bookings.
"""

from .base import CamelModel
from .booking_schemas import (
    BookedItemSummary,
    BookerSummary,
    BookingCreate,
    BookingResponse,
    BookingState,
)
from .item_request_schemas import (
    ItemRequestCreate,
    ItemRequestResponse,
    RequestItemSummary,
)
from .item_schemas import (
    BookingShort,
    CommentCreate,
    CommentResponse,
    ItemCreate,
    ItemResponse,
    ItemUpdate,
    ItemWithBookings,
)
from .user_schemas import UserCreate, UserResponse, UserUpdate

__all__ = [
    "CamelModel",
    # User schemas
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    # Item schemas
    "ItemCreate",
    "ItemUpdate",
    "ItemResponse",
    "ItemWithBookings",
    "BookingShort",
    "CommentCreate",
    "CommentResponse",
    # Item request schemas
    "ItemRequestCreate",
    "ItemRequestResponse",
    "RequestItemSummary",
    # Booking schemas
    "BookingCreate",
    "BookingResponse",
    "BookingState",
    "BookerSummary",
    "BookedItemSummary",
]
