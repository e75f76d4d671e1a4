"""Business logic layer.

This module provides business logic services for the ShareIt server,
including user, item, item request and booking management.
"""

from .booking_service import BOOKING_STATE_CRITERIA, BookingService
from .item_request_service import ItemRequestService
from .item_service import ItemService
from .user_service import UserService

__all__ = [
    "UserService",
    "ItemService",
    "ItemRequestService",
    "BookingService",
    "BOOKING_STATE_CRITERIA",
]
