"""SQLModel data models.

This module exports all database models for the ShareIt server.
Import models from here to ensure proper initialization and relationships.
"""

from .booking import Booking, BookingStatus
from .comment import Comment
from .item import Item
from .item_request import ItemRequest
from .user import User

__all__ = [
    "User",
    "Item",
    "ItemRequest",
    "Booking",
    "BookingStatus",
    "Comment",
]
