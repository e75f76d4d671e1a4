"""Data access layer.

This module provides data access repositories for database operations
with proper error handling and type safety.
"""

from .base import BaseRepository, RepositoryError, page_offset
from .booking_repository import BookingRepository
from .comment_repository import CommentRepository
from .item_repository import ItemRepository
from .item_request_repository import ItemRequestRepository
from .user_repository import UserAlreadyExistsError, UserRepository

__all__ = [
    "BaseRepository",
    "RepositoryError",
    "page_offset",
    "UserRepository",
    "UserAlreadyExistsError",
    "ItemRepository",
    "ItemRequestRepository",
    "BookingRepository",
    "CommentRepository",
]
