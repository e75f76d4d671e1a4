"""FastAPI dependencies for caller identity and database access.

This module provides dependency injection functions for FastAPI endpoints,
including the sharer id header, database sessions, and service instances.
"""

from typing import Annotated

from fastapi import Depends, Header
from sqlmodel import Session

from .database import get_session
from .services.booking_service import BookingService
from .services.item_request_service import ItemRequestService
from .services.item_service import ItemService
from .services.user_service import UserService

SHARER_USER_ID_HEADER = "X-Sharer-User-Id"


# Dependency for the calling user's ID
async def get_sharer_user_id(
    x_sharer_user_id: Annotated[
        int,
        Header(alias=SHARER_USER_ID_HEADER, description="ID of the calling user"),
    ],
) -> int:
    """Get the calling user's ID from the ``X-Sharer-User-Id`` header.

    A missing or non-integer header fails request validation.

    Returns:
        int: Calling user ID
    """
    return x_sharer_user_id


def get_user_service(session: Annotated[Session, Depends(get_session)]) -> UserService:
    """Get user service instance.

    Args:
        session: Database session

    Returns:
        UserService: User service instance
    """
    return UserService(session)


def get_item_service(session: Annotated[Session, Depends(get_session)]) -> ItemService:
    """Get item service instance."""
    return ItemService(session)


def get_item_request_service(
    session: Annotated[Session, Depends(get_session)],
) -> ItemRequestService:
    """Get item request service instance."""
    return ItemRequestService(session)


def get_booking_service(
    session: Annotated[Session, Depends(get_session)],
) -> BookingService:
    """Get booking service instance."""
    return BookingService(session)


# Type aliases for common dependency patterns
SharerUserId = Annotated[int, Depends(get_sharer_user_id)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
ItemServiceDep = Annotated[ItemService, Depends(get_item_service)]
ItemRequestServiceDep = Annotated[ItemRequestService, Depends(get_item_request_service)]
BookingServiceDep = Annotated[BookingService, Depends(get_booking_service)]
