"""Booking service for business logic operations.

This module provides the booking workflow: creating a booking request,
approval or rejection by the item owner, and the booker and owner listings
filtered by :class:`BookingState`.

Listings dispatch on the state through ``BOOKING_STATE_CRITERIA``, a table
mapping each state to the filter expressions of its query. Every query is
ordered by booking start, newest first.
"""

from datetime import datetime
from typing import Any, Callable

from sqlmodel import Session

from ..exceptions import DatabaseServiceError, NotFoundServiceError, ValidationServiceError
from ..logging_config import SecurityLoggingMixin, get_logger
from ..models.booking import Booking, BookingStatus
from ..repositories.base import RepositoryError, page_offset
from ..repositories.booking_repository import BookingRepository
from ..repositories.item_repository import ItemRepository
from ..schemas.booking_schemas import (
    BookedItemSummary,
    BookerSummary,
    BookingCreate,
    BookingResponse,
    BookingState,
)
from .item_service import ItemNotFoundServiceError
from .user_service import UserService

logger = get_logger("booking_service")


BOOKING_STATE_CRITERIA: dict[BookingState, Callable[[datetime], list[Any]]] = {
    BookingState.ALL: lambda now: [],
    BookingState.CURRENT: lambda now: [Booking.start < now, Booking.end > now],
    BookingState.FUTURE: lambda now: [Booking.start > now, Booking.end > now],
    BookingState.PAST: lambda now: [Booking.start < now, Booking.end < now],
    BookingState.WAITING: lambda now: [Booking.status == BookingStatus.WAITING],
    BookingState.REJECTED: lambda now: [Booking.status == BookingStatus.REJECTED],
}


class BookingNotFoundServiceError(NotFoundServiceError):
    """Exception raised when booking is not found."""

    def __init__(self, booking_id: int) -> None:
        super().__init__(f"Booking with id {booking_id} not found")


class OwnerBookingServiceError(NotFoundServiceError):
    """Exception raised when an owner tries to book their own item."""

    def __init__(self, item_id: int) -> None:
        super().__init__(f"Owner of item {item_id} cannot book it")


class BookingRightsServiceError(NotFoundServiceError):
    """Exception raised when a user has no rights on a booking.

    Reported as not found so the booking's existence is not disclosed.
    """

    def __init__(self, booking_id: int, user_id: int) -> None:
        super().__init__(f"User {user_id} has no rights on booking {booking_id}")


class ItemUnavailableServiceError(ValidationServiceError):
    """Exception raised when booking an unavailable item."""

    def __init__(self, item_id: int) -> None:
        super().__init__(f"Item with id {item_id} is not available")


class BookingStatusServiceError(ValidationServiceError):
    """Exception raised when approving a booking that is no longer waiting."""

    def __init__(self, booking_id: int, status: BookingStatus) -> None:
        super().__init__(f"Booking {booking_id} status is already {status.value}")


class UnknownStateServiceError(ValidationServiceError):
    """Exception raised for an unsupported listing state."""

    def __init__(self, state: str) -> None:
        super().__init__(f"Unknown state: {state}")


class BookingService(SecurityLoggingMixin):
    """Service for booking business logic operations."""

    def __init__(self, session: Session) -> None:
        """Initialize booking service with database session.

        Args:
            session: SQLModel database session
        """
        super().__init__()
        self.session = session
        self.booking_repository = BookingRepository(session)
        self.item_repository = ItemRepository(session)
        self.user_service = UserService(session)

    async def create_booking(
        self, booking_data: BookingCreate, booker_id: int
    ) -> BookingResponse:
        """Request a booking of an item.

        Args:
            booking_data: Item and rental period
            booker_id: ID of the user making the booking

        Returns:
            The new booking, always WAITING

        Raises:
            ItemNotFoundServiceError: If the item does not exist
            OwnerBookingServiceError: If the booker owns the item
            ItemUnavailableServiceError: If the item is not available
            UserNotFoundServiceError: If the booker does not exist
            DatabaseServiceError: If the operation fails
        """
        item_id = booking_data.item_id
        try:
            item = self.item_repository.get_by_id(item_id)
            if not item:
                raise ItemNotFoundServiceError(item_id)
            if item.owner_id == booker_id:
                self.log_authorization_failure(
                    user_id=booker_id,
                    resource=f"item:{item_id}",
                    action="book",
                    reason="owner cannot book own item",
                )
                raise OwnerBookingServiceError(item_id)
            if not item.available:
                raise ItemUnavailableServiceError(item_id)

            self.user_service.check_user_exists(booker_id)

            booking = self.booking_repository.save(
                Booking(
                    start=booking_data.start,
                    end=booking_data.end,
                    item_id=item_id,
                    booker_id=booker_id,
                    status=BookingStatus.WAITING,
                )
            )
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to create booking: {e.message}", original_error=e
            ) from e

        logger.info(
            f"Booking {booking.id} created",
            extra={"booking_id": booking.id, "item_id": item_id, "user_id": booker_id},
        )
        return self._convert_to_response(booking)

    async def set_approve(
        self, booking_id: int, approved: bool, owner_id: int
    ) -> BookingResponse:
        """Approve or reject a waiting booking.

        Raises:
            BookingNotFoundServiceError: If the booking does not exist
            BookingRightsServiceError: If the caller does not own the item
            BookingStatusServiceError: If the booking is not WAITING
            DatabaseServiceError: If the operation fails
        """
        try:
            booking = self.booking_repository.get_by_id(booking_id)
            if not booking:
                raise BookingNotFoundServiceError(booking_id)
            if booking.item.owner_id != owner_id:
                self.log_authorization_failure(
                    user_id=owner_id,
                    resource=f"booking:{booking_id}",
                    action="approve",
                    reason="not the item owner",
                )
                raise BookingRightsServiceError(booking_id, owner_id)
            if booking.status != BookingStatus.WAITING:
                raise BookingStatusServiceError(booking_id, booking.status)

            booking.status = BookingStatus.APPROVED if approved else BookingStatus.REJECTED
            booking = self.booking_repository.save(booking)
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to update booking: {e.message}", original_error=e
            ) from e

        logger.info(
            f"Booking {booking_id} status changed to {booking.status.value}",
            extra={"booking_id": booking_id, "status": booking.status.value},
        )
        return self._convert_to_response(booking)

    async def get_booking(self, booking_id: int, user_id: int) -> BookingResponse:
        """Get a booking visible to its booker or the item owner.

        Raises:
            BookingNotFoundServiceError: If the booking does not exist
            BookingRightsServiceError: If the caller is neither booker nor owner
            DatabaseServiceError: If the operation fails
        """
        try:
            booking = self.booking_repository.get_by_id(booking_id)
            if not booking:
                raise BookingNotFoundServiceError(booking_id)
            if user_id not in (booking.booker_id, booking.item.owner_id):
                self.log_authorization_failure(
                    user_id=user_id,
                    resource=f"booking:{booking_id}",
                    action="view",
                    reason="neither booker nor item owner",
                )
                raise BookingRightsServiceError(booking_id, user_id)
            return self._convert_to_response(booking)
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to get booking: {e.message}", original_error=e
            ) from e

    async def get_bookings_for_booker(
        self, booker_id: int, state: str = BookingState.ALL.value, from_: int = 0, size: int = 10
    ) -> list[BookingResponse]:
        """Get a page of the user's own bookings in the given state.

        Raises:
            UnknownStateServiceError: If the state is not supported
            UserNotFoundServiceError: If the user does not exist
            DatabaseServiceError: If the operation fails
        """
        criteria = self._criteria_for(state)
        self.user_service.check_user_exists(booker_id)

        try:
            bookings = self.booking_repository.find_by_booker(
                booker_id, criteria, skip=page_offset(from_, size), limit=size
            )
            return [self._convert_to_response(booking) for booking in bookings]
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to get bookings: {e.message}", original_error=e
            ) from e

    async def get_bookings_for_owner(
        self, owner_id: int, state: str = BookingState.ALL.value, from_: int = 0, size: int = 10
    ) -> list[BookingResponse]:
        """Get a page of bookings of the user's items in the given state.

        Raises:
            UnknownStateServiceError: If the state is not supported
            UserNotFoundServiceError: If the user does not exist
            DatabaseServiceError: If the operation fails
        """
        criteria = self._criteria_for(state)
        self.user_service.check_user_exists(owner_id)

        try:
            bookings = self.booking_repository.find_by_item_owner(
                owner_id, criteria, skip=page_offset(from_, size), limit=size
            )
            return [self._convert_to_response(booking) for booking in bookings]
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to get bookings: {e.message}", original_error=e
            ) from e

    @staticmethod
    def _criteria_for(state: str) -> list[Any]:
        try:
            booking_state = BookingState.parse(state)
        except ValueError as e:
            raise UnknownStateServiceError(state) from e
        return BOOKING_STATE_CRITERIA[booking_state](datetime.now())

    @staticmethod
    def _convert_to_response(booking: Booking) -> BookingResponse:
        """Convert Booking model to BookingResponse schema."""
        return BookingResponse(
            id=booking.id,
            start=booking.start,
            end=booking.end,
            status=booking.status,
            booker=BookerSummary(id=booking.booker.id, name=booking.booker.name),
            item=BookedItemSummary(id=booking.item.id, name=booking.item.name),
        )
