"""Booking repository for database operations.

This module provides the BookingRepository class with booker-scoped and
owner-scoped paginated listings, the last/next booking lookups used on item
pages, and the finished-booking check that gates comments.
"""

from datetime import datetime
from typing import Any, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import and_, asc, desc, select

from ..models.booking import Booking, BookingStatus
from ..models.item import Item
from .base import BaseRepository, RepositoryError


class BookingRepository(BaseRepository[Booking]):
    """Repository for booking database operations.

    Listing methods take extra filter ``criteria`` (SQLAlchemy boolean
    expressions over :class:`Booking` columns) and always order by ``start``
    descending.
    """

    model = Booking
    table = "bookings"

    def find_by_booker(
        self,
        booker_id: int,
        criteria: Sequence[Any] = (),
        skip: int = 0,
        limit: int = 10,
    ) -> List[Booking]:
        """Get a page of bookings made by a user.

        Args:
            booker_id: ID of the booker
            criteria: Additional filter expressions
            skip: Number of bookings to skip
            limit: Maximum number of bookings to return

        Raises:
            RepositoryError: If database operation fails
        """
        try:
            statement = (
                select(Booking)
                .where(and_(Booking.booker_id == booker_id, *criteria))
                .order_by(desc(Booking.start), desc(Booking.id))
                .offset(skip)
                .limit(limit)
            )
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Failed to get bookings of booker {booker_id}: {str(e)}",
                original_error=e,
            ) from e

    def find_by_item_owner(
        self,
        owner_id: int,
        criteria: Sequence[Any] = (),
        skip: int = 0,
        limit: int = 10,
    ) -> List[Booking]:
        """Get a page of bookings of all items owned by a user.

        Args:
            owner_id: ID of the item owner
            criteria: Additional filter expressions
            skip: Number of bookings to skip
            limit: Maximum number of bookings to return

        Raises:
            RepositoryError: If database operation fails
        """
        try:
            statement = (
                select(Booking)
                .join(Item, Booking.item_id == Item.id)
                .where(and_(Item.owner_id == owner_id, *criteria))
                .order_by(desc(Booking.start), desc(Booking.id))
                .offset(skip)
                .limit(limit)
            )
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Failed to get bookings for owner {owner_id}: {str(e)}",
                original_error=e,
            ) from e

    def find_last_for_item(self, item_id: int, now: datetime) -> Optional[Booking]:
        """Get the approved booking of an item that started most recently.

        Raises:
            RepositoryError: If database operation fails
        """
        try:
            statement = (
                select(Booking)
                .where(
                    and_(
                        Booking.item_id == item_id,
                        Booking.status == BookingStatus.APPROVED,
                        Booking.start <= now,
                    )
                )
                .order_by(desc(Booking.start))
                .limit(1)
            )
            return self.session.exec(statement).first()
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Failed to get last booking of item {item_id}: {str(e)}",
                original_error=e,
            ) from e

    def find_next_for_item(self, item_id: int, now: datetime) -> Optional[Booking]:
        """Get the approved booking of an item that starts soonest.

        Raises:
            RepositoryError: If database operation fails
        """
        try:
            statement = (
                select(Booking)
                .where(
                    and_(
                        Booking.item_id == item_id,
                        Booking.status == BookingStatus.APPROVED,
                        Booking.start > now,
                    )
                )
                .order_by(asc(Booking.start))
                .limit(1)
            )
            return self.session.exec(statement).first()
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Failed to get next booking of item {item_id}: {str(e)}",
                original_error=e,
            ) from e

    def has_finished_booking(self, item_id: int, booker_id: int, now: datetime) -> bool:
        """Check whether a user has an approved booking of an item that has ended.

        Raises:
            RepositoryError: If database operation fails
        """
        try:
            statement = (
                select(Booking.id)
                .where(
                    and_(
                        Booking.item_id == item_id,
                        Booking.booker_id == booker_id,
                        Booking.status == BookingStatus.APPROVED,
                        Booking.end < now,
                    )
                )
                .limit(1)
            )
            return self.session.exec(statement).first() is not None
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Failed to check finished bookings of item {item_id}: {str(e)}",
                original_error=e,
            ) from e
