"""Item repository for database operations.

This module provides the ItemRepository class that handles item lookups,
owner-scoped listings, and text search over available items.
"""

from typing import List

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import and_, asc, select

from ..models.item import Item
from .base import BaseRepository, RepositoryError


class ItemRepository(BaseRepository[Item]):
    """Repository for item database operations."""

    model = Item
    table = "items"

    def find_by_owner(self, owner_id: int, skip: int = 0, limit: int = 10) -> List[Item]:
        """Get a page of items owned by a user, ordered by ID.

        Args:
            owner_id: ID of the owner
            skip: Number of items to skip
            limit: Maximum number of items to return

        Returns:
            List[Item]: Items owned by the user

        Raises:
            RepositoryError: If database operation fails
        """
        try:
            statement = (
                select(Item)
                .where(Item.owner_id == owner_id)
                .order_by(asc(Item.id))
                .offset(skip)
                .limit(limit)
            )
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Database error while retrieving items for owner {owner_id}: {str(e)}",
                original_error=e,
            ) from e

    def search_available(self, text: str, skip: int = 0, limit: int = 10) -> List[Item]:
        """Search available items by name or description.

        Matching is a case-insensitive substring match; LIKE wildcards in
        ``text`` are matched literally.

        Args:
            text: Search text
            skip: Number of items to skip
            limit: Maximum number of items to return

        Returns:
            List[Item]: Matching available items ordered by ID

        Raises:
            RepositoryError: If database operation fails
        """
        try:
            statement = (
                select(Item)
                .where(
                    and_(
                        Item.available == True,  # noqa: E712
                        or_(
                            func.lower(Item.name).contains(text.lower(), autoescape=True),
                            func.lower(Item.description).contains(text.lower(), autoescape=True),
                        ),
                    )
                )
                .order_by(asc(Item.id))
                .offset(skip)
                .limit(limit)
            )
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Database error while searching items for '{text}': {str(e)}",
                original_error=e,
            ) from e
