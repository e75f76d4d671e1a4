"""Item request repository for database operations."""

from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import desc, select

from ..models.item_request import ItemRequest
from .base import BaseRepository, RepositoryError


class ItemRequestRepository(BaseRepository[ItemRequest]):
    """Repository for item request database operations."""

    model = ItemRequest
    table = "requests"

    def find_by_requester(self, requester_id: int) -> List[ItemRequest]:
        """Get all requests made by a user, newest first.

        Raises:
            RepositoryError: If database operation fails
        """
        try:
            statement = (
                select(ItemRequest)
                .where(ItemRequest.requester_id == requester_id)
                .order_by(desc(ItemRequest.created), desc(ItemRequest.id))
            )
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Failed to get requests of user {requester_id}: {str(e)}",
                original_error=e,
            ) from e

    def find_by_other_users(
        self, user_id: int, skip: int = 0, limit: int = 10
    ) -> List[ItemRequest]:
        """Get a page of requests made by anyone except the given user, newest first.

        Raises:
            RepositoryError: If database operation fails
        """
        try:
            statement = (
                select(ItemRequest)
                .where(ItemRequest.requester_id != user_id)
                .order_by(desc(ItemRequest.created), desc(ItemRequest.id))
                .offset(skip)
                .limit(limit)
            )
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Failed to get requests of users other than {user_id}: {str(e)}",
                original_error=e,
            ) from e
