"""Item service for business logic operations.

This module provides business logic for item management operations,
including item CRUD operations, owner authorization checks, text search,
comments, and the owner-only last/next booking summaries.
"""

from datetime import datetime

from sqlmodel import Session

from ..exceptions import (
    AccessDeniedServiceError,
    DatabaseServiceError,
    NotFoundServiceError,
    ValidationServiceError,
)
from ..logging_config import SecurityLoggingMixin, get_logger
from ..models.booking import Booking
from ..models.comment import Comment
from ..models.item import Item
from ..repositories.base import RepositoryError, page_offset
from ..repositories.booking_repository import BookingRepository
from ..repositories.comment_repository import CommentRepository
from ..repositories.item_repository import ItemRepository
from ..repositories.item_request_repository import ItemRequestRepository
from ..schemas.item_schemas import (
    BookingShort,
    CommentCreate,
    CommentResponse,
    ItemCreate,
    ItemResponse,
    ItemUpdate,
    ItemWithBookings,
)
from .item_request_service import ItemRequestNotFoundServiceError
from .user_service import UserService

logger = get_logger("item_service")


class ItemNotFoundServiceError(NotFoundServiceError):
    """Exception raised when item is not found."""

    def __init__(self, item_id: int) -> None:
        super().__init__(f"Item with id {item_id} not found")


class ItemAccessDeniedServiceError(AccessDeniedServiceError):
    """Exception raised when a user who is not the owner changes an item."""

    def __init__(self, item_id: int, user_id: int) -> None:
        super().__init__(f"User {user_id} is not the owner of item {item_id}")


class CommentNotAllowedServiceError(ValidationServiceError):
    """Exception raised when the author never finished a booking of the item."""

    def __init__(self, item_id: int, user_id: int) -> None:
        super().__init__(
            f"User {user_id} has no finished booking of item {item_id} to comment on"
        )


class ItemService(SecurityLoggingMixin):
    """Service for item business logic operations.

    Anyone may view or search items; only the owner may change or delete one
    and only the owner sees its booking summaries.
    """

    def __init__(self, session: Session) -> None:
        """Initialize item service with database session.

        Args:
            session: SQLModel database session
        """
        super().__init__()
        self.session = session
        self.item_repository = ItemRepository(session)
        self.request_repository = ItemRequestRepository(session)
        self.booking_repository = BookingRepository(session)
        self.comment_repository = CommentRepository(session)
        self.user_service = UserService(session)

    async def create_item(self, item_data: ItemCreate, owner_id: int) -> ItemResponse:
        """Create a new item for the specified owner.

        Args:
            item_data: Item creation data
            owner_id: ID of the user who will own the item

        Returns:
            Created item response

        Raises:
            UserNotFoundServiceError: If the owner does not exist
            ItemRequestNotFoundServiceError: If the answered request does not exist
            DatabaseServiceError: If the operation fails
        """
        self.user_service.check_user_exists(owner_id)

        try:
            if item_data.request_id is not None:
                if not self.request_repository.get_by_id(item_data.request_id):
                    raise ItemRequestNotFoundServiceError(item_data.request_id)

            item = self.item_repository.save(
                Item(
                    name=item_data.name,
                    description=item_data.description,
                    available=item_data.available,
                    owner_id=owner_id,
                    request_id=item_data.request_id,
                )
            )
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to create item: {e.message}", original_error=e
            ) from e

        logger.info(
            f"Item {item.id} created for user {owner_id}",
            extra={"user_id": owner_id, "item_id": item.id, "item_request_id": item.request_id},
        )
        return self._convert_to_response(item)

    async def update_item(
        self, item_id: int, owner_id: int, item_data: ItemUpdate
    ) -> ItemResponse:
        """Partially update an item.

        Fields absent from the update keep their stored value.

        Raises:
            ItemNotFoundServiceError: If the item does not exist
            ItemAccessDeniedServiceError: If the caller is not the owner
            DatabaseServiceError: If the operation fails
        """
        try:
            item = self._get_owned_item(item_id, owner_id, action="update")

            update_fields = item_data.model_dump(exclude_unset=True)
            for key, value in update_fields.items():
                if value is not None:
                    setattr(item, key, value)

            item = self.item_repository.save(item)
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to update item: {e.message}", original_error=e
            ) from e

        logger.info(f"Item {item_id} updated", extra={"item_id": item_id})
        return self._convert_to_response(item)

    async def get_item(self, item_id: int, user_id: int) -> ItemWithBookings:
        """Get an item with its comments.

        The last and next bookings are filled in only for the owner.

        Raises:
            ItemNotFoundServiceError: If the item does not exist
            DatabaseServiceError: If the operation fails
        """
        try:
            item = self.item_repository.get_by_id(item_id)
            if not item:
                raise ItemNotFoundServiceError(item_id)
            return self._convert_with_bookings(item, include_bookings=item.owner_id == user_id)
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to get item: {e.message}", original_error=e
            ) from e

    async def get_items_for_owner(
        self, owner_id: int, from_: int = 0, size: int = 10
    ) -> list[ItemWithBookings]:
        """Get a page of an owner's items ordered by ID.

        Raises:
            UserNotFoundServiceError: If the owner does not exist
            DatabaseServiceError: If the operation fails
        """
        self.user_service.check_user_exists(owner_id)

        try:
            items = self.item_repository.find_by_owner(
                owner_id, skip=page_offset(from_, size), limit=size
            )
            return [self._convert_with_bookings(item, include_bookings=True) for item in items]
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to get items: {e.message}", original_error=e
            ) from e

    async def search_items(
        self, text: str, from_: int = 0, size: int = 10
    ) -> list[ItemResponse]:
        """Search available items by name or description.

        Blank search text matches nothing.

        Raises:
            DatabaseServiceError: If the operation fails
        """
        if not text or not text.strip():
            return []

        try:
            items = self.item_repository.search_available(
                text.strip(), skip=page_offset(from_, size), limit=size
            )
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to search items: {e.message}", original_error=e
            ) from e

        return [self._convert_to_response(item) for item in items]

    async def delete_item(self, item_id: int, owner_id: int) -> None:
        """Delete an item together with its bookings and comments.

        Raises:
            ItemNotFoundServiceError: If the item does not exist
            ItemAccessDeniedServiceError: If the caller is not the owner
            DatabaseServiceError: If the operation fails
        """
        try:
            item = self._get_owned_item(item_id, owner_id, action="delete")
            self.item_repository.delete(item)
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to delete item: {e.message}", original_error=e
            ) from e

        logger.info(f"Item {item_id} deleted", extra={"item_id": item_id})

    async def add_comment(
        self, item_id: int, author_id: int, comment_data: CommentCreate
    ) -> CommentResponse:
        """Leave a comment on an item.

        Only a user whose approved booking of the item has already ended may
        comment.

        Raises:
            UserNotFoundServiceError: If the author does not exist
            ItemNotFoundServiceError: If the item does not exist
            CommentNotAllowedServiceError: If the author has no finished booking
            DatabaseServiceError: If the operation fails
        """
        self.user_service.check_user_exists(author_id)

        try:
            if not self.item_repository.get_by_id(item_id):
                raise ItemNotFoundServiceError(item_id)

            if not self.booking_repository.has_finished_booking(
                item_id, author_id, datetime.now()
            ):
                raise CommentNotAllowedServiceError(item_id, author_id)

            comment = self.comment_repository.save(
                Comment(text=comment_data.text, item_id=item_id, author_id=author_id)
            )
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to add comment: {e.message}", original_error=e
            ) from e

        logger.info(
            f"Comment {comment.id} added to item {item_id}",
            extra={"item_id": item_id, "user_id": author_id},
        )
        return self._convert_comment(comment)

    def _get_owned_item(self, item_id: int, user_id: int, action: str) -> Item:
        item = self.item_repository.get_by_id(item_id)
        if not item:
            raise ItemNotFoundServiceError(item_id)
        if item.owner_id != user_id:
            self.log_authorization_failure(
                user_id=user_id,
                resource=f"item:{item_id}",
                action=action,
                reason="not the owner",
            )
            raise ItemAccessDeniedServiceError(item_id, user_id)
        return item

    def _convert_to_response(self, item: Item) -> ItemResponse:
        """Convert Item model to ItemResponse schema."""
        return ItemResponse(
            id=item.id,
            name=item.name,
            description=item.description,
            available=item.available,
            request_id=item.request_id,
        )

    def _convert_with_bookings(self, item: Item, include_bookings: bool) -> ItemWithBookings:
        last_booking = None
        next_booking = None
        if include_bookings:
            now = datetime.now()
            last_booking = self._convert_booking_short(
                self.booking_repository.find_last_for_item(item.id, now)
            )
            next_booking = self._convert_booking_short(
                self.booking_repository.find_next_for_item(item.id, now)
            )

        return ItemWithBookings(
            **self._convert_to_response(item).model_dump(),
            last_booking=last_booking,
            next_booking=next_booking,
            comments=[self._convert_comment(comment) for comment in item.comments],
        )

    @staticmethod
    def _convert_booking_short(booking: Booking | None) -> BookingShort | None:
        if booking is None:
            return None
        return BookingShort(
            id=booking.id,
            booker_id=booking.booker_id,
            start=booking.start,
            end=booking.end,
        )

    @staticmethod
    def _convert_comment(comment: Comment) -> CommentResponse:
        return CommentResponse(
            id=comment.id,
            text=comment.text,
            author_name=comment.author.name,
            created=comment.created,
        )
