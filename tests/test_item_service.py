"""Unit tests for ItemService.

This module contains unit tests for the ItemService class,
including item management operations, comments and error handling.
"""

from unittest.mock import Mock

import pytest
from sqlmodel import Session

from src.shareit.exceptions import DatabaseServiceError
from src.shareit.models import BookingStatus, Item, ItemRequest, User
from src.shareit.repositories.base import RepositoryError
from src.shareit.repositories.item_repository import ItemRepository
from src.shareit.schemas.item_schemas import CommentCreate, ItemCreate, ItemUpdate
from src.shareit.services.item_request_service import ItemRequestNotFoundServiceError
from src.shareit.services.item_service import (
    CommentNotAllowedServiceError,
    ItemAccessDeniedServiceError,
    ItemNotFoundServiceError,
    ItemService,
)
from src.shareit.services.user_service import UserNotFoundServiceError


class TestItemServiceWithMocks:
    """Test cases for ItemService with a mocked repository."""

    @pytest.fixture
    def mock_item_repository(self) -> Mock:
        """Create mock item repository."""
        return Mock(spec=ItemRepository)

    @pytest.fixture
    def item_service(self, mock_item_repository: Mock) -> ItemService:
        """Create ItemService instance wired to the mock repository."""
        service = ItemService(Mock(spec=Session))
        service.item_repository = mock_item_repository
        return service

    @pytest.mark.asyncio
    async def test_search_blank_text_skips_database(
        self, item_service: ItemService, mock_item_repository: Mock
    ):
        """Test that blank search text returns nothing without a query."""
        assert await item_service.search_items("   ") == []
        mock_item_repository.search_available.assert_not_called()

    @pytest.mark.asyncio
    async def test_search_converts_from_to_offset(
        self, item_service: ItemService, mock_item_repository: Mock
    ):
        """Test that from/size become a page-aligned offset."""
        mock_item_repository.search_available.return_value = []

        await item_service.search_items(" drill ", from_=5, size=2)

        mock_item_repository.search_available.assert_called_once_with(
            "drill", skip=4, limit=2
        )

    @pytest.mark.asyncio
    async def test_search_repository_error(
        self, item_service: ItemService, mock_item_repository: Mock
    ):
        """Test repository failures surface as database errors."""
        mock_item_repository.search_available.side_effect = RepositoryError("boom")

        with pytest.raises(DatabaseServiceError):
            await item_service.search_items("drill")

    @pytest.mark.asyncio
    async def test_update_item_access_denied(
        self, item_service: ItemService, mock_item_repository: Mock
    ):
        """Test that only the owner may update an item."""
        mock_item_repository.get_by_id.return_value = Item(
            id=1, name="Drill", description="Drill", available=True, owner_id=1
        )

        with pytest.raises(ItemAccessDeniedServiceError) as exc_info:
            await item_service.update_item(1, 2, ItemUpdate(name="Mine now"))

        assert exc_info.value.status_code == 403
        mock_item_repository.save.assert_not_called()


class TestItemServiceWithDatabase:
    """Test cases for ItemService against the test database."""

    @pytest.fixture
    def item_service(self, test_session: Session) -> ItemService:
        """Create ItemService instance for testing."""
        return ItemService(test_session)

    @pytest.mark.asyncio
    async def test_create_item(self, item_service: ItemService, owner: User):
        """Test offering an item."""
        result = await item_service.create_item(
            ItemCreate(name="Tent", description="Two person tent", available=True), owner.id
        )

        assert result.id is not None
        assert result.available is True
        assert result.request_id is None

    @pytest.mark.asyncio
    async def test_create_item_for_request(
        self, item_service: ItemService, owner: User, item_request: ItemRequest
    ):
        """Test offering an item in answer to a request."""
        result = await item_service.create_item(
            ItemCreate(
                name="Tent",
                description="Two person tent",
                available=True,
                request_id=item_request.id,
            ),
            owner.id,
        )

        assert result.request_id == item_request.id

    @pytest.mark.asyncio
    async def test_create_item_unknown_request(self, item_service: ItemService, owner: User):
        """Test offering an item for a request that does not exist."""
        with pytest.raises(ItemRequestNotFoundServiceError):
            await item_service.create_item(
                ItemCreate(name="Tent", description="Tent", available=True, request_id=99),
                owner.id,
            )

    @pytest.mark.asyncio
    async def test_create_item_unknown_owner(self, item_service: ItemService):
        """Test offering an item as an unknown user."""
        with pytest.raises(UserNotFoundServiceError):
            await item_service.create_item(
                ItemCreate(name="Tent", description="Tent", available=True), 999
            )

    @pytest.mark.asyncio
    async def test_update_item_partial(
        self, item_service: ItemService, owner: User, test_item: Item
    ):
        """Test that omitted fields keep their value."""
        result = await item_service.update_item(
            test_item.id, owner.id, ItemUpdate(available=False)
        )

        assert result.available is False
        assert result.name == "Cordless drill"
        assert result.description == "18V drill with two batteries"

    @pytest.mark.asyncio
    async def test_update_item_not_found(self, item_service: ItemService, owner: User):
        """Test updating an unknown item."""
        with pytest.raises(ItemNotFoundServiceError):
            await item_service.update_item(999, owner.id, ItemUpdate(name="x"))

    @pytest.mark.asyncio
    async def test_get_item_owner_sees_bookings(
        self,
        item_service: ItemService,
        owner: User,
        booker: User,
        test_item: Item,
        booking_factory,
    ):
        """Test the owner view carries last and next approved bookings."""
        last = booking_factory.past(test_item, booker, status=BookingStatus.APPROVED)
        upcoming = booking_factory.future(test_item, booker, status=BookingStatus.APPROVED)

        result = await item_service.get_item(test_item.id, owner.id)

        assert result.last_booking.id == last.id
        assert result.last_booking.booker_id == booker.id
        assert result.next_booking.id == upcoming.id

    @pytest.mark.asyncio
    async def test_get_item_others_see_no_bookings(
        self,
        item_service: ItemService,
        booker: User,
        test_item: Item,
        booking_factory,
    ):
        """Test that non-owners never see booking summaries."""
        booking_factory.past(test_item, booker, status=BookingStatus.APPROVED)
        booking_factory.future(test_item, booker, status=BookingStatus.APPROVED)

        result = await item_service.get_item(test_item.id, booker.id)

        assert result.last_booking is None
        assert result.next_booking is None

    @pytest.mark.asyncio
    async def test_get_items_for_owner(
        self, item_service: ItemService, owner: User, test_item: Item, unavailable_item: Item
    ):
        """Test owner listing includes every owned item in ID order."""
        result = await item_service.get_items_for_owner(owner.id)

        assert [item.id for item in result] == [test_item.id, unavailable_item.id]

    @pytest.mark.asyncio
    async def test_delete_item(
        self, item_service: ItemService, test_session: Session, owner: User, test_item: Item
    ):
        """Test deleting an owned item."""
        item_id = test_item.id
        await item_service.delete_item(item_id, owner.id)

        assert test_session.get(Item, item_id) is None

    @pytest.mark.asyncio
    async def test_delete_item_access_denied(
        self, item_service: ItemService, booker: User, test_item: Item
    ):
        """Test that only the owner may delete an item."""
        with pytest.raises(ItemAccessDeniedServiceError):
            await item_service.delete_item(test_item.id, booker.id)

    @pytest.mark.asyncio
    async def test_add_comment_after_finished_booking(
        self,
        item_service: ItemService,
        booker: User,
        test_item: Item,
        booking_factory,
    ):
        """Test a past booker may comment and the comment shows on the item."""
        booking_factory.past(test_item, booker, status=BookingStatus.APPROVED)

        comment = await item_service.add_comment(
            test_item.id, booker.id, CommentCreate(text="  Solid drill  ")
        )

        assert comment.text == "Solid drill"
        assert comment.author_name == booker.name

        item = await item_service.get_item(test_item.id, booker.id)
        assert [c.id for c in item.comments] == [comment.id]

    @pytest.mark.asyncio
    async def test_add_comment_without_finished_booking(
        self,
        item_service: ItemService,
        booker: User,
        test_item: Item,
        booking_factory,
    ):
        """Test that a booking still in progress does not allow comments."""
        booking_factory.current(test_item, booker, status=BookingStatus.APPROVED)

        with pytest.raises(CommentNotAllowedServiceError) as exc_info:
            await item_service.add_comment(test_item.id, booker.id, CommentCreate(text="Hi"))

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_add_comment_unknown_item(self, item_service: ItemService, booker: User):
        """Test commenting on an unknown item."""
        with pytest.raises(ItemNotFoundServiceError):
            await item_service.add_comment(999, booker.id, CommentCreate(text="Hi"))
