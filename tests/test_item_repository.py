"""Unit tests for ItemRepository and ItemRequestRepository."""

from datetime import datetime, timedelta
from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from src.shareit.models import Item, ItemRequest, User
from src.shareit.repositories.base import RepositoryError
from src.shareit.repositories.item_repository import ItemRepository
from src.shareit.repositories.item_request_repository import ItemRequestRepository


class TestItemRepository:
    """Test cases for ItemRepository."""

    @pytest.fixture
    def item_repository(self, test_session: Session) -> ItemRepository:
        """Create ItemRepository instance for testing."""
        return ItemRepository(test_session)

    @pytest.fixture
    def owner_items(self, test_session: Session, owner: User) -> list[Item]:
        """Create five items for the owner."""
        items = [
            Item(name=f"Tool {i}", description=f"Tool number {i}", owner_id=owner.id)
            for i in range(5)
        ]
        for item in items:
            test_session.add(item)
        test_session.commit()
        for item in items:
            test_session.refresh(item)
        return items

    def test_find_by_owner_ordered_by_id(
        self, item_repository: ItemRepository, owner: User, owner_items: list[Item]
    ):
        """Test owner listing is ordered by ID."""
        result = item_repository.find_by_owner(owner.id)

        assert [item.id for item in result] == [item.id for item in owner_items]

    def test_find_by_owner_paginated(
        self, item_repository: ItemRepository, owner: User, owner_items: list[Item]
    ):
        """Test owner listing honours skip and limit."""
        result = item_repository.find_by_owner(owner.id, skip=2, limit=2)

        assert [item.id for item in result] == [owner_items[2].id, owner_items[3].id]

    def test_find_by_owner_other_user(
        self, item_repository: ItemRepository, booker: User, owner_items: list[Item]
    ):
        """Test that other users' items are not listed."""
        assert item_repository.find_by_owner(booker.id) == []

    def test_search_is_case_insensitive(
        self, item_repository: ItemRepository, test_item: Item
    ):
        """Test search over name and description ignores case."""
        assert [i.id for i in item_repository.search_available("DRILL")] == [test_item.id]
        assert [i.id for i in item_repository.search_available("batteries")] == [test_item.id]

    def test_search_skips_unavailable(
        self,
        item_repository: ItemRepository,
        test_item: Item,
        unavailable_item: Item,
    ):
        """Test that unavailable items never match."""
        assert item_repository.search_available("ladder") == []

    def test_search_database_error(self, item_repository: ItemRepository):
        """Test search with database error."""
        with patch.object(item_repository.session, "exec") as mock_exec:
            mock_exec.side_effect = SQLAlchemyError("Database error")

            with pytest.raises(RepositoryError) as exc_info:
                item_repository.search_available("drill")

            assert "searching items" in str(exc_info.value)


class TestItemRequestRepository:
    """Test cases for ItemRequestRepository."""

    @pytest.fixture
    def request_repository(self, test_session: Session) -> ItemRequestRepository:
        """Create ItemRequestRepository instance for testing."""
        return ItemRequestRepository(test_session)

    @pytest.fixture
    def requests(self, test_session: Session, owner: User, booker: User) -> list[ItemRequest]:
        """Create requests from both users with distinct timestamps."""
        now = datetime.now()
        requests = [
            ItemRequest(description="old", requester_id=booker.id, created=now - timedelta(days=2)),
            ItemRequest(description="new", requester_id=booker.id, created=now),
            ItemRequest(description="owner's", requester_id=owner.id, created=now - timedelta(days=1)),
        ]
        for request in requests:
            test_session.add(request)
        test_session.commit()
        for request in requests:
            test_session.refresh(request)
        return requests

    def test_find_by_requester_newest_first(
        self,
        request_repository: ItemRequestRepository,
        booker: User,
        requests: list[ItemRequest],
    ):
        """Test own requests are ordered by creation time descending."""
        result = request_repository.find_by_requester(booker.id)

        assert [r.description for r in result] == ["new", "old"]

    def test_find_by_other_users(
        self,
        request_repository: ItemRequestRepository,
        owner: User,
        requests: list[ItemRequest],
    ):
        """Test that the caller's own requests are excluded."""
        result = request_repository.find_by_other_users(owner.id)

        assert [r.description for r in result] == ["new", "old"]

    def test_find_by_other_users_paginated(
        self,
        request_repository: ItemRequestRepository,
        owner: User,
        requests: list[ItemRequest],
    ):
        """Test other users' requests honour skip and limit."""
        result = request_repository.find_by_other_users(owner.id, skip=1, limit=1)

        assert [r.description for r in result] == ["old"]
