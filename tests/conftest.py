"""Test configuration and fixtures.

This module provides test configuration, database setup, fixtures,
and test data factories for testing the ShareIt server.
"""

import os

# Point the application at a throwaway database before it is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "testing")

from datetime import datetime, timedelta
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from src.shareit.config import Settings
from src.shareit.database import get_session
from src.shareit.main import app
from src.shareit.models import Booking, BookingStatus, Comment, Item, ItemRequest, User


# Test database configuration
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings with test database configuration."""
    return Settings(
        database_url=TEST_DATABASE_URL,
        debug=True,
        log_level="DEBUG",
        environment="testing",
    )


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with in-memory SQLite."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False  # Set to True for SQL debugging
    )

    SQLModel.metadata.create_all(engine)

    yield engine

    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session(test_engine) -> Generator[Session, None, None]:
    """Create test database session."""
    with Session(test_engine) as session:
        yield session


@pytest.fixture(scope="function")
def client(test_session: Session) -> TestClient:
    """Create test client with test database session."""

    def get_test_session():
        return test_session

    # Override the database session dependency
    app.dependency_overrides[get_session] = get_test_session

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def _persist(session: Session, *entities):
    for entity in entities:
        session.add(entity)
    session.commit()
    for entity in entities:
        session.refresh(entity)


@pytest.fixture(scope="function")
def owner(test_session: Session) -> User:
    """User who owns the test item."""
    user = User(name="Olivia Owner", email="owner@example.com")
    _persist(test_session, user)
    return user


@pytest.fixture(scope="function")
def booker(test_session: Session) -> User:
    """User who books the test item."""
    user = User(name="Ben Booker", email="booker@example.com")
    _persist(test_session, user)
    return user


@pytest.fixture(scope="function")
def test_item(test_session: Session, owner: User) -> Item:
    """Available item owned by ``owner``."""
    item = Item(
        name="Cordless drill",
        description="18V drill with two batteries",
        available=True,
        owner_id=owner.id,
    )
    _persist(test_session, item)
    return item


@pytest.fixture(scope="function")
def unavailable_item(test_session: Session, owner: User) -> Item:
    """Item owned by ``owner`` that cannot be booked."""
    item = Item(
        name="Ladder",
        description="Aluminium ladder, currently broken",
        available=False,
        owner_id=owner.id,
    )
    _persist(test_session, item)
    return item


@pytest.fixture(scope="function")
def item_request(test_session: Session, booker: User) -> ItemRequest:
    """Request made by ``booker``."""
    request = ItemRequest(description="Need a tent for the weekend", requester_id=booker.id)
    _persist(test_session, request)
    return request


class BookingFactory:
    """Factory for bookings relative to the current time."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(
        self,
        item: Item,
        booker: User,
        start_offset: timedelta,
        end_offset: timedelta,
        status: BookingStatus = BookingStatus.WAITING,
    ) -> Booking:
        now = datetime.now()
        booking = Booking(
            start=now + start_offset,
            end=now + end_offset,
            item_id=item.id,
            booker_id=booker.id,
            status=status,
        )
        _persist(self.session, booking)
        return booking

    def past(self, item: Item, booker: User, **kwargs) -> Booking:
        return self.create(item, booker, timedelta(days=-3), timedelta(days=-2), **kwargs)

    def current(self, item: Item, booker: User, **kwargs) -> Booking:
        return self.create(item, booker, timedelta(days=-1), timedelta(days=1), **kwargs)

    def future(self, item: Item, booker: User, **kwargs) -> Booking:
        return self.create(item, booker, timedelta(days=2), timedelta(days=3), **kwargs)


@pytest.fixture(scope="function")
def booking_factory(test_session: Session) -> BookingFactory:
    """Provide booking factory."""
    return BookingFactory(test_session)


@pytest.fixture(scope="function")
def test_comment(test_session: Session, test_item: Item, booker: User) -> Comment:
    """Comment left by ``booker`` on ``test_item``."""
    comment = Comment(text="Worked great", item_id=test_item.id, author_id=booker.id)
    _persist(test_session, comment)
    return comment


def sharer(user_id: int) -> dict[str, str]:
    """Build the identity header for a user."""
    return {"X-Sharer-User-Id": str(user_id)}


@pytest.fixture(scope="function")
def owner_headers(owner: User) -> dict[str, str]:
    """Identity headers for ``owner``."""
    return sharer(owner.id)


@pytest.fixture(scope="function")
def booker_headers(booker: User) -> dict[str, str]:
    """Identity headers for ``booker``."""
    return sharer(booker.id)
