"""Booking model and status enumeration."""

from datetime import datetime
from enum import Enum
from typing import Optional, TYPE_CHECKING

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

if TYPE_CHECKING:
    from .item import Item
    from .user import User


class BookingStatus(str, Enum):
    """Lifecycle status of a booking."""

    WAITING = "WAITING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELED = "CANCELED"


class Booking(SQLModel, table=True):
    """Booking model for database storage.

    A booking reserves an item for the period between ``start`` and ``end``.
    New bookings are WAITING until the item owner approves or rejects them.

    Attributes:
        id: Primary key (auto-generated)
        start: Start of the rental period
        end: End of the rental period
        item_id: Foreign key to the booked item
        booker_id: Foreign key to the booking user
        status: Current booking status
    """

    __tablename__ = "bookings"

    id: Optional[int] = Field(
        default=None,
        primary_key=True,
        description="Primary key (auto-generated)"
    )
    # Naive local time, see BookingCreate
    start: datetime = Field(
        sa_column=Column(DateTime(timezone=False), nullable=False),
        description="Start of the rental period",
    )
    end: datetime = Field(
        sa_column=Column(DateTime(timezone=False), nullable=False),
        description="End of the rental period",
    )
    item_id: int = Field(
        foreign_key="items.id",
        description="ID of the booked item",
    )
    booker_id: int = Field(
        foreign_key="users.id",
        description="ID of the user who made the booking",
    )
    status: BookingStatus = Field(
        default=BookingStatus.WAITING,
        description="Current booking status",
    )

    item: Optional["Item"] = Relationship(back_populates="bookings")
    booker: Optional["User"] = Relationship(back_populates="bookings")

    __table_args__ = (
        Index("idx_bookings_booker_start", "booker_id", "start"),
        Index("idx_bookings_item_start", "item_id", "start"),
        Index("idx_bookings_status", "status"),
    )
