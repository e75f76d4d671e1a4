"""Item model with owner and request relationships.

This module defines the Item SQLModel for things users offer for rent.
"""

from typing import List, Optional, TYPE_CHECKING

from sqlmodel import Field, Index, Relationship, SQLModel

if TYPE_CHECKING:
    from .booking import Booking
    from .comment import Comment
    from .item_request import ItemRequest
    from .user import User


class Item(SQLModel, table=True):
    """Item model for database storage.

    Each item belongs to exactly one owner and may have been created in
    answer to an item request.

    Attributes:
        id: Primary key (auto-generated)
        name: Item name
        description: Item description
        available: Whether the item can currently be booked
        owner_id: Foreign key to the owning user
        request_id: Optional foreign key to the originating item request
    """

    __tablename__ = "items"

    id: Optional[int] = Field(
        default=None,
        primary_key=True,
        description="Primary key (auto-generated)"
    )
    name: str = Field(
        max_length=255,
        description="Item name"
    )
    description: str = Field(
        max_length=1000,
        description="Item description"
    )
    available: bool = Field(
        default=True,
        description="Whether the item can be booked"
    )
    owner_id: int = Field(
        foreign_key="users.id",
        description="ID of the user who owns this item",
    )
    request_id: Optional[int] = Field(
        default=None,
        foreign_key="requests.id",
        description="ID of the request this item answers",
    )

    owner: Optional["User"] = Relationship(back_populates="items")
    request: Optional["ItemRequest"] = Relationship(back_populates="items")
    bookings: List["Booking"] = Relationship(
        back_populates="item",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )
    comments: List["Comment"] = Relationship(
        back_populates="item",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "Comment.id",
        }
    )

    __table_args__ = (
        Index("idx_items_owner_id", "owner_id"),
        Index("idx_items_request_id", "request_id"),
        Index("idx_items_available", "available"),
    )
