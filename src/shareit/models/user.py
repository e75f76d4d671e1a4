"""User model.

This module defines the User SQLModel for marketplace participants. A user
owns items, makes item requests, books other users' items, and writes comments.
"""

from typing import List, Optional, TYPE_CHECKING

from sqlmodel import Field, Index, Relationship, SQLModel

if TYPE_CHECKING:
    from .booking import Booking
    from .comment import Comment
    from .item import Item
    from .item_request import ItemRequest


class User(SQLModel, table=True):
    """User model for database storage.

    Attributes:
        id: Primary key (auto-generated)
        name: User's display name
        email: Unique email address
        items: Items owned by the user
        requests: Item requests made by the user
        bookings: Bookings made by the user
        comments: Comments written by the user
    """

    __tablename__ = "users"

    id: Optional[int] = Field(
        default=None,
        primary_key=True,
        description="Primary key (auto-generated)"
    )
    name: str = Field(
        max_length=255,
        description="User's name"
    )
    email: str = Field(
        max_length=512,
        unique=True,
        description="User's email address (unique)"
    )

    items: List["Item"] = Relationship(
        back_populates="owner",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )
    requests: List["ItemRequest"] = Relationship(
        back_populates="requester",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )
    bookings: List["Booking"] = Relationship(
        back_populates="booker",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )
    comments: List["Comment"] = Relationship(
        back_populates="author",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )

    __table_args__ = (
        Index("idx_users_name", "name"),
    )
