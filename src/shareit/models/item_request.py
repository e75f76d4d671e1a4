"""Item request model.

A user who cannot find an item publishes a request describing it; other users
answer by creating items linked to the request.
"""

from datetime import datetime
from typing import List, Optional, TYPE_CHECKING

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

if TYPE_CHECKING:
    from .item import Item
    from .user import User


class ItemRequest(SQLModel, table=True):
    """Item request model for database storage.

    Attributes:
        id: Primary key (auto-generated)
        description: What the requester is looking for
        requester_id: Foreign key to the requesting user
        created: Timestamp when the request was made
        items: Items offered in answer to the request
    """

    __tablename__ = "requests"

    id: Optional[int] = Field(
        default=None,
        primary_key=True,
        description="Primary key (auto-generated)"
    )
    description: str = Field(
        max_length=1000,
        description="Description of the wanted item"
    )
    requester_id: int = Field(
        foreign_key="users.id",
        description="ID of the user who made the request",
    )
    created: datetime = Field(
        default_factory=datetime.now,
        sa_column=Column(DateTime(timezone=False), nullable=False),
        description="Timestamp when the request was made",
    )

    requester: Optional["User"] = Relationship(back_populates="requests")
    items: List["Item"] = Relationship(
        back_populates="request",
        sa_relationship_kwargs={"order_by": "Item.id"}
    )

    __table_args__ = (
        Index("idx_requests_requester_created", "requester_id", "created"),
    )
