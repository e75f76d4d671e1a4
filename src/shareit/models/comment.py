"""Comment model for item feedback left by past bookers."""

from datetime import datetime
from typing import Optional, TYPE_CHECKING

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

if TYPE_CHECKING:
    from .item import Item
    from .user import User


class Comment(SQLModel, table=True):
    """Comment model for database storage."""

    __tablename__ = "comments"

    id: Optional[int] = Field(
        default=None,
        primary_key=True,
        description="Primary key (auto-generated)"
    )
    text: str = Field(max_length=2000, description="Comment text")
    item_id: int = Field(foreign_key="items.id", description="ID of the item")
    author_id: int = Field(foreign_key="users.id", description="ID of the author")
    created: datetime = Field(
        default_factory=datetime.now,
        sa_column=Column(DateTime(timezone=False), nullable=False),
        description="Timestamp when the comment was written",
    )

    item: Optional["Item"] = Relationship(back_populates="comments")
    author: Optional["User"] = Relationship(back_populates="comments")

    __table_args__ = (
        Index("idx_comments_item_id", "item_id"),
    )
