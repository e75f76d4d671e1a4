"""Item schemas for CRUD operations and API responses.

This module defines Pydantic schemas for item-related API operations,
including creation, partial updates, owner views with booking summaries,
and comments.
"""

from datetime import datetime

from pydantic import Field, validator

from .base import CamelModel, clean_text


class ItemCreate(CamelModel):
    """Schema for offering a new item.

    ``requestId`` links the item to the item request it answers.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Item name (required, 1-255 characters)",
        examples=["Cordless drill"],
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=1000,
        description="Item description (required, max 1000 characters)",
        examples=["18V drill with two batteries"],
    )
    available: bool = Field(
        ..., description="Whether the item can be booked", examples=[True]
    )
    request_id: int | None = Field(
        default=None, gt=0, description="ID of the request this item answers"
    )

    @validator("name")
    def validate_name(cls, v: str) -> str:
        """Validate item name."""
        return clean_text(v, "Item name")

    @validator("description")
    def validate_description(cls, v: str) -> str:
        """Validate item description."""
        return clean_text(v, "Item description")


class ItemUpdate(CamelModel):
    """Schema for updating item information.

    All fields are optional to support partial updates.
    """

    name: str | None = Field(
        default=None, min_length=1, max_length=255, description="Updated item name"
    )
    description: str | None = Field(
        default=None, max_length=1000, description="Updated item description"
    )
    available: bool | None = Field(
        default=None, description="Updated availability"
    )

    @validator("name")
    def validate_name(cls, v: str | None) -> str | None:
        """Validate item name for updates."""
        if v is not None:
            return clean_text(v, "Item name")
        return v

    @validator("description")
    def validate_description(cls, v: str | None) -> str | None:
        """Validate item description for updates."""
        if v is not None:
            return clean_text(v, "Item description")
        return v


class ItemResponse(CamelModel):
    """Schema for item API responses."""

    id: int = Field(..., gt=0, description="Item ID", examples=[7])
    name: str = Field(..., description="Item name", examples=["Cordless drill"])
    description: str = Field(..., description="Item description")
    available: bool = Field(..., description="Whether the item can be booked")
    request_id: int | None = Field(
        default=None, description="ID of the request this item answers"
    )


class BookingShort(CamelModel):
    """Booking summary shown to an item owner."""

    id: int = Field(..., description="Booking ID")
    booker_id: int = Field(..., description="ID of the booker")
    start: datetime = Field(..., description="Start of the rental period")
    end: datetime = Field(..., description="End of the rental period")


class CommentCreate(CamelModel):
    """Schema for leaving a comment on an item."""

    text: str = Field(
        ...,
        min_length=1,
        max_length=2000,
        description="Comment text",
        examples=["Worked great, thanks!"],
    )

    @validator("text")
    def validate_text(cls, v: str) -> str:
        """Validate comment text."""
        if not v or v.isspace():
            raise ValueError("Comment text cannot be empty or whitespace only")
        return v.strip()


class CommentResponse(CamelModel):
    """Schema for comment API responses."""

    id: int = Field(..., description="Comment ID")
    text: str = Field(..., description="Comment text")
    author_name: str = Field(..., description="Name of the comment author")
    created: datetime = Field(..., description="Timestamp when the comment was written")


class ItemWithBookings(ItemResponse):
    """Item response with comments and, for the owner, booking summaries.

    ``lastBooking`` and ``nextBooking`` stay null for anyone but the owner.
    """

    last_booking: BookingShort | None = Field(
        default=None, description="Most recent approved booking that has started"
    )
    next_booking: BookingShort | None = Field(
        default=None, description="Soonest approved booking that has not started"
    )
    comments: list[CommentResponse] = Field(
        default_factory=list, description="Comments left by past bookers"
    )
