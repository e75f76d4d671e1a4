"""Item request schemas."""

from datetime import datetime

from pydantic import Field, validator

from .base import CamelModel, clean_text


class ItemRequestCreate(CamelModel):
    """Schema for publishing a request for an item."""

    description: str = Field(
        ...,
        min_length=1,
        max_length=1000,
        description="What the requester is looking for",
        examples=["Need a ladder for the weekend"],
    )

    @validator("description")
    def validate_description(cls, v: str) -> str:
        """Validate request description."""
        return clean_text(v, "Request description")


class RequestItemSummary(CamelModel):
    """Item offered in answer to a request."""

    id: int = Field(..., description="Item ID")
    name: str = Field(..., description="Item name")
    description: str = Field(..., description="Item description")
    available: bool = Field(..., description="Whether the item can be booked")
    request_id: int = Field(..., description="ID of the answered request")
    owner_id: int = Field(..., description="ID of the item owner")


class ItemRequestResponse(CamelModel):
    """Schema for item request API responses."""

    id: int = Field(..., description="Request ID")
    description: str = Field(..., description="What the requester is looking for")
    created: datetime = Field(..., description="Timestamp when the request was made")
    items: list[RequestItemSummary] = Field(
        default_factory=list, description="Items offered in answer"
    )
