"""User schemas for CRUD operations and API responses."""

from pydantic import EmailStr, Field, validator

from .base import CamelModel, clean_text


class UserCreate(CamelModel):
    """Schema for registering a new user."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="User's name (required, 1-255 characters)",
        examples=["Jane Doe"],
    )
    email: EmailStr = Field(
        ...,
        max_length=512,
        description="Email address (required, unique)",
        examples=["jane@example.com"],
    )

    @validator("name")
    def validate_name(cls, v: str) -> str:
        """Validate user name."""
        return clean_text(v, "User name")


class UserUpdate(CamelModel):
    """Schema for partially updating a user.

    Fields left out of the request body keep their stored value.
    """

    name: str | None = Field(
        default=None,
        min_length=1,
        max_length=255,
        description="Updated name",
    )
    email: EmailStr | None = Field(
        default=None,
        max_length=512,
        description="Updated email address",
    )

    @validator("name")
    def validate_name(cls, v: str | None) -> str | None:
        """Validate user name for updates."""
        if v is not None:
            return clean_text(v, "User name")
        return v


class UserResponse(CamelModel):
    """Schema for user API responses."""

    id: int = Field(..., gt=0, description="User ID", examples=[1])
    name: str = Field(..., description="User's name", examples=["Jane Doe"])
    email: str = Field(
        ..., description="Email address", examples=["jane@example.com"]
    )
