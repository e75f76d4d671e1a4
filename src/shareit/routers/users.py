"""Users router for user management.

User management endpoints do not require the ``X-Sharer-User-Id`` header.
"""

from fastapi import APIRouter, status

from ..dependencies import UserServiceDep
from ..schemas.user_schemas import UserCreate, UserResponse, UserUpdate

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={
        404: {"description": "User not found"},
        409: {"description": "Email already registered"},
        500: {"description": "Internal server error"},
    },
)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register user",
)
async def create_user(user_data: UserCreate, user_service: UserServiceDep) -> UserResponse:
    """Register a new user.

    Example:
        POST /users
        {"name": "Jane Doe", "email": "jane@example.com"}
    """
    return await user_service.create_user(user_data)


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update user",
    description="Partially update a user; omitted fields keep their value",
)
async def update_user(
    user_id: int, user_data: UserUpdate, user_service: UserServiceDep
) -> UserResponse:
    return await user_service.update_user(user_id, user_data)


@router.get("/{user_id}", response_model=UserResponse, summary="Get user")
async def get_user(user_id: int, user_service: UserServiceDep) -> UserResponse:
    return await user_service.get_user(user_id)


@router.get("", response_model=list[UserResponse], summary="List users")
async def get_users(user_service: UserServiceDep) -> list[UserResponse]:
    """List every user ordered by ID."""
    return await user_service.get_all_users()


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user",
    description="Delete a user together with everything they own",
)
async def delete_user(user_id: int, user_service: UserServiceDep) -> None:
    await user_service.delete_user(user_id)
