"""Items router for item management, search and comments.

This module provides item endpoints: owner-scoped create, update and delete,
item views that include booking summaries for the owner, text search over
available items, and comments from past bookers.
"""

from typing import Annotated

from fastapi import APIRouter, Query, status

from ..dependencies import ItemServiceDep, SharerUserId
from ..schemas.item_schemas import (
    CommentCreate,
    CommentResponse,
    ItemCreate,
    ItemResponse,
    ItemUpdate,
    ItemWithBookings,
)

router = APIRouter(
    prefix="/items",
    tags=["items"],
    responses={
        400: {"description": "Bad request"},
        403: {"description": "Caller is not the item owner"},
        404: {"description": "Not found"},
        422: {"description": "Validation error or missing X-Sharer-User-Id header"},
        500: {"description": "Internal server error"},
    },
)


@router.post(
    "",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create item",
)
async def create_item(
    item_data: ItemCreate,
    user_id: SharerUserId,
    item_service: ItemServiceDep,
) -> ItemResponse:
    """Offer a new item owned by the calling user.

    Example:
        POST /items
        X-Sharer-User-Id: 1
        {"name": "Drill", "description": "Cordless drill", "available": true}
    """
    return await item_service.create_item(item_data, user_id)


@router.get(
    "/search",
    response_model=list[ItemResponse],
    summary="Search items",
    description="Case-insensitive search over names and descriptions of available items",
)
async def search_items(
    item_service: ItemServiceDep,
    text: Annotated[str, Query(description="Search text")] = "",
    from_: Annotated[int, Query(alias="from", ge=0, description="Index of the first element")] = 0,
    size: Annotated[int, Query(ge=1, le=100, description="Page size")] = 10,
) -> list[ItemResponse]:
    return await item_service.search_items(text, from_, size)


@router.patch(
    "/{item_id}",
    response_model=ItemResponse,
    summary="Update item",
    description="Partially update an item; only the owner may do this",
)
async def update_item(
    item_id: int,
    item_data: ItemUpdate,
    user_id: SharerUserId,
    item_service: ItemServiceDep,
) -> ItemResponse:
    return await item_service.update_item(item_id, user_id, item_data)


@router.get(
    "/{item_id}",
    response_model=ItemWithBookings,
    summary="Get item",
    description="Get an item with its comments; the owner also sees last and next bookings",
)
async def get_item(
    item_id: int,
    user_id: SharerUserId,
    item_service: ItemServiceDep,
) -> ItemWithBookings:
    return await item_service.get_item(item_id, user_id)


@router.get(
    "",
    response_model=list[ItemWithBookings],
    summary="List own items",
)
async def get_items(
    user_id: SharerUserId,
    item_service: ItemServiceDep,
    from_: Annotated[int, Query(alias="from", ge=0, description="Index of the first element")] = 0,
    size: Annotated[int, Query(ge=1, le=100, description="Page size")] = 10,
) -> list[ItemWithBookings]:
    """List the calling user's items ordered by ID."""
    return await item_service.get_items_for_owner(user_id, from_, size)


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete item",
)
async def delete_item(
    item_id: int,
    user_id: SharerUserId,
    item_service: ItemServiceDep,
) -> None:
    await item_service.delete_item(item_id, user_id)


@router.post(
    "/{item_id}/comment",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on item",
    description="Leave a comment; requires a finished approved booking of the item",
)
async def add_comment(
    item_id: int,
    comment_data: CommentCreate,
    user_id: SharerUserId,
    item_service: ItemServiceDep,
) -> CommentResponse:
    return await item_service.add_comment(item_id, user_id, comment_data)
