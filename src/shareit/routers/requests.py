"""Item requests router."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from ..dependencies import ItemRequestServiceDep, SharerUserId
from ..schemas.item_request_schemas import ItemRequestCreate, ItemRequestResponse

router = APIRouter(
    prefix="/requests",
    tags=["requests"],
    responses={
        404: {"description": "User or request not found"},
        422: {"description": "Validation error or missing X-Sharer-User-Id header"},
        500: {"description": "Internal server error"},
    },
)


@router.post(
    "",
    response_model=ItemRequestResponse,
    status_code=status.HTTP_200_OK,
    summary="Create item request",
)
async def create_request(
    request_data: ItemRequestCreate,
    user_id: SharerUserId,
    request_service: ItemRequestServiceDep,
) -> ItemRequestResponse:
    """Publish a request for an item nobody offers yet."""
    return await request_service.create_request(request_data, user_id)


@router.get(
    "",
    response_model=list[ItemRequestResponse],
    summary="List own item requests",
)
async def get_own_requests(
    user_id: SharerUserId,
    request_service: ItemRequestServiceDep,
) -> list[ItemRequestResponse]:
    """List the calling user's requests, newest first, with offered items."""
    return await request_service.get_own_requests(user_id)


@router.get(
    "/all",
    response_model=list[ItemRequestResponse],
    summary="List other users' item requests",
)
async def get_all_requests(
    user_id: SharerUserId,
    request_service: ItemRequestServiceDep,
    from_: Annotated[int, Query(alias="from", ge=0, description="Index of the first element")] = 0,
    size: Annotated[int, Query(ge=1, le=100, description="Page size")] = 10,
) -> list[ItemRequestResponse]:
    return await request_service.get_all_requests(user_id, from_, size)


@router.get(
    "/{request_id}",
    response_model=ItemRequestResponse,
    summary="Get item request",
)
async def get_request(
    request_id: int,
    user_id: SharerUserId,
    request_service: ItemRequestServiceDep,
) -> ItemRequestResponse:
    return await request_service.get_request(request_id, user_id)
