"""Bookings router for the booking workflow.

This module provides endpoints to request a booking, let the item owner
approve or reject it, view a single booking, and list bookings made by the
caller or of the caller's items filtered by state.
"""

from typing import Annotated

from fastapi import APIRouter, Query, status

from ..dependencies import BookingServiceDep, SharerUserId
from ..schemas.booking_schemas import BookingCreate, BookingResponse, BookingState

router = APIRouter(
    prefix="/bookings",
    tags=["bookings"],
    responses={
        400: {"description": "Item unavailable, booking already decided, or unknown state"},
        404: {"description": "Not found or no rights on the booking"},
        422: {"description": "Validation error or missing X-Sharer-User-Id header"},
        500: {"description": "Internal server error"},
    },
)

StateQuery = Annotated[
    str,
    Query(description="One of ALL, CURRENT, FUTURE, PAST, WAITING, REJECTED"),
]
FromQuery = Annotated[
    int, Query(alias="from", ge=0, description="Index of the first element")
]
SizeQuery = Annotated[int, Query(ge=1, le=100, description="Page size")]


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book item",
)
async def create_booking(
    booking_data: BookingCreate,
    user_id: SharerUserId,
    booking_service: BookingServiceDep,
) -> BookingResponse:
    """Request a booking; it stays WAITING until the owner decides.

    Example:
        POST /bookings
        X-Sharer-User-Id: 2
        {"itemId": 1, "start": "2030-01-01T10:00:00", "end": "2030-01-02T10:00:00"}
    """
    return await booking_service.create_booking(booking_data, user_id)


@router.patch(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Approve or reject booking",
)
async def set_approve(
    booking_id: int,
    approved: Annotated[bool, Query(description="true to approve, false to reject")],
    user_id: SharerUserId,
    booking_service: BookingServiceDep,
) -> BookingResponse:
    """Decide on a waiting booking of one of the caller's items."""
    return await booking_service.set_approve(booking_id, approved, user_id)


@router.get(
    "/owner",
    response_model=list[BookingResponse],
    summary="List bookings of own items",
)
async def get_owner_bookings(
    user_id: SharerUserId,
    booking_service: BookingServiceDep,
    state: StateQuery = BookingState.ALL.value,
    from_: FromQuery = 0,
    size: SizeQuery = 10,
) -> list[BookingResponse]:
    """List bookings of the caller's items, newest start first."""
    return await booking_service.get_bookings_for_owner(user_id, state, from_, size)


@router.get(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Get booking",
    description="Visible to the booker and the item owner only",
)
async def get_booking(
    booking_id: int,
    user_id: SharerUserId,
    booking_service: BookingServiceDep,
) -> BookingResponse:
    return await booking_service.get_booking(booking_id, user_id)


@router.get(
    "",
    response_model=list[BookingResponse],
    summary="List own bookings",
)
async def get_bookings(
    user_id: SharerUserId,
    booking_service: BookingServiceDep,
    state: StateQuery = BookingState.ALL.value,
    from_: FromQuery = 0,
    size: SizeQuery = 10,
) -> list[BookingResponse]:
    """List bookings made by the caller, newest start first."""
    return await booking_service.get_bookings_for_booker(user_id, state, from_, size)
