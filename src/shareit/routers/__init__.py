"""API route handlers.

This module exports all API routers for the FastAPI application.
"""

from .bookings import router as bookings_router
from .health import router as health_router
from .items import router as items_router
from .requests import router as requests_router
from .users import router as users_router

__all__ = [
    "health_router",
    "users_router",
    "items_router",
    "requests_router",
    "bookings_router",
]
