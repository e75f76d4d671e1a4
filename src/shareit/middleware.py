"""Middleware for request processing and caller context.

This module provides FastAPI middleware for security headers and for
recording the calling user on the request state so that request logs can
attribute each request to a sharer.
"""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .dependencies import SHARER_USER_ID_HEADER
from .logging_config import get_logger

# Configure logger
logger = get_logger("middleware")


class SharerContextMiddleware(BaseHTTPMiddleware):
    """Middleware for adding the caller's identity to requests.

    This middleware reads the ``X-Sharer-User-Id`` header and stores the
    parsed ID on ``request.state``. It does not enforce the header; endpoint
    dependencies handle that.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Add sharer context to request.

        Args:
            request: HTTP request
            call_next: Next middleware/endpoint in chain

        Returns:
            Response: HTTP response
        """
        request.state.sharer_user_id = None

        raw_user_id = request.headers.get(SHARER_USER_ID_HEADER)
        if raw_user_id:
            try:
                request.state.sharer_user_id = int(raw_user_id)
            except ValueError:
                logger.debug(f"Ignoring malformed sharer id header: {raw_user_id!r}")

        return await call_next(request)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware for adding security headers.

    This middleware adds common security headers to all responses
    to improve application security posture.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Add security headers to response.

        Args:
            request: HTTP request
            call_next: Next middleware/endpoint in chain

        Returns:
            Response: HTTP response with security headers
        """
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Content-Security-Policy"] = "default-src 'none'"

        return response

