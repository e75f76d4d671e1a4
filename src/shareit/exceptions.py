"""Custom exception classes and global exception handlers.

This module defines the base exception types raised by the service layer and
provides FastAPI global exception handlers for consistent error responses
with proper HTTP status codes and error message formatting.
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse

from .logging_config import get_logger

logger = get_logger("errors")


class APIException(Exception):
    """Base exception class for API errors.

    This is the base class for all custom API exceptions, providing
    consistent error structure and HTTP status code handling.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize API exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code for the error
            error_code: Machine-readable error code
            details: Additional error details
        """
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or self.__class__.__name__.lower().replace(
            "exception", "_error"
        )
        self.details = details or {}
        super().__init__(self.message)


class ServiceError(Exception):
    """Base exception for service layer errors.

    Service modules subclass this with a fixed status code and error code;
    the global handler turns any of them into an :class:`APIException`.
    """

    error_code = "service_error"

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        original_error: Exception | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.original_error = original_error
        super().__init__(self.message)


class NotFoundServiceError(ServiceError):
    """Base exception for missing resources."""

    error_code = "not_found_error"

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND)


class ConflictServiceError(ServiceError):
    """Base exception for resource conflicts."""

    error_code = "conflict_error"

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(
            message, status_code=status.HTTP_409_CONFLICT, original_error=original_error
        )


class AccessDeniedServiceError(ServiceError):
    """Base exception for ownership violations."""

    error_code = "authorization_error"

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=status.HTTP_403_FORBIDDEN)


class ValidationServiceError(ServiceError):
    """Base exception for business rule violations on input."""

    error_code = "validation_error"

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST)


class DatabaseServiceError(ServiceError):
    """Raised when a repository operation fails."""

    error_code = "database_error"

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(
            message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            original_error=original_error,
        )


def create_error_response(
    status_code: int,
    message: str,
    error_code: str,
    details: dict[str, Any] | None = None,
    request_id: str | None = None,
) -> JSONResponse:
    """Create standardized error response.

    Args:
        status_code: HTTP status code
        message: Error message
        error_code: Machine-readable error code
        details: Additional error details
        request_id: Request ID for tracking

    Returns:
        JSONResponse: Standardized error response
    """
    error_data = {
        "error": {"code": error_code, "message": message, "status_code": status_code}
    }

    if details:
        error_data["error"]["details"] = details

    if request_id:
        error_data["error"]["request_id"] = request_id

    return JSONResponse(status_code=status_code, content=jsonable_encoder(error_data))


# Global Exception Handlers


def _request_context(request: Request) -> dict[str, Any]:
    return {
        "request_id": getattr(request.state, "request_id", None),
        "user_id": getattr(request.state, "sharer_user_id", None),
        "method": request.method,
        "path": request.url.path,
    }


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    """Render an :class:`APIException` as the standard error envelope.

    Server-side failures (5xx) are logged as errors, client mistakes as
    warnings.
    """
    context = _request_context(request)
    logger.log(
        logging.ERROR if exc.status_code >= 500 else logging.WARNING,
        f"{exc.error_code}: {exc.message}",
        extra={**context, "status_code": exc.status_code, "details": exc.details},
    )

    return create_error_response(
        status_code=exc.status_code,
        message=exc.message,
        error_code=exc.error_code,
        details=exc.details,
        request_id=context["request_id"],
    )


async def service_exception_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Translate any :class:`ServiceError` subclass into an error response."""
    api_exc = APIException(
        message=exc.message,
        status_code=exc.status_code,
        error_code=exc.error_code,
    )
    return await api_exception_handler(request, api_exc)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Wrap FastAPI/Starlette HTTP exceptions (404 routes, 503 probes) in the envelope."""
    context = _request_context(request)
    logger.warning(
        f"HTTP {exc.status_code}: {exc.detail}",
        extra={**context, "status_code": exc.status_code},
    )

    return create_error_response(
        status_code=exc.status_code,
        message=str(exc.detail),
        error_code="http_error",
        request_id=context["request_id"],
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report body, query and header validation failures field by field.

    A missing or non-numeric ``X-Sharer-User-Id`` header ends up here too.
    """
    validation_errors = [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
            "input": error.get("input"),
        }
        for error in exc.errors()
    ]

    context = _request_context(request)
    logger.warning(
        f"Request validation failed on {len(validation_errors)} field(s)",
        extra={**context, "validation_errors": validation_errors},
    )

    return create_error_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        message="Validation failed",
        error_code="validation_error",
        details={"validation_errors": validation_errors},
        request_id=context["request_id"],
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort handler; never exposes the exception text to the client."""
    context = _request_context(request)
    logger.error(
        f"Unhandled {type(exc).__name__}: {exc}",
        exc_info=exc,
        extra=context,
    )

    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message="Internal server error",
        error_code="internal_error",
        request_id=context["request_id"],
    )
