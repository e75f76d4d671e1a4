"""Structured logging for the ShareIt server.

Everything the application logs goes through the ``shareit`` logger tree,
configured once at startup with :func:`setup_logging`. In production the
records are rendered as one JSON object per line; in debug mode a plain
console format is used instead.

Every request gets an ID (taken from an incoming ``X-Request-ID`` header or
generated) which is echoed back on the response and attached to the request
log lines together with the calling sharer's user ID.
"""

import json
import logging
import logging.config
import sys
import time
import uuid
from datetime import datetime, timezone
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .config import Settings

APP_LOGGER_NAME = "shareit"
REQUEST_ID_HEADER = "X-Request-ID"

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}

# Context attributes guaranteed by RequestContextFilter
_CONTEXT_ATTRS = ("request_id", "user_id", "client_ip", "method", "path")


class JSONFormatter(logging.Formatter):
    """Render log records as single-line JSON documents."""

    def format(self, record: logging.LogRecord) -> str:
        document: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        context = {
            attr: getattr(record, attr)
            for attr in _CONTEXT_ATTRS
            if getattr(record, attr, None) is not None
        }
        if context:
            document["context"] = context

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and key not in _CONTEXT_ATTRS
        }
        if extra:
            document["extra"] = extra

        if record.exc_info and record.exc_info[0] is not None:
            document["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(document, default=str, ensure_ascii=False)


class RequestContextFilter(logging.Filter):
    """Make sure the request context attributes exist on every record.

    Records logged outside a request (startup, background work) get ``None``
    for each attribute so formatters can rely on them.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for attr in _CONTEXT_ATTRS:
            if not hasattr(record, attr):
                setattr(record, attr, None)
        return True


def _logger_entry(level: int | str) -> dict[str, Any]:
    return {"level": level, "handlers": ["console"], "propagate": False}


def setup_logging(settings: Settings) -> None:
    """Configure the ``shareit`` logger tree and the library loggers.

    Args:
        settings: Application settings; ``log_level`` and ``debug`` are used
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    formatter = "console" if settings.debug else "json"
    library_level = "INFO" if settings.debug else "WARNING"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {"()": JSONFormatter},
                "console": {
                    "format": "%(asctime)s %(levelname)-8s %(name)s [%(request_id)s] %(message)s",
                    "datefmt": "%H:%M:%S",
                },
            },
            "filters": {"request_context": {"()": RequestContextFilter}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": log_level,
                    "formatter": formatter,
                    "filters": ["request_context"],
                    "stream": sys.stdout,
                }
            },
            "loggers": {
                APP_LOGGER_NAME: _logger_entry(log_level),
                "uvicorn": _logger_entry("INFO"),
                "uvicorn.access": _logger_entry(library_level),
                "sqlalchemy.engine": _logger_entry(library_level),
                "sqlalchemy.pool": _logger_entry("WARNING"),
            },
            "root": {"level": "WARNING", "handlers": ["console"]},
        }
    )

    get_logger("logging").info(
        "Logging configured",
        extra={
            "log_level": settings.log_level,
            "formatter": formatter,
            "environment": settings.environment,
        },
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its ID, sharer, outcome and duration.

    The request ID is stored on ``request.state.request_id`` so error
    responses can carry it, and returned in the ``X-Request-ID`` header.
    """

    def __init__(self, app: ASGIApp, logger_name: str = "requests") -> None:
        super().__init__(app)
        self.logger = get_logger(logger_name)

    @staticmethod
    def _client_ip(request: Request) -> str | None:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        return request.client.host if request.client else None

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        context = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "client_ip": self._client_ip(request),
        }
        self.logger.debug(
            f"{request.method} {request.url.path} started",
            extra={**context, "query": dict(request.query_params)},
        )

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            self.logger.error(
                f"{request.method} {request.url.path} failed with {type(exc).__name__}",
                exc_info=True,
                extra={
                    **context,
                    "user_id": getattr(request.state, "sharer_user_id", None),
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
            raise

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        self.logger.info(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                **context,
                "user_id": getattr(request.state, "sharer_user_id", None),
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = str(duration_ms)
        return response


class SecurityLoggingMixin:
    """Record refused ownership checks on the ``shareit.security`` logger."""

    def __init__(self) -> None:
        self.security_logger = get_logger("security")

    def log_authorization_failure(
        self,
        user_id: int | None = None,
        resource: str | None = None,
        action: str | None = None,
        reason: str | None = None,
    ) -> None:
        """Log that a sharer was refused an action on a resource.

        Args:
            user_id: Sharer attempting the action
            resource: Resource reference such as ``item:3`` or ``booking:7``
            action: Attempted action (update, book, approve, view ...)
            reason: Why the attempt was refused
        """
        self.security_logger.warning(
            f"User {user_id} may not {action} {resource}: {reason}",
            extra={
                "event_type": "authorization_failure",
                "user_id": user_id,
                "resource": resource,
                "action": action,
                "reason": reason,
            },
        )


def get_logger(name: str) -> logging.Logger:
    """Get a logger inside the ``shareit`` tree.

    Args:
        name: Logger name; ``shareit.`` is prepended when missing
    """
    if name != APP_LOGGER_NAME and not name.startswith(f"{APP_LOGGER_NAME}."):
        name = f"{APP_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def log_database_operation(
    operation: str,
    table: str,
    success: bool = True,
    error: str | None = None,
    **context: Any,
) -> None:
    """Log a repository write.

    Successful writes are logged at DEBUG, failures at ERROR.

    Args:
        operation: INSERT, UPDATE, UPSERT or DELETE
        table: Table name
        success: Whether the write was committed
        error: Error message when the write failed
        **context: Additional fields such as ``entity_id``
    """
    message = f"{operation} on {table}"
    if not success:
        message += f" failed: {error}" if error else " failed"

    get_logger("database").log(
        logging.DEBUG if success else logging.ERROR,
        message,
        extra={
            "event_type": "database_operation",
            "operation": operation,
            "table": table,
            "success": success,
            **context,
        },
    )
