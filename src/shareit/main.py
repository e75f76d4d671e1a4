"""ShareIt application factory.

Builds the FastAPI application: logging, middleware, error handlers,
the marketplace routers and a couple of informational endpoints.

Run locally with::

    uvicorn src.shareit.main:app --reload
"""

from typing import Any

from fastapi import FastAPI
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .database import lifespan
from .dependencies import SHARER_USER_ID_HEADER
from .exceptions import (
    APIException,
    ServiceError,
    api_exception_handler,
    generic_exception_handler,
    http_exception_handler,
    service_exception_handler,
    validation_exception_handler,
)
from .logging_config import REQUEST_ID_HEADER, LoggingMiddleware, get_logger, setup_logging
from .middleware import SecurityHeadersMiddleware, SharerContextMiddleware
from .routers import (
    bookings_router,
    health_router,
    items_router,
    requests_router,
    users_router,
)

setup_logging(settings)
logger = get_logger("app")

API_VERSION = "1.0.0"

ROUTERS = (health_router, users_router, items_router, requests_router, bookings_router)


def create_app() -> FastAPI:
    """Create the ShareIt FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title="ShareIt",
        description="Item rental marketplace: users, items, item requests and bookings",
        version=API_VERSION,
        lifespan=lifespan,
        debug=settings.debug,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )

    configure_middleware(app)
    configure_exception_handlers(app)
    for router in ROUTERS:
        app.include_router(router)
    configure_root_endpoints(app)

    logger.info(
        "ShareIt application created",
        extra={"environment": settings.environment, "routes": len(app.routes)},
    )
    return app


def configure_middleware(app: FastAPI) -> None:
    """Install the middleware stack.

    Middleware added last runs first: request logging wraps everything and
    sees the sharer ID recorded by the innermost middleware.
    """
    app.add_middleware(SharerContextMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)

    if settings.is_development:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allowed_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["Content-Type", SHARER_USER_ID_HEADER],
            expose_headers=[REQUEST_ID_HEADER],
            max_age=86400,
        )
    logger.debug(f"CORS origins for {settings.environment}: {settings.cors_allowed_origins}")

    app.add_middleware(LoggingMiddleware)


def configure_exception_handlers(app: FastAPI) -> None:
    """Map exceptions to the standard error envelope."""
    app.add_exception_handler(APIException, api_exception_handler)
    # Covers every ServiceError subclass through the exception MRO
    app.add_exception_handler(ServiceError, service_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)


def configure_root_endpoints(app: FastAPI) -> None:
    """Register ``/`` and ``/version``."""

    @app.get("/", tags=["root"], summary="API Information")
    async def root() -> dict[str, Any]:
        return {
            "message": "ShareIt is running",
            "version": API_VERSION,
            "environment": settings.environment,
            "docs": "/docs" if settings.debug else None,
            "identity_header": SHARER_USER_ID_HEADER,
            "endpoints": {
                "health": "/health",
                "users": "/users",
                "items": "/items",
                "requests": "/requests",
                "bookings": "/bookings",
            },
        }

    @app.get("/version", tags=["root"], summary="API Version")
    async def version() -> dict[str, str]:
        return {"version": API_VERSION, "environment": settings.environment}


app = create_app()
