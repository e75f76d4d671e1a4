"""Health check router for service monitoring.

This module provides health check endpoints for monitoring the service
status and database connectivity.
"""

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from ..config import Settings, get_settings
from ..database import get_database_info, test_database_connection

SERVICE_NAME = "shareit"
SERVICE_VERSION = "1.0.0"

router = APIRouter(
    prefix="/health",
    tags=["health"],
    responses={503: {"description": "Service unavailable"}},
)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get(
    "",
    response_model=dict[str, Any],
    summary="Health check with database connectivity",
)
async def health_check(settings: Settings = Depends(get_settings)) -> dict[str, Any]:
    """Health check including a database connectivity probe.

    Returns:
        Dict[str, Any]: Health status information

    Raises:
        HTTPException: 503 if the database is unreachable

    Example:
        {
            "status": "healthy",
            "timestamp": "2024-01-01T12:00:00+00:00",
            "service": "shareit",
            "version": "1.0.0",
            "environment": "development",
            "database": {"status": "connected", "info": {...}}
        }
    """
    if not test_database_connection():
        raise HTTPException(
            status_code=503, detail="Service unavailable - database connectivity issues"
        )

    return {
        "status": "healthy",
        "timestamp": _timestamp(),
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "environment": settings.environment,
        "database": {"status": "connected", "info": get_database_info()},
    }


@router.get(
    "/ready",
    response_model=dict[str, Any],
    summary="Readiness probe",
)
async def readiness_probe() -> dict[str, Any]:
    """Readiness probe; ready once the database answers.

    Raises:
        HTTPException: 503 if the database is unreachable
    """
    if not test_database_connection():
        raise HTTPException(
            status_code=503, detail="Service not ready - database unavailable"
        )

    return {"ready": True, "timestamp": _timestamp()}


@router.get(
    "/live",
    response_model=dict[str, Any],
    summary="Liveness probe",
)
async def liveness_probe() -> dict[str, Any]:
    """Liveness probe; answers as long as the process serves requests."""
    return {"alive": True, "timestamp": _timestamp()}
