"""Database engine and session management.

One engine per process, one SQLModel session per request. Tables are
created from the SQLModel metadata when the application starts.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Generator

from fastapi import FastAPI
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from .config import settings
from .logging_config import get_logger

# Register the table models on SQLModel.metadata
from .models import Booking, Comment, Item, ItemRequest, User  # noqa: F401

logger = get_logger("database")


def _engine_options() -> dict[str, Any]:
    if settings.is_sqlite:
        # Request handlers run in a thread pool
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": 10,
        "max_overflow": 20,
        "pool_timeout": 30,
        "pool_recycle": 3600,
        "pool_pre_ping": True,
    }


engine = create_engine(settings.database_url, echo=settings.debug, **_engine_options())


def get_session() -> Generator[Session, None, None]:
    """Yield a session for one request, rolling back if the request fails.

    Yields:
        Session: SQLModel database session
    """
    with Session(engine) as session:
        try:
            yield session
        except Exception:
            session.rollback()
            raise


def create_db_and_tables() -> None:
    """Create missing tables; existing tables are left untouched."""
    SQLModel.metadata.create_all(engine)
    logger.info(
        "Database schema ready",
        extra={"url": settings.masked_database_url, "tables": sorted(SQLModel.metadata.tables)},
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create tables on startup and release pooled connections on shutdown."""
    create_db_and_tables()
    yield
    engine.dispose()


def get_database_info() -> dict[str, Any]:
    """Describe the database for the health endpoint.

    Returns:
        dict: Masked URL, dialect and, for pooled engines, checked out connections
    """
    info: dict[str, Any] = {
        "url": settings.masked_database_url,
        "dialect": engine.dialect.name,
    }
    if hasattr(engine.pool, "checkedout"):
        info["checked_out"] = engine.pool.checkedout()
    return info


def test_database_connection() -> bool:
    """Return True when the database answers a trivial query."""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Database connectivity check failed: {e}")
        return False
