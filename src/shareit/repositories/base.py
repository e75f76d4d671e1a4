"""Shared repository plumbing.

This module provides the repository error type, the base repository with the
common get/save/delete operations, and the offset calculation used by every
paginated query.
"""

from typing import Generic, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel

from ..logging_config import log_database_operation

ModelT = TypeVar("ModelT", bound=SQLModel)


class RepositoryError(Exception):
    """Base exception for repository errors."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)


def page_offset(from_: int, size: int) -> int:
    """Convert a ``from``/``size`` request into a query offset.

    ``from`` is an element index; it is snapped down to the start of the page
    that contains it, so ``from=5, size=2`` reads the third page (offset 4).

    Raises:
        ValueError: If ``from_`` is negative or ``size`` is not positive
    """
    if from_ < 0:
        raise ValueError("from must not be negative")
    if size < 1:
        raise ValueError("size must be positive")
    return (from_ // size) * size


class BaseRepository(Generic[ModelT]):
    """Repository base class with primary key lookup and persistence.

    Subclasses set ``model`` and ``table`` and add their query methods.
    """

    model: type[ModelT]
    table: str

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    def get_by_id(self, entity_id: int) -> Optional[ModelT]:
        """Get an entity by primary key.

        Args:
            entity_id: Primary key to look up

        Returns:
            The entity if found, None otherwise

        Raises:
            RepositoryError: If database operation fails
        """
        try:
            return self.session.get(self.model, entity_id)
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Failed to get {self.table} row {entity_id}: {str(e)}",
                original_error=e,
            ) from e

    def save(self, entity: ModelT) -> ModelT:
        """Insert or update an entity and commit.

        Args:
            entity: Entity to persist

        Returns:
            The refreshed entity

        Raises:
            RepositoryError: If database operation fails
        """
        operation = "UPDATE" if entity.id is not None else "INSERT"
        try:
            self.session.add(entity)
            self.session.commit()
            self.session.refresh(entity)
        except SQLAlchemyError as e:
            self.session.rollback()
            log_database_operation(
                operation=operation, table=self.table, success=False, error=str(e)
            )
            raise RepositoryError(
                f"Failed to save {self.table} row: {str(e)}", original_error=e
            ) from e

        log_database_operation(operation=operation, table=self.table, entity_id=entity.id)
        return entity

    def delete(self, entity: ModelT) -> None:
        """Delete an entity and commit.

        Args:
            entity: Entity to delete

        Raises:
            RepositoryError: If database operation fails
        """
        entity_id = entity.id
        try:
            self.session.delete(entity)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            log_database_operation(
                operation="DELETE", table=self.table, success=False, error=str(e)
            )
            raise RepositoryError(
                f"Failed to delete {self.table} row {entity_id}: {str(e)}",
                original_error=e,
            ) from e

        log_database_operation(operation="DELETE", table=self.table, entity_id=entity_id)
