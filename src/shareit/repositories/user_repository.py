"""User repository for database operations.

This module provides data access layer for user management operations
with comprehensive type hints and error handling.
"""

from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import asc, select

from ..logging_config import log_database_operation
from ..models.user import User
from .base import BaseRepository, RepositoryError


class UserAlreadyExistsError(RepositoryError):
    """Exception raised when an email address is already registered."""
    pass


class UserRepository(BaseRepository[User]):
    """Repository for user database operations."""

    model = User
    table = "users"

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address.

        Args:
            email: Email address to search for

        Returns:
            User if found, None otherwise

        Raises:
            RepositoryError: If database operation fails
        """
        try:
            statement = select(User).where(User.email == email)
            return self.session.exec(statement).first()
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Failed to get user by email {email}: {str(e)}",
                original_error=e
            ) from e

    def get_all(self) -> List[User]:
        """Get all users ordered by ID.

        Raises:
            RepositoryError: If database operation fails
        """
        try:
            statement = select(User).order_by(asc(User.id))
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Failed to get users: {str(e)}",
                original_error=e
            ) from e

    def exists(self, user_id: int) -> bool:
        """Check if a user with the given ID exists.

        Raises:
            RepositoryError: If database operation fails
        """
        try:
            statement = select(User.id).where(User.id == user_id)
            return self.session.exec(statement).first() is not None
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Failed to check user existence for {user_id}: {str(e)}",
                original_error=e
            ) from e

    def save(self, entity: User) -> User:
        """Insert or update a user, mapping unique email violations.

        Raises:
            UserAlreadyExistsError: If the email address is already taken
            RepositoryError: If database operation fails
        """
        try:
            self.session.add(entity)
            self.session.commit()
            self.session.refresh(entity)
        except IntegrityError as e:
            self.session.rollback()
            log_database_operation(
                operation="UPSERT", table=self.table, success=False, error=str(e)
            )
            raise UserAlreadyExistsError(
                f"User with email {entity.email} already exists",
                original_error=e
            ) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise RepositoryError(
                f"Failed to save user: {str(e)}",
                original_error=e
            ) from e

        log_database_operation(operation="UPSERT", table=self.table, entity_id=entity.id)
        return entity
