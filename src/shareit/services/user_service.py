"""User service for business logic operations.

This module provides business logic for user management operations,
including registration, partial updates, retrieval, deletion, and the
existence check the other services rely on.
"""

from sqlmodel import Session

from ..exceptions import (
    ConflictServiceError,
    DatabaseServiceError,
    NotFoundServiceError,
    ValidationServiceError,
)
from ..logging_config import get_logger
from ..models.user import User
from ..repositories.base import RepositoryError
from ..repositories.user_repository import UserAlreadyExistsError, UserRepository
from ..schemas.user_schemas import UserCreate, UserResponse, UserUpdate

logger = get_logger("user_service")


class UserNotFoundServiceError(NotFoundServiceError):
    """Exception raised when user is not found."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User with id {user_id} not found")


class EmailAlreadyExistsServiceError(ConflictServiceError):
    """Exception raised when an email address is already registered."""

    def __init__(self, email: str, original_error: Exception | None = None) -> None:
        super().__init__(
            f"User with email {email} already exists", original_error=original_error
        )


class UserService:
    """Service for user business logic operations.

    This service provides business logic for user management,
    including validation, transformation, and coordination with repositories.
    """

    def __init__(self, session: Session) -> None:
        """Initialize user service with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session
        self.repository = UserRepository(session)

    async def create_user(self, user_data: UserCreate) -> UserResponse:
        """Register a new user.

        Args:
            user_data: User registration data

        Returns:
            Created user response

        Raises:
            EmailAlreadyExistsServiceError: If the email is already registered
            DatabaseServiceError: If the operation fails
        """
        try:
            user = self.repository.save(
                User(name=user_data.name, email=user_data.email)
            )
        except UserAlreadyExistsError as e:
            logger.warning(
                f"Duplicate email on registration: {user_data.email}",
                extra={"email": user_data.email},
            )
            raise EmailAlreadyExistsServiceError(user_data.email, original_error=e) from e
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to create user: {e.message}", original_error=e
            ) from e

        logger.info(f"User {user.id} created", extra={"user_id": user.id})
        return self._convert_to_response(user)

    async def update_user(self, user_id: int, user_data: UserUpdate) -> UserResponse:
        """Partially update a user.

        Args:
            user_id: ID of the user to update
            user_data: Fields to change

        Returns:
            Updated user response

        Raises:
            UserNotFoundServiceError: If the user does not exist
            ValidationServiceError: If no field is provided
            EmailAlreadyExistsServiceError: If the email belongs to another user
            DatabaseServiceError: If the operation fails
        """
        update_fields = {
            key: value
            for key, value in user_data.model_dump(exclude_unset=True).items()
            if value is not None
        }

        try:
            user = self.repository.get_by_id(user_id)
            if not user:
                raise UserNotFoundServiceError(user_id)
            if not update_fields:
                raise ValidationServiceError("At least one field must be provided for update")

            new_email = update_fields.get("email")
            if new_email is not None and new_email != user.email:
                holder = self.repository.get_by_email(new_email)
                if holder is not None and holder.id != user_id:
                    raise EmailAlreadyExistsServiceError(new_email)

            for key, value in update_fields.items():
                setattr(user, key, value)

            user = self.repository.save(user)
        except UserAlreadyExistsError as e:
            raise EmailAlreadyExistsServiceError(
                update_fields.get("email", ""), original_error=e
            ) from e
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to update user: {e.message}", original_error=e
            ) from e

        logger.info(
            f"User {user_id} updated",
            extra={"user_id": user_id, "fields": sorted(update_fields)},
        )
        return self._convert_to_response(user)

    async def get_user(self, user_id: int) -> UserResponse:
        """Get user by ID.

        Raises:
            UserNotFoundServiceError: If the user does not exist
            DatabaseServiceError: If the operation fails
        """
        try:
            user = self.repository.get_by_id(user_id)
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to get user: {e.message}", original_error=e
            ) from e

        if not user:
            raise UserNotFoundServiceError(user_id)
        return self._convert_to_response(user)

    async def get_all_users(self) -> list[UserResponse]:
        """Get every user ordered by ID.

        Raises:
            DatabaseServiceError: If the operation fails
        """
        try:
            users = self.repository.get_all()
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to get users: {e.message}", original_error=e
            ) from e

        return [self._convert_to_response(user) for user in users]

    async def delete_user(self, user_id: int) -> None:
        """Delete a user together with their items, requests, bookings and comments.

        Raises:
            UserNotFoundServiceError: If the user does not exist
            DatabaseServiceError: If the operation fails
        """
        try:
            user = self.repository.get_by_id(user_id)
            if not user:
                raise UserNotFoundServiceError(user_id)
            self.repository.delete(user)
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to delete user: {e.message}", original_error=e
            ) from e

        logger.info(f"User {user_id} deleted", extra={"user_id": user_id})

    def check_user_exists(self, user_id: int) -> None:
        """Ensure a user exists.

        Raises:
            UserNotFoundServiceError: If the user does not exist
            DatabaseServiceError: If the operation fails
        """
        try:
            exists = self.repository.exists(user_id)
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to check user: {e.message}", original_error=e
            ) from e

        if not exists:
            raise UserNotFoundServiceError(user_id)

    def _convert_to_response(self, user: User) -> UserResponse:
        return UserResponse(id=user.id, name=user.name, email=user.email)
