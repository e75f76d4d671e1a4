"""Item request service for business logic operations."""

from sqlmodel import Session

from ..exceptions import DatabaseServiceError, NotFoundServiceError
from ..logging_config import get_logger
from ..models.item_request import ItemRequest
from ..repositories.base import RepositoryError, page_offset
from ..repositories.item_request_repository import ItemRequestRepository
from ..schemas.item_request_schemas import (
    ItemRequestCreate,
    ItemRequestResponse,
    RequestItemSummary,
)
from .user_service import UserService

logger = get_logger("item_request_service")


class ItemRequestNotFoundServiceError(NotFoundServiceError):
    """Exception raised when item request is not found."""

    def __init__(self, request_id: int) -> None:
        super().__init__(f"Item request with id {request_id} not found")


class ItemRequestService:
    """Service for item request business logic operations.

    Every operation requires the calling user to exist. Any existing user may
    read any request.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.repository = ItemRequestRepository(session)
        self.user_service = UserService(session)

    async def create_request(
        self, request_data: ItemRequestCreate, user_id: int
    ) -> ItemRequestResponse:
        """Publish a new item request stamped with the current time.

        Raises:
            UserNotFoundServiceError: If the user does not exist
            DatabaseServiceError: If the operation fails
        """
        self.user_service.check_user_exists(user_id)

        try:
            item_request = self.repository.save(
                ItemRequest(description=request_data.description, requester_id=user_id)
            )
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to create item request: {e.message}", original_error=e
            ) from e

        logger.info(
            f"Item request {item_request.id} created by user {user_id}",
            extra={"user_id": user_id, "item_request_id": item_request.id},
        )
        return self._convert_to_response(item_request)

    async def get_own_requests(self, user_id: int) -> list[ItemRequestResponse]:
        """Get the user's own requests, newest first, with the items offered.

        Raises:
            UserNotFoundServiceError: If the user does not exist
            DatabaseServiceError: If the operation fails
        """
        self.user_service.check_user_exists(user_id)

        try:
            requests = self.repository.find_by_requester(user_id)
            return [self._convert_to_response(item_request) for item_request in requests]
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to get item requests: {e.message}", original_error=e
            ) from e

    async def get_all_requests(
        self, user_id: int, from_: int = 0, size: int = 10
    ) -> list[ItemRequestResponse]:
        """Get a page of requests made by other users, newest first.

        Raises:
            UserNotFoundServiceError: If the user does not exist
            DatabaseServiceError: If the operation fails
        """
        self.user_service.check_user_exists(user_id)

        try:
            requests = self.repository.find_by_other_users(
                user_id, skip=page_offset(from_, size), limit=size
            )
            return [self._convert_to_response(item_request) for item_request in requests]
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to get item requests: {e.message}", original_error=e
            ) from e

    async def get_request(self, request_id: int, user_id: int) -> ItemRequestResponse:
        """Get a single request with the items offered.

        Raises:
            UserNotFoundServiceError: If the user does not exist
            ItemRequestNotFoundServiceError: If the request does not exist
            DatabaseServiceError: If the operation fails
        """
        self.user_service.check_user_exists(user_id)

        try:
            item_request = self.repository.get_by_id(request_id)
            if not item_request:
                raise ItemRequestNotFoundServiceError(request_id)
            return self._convert_to_response(item_request)
        except RepositoryError as e:
            raise DatabaseServiceError(
                f"Failed to get item request: {e.message}", original_error=e
            ) from e

    def _convert_to_response(self, item_request: ItemRequest) -> ItemRequestResponse:
        return ItemRequestResponse(
            id=item_request.id,
            description=item_request.description,
            created=item_request.created,
            items=[
                RequestItemSummary(
                    id=item.id,
                    name=item.name,
                    description=item.description,
                    available=item.available,
                    request_id=item.request_id,
                    owner_id=item.owner_id,
                )
                for item in item_request.items
            ],
        )
