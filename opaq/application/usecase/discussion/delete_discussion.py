"""Delete discussion use case."""

from uuid import UUID

from pydantic import BaseModel

from opaq.domain.service import DiscussionService
from opaq.domain.value import DiscussionId

from ..base import BaseUseCase, parse_user_id


class DeleteDiscussionRequest(BaseModel):
    """Delete discussion request."""

    discussion_id: str  # UUID string
    user_id: str | None = None  # User ID from authenticated user


class DeleteDiscussionResponse(BaseModel):
    """Delete discussion response."""

    deleted_ids: list[str]
    message: str


class DeleteDiscussionUseCase(BaseUseCase):
    """Use case for deleting a discussion with its replies."""

    def __init__(self, discussion_service: DiscussionService) -> None:
        """Initialize delete discussion use case.

        Args:
            discussion_service: Discussion domain service
        """
        self.discussion_service = discussion_service

    async def execute(self, request: DeleteDiscussionRequest) -> DeleteDiscussionResponse:
        """Execute delete discussion flow.

        Raises:
            UnauthorizedError: If the caller is anonymous
            NotFoundError: If the discussion does not exist
            ForbiddenError: If the caller is neither discussion nor post author
        """
        deleted = await self.discussion_service.delete(
            parse_user_id(request.user_id),
            DiscussionId(UUID(request.discussion_id)),
        )
        return DeleteDiscussionResponse(
            deleted_ids=[str(did) for did in deleted],
            message="Discussion deleted successfully",
        )
