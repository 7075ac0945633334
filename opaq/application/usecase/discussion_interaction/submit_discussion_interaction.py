"""Submit discussion interaction use case."""

from uuid import UUID

from pydantic import BaseModel

from opaq.domain.service import DiscussionInteractionService, DiscussionService
from opaq.domain.value import DiscussionAction, DiscussionId

from ..base import BaseUseCase, parse_user_id


class SubmitDiscussionInteractionRequest(BaseModel):
    """Submit discussion interaction request."""

    discussion_id: str  # UUID string
    action: DiscussionAction
    value: bool | None = None  # Required for like, ignored for heart
    user_id: str | None = None  # User ID from authenticated user


class SubmitDiscussionInteractionResponse(BaseModel):
    """Submit discussion interaction response.

    ``liked`` is the caller's like state after a ``like``; None after a
    ``heart``.
    """

    discussion_id: str
    action: DiscussionAction
    likes: int
    is_hearted: bool
    liked: bool | None = None


class SubmitDiscussionInteractionUseCase(BaseUseCase):
    """Use case for liking or hearting a discussion."""

    def __init__(
        self,
        discussion_interaction_service: DiscussionInteractionService,
        discussion_service: DiscussionService,
    ) -> None:
        """Initialize submit discussion interaction use case.

        Args:
            discussion_interaction_service: Discussion interaction domain service
            discussion_service: Discussion domain service
        """
        self.discussion_interaction_service = discussion_interaction_service
        self.discussion_service = discussion_service

    async def execute(
        self, request: SubmitDiscussionInteractionRequest
    ) -> SubmitDiscussionInteractionResponse:
        """Execute submit discussion interaction flow.

        Raises:
            UnauthorizedError: If the caller is anonymous
            InvalidInputError: If a like has no value
            NotFoundError: If the discussion does not exist
            ForbiddenError: If a heart comes from someone other than the post author
        """
        user_id = parse_user_id(request.user_id)
        discussion_id = DiscussionId(UUID(request.discussion_id))

        if request.action == DiscussionAction.HEART:
            discussion = await self.discussion_service.heart(user_id, discussion_id)
            liked = None
        else:
            record, discussion = await self.discussion_interaction_service.set_like(
                user_id, discussion_id, request.value
            )
            liked = record.liked

        return SubmitDiscussionInteractionResponse(
            discussion_id=str(discussion.id),
            action=request.action,
            likes=discussion.likes,
            is_hearted=discussion.is_hearted,
            liked=liked,
        )
