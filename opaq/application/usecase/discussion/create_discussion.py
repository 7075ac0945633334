"""Create discussion use case."""

from uuid import UUID

from pydantic import BaseModel

from opaq.domain.service import (
    DiscussionInteractionService,
    DiscussionService,
    UserService,
)
from opaq.domain.value import DiscussionId, PostId

from ..base import BaseUseCase, parse_user_id
from .discussion_item import DiscussionItem, build_discussion_items


class CreateDiscussionRequest(BaseModel):
    """Create discussion request."""

    post_id: str  # UUID string
    content: str
    parent_id: str | None = None  # Top-level discussion being replied to
    user_id: str | None = None  # User ID from authenticated user


class CreateDiscussionResponse(BaseModel):
    """Create discussion response."""

    discussion: DiscussionItem


class CreateDiscussionUseCase(BaseUseCase):
    """Use case for creating a discussion or a reply."""

    def __init__(
        self,
        discussion_service: DiscussionService,
        discussion_interaction_service: DiscussionInteractionService,
        user_service: UserService,
    ) -> None:
        """Initialize create discussion use case.

        Args:
            discussion_service: Discussion domain service
            discussion_interaction_service: Discussion interaction domain service
            user_service: User domain service
        """
        self.discussion_service = discussion_service
        self.discussion_interaction_service = discussion_interaction_service
        self.user_service = user_service

    async def execute(self, request: CreateDiscussionRequest) -> CreateDiscussionResponse:
        """Execute create discussion flow.

        Args:
            request: Create discussion request

        Returns:
            Created discussion with author info

        Raises:
            UnauthorizedError: If the caller is anonymous
            InvalidInputError: If content is empty or the parent is a reply
            NotFoundError: If the post or parent discussion does not exist
        """
        user_id = parse_user_id(request.user_id)
        discussion = await self.discussion_service.create(
            user_id=user_id,
            post_id=PostId(UUID(request.post_id)),
            content=request.content,
            parent_id=(
                DiscussionId(UUID(request.parent_id)) if request.parent_id else None
            ),
        )
        [item] = await build_discussion_items(
            [discussion],
            user_id,
            self.user_service,
            self.discussion_interaction_service,
        )
        return CreateDiscussionResponse(discussion=item)
