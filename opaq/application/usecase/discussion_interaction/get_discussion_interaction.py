"""Get discussion interaction use case."""

from uuid import UUID

from pydantic import BaseModel

from opaq.domain.service import DiscussionInteractionService
from opaq.domain.value import DiscussionId

from ..base import BaseUseCase, parse_user_id


class GetDiscussionInteractionRequest(BaseModel):
    """Get discussion interaction request."""

    discussion_id: str  # UUID string
    user_id: str | None = None  # Optional caller


class GetDiscussionInteractionResponse(BaseModel):
    """Get discussion interaction response."""

    liked: bool


class GetDiscussionInteractionUseCase(BaseUseCase):
    """Use case for reading the caller's like on a discussion."""

    def __init__(
        self, discussion_interaction_service: DiscussionInteractionService
    ) -> None:
        self.discussion_interaction_service = discussion_interaction_service

    async def execute(
        self, request: GetDiscussionInteractionRequest
    ) -> GetDiscussionInteractionResponse:
        liked = await self.discussion_interaction_service.is_liked(
            parse_user_id(request.user_id),
            DiscussionId(UUID(request.discussion_id)),
        )
        return GetDiscussionInteractionResponse(liked=liked)
