"""Get interactions use case."""

from uuid import UUID

from pydantic import BaseModel

from opaq.domain.service import InteractionService
from opaq.domain.value import PostId

from ..base import BaseUseCase, parse_user_id
from .submit_interaction import InteractionState, StatsItem


class GetInteractionsRequest(BaseModel):
    """Get interactions request."""

    post_id: str  # UUID string
    user_id: str | None = None  # Optional caller


class GetInteractionsResponse(BaseModel):
    """Get interactions response."""

    stats: StatsItem
    user_interaction: InteractionState


class GetInteractionsUseCase(BaseUseCase):
    """Use case for reading a post's stats and the caller's own state."""

    def __init__(self, interaction_service: InteractionService) -> None:
        """Initialize get interactions use case.

        Args:
            interaction_service: Interaction domain service
        """
        self.interaction_service = interaction_service

    async def execute(self, request: GetInteractionsRequest) -> GetInteractionsResponse:
        """Execute get interactions flow.

        Anonymous callers receive the default (all-false) interaction state.
        """
        stats, record = await self.interaction_service.query(
            post_id=PostId(UUID(request.post_id)),
            user_id=parse_user_id(request.user_id),
        )
        return GetInteractionsResponse(
            stats=StatsItem.from_stats(stats),
            user_interaction=InteractionState.from_record(record),
        )
