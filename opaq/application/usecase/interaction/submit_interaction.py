"""Submit interaction use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from opaq.domain.model import PostInteraction, PostStats
from opaq.domain.service import InteractionService
from opaq.domain.value import InteractionAction, PostId

from ..base import BaseUseCase, parse_user_id


class InteractionState(BaseModel):
    """A user's interaction state on a post."""

    liked: bool = False
    saved: bool = False
    viewed: bool = False
    view_count: int = 0
    last_liked_at: datetime | None = None
    last_saved_at: datetime | None = None
    last_viewed_at: datetime | None = None

    @classmethod
    def from_record(cls, record: PostInteraction | None) -> "InteractionState":
        """Build from a ledger record; no record means all-false/zero."""
        if record is None:
            return cls()
        return cls(
            liked=record.liked,
            saved=record.saved,
            viewed=record.viewed,
            view_count=record.view_count,
            last_liked_at=record.last_liked_at,
            last_saved_at=record.last_saved_at,
            last_viewed_at=record.last_viewed_at,
        )


class StatsItem(BaseModel):
    """Aggregated post statistics."""

    likes: int
    saves: int
    views: int
    comments: int

    @classmethod
    def from_stats(cls, stats: PostStats) -> "StatsItem":
        return cls(
            likes=stats.likes,
            saves=stats.saves,
            views=stats.views,
            comments=stats.comments,
        )


class SubmitInteractionRequest(BaseModel):
    """Submit interaction request."""

    post_id: str  # UUID string
    action: InteractionAction
    value: bool | None = None
    user_id: str | None = None  # User ID from authenticated user


class SubmitInteractionResponse(BaseModel):
    """Submit interaction response.

    Carries the authoritative post-mutation state so clients can reconcile
    optimistic updates.
    """

    interaction: InteractionState
    stats: StatsItem


class SubmitInteractionUseCase(BaseUseCase):
    """Use case for liking, saving or viewing a post."""

    def __init__(self, interaction_service: InteractionService) -> None:
        """Initialize submit interaction use case.

        Args:
            interaction_service: Interaction domain service
        """
        self.interaction_service = interaction_service

    async def execute(
        self, request: SubmitInteractionRequest
    ) -> SubmitInteractionResponse:
        """Execute submit interaction flow.

        Args:
            request: Submit interaction request

        Returns:
            Updated interaction state and fresh stats

        Raises:
            UnauthorizedError: If the caller is anonymous
            InvalidInputError: If value is missing for like or save
            NotFoundError: If the post is not visible
        """
        record, stats = await self.interaction_service.submit(
            user_id=parse_user_id(request.user_id),
            post_id=PostId(UUID(request.post_id)),
            action=request.action,
            value=request.value,
        )
        return SubmitInteractionResponse(
            interaction=InteractionState.from_record(record),
            stats=StatsItem.from_stats(stats),
        )
