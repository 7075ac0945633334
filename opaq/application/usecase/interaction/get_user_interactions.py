"""Get user interactions use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from opaq.domain.service import InteractionService
from opaq.domain.value import InteractionFilter

from ..base import BaseUseCase, parse_user_id


class UserInteractionItem(BaseModel):
    """One entry of the caller's interaction history."""

    post_id: str
    liked: bool
    saved: bool
    viewed: bool
    view_count: int
    updated_at: datetime


class GetUserInteractionsRequest(BaseModel):
    """Get user interactions request."""

    user_id: str | None = None
    filter: InteractionFilter = InteractionFilter.ALL
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)


class GetUserInteractionsResponse(BaseModel):
    """Get user interactions response."""

    interactions: list[UserInteractionItem]
    page: int
    limit: int


class GetUserInteractionsUseCase(BaseUseCase):
    """Use case for listing the caller's liked/saved/viewed posts."""

    def __init__(self, interaction_service: InteractionService) -> None:
        """Initialize get user interactions use case.

        Args:
            interaction_service: Interaction domain service
        """
        self.interaction_service = interaction_service

    async def execute(
        self, request: GetUserInteractionsRequest
    ) -> GetUserInteractionsResponse:
        """Execute get user interactions flow.

        Raises:
            UnauthorizedError: If the caller is anonymous
        """
        records = await self.interaction_service.list_for_user(
            user_id=parse_user_id(request.user_id),
            interaction_filter=request.filter,
            limit=request.limit,
            offset=(request.page - 1) * request.limit,
        )
        return GetUserInteractionsResponse(
            interactions=[
                UserInteractionItem(
                    post_id=str(record.post_id),
                    liked=record.liked,
                    saved=record.saved,
                    viewed=record.viewed,
                    view_count=record.view_count,
                    updated_at=record.updated_at,
                )
                for record in records
            ],
            page=request.page,
            limit=request.limit,
        )
