"""List discussions use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from opaq.config import DiscussionSettings
from opaq.domain.service import (
    DiscussionInteractionService,
    DiscussionService,
    UserService,
)
from opaq.domain.value import DiscussionId, DiscussionSort, PostId

from ..base import BaseUseCase, Pagination, parse_user_id
from .discussion_item import DiscussionItem, build_discussion_items


class ListDiscussionsRequest(BaseModel):
    """List discussions request."""

    post_id: str  # UUID string
    parent_id: str | None = None  # None lists top-level discussions
    sort: DiscussionSort = DiscussionSort.NEWEST
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)  # Defaults to configured size
    user_id: str | None = None  # Optional caller


class ListDiscussionsResponse(BaseModel):
    """List discussions response."""

    discussions: list[DiscussionItem]
    pagination: Pagination


class ListDiscussionsUseCase(BaseUseCase):
    """Use case for listing one page of a post's discussions or replies."""

    def __init__(
        self,
        discussion_service: DiscussionService,
        discussion_interaction_service: DiscussionInteractionService,
        user_service: UserService,
        discussion_settings: DiscussionSettings,
    ) -> None:
        """Initialize list discussions use case.

        Args:
            discussion_service: Discussion domain service
            discussion_interaction_service: Discussion interaction domain service
            user_service: User domain service
            discussion_settings: Page size limits
        """
        self.discussion_service = discussion_service
        self.discussion_interaction_service = discussion_interaction_service
        self.user_service = user_service
        self.discussion_settings = discussion_settings

    async def execute(self, request: ListDiscussionsRequest) -> ListDiscussionsResponse:
        """Execute list discussions flow.

        Page size is capped at the configured maximum.
        """
        viewer_id = parse_user_id(request.user_id)
        limit = min(
            request.limit or self.discussion_settings.default_page_size,
            self.discussion_settings.max_page_size,
        )

        discussions, total = await self.discussion_service.list_discussions(
            post_id=PostId(UUID(request.post_id)),
            viewer_id=viewer_id,
            parent_id=(
                DiscussionId(UUID(request.parent_id)) if request.parent_id else None
            ),
            sort=request.sort,
            limit=limit,
            offset=(request.page - 1) * limit,
        )
        items = await build_discussion_items(
            discussions,
            viewer_id,
            self.user_service,
            self.discussion_interaction_service,
        )
        return ListDiscussionsResponse(
            discussions=items,
            pagination=Pagination.build(page=request.page, limit=limit, total=total),
        )
