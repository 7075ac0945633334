"""Update discussion use case (content edit or pin)."""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel

from opaq.domain.error import InvalidInputError
from opaq.domain.service import (
    DiscussionInteractionService,
    DiscussionService,
    UserService,
)
from opaq.domain.value import DiscussionId

from ..base import BaseUseCase, parse_user_id
from .discussion_item import DiscussionItem, build_discussion_items


class UpdateDiscussionRequest(BaseModel):
    """Update discussion request.

    Either ``content`` for an edit, or ``action="pin"`` with ``value``.
    """

    discussion_id: str  # UUID string
    content: str | None = None
    action: Literal["pin"] | None = None
    value: bool | None = None
    user_id: str | None = None  # User ID from authenticated user


class UpdateDiscussionResponse(BaseModel):
    """Update discussion response."""

    discussion: DiscussionItem


class UpdateDiscussionUseCase(BaseUseCase):
    """Use case for editing or pinning a discussion."""

    def __init__(
        self,
        discussion_service: DiscussionService,
        discussion_interaction_service: DiscussionInteractionService,
        user_service: UserService,
    ) -> None:
        """Initialize update discussion use case.

        Args:
            discussion_service: Discussion domain service
            discussion_interaction_service: Discussion interaction domain service
            user_service: User domain service
        """
        self.discussion_service = discussion_service
        self.discussion_interaction_service = discussion_interaction_service
        self.user_service = user_service

    async def execute(self, request: UpdateDiscussionRequest) -> UpdateDiscussionResponse:
        """Execute update discussion flow.

        Raises:
            UnauthorizedError: If the caller is anonymous
            InvalidInputError: If a pin has no value, or content is empty
            NotFoundError: If the discussion does not exist
            ForbiddenError: If the caller lacks ownership for the action
        """
        user_id = parse_user_id(request.user_id)
        discussion_id = DiscussionId(UUID(request.discussion_id))

        if request.action == "pin":
            if request.value is None:
                raise InvalidInputError("A value is required to pin", field="value")
            discussion = await self.discussion_service.pin(
                user_id, discussion_id, request.value
            )
        else:
            discussion = await self.discussion_service.edit(
                user_id, discussion_id, request.content or ""
            )

        [item] = await build_discussion_items(
            [discussion],
            user_id,
            self.user_service,
            self.discussion_interaction_service,
        )
        return UpdateDiscussionResponse(discussion=item)
