"""Discussion interaction domain service."""

from typing import Sequence

import logfire

from opaq.domain.error import InvalidInputError
from opaq.domain.model import Discussion, DiscussionInteraction
from opaq.domain.model.common import utcnow
from opaq.domain.repository import (
    DiscussionInteractionRepository,
    DiscussionRepository,
)
from opaq.domain.value import DiscussionId, UserId

from .base import Service
from .discussion_service import DiscussionService


class DiscussionInteractionService(Service):
    """Domain service for likes on discussions.

    The discussion ``likes`` counter is maintained incrementally. The ledger
    write and the counter delta run in the same transaction, and the delta is
    derived from the previous flag read under a row lock.
    """

    def __init__(
        self,
        discussion_interaction_repository: DiscussionInteractionRepository,
        discussion_repository: DiscussionRepository,
        discussion_service: DiscussionService,
    ) -> None:
        """Initialize discussion interaction service.

        Args:
            discussion_interaction_repository: Discussion interaction repository
            discussion_repository: Discussion repository
            discussion_service: Discussion domain service
        """
        self.discussion_interaction_repository = discussion_interaction_repository
        self.discussion_repository = discussion_repository
        self.discussion_service = discussion_service

    async def set_like(
        self,
        user_id: UserId | None,
        discussion_id: DiscussionId,
        value: bool | None,
    ) -> tuple[DiscussionInteraction, Discussion]:
        """Set the caller's like on a discussion.

        Args:
            user_id: Caller
            discussion_id: Target discussion
            value: Target like state, required

        Returns:
            (updated record, discussion with its current likes counter)

        Raises:
            UnauthorizedError: If the caller is anonymous
            InvalidInputError: If value is missing
            NotFoundError: If the discussion does not exist or is on a hidden post
        """
        user_id = self.require_user(user_id)
        if value is None:
            raise InvalidInputError(
                "A value is required for the 'like' action", field="value"
            )
        with logfire.span(
            "discussion_interaction_service.set_like",
            user_id=str(user_id),
            discussion_id=str(discussion_id),
            value=value,
        ):
            await self.discussion_service.get_visible_discussion(
                discussion_id, user_id
            )

            previous, record = await self.discussion_interaction_repository.set_liked(
                user_id, discussion_id, value, utcnow()
            )

            delta = 0 if previous == value else (1 if value else -1)
            if delta:
                await self.discussion_repository.adjust_likes(discussion_id, delta)

            discussion = await self.discussion_service.get_discussion(discussion_id)
            logfire.info(
                "Discussion like set",
                discussion_id=str(discussion_id),
                user_id=str(user_id),
                liked=value,
                delta=delta,
                likes=discussion.likes,
            )
            return record, discussion

    async def is_liked(
        self, user_id: UserId | None, discussion_id: DiscussionId
    ) -> bool:
        """Whether the caller likes a discussion; always False for anonymous callers.

        Raises:
            NotFoundError: If the discussion does not exist or is on a hidden post
        """
        await self.discussion_service.get_visible_discussion(discussion_id, user_id)
        if user_id is None:
            return False
        with logfire.span(
            "discussion_interaction_service.is_liked",
            user_id=str(user_id),
            discussion_id=str(discussion_id),
        ):
            record = await self.discussion_interaction_repository.find_by_user_and_discussion(
                user_id, discussion_id
            )
            return record is not None and record.liked

    async def get_liked_ids(
        self, user_id: UserId | None, discussion_ids: Sequence[DiscussionId]
    ) -> set[DiscussionId]:
        """Return the subset of discussion_ids the caller likes, in one query."""
        if user_id is None or not discussion_ids:
            return set()
        with logfire.span(
            "discussion_interaction_service.get_liked_ids",
            user_id=str(user_id),
            count=len(discussion_ids),
        ):
            records = await self.discussion_interaction_repository.find_by_user_and_discussions(
                user_id, discussion_ids
            )
            return {record.discussion_id for record in records if record.liked}
