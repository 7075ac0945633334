"""Post interaction domain service."""

import logfire

from opaq.domain.error import InvalidInputError
from opaq.domain.model import PostInteraction, PostStats
from opaq.domain.model.common import utcnow
from opaq.domain.repository import DiscussionRepository, PostInteractionRepository
from opaq.domain.value import InteractionAction, InteractionFilter, PostId, UserId

from .base import Service
from .post_service import PostService


class InteractionService(Service):
    """Domain service for the post interaction ledger.

    Post statistics are never cached on the post: they are reduced from the
    ledger on every read, so there is no counter to keep in sync.
    """

    def __init__(
        self,
        post_interaction_repository: PostInteractionRepository,
        discussion_repository: DiscussionRepository,
        post_service: PostService,
    ) -> None:
        """Initialize interaction service.

        Args:
            post_interaction_repository: Post interaction repository
            discussion_repository: Discussion repository, for comment counts
            post_service: Post domain service
        """
        self.post_interaction_repository = post_interaction_repository
        self.discussion_repository = discussion_repository
        self.post_service = post_service

    async def submit(
        self,
        user_id: UserId | None,
        post_id: PostId,
        action: InteractionAction,
        value: bool | None = None,
    ) -> tuple[PostInteraction, PostStats]:
        """Apply a like, save or view to a post.

        ``like`` and ``save`` set the flag to ``value``, so repeating a
        submission is a no-op. ``view`` always counts.

        Args:
            user_id: Caller
            post_id: Target post
            action: Action to apply
            value: Target flag state, required for like and save

        Returns:
            (updated record, fresh post stats)

        Raises:
            UnauthorizedError: If the caller is anonymous
            InvalidInputError: If value is missing for like or save
            NotFoundError: If the post does not exist or is not visible
        """
        user_id = self.require_user(user_id)
        with logfire.span(
            "interaction_service.submit",
            user_id=str(user_id),
            post_id=str(post_id),
            action=action.value,
            value=value,
        ):
            if action != InteractionAction.VIEW and value is None:
                raise InvalidInputError(
                    f"A value is required for the '{action.value}' action",
                    field="value",
                )

            await self.post_service.get_visible_post(post_id, user_id)

            now = utcnow()
            if action == InteractionAction.LIKE:
                record = await self.post_interaction_repository.set_liked(
                    user_id, post_id, bool(value), now
                )
            elif action == InteractionAction.SAVE:
                record = await self.post_interaction_repository.set_saved(
                    user_id, post_id, bool(value), now
                )
            else:
                record = await self.post_interaction_repository.record_view(
                    user_id, post_id, now
                )

            stats = await self.get_stats(post_id)
            logfire.info(
                "Interaction recorded",
                user_id=str(user_id),
                post_id=str(post_id),
                action=action.value,
                likes=stats.likes,
                saves=stats.saves,
                views=stats.views,
            )
            return record, stats

    async def get_stats(self, post_id: PostId) -> PostStats:
        """Compute point-in-time stats for a post from the ledger."""
        with logfire.span("interaction_service.get_stats", post_id=str(post_id)):
            stats = await self.post_interaction_repository.aggregate_stats(post_id)
            comments = await self.discussion_repository.count_all_by_post(post_id)
            return stats.model_copy(update={"comments": comments})

    async def query(
        self, post_id: PostId, user_id: UserId | None = None
    ) -> tuple[PostStats, PostInteraction | None]:
        """Read stats for a post and, for an authenticated caller, their own record.

        Args:
            post_id: Target post
            user_id: Caller, None when anonymous

        Returns:
            (stats, caller's record or None if they never interacted)

        Raises:
            NotFoundError: If the post does not exist or is not visible
        """
        with logfire.span(
            "interaction_service.query",
            post_id=str(post_id),
            user_id=str(user_id) if user_id else None,
        ):
            await self.post_service.get_visible_post(post_id, user_id)
            stats = await self.get_stats(post_id)

            record = None
            if user_id is not None:
                record = await self.post_interaction_repository.find_by_user_and_post(
                    user_id, post_id
                )
            return stats, record

    async def list_for_user(
        self,
        user_id: UserId | None,
        interaction_filter: InteractionFilter = InteractionFilter.ALL,
        limit: int = 20,
        offset: int = 0,
    ) -> list[PostInteraction]:
        """List the caller's own interaction records, most recent first.

        Raises:
            UnauthorizedError: If the caller is anonymous
        """
        user_id = self.require_user(user_id)
        with logfire.span(
            "interaction_service.list_for_user",
            user_id=str(user_id),
            filter=interaction_filter.value,
        ):
            records = await self.post_interaction_repository.find_by_user(
                user_id, interaction_filter, limit=limit, offset=offset
            )
            logfire.info(
                "User interactions retrieved",
                user_id=str(user_id),
                count=len(records),
            )
            return records
