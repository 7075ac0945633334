"""In-memory interaction ledger repositories for testing."""

from datetime import datetime
from typing import Optional, Sequence
from uuid import uuid4

from opaq.domain.model import (
    DiscussionInteraction,
    PitchInteraction,
    PostInteraction,
    PostStats,
)
from opaq.domain.repository import (
    DiscussionInteractionRepository,
    PitchInteractionRepository,
    PostInteractionRepository,
)
from opaq.domain.value import (
    DiscussionId,
    InteractionFilter,
    InteractionId,
    PitchId,
    PostId,
    UserId,
)


class InMemoryPostInteractionRepository(PostInteractionRepository):
    """In-memory implementation of PostInteractionRepository for testing."""

    def __init__(self) -> None:
        self._records: dict[tuple[UserId, PostId], PostInteraction] = {}

    def _get_or_create(
        self, user_id: UserId, post_id: PostId, at: datetime
    ) -> PostInteraction:
        record = self._records.get((user_id, post_id))
        if record is None:
            record = PostInteraction(
                id=InteractionId(uuid4()),
                user_id=user_id,
                post_id=post_id,
                created_at=at,
                updated_at=at,
            )
        return record

    def _store(self, record: PostInteraction, at: datetime, **fields) -> PostInteraction:
        updated = record.model_copy(update={**fields, "updated_at": at})
        self._records[(record.user_id, record.post_id)] = updated
        return updated

    async def find_by_user_and_post(
        self, user_id: UserId, post_id: PostId
    ) -> Optional[PostInteraction]:
        """Find a user's interaction record for a post."""
        return self._records.get((user_id, post_id))

    async def set_liked(
        self, user_id: UserId, post_id: PostId, liked: bool, at: datetime
    ) -> PostInteraction:
        """Set the liked flag."""
        record = self._get_or_create(user_id, post_id, at)
        return self._store(
            record,
            at,
            liked=liked,
            last_liked_at=at if liked else record.last_liked_at,
        )

    async def set_saved(
        self, user_id: UserId, post_id: PostId, saved: bool, at: datetime
    ) -> PostInteraction:
        """Set the saved flag."""
        record = self._get_or_create(user_id, post_id, at)
        return self._store(
            record,
            at,
            saved=saved,
            last_saved_at=at if saved else record.last_saved_at,
        )

    async def record_view(
        self, user_id: UserId, post_id: PostId, at: datetime
    ) -> PostInteraction:
        """Mark viewed and increment view_count."""
        record = self._get_or_create(user_id, post_id, at)
        return self._store(
            record,
            at,
            viewed=True,
            view_count=record.view_count + 1,
            last_viewed_at=at,
        )

    async def aggregate_stats(self, post_id: PostId) -> PostStats:
        """Reduce every ledger row of a post."""
        records = [r for r in self._records.values() if r.post_id == post_id]
        return PostStats(
            likes=sum(1 for r in records if r.liked),
            saves=sum(1 for r in records if r.saved),
            views=sum(r.view_count for r in records),
        )

    async def find_by_user(
        self,
        user_id: UserId,
        interaction_filter: InteractionFilter = InteractionFilter.ALL,
        limit: int = 20,
        offset: int = 0,
    ) -> list[PostInteraction]:
        """Find a user's records, most recently updated first."""
        records = [r for r in self._records.values() if r.user_id == user_id]
        if interaction_filter == InteractionFilter.LIKED:
            records = [r for r in records if r.liked]
        elif interaction_filter == InteractionFilter.SAVED:
            records = [r for r in records if r.saved]
        records.sort(key=lambda r: r.updated_at, reverse=True)
        return records[offset : offset + limit]


class InMemoryDiscussionInteractionRepository(DiscussionInteractionRepository):
    """In-memory implementation of DiscussionInteractionRepository for testing."""

    def __init__(self) -> None:
        self._records: dict[tuple[UserId, DiscussionId], DiscussionInteraction] = {}

    async def find_by_user_and_discussion(
        self, user_id: UserId, discussion_id: DiscussionId
    ) -> Optional[DiscussionInteraction]:
        """Find a user's interaction record for a discussion."""
        return self._records.get((user_id, discussion_id))

    async def find_by_user_and_discussions(
        self, user_id: UserId, discussion_ids: Sequence[DiscussionId]
    ) -> list[DiscussionInteraction]:
        """Find a user's records for several discussions."""
        return [
            self._records[(user_id, did)]
            for did in discussion_ids
            if (user_id, did) in self._records
        ]

    async def set_liked(
        self, user_id: UserId, discussion_id: DiscussionId, liked: bool, at: datetime
    ) -> tuple[bool, DiscussionInteraction]:
        """Set the liked flag, returning the previous value."""
        record = self._records.get((user_id, discussion_id))
        if record is None:
            record = DiscussionInteraction(
                id=InteractionId(uuid4()),
                user_id=user_id,
                discussion_id=discussion_id,
                created_at=at,
                updated_at=at,
            )
        updated = record.model_copy(
            update={
                "liked": liked,
                "last_liked_at": at if liked else record.last_liked_at,
                "updated_at": at,
            }
        )
        self._records[(user_id, discussion_id)] = updated
        return record.liked, updated

    async def delete_by_discussions(self, discussion_ids: Sequence[DiscussionId]) -> int:
        """Delete every record referencing the given discussions."""
        ids = set(discussion_ids)
        keys = [key for key in self._records if key[1] in ids]
        for key in keys:
            del self._records[key]
        return len(keys)

    async def count_liked(self, discussion_id: DiscussionId) -> int:
        """Count records with liked=True for a discussion."""
        return sum(
            1
            for r in self._records.values()
            if r.discussion_id == discussion_id and r.liked
        )


class InMemoryPitchInteractionRepository(PitchInteractionRepository):
    """In-memory implementation of PitchInteractionRepository for testing."""

    def __init__(self) -> None:
        self._records: dict[tuple[UserId, PitchId], PitchInteraction] = {}

    def _get_or_create(
        self, user_id: UserId, pitch_id: PitchId, at: datetime
    ) -> PitchInteraction:
        record = self._records.get((user_id, pitch_id))
        if record is None:
            record = PitchInteraction(
                id=InteractionId(uuid4()),
                user_id=user_id,
                pitch_id=pitch_id,
                created_at=at,
                updated_at=at,
            )
        return record

    async def find_by_user_and_pitch(
        self, user_id: UserId, pitch_id: PitchId
    ) -> Optional[PitchInteraction]:
        """Find a user's interaction record for a pitch."""
        return self._records.get((user_id, pitch_id))

    async def mark_viewed(
        self, user_id: UserId, pitch_id: PitchId, at: datetime
    ) -> tuple[bool, PitchInteraction]:
        """Record a view."""
        record = self._get_or_create(user_id, pitch_id, at)
        first_view = not record.has_viewed
        updated = record.model_copy(
            update={
                "has_viewed": True,
                "first_viewed_at": at if first_view else record.first_viewed_at,
                "last_viewed_at": at,
                "updated_at": at,
            }
        )
        self._records[(user_id, pitch_id)] = updated
        return first_view, updated

    async def toggle_like(
        self, user_id: UserId, pitch_id: PitchId, at: datetime
    ) -> PitchInteraction:
        """Flip has_liked."""
        record = self._get_or_create(user_id, pitch_id, at)
        liked = not record.has_liked
        updated = record.model_copy(
            update={
                "has_liked": liked,
                "liked_at": at if liked else None,
                "updated_at": at,
            }
        )
        self._records[(user_id, pitch_id)] = updated
        return updated

    async def count_liked(self, pitch_id: PitchId) -> int:
        """Count records with has_liked=True for a pitch."""
        return sum(
            1 for r in self._records.values() if r.pitch_id == pitch_id and r.has_liked
        )

    async def count_viewed(self, pitch_id: PitchId) -> int:
        """Count records with has_viewed=True for a pitch."""
        return sum(
            1
            for r in self._records.values()
            if r.pitch_id == pitch_id and r.has_viewed
        )
