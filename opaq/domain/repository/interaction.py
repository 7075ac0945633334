"""Interaction ledger repository interfaces.

Each ledger holds at most one row per (user, target). Every mutating method
is an atomic upsert: the row is created on first use and concurrent calls
for the same pair never produce a duplicate.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from opaq.domain.model.interaction import (
    DiscussionInteraction,
    PitchInteraction,
    PostInteraction,
)
from opaq.domain.model.stats import PostStats
from opaq.domain.value import (
    DiscussionId,
    InteractionFilter,
    PitchId,
    PostId,
    UserId,
)


class PostInteractionRepository(ABC):
    """Ledger of like/save/view state per (user, post)."""

    @abstractmethod
    async def find_by_user_and_post(
        self, user_id: UserId, post_id: PostId
    ) -> Optional[PostInteraction]:
        """Find a user's interaction record for a post.

        Args:
            user_id: The user's ID
            post_id: The post's ID

        Returns:
            The record if the user ever interacted with the post, None otherwise
        """
        pass

    @abstractmethod
    async def set_liked(
        self, user_id: UserId, post_id: PostId, liked: bool, at: datetime
    ) -> PostInteraction:
        """Set the liked flag, stamping last_liked_at only when liked is True."""
        pass

    @abstractmethod
    async def set_saved(
        self, user_id: UserId, post_id: PostId, saved: bool, at: datetime
    ) -> PostInteraction:
        """Set the saved flag, stamping last_saved_at only when saved is True."""
        pass

    @abstractmethod
    async def record_view(
        self, user_id: UserId, post_id: PostId, at: datetime
    ) -> PostInteraction:
        """Mark viewed, increment view_count and refresh last_viewed_at."""
        pass

    @abstractmethod
    async def aggregate_stats(self, post_id: PostId) -> PostStats:
        """Reduce every ledger row of a post.

        Returns:
            likes = count(liked), saves = count(saved), views = sum(view_count);
            comments is left at 0
        """
        pass

    @abstractmethod
    async def find_by_user(
        self,
        user_id: UserId,
        interaction_filter: InteractionFilter = InteractionFilter.ALL,
        limit: int = 20,
        offset: int = 0,
    ) -> List[PostInteraction]:
        """Find a user's records, most recently updated first."""
        pass


class DiscussionInteractionRepository(ABC):
    """Ledger of like state per (user, discussion)."""

    @abstractmethod
    async def find_by_user_and_discussion(
        self, user_id: UserId, discussion_id: DiscussionId
    ) -> Optional[DiscussionInteraction]:
        """Find a user's interaction record for a discussion."""
        pass

    @abstractmethod
    async def find_by_user_and_discussions(
        self, user_id: UserId, discussion_ids: Sequence[DiscussionId]
    ) -> List[DiscussionInteraction]:
        """Find a user's records for several discussions (batch query)."""
        pass

    @abstractmethod
    async def set_liked(
        self, user_id: UserId, discussion_id: DiscussionId, liked: bool, at: datetime
    ) -> Tuple[bool, DiscussionInteraction]:
        """Set the liked flag.

        The previous value is read under a row lock held until the
        surrounding transaction ends, so the caller can derive a counter
        delta that is consistent with concurrent requests.

        Returns:
            (previous liked value, updated record)
        """
        pass

    @abstractmethod
    async def delete_by_discussions(self, discussion_ids: Sequence[DiscussionId]) -> int:
        """Delete every record referencing the given discussions.

        Returns:
            Number of deleted records
        """
        pass

    @abstractmethod
    async def count_liked(self, discussion_id: DiscussionId) -> int:
        """Count records with liked=True for a discussion."""
        pass


class PitchInteractionRepository(ABC):
    """Ledger of view/like state per (user, pitch)."""

    @abstractmethod
    async def find_by_user_and_pitch(
        self, user_id: UserId, pitch_id: PitchId
    ) -> Optional[PitchInteraction]:
        """Find a user's interaction record for a pitch."""
        pass

    @abstractmethod
    async def mark_viewed(
        self, user_id: UserId, pitch_id: PitchId, at: datetime
    ) -> Tuple[bool, PitchInteraction]:
        """Record a view under a row lock.

        Returns:
            (True if this is the user's first view of the pitch, updated record)
        """
        pass

    @abstractmethod
    async def toggle_like(
        self, user_id: UserId, pitch_id: PitchId, at: datetime
    ) -> PitchInteraction:
        """Flip has_liked under a row lock.

        Returns:
            Updated record
        """
        pass

    @abstractmethod
    async def count_liked(self, pitch_id: PitchId) -> int:
        """Count records with has_liked=True for a pitch."""
        pass

    @abstractmethod
    async def count_viewed(self, pitch_id: PitchId) -> int:
        """Count records with has_viewed=True for a pitch."""
        pass
