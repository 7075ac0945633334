"""In-memory discussion repository for testing."""

from typing import Optional

from opaq.domain.model import Discussion
from opaq.domain.model.common import utcnow
from opaq.domain.repository import DiscussionRepository
from opaq.domain.value import DiscussionId, DiscussionSort, PostId


def _sort_key(sort: DiscussionSort):
    # Sorted descending; timestamps are negated for the ascending order.
    if sort == DiscussionSort.NEWEST:
        return lambda d: (d.is_pinned, d.created_at)
    if sort == DiscussionSort.TOP:
        return lambda d: (d.likes, d.created_at)
    if sort == DiscussionSort.REPLIES:
        return lambda d: (d.replies_count, d.created_at)
    return lambda d: -d.created_at.timestamp()


class InMemoryDiscussionRepository(DiscussionRepository):
    """In-memory implementation of DiscussionRepository for testing."""

    def __init__(self) -> None:
        self._discussions: dict[DiscussionId, Discussion] = {}

    def _thread(
        self, post_id: PostId, parent_id: Optional[DiscussionId]
    ) -> list[Discussion]:
        return [
            d
            for d in self._discussions.values()
            if d.post_id == post_id and d.parent_id == parent_id
        ]

    def _update(self, discussion_id: DiscussionId, **fields) -> Optional[Discussion]:
        discussion = self._discussions.get(discussion_id)
        if discussion is None:
            return None
        updated = discussion.model_copy(update={**fields, "updated_at": utcnow()})
        self._discussions[discussion_id] = updated
        return updated

    async def find_by_id(self, discussion_id: DiscussionId) -> Optional[Discussion]:
        """Find a discussion by ID."""
        return self._discussions.get(discussion_id)

    async def find_by_post(
        self,
        post_id: PostId,
        parent_id: Optional[DiscussionId] = None,
        sort: DiscussionSort = DiscussionSort.NEWEST,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Discussion]:
        """Find one page of discussions for a post."""
        discussions = sorted(
            self._thread(post_id, parent_id), key=_sort_key(sort), reverse=True
        )
        return discussions[offset : offset + limit]

    async def count_by_post(
        self, post_id: PostId, parent_id: Optional[DiscussionId] = None
    ) -> int:
        """Count discussions matching the same filter as find_by_post."""
        return len(self._thread(post_id, parent_id))

    async def count_all_by_post(self, post_id: PostId) -> int:
        """Count every discussion on a post."""
        return sum(1 for d in self._discussions.values() if d.post_id == post_id)

    async def save(self, discussion: Discussion) -> Discussion:
        """Insert a new discussion."""
        self._discussions[discussion.id] = discussion
        return discussion

    async def update_content(
        self, discussion_id: DiscussionId, content: str
    ) -> Optional[Discussion]:
        """Replace content and mark the discussion as edited."""
        return self._update(discussion_id, content=content, is_edited=True)

    async def set_pinned(
        self, discussion_id: DiscussionId, pinned: bool
    ) -> Optional[Discussion]:
        """Set the pinned flag."""
        return self._update(discussion_id, is_pinned=pinned)

    async def toggle_hearted(self, discussion_id: DiscussionId) -> Optional[Discussion]:
        """Flip the hearted flag."""
        discussion = self._discussions.get(discussion_id)
        if discussion is None:
            return None
        return self._update(discussion_id, is_hearted=not discussion.is_hearted)

    async def adjust_likes(self, discussion_id: DiscussionId, delta: int) -> None:
        """Add delta to the likes counter (never below 0)."""
        discussion = self._discussions.get(discussion_id)
        if discussion is not None:
            self._discussions[discussion_id] = discussion.model_copy(
                update={"likes": max(discussion.likes + delta, 0)}
            )

    async def adjust_replies_count(
        self, discussion_id: DiscussionId, delta: int
    ) -> None:
        """Add delta to the replies counter (never below 0)."""
        discussion = self._discussions.get(discussion_id)
        if discussion is not None:
            self._discussions[discussion_id] = discussion.model_copy(
                update={"replies_count": max(discussion.replies_count + delta, 0)}
            )

    async def find_thread_ids(self, discussion_id: DiscussionId) -> list[DiscussionId]:
        """Return the discussion's ID followed by the IDs of its direct replies."""
        if discussion_id not in self._discussions:
            return []
        replies = [
            d.id for d in self._discussions.values() if d.parent_id == discussion_id
        ]
        return [discussion_id, *replies]

    async def delete_thread(self, discussion_id: DiscussionId) -> list[DiscussionId]:
        """Delete a discussion together with its direct replies."""
        deleted = await self.find_thread_ids(discussion_id)
        for did in deleted:
            del self._discussions[did]
        return deleted
