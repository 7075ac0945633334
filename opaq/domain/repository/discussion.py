"""Discussion repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from opaq.domain.model.discussion import Discussion
from opaq.domain.value import DiscussionId, DiscussionSort, PostId


class DiscussionRepository(ABC):
    """Repository for Discussion entity.

    Counter and flag changes are single atomic statements; callers never
    read-modify-write a discussion to change them.
    """

    @abstractmethod
    async def find_by_id(self, discussion_id: DiscussionId) -> Optional[Discussion]:
        """Find a discussion by ID.

        Args:
            discussion_id: The discussion's unique identifier

        Returns:
            The discussion if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(
        self,
        post_id: PostId,
        parent_id: Optional[DiscussionId] = None,
        sort: DiscussionSort = DiscussionSort.NEWEST,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Discussion]:
        """Find one page of discussions for a post.

        Args:
            post_id: The post ID
            parent_id: None for top-level discussions, otherwise the replies
                of that discussion
            sort: Sort order
            limit: Maximum number of discussions to return
            offset: Number of discussions to skip

        Returns:
            Discussions in the requested order
        """
        pass

    @abstractmethod
    async def count_by_post(
        self, post_id: PostId, parent_id: Optional[DiscussionId] = None
    ) -> int:
        """Count discussions matching the same filter as find_by_post."""
        pass

    @abstractmethod
    async def count_all_by_post(self, post_id: PostId) -> int:
        """Count every discussion on a post, top-level and replies."""
        pass

    @abstractmethod
    async def save(self, discussion: Discussion) -> Discussion:
        """Insert a new discussion."""
        pass

    @abstractmethod
    async def update_content(
        self, discussion_id: DiscussionId, content: str
    ) -> Optional[Discussion]:
        """Replace content and mark the discussion as edited.

        Returns:
            Updated discussion, None if it does not exist
        """
        pass

    @abstractmethod
    async def set_pinned(
        self, discussion_id: DiscussionId, pinned: bool
    ) -> Optional[Discussion]:
        """Set the pinned flag.

        Returns:
            Updated discussion, None if it does not exist
        """
        pass

    @abstractmethod
    async def toggle_hearted(self, discussion_id: DiscussionId) -> Optional[Discussion]:
        """Atomically flip the hearted flag.

        Returns:
            Updated discussion, None if it does not exist
        """
        pass

    @abstractmethod
    async def adjust_likes(self, discussion_id: DiscussionId, delta: int) -> None:
        """Atomically add delta to the likes counter (never below 0)."""
        pass

    @abstractmethod
    async def adjust_replies_count(
        self, discussion_id: DiscussionId, delta: int
    ) -> None:
        """Atomically add delta to the replies counter (never below 0)."""
        pass

    @abstractmethod
    async def find_thread_ids(self, discussion_id: DiscussionId) -> List[DiscussionId]:
        """Return the discussion's ID followed by the IDs of its direct replies."""
        pass

    @abstractmethod
    async def delete_thread(self, discussion_id: DiscussionId) -> List[DiscussionId]:
        """Delete a discussion together with its direct replies.

        Returns:
            IDs of every deleted discussion
        """
        pass
