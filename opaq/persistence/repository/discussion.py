"""PostgreSQL implementation of Discussion repository."""

from typing import List, Optional

import logfire
from sqlalchemy import and_, delete, func, insert, not_, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from opaq.domain.model import Discussion
from opaq.domain.repository import DiscussionRepository
from opaq.domain.value import DiscussionId, DiscussionSort, PostId
from opaq.persistence.mappers import discussion_to_dict, row_to_discussion
from opaq.persistence.tables import discussions_table

# Every sort ends with created_at then id so pages are stable.
_SORT_ORDER = {
    DiscussionSort.NEWEST: (
        discussions_table.c.is_pinned.desc(),
        discussions_table.c.created_at.desc(),
    ),
    DiscussionSort.OLDEST: (discussions_table.c.created_at.asc(),),
    DiscussionSort.TOP: (
        discussions_table.c.likes.desc(),
        discussions_table.c.created_at.desc(),
    ),
    DiscussionSort.REPLIES: (
        discussions_table.c.replies_count.desc(),
        discussions_table.c.created_at.desc(),
    ),
}


class PostgresDiscussionRepository(DiscussionRepository):
    """PostgreSQL implementation of DiscussionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _thread_filter(post_id: PostId, parent_id: Optional[DiscussionId]):
        if parent_id is None:
            parent_clause = discussions_table.c.parent_id.is_(None)
        else:
            parent_clause = discussions_table.c.parent_id == parent_id
        return and_(discussions_table.c.post_id == post_id, parent_clause)

    async def _update_returning(
        self, discussion_id: DiscussionId, **values
    ) -> Optional[Discussion]:
        stmt = (
            update(discussions_table)
            .where(discussions_table.c.id == discussion_id)
            .values(updated_at=func.now(), **values)
            .returning(discussions_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_discussion(row._asdict()) if row else None

    async def find_by_id(self, discussion_id: DiscussionId) -> Optional[Discussion]:
        """Find a discussion by ID."""
        stmt = select(discussions_table).where(discussions_table.c.id == discussion_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_discussion(row._asdict()) if row else None

    async def find_by_post(
        self,
        post_id: PostId,
        parent_id: Optional[DiscussionId] = None,
        sort: DiscussionSort = DiscussionSort.NEWEST,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Discussion]:
        """Find one page of discussions for a post."""
        with logfire.span(
            "discussion_repository.find_by_post",
            post_id=str(post_id),
            sort=sort.value,
        ):
            stmt = (
                select(discussions_table)
                .where(self._thread_filter(post_id, parent_id))
                .order_by(*_SORT_ORDER[sort], discussions_table.c.id)
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            return [row_to_discussion(row._asdict()) for row in result.fetchall()]

    async def count_by_post(
        self, post_id: PostId, parent_id: Optional[DiscussionId] = None
    ) -> int:
        """Count discussions matching the same filter as find_by_post."""
        stmt = (
            select(func.count())
            .select_from(discussions_table)
            .where(self._thread_filter(post_id, parent_id))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_all_by_post(self, post_id: PostId) -> int:
        """Count every discussion on a post, top-level and replies."""
        stmt = (
            select(func.count())
            .select_from(discussions_table)
            .where(discussions_table.c.post_id == post_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, discussion: Discussion) -> Discussion:
        """Insert a new discussion."""
        stmt = insert(discussions_table).values(**discussion_to_dict(discussion))
        await self.session.execute(stmt)
        await self.session.flush()
        return discussion

    async def update_content(
        self, discussion_id: DiscussionId, content: str
    ) -> Optional[Discussion]:
        """Replace content and mark the discussion as edited."""
        return await self._update_returning(
            discussion_id, content=content, is_edited=True
        )

    async def set_pinned(
        self, discussion_id: DiscussionId, pinned: bool
    ) -> Optional[Discussion]:
        """Set the pinned flag."""
        return await self._update_returning(discussion_id, is_pinned=pinned)

    async def toggle_hearted(self, discussion_id: DiscussionId) -> Optional[Discussion]:
        """Atomically flip the hearted flag."""
        return await self._update_returning(
            discussion_id, is_hearted=not_(discussions_table.c.is_hearted)
        )

    async def adjust_likes(self, discussion_id: DiscussionId, delta: int) -> None:
        """Atomically add delta to the likes counter (never below 0)."""
        stmt = (
            update(discussions_table)
            .where(discussions_table.c.id == discussion_id)
            .values(likes=func.greatest(discussions_table.c.likes + delta, 0))
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def adjust_replies_count(
        self, discussion_id: DiscussionId, delta: int
    ) -> None:
        """Atomically add delta to the replies counter (never below 0)."""
        stmt = (
            update(discussions_table)
            .where(discussions_table.c.id == discussion_id)
            .values(
                replies_count=func.greatest(
                    discussions_table.c.replies_count + delta, 0
                )
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def find_thread_ids(self, discussion_id: DiscussionId) -> List[DiscussionId]:
        """Return the discussion's ID followed by the IDs of its direct replies."""
        stmt = (
            select(discussions_table.c.id)
            .where(
                or_(
                    discussions_table.c.id == discussion_id,
                    discussions_table.c.parent_id == discussion_id,
                )
            )
            .order_by(discussions_table.c.parent_id.is_not(None))
        )
        result = await self.session.execute(stmt)
        return [DiscussionId(row.id) for row in result.fetchall()]

    async def delete_thread(self, discussion_id: DiscussionId) -> List[DiscussionId]:
        """Delete a discussion together with its direct replies."""
        with logfire.span(
            "discussion_repository.delete_thread", discussion_id=str(discussion_id)
        ):
            stmt = (
                delete(discussions_table)
                .where(
                    or_(
                        discussions_table.c.id == discussion_id,
                        discussions_table.c.parent_id == discussion_id,
                    )
                )
                .returning(discussions_table.c.id)
            )
            result = await self.session.execute(stmt)
            deleted = [DiscussionId(row.id) for row in result.fetchall()]
            await self.session.flush()
            return deleted
