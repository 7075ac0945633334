"""PostgreSQL implementations of the interaction ledger repositories.

Rows are keyed by (user_id, target_id) with a unique constraint. Plain
flag writes are a single ``INSERT ... ON CONFLICT DO UPDATE``. Transitions
that drive a denormalized counter first ensure the row exists, then lock it
with ``SELECT ... FOR UPDATE`` so the previous state they return stays valid
until the request transaction commits.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple
from uuid import uuid4

from sqlalchemy import Table, and_, delete, func, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

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
    PitchId,
    PostId,
    UserId,
)
from opaq.persistence.mappers import (
    row_to_discussion_interaction,
    row_to_pitch_interaction,
    row_to_post_interaction,
)
from opaq.persistence.tables import (
    discussion_interactions_table,
    pitch_interactions_table,
    post_interactions_table,
)


async def _lock_or_create(
    session: AsyncSession, table: Table, key: Dict[str, Any], at: datetime
) -> Row:
    """Ensure the ledger row for ``key`` exists and lock it for this transaction."""
    await session.execute(
        insert(table)
        .values(id=uuid4(), created_at=at, updated_at=at, **key)
        .on_conflict_do_nothing(index_elements=list(key))
    )
    stmt = (
        select(table)
        .where(and_(*(table.c[name] == value for name, value in key.items())))
        .with_for_update()
    )
    result = await session.execute(stmt)
    return result.one()


class PostgresPostInteractionRepository(PostInteractionRepository):
    """PostgreSQL implementation of PostInteractionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _upsert(
        self,
        user_id: UserId,
        post_id: PostId,
        at: datetime,
        on_insert: Dict[str, Any],
        on_update: Dict[str, Any],
    ) -> PostInteraction:
        stmt = (
            insert(post_interactions_table)
            .values(
                id=uuid4(),
                user_id=user_id,
                post_id=post_id,
                created_at=at,
                updated_at=at,
                **on_insert,
            )
            .on_conflict_do_update(
                index_elements=[
                    post_interactions_table.c.user_id,
                    post_interactions_table.c.post_id,
                ],
                set_={"updated_at": at, **on_update},
            )
            .returning(post_interactions_table)
        )
        result = await self.session.execute(stmt)
        row = result.one()
        await self.session.flush()
        return row_to_post_interaction(row._asdict())

    async def find_by_user_and_post(
        self, user_id: UserId, post_id: PostId
    ) -> Optional[PostInteraction]:
        """Find a user's interaction record for a post."""
        stmt = select(post_interactions_table).where(
            and_(
                post_interactions_table.c.user_id == user_id,
                post_interactions_table.c.post_id == post_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post_interaction(row._asdict()) if row else None

    async def set_liked(
        self, user_id: UserId, post_id: PostId, liked: bool, at: datetime
    ) -> PostInteraction:
        """Set the liked flag, stamping last_liked_at only when liked is True."""
        stamp = at if liked else post_interactions_table.c.last_liked_at
        return await self._upsert(
            user_id,
            post_id,
            at,
            on_insert={"liked": liked, "last_liked_at": at if liked else None},
            on_update={"liked": liked, "last_liked_at": stamp},
        )

    async def set_saved(
        self, user_id: UserId, post_id: PostId, saved: bool, at: datetime
    ) -> PostInteraction:
        """Set the saved flag, stamping last_saved_at only when saved is True."""
        stamp = at if saved else post_interactions_table.c.last_saved_at
        return await self._upsert(
            user_id,
            post_id,
            at,
            on_insert={"saved": saved, "last_saved_at": at if saved else None},
            on_update={"saved": saved, "last_saved_at": stamp},
        )

    async def record_view(
        self, user_id: UserId, post_id: PostId, at: datetime
    ) -> PostInteraction:
        """Mark viewed, increment view_count and refresh last_viewed_at."""
        return await self._upsert(
            user_id,
            post_id,
            at,
            on_insert={"viewed": True, "view_count": 1, "last_viewed_at": at},
            on_update={
                "viewed": True,
                "view_count": post_interactions_table.c.view_count + 1,
                "last_viewed_at": at,
            },
        )

    async def aggregate_stats(self, post_id: PostId) -> PostStats:
        """Reduce every ledger row of a post."""
        t = post_interactions_table
        stmt = select(
            func.count().filter(t.c.liked.is_(True)).label("likes"),
            func.count().filter(t.c.saved.is_(True)).label("saves"),
            func.coalesce(func.sum(t.c.view_count), 0).label("views"),
        ).where(t.c.post_id == post_id)
        result = await self.session.execute(stmt)
        row = result.one()
        return PostStats(likes=row.likes, saves=row.saves, views=int(row.views))

    async def find_by_user(
        self,
        user_id: UserId,
        interaction_filter: InteractionFilter = InteractionFilter.ALL,
        limit: int = 20,
        offset: int = 0,
    ) -> List[PostInteraction]:
        """Find a user's records, most recently updated first."""
        t = post_interactions_table
        stmt = select(t).where(t.c.user_id == user_id)
        if interaction_filter == InteractionFilter.LIKED:
            stmt = stmt.where(t.c.liked.is_(True))
        elif interaction_filter == InteractionFilter.SAVED:
            stmt = stmt.where(t.c.saved.is_(True))
        stmt = stmt.order_by(t.c.updated_at.desc(), t.c.id).limit(limit).offset(offset)

        result = await self.session.execute(stmt)
        return [row_to_post_interaction(row._asdict()) for row in result.fetchall()]


class PostgresDiscussionInteractionRepository(DiscussionInteractionRepository):
    """PostgreSQL implementation of DiscussionInteractionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_discussion(
        self, user_id: UserId, discussion_id: DiscussionId
    ) -> Optional[DiscussionInteraction]:
        """Find a user's interaction record for a discussion."""
        t = discussion_interactions_table
        stmt = select(t).where(
            and_(t.c.user_id == user_id, t.c.discussion_id == discussion_id)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_discussion_interaction(row._asdict()) if row else None

    async def find_by_user_and_discussions(
        self, user_id: UserId, discussion_ids: Sequence[DiscussionId]
    ) -> List[DiscussionInteraction]:
        """Find a user's records for several discussions (batch query)."""
        if not discussion_ids:
            return []

        t = discussion_interactions_table
        stmt = select(t).where(
            and_(t.c.user_id == user_id, t.c.discussion_id.in_(list(discussion_ids)))
        )
        result = await self.session.execute(stmt)
        return [
            row_to_discussion_interaction(row._asdict()) for row in result.fetchall()
        ]

    async def set_liked(
        self, user_id: UserId, discussion_id: DiscussionId, liked: bool, at: datetime
    ) -> Tuple[bool, DiscussionInteraction]:
        """Set the liked flag, returning the locked previous value."""
        t = discussion_interactions_table
        current = await _lock_or_create(
            self.session,
            t,
            {"user_id": user_id, "discussion_id": discussion_id},
            at,
        )
        stmt = (
            update(t)
            .where(t.c.id == current.id)
            .values(
                liked=liked,
                last_liked_at=at if liked else t.c.last_liked_at,
                updated_at=at,
            )
            .returning(t)
        )
        result = await self.session.execute(stmt)
        row = result.one()
        await self.session.flush()
        return current.liked, row_to_discussion_interaction(row._asdict())

    async def delete_by_discussions(self, discussion_ids: Sequence[DiscussionId]) -> int:
        """Delete every record referencing the given discussions."""
        if not discussion_ids:
            return 0

        stmt = delete(discussion_interactions_table).where(
            discussion_interactions_table.c.discussion_id.in_(list(discussion_ids))
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def count_liked(self, discussion_id: DiscussionId) -> int:
        """Count records with liked=True for a discussion."""
        t = discussion_interactions_table
        stmt = (
            select(func.count())
            .select_from(t)
            .where(and_(t.c.discussion_id == discussion_id, t.c.liked.is_(True)))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0


class PostgresPitchInteractionRepository(PitchInteractionRepository):
    """PostgreSQL implementation of PitchInteractionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _lock(self, user_id: UserId, pitch_id: PitchId, at: datetime) -> Row:
        return await _lock_or_create(
            self.session,
            pitch_interactions_table,
            {"user_id": user_id, "pitch_id": pitch_id},
            at,
        )

    async def _update(self, interaction_id, **values) -> PitchInteraction:
        t = pitch_interactions_table
        stmt = (
            update(t).where(t.c.id == interaction_id).values(**values).returning(t)
        )
        result = await self.session.execute(stmt)
        row = result.one()
        await self.session.flush()
        return row_to_pitch_interaction(row._asdict())

    async def find_by_user_and_pitch(
        self, user_id: UserId, pitch_id: PitchId
    ) -> Optional[PitchInteraction]:
        """Find a user's interaction record for a pitch."""
        t = pitch_interactions_table
        stmt = select(t).where(and_(t.c.user_id == user_id, t.c.pitch_id == pitch_id))
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_pitch_interaction(row._asdict()) if row else None

    async def mark_viewed(
        self, user_id: UserId, pitch_id: PitchId, at: datetime
    ) -> Tuple[bool, PitchInteraction]:
        """Record a view under a row lock."""
        current = await self._lock(user_id, pitch_id, at)
        first_view = not current.has_viewed
        updated = await self._update(
            current.id,
            has_viewed=True,
            first_viewed_at=at if first_view else current.first_viewed_at,
            last_viewed_at=at,
            updated_at=at,
        )
        return first_view, updated

    async def toggle_like(
        self, user_id: UserId, pitch_id: PitchId, at: datetime
    ) -> PitchInteraction:
        """Flip has_liked under a row lock."""
        current = await self._lock(user_id, pitch_id, at)
        liked = not current.has_liked
        return await self._update(
            current.id,
            has_liked=liked,
            liked_at=at if liked else None,
            updated_at=at,
        )

    async def count_liked(self, pitch_id: PitchId) -> int:
        """Count records with has_liked=True for a pitch."""
        t = pitch_interactions_table
        stmt = (
            select(func.count())
            .select_from(t)
            .where(and_(t.c.pitch_id == pitch_id, t.c.has_liked.is_(True)))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_viewed(self, pitch_id: PitchId) -> int:
        """Count records with has_viewed=True for a pitch."""
        t = pitch_interactions_table
        stmt = (
            select(func.count())
            .select_from(t)
            .where(and_(t.c.pitch_id == pitch_id, t.c.has_viewed.is_(True)))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
