"""PostgreSQL implementation of Pitch repository."""

from typing import List, Optional

from sqlalchemy import func, or_, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from opaq.domain.error import NotFoundError
from opaq.domain.model import Pitch
from opaq.domain.repository import PitchRepository
from opaq.domain.value import PitchId, PitchVisibility, UserId
from opaq.persistence.mappers import pitch_to_dict, row_to_pitch
from opaq.persistence.tables import pitches_table


class PostgresPitchRepository(PitchRepository):
    """PostgreSQL implementation of PitchRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _visibility_filter(viewer_id: Optional[UserId], owner_id: Optional[UserId]):
        if owner_id is not None:
            return pitches_table.c.user_id == owner_id
        public = pitches_table.c.visibility == PitchVisibility.PUBLIC.value
        if viewer_id is None:
            return public
        return or_(public, pitches_table.c.user_id == viewer_id)

    async def find_by_id(self, pitch_id: PitchId) -> Optional[Pitch]:
        """Find a pitch by ID."""
        stmt = select(pitches_table).where(pitches_table.c.id == pitch_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_pitch(row._asdict()) if row else None

    async def find_visible(
        self,
        viewer_id: Optional[UserId] = None,
        owner_id: Optional[UserId] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Pitch]:
        """Find pitches newest first."""
        stmt = (
            select(pitches_table)
            .where(self._visibility_filter(viewer_id, owner_id))
            .order_by(pitches_table.c.created_at.desc(), pitches_table.c.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_pitch(row._asdict()) for row in result.fetchall()]

    async def count_visible(
        self,
        viewer_id: Optional[UserId] = None,
        owner_id: Optional[UserId] = None,
    ) -> int:
        """Count pitches matching the same filter as find_visible."""
        stmt = (
            select(func.count())
            .select_from(pitches_table)
            .where(self._visibility_filter(viewer_id, owner_id))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, pitch: Pitch) -> Pitch:
        """Save a pitch (create or update).

        Counters are written on insert only; updates never overwrite them.
        """
        pitch_dict = pitch_to_dict(pitch)
        stmt = insert(pitches_table).values(**pitch_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[pitches_table.c.id],
            set_={
                "title": stmt.excluded.title,
                "description": stmt.excluded.description,
                "file_url": stmt.excluded.file_url,
                "storage_id": stmt.excluded.storage_id,
                "tags": stmt.excluded.tags,
                "visibility": stmt.excluded.visibility,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return pitch

    async def _apply_counter(self, pitch_id: PitchId, column, value) -> int:
        stmt = (
            update(pitches_table)
            .where(pitches_table.c.id == pitch_id)
            .values({column: value, pitches_table.c.updated_at: func.now()})
            .returning(column)
        )
        result = await self.session.execute(stmt)
        new_value = result.scalar_one_or_none()
        if new_value is None:
            raise NotFoundError("Pitch", str(pitch_id))
        await self.session.flush()
        return new_value

    async def increment_views(self, pitch_id: PitchId) -> int:
        """Atomically increment views_count by 1."""
        return await self._apply_counter(
            pitch_id,
            pitches_table.c.views_count,
            pitches_table.c.views_count + 1,
        )

    async def adjust_likes(self, pitch_id: PitchId, delta: int) -> int:
        """Atomically add delta to likes_count (never below 0)."""
        return await self._apply_counter(
            pitch_id,
            pitches_table.c.likes_count,
            func.greatest(pitches_table.c.likes_count + delta, 0),
        )
