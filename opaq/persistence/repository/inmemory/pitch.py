"""In-memory pitch repository for testing."""

from typing import Optional

from opaq.domain.error import NotFoundError
from opaq.domain.model import Pitch
from opaq.domain.model.common import utcnow
from opaq.domain.repository import PitchRepository
from opaq.domain.value import PitchId, PitchVisibility, UserId


class InMemoryPitchRepository(PitchRepository):
    """In-memory implementation of PitchRepository for testing."""

    def __init__(self) -> None:
        self._pitches: dict[PitchId, Pitch] = {}

    def _matching(
        self, viewer_id: Optional[UserId], owner_id: Optional[UserId]
    ) -> list[Pitch]:
        if owner_id is not None:
            pitches = [p for p in self._pitches.values() if p.user_id == owner_id]
        else:
            pitches = [
                p
                for p in self._pitches.values()
                if p.visibility == PitchVisibility.PUBLIC or p.user_id == viewer_id
            ]
        pitches.sort(key=lambda p: p.created_at, reverse=True)
        return pitches

    async def find_by_id(self, pitch_id: PitchId) -> Optional[Pitch]:
        """Find a pitch by ID."""
        return self._pitches.get(pitch_id)

    async def find_visible(
        self,
        viewer_id: Optional[UserId] = None,
        owner_id: Optional[UserId] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Pitch]:
        """Find pitches newest first."""
        return self._matching(viewer_id, owner_id)[offset : offset + limit]

    async def count_visible(
        self,
        viewer_id: Optional[UserId] = None,
        owner_id: Optional[UserId] = None,
    ) -> int:
        """Count pitches matching the same filter as find_visible."""
        return len(self._matching(viewer_id, owner_id))

    async def save(self, pitch: Pitch) -> Pitch:
        """Save a pitch, keeping stored counters for an existing pitch."""
        existing = self._pitches.get(pitch.id)
        if existing:
            pitch = pitch.model_copy(
                update={
                    "views_count": existing.views_count,
                    "likes_count": existing.likes_count,
                }
            )
        self._pitches[pitch.id] = pitch
        return pitch

    async def _update_counter(self, pitch_id: PitchId, field: str, delta: int) -> int:
        pitch = self._pitches.get(pitch_id)
        if pitch is None:
            raise NotFoundError("Pitch", str(pitch_id))
        value = max(getattr(pitch, field) + delta, 0)
        self._pitches[pitch_id] = pitch.model_copy(
            update={field: value, "updated_at": utcnow()}
        )
        return value

    async def increment_views(self, pitch_id: PitchId) -> int:
        """Increment views_count by 1."""
        return await self._update_counter(pitch_id, "views_count", 1)

    async def adjust_likes(self, pitch_id: PitchId, delta: int) -> int:
        """Add delta to likes_count (never below 0)."""
        return await self._update_counter(pitch_id, "likes_count", delta)
