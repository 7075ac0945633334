"""Pitch entity.

Bloom pitches carry denormalized ``views_count`` and ``likes_count``
counters. They are a cache of the pitch interaction ledger and are only ever
changed through atomic deltas applied alongside a ledger transition.
"""

from datetime import datetime

from pydantic import Field

from opaq.domain.model.common import DomainModel, utcnow
from opaq.domain.value import PitchId, PitchVisibility, UserId


class Pitch(DomainModel):
    """Bloom pitch."""

    id: PitchId
    user_id: UserId
    title: str = Field(min_length=1)
    description: str
    file_url: str
    storage_id: str  # Decentralized storage transaction ID
    tags: list[str] = Field(default_factory=list)
    visibility: PitchVisibility = PitchVisibility.PRIVATE
    views_count: int = Field(default=0, ge=0)
    likes_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def is_visible_to(self, user_id: UserId | None) -> bool:
        """Private pitches are visible only to their owner."""
        return self.visibility == PitchVisibility.PUBLIC or self.user_id == user_id
