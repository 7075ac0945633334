"""Pitch repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from opaq.domain.model.pitch import Pitch
from opaq.domain.value import PitchId, UserId


class PitchRepository(ABC):
    """Repository for Pitch entity.

    The pitch counters are changed only through the atomic increment
    methods, never by saving a modified pitch.
    """

    @abstractmethod
    async def find_by_id(self, pitch_id: PitchId) -> Optional[Pitch]:
        """Find a pitch by ID.

        Args:
            pitch_id: The pitch's unique identifier

        Returns:
            The pitch if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_visible(
        self,
        viewer_id: Optional[UserId] = None,
        owner_id: Optional[UserId] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Pitch]:
        """Find pitches newest first.

        Args:
            viewer_id: Caller; their private pitches are included
            owner_id: Restrict to pitches owned by this user
            limit: Maximum number of pitches to return
            offset: Number of pitches to skip

        Returns:
            Public pitches plus the viewer's own private pitches
        """
        pass

    @abstractmethod
    async def count_visible(
        self,
        viewer_id: Optional[UserId] = None,
        owner_id: Optional[UserId] = None,
    ) -> int:
        """Count pitches matching the same filter as find_visible."""
        pass

    @abstractmethod
    async def save(self, pitch: Pitch) -> Pitch:
        """Save a pitch (create or update)."""
        pass

    @abstractmethod
    async def increment_views(self, pitch_id: PitchId) -> int:
        """Atomically increment views_count by 1.

        Returns:
            The new views_count
        """
        pass

    @abstractmethod
    async def adjust_likes(self, pitch_id: PitchId, delta: int) -> int:
        """Atomically add delta to likes_count (never below 0).

        Returns:
            The new likes_count
        """
        pass
