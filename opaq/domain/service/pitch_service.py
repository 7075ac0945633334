"""Pitch domain service."""

import logfire

from opaq.domain.error import NotFoundError
from opaq.domain.model import Pitch, PitchInteraction
from opaq.domain.model.common import utcnow
from opaq.domain.repository import PitchInteractionRepository, PitchRepository
from opaq.domain.value import PitchId, UserId

from .base import Service


class PitchService(Service):
    """Domain service for Bloom pitches and their interactions.

    ``views_count`` and ``likes_count`` are denormalized. Each ledger
    transition is applied with its counter delta in the same transaction.
    """

    def __init__(
        self,
        pitch_repository: PitchRepository,
        pitch_interaction_repository: PitchInteractionRepository,
    ) -> None:
        """Initialize pitch service.

        Args:
            pitch_repository: Pitch repository
            pitch_interaction_repository: Pitch interaction repository
        """
        self.pitch_repository = pitch_repository
        self.pitch_interaction_repository = pitch_interaction_repository

    async def save_pitch(self, pitch: Pitch) -> Pitch:
        with logfire.span("pitch_service.save_pitch", pitch_id=str(pitch.id)):
            return await self.pitch_repository.save(pitch)

    async def get_visible_pitch(
        self, pitch_id: PitchId, viewer_id: UserId | None
    ) -> Pitch:
        """Get a pitch the viewer is allowed to see.

        Raises:
            NotFoundError: If the pitch does not exist, or is private and the
                viewer is not its owner
        """
        with logfire.span("pitch_service.get_visible_pitch", pitch_id=str(pitch_id)):
            pitch = await self.pitch_repository.find_by_id(pitch_id)
            if pitch is None or not pitch.is_visible_to(viewer_id):
                logfire.warn("Pitch not found", pitch_id=str(pitch_id))
                raise NotFoundError("Pitch", str(pitch_id))
            return pitch

    async def fetch_with_view_tracking(
        self, pitch_id: PitchId, viewer_id: UserId | None = None
    ) -> tuple[Pitch, PitchInteraction | None]:
        """Read a pitch, recording the viewer's first view.

        Anonymous reads are not tracked. An authenticated viewer increments
        ``views_count`` only the first time; later reads refresh
        ``last_viewed_at``.

        Returns:
            (pitch with current counters, viewer's record or None)

        Raises:
            NotFoundError: If the pitch is not visible to the viewer
        """
        with logfire.span(
            "pitch_service.fetch_with_view_tracking",
            pitch_id=str(pitch_id),
            viewer_id=str(viewer_id) if viewer_id else None,
        ):
            pitch = await self.get_visible_pitch(pitch_id, viewer_id)
            if viewer_id is None:
                return pitch, None

            first_view, record = await self.pitch_interaction_repository.mark_viewed(
                viewer_id, pitch_id, utcnow()
            )
            if first_view:
                views = await self.pitch_repository.increment_views(pitch_id)
                pitch = pitch.model_copy(update={"views_count": views})
                logfire.info(
                    "Pitch view counted", pitch_id=str(pitch_id), views=views
                )

            return pitch, record

    async def toggle_like(
        self, user_id: UserId | None, pitch_id: PitchId
    ) -> tuple[bool, int]:
        """Flip the caller's like on a pitch.

        Returns:
            (new liked state, current likes_count)

        Raises:
            UnauthorizedError: If the caller is anonymous
            NotFoundError: If the pitch is not visible to the caller
        """
        user_id = self.require_user(user_id)
        with logfire.span(
            "pitch_service.toggle_like", pitch_id=str(pitch_id), user_id=str(user_id)
        ):
            await self.get_visible_pitch(pitch_id, user_id)

            record = await self.pitch_interaction_repository.toggle_like(
                user_id, pitch_id, utcnow()
            )
            likes = await self.pitch_repository.adjust_likes(
                pitch_id, 1 if record.has_liked else -1
            )
            logfire.info(
                "Pitch like toggled",
                pitch_id=str(pitch_id),
                user_id=str(user_id),
                liked=record.has_liked,
                likes=likes,
            )
            return record.has_liked, likes

    async def list_pitches(
        self,
        viewer_id: UserId | None = None,
        mine_only: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[Pitch], int]:
        """List pitches newest first.

        Returns public pitches plus the viewer's private ones; with
        ``mine_only`` only the viewer's own pitches.

        Returns:
            (pitches on the page, total matching pitches)

        Raises:
            UnauthorizedError: If mine_only is requested anonymously
        """
        owner_id = self.require_user(viewer_id) if mine_only else None
        with logfire.span(
            "pitch_service.list_pitches",
            viewer_id=str(viewer_id) if viewer_id else None,
            mine_only=mine_only,
            limit=limit,
            offset=offset,
        ):
            pitches = await self.pitch_repository.find_visible(
                viewer_id=viewer_id, owner_id=owner_id, limit=limit, offset=offset
            )
            total = await self.pitch_repository.count_visible(
                viewer_id=viewer_id, owner_id=owner_id
            )
            return pitches, total
