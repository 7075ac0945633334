"""Get pitch use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from opaq.domain.model import Pitch, PitchInteraction
from opaq.domain.service import PitchService
from opaq.domain.value import PitchId, PitchVisibility

from ..base import BaseUseCase, parse_user_id


class PitchItem(BaseModel):
    """Pitch in responses."""

    id: str
    user_id: str
    title: str
    description: str
    file_url: str
    storage_id: str
    tags: list[str]
    visibility: PitchVisibility
    views_count: int
    likes_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_pitch(cls, pitch: Pitch) -> "PitchItem":
        return cls(
            id=str(pitch.id),
            user_id=str(pitch.user_id),
            title=pitch.title,
            description=pitch.description,
            file_url=pitch.file_url,
            storage_id=pitch.storage_id,
            tags=pitch.tags,
            visibility=pitch.visibility,
            views_count=pitch.views_count,
            likes_count=pitch.likes_count,
            created_at=pitch.created_at,
            updated_at=pitch.updated_at,
        )


class PitchInteractionItem(BaseModel):
    """The caller's view/like state on a pitch."""

    has_viewed: bool
    has_liked: bool
    first_viewed_at: datetime | None = None
    last_viewed_at: datetime | None = None

    @classmethod
    def from_record(cls, record: PitchInteraction) -> "PitchInteractionItem":
        return cls(
            has_viewed=record.has_viewed,
            has_liked=record.has_liked,
            first_viewed_at=record.first_viewed_at,
            last_viewed_at=record.last_viewed_at,
        )


class GetPitchRequest(BaseModel):
    """Get pitch request."""

    pitch_id: str  # UUID string
    user_id: str | None = None  # Optional caller


class GetPitchResponse(BaseModel):
    """Get pitch response."""

    pitch: PitchItem
    user_interaction: PitchInteractionItem | None = None


class GetPitchUseCase(BaseUseCase):
    """Use case for reading a pitch, counting the caller's first view."""

    def __init__(self, pitch_service: PitchService) -> None:
        """Initialize get pitch use case.

        Args:
            pitch_service: Pitch domain service
        """
        self.pitch_service = pitch_service

    async def execute(self, request: GetPitchRequest) -> GetPitchResponse:
        """Execute get pitch flow.

        Raises:
            NotFoundError: If the pitch does not exist or is private to
                another user
        """
        pitch, record = await self.pitch_service.fetch_with_view_tracking(
            PitchId(UUID(request.pitch_id)),
            parse_user_id(request.user_id),
        )
        return GetPitchResponse(
            pitch=PitchItem.from_pitch(pitch),
            user_interaction=(
                PitchInteractionItem.from_record(record) if record else None
            ),
        )
