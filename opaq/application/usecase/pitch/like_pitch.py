"""Like pitch use case."""

from uuid import UUID

from pydantic import BaseModel

from opaq.domain.service import PitchService
from opaq.domain.value import PitchId

from ..base import BaseUseCase, parse_user_id


class LikePitchRequest(BaseModel):
    """Like pitch request."""

    pitch_id: str  # UUID string
    user_id: str | None = None  # User ID from authenticated user


class LikePitchResponse(BaseModel):
    """Like pitch response."""

    liked: bool
    likes_count: int


class LikePitchUseCase(BaseUseCase):
    """Use case for toggling the caller's like on a pitch."""

    def __init__(self, pitch_service: PitchService) -> None:
        """Initialize like pitch use case.

        Args:
            pitch_service: Pitch domain service
        """
        self.pitch_service = pitch_service

    async def execute(self, request: LikePitchRequest) -> LikePitchResponse:
        """Execute like pitch flow.

        Raises:
            UnauthorizedError: If the caller is anonymous
            NotFoundError: If the pitch is not visible to the caller
        """
        liked, likes_count = await self.pitch_service.toggle_like(
            parse_user_id(request.user_id),
            PitchId(UUID(request.pitch_id)),
        )
        return LikePitchResponse(liked=liked, likes_count=likes_count)
