"""List pitches use case."""

from pydantic import BaseModel, Field

from opaq.domain.service import PitchService

from ..base import BaseUseCase, Pagination, parse_user_id
from .get_pitch import PitchItem


class ListPitchesRequest(BaseModel):
    """List pitches request."""

    user_id: str | None = None  # Optional caller
    mine_only: bool = False
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


class ListPitchesResponse(BaseModel):
    """List pitches response."""

    pitches: list[PitchItem]
    pagination: Pagination


class ListPitchesUseCase(BaseUseCase):
    """Use case for listing pitches newest first."""

    def __init__(self, pitch_service: PitchService) -> None:
        """Initialize list pitches use case.

        Args:
            pitch_service: Pitch domain service
        """
        self.pitch_service = pitch_service

    async def execute(self, request: ListPitchesRequest) -> ListPitchesResponse:
        """Execute list pitches flow.

        Raises:
            UnauthorizedError: If mine_only is requested anonymously
        """
        pitches, total = await self.pitch_service.list_pitches(
            viewer_id=parse_user_id(request.user_id),
            mine_only=request.mine_only,
            limit=request.limit,
            offset=(request.page - 1) * request.limit,
        )
        return ListPitchesResponse(
            pitches=[PitchItem.from_pitch(pitch) for pitch in pitches],
            pagination=Pagination.build(
                page=request.page, limit=request.limit, total=total
            ),
        )
