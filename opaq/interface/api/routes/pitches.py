"""Pitch routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from opaq.application.usecase.pitch import (
    GetPitchRequest,
    GetPitchResponse,
    GetPitchUseCase,
    LikePitchRequest,
    LikePitchResponse,
    LikePitchUseCase,
    ListPitchesRequest,
    ListPitchesResponse,
    ListPitchesUseCase,
)
from opaq.domain.error import DomainError
from opaq.domain.service import JWTService
from opaq.interface.error import internal_error, to_http_exception

router = APIRouter(prefix="/pitches", tags=["pitches"], route_class=DishkaRoute)


@router.get("", response_model=ListPitchesResponse)
async def list_pitches(
    list_pitches_use_case: FromDishka[ListPitchesUseCase],
    jwt_service: FromDishka[JWTService],
    mine_only: bool = False,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    auth_token: str | None = Cookie(default=None),
) -> ListPitchesResponse:
    """List pitches newest first.

    Public pitches plus the caller's own private pitches; ``mine_only``
    restricts to the caller's pitches and requires authentication.
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await list_pitches_use_case.execute(
            ListPitchesRequest(
                user_id=str(user_id) if user_id else None,
                mine_only=mine_only,
                page=page,
                limit=limit,
            )
        )
    except DomainError as e:
        logfire.warn("Pitch listing rejected", error=str(e))
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error listing pitches", error=str(e))
        raise internal_error()


@router.get("/{pitch_id}", response_model=GetPitchResponse)
async def get_pitch(
    pitch_id: UUID,
    get_pitch_use_case: FromDishka[GetPitchUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetPitchResponse:
    """Get a pitch, counting the caller's first view.

    Private pitches answer 404 to everyone but their owner.
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await get_pitch_use_case.execute(
            GetPitchRequest(
                pitch_id=str(pitch_id),
                user_id=str(user_id) if user_id else None,
            )
        )
    except DomainError as e:
        logfire.warn("Pitch fetch rejected", pitch_id=str(pitch_id), error=str(e))
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error fetching pitch", error=str(e))
        raise internal_error()


@router.post("/{pitch_id}/like", response_model=LikePitchResponse)
async def like_pitch(
    pitch_id: UUID,
    like_pitch_use_case: FromDishka[LikePitchUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> LikePitchResponse:
    """Toggle the caller's like on a pitch.

    Requires authentication.

    Returns:
        New like state and the pitch's current like count
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await like_pitch_use_case.execute(
            LikePitchRequest(
                pitch_id=str(pitch_id),
                user_id=str(user_id) if user_id else None,
            )
        )
    except DomainError as e:
        logfire.warn("Pitch like rejected", pitch_id=str(pitch_id), error=str(e))
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error liking pitch", error=str(e))
        raise internal_error()
