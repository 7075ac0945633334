"""Discussion interaction routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query
from pydantic import BaseModel

from opaq.application.usecase.discussion_interaction import (
    GetDiscussionInteractionRequest,
    GetDiscussionInteractionResponse,
    GetDiscussionInteractionUseCase,
    SubmitDiscussionInteractionRequest,
    SubmitDiscussionInteractionResponse,
    SubmitDiscussionInteractionUseCase,
)
from opaq.domain.error import DomainError
from opaq.domain.service import JWTService
from opaq.domain.value import DiscussionAction
from opaq.interface.error import internal_error, to_http_exception

router = APIRouter(
    prefix="/discussion-interactions",
    tags=["discussion-interactions"],
    route_class=DishkaRoute,
)


class SubmitDiscussionInteractionAPIRequest(BaseModel):
    """API request for liking or hearting a discussion."""

    discussion_id: UUID
    action: DiscussionAction
    value: bool | None = None


@router.post("", response_model=SubmitDiscussionInteractionResponse)
async def submit_discussion_interaction(
    request: SubmitDiscussionInteractionAPIRequest,
    submit_use_case: FromDishka[SubmitDiscussionInteractionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> SubmitDiscussionInteractionResponse:
    """Like a discussion (``value`` required) or toggle its heart (post author only).

    Requires authentication.
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await submit_use_case.execute(
            SubmitDiscussionInteractionRequest(
                discussion_id=str(request.discussion_id),
                action=request.action,
                value=request.value,
                user_id=str(user_id) if user_id else None,
            )
        )
    except DomainError as e:
        logfire.warn("Discussion interaction rejected", error=str(e))
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error submitting discussion interaction", error=str(e))
        raise internal_error()


@router.get("", response_model=GetDiscussionInteractionResponse)
async def get_discussion_interaction(
    get_use_case: FromDishka[GetDiscussionInteractionUseCase],
    jwt_service: FromDishka[JWTService],
    discussion_id: UUID = Query(...),
    auth_token: str | None = Cookie(default=None),
) -> GetDiscussionInteractionResponse:
    """Whether the caller likes a discussion; false for anonymous callers."""
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await get_use_case.execute(
            GetDiscussionInteractionRequest(
                discussion_id=str(discussion_id),
                user_id=str(user_id) if user_id else None,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error reading discussion interaction", error=str(e))
        raise internal_error()
