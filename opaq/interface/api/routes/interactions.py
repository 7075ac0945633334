"""Post interaction routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Query
from pydantic import BaseModel

from opaq.application.usecase.interaction import (
    GetInteractionsRequest,
    GetInteractionsResponse,
    GetInteractionsUseCase,
    GetUserInteractionsRequest,
    GetUserInteractionsResponse,
    GetUserInteractionsUseCase,
    SubmitInteractionRequest,
    SubmitInteractionResponse,
    SubmitInteractionUseCase,
)
from opaq.domain.error import DomainError
from opaq.domain.service import JWTService
from opaq.domain.value import InteractionAction, InteractionFilter
from opaq.interface.error import internal_error, to_http_exception

router = APIRouter(prefix="/interactions", tags=["interactions"], route_class=DishkaRoute)


class SubmitInteractionAPIRequest(BaseModel):
    """API request for liking, saving or viewing a post."""

    post_id: UUID
    action: InteractionAction
    value: bool | None = None


@router.post("", response_model=SubmitInteractionResponse)
async def submit_interaction(
    request: SubmitInteractionAPIRequest,
    submit_interaction_use_case: FromDishka[SubmitInteractionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> SubmitInteractionResponse:
    """Like, save or view a post.

    Requires authentication. ``like`` and ``save`` require ``value``.

    Returns:
        The caller's updated interaction state and fresh post stats
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await submit_interaction_use_case.execute(
            SubmitInteractionRequest(
                post_id=str(request.post_id),
                action=request.action,
                value=request.value,
                user_id=str(user_id) if user_id else None,
            )
        )
    except DomainError as e:
        logfire.warn("Interaction rejected", error=str(e))
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error submitting interaction", error=str(e))
        raise internal_error()


@router.get("", response_model=GetInteractionsResponse)
async def get_interactions(
    get_interactions_use_case: FromDishka[GetInteractionsUseCase],
    jwt_service: FromDishka[JWTService],
    post_id: UUID = Query(...),
    auth_token: str | None = Cookie(default=None),
) -> GetInteractionsResponse:
    """Get a post's stats and, when authenticated, the caller's own state.

    Args:
        post_id: Post UUID
        auth_token: JWT token from cookie (optional)
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await get_interactions_use_case.execute(
            GetInteractionsRequest(
                post_id=str(post_id),
                user_id=str(user_id) if user_id else None,
            )
        )
    except DomainError as e:
        logfire.warn("Interaction query rejected", error=str(e))
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error reading interactions", error=str(e))
        raise internal_error()


@router.get("/me", response_model=GetUserInteractionsResponse)
async def get_my_interactions(
    get_user_interactions_use_case: FromDishka[GetUserInteractionsUseCase],
    jwt_service: FromDishka[JWTService],
    filter: InteractionFilter = InteractionFilter.ALL,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    auth_token: str | None = Cookie(default=None),
) -> GetUserInteractionsResponse:
    """List the caller's own interactions (liked posts, saved posts, history).

    Requires authentication.
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await get_user_interactions_use_case.execute(
            GetUserInteractionsRequest(
                user_id=str(user_id) if user_id else None,
                filter=filter,
                page=page,
                limit=limit,
            )
        )
    except DomainError as e:
        logfire.warn("User interactions rejected", error=str(e))
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error listing user interactions", error=str(e))
        raise internal_error()
