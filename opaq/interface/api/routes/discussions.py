"""Discussion routes."""

from typing import Literal
from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel

from opaq.application.usecase.discussion import (
    CreateDiscussionRequest,
    CreateDiscussionResponse,
    CreateDiscussionUseCase,
    DeleteDiscussionRequest,
    DeleteDiscussionResponse,
    DeleteDiscussionUseCase,
    ListDiscussionsRequest,
    ListDiscussionsResponse,
    ListDiscussionsUseCase,
    UpdateDiscussionRequest,
    UpdateDiscussionResponse,
    UpdateDiscussionUseCase,
)
from opaq.domain.error import DomainError
from opaq.domain.service import JWTService
from opaq.domain.value import DiscussionSort
from opaq.interface.error import internal_error, to_http_exception

router = APIRouter(prefix="/discussions", tags=["discussions"], route_class=DishkaRoute)


class CreateDiscussionAPIRequest(BaseModel):
    """API request for creating a discussion or reply."""

    post_id: UUID
    content: str
    parent_id: UUID | None = None


class UpdateDiscussionAPIRequest(BaseModel):
    """API request for editing content, or pinning with ``action="pin"``."""

    content: str | None = None
    action: Literal["pin"] | None = None
    value: bool | None = None


@router.post(
    "", response_model=CreateDiscussionResponse, status_code=status.HTTP_201_CREATED
)
async def create_discussion(
    request: CreateDiscussionAPIRequest,
    create_discussion_use_case: FromDishka[CreateDiscussionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateDiscussionResponse:
    """Create a top-level discussion on a post, or a reply to one.

    Requires authentication.

    Returns:
        Created discussion with author info
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await create_discussion_use_case.execute(
            CreateDiscussionRequest(
                post_id=str(request.post_id),
                content=request.content,
                parent_id=str(request.parent_id) if request.parent_id else None,
                user_id=str(user_id) if user_id else None,
            )
        )
    except DomainError as e:
        logfire.warn("Discussion creation rejected", error=str(e))
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error creating discussion", error=str(e))
        raise internal_error()


@router.get("", response_model=ListDiscussionsResponse)
async def list_discussions(
    list_discussions_use_case: FromDishka[ListDiscussionsUseCase],
    jwt_service: FromDishka[JWTService],
    post_id: UUID = Query(...),
    parent_id: UUID | None = None,
    sort: DiscussionSort = DiscussionSort.NEWEST,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    auth_token: str | None = Cookie(default=None),
) -> ListDiscussionsResponse:
    """List top-level discussions of a post, or the replies of one discussion.

    Args:
        post_id: Post UUID
        parent_id: Parent discussion UUID; omit for top-level discussions
        sort: newest (pinned first), oldest, top or replies
        page: 1-based page number
        limit: Page size, capped at the configured maximum
        auth_token: JWT token from cookie (optional)
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await list_discussions_use_case.execute(
            ListDiscussionsRequest(
                post_id=str(post_id),
                parent_id=str(parent_id) if parent_id else None,
                sort=sort,
                page=page,
                limit=limit,
                user_id=str(user_id) if user_id else None,
            )
        )
    except DomainError as e:
        logfire.warn("Discussion listing rejected", error=str(e))
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error listing discussions", error=str(e))
        raise internal_error()


@router.put("/{discussion_id}", response_model=UpdateDiscussionResponse)
async def update_discussion(
    discussion_id: UUID,
    request: UpdateDiscussionAPIRequest,
    update_discussion_use_case: FromDishka[UpdateDiscussionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UpdateDiscussionResponse:
    """Edit a discussion (author only) or pin it (post author only).

    Requires authentication.
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await update_discussion_use_case.execute(
            UpdateDiscussionRequest(
                discussion_id=str(discussion_id),
                content=request.content,
                action=request.action,
                value=request.value,
                user_id=str(user_id) if user_id else None,
            )
        )
    except DomainError as e:
        logfire.warn(
            "Discussion update rejected",
            discussion_id=str(discussion_id),
            error=str(e),
        )
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error updating discussion", error=str(e))
        raise internal_error()


@router.delete("/{discussion_id}", response_model=DeleteDiscussionResponse)
async def delete_discussion(
    discussion_id: UUID,
    delete_discussion_use_case: FromDishka[DeleteDiscussionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteDiscussionResponse:
    """Delete a discussion with its replies (discussion author or post author).

    Requires authentication.
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await delete_discussion_use_case.execute(
            DeleteDiscussionRequest(
                discussion_id=str(discussion_id),
                user_id=str(user_id) if user_id else None,
            )
        )
    except DomainError as e:
        logfire.warn(
            "Discussion deletion rejected",
            discussion_id=str(discussion_id),
            error=str(e),
        )
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error deleting discussion", error=str(e))
        raise internal_error()
