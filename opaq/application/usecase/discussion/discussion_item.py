"""Discussion response items and author enrichment."""

from datetime import datetime
from typing import Sequence

from pydantic import BaseModel

from opaq.domain.model import Discussion, PublicUser
from opaq.domain.service import DiscussionInteractionService, UserService
from opaq.domain.value import UserId


class AuthorItem(BaseModel):
    """Public identity of a discussion author."""

    id: str
    username: str
    full_name: str

    @classmethod
    def from_public_user(cls, user: PublicUser) -> "AuthorItem":
        return cls(id=str(user.id), username=user.username, full_name=user.full_name)


class DiscussionItem(BaseModel):
    """Discussion in responses, enriched with its author and the caller's like."""

    id: str
    post_id: str
    parent_id: str | None
    content: str
    likes: int
    replies_count: int
    is_edited: bool
    is_pinned: bool
    is_hearted: bool
    created_at: datetime
    updated_at: datetime
    author: AuthorItem
    user_liked: bool = False


async def build_discussion_items(
    discussions: Sequence[Discussion],
    viewer_id: UserId | None,
    user_service: UserService,
    discussion_interaction_service: DiscussionInteractionService,
) -> list[DiscussionItem]:
    """Enrich discussions with one author query and one like query."""
    authors = await user_service.get_public_users([d.user_id for d in discussions])
    liked_ids = await discussion_interaction_service.get_liked_ids(
        viewer_id, [d.id for d in discussions]
    )

    return [
        DiscussionItem(
            id=str(d.id),
            post_id=str(d.post_id),
            parent_id=str(d.parent_id) if d.parent_id else None,
            content=d.content,
            likes=d.likes,
            replies_count=d.replies_count,
            is_edited=d.is_edited,
            is_pinned=d.is_pinned,
            is_hearted=d.is_hearted,
            created_at=d.created_at,
            updated_at=d.updated_at,
            author=AuthorItem.from_public_user(
                authors.get(d.user_id) or PublicUser.unknown(d.user_id)
            ),
            user_liked=d.id in liked_ids,
        )
        for d in discussions
    ]
