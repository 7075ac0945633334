"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from opaq.domain.model import (
    Discussion,
    DiscussionInteraction,
    Pitch,
    PitchInteraction,
    Post,
    PostInteraction,
    User,
)
from opaq.domain.value import (
    DiscussionId,
    InteractionId,
    PitchId,
    PitchVisibility,
    PostId,
    PostStatus,
    UserId,
    Username,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=Username(row["username"]),
        full_name=row["full_name"],
        email=row.get("email"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    data = user.model_dump()
    data["username"] = user.username.root
    return data


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model."""
    return Post(
        id=PostId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        title=row["title"],
        content=row["content"],
        labels=list(row.get("labels") or []),
        status=PostStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict."""
    data = post.model_dump()
    data["status"] = post.status.value
    return data


def row_to_pitch(row: Dict[str, Any]) -> Pitch:
    """Convert database row to Pitch domain model."""
    return Pitch(
        id=PitchId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        title=row["title"],
        description=row["description"],
        file_url=row["file_url"],
        storage_id=row["storage_id"],
        tags=list(row.get("tags") or []),
        visibility=PitchVisibility(row["visibility"]),
        views_count=row["views_count"],
        likes_count=row["likes_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def pitch_to_dict(pitch: Pitch) -> Dict[str, Any]:
    """Convert Pitch domain model to database dict."""
    data = pitch.model_dump()
    data["visibility"] = pitch.visibility.value
    return data


def row_to_discussion(row: Dict[str, Any]) -> Discussion:
    """Convert database row to Discussion domain model.

    Args:
        row: Database row as dict

    Returns:
        Discussion domain model
    """
    return Discussion(
        id=DiscussionId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        content=row["content"],
        parent_id=(
            DiscussionId(_uuid(row["parent_id"])) if row.get("parent_id") else None
        ),
        likes=row["likes"],
        replies_count=row["replies_count"],
        is_edited=row["is_edited"],
        is_pinned=row["is_pinned"],
        is_hearted=row["is_hearted"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def discussion_to_dict(discussion: Discussion) -> Dict[str, Any]:
    """Convert Discussion domain model to database dict."""
    return discussion.model_dump()


def row_to_post_interaction(row: Dict[str, Any]) -> PostInteraction:
    """Convert database row to PostInteraction domain model."""
    return PostInteraction(
        id=InteractionId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        post_id=PostId(_uuid(row["post_id"])),
        liked=row["liked"],
        saved=row["saved"],
        viewed=row["viewed"],
        view_count=row["view_count"],
        last_liked_at=row.get("last_liked_at"),
        last_saved_at=row.get("last_saved_at"),
        last_viewed_at=row.get("last_viewed_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_discussion_interaction(row: Dict[str, Any]) -> DiscussionInteraction:
    """Convert database row to DiscussionInteraction domain model."""
    return DiscussionInteraction(
        id=InteractionId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        discussion_id=DiscussionId(_uuid(row["discussion_id"])),
        liked=row["liked"],
        last_liked_at=row.get("last_liked_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_pitch_interaction(row: Dict[str, Any]) -> PitchInteraction:
    """Convert database row to PitchInteraction domain model."""
    return PitchInteraction(
        id=InteractionId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        pitch_id=PitchId(_uuid(row["pitch_id"])),
        has_viewed=row["has_viewed"],
        has_liked=row["has_liked"],
        first_viewed_at=row.get("first_viewed_at"),
        last_viewed_at=row.get("last_viewed_at"),
        liked_at=row.get("liked_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
