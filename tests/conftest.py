"""Test configuration and factories."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import logfire
import pytest

from opaq.domain.model import Discussion, Pitch, Post, User
from opaq.domain.value import (
    DiscussionId,
    PitchId,
    PitchVisibility,
    PostId,
    PostStatus,
    UserId,
    Username,
)

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session", autouse=True)
def _logfire_offline():
    """Keep spans local to the test process."""
    logfire.configure(send_to_logfire=False, console=False)


def make_user(username: str = "alice", user_id: UserId | None = None) -> User:
    return User(
        id=user_id or UserId(uuid4()),
        username=Username(username),
        full_name=username.capitalize(),
    )


def make_post(
    author_id: UserId,
    status: PostStatus = PostStatus.PUBLISHED,
    title: str = "Morning light",
) -> Post:
    return Post(
        id=PostId(uuid4()),
        user_id=author_id,
        title=title,
        content="Oil on canvas",
        status=status,
    )


def make_pitch(
    owner_id: UserId,
    visibility: PitchVisibility = PitchVisibility.PUBLIC,
    minutes: int = 0,
) -> Pitch:
    """Build a pitch; ``minutes`` offsets created_at to control ordering."""
    created = BASE_TIME + timedelta(minutes=minutes)
    return Pitch(
        id=PitchId(uuid4()),
        user_id=owner_id,
        title="Gallery pitch",
        description="A solo show proposal",
        file_url="https://arweave.net/abc",
        storage_id="abc",
        visibility=visibility,
        created_at=created,
        updated_at=created,
    )


def make_discussion(
    post_id: PostId,
    author_id: UserId,
    minutes: int = 0,
    parent_id: DiscussionId | None = None,
    **fields,
) -> Discussion:
    """Build a discussion; ``minutes`` offsets created_at to control ordering."""
    created = BASE_TIME + timedelta(minutes=minutes)
    return Discussion(
        id=DiscussionId(uuid4()),
        post_id=post_id,
        user_id=author_id,
        content=fields.pop("content", f"Comment at +{minutes}m"),
        parent_id=parent_id,
        created_at=created,
        updated_at=created,
        **fields,
    )
