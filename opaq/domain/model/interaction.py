"""Interaction ledger entities.

One record per (user, target) pair, created lazily on the first interaction
and mutated in place afterwards.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from opaq.domain.model.common import DomainModel, utcnow
from opaq.domain.value import (
    DiscussionId,
    InteractionId,
    PitchId,
    PostId,
    UserId,
)


class PostInteraction(DomainModel):
    """A user's like/save/view state on a post.

    ``view_count`` is cumulative: every view submission increments it.
    """

    id: InteractionId
    user_id: UserId
    post_id: PostId
    liked: bool = False
    saved: bool = False
    viewed: bool = False
    view_count: int = Field(default=0, ge=0)
    last_liked_at: Optional[datetime] = None
    last_saved_at: Optional[datetime] = None
    last_viewed_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class DiscussionInteraction(DomainModel):
    """A user's like state on a discussion."""

    id: InteractionId
    user_id: UserId
    discussion_id: DiscussionId
    liked: bool = False
    last_liked_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class PitchInteraction(DomainModel):
    """A user's view/like state on a pitch.

    Unlike posts, a pitch view is counted once per user: ``has_viewed`` flips
    to True on the first view and later views only refresh ``last_viewed_at``.
    """

    id: InteractionId
    user_id: UserId
    pitch_id: PitchId
    has_viewed: bool = False
    has_liked: bool = False
    first_viewed_at: Optional[datetime] = None
    last_viewed_at: Optional[datetime] = None
    liked_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
