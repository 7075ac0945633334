"""Discussion entity.

Discussions are threaded comments on a post with exactly one level of
nesting: a top-level discussion (``parent_id`` is None) may have replies,
a reply may not.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from opaq.domain.model.common import DomainModel, utcnow
from opaq.domain.value import DiscussionId, PostId, UserId


class Discussion(DomainModel):
    """Discussion on a post.

    Counters:
    - likes: number of discussion interaction rows with liked=True
    - replies_count: number of discussions whose parent_id is this id

    Flags:
    - is_pinned: set by the post author, top-level only
    - is_hearted: toggled by the post author
    """

    id: DiscussionId
    post_id: PostId
    user_id: UserId
    content: str = Field(min_length=1)
    parent_id: Optional[DiscussionId] = None
    likes: int = Field(default=0, ge=0)
    replies_count: int = Field(default=0, ge=0)
    is_edited: bool = False
    is_pinned: bool = False
    is_hearted: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None
