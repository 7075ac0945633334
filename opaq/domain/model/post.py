"""Post entity.

Artwall posts are blog-like entries. The interaction core only reads them
to validate existence, ownership and visibility.
"""

from datetime import datetime

from pydantic import Field

from opaq.domain.model.common import DomainModel, utcnow
from opaq.domain.value import PostId, PostStatus, UserId


class Post(DomainModel):
    """Artwall post."""

    id: PostId
    user_id: UserId
    title: str = Field(min_length=1, max_length=300)
    content: str
    labels: list[str] = Field(default_factory=list)
    status: PostStatus = PostStatus.DRAFT
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def is_visible_to(self, user_id: UserId | None) -> bool:
        """Drafts are visible only to their owner."""
        return self.status == PostStatus.PUBLISHED or self.user_id == user_id
