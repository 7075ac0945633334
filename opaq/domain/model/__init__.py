"""Domain model entities for OPAQ."""

from opaq.domain.model.discussion import Discussion
from opaq.domain.model.interaction import (
    DiscussionInteraction,
    PitchInteraction,
    PostInteraction,
)
from opaq.domain.model.pitch import Pitch
from opaq.domain.model.post import Post
from opaq.domain.model.stats import PostStats
from opaq.domain.model.user import PublicUser, User

__all__ = [
    "User",
    "PublicUser",
    "Post",
    "Pitch",
    "Discussion",
    "PostInteraction",
    "DiscussionInteraction",
    "PitchInteraction",
    "PostStats",
]
