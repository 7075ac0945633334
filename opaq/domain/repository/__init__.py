"""Repository interfaces for OPAQ domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from opaq.domain.repository.discussion import DiscussionRepository
from opaq.domain.repository.interaction import (
    DiscussionInteractionRepository,
    PitchInteractionRepository,
    PostInteractionRepository,
)
from opaq.domain.repository.pitch import PitchRepository
from opaq.domain.repository.post import PostRepository
from opaq.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "PostRepository",
    "PitchRepository",
    "DiscussionRepository",
    "PostInteractionRepository",
    "DiscussionInteractionRepository",
    "PitchInteractionRepository",
]
