"""Domain value objects for OPAQ."""

from opaq.domain.value.identifiers import (
    DiscussionId,
    InteractionId,
    PitchId,
    PostId,
    UserId,
)
from opaq.domain.value.types import (
    DiscussionAction,
    DiscussionSort,
    InteractionAction,
    InteractionFilter,
    PitchVisibility,
    PostStatus,
    Username,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "PitchId",
    "DiscussionId",
    "InteractionId",
    # Types
    "InteractionAction",
    "InteractionFilter",
    "DiscussionAction",
    "DiscussionSort",
    "PostStatus",
    "PitchVisibility",
    "Username",
]
