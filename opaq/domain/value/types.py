"""Domain value objects for OPAQ."""

import re
from enum import Enum

from pydantic import field_validator

from opaq.domain.value.common import RootValueObject


class InteractionAction(str, Enum):
    """Action a user can submit against a post."""

    LIKE = "like"
    SAVE = "save"
    VIEW = "view"


class DiscussionAction(str, Enum):
    """Action a user can submit against a discussion.

    ``like`` is an idempotent set of the caller's own flag; ``heart`` is a
    toggle reserved for the author of the post the discussion belongs to.
    """

    LIKE = "like"
    HEART = "heart"


class DiscussionSort(str, Enum):
    """Sort order for discussion listings."""

    NEWEST = "newest"  # Pinned first, then created_at DESC
    OLDEST = "oldest"  # created_at ASC
    TOP = "top"  # likes DESC, then newest
    REPLIES = "replies"  # replies_count DESC, then newest


class InteractionFilter(str, Enum):
    """Filter for a user's own interaction history."""

    ALL = "all"
    LIKED = "liked"
    SAVED = "saved"


class PostStatus(str, Enum):
    """Publication status of an Artwall post."""

    DRAFT = "draft"
    PUBLISHED = "published"


class PitchVisibility(str, Enum):
    """Visibility of a Bloom pitch."""

    PRIVATE = "private"
    PUBLIC = "public"


class Username(RootValueObject[str]):
    """Public username.

    Lowercase letters, digits, underscores and dots, 3-30 characters.
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        if not re.match(r"^[a-z0-9_.]{3,30}$", v):
            raise ValueError(
                "Username must be 3-30 characters of lowercase letters, digits, '_' or '.'"
            )
        return v
