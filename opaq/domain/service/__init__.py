"""Domain services."""

from .base import Service
from .discussion_interaction_service import DiscussionInteractionService
from .discussion_service import DiscussionService
from .interaction_service import InteractionService
from .jwt_service import JWTService
from .pitch_service import PitchService
from .post_service import PostService
from .user_service import UserService

__all__ = [
    "DiscussionInteractionService",
    "DiscussionService",
    "InteractionService",
    "JWTService",
    "PitchService",
    "PostService",
    "Service",
    "UserService",
]
