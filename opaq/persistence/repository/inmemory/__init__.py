"""In-memory repository implementations for testing."""

from .discussion import InMemoryDiscussionRepository
from .interaction import (
    InMemoryDiscussionInteractionRepository,
    InMemoryPitchInteractionRepository,
    InMemoryPostInteractionRepository,
)
from .pitch import InMemoryPitchRepository
from .post import InMemoryPostRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryDiscussionInteractionRepository",
    "InMemoryDiscussionRepository",
    "InMemoryPitchInteractionRepository",
    "InMemoryPitchRepository",
    "InMemoryPostInteractionRepository",
    "InMemoryPostRepository",
    "InMemoryUserRepository",
]
