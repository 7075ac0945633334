"""PostgreSQL repository implementations."""

from opaq.persistence.repository.discussion import PostgresDiscussionRepository
from opaq.persistence.repository.interaction import (
    PostgresDiscussionInteractionRepository,
    PostgresPitchInteractionRepository,
    PostgresPostInteractionRepository,
)
from opaq.persistence.repository.pitch import PostgresPitchRepository
from opaq.persistence.repository.post import PostgresPostRepository
from opaq.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresPostRepository",
    "PostgresPitchRepository",
    "PostgresDiscussionRepository",
    "PostgresPostInteractionRepository",
    "PostgresDiscussionInteractionRepository",
    "PostgresPitchInteractionRepository",
]
