"""User entity.

Users live in the relational store and are owned by the auth subsystem;
the interaction core only reads their public identity.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from opaq.domain.model.common import DomainModel, utcnow
from opaq.domain.value import UserId, Username


class User(DomainModel):
    """Registered user."""

    id: UserId
    username: Username
    full_name: str = Field(min_length=1, max_length=255)
    email: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class PublicUser(DomainModel):
    """Public identity attached to content shown to other users."""

    id: UserId
    username: str
    full_name: str

    @classmethod
    def from_user(cls, user: User) -> "PublicUser":
        return cls(id=user.id, username=user.username.root, full_name=user.full_name)

    @classmethod
    def unknown(cls, user_id: UserId) -> "PublicUser":
        """Placeholder identity for an author that cannot be resolved."""
        return cls(id=user_id, username="unknown_user", full_name="Unknown User")
