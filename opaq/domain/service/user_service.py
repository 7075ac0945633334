"""User domain service."""

from typing import Sequence

import logfire

from opaq.domain.model import PublicUser, User
from opaq.domain.repository import UserRepository
from opaq.domain.value import UserId

from .base import Service


class UserService(Service):
    """Domain service for user operations."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def save_user(self, user: User) -> User:
        with logfire.span("user_service.save_user", user_id=str(user.id)):
            return await self.user_repository.save(user)

    async def get_public_users(
        self, user_ids: Sequence[UserId]
    ) -> dict[UserId, PublicUser]:
        """Resolve public identities for a set of authors in one query.

        IDs that do not resolve to a user map to the "Unknown User"
        placeholder, so every requested ID is present in the result.

        Args:
            user_ids: Author IDs, duplicates allowed

        Returns:
            Mapping of user ID to public identity
        """
        unique_ids = list(dict.fromkeys(user_ids))
        with logfire.span("user_service.get_public_users", count=len(unique_ids)):
            if not unique_ids:
                return {}

            users = await self.user_repository.find_by_ids(unique_ids)
            found = {user.id: PublicUser.from_user(user) for user in users}

            missing = [uid for uid in unique_ids if uid not in found]
            if missing:
                logfire.warn(
                    "Unresolved authors",
                    user_ids=[str(uid) for uid in missing],
                )

            return {uid: found.get(uid) or PublicUser.unknown(uid) for uid in unique_ids}
