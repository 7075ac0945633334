"""Base service class for domain services."""

from opaq.domain.error import UnauthorizedError
from opaq.domain.value import UserId


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    @staticmethod
    def require_user(user_id: UserId | None) -> UserId:
        """Return the caller's ID or raise UnauthorizedError for anonymous callers."""
        if user_id is None:
            raise UnauthorizedError()
        return user_id
