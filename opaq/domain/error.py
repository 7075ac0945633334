"""Domain layer errors.

Every error raised by a domain service is detected before any mutation, so
a failed operation never leaves a partial write behind.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class UnauthorizedError(DomainError):
    """Raised when an operation requires an authenticated caller and has none."""

    def __init__(self, message: str = "User authentication required"):
        super().__init__(message)


class ForbiddenError(DomainError):
    """Raised when an authenticated caller lacks ownership for an action."""

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        self.action = action
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not allowed to {action} {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found.

    Also raised for resources the caller may not see (private pitches, draft
    posts of other users) so their existence is not leaked.
    """

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvalidInputError(DomainError):
    """Raised when caller input is rejected before any mutation."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)
