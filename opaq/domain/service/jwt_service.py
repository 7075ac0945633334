"""JWT token domain service.

The identity resolver: turns the session cookie into a caller ID.
"""

from uuid import UUID

import logfire

from opaq.config import AuthSettings
from opaq.domain.value import UserId
from opaq.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, username: str) -> str:
        """Create JWT token for user.

        Args:
            user_id: User ID
            username: Username

        Returns:
            JWT token string
        """
        with logfire.span(
            "jwt_service.create_token", user_id=user_id, username=username
        ):
            token = create_token(user_id, username, self.auth_settings)
            logfire.info("JWT token created", user_id=user_id, username=username)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info(
                    "JWT token verified",
                    user_id=payload.user_id,
                    username=payload.username,
                )
                return payload
            except Exception as e:
                logfire.error("JWT token verification failed", error=str(e))
                raise

    def get_user_id_from_token(self, token: str | None) -> UserId | None:
        """Resolve the caller from a JWT token without raising exceptions.

        A missing, invalid or expired token, or one whose subject is not a
        UUID, resolves to an anonymous caller.

        Args:
            token: JWT token string (optional)

        Returns:
            User ID if token is valid, None otherwise
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
            return UserId(UUID(payload.user_id))
        except Exception as e:
            logfire.warn("Treating request as anonymous", error=str(e))
            return None
