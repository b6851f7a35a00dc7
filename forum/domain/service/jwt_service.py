"""Viewer resolution from bearer tokens.

Stands in for the external auth provider: a request carries a token or
nothing, and the service turns it into the current viewer or nothing.
"""

from uuid import UUID

import logfire

from forum.config import AuthSettings
from forum.domain.value import Handle, UserId, Viewer
from forum.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Secret, algorithm and lifetime of tokens
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, handle: str) -> str:
        """Mint a token the way the auth provider does (tests, local tooling)."""
        return create_token(user_id, handle, self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify a token and return its claims.

        Raises:
            JWTError: If token is invalid or expired
        """
        try:
            return verify_token(token, self.auth_settings)
        except JWTError as e:
            logfire.warn("JWT token verification failed", error=str(e))
            raise

    def current_viewer(self, token: str | None) -> Viewer | None:
        """Resolve the signed-in viewer without raising.

        A missing, invalid or expired token, or one whose subject is not a
        UUID, means an anonymous viewer.

        Args:
            token: JWT token string (optional)

        Returns:
            Viewer, or None when anonymous
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
            viewer = Viewer(
                user_id=UserId(UUID(payload.user_id)), handle=Handle(payload.handle)
            )
        except (JWTError, ValueError) as e:
            logfire.debug("Treating request as anonymous", error=str(e))
            return None
        return viewer
