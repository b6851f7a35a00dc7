"""Viewer resolution for routes.

A token is read from the ``Authorization: Bearer`` header first, then
from the ``auth_token`` cookie.
"""

from forum.domain.service import JWTService
from forum.domain.value import Viewer


def extract_token(authorization: str | None, auth_token: str | None) -> str | None:
    """Pick the bearer token from the header, falling back to the cookie."""
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    return auth_token


def resolve_viewer(
    jwt_service: JWTService, authorization: str | None, auth_token: str | None
) -> Viewer | None:
    """Resolve the signed-in viewer, or None for anonymous requests.

    Invalid or expired tokens are treated as anonymous; mutating use cases
    reject anonymous viewers themselves.
    """
    return jwt_service.current_viewer(extract_token(authorization, auth_token))
