"""JWT token utilities.

Tokens carry the user ID in the registered ``sub`` claim and the display
handle in a private ``handle`` claim.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from forum.config import AuthSettings

REQUIRED_CLAIMS = ["sub", "exp", "handle"]


class TokenPayload(BaseModel):
    """Decoded token claims."""

    user_id: str
    handle: str
    issued_at: datetime | None = None
    exp: datetime


class JWTError(Exception):
    """Token missing, malformed, forged or expired."""

    pass


def create_token(user_id: str, handle: str, settings: AuthSettings) -> str:
    """Sign a token for ``user_id``.

    Only tests and local tooling mint tokens; production tokens come from
    the auth provider using the same secret and claims.
    """
    now = datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "handle": handle,
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check the signature and expiry of ``token`` and return its claims.

    Args:
        token: Encoded JWT
        settings: Authentication settings

    Returns:
        Token payload

    Raises:
        JWTError: If the token is invalid, incomplete or expired
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            leeway=settings.jwt_leeway_seconds,
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.MissingRequiredClaimError as e:
        raise JWTError(f"Token is missing the {e.claim!r} claim") from e
    except jwt.InvalidTokenError as e:
        raise JWTError("Invalid token") from e

    issued_at = claims.get("iat")
    return TokenPayload(
        user_id=claims["sub"],
        handle=claims["handle"],
        issued_at=(
            datetime.fromtimestamp(issued_at, timezone.utc)
            if issued_at is not None
            else None
        ),
        exp=datetime.fromtimestamp(claims["exp"], timezone.utc),
    )
