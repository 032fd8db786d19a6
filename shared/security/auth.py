"""
JWT helpers for staff authentication.

Token issuance and verification only; resolving a token to a live user is
done by the auth service, which owns the database access.
"""

from __future__ import annotations

import time
import uuid
from typing import Any

import jwt

from shared.config.settings import settings
from shared.config.logging import get_logger
from shared.utils.exceptions import ExpiredTokenError, InvalidTokenError

logger = get_logger(__name__)

ALGORITHM = "HS256"


def sign_jwt(payload: dict[str, Any], ttl_seconds: int | None = None) -> str:
    """
    Sign an access token with the given claims.

    Args:
        payload: Claims to include (sub, username, role).
        ttl_seconds: Token lifetime. Defaults to the configured access token expiry.

    Returns:
        Signed JWT token string.
    """
    if ttl_seconds is None:
        ttl_seconds = settings.jwt_access_token_expire_minutes * 60

    now = int(time.time())
    data = {
        **payload,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + ttl_seconds,
        "type": "access",
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(data, settings.jwt_secret, algorithm=ALGORITHM)


def verify_jwt(token: str) -> dict[str, Any]:
    """
    Verify and decode an access token.

    Returns:
        Decoded token claims.

    Raises:
        ExpiredTokenError: If the token has expired.
        InvalidTokenError: If the signature or the required claims are wrong.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[ALGORITHM],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
    except jwt.ExpiredSignatureError:
        raise ExpiredTokenError()
    except jwt.InvalidTokenError as e:
        # Log the actual error, return a generic message to the client
        logger.warning("JWT validation failed", error=str(e))
        raise InvalidTokenError()

    if not payload.get("sub"):
        raise InvalidTokenError("Invalid token: missing subject claim")
    if payload.get("type") != "access":
        raise InvalidTokenError("Invalid token: invalid type claim")

    return payload


def get_bearer_token(authorization: str | None) -> str:
    """
    Extract bearer token from an Authorization header.

    Raises:
        InvalidTokenError: If header is missing or malformed.
    """
    if not authorization:
        raise InvalidTokenError("Missing Authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise InvalidTokenError("Invalid Authorization header format. Expected: Bearer <token>")
    return token.strip()
