"""
Shared dependencies for routers: actor resolution and role checks.
"""

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from bodegon_api.models import User
from bodegon_api.services.domain import AuthService
from shared.config.constants import Roles
from shared.infrastructure.db import get_db
from shared.security.auth import get_bearer_token
from shared.utils.exceptions import ForbiddenError


def current_user(
    authorization: str | None = Header(None),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the bearer token to the live user making the request.

    Raises:
        InvalidTokenError / ExpiredTokenError: 401.
    """
    token = get_bearer_token(authorization)
    return AuthService(db).resolve_actor(token)


def require_admin(user: User = Depends(current_user)) -> User:
    """Dependency that requires the ADMIN role."""
    if user.role != Roles.ADMIN:
        raise ForbiddenError("access the backoffice", user_id=user.id)
    return user


def optional_admin(
    authorization: str | None = Header(None),
    db: Session = Depends(get_db),
) -> User | None:
    """
    Admin behind the request, or None for anonymous public-site reads.

    A token that is sent must still be valid and belong to an admin.
    """
    if authorization is None:
        return None
    return require_admin(current_user(authorization, db))
