"""
Authentication router.
Handles login and the current-user lookup.
"""

from fastapi import APIRouter, Depends, Request
from slowapi.util import get_remote_address
from sqlalchemy.orm import Session

from bodegon_api.models import User
from bodegon_api.routers._common.base import current_user
from bodegon_api.services.domain import AuthService
from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.security.rate_limit import limiter
from shared.utils.schemas import LoginRequest, LoginResponse, UserInfo


router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.login_rate_limit)
def login(request: Request, body: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    """
    Authenticate a backoffice user and return an access token.

    The access token contains:
    - sub: user ID
    - username
    - role

    Rate limited by client IP.
    """
    return AuthService(db).login(
        body.username, body.password, ip_address=get_remote_address(request)
    )


@router.get("/me", response_model=UserInfo)
def me(user: User = Depends(current_user)) -> UserInfo:
    """Return the user behind the bearer token."""
    return AuthService.user_info(user)
