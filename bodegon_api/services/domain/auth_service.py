"""
Auth Service: login and token → actor resolution.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from bodegon_api.models import User
from bodegon_api.services.domain.user_service import UserService
from shared.config.logging import audit_auth_event
from shared.config.settings import settings
from shared.security.auth import sign_jwt, verify_jwt
from shared.security.password import verify_password
from shared.utils.exceptions import InvalidCredentialsError, InvalidTokenError
from shared.utils.schemas import LoginResponse, UserInfo


class AuthService:
    """Issues access tokens and resolves them back to live users."""

    def __init__(self, db: Session):
        self._db = db
        self._users = UserService(db)

    def login(self, username: str, password: str, ip_address: str | None = None) -> LoginResponse:
        """
        Authenticate a backoffice user.

        Unknown, deleted and wrong-password attempts fail the same way.

        Raises:
            InvalidCredentialsError: If authentication fails.
        """
        user = self._users.find_live_by_username(username)
        if user is None:
            audit_auth_event(
                "LOGIN", username=username, success=False, reason="unknown_user",
                ip_address=ip_address,
            )
            raise InvalidCredentialsError()

        if not verify_password(password, user.password):
            audit_auth_event(
                "LOGIN", user_id=user.id, username=username, success=False,
                reason="bad_password", ip_address=ip_address,
            )
            raise InvalidCredentialsError()

        token = sign_jwt({"sub": user.id, "username": user.username, "role": user.role})
        audit_auth_event("LOGIN", user_id=user.id, username=username, ip_address=ip_address)

        return LoginResponse(
            access_token=token,
            expires_in=settings.jwt_access_token_expire_minutes * 60,
            user=self.user_info(user),
        )

    def resolve_actor(self, token: str) -> User:
        """
        Resolve a bearer token to the live user behind it.

        Raises:
            ExpiredTokenError: If the token has expired.
            InvalidTokenError: If the token is invalid or the user is gone.
        """
        claims = verify_jwt(token)
        user = self._db.get(User, claims["sub"])
        if user is None or user.is_deleted:
            audit_auth_event(
                "TOKEN_REJECTED", user_id=claims["sub"], success=False, reason="user_not_live"
            )
            raise InvalidTokenError("Token user no longer exists")
        return user

    @staticmethod
    def user_info(user: User) -> UserInfo:
        return UserInfo(
            id=user.id,
            username=user.username,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
        )
