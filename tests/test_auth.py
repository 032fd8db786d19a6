"""
Tests for authentication: password hashing, JWT tokens, login and actor resolution.
"""

import time

import jwt
import pytest

from bodegon_api.services.domain import AuthService
from shared.config.settings import settings
from shared.security.auth import ALGORITHM, get_bearer_token, sign_jwt, verify_jwt
from shared.security.password import hash_password, verify_password
from shared.utils.exceptions import ExpiredTokenError, InvalidCredentialsError, InvalidTokenError
from tests.conftest import ADMIN_PASSWORD, ADMIN_USERNAME


class TestPasswordHashing:
    """Test password hashing functionality."""

    def test_hash_password(self):
        """Test that password hashing works."""
        hashed = hash_password("mypassword")

        assert hashed != "mypassword"
        assert hashed.startswith("$2")

    def test_verify_password_correct(self):
        hashed = hash_password("mypassword")
        assert verify_password("mypassword", hashed)

    def test_verify_password_incorrect(self):
        hashed = hash_password("mypassword")
        assert not verify_password("wrongpassword", hashed)

    def test_plain_text_never_verifies(self):
        """A stored value that is not a bcrypt hash is rejected."""
        assert not verify_password("mypassword", "mypassword")


class TestJWT:
    """Token signing and verification."""

    def test_round_trip_claims(self):
        token = sign_jwt({"sub": "user-1", "username": "admin", "role": "admin"})

        claims = verify_jwt(token)

        assert claims["sub"] == "user-1"
        assert claims["type"] == "access"
        assert claims["iss"] == settings.jwt_issuer
        assert claims["exp"] > claims["iat"]

    def test_expired_token(self):
        token = sign_jwt({"sub": "user-1"}, ttl_seconds=-10)

        with pytest.raises(ExpiredTokenError) as exc_info:
            verify_jwt(token)
        assert exc_info.value.status_code == 401
        assert exc_info.value.code == "expired_token"

    def test_wrong_secret(self):
        token = jwt.encode(
            {
                "sub": "user-1",
                "type": "access",
                "iss": settings.jwt_issuer,
                "aud": settings.jwt_audience,
                "exp": int(time.time()) + 60,
            },
            "another-secret-that-is-long-enough-for-hs256",
            algorithm=ALGORITHM,
        )

        with pytest.raises(InvalidTokenError):
            verify_jwt(token)

    def test_missing_subject(self):
        token = sign_jwt({"username": "admin"})

        with pytest.raises(InvalidTokenError):
            verify_jwt(token)

    @pytest.mark.parametrize("header", [None, "", "Token abc", "Bearer ", "Basic abc"])
    def test_bad_authorization_header(self, header):
        with pytest.raises(InvalidTokenError):
            get_bearer_token(header)

    def test_bearer_token(self):
        assert get_bearer_token("Bearer abc.def") == "abc.def"


class TestAuthService:
    """Login and token → actor resolution."""

    def test_login(self, db_session, seed_admin_user):
        response = AuthService(db_session).login(ADMIN_USERNAME, ADMIN_PASSWORD)

        assert response.token_type == "Bearer"
        assert response.user.id == seed_admin_user.id
        assert verify_jwt(response.access_token)["sub"] == seed_admin_user.id

    def test_wrong_password(self, db_session, seed_admin_user):
        with pytest.raises(InvalidCredentialsError):
            AuthService(db_session).login(ADMIN_USERNAME, "wrong")

    def test_unknown_user(self, db_session, seed_admin_user):
        with pytest.raises(InvalidCredentialsError):
            AuthService(db_session).login("nobody", ADMIN_PASSWORD)

    def test_deleted_user_cannot_login(self, db_session, users, seed_admin_user):
        other = users.create(
            {"username": "gone", "password": "secret123", "first_name": "G", "last_name": "H"},
            seed_admin_user.id,
        )
        users.delete(other.id, seed_admin_user.id)

        with pytest.raises(InvalidCredentialsError):
            AuthService(db_session).login("gone", "secret123")

    def test_resolve_actor(self, db_session, seed_admin_user):
        token = sign_jwt({"sub": seed_admin_user.id})

        assert AuthService(db_session).resolve_actor(token).id == seed_admin_user.id

    def test_token_of_deleted_user(self, db_session, users, seed_admin_user):
        """A valid token no longer resolves once its user is deleted."""
        other = users.create(
            {"username": "gone", "password": "secret123", "first_name": "G", "last_name": "H"},
            seed_admin_user.id,
        )
        token = sign_jwt({"sub": other.id})
        users.delete(other.id, seed_admin_user.id)

        with pytest.raises(InvalidTokenError):
            AuthService(db_session).resolve_actor(token)


class TestAuthEndpoints:
    """Test authentication API endpoints."""

    def test_login_success(self, client, seed_admin_user):
        """Test successful login."""
        response = client.post(
            "/api/auth/login",
            json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()
        assert "access_token" in data
        assert data["expires_in"] == settings.jwt_access_token_expire_minutes * 60
        assert data["user"]["username"] == ADMIN_USERNAME
        assert "password" not in data["user"]

    def test_login_wrong_password(self, client, seed_admin_user):
        """Test login with wrong password."""
        response = client.post(
            "/api/auth/login",
            json={"username": ADMIN_USERNAME, "password": "wrongpassword"},
        )

        assert response.status_code == 401
        assert response.json()["code"] == "invalid_credentials"

    def test_me(self, client, auth_headers):
        response = client.get("/api/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["username"] == ADMIN_USERNAME

    def test_me_without_token(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["code"] == "invalid_token"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_me_with_expired_token(self, client, seed_admin_user):
        token = sign_jwt({"sub": seed_admin_user.id}, ttl_seconds=-10)

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["code"] == "expired_token"
