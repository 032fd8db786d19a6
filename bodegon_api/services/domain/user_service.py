"""
User Service.

Passwords are bcrypt-hashed on create and update and never leave the
service: UserOutput has no password field.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from bodegon_api.models import User
from bodegon_api.services.base_service import BaseCRUDService
from shared.security.password import hash_password
from shared.utils.admin_schemas import UserOutput
from shared.utils.exceptions import UsernameTakenError


class UserService(BaseCRUDService[User, UserOutput]):
    """Service for backoffice users."""

    nullable_fields = frozenset({"phone"})

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=User,
            output_schema=UserOutput,
            entity_name="User",
            search_fields=(User.username, User.first_name, User.last_name),
        )

    def find_live_by_username(self, username: str) -> User | None:
        """Live user with this username, used by login."""
        return self._db.scalar(
            select(User).where(User.username == username, User.is_deleted.is_(False))
        )

    def _ensure_username_free(self, username: str, exclude_id: str | None = None) -> None:
        if self._repo.exists_live(User.username == username, exclude_id=exclude_id):
            raise UsernameTakenError(username)

    def _validate_create(self, data: dict[str, Any]) -> dict[str, Any]:
        self._ensure_username_free(data["username"])
        data["password"] = hash_password(data["password"])
        return data

    def _validate_update(self, entity: User, data: dict[str, Any]) -> dict[str, Any]:
        if "username" in data:
            self._ensure_username_free(data["username"], exclude_id=entity.id)
        if "password" in data:
            data["password"] = hash_password(data["password"])
        return data

    def _validate_restore(self, entity: User) -> None:
        self._ensure_username_free(entity.username, exclude_id=entity.id)
