"""
User Model.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.config.constants import Roles

from .base import AuditMixin, Base


class User(AuditMixin, Base):
    """
    A backoffice staff member. Only the admin role exists.
    Inherits: is_deleted, timestamps and *_by_id actor stamps from AuditMixin.
    """

    __tablename__ = "app_user"

    # Unique among live users only; enforced by the service
    username: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)  # bcrypt hash
    first_name: Mapped[str] = mapped_column(String(120), nullable=False)
    last_name: Mapped[str] = mapped_column(String(120), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(40))
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=Roles.ADMIN)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
