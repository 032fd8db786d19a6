"""
Contact Model: inbound messages from the public site.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, SoftDeleteMixin, UTCDateTime, utcnow


class Contact(SoftDeleteMixin, Base):
    """
    Public contact form submission.

    Created without an actor, so there is no created_by/updated_by.
    Adds a read/unread state next to delete/restore.
    """

    __tablename__ = "contact"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    phone: Mapped[str] = mapped_column(String(40), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)

    is_read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)
    read_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    read_by_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    def mark_as_read(self, actor_id: str | None) -> None:
        self.is_read = True
        self.read_at = utcnow()
        self.read_by_id = actor_id
