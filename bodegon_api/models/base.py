"""
Base class and audit mixins for all SQLAlchemy ORM models.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.types import TypeDecorator
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from shared.utils.validators import new_id


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware UTC timestamp on every backend.

    SQLite drops the offset on storage, so naive values read back are UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class SoftDeleteMixin:
    """
    Soft delete / restore lifecycle fields shared by every auditable model.

    Fields added:
    - id: UUID string primary key
    - is_deleted: Soft delete flag (True = deleted)
    - created_at, updated_at: Record timestamps
    - deleted_at/deleted_by_id: Most recent deletion (kept as history after a restore)
    - restored_at/restored_by_id: Most recent restore (cleared on delete)

    Actor ids reference app_user.id but carry no FK, so users can audit themselves.
    """

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)

    # Python-side default keeps sub-second ordering on every backend
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utcnow, nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    deleted_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    deleted_by_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    restored_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    restored_by_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    def soft_delete(self, actor_id: str | None) -> None:
        """Mark as deleted and clear the restore stamp."""
        self.is_deleted = True
        self.deleted_at = utcnow()
        self.deleted_by_id = actor_id
        self.restored_at = None
        self.restored_by_id = None

    def restore(self, actor_id: str | None) -> None:
        """Bring a deleted record back. deleted_at/deleted_by_id are left untouched."""
        self.is_deleted = False
        self.restored_at = utcnow()
        self.restored_by_id = actor_id

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        state = "deleted" if self.is_deleted else "live"
        return f"<{class_name}(id={self.id}, {state})>"


class AuditMixin(SoftDeleteMixin):
    """
    SoftDeleteMixin plus create/update actor stamps.

    Methods:
    - soft_delete(actor_id) / restore(actor_id)
    - set_created_by(actor_id) / set_updated_by(actor_id)
    """

    created_by_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    updated_by_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    def set_created_by(self, actor_id: str | None) -> None:
        """Set created_by on a new entity."""
        self.created_by_id = actor_id

    def set_updated_by(self, actor_id: str | None) -> None:
        """Set updated_by on entity update."""
        self.updated_by_id = actor_id
        self.updated_at = utcnow()
