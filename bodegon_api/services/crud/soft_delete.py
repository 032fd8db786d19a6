"""
Soft delete lifecycle guard shared by every auditable entity.

- soft_delete / restore_entity: legal transitions only, then persist
- set_created_by / set_updated_by: actor stamps for create and update

Hard deletes are never issued.
"""

from __future__ import annotations

from typing import TypeVar

from sqlalchemy.orm import Session

from bodegon_api.models import AuditMixin, SoftDeleteMixin
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import AlreadyDeletedError, NotDeletedError

logger = get_logger(__name__)

T = TypeVar("T", bound=SoftDeleteMixin)


def ensure_live(entity: SoftDeleteMixin, entity_name: str) -> None:
    """Raise AlreadyDeletedError when the entity is soft deleted."""
    if entity.is_deleted:
        raise AlreadyDeletedError(entity_name, entity.id)


def ensure_deleted(entity: SoftDeleteMixin, entity_name: str) -> None:
    """Raise NotDeletedError when the entity is live."""
    if not entity.is_deleted:
        raise NotDeletedError(entity_name, entity.id)


def soft_delete(db: Session, entity: T, actor_id: str | None, entity_name: str) -> T:
    """
    Soft delete an entity with audit trail.

    Sets is_deleted, deleted_at, deleted_by_id and clears the restore stamp.

    Raises:
        AlreadyDeletedError: If the entity is already deleted.
    """
    ensure_live(entity, entity_name)
    entity.soft_delete(actor_id)
    safe_commit(db)
    logger.info(f"{entity_name} deleted", entity_id=entity.id, actor_id=actor_id)
    return entity


def restore_entity(db: Session, entity: T, actor_id: str | None, entity_name: str) -> T:
    """
    Restore a soft-deleted entity.

    deleted_at/deleted_by_id stay as the record of the last deletion.

    Raises:
        NotDeletedError: If the entity is not deleted.
    """
    ensure_deleted(entity, entity_name)
    entity.restore(actor_id)
    safe_commit(db)
    logger.info(f"{entity_name} restored", entity_id=entity.id, actor_id=actor_id)
    return entity


def set_created_by(entity: AuditMixin, actor_id: str | None) -> None:
    """Set created_by on a new entity."""
    entity.is_deleted = False
    entity.set_created_by(actor_id)


def set_updated_by(entity: AuditMixin, actor_id: str | None) -> None:
    """Set updated_by (and updated_at) on an updated entity."""
    entity.set_updated_by(actor_id)
