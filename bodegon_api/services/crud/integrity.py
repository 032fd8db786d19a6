"""
Reference checks run before a mutation is written.

All checks are read-only and run outside the write, so a narrow
check-then-act window exists between them and the commit.
"""

from __future__ import annotations

from typing import Any, Sequence, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bodegon_api.models import SoftDeleteMixin
from shared.utils.exceptions import InvalidReferenceError
from shared.utils.validators import validate_id, validate_ids

T = TypeVar("T", bound=SoftDeleteMixin)


def require_live(
    db: Session,
    model: type[T],
    entity_id: str,
    entity_name: str,
    field: str,
) -> T:
    """
    Resolve a reference to a live entity.

    Raises:
        InvalidIdError: If the id is malformed.
        InvalidReferenceError: If it does not exist or is deleted.
    """
    entity_id = validate_id(entity_id, entity_name)
    entity = db.get(model, entity_id)
    if entity is None or entity.is_deleted:
        raise InvalidReferenceError(entity_name, entity_id, field=field)
    return entity


def require_all_live(
    db: Session,
    model: type[T],
    entity_ids: Sequence[str],
    entity_name: str,
    field: str,
) -> list[str]:
    """
    Check that every id resolves to a live entity, in one query.

    Returns:
        The validated ids, deduplicated, in input order.

    Raises:
        InvalidReferenceError: Naming the first id that does not resolve.
    """
    ids = validate_ids(entity_ids, entity_name)
    if not ids:
        return ids
    found = set(
        db.scalars(
            select(model.id).where(model.id.in_(ids), model.is_deleted.is_(False))
        ).all()
    )
    for entity_id in ids:
        if entity_id not in found:
            raise InvalidReferenceError(entity_name, entity_id, field=field)
    return ids


def count_live_references(db: Session, model: type[SoftDeleteMixin], *criteria: Any) -> int:
    """Count live rows of `model` matching criteria (dependents blocking a delete)."""
    return db.scalar(
        select(func.count())
        .select_from(model)
        .where(model.is_deleted.is_(False), *criteria)
    ) or 0
