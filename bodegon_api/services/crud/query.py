"""
List query helpers: search, pagination and batched actor expansion.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Sequence

from sqlalchemy import func, inspect as sa_inspect, or_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from bodegon_api.models import User
from shared.config.constants import AUDIT_ACTOR_FIELDS
from shared.utils.admin_schemas import ActorRef, ListQuery


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_filter(columns: Sequence[Any], term: str | None) -> Any | None:
    """
    Case-insensitive substring match over any of the columns.

    Returns None when there is nothing to search for.
    """
    if not term or not term.strip() or not columns:
        return None
    pattern = f"%{escape_like(term.strip())}%"
    return or_(*(column.ilike(pattern, escape="\\") for column in columns))


def paginate(db: Session, stmt: Select, query: ListQuery) -> tuple[list[Any], int]:
    """
    Run a filtered select for one page plus its total count.

    The count ignores any ordering already on the statement.
    """
    total = db.scalar(select(func.count()).select_from(stmt.order_by(None).subquery())) or 0
    items = list(db.scalars(stmt.offset(query.offset).limit(query.limit)).all())
    return items, total


def page_metadata(total: int, query: ListQuery) -> dict[str, Any]:
    """Compute total_pages and the next/prev flags."""
    total_pages = math.ceil(total / query.limit) if total else 0
    return {
        "total_items": total,
        "total_pages": total_pages,
        "current_page": query.page,
        "has_next_page": query.page < total_pages,
        "has_prev_page": query.page > 1,
    }


def column_values(entity: Any) -> dict[str, Any]:
    """Plain column values of an ORM instance. Never triggers a relationship load."""
    mapper = sa_inspect(entity).mapper
    return {attr.key: getattr(entity, attr.key) for attr in mapper.column_attrs}


class ActorLoader:
    """
    Expands audit actor ids to ActorRef with a single user query.

    Usage:
        actors = ActorLoader(db).load(dishes)
        actors.stamps(dish)  # {"created_by": ActorRef | None, ...}
    """

    def __init__(self, db: Session):
        self._db = db
        self._actors: dict[str, ActorRef] = {}

    @staticmethod
    def _fields(entity: Any) -> list[str]:
        return [f for f in AUDIT_ACTOR_FIELDS if hasattr(entity, f"{f}_id")]

    def load(self, entities: Iterable[Any]) -> "ActorLoader":
        ids: set[str] = set()
        for entity in entities:
            for field in self._fields(entity):
                actor_id = getattr(entity, f"{field}_id")
                if actor_id:
                    ids.add(actor_id)
        ids -= self._actors.keys()
        if ids:
            rows = self._db.execute(
                select(User.id, User.username, User.first_name, User.last_name).where(
                    User.id.in_(ids)
                )
            ).all()
            for row in rows:
                self._actors[row.id] = ActorRef(
                    id=row.id,
                    username=row.username,
                    first_name=row.first_name,
                    last_name=row.last_name,
                )
        return self

    def stamps(self, entity: Any) -> dict[str, ActorRef | None]:
        return {
            field: self._actors.get(getattr(entity, f"{field}_id") or "")
            for field in self._fields(entity)
        }
