"""
Repository Pattern for database access.

Thin layer between the services and SQLAlchemy. Every auditable model has
an `is_deleted` flag; "live" means `is_deleted` is false.

Usage:
    from bodegon_api.services.crud.repository import SoftDeleteRepository

    dish_repo = SoftDeleteRepository(Dish, db)

    dish = dish_repo.find_by_id(dish_id)                 # deleted rows included
    live = dish_repo.find_by_id(dish_id, live_only=True)
    taken = dish_repo.exists_live(Dish.name_slug == "flan", exclude_id=dish_id)
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from bodegon_api.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class SoftDeleteRepository(Generic[ModelT]):
    """Repository for models using SoftDeleteMixin."""

    def __init__(self, model: type[ModelT], session: Session):
        self._model = model
        self._session = session

    @property
    def model(self) -> type[ModelT]:
        """The SQLAlchemy model class."""
        return self._model

    @property
    def session(self) -> Session:
        """The database session."""
        return self._session

    def _base_query(self) -> Select:
        """Create base select query."""
        return select(self._model)

    def _apply_live_filter(self, query: Select, live_only: bool) -> Select:
        """Restrict to rows that are not soft deleted."""
        if live_only:
            query = query.where(self._model.is_deleted.is_(False))
        return query

    def _apply_options(self, query: Select, options: list[Any] | None) -> Select:
        """Apply eager loading options."""
        if options:
            query = query.options(*options)
        return query

    def find_by_id(
        self,
        entity_id: str,
        *,
        live_only: bool = False,
        options: list[Any] | None = None,
    ) -> ModelT | None:
        """
        Find entity by primary key.

        Args:
            entity_id: The primary key value.
            live_only: Ignore soft-deleted rows.
            options: SQLAlchemy loader options (selectinload, joinedload).
                Loaded rows are refreshed so derived collections are current.

        Returns:
            Entity or None if not found.
        """
        query = self._base_query().where(self._model.id == entity_id)
        query = self._apply_live_filter(query, live_only)
        if options:
            query = self._apply_options(query, options).execution_options(populate_existing=True)
        return self._session.scalar(query)

    def exists_live(self, *criteria: Any, exclude_id: str | None = None) -> bool:
        """
        Check whether a live row matches all criteria.

        Args:
            criteria: SQLAlchemy boolean expressions.
            exclude_id: Ignore this row (the entity being updated).
        """
        query = select(self._model.id).where(self._model.is_deleted.is_(False), *criteria)
        if exclude_id is not None:
            query = query.where(self._model.id != exclude_id)
        return self._session.scalar(query.limit(1)) is not None

    def count(self, *criteria: Any, is_deleted: bool | None = None) -> int:
        """
        Count rows matching criteria.

        Args:
            is_deleted: None counts every row, True/False restrict by the flag.
        """
        query = select(func.count()).select_from(self._model).where(*criteria)
        if is_deleted is not None:
            query = query.where(self._model.is_deleted.is_(is_deleted))
        return self._session.scalar(query) or 0
