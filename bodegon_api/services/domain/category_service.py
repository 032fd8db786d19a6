"""
Category Service.

Categories own no stored list of subcategories: the list is derived from
Subcategory.category_id (live rows), so subcategory create, move, delete
and restore are reflected here without extra writes.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from bodegon_api.models import Category, Dish, Subcategory
from bodegon_api.services.base_service import BaseCRUDService
from bodegon_api.services.crud.integrity import count_live_references
from shared.utils.admin_schemas import CategoryListQuery, CategoryOutput, ListQuery, SlugRef
from shared.utils.exceptions import HasDishesError, HasSubcategoriesError, ValidationError
from shared.utils.slug import generate_slug


class CategoryService(BaseCRUDService[Category, CategoryOutput]):
    """Service for category management."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Category,
            output_schema=CategoryOutput,
            entity_name="Category",
            search_fields=(Category.name,),
        )

    def _slug_for(self, name: str) -> str:
        slug = generate_slug(name)
        if not slug:
            raise ValidationError("Category name must contain letters or digits", field="name")
        return slug

    def _ensure_name_free(self, name: str, slug: str, exclude_id: str | None = None) -> None:
        self._ensure_unique(Category.name, name, exclude_id=exclude_id)
        self._ensure_unique(Category.name_slug, slug, field="name_slug", exclude_id=exclude_id)

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> dict[str, Any]:
        data["name_slug"] = self._slug_for(data["name"])
        self._ensure_name_free(data["name"], data["name_slug"])
        return data

    def _validate_update(self, entity: Category, data: dict[str, Any]) -> dict[str, Any]:
        if "name" in data:
            data["name_slug"] = self._slug_for(data["name"])
            self._ensure_name_free(data["name"], data["name_slug"], exclude_id=entity.id)
        return data

    def _validate_delete(self, entity: Category) -> None:
        subcategories = count_live_references(
            self._db, Subcategory, Subcategory.category_id == entity.id
        )
        if subcategories:
            raise HasSubcategoriesError(entity.id, subcategories)

        dishes = count_live_references(self._db, Dish, Dish.category_id == entity.id)
        if dishes:
            raise HasDishesError(self._entity_name, entity.id, dishes)

    def _validate_restore(self, entity: Category) -> None:
        self._ensure_name_free(entity.name, entity.name_slug, exclude_id=entity.id)

    # =========================================================================
    # Output
    # =========================================================================

    def _wants_expand(self, query: ListQuery) -> bool:
        return isinstance(query, CategoryListQuery) and query.include_subcategories

    def _expand_options(self) -> list[Any]:
        return [selectinload(Category.subcategories)]

    def _load_extras(self, entities: Sequence[Category], expand: bool) -> dict[str, Any]:
        if expand:
            return {}
        by_category: dict[str, list[str]] = defaultdict(list)
        rows = self._db.execute(
            select(Subcategory.id, Subcategory.category_id)
            .where(
                Subcategory.category_id.in_([e.id for e in entities]),
                Subcategory.is_deleted.is_(False),
            )
            .order_by(Subcategory.created_at.desc())
        ).all()
        for row in rows:
            by_category[row.category_id].append(row.id)
        return {"subcategory_ids": by_category}

    def _output_fields(self, entity: Category, extras: dict[str, Any], expand: bool) -> dict[str, Any]:
        if expand:
            refs = [
                SlugRef(id=s.id, name=s.name, name_slug=s.name_slug)
                for s in entity.subcategories
            ]
            return {"subcategory_ids": [r.id for r in refs], "subcategories": refs}
        return {"subcategory_ids": extras["subcategory_ids"].get(entity.id, [])}
