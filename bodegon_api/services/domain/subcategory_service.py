"""
Subcategory Service.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session, selectinload
from sqlalchemy.sql import Select

from bodegon_api.models import Category, Dish, Subcategory
from bodegon_api.services.base_service import BaseCRUDService
from bodegon_api.services.crud.integrity import count_live_references, require_live
from shared.utils.admin_schemas import ListQuery, SlugRef, SubcategoryListQuery, SubcategoryOutput
from shared.utils.exceptions import HasDishesError, ValidationError
from shared.utils.slug import generate_slug
from shared.utils.validators import validate_id


class SubcategoryService(BaseCRUDService[Subcategory, SubcategoryOutput]):
    """Service for subcategory management. Names are unique per parent category."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Subcategory,
            output_schema=SubcategoryOutput,
            entity_name="Subcategory",
            search_fields=(Subcategory.name,),
        )

    def _ensure_name_free(
        self, name: str, slug: str, category_id: str, exclude_id: str | None = None
    ) -> None:
        same_parent = Subcategory.category_id == category_id
        self._ensure_unique(Subcategory.name, name, same_parent, exclude_id=exclude_id)
        self._ensure_unique(
            Subcategory.name_slug, slug, same_parent, field="name_slug", exclude_id=exclude_id
        )

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> dict[str, Any]:
        category = require_live(self._db, Category, data["category_id"], "Category", "category_id")
        data["category_id"] = category.id
        data["name_slug"] = generate_slug(data["name"])
        if not data["name_slug"]:
            raise ValidationError("Subcategory name must contain letters or digits", field="name")
        self._ensure_name_free(data["name"], data["name_slug"], category.id)
        return data

    def _validate_update(self, entity: Subcategory, data: dict[str, Any]) -> dict[str, Any]:
        category_id = entity.category_id
        if "category_id" in data:
            category = require_live(
                self._db, Category, data["category_id"], "Category", "category_id"
            )
            data["category_id"] = category_id = category.id
            if category_id != entity.category_id:
                # Moving would break the category/subcategory pair of its dishes
                dishes = count_live_references(
                    self._db, Dish, Dish.subcategory_id == entity.id
                )
                if dishes:
                    raise HasDishesError(self._entity_name, entity.id, dishes)

        if "name" in data:
            data["name_slug"] = generate_slug(data["name"])
            if not data["name_slug"]:
                raise ValidationError(
                    "Subcategory name must contain letters or digits", field="name"
                )

        if "name" in data or category_id != entity.category_id:
            self._ensure_name_free(
                data.get("name", entity.name),
                data.get("name_slug", entity.name_slug),
                category_id,
                exclude_id=entity.id,
            )
        return data

    def _validate_delete(self, entity: Subcategory) -> None:
        dishes = count_live_references(self._db, Dish, Dish.subcategory_id == entity.id)
        if dishes:
            raise HasDishesError(self._entity_name, entity.id, dishes)

    def _validate_restore(self, entity: Subcategory) -> None:
        require_live(self._db, Category, entity.category_id, "Category", "category_id")
        self._ensure_name_free(
            entity.name, entity.name_slug, entity.category_id, exclude_id=entity.id
        )

    # =========================================================================
    # Queries and Output
    # =========================================================================

    def _apply_filters(self, stmt: Select, query: ListQuery) -> Select:
        if isinstance(query, SubcategoryListQuery) and query.category_id:
            stmt = stmt.where(
                Subcategory.category_id == validate_id(query.category_id, "Category")
            )
        return stmt

    def _wants_expand(self, query: ListQuery) -> bool:
        return isinstance(query, SubcategoryListQuery) and query.include_category

    def _expand_options(self) -> list[Any]:
        return [selectinload(Subcategory.category)]

    def _output_fields(
        self, entity: Subcategory, extras: dict[str, Any], expand: bool
    ) -> dict[str, Any]:
        if not expand:
            return {}
        category = entity.category
        return {
            "category": SlugRef(id=category.id, name=category.name, name_slug=category.name_slug)
        }
