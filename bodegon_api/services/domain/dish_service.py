"""
Dish Service.

Integrity rules checked before every write:
- category must be a live Category
- subcategory, when set, must be a live Subcategory of that same category
- every ingredient/allergen id must be live
- name_slug is unique among live dishes
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.sql import Select

from bodegon_api.models import (
    Allergen,
    Category,
    Dish,
    Ingredient,
    Subcategory,
    dish_allergen,
    dish_ingredient,
)
from bodegon_api.services.base_service import BaseCRUDService
from bodegon_api.services.crud.integrity import require_all_live, require_live
from shared.config.settings import settings
from shared.utils.admin_schemas import DishListQuery, DishOutput, ListQuery, NamedRef, SlugRef
from shared.utils.exceptions import (
    InvalidReferenceError,
    SubcategoryMismatchError,
    ValidationError,
)
from shared.utils.slug import generate_slug, is_valid_slug
from shared.utils.validators import validate_id


class DishService(BaseCRUDService[Dish, DishOutput]):
    """Service for dish management."""

    nullable_fields = frozenset({"subcategory_id"})

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Dish,
            output_schema=DishOutput,
            entity_name="Dish",
            search_fields=(Dish.name, Dish.name_slug, Dish.description),
        )

    def set_image(self, dish_id: str, image_url: str, actor_id: str | None) -> DishOutput:
        """Point the dish at an uploaded image. Goes through the normal update path."""
        return self.update(dish_id, {"image": image_url}, actor_id)

    # =========================================================================
    # Integrity checks
    # =========================================================================

    def _resolve_slug(self, data: dict[str, Any], exclude_id: str | None = None) -> str:
        slug = data.get("name_slug")
        if slug:
            if not is_valid_slug(slug):
                raise ValidationError(
                    "name_slug may only contain lowercase letters, digits and underscores",
                    field="name_slug",
                )
        else:
            slug = generate_slug(data["name"])
            if not slug:
                raise ValidationError("Dish name must contain letters or digits", field="name")
        self._ensure_unique(Dish.name_slug, slug, field="name_slug", exclude_id=exclude_id)
        return slug

    def _check_subcategory(self, subcategory_id: str, category_id: str) -> str:
        subcategory_id = validate_id(subcategory_id, "Subcategory")
        subcategory = self._db.get(Subcategory, subcategory_id)
        if subcategory is None or subcategory.is_deleted:
            raise InvalidReferenceError("Subcategory", subcategory_id, field="subcategory_id")
        if subcategory.category_id != category_id:
            raise SubcategoryMismatchError(subcategory_id, category_id)
        return subcategory_id

    def _check_attachments(self, data: dict[str, Any]) -> None:
        if "ingredient_ids" in data:
            data["ingredient_ids"] = require_all_live(
                self._db, Ingredient, data["ingredient_ids"], "Ingredient", "ingredient_ids"
            )
        if "allergen_ids" in data:
            data["allergen_ids"] = require_all_live(
                self._db, Allergen, data["allergen_ids"], "Allergen", "allergen_ids"
            )

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> dict[str, Any]:
        data["name_slug"] = self._resolve_slug(data)

        category = require_live(self._db, Category, data["category_id"], "Category", "category_id")
        data["category_id"] = category.id
        if data.get("subcategory_id"):
            data["subcategory_id"] = self._check_subcategory(data["subcategory_id"], category.id)
        else:
            data["subcategory_id"] = None

        data.setdefault("ingredient_ids", [])
        data.setdefault("allergen_ids", [])
        self._check_attachments(data)

        if not data.get("image"):
            data["image"] = settings.default_dish_image
        return data

    def _validate_update(self, entity: Dish, data: dict[str, Any]) -> dict[str, Any]:
        if data.get("name_slug"):
            data["name_slug"] = self._resolve_slug(data, exclude_id=entity.id)
        else:
            # Renaming keeps the slug unless a new one is given
            data.pop("name_slug", None)

        if "category_id" in data or "subcategory_id" in data:
            category_id = entity.category_id
            if "category_id" in data:
                category = require_live(
                    self._db, Category, data["category_id"], "Category", "category_id"
                )
                data["category_id"] = category_id = category.id

            subcategory_id = data.get("subcategory_id", entity.subcategory_id)
            if subcategory_id:
                subcategory_id = self._check_subcategory(subcategory_id, category_id)
            if "subcategory_id" in data:
                data["subcategory_id"] = subcategory_id or None

        self._check_attachments(data)

        if "image" in data and not data["image"]:
            data["image"] = settings.default_dish_image
        return data

    def _validate_restore(self, entity: Dish) -> None:
        require_live(self._db, Category, entity.category_id, "Category", "category_id")
        if entity.subcategory_id:
            require_live(
                self._db, Subcategory, entity.subcategory_id, "Subcategory", "subcategory_id"
            )
        self._ensure_unique(
            Dish.name_slug, entity.name_slug, field="name_slug", exclude_id=entity.id
        )

    def _before_commit(self, entity: Dish, data: dict[str, Any]) -> None:
        if "ingredient_ids" in data:
            entity.ingredients = self._ingredients(data["ingredient_ids"])
        if "allergen_ids" in data:
            entity.allergens = self._allergens(data["allergen_ids"])

    def _ingredients(self, ids: list[str]) -> list[Ingredient]:
        if not ids:
            return []
        return list(self._db.scalars(select(Ingredient).where(Ingredient.id.in_(ids))).all())

    def _allergens(self, ids: list[str]) -> list[Allergen]:
        if not ids:
            return []
        return list(self._db.scalars(select(Allergen).where(Allergen.id.in_(ids))).all())

    # =========================================================================
    # Queries and Output
    # =========================================================================

    def _apply_filters(self, stmt: Select, query: ListQuery) -> Select:
        if not isinstance(query, DishListQuery):
            return stmt
        if query.category_id:
            stmt = stmt.where(Dish.category_id == validate_id(query.category_id, "Category"))
        if query.subcategory_id:
            stmt = stmt.where(
                Dish.subcategory_id == validate_id(query.subcategory_id, "Subcategory")
            )
        return stmt

    def _wants_expand(self, query: ListQuery) -> bool:
        return isinstance(query, DishListQuery) and query.include_relations

    def _expand_options(self) -> list[Any]:
        return [
            selectinload(Dish.category),
            selectinload(Dish.subcategory),
            selectinload(Dish.ingredients),
            selectinload(Dish.allergens),
        ]

    def _load_extras(self, entities: Sequence[Dish], expand: bool) -> dict[str, Any]:
        if expand:
            return {}
        dish_ids = [e.id for e in entities]
        ingredients: dict[str, list[str]] = defaultdict(list)
        allergens: dict[str, list[str]] = defaultdict(list)
        for row in self._db.execute(
            select(dish_ingredient.c.dish_id, dish_ingredient.c.ingredient_id).where(
                dish_ingredient.c.dish_id.in_(dish_ids)
            )
        ):
            ingredients[row.dish_id].append(row.ingredient_id)
        for row in self._db.execute(
            select(dish_allergen.c.dish_id, dish_allergen.c.allergen_id).where(
                dish_allergen.c.dish_id.in_(dish_ids)
            )
        ):
            allergens[row.dish_id].append(row.allergen_id)
        return {"ingredient_ids": ingredients, "allergen_ids": allergens}

    def _output_fields(self, entity: Dish, extras: dict[str, Any], expand: bool) -> dict[str, Any]:
        if not expand:
            return {
                "ingredient_ids": extras["ingredient_ids"].get(entity.id, []),
                "allergen_ids": extras["allergen_ids"].get(entity.id, []),
            }

        subcategory = entity.subcategory
        return {
            "category": SlugRef(
                id=entity.category.id,
                name=entity.category.name,
                name_slug=entity.category.name_slug,
            ),
            "subcategory": (
                SlugRef(id=subcategory.id, name=subcategory.name, name_slug=subcategory.name_slug)
                if subcategory is not None
                else None
            ),
            "ingredient_ids": [i.id for i in entity.ingredients],
            "allergen_ids": [a.id for a in entity.allergens],
            "ingredients": [NamedRef(id=i.id, name=i.name) for i in entity.ingredients],
            "allergens": [NamedRef(id=a.id, name=a.name) for a in entity.allergens],
        }
