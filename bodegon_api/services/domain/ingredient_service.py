"""
Ingredient Service.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from bodegon_api.models import Ingredient
from bodegon_api.services.base_service import BaseCRUDService
from shared.utils.admin_schemas import IngredientOutput


class IngredientService(BaseCRUDService[Ingredient, IngredientOutput]):
    """Service for ingredient management. Names are globally unique among live rows."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Ingredient,
            output_schema=IngredientOutput,
            entity_name="Ingredient",
            search_fields=(Ingredient.name,),
        )

    def _validate_create(self, data: dict[str, Any]) -> dict[str, Any]:
        self._ensure_unique(Ingredient.name, data["name"])
        return data

    def _validate_update(self, entity: Ingredient, data: dict[str, Any]) -> dict[str, Any]:
        if "name" in data:
            self._ensure_unique(Ingredient.name, data["name"], exclude_id=entity.id)
        return data

    def _validate_restore(self, entity: Ingredient) -> None:
        self._ensure_unique(Ingredient.name, entity.name, exclude_id=entity.id)
