"""
Allergen Service.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from bodegon_api.models import Allergen
from bodegon_api.services.base_service import BaseCRUDService
from shared.utils.admin_schemas import AllergenOutput


class AllergenService(BaseCRUDService[Allergen, AllergenOutput]):
    """Service for allergen management."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Allergen,
            output_schema=AllergenOutput,
            entity_name="Allergen",
            search_fields=(Allergen.name,),
        )

    def _validate_create(self, data: dict[str, Any]) -> dict[str, Any]:
        self._ensure_unique(Allergen.name, data["name"])
        return data

    def _validate_update(self, entity: Allergen, data: dict[str, Any]) -> dict[str, Any]:
        if "name" in data:
            self._ensure_unique(Allergen.name, data["name"], exclude_id=entity.id)
        return data

    def _validate_restore(self, entity: Allergen) -> None:
        self._ensure_unique(Allergen.name, entity.name, exclude_id=entity.id)
