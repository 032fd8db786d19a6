"""
Dashboard Service: read-only counters per entity kind.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from bodegon_api.models import Allergen, Category, Contact, Dish, Ingredient, Subcategory, User
from bodegon_api.services.crud.repository import SoftDeleteRepository
from shared.utils.admin_schemas import ContactStats, DashboardStats, EntityStats


class DashboardService:
    """Rollup of {total, active, deleted} per kind, plus read/unread for contacts."""

    KINDS = {
        "categories": Category,
        "subcategories": Subcategory,
        "dishes": Dish,
        "ingredients": Ingredient,
        "allergens": Allergen,
        "users": User,
    }

    def __init__(self, db: Session):
        self._db = db

    def _stats(self, repo: SoftDeleteRepository) -> dict[str, int]:
        return {
            "total": repo.count(),
            "active": repo.count(is_deleted=False),
            "deleted": repo.count(is_deleted=True),
        }

    def get_stats(self) -> DashboardStats:
        stats = {
            name: EntityStats(**self._stats(SoftDeleteRepository(model, self._db)))
            for name, model in self.KINDS.items()
        }

        contacts = SoftDeleteRepository(Contact, self._db)
        stats["contacts"] = ContactStats(
            **self._stats(contacts),
            unread=contacts.count(Contact.is_read.is_(False), is_deleted=False),
            read=contacts.count(Contact.is_read.is_(True), is_deleted=False),
        )
        return DashboardStats(**stats)
