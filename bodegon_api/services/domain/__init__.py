"""
Domain services, one per entity kind.

Usage:
    from bodegon_api.services.domain import DishService

    service = DishService(db)
    dish = service.create(body.model_dump(), actor_id=user.id)
"""

from .allergen_service import AllergenService
from .auth_service import AuthService
from .category_service import CategoryService
from .contact_service import ContactService
from .dashboard_service import DashboardService
from .dish_service import DishService
from .ingredient_service import IngredientService
from .subcategory_service import SubcategoryService
from .user_service import UserService

__all__ = [
    "AllergenService",
    "AuthService",
    "CategoryService",
    "ContactService",
    "DashboardService",
    "DishService",
    "IngredientService",
    "SubcategoryService",
    "UserService",
]
