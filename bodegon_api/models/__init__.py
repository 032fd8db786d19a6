"""
ORM models. Importing this package registers every table on Base.metadata.
"""

from .base import AuditMixin, Base, SoftDeleteMixin, UTCDateTime
from .catalog import Category, Dish, Subcategory, dish_allergen, dish_ingredient
from .ingredient import Ingredient
from .allergen import Allergen
from .user import User
from .contact import Contact

__all__ = [
    "Base",
    "AuditMixin",
    "SoftDeleteMixin",
    "UTCDateTime",
    "Category",
    "Subcategory",
    "Dish",
    "dish_ingredient",
    "dish_allergen",
    "Ingredient",
    "Allergen",
    "User",
    "Contact",
]
