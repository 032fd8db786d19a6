"""
HTTP routers, one per resource.
"""

from .allergens import router as allergens_router
from .auth import router as auth_router
from .categories import router as categories_router
from .contacts import router as contacts_router
from .dashboard import router as dashboard_router
from .dishes import router as dishes_router
from .health import router as health_router
from .ingredients import router as ingredients_router
from .subcategories import router as subcategories_router
from .users import router as users_router

ALL_ROUTERS = [
    health_router,
    auth_router,
    categories_router,
    subcategories_router,
    dishes_router,
    ingredients_router,
    allergens_router,
    users_router,
    contacts_router,
    dashboard_router,
]

__all__ = ["ALL_ROUTERS"]
