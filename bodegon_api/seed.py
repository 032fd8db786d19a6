"""
Seed data for development and testing.

Everything is created through the services so audit stamps point at the
bootstrap admin, exactly as if an admin had typed it in the backoffice.
"""

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from bodegon_api.models import (
    Allergen,
    Base,
    Category,
    Contact,
    Dish,
    Ingredient,
    Subcategory,
    User,
    dish_allergen,
    dish_ingredient,
)
from bodegon_api.services.domain import (
    AllergenService,
    CategoryService,
    DishService,
    IngredientService,
    SubcategoryService,
    UserService,
)
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit

logger = get_logger(__name__)


ALLERGENS = ["Gluten", "Huevo", "Lácteos", "Moluscos", "Pescado", "Frutos secos", "Sulfitos"]

INGREDIENTS = [
    "Carne picada",
    "Cebolla",
    "Huevo duro",
    "Aceitunas",
    "Queso provolone",
    "Orégano",
    "Aceite de oliva",
    "Salsa de tomate",
    "Queso mozzarella",
    "Jamón",
    "Harina",
    "Huevo",
    "Limón",
    "Perejil",
    "Ajo",
    "Papas",
    "Pan rallado",
    "Carne de ternera",
    "Chimichurri",
    "Leche",
    "Azúcar",
    "Dulce de leche",
]

# category -> subcategories
TAXONOMY = {
    "Entradas": ["Empanadas", "Fiambres"],
    "Principales": ["Parrilla", "Minutas"],
    "Postres": [],
    "Bebidas": ["Sin alcohol", "Vinos"],
}

# (name, category, subcategory, price, description, ingredients, allergens)
DISHES = [
    (
        "Empanada de carne cortada a cuchillo",
        "Entradas", "Empanadas", 1800,
        "Masa casera rellena de carne, cebolla, huevo y aceitunas.",
        ["Carne picada", "Cebolla", "Huevo duro", "Aceitunas", "Harina"],
        ["Gluten", "Huevo"],
    ),
    (
        "Provoleta",
        "Entradas", None, 5200,
        "Queso provolone a la parrilla con orégano y aceite de oliva.",
        ["Queso provolone", "Orégano", "Aceite de oliva"],
        ["Lácteos"],
    ),
    (
        "Milanesa napolitana",
        "Principales", "Minutas", 9500,
        "Milanesa de ternera con salsa de tomate, jamón y mozzarella, con papas.",
        ["Carne de ternera", "Pan rallado", "Huevo", "Salsa de tomate", "Jamón",
         "Queso mozzarella", "Papas"],
        ["Gluten", "Huevo", "Lácteos"],
    ),
    (
        "Bife de chorizo",
        "Principales", "Parrilla", 12800,
        "Bife de chorizo a la parrilla con chimichurri.",
        ["Carne de ternera", "Chimichurri", "Ajo", "Perejil"],
        [],
    ),
    (
        "Flan casero",
        "Postres", None, 3500,
        "Flan de huevo con dulce de leche.",
        ["Huevo", "Leche", "Azúcar", "Dulce de leche"],
        ["Huevo", "Lácteos"],
    ),
]


def create_admin(
    db: Session,
    username: str,
    password: str,
    first_name: str = "Usuario",
    last_name: str = "Administrador",
) -> tuple[User, bool]:
    """
    Create the bootstrap admin unless a live user already has that username.

    Returns:
        (user, created)
    """
    users = UserService(db)
    existing = users.find_live_by_username(username)
    if existing is not None:
        logger.info("Admin already exists, skipping", username=username)
        return existing, False

    output = users.create(
        {
            "username": username,
            "password": password,
            "first_name": first_name,
            "last_name": last_name,
            "role": "admin",
        },
        actor_id=None,
    )
    logger.info("Admin created", username=username, user_id=output.id)
    return db.get(User, output.id), True


def seed(db: Session, actor_id: str) -> dict[str, int]:
    """
    Create sample reference data, taxonomy and dishes.

    Idempotent: does nothing if any category already exists.

    Returns:
        Number of records created per kind.
    """
    if db.scalar(select(Category.id).limit(1)):
        logger.info("Catalog already seeded, skipping")
        return {}

    allergens = {
        name: AllergenService(db).create({"name": name}, actor_id).id for name in ALLERGENS
    }
    ingredients = {
        name: IngredientService(db).create({"name": name}, actor_id).id for name in INGREDIENTS
    }

    categories: dict[str, str] = {}
    subcategories: dict[tuple[str, str], str] = {}
    for category_name, children in TAXONOMY.items():
        category = CategoryService(db).create({"name": category_name}, actor_id)
        categories[category_name] = category.id
        for child in children:
            subcategory = SubcategoryService(db).create(
                {"name": child, "category_id": category.id}, actor_id
            )
            subcategories[(category_name, child)] = subcategory.id

    dish_service = DishService(db)
    for name, category, subcategory, price, description, ingredient_names, allergen_names in DISHES:
        dish_service.create(
            {
                "name": name,
                "description": description,
                "price": price,
                "category_id": categories[category],
                "subcategory_id": subcategories[(category, subcategory)] if subcategory else None,
                "ingredient_ids": [ingredients[i] for i in ingredient_names],
                "allergen_ids": [allergens[a] for a in allergen_names],
            },
            actor_id,
        )

    counts = {
        "allergens": len(allergens),
        "ingredients": len(ingredients),
        "categories": len(categories),
        "subcategories": len(subcategories),
        "dishes": len(DISHES),
    }
    logger.info("Seed complete", **counts)
    return counts


def wipe(db: Session) -> dict[str, int]:
    """
    Physically delete every row, children first.

    Maintenance only; the API itself never hard-deletes.
    """
    counts: dict[str, int] = {}
    for table in (dish_ingredient, dish_allergen):
        db.execute(delete(table))
    for model in (Dish, Subcategory, Category, Ingredient, Allergen, Contact, User):
        result = db.execute(delete(model))
        counts[model.__tablename__] = result.rowcount or 0
    safe_commit(db)
    logger.warning("Database wiped", **counts)
    return counts


def reset(db: Session) -> None:
    """Drop and recreate every table."""
    engine = db.get_bind()
    db.close()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    logger.warning("Database schema reset")
