"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Must be set before any application module reads settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"

import pytest
from fastapi.testclient import TestClient

from bodegon_api.main import create_app
from bodegon_api.models import Base, User
from bodegon_api.services.domain import (
    AllergenService,
    CategoryService,
    ContactService,
    DishService,
    IngredientService,
    SubcategoryService,
    UserService,
)
from shared.infrastructure.db import Database, get_db
from shared.security.password import hash_password


ADMIN_USERNAME = "admin@test.com"
ADMIN_PASSWORD = "testpass123"


@pytest.fixture(scope="function")
def database():
    """
    Fresh SQLite in-memory database for each test.
    StaticPool keeps a single connection so every session sees the same data.
    """
    database = Database("sqlite://")
    Base.metadata.create_all(bind=database.engine)
    try:
        yield database
    finally:
        Base.metadata.drop_all(bind=database.engine)
        database.close()


@pytest.fixture(scope="function")
def db_session(database):
    """Session shared by the test body and the API requests it makes."""
    with database.session() as session:
        yield session


@pytest.fixture(scope="function")
def client(database, db_session):
    """
    Create a test client with database session override.
    """
    app = create_app(database=database)

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seed_admin_user(db_session):
    """Create an admin user for testing authenticated endpoints."""
    user = User(
        username=ADMIN_USERNAME,
        password=hash_password(ADMIN_PASSWORD),
        first_name="Test",
        last_name="Admin",
        role="admin",
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def actor_id(seed_admin_user):
    """Id of the admin performing service-level mutations."""
    return seed_admin_user.id


@pytest.fixture
def auth_headers(client, seed_admin_user):
    """Get authentication headers for API calls."""
    response = client.post(
        "/api/auth/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, f"Login failed: {response.json()}"
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Services
# =============================================================================


@pytest.fixture
def categories(db_session):
    return CategoryService(db_session)


@pytest.fixture
def subcategories(db_session):
    return SubcategoryService(db_session)


@pytest.fixture
def dishes(db_session):
    return DishService(db_session)


@pytest.fixture
def ingredients(db_session):
    return IngredientService(db_session)


@pytest.fixture
def allergens(db_session):
    return AllergenService(db_session)


@pytest.fixture
def users(db_session):
    return UserService(db_session)


@pytest.fixture
def contacts(db_session):
    return ContactService(db_session)


# =============================================================================
# Catalog fixtures
# =============================================================================


@pytest.fixture
def starters(categories, actor_id):
    """A live category named Starters."""
    return categories.create({"name": "Starters"}, actor_id)


@pytest.fixture
def mains(categories, actor_id):
    return categories.create({"name": "Mains"}, actor_id)


@pytest.fixture
def soups(subcategories, starters, actor_id):
    """A live subcategory of Starters."""
    return subcategories.create({"name": "Soups", "category_id": starters.id}, actor_id)


@pytest.fixture
def tomato(ingredients, actor_id):
    return ingredients.create({"name": "Tomato"}, actor_id)


@pytest.fixture
def gluten(allergens, actor_id):
    return allergens.create({"name": "Gluten"}, actor_id)


@pytest.fixture
def make_dish(dishes, starters, actor_id):
    """Factory for dishes under Starters."""

    def _make(name="Tomato Soup", **overrides):
        data = {"name": name, "price": 10, "category_id": starters.id}
        data.update(overrides)
        return dishes.create(data, actor_id)

    return _make
