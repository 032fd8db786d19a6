"""
Tests for ingredients, allergens and backoffice users.
"""

import pytest

from bodegon_api.models import User
from shared.security.password import verify_password
from shared.utils.admin_schemas import ListQuery
from shared.utils.exceptions import DuplicateNameError, UsernameTakenError


class TestIngredientAndAllergen:
    """Global name uniqueness for reference data."""

    def test_duplicate_ingredient(self, ingredients, tomato, actor_id):
        with pytest.raises(DuplicateNameError):
            ingredients.create({"name": "Tomato"}, actor_id)

    def test_duplicate_allergen(self, allergens, gluten, actor_id):
        with pytest.raises(DuplicateNameError):
            allergens.create({"name": "Gluten"}, actor_id)

    def test_rename_to_taken_name(self, ingredients, tomato, actor_id):
        onion = ingredients.create({"name": "Onion"}, actor_id)

        with pytest.raises(DuplicateNameError):
            ingredients.update(onion.id, {"name": "Tomato"}, actor_id)

    def test_search(self, ingredients, tomato, actor_id):
        ingredients.create({"name": "Onion"}, actor_id)

        page = ingredients.list(ListQuery(search="tom"))

        assert [i.name for i in page.items] == ["Tomato"]

    def test_deleted_ingredient_stays_on_dish(self, ingredients, dishes, make_dish, tomato, actor_id):
        """Deleting reference data does not rewrite existing dishes."""
        dish = make_dish(ingredient_ids=[tomato.id])

        ingredients.delete(tomato.id, actor_id)

        assert dishes.get(dish.id).ingredient_ids == [tomato.id]


class TestUserService:
    """Tests for UserService."""

    @pytest.fixture
    def payload(self):
        return {
            "username": "cashier",
            "password": "secret123",
            "first_name": "Juan",
            "last_name": "Perez",
            "phone": "555-0199",
        }

    def test_password_is_hashed(self, users, payload, db_session, actor_id):
        """The stored password is a bcrypt hash and never appears in the output."""
        user = users.create(payload, actor_id)

        stored = db_session.get(User, user.id)
        assert stored.password != "secret123"
        assert verify_password("secret123", stored.password)
        assert "password" not in user.model_dump()

    def test_username_taken(self, users, payload, actor_id):
        users.create(payload, actor_id)

        with pytest.raises(UsernameTakenError) as exc_info:
            users.create(payload, actor_id)
        assert exc_info.value.code == "username_taken"

    def test_username_of_deleted_user_is_free(self, users, payload, actor_id):
        user = users.create(payload, actor_id)
        users.delete(user.id, actor_id)

        again = users.create(payload, actor_id)

        assert again.id != user.id

    def test_password_update_rehashes(self, users, payload, db_session, actor_id):
        user = users.create(payload, actor_id)

        users.update(user.id, {"password": "another456"}, actor_id)

        stored = db_session.get(User, user.id)
        assert verify_password("another456", stored.password)
        assert not verify_password("secret123", stored.password)

    def test_null_phone_clears_it(self, users, payload, actor_id):
        user = users.create(payload, actor_id)

        updated = users.update(user.id, {"phone": None, "first_name": None}, actor_id)

        assert updated.phone is None
        assert updated.first_name == "Juan"

    def test_find_live_by_username(self, users, payload, actor_id):
        user = users.create(payload, actor_id)
        assert users.find_live_by_username("cashier").id == user.id

        users.delete(user.id, actor_id)
        assert users.find_live_by_username("cashier") is None
