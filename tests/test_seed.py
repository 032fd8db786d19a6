"""
Tests for the seed helpers used by the maintenance CLI.
"""

from sqlalchemy import select

from bodegon_api.models import Category, Dish, User
from bodegon_api.seed import DISHES, TAXONOMY, create_admin, seed, wipe
from bodegon_api.services.domain import SubcategoryService
from shared.utils.admin_schemas import SubcategoryListQuery


class TestSeed:
    def test_create_admin_is_idempotent(self, db_session):
        user, created = create_admin(db_session, "boss", "secret123")
        again, created_again = create_admin(db_session, "boss", "other456")

        assert created is True
        assert created_again is False
        assert again.id == user.id

    def test_seed_goes_through_services(self, db_session, actor_id):
        """Seeded rows carry real audit stamps and satisfy the integrity rules."""
        counts = seed(db_session, actor_id)

        assert counts["categories"] == len(TAXONOMY)
        assert counts["dishes"] == len(DISHES)
        dish = db_session.scalars(select(Dish).limit(1)).one()
        assert dish.created_by_id == actor_id

        subcategories = SubcategoryService(db_session).list(
            SubcategoryListQuery(include_category=True, limit=100)
        )
        assert all(s.category.name in TAXONOMY for s in subcategories.items)

    def test_seed_twice_does_nothing(self, db_session, actor_id):
        seed(db_session, actor_id)

        assert seed(db_session, actor_id) == {}

    def test_wipe(self, db_session, actor_id):
        seed(db_session, actor_id)

        counts = wipe(db_session)

        assert counts["category"] == len(TAXONOMY)
        assert db_session.scalars(select(Category)).all() == []
        assert db_session.scalars(select(User)).all() == []
