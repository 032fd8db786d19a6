"""
Tests for the dashboard rollup.
"""

from bodegon_api.services.domain import DashboardService


class TestDashboardService:
    """Counters per entity kind."""

    def test_counts(self, db_session, categories, contacts, starters, mains, soups, actor_id):
        categories.delete(mains.id, actor_id)
        for name in ("Ana", "Beto"):
            contacts.create(
                {"name": name, "email": "x@example.com", "phone": "1", "message": "Hola"}
            )
        read = contacts.create(
            {"name": "Carla", "email": "c@example.com", "phone": "2", "message": "Hola"}
        )
        contacts.mark_as_read(read.id, actor_id)

        stats = DashboardService(db_session).get_stats()

        assert stats.categories.model_dump() == {"total": 2, "active": 1, "deleted": 1}
        assert stats.subcategories.active == 1
        assert stats.dishes.total == 0
        assert stats.users.active == 1
        assert stats.contacts.total == 3
        assert stats.contacts.unread == 2
        assert stats.contacts.read == 1

    def test_endpoint(self, client, auth_headers):
        response = client.get("/api/dashboard/stats", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {
            "categories",
            "subcategories",
            "dishes",
            "ingredients",
            "allergens",
            "users",
            "contacts",
        }
        assert data["users"] == {"total": 1, "active": 1, "deleted": 0}
