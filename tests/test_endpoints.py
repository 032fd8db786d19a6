"""
Tests for the HTTP surface: status codes, error bodies and auth gates.
"""

import pytest

from bodegon_api.services.upload import LocalUploadService, get_upload_service

MISSING_ID = "33333333-3333-3333-3333-333333333333"


@pytest.fixture
def category(client, auth_headers):
    response = client.post("/api/categories", json={"name": "Starters"}, headers=auth_headers)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def dish(client, auth_headers, category):
    response = client.post(
        "/api/dishes",
        json={"name": "Tomato Soup", "price": "8.50", "category_id": category["id"]},
        headers=auth_headers,
    )
    assert response.status_code == 201
    return response.json()


class TestAuthGate:
    """Admin-only routes."""

    @pytest.mark.parametrize(
        "path",
        [
            "/api/subcategories",
            "/api/dishes",
            "/api/ingredients",
            "/api/allergens",
            "/api/users",
            "/api/contacts",
            "/api/dashboard/stats",
        ],
    )
    def test_requires_token(self, client, path):
        response = client.get(path)

        assert response.status_code == 401
        assert response.json()["code"] == "invalid_token"

    def test_non_admin_forbidden(self, client, auth_headers, seed_admin_user, db_session):
        """A live user without the admin role is rejected."""
        seed_admin_user.role = "viewer"
        db_session.commit()

        response = client.get("/api/categories", headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["code"] == "forbidden"

    def test_garbage_token(self, client):
        response = client.get("/api/categories", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401


class TestCategoryEndpoints:
    """Category lifecycle over HTTP."""

    def test_create_and_get(self, client, auth_headers, category):
        response = client.get(f"/api/categories/{category['id']}", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["name_slug"] == "starters"
        assert data["created_by"]["username"] == "admin@test.com"

    def test_duplicate_is_409(self, client, auth_headers, category):
        response = client.post("/api/categories", json={"name": "Starters"}, headers=auth_headers)

        assert response.status_code == 409
        assert response.json()["code"] == "duplicate_name"

    def test_delete_and_restore(self, client, auth_headers, category):
        url = f"/api/categories/{category['id']}"

        deleted = client.delete(url, headers=auth_headers)
        again = client.delete(url, headers=auth_headers)
        restored = client.patch(f"{url}/restore", headers=auth_headers)
        restored_again = client.patch(f"{url}/restore", headers=auth_headers)

        assert deleted.status_code == 200
        assert deleted.json()["is_deleted"] is True
        assert again.status_code == 409
        assert again.json()["code"] == "already_deleted"
        assert restored.status_code == 200
        assert restored.json()["restored_by"]["username"] == "admin@test.com"
        assert restored_again.json()["code"] == "not_deleted"

    def test_update(self, client, auth_headers, category):
        response = client.put(
            f"/api/categories/{category['id']}",
            json={"name": "Entradas"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["name_slug"] == "entradas"

    def test_not_found(self, client, auth_headers):
        response = client.get(f"/api/categories/{MISSING_ID}", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["code"] == "not_found"

    def test_invalid_id(self, client, auth_headers):
        response = client.get("/api/categories/42", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_id"

    def test_blank_name_is_422(self, client, auth_headers):
        response = client.post("/api/categories", json={"name": "   "}, headers=auth_headers)

        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"

    def test_list_query_options(self, client, auth_headers, category):
        """Query strings are parsed into typed options."""
        client.post("/api/categories", json={"name": "Mains"}, headers=auth_headers)
        client.delete(f"/api/categories/{category['id']}", headers=auth_headers)

        live = client.get("/api/categories", headers=auth_headers).json()
        everything = client.get(
            "/api/categories?include_deleted=true&limit=1&page=2", headers=auth_headers
        ).json()

        assert [c["name"] for c in live["items"]] == ["Mains"]
        assert everything["total_items"] == 2
        assert everything["total_pages"] == 2
        assert everything["has_prev_page"] is True
        assert [c["name"] for c in everything["items"]] == ["Starters"]

    def test_bad_limit_is_422(self, client, auth_headers):
        response = client.get("/api/categories?limit=500", headers=auth_headers)

        assert response.status_code == 422

    def test_public_reads(self, client, auth_headers, category):
        """The menu site reads categories without a token, live rows only."""
        client.post("/api/categories", json={"name": "Mains"}, headers=auth_headers)
        client.delete(f"/api/categories/{category['id']}", headers=auth_headers)

        listing = client.get("/api/categories?include_deleted=true")
        deleted = client.get(f"/api/categories/{category['id']}")
        as_admin = client.get(f"/api/categories/{category['id']}", headers=auth_headers)

        assert listing.status_code == 200
        assert [c["name"] for c in listing.json()["items"]] == ["Mains"]
        assert deleted.status_code == 404
        assert as_admin.json()["is_deleted"] is True

    def test_public_write_requires_token(self, client):
        response = client.post("/api/categories", json={"name": "Mains"})

        assert response.status_code == 401

    def test_delete_blocked_by_subcategory(self, client, auth_headers, category):
        client.post(
            "/api/subcategories",
            json={"name": "Soups", "category_id": category["id"]},
            headers=auth_headers,
        )

        response = client.delete(f"/api/categories/{category['id']}", headers=auth_headers)

        assert response.status_code == 409
        assert response.json()["code"] == "has_subcategories"


class TestDishEndpoints:
    """Dish endpoints, including the image upload."""

    def test_create_defaults(self, dish):
        assert dish["price"] == 8.5
        assert dish["subcategory_id"] is None
        assert dish["image"].startswith("http")

    def test_get_with_relations(self, client, auth_headers, dish):
        response = client.get(
            f"/api/dishes/{dish['id']}?include_relations=true", headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["category"]["name"] == "Starters"

    def test_mismatch_is_400(self, client, auth_headers, category, dish):
        other = client.post("/api/categories", json={"name": "Mains"}, headers=auth_headers)
        grill = client.post(
            "/api/subcategories",
            json={"name": "Grill", "category_id": other.json()["id"]},
            headers=auth_headers,
        )

        response = client.put(
            f"/api/dishes/{dish['id']}",
            json={"subcategory_id": grill.json()["id"]},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "subcategory_mismatch"

    def test_negative_price_is_422(self, client, auth_headers, category):
        response = client.post(
            "/api/dishes",
            json={"name": "Free", "price": -1, "category_id": category["id"]},
            headers=auth_headers,
        )

        assert response.status_code == 422

    def test_upload_image(self, client, auth_headers, dish, tmp_path):
        client.app.dependency_overrides[get_upload_service] = lambda: LocalUploadService(
            tmp_path, "http://testserver/uploads", max_bytes=1024
        )

        response = client.post(
            f"/api/dishes/{dish['id']}/image",
            files={"file": ("soup.PNG", b"\x89PNG fake", "image/png")},
            headers=auth_headers,
        )

        assert response.status_code == 200
        url = response.json()["image"]
        assert url.startswith("http://testserver/uploads/dishes/")
        assert url.endswith(".png")
        stored = list((tmp_path / "dishes").iterdir())
        assert len(stored) == 1
        assert stored[0].read_bytes() == b"\x89PNG fake"

    def test_upload_rejects_extension(self, client, auth_headers, dish, tmp_path):
        client.app.dependency_overrides[get_upload_service] = lambda: LocalUploadService(
            tmp_path, "http://testserver/uploads", max_bytes=1024
        )

        response = client.post(
            f"/api/dishes/{dish['id']}/image",
            files={"file": ("soup.exe", b"MZ", "application/octet-stream")},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "upload_failed"

    def test_upload_to_deleted_dish(self, client, auth_headers, dish, tmp_path):
        """Nothing is stored when the dish is deleted."""
        client.app.dependency_overrides[get_upload_service] = lambda: LocalUploadService(
            tmp_path, "http://testserver/uploads", max_bytes=1024
        )
        client.delete(f"/api/dishes/{dish['id']}", headers=auth_headers)

        response = client.post(
            f"/api/dishes/{dish['id']}/image",
            files={"file": ("soup.png", b"data", "image/png")},
            headers=auth_headers,
        )

        assert response.status_code == 409
        assert not (tmp_path / "dishes").exists()


class TestContactEndpoints:
    """Public creation and admin handling of contacts."""

    def test_public_create(self, client):
        response = client.post(
            "/api/contacts",
            json={
                "name": "Luis",
                "email": "luis@example.com",
                "phone": "555-0101",
                "message": "Table for four?",
            },
        )

        assert response.status_code == 201
        assert response.json()["is_read"] is False

    def test_invalid_email_is_422(self, client):
        response = client.post(
            "/api/contacts",
            json={"name": "Luis", "email": "nope", "phone": "1", "message": "Hi"},
        )

        assert response.status_code == 422

    def test_mark_as_read_twice(self, client, auth_headers):
        created = client.post(
            "/api/contacts",
            json={"name": "Luis", "email": "luis@example.com", "phone": "1", "message": "Hi"},
        ).json()
        url = f"/api/contacts/{created['id']}/mark-as-read"

        first = client.patch(url, headers=auth_headers)
        second = client.patch(url, headers=auth_headers)
        listing = client.get("/api/contacts", headers=auth_headers).json()

        assert first.status_code == 200
        assert first.json()["read_by"]["username"] == "admin@test.com"
        assert second.status_code == 409
        assert second.json()["code"] == "already_read"
        assert listing["total_unread"] == 0


class TestUserEndpoints:
    def test_create_hides_password(self, client, auth_headers):
        response = client.post(
            "/api/users",
            json={
                "username": "cashier",
                "password": "secret123",
                "first_name": "Juan",
                "last_name": "Perez",
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert "password" not in response.json()
        assert response.json()["role"] == "admin"

    def test_username_taken(self, client, auth_headers):
        response = client.post(
            "/api/users",
            json={
                "username": "admin@test.com",
                "password": "secret123",
                "first_name": "Dup",
                "last_name": "User",
            },
            headers=auth_headers,
        )

        assert response.status_code == 409
        assert response.json()["code"] == "username_taken"
