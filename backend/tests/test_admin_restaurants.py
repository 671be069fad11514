"""
Tests for restaurant management endpoints.
"""

import asyncio

from backoffice.services.onboarding import OnboardingSnapshot, SnapshotStore


class TestRestaurantQueries:
    def test_list_with_filters(self, auth_client, backend):
        backend.add(
            "GET",
            "/super_admin/restaurants",
            json={"restaurants": [{"id": 1, "name": "Cafe de Zon"}], "total": 51},
        )

        response = auth_client.get("/admin/restaurants?search=zon&status=all&limit=50&offset=0")

        assert response.status_code == 200
        data = response.json()
        assert data["items"][0]["name"] == "Cafe de Zon"
        assert data["pagination"]["total"] == 51
        assert data["pagination"]["has_next"] is True
        params = dict(backend.calls("GET", "/super_admin/restaurants")[-1].url.params)
        assert params == {"search": "zon", "limit": "50", "offset": "0"}

    def test_limit_is_capped(self, auth_client):
        response = auth_client.get("/admin/restaurants?limit=1000")
        assert response.status_code == 422

    def test_stats(self, auth_client, backend):
        backend.add(
            "GET",
            "/super_admin/restaurants/stats",
            json={"total_partners": 10, "setup_required": 2, "archived": 1, "total_all": 11},
        )
        assert auth_client.get("/admin/restaurants/stats").json()["setup_required"] == 2

    def test_get(self, auth_client, restaurant_backend):
        response = auth_client.get("/admin/restaurants/1")
        assert response.status_code == 200
        assert response.json()["name"] == "Cafe de Zon"

    def test_backend_error_detail_is_surfaced(self, auth_client, backend):
        backend.add("GET", "/super_admin/restaurants/9", status_code=404, json={"detail": "Restaurant not found"})

        response = auth_client.get("/admin/restaurants/9")

        assert response.status_code == 404
        assert response.json()["detail"] == "Restaurant not found"


class TestRestaurantMutations:
    def test_update_refreshes(self, auth_client, restaurant_backend):
        response = auth_client.put("/admin/restaurants/1", json={"city": "Amsterdam"})

        assert response.status_code == 200
        assert response.json()["city"] == "Amsterdam"
        assert restaurant_backend.calls("GET", "/super_admin/restaurants/1")

    def test_update_without_changes(self, auth_client, restaurant_backend):
        response = auth_client.put("/admin/restaurants/1", json={})
        assert response.status_code == 400

    def test_create(self, auth_client, backend):
        backend.add("POST", "/super_admin/restaurants", json={"id": 5, "name": "Nieuw"})
        backend.add("GET", "/super_admin/restaurants/5", json={"id": 5, "name": "Nieuw", "city": "Delft"})

        response = auth_client.post(
            "/admin/restaurants",
            json={
                "name": "Nieuw",
                "address": "Markt 1",
                "city": "Delft",
                "postal_code": "2611GP",
                "contact_email": "info@nieuw.nl",
            },
        )

        assert response.status_code == 201
        assert response.json()["city"] == "Delft"

    def test_archive_flips_only_is_active(self, auth_client, restaurant_backend):
        before = dict(restaurant_backend.state["restaurant"])

        response = auth_client.patch("/admin/restaurants/1/archive")

        assert response.status_code == 200
        assert response.json()["is_active"] is False
        after = restaurant_backend.state["restaurant"]
        assert {k: v for k, v in after.items() if k != "is_active"} == {
            k: v for k, v in before.items() if k != "is_active"
        }
        assert not restaurant_backend.calls("DELETE", "/super_admin/restaurants/1")

    def test_restore(self, auth_client, restaurant_backend):
        restaurant_backend.state["restaurant"]["is_active"] = False
        response = auth_client.patch("/admin/restaurants/1/restore")
        assert response.json()["is_active"] is True


class TestRestaurantDelete:
    def _delete(self, client, **body):
        return client.request("DELETE", "/admin/restaurants/1", json=body)

    def test_exact_name_required(self, auth_client, restaurant_backend):
        response = self._delete(auth_client, confirmation_text="cafe de zon")

        assert response.status_code == 400
        assert "confirmation_text" in response.json()["errors"]
        assert not restaurant_backend.calls("DELETE", "/super_admin/restaurants/1")

    def test_delete_with_matching_name(self, auth_client, restaurant_backend, kv_store):
        asyncio.run(SnapshotStore(kv_store).save(OnboardingSnapshot(restaurant_id=1)))

        response = self._delete(auth_client, confirmation_text="Cafe de Zon")

        assert response.status_code == 204
        assert restaurant_backend.calls("DELETE", "/super_admin/restaurants/1")
        assert asyncio.run(kv_store.get("onboarding_1")) is None

    def test_onboarded_restaurant_needs_checklist(self, auth_client, restaurant_backend):
        restaurant_backend.state["restaurant"]["onboarding_completed"] = True

        response = self._delete(auth_client, confirmation_text="Cafe de Zon", owner_talked=True)

        assert response.status_code == 400
        assert set(response.json()["errors"]) == {"qr_returned", "payments_settled"}

    def test_onboarded_restaurant_with_checklist(self, auth_client, restaurant_backend):
        restaurant_backend.state["restaurant"]["onboarding_completed"] = True

        response = self._delete(
            auth_client,
            confirmation_text="Cafe de Zon",
            owner_talked=True,
            qr_returned=True,
            payments_settled=True,
        )

        assert response.status_code == 204
