"""
Tests for the onboarding wizard endpoints.
"""

import pytest

ONBOARDING = "/super_admin/restaurants/1/onboarding"
URL = "/admin/onboarding/1"

MANAGER = {
    "first_name": "Sanne",
    "last_name": "de Vries",
    "email": "sanne@example.com",
    "phone": "0612345678",
    "password": "secret123",
    "password_confirm": "secret123",
    "role": "manager",
}


@pytest.fixture
def onboarding_backend(restaurant_backend):
    backend = restaurant_backend
    for path in (
        "/step/1/personnel",
        "/step/2/stripe",
        "/step/2/skip",
        "/step/3/pos",
        "/step/3/skip",
        "/qr/configure",
        "/step/5/google-reviews",
        "/step/6/telegram",
        "/complete",
    ):
        backend.add("POST", ONBOARDING + path, json={"success": True})
    backend.add("POST", ONBOARDING + "/qr/check-domain", json={"available": True})
    return backend


class TestOnboardingRoutes:
    def test_requires_login(self, client):
        response = client.get(URL, follow_redirects=False)
        assert response.status_code == 303

    def test_restore_fresh(self, auth_client, onboarding_backend):
        response = auth_client.get(URL)

        assert response.status_code == 200
        data = response.json()
        assert data["current_step"] == 0
        assert data["step_name"] == "welcome"
        assert data["locked"] is False
        assert [s["status"] for s in data["steps"]] == ["pending"] * 6

    def test_next_without_manager_is_rejected(self, auth_client, onboarding_backend):
        auth_client.post(URL + "/next")

        response = auth_client.post(URL + "/next")

        assert response.status_code == 400
        assert "personnel" in response.json()["errors"]

    def test_personnel_password_never_returned(self, auth_client, onboarding_backend):
        response = auth_client.post(URL + "/personnel", json=MANAGER)

        assert response.status_code == 201
        data = response.json()
        assert data["completed_steps"] == [1]
        assert "password" not in data["data"]["personnel"][0]

    def test_invalid_person(self, auth_client, onboarding_backend):
        response = auth_client.post(URL + "/personnel", json={**MANAGER, "email": "not-an-email"})
        assert response.status_code == 400
        assert "email" in response.json()["errors"]

    def test_remove_unknown_person(self, auth_client, onboarding_backend):
        response = auth_client.delete(URL + "/personnel/missing")
        assert response.status_code == 404

    def test_go_to_step_out_of_range(self, auth_client, onboarding_backend):
        response = auth_client.post(URL + "/step", json={"step": 9})
        assert response.status_code == 422

    def test_skip_payment(self, auth_client, onboarding_backend):
        auth_client.post(URL + "/step", json={"step": 2})

        response = auth_client.post(URL + "/skip")

        assert response.status_code == 200
        assert response.json()["current_step"] == 3
        assert onboarding_backend.calls("POST", ONBOARDING + "/step/2/skip")

    def test_check_domain(self, auth_client, onboarding_backend):
        response = auth_client.post(URL + "/tables/check-domain", json={"domain": " menu.cafedezon.nl "})

        assert response.status_code == 200
        assert response.json() == {"available": True}
        assert onboarding_backend.body("POST", ONBOARDING + "/qr/check-domain") == {"domain": "menu.cafedezon.nl"}

    def test_full_flow_to_finish(self, auth_client, onboarding_backend, kv_store):
        auth_client.post(URL + "/personnel", json=MANAGER)
        auth_client.put(
            URL + "/pos",
            json={"pos_type": "mpluskassa", "username": "kassa", "password": "pw", "port": "34562"},
        )
        auth_client.put(URL + "/tables", json={"selected_design": "classic", "table_sections": {"bar": "1, 2"}})
        auth_client.put(URL + "/messaging", json={"restaurant_name": "Cafe de Zon"})

        state = auth_client.post(URL + "/step", json={"step": 6}).json()
        assert state["current_step"] == 6
        assert "password" not in state["data"]["pos"]

        response = auth_client.post(URL + "/finish")

        assert response.status_code == 200
        assert response.json() == {"success": True, "redirect_to": "/admin/restaurants/detail/1"}
        assert onboarding_backend.calls("POST", ONBOARDING + "/complete")
        assert not onboarding_backend.calls("POST", ONBOARDING + "/step/2/stripe")

    def test_reset(self, auth_client, onboarding_backend):
        auth_client.post(URL + "/step", json={"step": 4})

        assert auth_client.delete(URL).status_code == 204
        assert auth_client.get(URL).json()["current_step"] == 0

    def test_archived_restaurant_is_read_only(self, auth_client, onboarding_backend):
        onboarding_backend.state["restaurant"]["is_active"] = False

        response = auth_client.post(URL + "/personnel", json=MANAGER)

        assert response.status_code == 400
        assert "step" in response.json()["errors"]
        assert auth_client.get(URL).json()["locked"] is True
