"""
Tests for the payment listing endpoints.
"""

BASE = "/super_admin/restaurants/1/payments"


class TestPayments:
    def test_list_with_filters(self, auth_client, backend):
        backend.add(
            "GET",
            BASE,
            json={"payments": [{"id": "pay_1", "amount": "12.50", "status": "paid"}], "total": 1},
        )

        response = auth_client.get(
            "/admin/restaurants/1/payments",
            params={"status": "paid", "date_from": "2024-05-01", "date_to": "2024-05-31", "search": "tafel"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["items"][0]["id"] == "pay_1"
        assert data["pagination"]["total"] == 1
        params = dict(backend.calls("GET", BASE)[-1].url.params)
        assert params["status"] == "paid"
        assert params["date_from"] == "2024-05-01"
        assert params["search_pattern"] == "tafel"

    def test_unknown_status(self, auth_client):
        response = auth_client.get("/admin/restaurants/1/payments", params={"status": "bogus"})
        assert response.status_code == 400

    def test_inverted_dates(self, auth_client):
        response = auth_client.get(
            "/admin/restaurants/1/payments",
            params={"date_from": "2024-06-01", "date_to": "2024-05-01"},
        )
        assert response.status_code == 400
        assert "date_from" in response.json()["errors"]

    def test_detail(self, auth_client, backend):
        backend.add("GET", "/super_admin/payments/pay_1", json={"id": "pay_1", "amount": 12.5, "items": []})

        response = auth_client.get("/admin/payments/pay_1")

        assert response.status_code == 200
        assert response.json()["id"] == "pay_1"

    def test_all_status_not_forwarded(self, auth_client, backend):
        backend.add("GET", BASE, json=[])

        response = auth_client.get("/admin/restaurants/1/payments", params={"status": "all"})

        assert response.status_code == 200
        assert response.json()["items"] == []
        assert "status" not in backend.calls("GET", BASE)[-1].url.params
