"""
Tests for POS base URL derivation and the POS endpoints.
"""

import pytest

from backoffice.services.domain.pos_service import config_to_form, form_to_config
from backoffice.services.pos_urls import derive_base_url, parse_base_url
from shared.utils.admin_schemas import PosConfig, PosForm
from shared.utils.exceptions import ValidationError


class TestDeriveBaseUrl:
    def test_mpluskassa_port(self):
        assert derive_base_url("mpluskassa", port="34562") == "https://api.mpluskassa.nl:34562"

    def test_mpluskassa_integer_port(self):
        assert derive_base_url("mpluskassa", port=34562) == "https://api.mpluskassa.nl:34562"

    def test_untill(self):
        assert derive_base_url("untill", port="3063", ip="10.0.0.5", database="cafe") == "http://10.0.0.5:3063/api/v1/cafe"

    @pytest.mark.parametrize(
        "pos_type,fields",
        [
            ("mpluskassa", {}),
            ("untill", {"ip": "10.0.0.5", "port": "3063"}),
            ("unknown", {"port": "1"}),
            (None, {"port": "1"}),
        ],
    )
    def test_missing_fields_give_empty_url(self, pos_type, fields):
        assert derive_base_url(pos_type, **fields) == ""


class TestParseBaseUrl:
    def test_mpluskassa(self):
        assert parse_base_url("mpluskassa", "https://api.mpluskassa.nl:34562")["port"] == "34562"

    def test_untill(self):
        fields = parse_base_url("untill", "http://10.0.0.5:3063/api/v1/cafe")
        assert fields == {"ip": "10.0.0.5", "port": "3063", "database": "cafe"}

    def test_unrecognised_url(self):
        assert parse_base_url("untill", "not a url") == {"port": "", "ip": "", "database": ""}


class TestFormConversion:
    def test_form_to_config_derives_url(self):
        config = form_to_config(PosForm(pos_type="mpluskassa", username=" kassa ", password="pw", port="34562"))
        assert config.base_url == "https://api.mpluskassa.nl:34562"
        assert config.username == "kassa"

    def test_form_to_config_missing_port(self):
        with pytest.raises(ValidationError) as exc_info:
            form_to_config(PosForm(pos_type="mpluskassa", username="kassa", password="pw"))
        assert exc_info.value.errors == {"port": "Port is required"}

    def test_config_to_form_hides_password(self):
        values = config_to_form(
            PosConfig(pos_type="untill", username="u", password="secret", base_url="http://1.2.3.4:80/api/v1/db")
        )
        assert "password" not in values
        assert values["ip"] == "1.2.3.4"


class TestPosEndpoints:
    def test_get_config(self, auth_client, backend):
        backend.add(
            "GET",
            "/super_admin/restaurants/1/pos",
            json={"pos_type": "mpluskassa", "username": "kassa", "password": "pw", "base_url": "https://api.mpluskassa.nl:34562"},
        )

        response = auth_client.get("/admin/restaurants/1/pos")

        assert response.status_code == 200
        data = response.json()
        assert data["configured"] is True
        assert data["port"] == "34562"
        assert "password" not in data

    def test_not_configured(self, auth_client, backend):
        backend.add("GET", "/super_admin/restaurants/1/pos", json=None)
        assert auth_client.get("/admin/restaurants/1/pos").json() == {"configured": False}

    def test_connection_test_is_independent_of_save(self, auth_client, backend):
        backend.add("POST", "/super_admin/restaurants/1/pos/test", json={"success": False, "message": "Login failed"})

        response = auth_client.post(
            "/admin/restaurants/1/pos/test",
            json={"pos_type": "mpluskassa", "username": "kassa", "password": "pw", "port": "34562"},
        )

        assert response.status_code == 200
        assert response.json() == {"success": False, "message": "Login failed"}
        assert backend.body("POST", "/super_admin/restaurants/1/pos/test")["base_url"] == "https://api.mpluskassa.nl:34562"
        assert not backend.calls("POST", "/super_admin/restaurants/1/onboarding/pos")

    def test_legacy_status_code_success(self, auth_client, backend):
        backend.add("POST", "/super_admin/restaurants/1/pos/test", json={"status_code": 200})

        response = auth_client.post(
            "/admin/restaurants/1/pos/test",
            json={"pos_type": "untill", "username": "u", "password": "p", "ip": "10.0.0.5", "port": "3063", "database": "db"},
        )

        assert response.json()["success"] is True

    def test_save(self, auth_client, backend):
        backend.add("POST", "/super_admin/restaurants/1/onboarding/pos", json={"success": True})
        backend.add(
            "GET",
            "/super_admin/restaurants/1/pos",
            json={"pos_type": "untill", "username": "u", "base_url": "http://10.0.0.5:3063/api/v1/db"},
        )

        response = auth_client.put(
            "/admin/restaurants/1/pos",
            json={"pos_type": "untill", "username": "u", "password": "p", "ip": "10.0.0.5", "port": "3063", "database": "db"},
        )

        assert response.status_code == 200
        assert response.json()["database"] == "db"

    def test_save_validation_error(self, auth_client):
        response = auth_client.put(
            "/admin/restaurants/1/pos",
            json={"pos_type": "untill", "username": "", "password": "p"},
        )
        assert response.status_code == 400
        assert set(response.json()["errors"]) == {"username", "base_url"}

    def test_connections_overview(self, auth_client, backend):
        backend.add("GET", "/super_admin/restaurants/pos_connections", json=[{"restaurant_id": 1, "pos_type": "untill"}])

        response = auth_client.get("/admin/pos/connections?pos_type=untill")

        assert response.json()["total"] == 1
        params = dict(backend.calls("GET", "/super_admin/restaurants/pos_connections")[-1].url.params)
        assert params["pos_type"] == "untill"

    def test_url_helper(self, auth_client):
        response = auth_client.get("/admin/pos/url", params={"pos_type": "mpluskassa", "port": "34562"})
        assert response.json()["base_url"] == "https://api.mpluskassa.nl:34562"
