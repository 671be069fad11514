"""
Tests for section/table endpoints, batch creation and QR codes.
"""

import pytest

from shared.utils.validators import parse_table_numbers

BASE = "/super_admin/restaurants/1"
SECTIONS = [
    {
        "id": 10,
        "name": "Terras",
        "design": "classic",
        "tables": [
            {"id": 100, "table_number": 1, "is_active": True, "table_link": "https://menu.example.com/t/100"},
            {"id": 101, "table_number": 2, "is_active": True},
        ],
    }
]


@pytest.fixture
def tables_backend(backend):
    backend.add("GET", BASE + "/sections", json=SECTIONS)
    backend.add("POST", BASE + "/sections", json={"id": 11, "name": "Bar"})
    backend.add("POST", BASE + "/sections/10/tables", json={"id": 102, "table_number": 3})
    backend.add("POST", BASE + "/sections/10/tables/batch", json={"tables": []})
    backend.add("PATCH", BASE + "/tables/100/toggle", json={"success": True})
    backend.add("DELETE", BASE + "/tables/100", status_code=204)
    backend.add("GET", BASE + "/tables/qr/all", json={"tables": [t for s in SECTIONS for t in s["tables"]]})
    return backend


class TestParseTableNumbers:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("1, 2, 3", [1, 2, 3]),
            ("1,,2", [1, 2]),
            ("x, -3, 0, 4", [4]),
            ("", []),
            (None, []),
        ],
    )
    def test_invalid_entries_ignored(self, raw, expected):
        assert parse_table_numbers(raw) == expected


class TestTableEndpoints:
    def test_list_sections(self, auth_client, tables_backend):
        response = auth_client.get("/admin/restaurants/1/sections")
        assert response.status_code == 200
        assert response.json()[0]["tables"][0]["table_number"] == 1

    def test_create_section_trims_name(self, auth_client, tables_backend):
        response = auth_client.post("/admin/restaurants/1/sections", json={"name": "  Bar "})
        assert response.status_code == 201
        assert tables_backend.body("POST", BASE + "/sections")["name"] == "Bar"

    def test_batch_from_string_skips_existing(self, auth_client, tables_backend):
        response = auth_client.post(
            "/admin/restaurants/1/sections/10/tables/batch",
            json={"table_numbers": "2, 3, 3, x, 5"},
        )

        assert response.status_code == 201
        assert tables_backend.body("POST", BASE + "/sections/10/tables/batch") == {"table_numbers": [3, 5]}

    def test_batch_without_valid_numbers(self, auth_client, tables_backend):
        response = auth_client.post(
            "/admin/restaurants/1/sections/10/tables/batch",
            json={"table_numbers": "x, -1"},
        )
        assert response.status_code == 400
        assert "table_numbers" in response.json()["errors"]

    def test_batch_unknown_section(self, auth_client, tables_backend):
        response = auth_client.post(
            "/admin/restaurants/1/sections/99/tables/batch",
            json={"table_numbers": [1]},
        )
        assert response.status_code == 404

    def test_create_single_table(self, auth_client, tables_backend):
        response = auth_client.post("/admin/restaurants/1/sections/10/tables", json={"table_number": 3})
        assert response.status_code == 201

    def test_toggle_and_delete(self, auth_client, tables_backend):
        assert auth_client.patch("/admin/restaurants/1/tables/100/toggle").status_code == 200
        assert auth_client.delete("/admin/restaurants/1/tables/100").status_code == 200

    def test_qr_png(self, auth_client, tables_backend):
        response = auth_client.get("/admin/restaurants/1/tables/100/qr.png")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content.startswith(b"\x89PNG")

    def test_qr_for_table_without_link(self, auth_client, tables_backend):
        response = auth_client.get("/admin/restaurants/1/tables/101/qr.png")
        assert response.status_code == 400
