"""
Tests for health check endpoints.
"""

from shared.infrastructure.kv_store import MemoryKeyValueStore


class TestHealthEndpoints:
    """Test health check API endpoints."""

    def test_health_check(self, client):
        """Basic health check should return healthy status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "backoffice"

    def test_detailed_health_reports_kv_store(self, client):
        response = client.get("/api/health/detailed")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"]["kv_store"]["status"] == "healthy"

    def test_detailed_health_degraded_when_store_down(self, client, kv_store, monkeypatch):
        async def failing_ping():
            raise ConnectionError("connection refused")

        monkeypatch.setattr(kv_store, "ping", failing_ping)

        response = client.get("/api/health/detailed")
        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "degraded"
        assert "connection refused" in data["dependencies"]["kv_store"]["error"]

    def test_responses_carry_request_id(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

    def test_security_headers(self, client):
        response = client.get("/api/health")
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_memory_store_is_isolated_per_prefix():
    a = MemoryKeyValueStore(prefix="a")
    b = MemoryKeyValueStore(prefix="b")
    assert a._key("k") != b._key("k")
