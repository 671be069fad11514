"""
Pytest configuration and fixtures for back-office tests.

The REST backend is replaced by FakeBackend, an httpx.MockTransport handler
with per-route responses. Tokens and snapshots live in an in-memory
key-value store.
"""

import asyncio
import json
from typing import Any, Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from backoffice.gateway.client import BackofficeApiClient, create_http_client
from backoffice.main import app
from shared.config.settings import settings
from shared.infrastructure.kv_store import MemoryKeyValueStore
from shared.security.token_store import TokenStore


BACKEND_URL = "https://backend.test/v2"
CLIENT_ID = "test-browser"
TOKEN = "test-token"


class FakeBackend:
    """
    Route table for httpx.MockTransport.

    Usage:
        backend.add("GET", "/super_admin/restaurants/1", json={"id": 1, "name": "Cafe"})
        backend.add("PATCH", "/super_admin/restaurants/1/archive", handler=archive)
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    @staticmethod
    def _path(request: httpx.Request) -> str:
        path = request.url.path
        return path[len("/v2"):] if path.startswith("/v2/") else path

    def add(
        self,
        method: str,
        path: str,
        json: Any = None,
        status_code: int = 200,
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
    ) -> None:
        if handler is None:
            def handler(request: httpx.Request, _json=json, _status=status_code) -> httpx.Response:
                return httpx.Response(_status, json=_json)
        self.routes[(method.upper(), path)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, self._path(request)))
        if handler is None:
            return httpx.Response(404, json={"detail": f"No route for {request.method} {self._path(request)}"})
        return handler(request)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method.upper() and self._path(r) == path]

    def body(self, method: str, path: str) -> Any:
        """JSON body of the last matching request."""
        request = self.calls(method, path)[-1]
        return json.loads(request.content) if request.content else None


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content) if request.content else None


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def http_client(backend):
    return create_http_client(base_url=BACKEND_URL, transport=httpx.MockTransport(backend))


@pytest.fixture
def kv_store():
    return MemoryKeyValueStore(prefix="test")


@pytest.fixture
def api(http_client):
    """Authenticated API client for gateway and service tests."""
    return BackofficeApiClient(http_client, token=TOKEN)


@pytest.fixture
def client(kv_store, http_client):
    """
    Test client wired to the fake backend and the in-memory store.
    No token is stored; see auth_client.
    """
    app.state.kv_store = kv_store
    app.state.http_client = http_client

    with TestClient(app) as test_client:
        yield test_client

    app.state.kv_store = None
    app.state.http_client = None
    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(client, kv_store):
    """Test client for a browser that has logged in (session token)."""
    asyncio.run(TokenStore(kv_store).save(CLIENT_ID, TOKEN))
    client.cookies.set(settings.client_cookie_name, CLIENT_ID)
    return client


# =============================================================================
# Backend records
# =============================================================================


def restaurant_record(restaurant_id: int = 1, **overrides: Any) -> dict:
    record = {
        "id": restaurant_id,
        "name": "Cafe de Zon",
        "address": "Dorpsstraat 1",
        "city": "Utrecht",
        "postal_code": "3511AA",
        "contact_email": "info@cafedezon.nl",
        "is_active": True,
        "onboarding_completed": False,
    }
    record.update(overrides)
    return record


@pytest.fixture
def restaurant_backend(backend):
    """
    Fake backend with one mutable restaurant (id 1) supporting
    get / update / archive / restore / delete.
    """
    state = {"restaurant": restaurant_record()}

    def get(request):
        return httpx.Response(200, json=state["restaurant"])

    def update(request):
        state["restaurant"].update(request_json(request) or {})
        return httpx.Response(200, json=state["restaurant"])

    def archive(request):
        state["restaurant"]["is_active"] = False
        return httpx.Response(200, json={"success": True})

    def restore(request):
        state["restaurant"]["is_active"] = True
        return httpx.Response(200, json={"success": True})

    def delete(request):
        state["restaurant"]["deleted"] = True
        return httpx.Response(204)

    backend.add("GET", "/super_admin/restaurants/1", handler=get)
    backend.add("PUT", "/super_admin/restaurants/1", handler=update)
    backend.add("PATCH", "/super_admin/restaurants/1/archive", handler=archive)
    backend.add("PATCH", "/super_admin/restaurants/1/restore", handler=restore)
    backend.add("DELETE", "/super_admin/restaurants/1", handler=delete)
    backend.state = state
    return backend


@pytest.fixture
def client_id():
    return CLIENT_ID


@pytest.fixture
def token_store(kv_store):
    return TokenStore(kv_store)
