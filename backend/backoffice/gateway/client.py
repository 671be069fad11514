"""
HTTP client for the upstream REST backend.

One pooled httpx.AsyncClient is shared by the application; a
BackofficeApiClient binds it to the admin's bearer token for the duration
of a request.

Response handling is identical for every endpoint:
    - 401: the on_unauthorized hook runs, then UnauthorizedError is raised
    - other non-2xx: BackendError with the JSON `detail` when present,
      otherwise "API Error: <status> <reason>"
    - transport failure: ExternalServiceError
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

import httpx

from shared.config.logging import gateway_logger as logger
from shared.config.settings import settings
from shared.infrastructure.correlation import correlation_headers
from shared.utils.exceptions import BackendError, ExternalServiceError, UnauthorizedError

SUPER_ADMIN = "/super_admin"


def create_http_client(
    base_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    timeout: float | None = None,
) -> httpx.AsyncClient:
    """Build the shared pooled client. Pass a MockTransport in tests."""
    return httpx.AsyncClient(
        base_url=base_url or settings.api_base_url,
        timeout=timeout or settings.api_timeout_seconds,
        limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
        transport=transport,
    )


def parse_error_detail(response: httpx.Response) -> str:
    """Best-effort error message from a failed response."""
    message = f"API Error: {response.status_code} {response.reason_phrase}".rstrip()
    try:
        data = response.json()
    except ValueError:
        return message
    if isinstance(data, dict) and data.get("detail"):
        detail = data["detail"]
        return detail if isinstance(detail, str) else str(detail)
    return message


class BackofficeApiClient:
    """
    Authenticated view of the backend for one admin.

    Usage:
        api = BackofficeApiClient(http, token=token)
        restaurant = await api.get(f"/super_admin/restaurants/{restaurant_id}")
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        token: Optional[str] = None,
        on_unauthorized: Optional[Callable[[], Awaitable[None]]] = None,
    ):
        self.http = http
        self.token = token
        self.on_unauthorized = on_unauthorized

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", **correlation_headers()}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None for empty bodies)."""
        if params:
            params = {k: v for k, v in params.items() if v is not None and v != ""}

        try:
            response = await self.http.request(
                method,
                endpoint,
                params=params or None,
                json=json,
                data=data,
                headers=self._headers(),
            )
        except httpx.TimeoutException as e:
            raise ExternalServiceError(
                "backend", is_unavailable=True, endpoint=endpoint, error=str(e)
            ) from e
        except httpx.HTTPError as e:
            raise ExternalServiceError("backend", endpoint=endpoint, error=str(e)) from e

        if response.status_code == 401:
            if self.on_unauthorized is not None:
                await self.on_unauthorized()
            raise UnauthorizedError(endpoint=endpoint, method=method)

        if response.is_error:
            raise BackendError(
                response.status_code,
                parse_error_detail(response),
                endpoint=endpoint,
                method=method,
            )

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            logger.warning("Backend returned non-JSON body", endpoint=endpoint, status_code=response.status_code)
            return None

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", endpoint, params=params)

    async def post(self, endpoint: str, json: Any = None, data: dict[str, Any] | None = None) -> Any:
        return await self.request("POST", endpoint, json=json, data=data)

    async def put(self, endpoint: str, json: Any = None) -> Any:
        return await self.request("PUT", endpoint, json=json)

    async def patch(self, endpoint: str, json: Any = None) -> Any:
        return await self.request("PATCH", endpoint, json=json)

    async def delete(self, endpoint: str, json: Any = None) -> Any:
        return await self.request("DELETE", endpoint, json=json)
