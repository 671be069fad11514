"""
FastAPI dependencies.

Request-scoped wiring from app.state (key-value store, pooled HTTP client)
down to gateways, services and the onboarding controller.

The browser is identified by the client cookie; its bearer token is read
from the token store. A missing token raises UnauthorizedError, which the
application turns into a redirect to the login page.
"""

import uuid

import httpx
from fastapi import Depends, Request, Response

from backoffice.gateway import (
    AuthGateway,
    BackofficeApiClient,
    OnboardingGateway,
    PaymentGateway,
    PosGateway,
    RestaurantGateway,
    TableGateway,
    TeamGateway,
)
from backoffice.services.domain import (
    PaymentService,
    PosService,
    RestaurantService,
    TableService,
    TeamService,
)
from backoffice.services.onboarding import OnboardingController, SnapshotStore
from shared.config.settings import settings
from shared.infrastructure.kv_store import KeyValueStore
from shared.security.token_store import TokenStore
from shared.utils.exceptions import UnauthorizedError


# =============================================================================
# Infrastructure
# =============================================================================


def get_kv_store(request: Request) -> KeyValueStore:
    return request.app.state.kv_store


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_token_store(kv: KeyValueStore = Depends(get_kv_store)) -> TokenStore:
    return TokenStore(kv)


def get_snapshot_store(kv: KeyValueStore = Depends(get_kv_store)) -> SnapshotStore:
    return SnapshotStore(kv)


def get_client_id(request: Request) -> str | None:
    return request.cookies.get(settings.client_cookie_name)


def ensure_client_id(request: Request, response: Response) -> str:
    """Client id from the cookie, issuing a new cookie when absent."""
    client_id = request.cookies.get(settings.client_cookie_name)
    if not client_id:
        client_id = uuid.uuid4().hex
        response.set_cookie(
            key=settings.client_cookie_name,
            value=client_id,
            max_age=settings.client_cookie_max_age,
            httponly=True,
            secure=settings.cookie_secure,
            samesite=settings.cookie_samesite,
        )
    return client_id


# =============================================================================
# API client
# =============================================================================


async def get_api_client(
    http: httpx.AsyncClient = Depends(get_http_client),
    tokens: TokenStore = Depends(get_token_store),
    client_id: str | None = Depends(get_client_id),
) -> BackofficeApiClient:
    """Authenticated client; any 401 from the backend clears this browser's tokens."""
    token = await tokens.get(client_id)
    if not token:
        raise UnauthorizedError("Not authenticated")

    async def on_unauthorized() -> None:
        await tokens.clear(client_id)

    return BackofficeApiClient(http, token=token, on_unauthorized=on_unauthorized)


def get_public_api_client(http: httpx.AsyncClient = Depends(get_http_client)) -> BackofficeApiClient:
    """Unauthenticated client (login only)."""
    return BackofficeApiClient(http)


# =============================================================================
# Gateways and services
# =============================================================================


def get_restaurant_gateway(api: BackofficeApiClient = Depends(get_api_client)) -> RestaurantGateway:
    return RestaurantGateway(api)


def get_onboarding_gateway(api: BackofficeApiClient = Depends(get_api_client)) -> OnboardingGateway:
    return OnboardingGateway(api)


def get_auth_gateway(api: BackofficeApiClient = Depends(get_api_client)) -> AuthGateway:
    return AuthGateway(api)


def get_restaurant_service(
    restaurants: RestaurantGateway = Depends(get_restaurant_gateway),
    snapshots: SnapshotStore = Depends(get_snapshot_store),
) -> RestaurantService:
    return RestaurantService(restaurants, snapshots)


def get_team_service(api: BackofficeApiClient = Depends(get_api_client)) -> TeamService:
    return TeamService(TeamGateway(api))


def get_table_service(api: BackofficeApiClient = Depends(get_api_client)) -> TableService:
    return TableService(TableGateway(api))


def get_pos_service(api: BackofficeApiClient = Depends(get_api_client)) -> PosService:
    return PosService(PosGateway(api))


def get_payment_service(api: BackofficeApiClient = Depends(get_api_client)) -> PaymentService:
    return PaymentService(PaymentGateway(api))


def get_onboarding_controller(
    snapshots: SnapshotStore = Depends(get_snapshot_store),
    restaurants: RestaurantGateway = Depends(get_restaurant_gateway),
    onboarding: OnboardingGateway = Depends(get_onboarding_gateway),
) -> OnboardingController:
    return OnboardingController(snapshots, restaurants, onboarding)
