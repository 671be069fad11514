"""
Thin wrappers around the backend's REST endpoints.

Each gateway takes a BackofficeApiClient and performs exactly one call per
method; no caching and no retries.
"""

from backoffice.gateway.client import BackofficeApiClient, create_http_client
from backoffice.gateway.auth import AuthGateway
from backoffice.gateway.restaurants import RestaurantGateway
from backoffice.gateway.team import TeamGateway
from backoffice.gateway.tables import TableGateway
from backoffice.gateway.pos import PosGateway
from backoffice.gateway.onboarding import OnboardingGateway
from backoffice.gateway.payments import PaymentGateway

__all__ = [
    "BackofficeApiClient",
    "create_http_client",
    "AuthGateway",
    "RestaurantGateway",
    "TeamGateway",
    "TableGateway",
    "PosGateway",
    "OnboardingGateway",
    "PaymentGateway",
]
