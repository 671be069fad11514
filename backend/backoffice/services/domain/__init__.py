"""
Domain Services.

Services hold the back-office rules and orchestrate gateway calls.

Structure:
    Router (thin controller)
        ↓
    Service (business rules)  ← YOU ARE HERE
        ↓
    Gateway (one REST call per method)

Usage:
    from backoffice.services.domain import RestaurantService

    service = RestaurantService(RestaurantGateway(api), SnapshotStore(kv))
    restaurant = await service.archive(restaurant_id)
"""

from .restaurant_service import RestaurantService
from .team_service import TeamService
from .table_service import TableService
from .pos_service import PosService
from .payment_service import PaymentService

__all__ = [
    "RestaurantService",
    "TeamService",
    "TableService",
    "PosService",
    "PaymentService",
]
