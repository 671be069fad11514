"""
Restaurant Service.

Handles restaurant list/detail screens and lifecycle actions:
- Filtered listing with page-size caps
- Create / update with a full refresh afterwards
- Archive and restore (only `is_active` changes)
- Permanent delete behind a typed confirmation

Usage:
    from backoffice.services.domain import RestaurantService

    service = RestaurantService(restaurants, snapshots)
    restaurant = await service.archive(restaurant_id)
    await service.delete(restaurant_id, RestaurantDeleteRequest(confirmation_text="Cafe X"))
"""

from __future__ import annotations

from typing import Any

from backoffice.gateway.restaurants import RestaurantGateway
from backoffice.services.onboarding.store import SnapshotStore
from shared.config.constants import Limits
from shared.config.logging import get_logger
from shared.utils.admin_schemas import (
    RestaurantCreate,
    RestaurantDeleteRequest,
    RestaurantDetail,
    RestaurantList,
    RestaurantStats,
    RestaurantUpdate,
)
from shared.utils.exceptions import ConfirmationMismatchError, ValidationError
from shared.utils.validators import sanitize_search_term

logger = get_logger(__name__)

DELETE_CHECKLIST = {
    "owner_talked": "Confirm the owner has been informed",
    "qr_returned": "Confirm the QR stands have been returned",
    "payments_settled": "Confirm all payments have been settled",
}


class RestaurantService:
    """
    Service for restaurant management.

    Business rules:
    - Every mutation is followed by a fresh fetch (no optimistic update)
    - Archive flips `is_active` only; team, tables and POS stay untouched
    - Delete requires the exact, case-sensitive restaurant name
    - Fully onboarded restaurants also need the offboarding checklist
    - Delete drops the local onboarding snapshot
    """

    def __init__(self, restaurants: RestaurantGateway, snapshots: SnapshotStore | None = None):
        self._restaurants = restaurants
        self._snapshots = snapshots

    # =========================================================================
    # Query Methods
    # =========================================================================

    async def list(
        self,
        *,
        search: str | None = None,
        location: str | None = None,
        status: str | None = None,
        limit: int = Limits.DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> RestaurantList:
        return await self._restaurants.list(
            search=sanitize_search_term(search or "") or None,
            location=sanitize_search_term(location or "") or None,
            status=None if status in (None, "", "all") else status,
            limit=max(1, min(limit, Limits.MAX_PAGE_SIZE)),
            offset=max(0, offset),
        )

    async def stats(self) -> RestaurantStats:
        return await self._restaurants.stats()

    async def get(self, restaurant_id: int) -> RestaurantDetail:
        return await self._restaurants.get(restaurant_id)

    async def detail(self, restaurant_id: int) -> dict[str, Any]:
        return await self._restaurants.detail(restaurant_id)

    # =========================================================================
    # Mutations
    # =========================================================================

    async def create(self, body: RestaurantCreate) -> RestaurantDetail:
        created = await self._restaurants.create(body)
        logger.info("Restaurant created", restaurant_id=created.id, name=created.name)
        return await self._restaurants.get(created.id)

    async def update(self, restaurant_id: int, body: RestaurantUpdate) -> RestaurantDetail:
        changes = body.model_dump(exclude_none=True)
        if not changes:
            raise ValidationError("Nothing to update")
        await self._restaurants.update(restaurant_id, changes)
        logger.info("Restaurant updated", restaurant_id=restaurant_id, fields=sorted(changes))
        return await self._restaurants.get(restaurant_id)

    async def archive(self, restaurant_id: int) -> RestaurantDetail:
        await self._restaurants.archive(restaurant_id)
        logger.info("Restaurant archived", restaurant_id=restaurant_id)
        return await self._restaurants.get(restaurant_id)

    async def restore(self, restaurant_id: int) -> RestaurantDetail:
        await self._restaurants.restore(restaurant_id)
        logger.info("Restaurant restored", restaurant_id=restaurant_id)
        return await self._restaurants.get(restaurant_id)

    async def delete(self, restaurant_id: int, request: RestaurantDeleteRequest) -> None:
        """
        Permanently delete a restaurant.

        Raises:
            ConfirmationMismatchError: Typed text differs from the name.
            ValidationError: Checklist incomplete for an onboarded restaurant.
        """
        restaurant = await self._restaurants.get(restaurant_id)

        if request.confirmation_text != restaurant.name:
            raise ConfirmationMismatchError("restaurant name")

        if restaurant.onboarding_completed:
            missing = {
                field: message
                for field, message in DELETE_CHECKLIST.items()
                if not getattr(request, field)
            }
            if missing:
                raise ValidationError(
                    "Complete the offboarding checklist before deleting",
                    errors=missing,
                )

        await self._restaurants.delete(restaurant_id)
        if self._snapshots is not None:
            await self._snapshots.delete(restaurant_id)

        logger.warning("Restaurant permanently deleted", restaurant_id=restaurant_id, name=restaurant.name)
