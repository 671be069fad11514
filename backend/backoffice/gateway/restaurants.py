"""Restaurant endpoints of the backend."""

from __future__ import annotations

from typing import Any

from backoffice.gateway.client import SUPER_ADMIN, BackofficeApiClient
from shared.utils.admin_schemas import (
    RestaurantCreate,
    RestaurantDetail,
    RestaurantList,
    RestaurantListItem,
    RestaurantStats,
    RestaurantUpdate,
)


class RestaurantGateway:
    """CRUD plus archive/restore for restaurants. One REST call per method."""

    def __init__(self, api: BackofficeApiClient):
        self.api = api

    async def list(
        self,
        search: str | None = None,
        location: str | None = None,
        status: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> RestaurantList:
        data = await self.api.get(
            f"{SUPER_ADMIN}/restaurants",
            params={
                "search": search,
                "location": location,
                "status": status,
                "limit": limit,
                "offset": offset,
            },
        )
        # The backend answers with a bare list or with {restaurants, total}
        if isinstance(data, list):
            items = [RestaurantListItem.model_validate(r) for r in data]
            return RestaurantList(restaurants=items, total=len(items))
        return RestaurantList.model_validate(data or {})

    async def stats(self) -> RestaurantStats:
        data = await self.api.get(f"{SUPER_ADMIN}/restaurants/stats")
        return RestaurantStats.model_validate(data or {})

    async def get(self, restaurant_id: int) -> RestaurantDetail:
        data = await self.api.get(f"{SUPER_ADMIN}/restaurants/{restaurant_id}")
        return RestaurantDetail.model_validate(data)

    async def detail(self, restaurant_id: int) -> dict[str, Any]:
        """Aggregated detail page payload (restaurant, team, tables, POS)."""
        return await self.api.get(f"{SUPER_ADMIN}/restaurants/detail/{restaurant_id}") or {}

    async def create(self, body: RestaurantCreate) -> RestaurantDetail:
        data = await self.api.post(f"{SUPER_ADMIN}/restaurants", json=body.model_dump(exclude_none=True))
        return RestaurantDetail.model_validate(data)

    async def update(self, restaurant_id: int, payload: RestaurantUpdate | dict[str, Any]) -> RestaurantDetail | None:
        if isinstance(payload, RestaurantUpdate):
            payload = payload.model_dump(exclude_none=True)
        data = await self.api.put(f"{SUPER_ADMIN}/restaurants/{restaurant_id}", json=payload)
        return RestaurantDetail.model_validate(data) if isinstance(data, dict) and "id" in data else None

    async def archive(self, restaurant_id: int) -> Any:
        return await self.api.patch(f"{SUPER_ADMIN}/restaurants/{restaurant_id}/archive")

    async def restore(self, restaurant_id: int) -> Any:
        return await self.api.patch(f"{SUPER_ADMIN}/restaurants/{restaurant_id}/restore")

    async def delete(self, restaurant_id: int) -> Any:
        return await self.api.delete(f"{SUPER_ADMIN}/restaurants/{restaurant_id}")
