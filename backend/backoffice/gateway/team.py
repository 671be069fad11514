"""Team and staff endpoints of the backend."""

from __future__ import annotations

from typing import Any

from backoffice.gateway.client import SUPER_ADMIN, BackofficeApiClient
from shared.utils.admin_schemas import TeamList, TeamMember


class TeamGateway:
    def __init__(self, api: BackofficeApiClient):
        self.api = api

    def _base(self, restaurant_id: int) -> str:
        return f"{SUPER_ADMIN}/restaurants/{restaurant_id}/team"

    async def list(self, restaurant_id: int) -> TeamList:
        data = await self.api.get(self._base(restaurant_id))
        return TeamList.model_validate(data or {})

    async def create(self, restaurant_id: int, payload: dict[str, Any]) -> TeamMember:
        data = await self.api.post(self._base(restaurant_id), json=payload)
        return TeamMember.model_validate(data)

    async def update(self, restaurant_id: int, member_id: int, payload: dict[str, Any]) -> TeamMember | None:
        data = await self.api.put(f"{self._base(restaurant_id)}/{member_id}", json=payload)
        return TeamMember.model_validate(data) if isinstance(data, dict) and "id" in data else None

    async def delete(self, restaurant_id: int, member_id: int) -> Any:
        return await self.api.delete(f"{self._base(restaurant_id)}/{member_id}", json={"member_id": member_id})

    async def list_staff(self, restaurant_id: int) -> list[dict[str, Any]]:
        """Legacy staff listing (users attached to the restaurant)."""
        data = await self.api.get(f"{SUPER_ADMIN}/restaurants/{restaurant_id}/staff")
        if isinstance(data, dict):
            return data.get("staff", [])
        return data or []

    async def get_staff(self, restaurant_id: int, user_id: int) -> dict[str, Any]:
        return await self.api.get(f"{SUPER_ADMIN}/restaurants/{restaurant_id}/staff/{user_id}") or {}
