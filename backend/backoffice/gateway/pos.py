"""POS configuration endpoints of the backend."""

from typing import Any

from backoffice.gateway.client import SUPER_ADMIN, BackofficeApiClient
from shared.utils.admin_schemas import PosConfig, PosTestResult


class PosGateway:
    """Test, save and load POS credentials. Test and save are independent calls."""

    def __init__(self, api: BackofficeApiClient):
        self.api = api

    async def get_config(self, restaurant_id: int) -> PosConfig | None:
        data = await self.api.get(f"{SUPER_ADMIN}/restaurants/{restaurant_id}/pos")
        if not data:
            return None
        return PosConfig.model_validate(data)

    async def test_connection(self, restaurant_id: int, config: PosConfig) -> PosTestResult:
        data = await self.api.post(
            f"{SUPER_ADMIN}/restaurants/{restaurant_id}/pos/test",
            json=config.model_dump(),
        ) or {}
        success = data.get("success")
        if success is None:
            success = data.get("status_code") == 200
        return PosTestResult(success=bool(success), message=data.get("message", ""))

    async def save(self, restaurant_id: int, config: PosConfig) -> Any:
        return await self.api.post(
            f"{SUPER_ADMIN}/restaurants/{restaurant_id}/onboarding/pos",
            json=config.model_dump(),
        )

    async def list_connections(
        self,
        search: str | None = None,
        pos_type: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> dict[str, Any]:
        data = await self.api.get(
            f"{SUPER_ADMIN}/restaurants/pos_connections",
            params={"search": search, "pos_type": pos_type, "limit": limit, "offset": offset},
        )
        if isinstance(data, list):
            return {"connections": data, "total": len(data)}
        return data or {"connections": [], "total": 0}
