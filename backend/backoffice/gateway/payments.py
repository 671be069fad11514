"""Payment / transaction endpoints of the backend."""

from __future__ import annotations

from datetime import date

from backoffice.gateway.client import SUPER_ADMIN, BackofficeApiClient
from shared.utils.admin_schemas import PaymentDetail, PaymentList


class PaymentGateway:
    def __init__(self, api: BackofficeApiClient):
        self.api = api

    async def list(
        self,
        restaurant_id: int,
        limit: int = 50,
        offset: int = 0,
        search: str | None = None,
        status: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> PaymentList:
        params = {
            "limit": limit,
            "offset": offset,
            "search_pattern": search,
            # "all" means no status filter
            "status": None if status in (None, "all") else status,
            "date_from": date_from.isoformat() if date_from else None,
            "date_to": date_to.isoformat() if date_to else None,
        }
        data = await self.api.get(f"{SUPER_ADMIN}/restaurants/{restaurant_id}/payments", params=params)
        if isinstance(data, list):
            return PaymentList(payments=data, total=len(data))
        return PaymentList.model_validate(data or {})

    async def get(self, payment_id: int | str) -> PaymentDetail:
        data = await self.api.get(f"{SUPER_ADMIN}/payments/{payment_id}")
        return PaymentDetail.model_validate(data)
