"""Payment Service: read-only transaction listing per restaurant."""

from __future__ import annotations

from datetime import date

from backoffice.gateway.payments import PaymentGateway
from shared.config.constants import Limits
from shared.utils.admin_schemas import PaymentDetail, PaymentList
from shared.utils.exceptions import ValidationError
from shared.utils.validators import sanitize_search_term

PAYMENT_STATUSES = ("all", "pending", "paid", "failed", "refunded")


class PaymentService:
    def __init__(self, payments: PaymentGateway):
        self._payments = payments

    async def list(
        self,
        restaurant_id: int,
        *,
        search: str | None = None,
        status: str = "all",
        date_from: date | None = None,
        date_to: date | None = None,
        limit: int = Limits.DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> PaymentList:
        if status not in PAYMENT_STATUSES:
            raise ValidationError(f"Unknown payment status: {status}", field="status")
        if date_from and date_to and date_from > date_to:
            raise ValidationError("Start date must be before end date", field="date_from")

        return await self._payments.list(
            restaurant_id,
            limit=max(1, min(limit, Limits.MAX_PAGE_SIZE)),
            offset=max(0, offset),
            search=sanitize_search_term(search or "") or None,
            status=status,
            date_from=date_from,
            date_to=date_to,
        )

    async def get(self, payment_id: int | str) -> PaymentDetail:
        return await self._payments.get(payment_id)
