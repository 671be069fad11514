"""Payment listing endpoints (read only)."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from backoffice.routers._common.deps import get_payment_service
from backoffice.routers._common.pagination import Pagination, get_pagination
from backoffice.services.domain import PaymentService
from shared.utils.admin_schemas import PaymentDetail


router = APIRouter(tags=["admin-payments"])


@router.get("/restaurants/{restaurant_id}/payments")
async def list_payments(
    restaurant_id: int,
    search: str | None = Query(default=None, max_length=100),
    status_filter: str = Query(default="all", alias="status"),
    date_from: date | None = None,
    date_to: date | None = None,
    pagination: Pagination = Depends(get_pagination),
    service: PaymentService = Depends(get_payment_service),
) -> dict:
    page = await service.list(
        restaurant_id,
        search=search,
        status=status_filter,
        date_from=date_from,
        date_to=date_to,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return {
        "items": [p.model_dump(mode="json") for p in page.payments],
        "pagination": pagination.to_dict(total=page.total),
    }


@router.get("/payments/{payment_id}", response_model=PaymentDetail)
async def get_payment(payment_id: str, service: PaymentService = Depends(get_payment_service)) -> PaymentDetail:
    return await service.get(payment_id)
