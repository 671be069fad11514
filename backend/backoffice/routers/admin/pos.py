"""POS configuration endpoints."""

from fastapi import APIRouter, Depends, Query

from backoffice.routers._common.deps import get_pos_service
from backoffice.routers._common.pagination import Pagination, get_pagination
from backoffice.services.domain import PosService
from backoffice.services.pos_urls import derive_base_url, parse_base_url
from shared.utils.admin_schemas import PosForm, PosTestResult


router = APIRouter(tags=["admin-pos"])


@router.get("/restaurants/{restaurant_id}/pos")
async def get_pos_config(restaurant_id: int, service: PosService = Depends(get_pos_service)) -> dict:
    """Stored config as form values (password omitted), or {"configured": false}."""
    values = await service.load(restaurant_id)
    if values is None:
        return {"configured": False}
    return {"configured": True, **values}


@router.post("/restaurants/{restaurant_id}/pos/test", response_model=PosTestResult)
async def test_pos_connection(
    restaurant_id: int,
    body: PosForm,
    service: PosService = Depends(get_pos_service),
) -> PosTestResult:
    return await service.test(restaurant_id, body)


@router.put("/restaurants/{restaurant_id}/pos")
async def save_pos_config(
    restaurant_id: int,
    body: PosForm,
    service: PosService = Depends(get_pos_service),
) -> dict:
    values = await service.save(restaurant_id, body)
    return {"configured": values is not None, **(values or {})}


@router.get("/pos/connections")
async def pos_connections(
    search: str | None = Query(default=None, max_length=100),
    pos_type: str | None = None,
    pagination: Pagination = Depends(get_pagination),
    service: PosService = Depends(get_pos_service),
) -> dict:
    return await service.overview(
        search=search,
        pos_type=pos_type,
        limit=pagination.limit,
        offset=pagination.offset,
    )


@router.get("/pos/url")
def pos_url(
    pos_type: str,
    port: str | None = None,
    ip: str | None = None,
    database: str | None = None,
    base_url: str | None = None,
) -> dict:
    """Derive a base URL from provider fields, or parse the fields from a base URL."""
    if base_url:
        return {"base_url": base_url, **parse_base_url(pos_type, base_url)}
    return {
        "base_url": derive_base_url(pos_type, port=port, ip=ip, database=database),
        "port": port or "",
        "ip": ip or "",
        "database": database or "",
    }
