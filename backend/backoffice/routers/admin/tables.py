"""
Section and table endpoints, including batch creation and QR codes.
"""

from fastapi import APIRouter, Depends, Response, status

from backoffice.routers._common.deps import get_table_service
from backoffice.services.domain import TableService
from shared.utils.admin_schemas import (
    SectionCreate,
    SectionOutput,
    SectionUpdate,
    TableBatchCreate,
    TableCreate,
    TableOutput,
)


router = APIRouter(tags=["admin-tables"])


@router.get("/restaurants/{restaurant_id}/sections", response_model=list[SectionOutput])
async def list_sections(restaurant_id: int, service: TableService = Depends(get_table_service)) -> list[SectionOutput]:
    return await service.list_sections(restaurant_id)


@router.post(
    "/restaurants/{restaurant_id}/sections",
    response_model=list[SectionOutput],
    status_code=status.HTTP_201_CREATED,
)
async def create_section(
    restaurant_id: int,
    body: SectionCreate,
    service: TableService = Depends(get_table_service),
) -> list[SectionOutput]:
    return await service.create_section(restaurant_id, body)


@router.put("/restaurants/{restaurant_id}/sections/{section_id}", response_model=list[SectionOutput])
async def update_section(
    restaurant_id: int,
    section_id: int,
    body: SectionUpdate,
    service: TableService = Depends(get_table_service),
) -> list[SectionOutput]:
    return await service.update_section(restaurant_id, section_id, body)


@router.delete("/restaurants/{restaurant_id}/sections/{section_id}", response_model=list[SectionOutput])
async def delete_section(
    restaurant_id: int,
    section_id: int,
    service: TableService = Depends(get_table_service),
) -> list[SectionOutput]:
    return await service.delete_section(restaurant_id, section_id)


@router.post(
    "/restaurants/{restaurant_id}/sections/{section_id}/tables",
    response_model=list[SectionOutput],
    status_code=status.HTTP_201_CREATED,
)
async def create_table(
    restaurant_id: int,
    section_id: int,
    body: TableCreate,
    service: TableService = Depends(get_table_service),
) -> list[SectionOutput]:
    return await service.create_table(restaurant_id, section_id, body.table_number)


@router.post(
    "/restaurants/{restaurant_id}/sections/{section_id}/tables/batch",
    response_model=list[SectionOutput],
    status_code=status.HTTP_201_CREATED,
)
async def create_tables_batch(
    restaurant_id: int,
    section_id: int,
    body: TableBatchCreate,
    service: TableService = Depends(get_table_service),
) -> list[SectionOutput]:
    """Create several tables at once, e.g. {"table_numbers": "1, 2, 3, 10"}."""
    return await service.create_tables(restaurant_id, section_id, body)


@router.patch("/restaurants/{restaurant_id}/tables/{table_id}/toggle", response_model=list[SectionOutput])
async def toggle_table(
    restaurant_id: int,
    table_id: int,
    service: TableService = Depends(get_table_service),
) -> list[SectionOutput]:
    return await service.toggle_table(restaurant_id, table_id)


@router.delete("/restaurants/{restaurant_id}/tables/{table_id}", response_model=list[SectionOutput])
async def delete_table(
    restaurant_id: int,
    table_id: int,
    service: TableService = Depends(get_table_service),
) -> list[SectionOutput]:
    return await service.delete_table(restaurant_id, table_id)


@router.get("/restaurants/{restaurant_id}/tables/qr", response_model=list[TableOutput])
async def list_qr_tables(restaurant_id: int, service: TableService = Depends(get_table_service)) -> list[TableOutput]:
    return await service.list_qr_tables(restaurant_id)


@router.get("/restaurants/{restaurant_id}/tables/{table_id}/qr.png")
async def table_qr_code(
    restaurant_id: int,
    table_id: int,
    service: TableService = Depends(get_table_service),
) -> Response:
    png = await service.qr_png(restaurant_id, table_id)
    return Response(content=png, media_type="image/png")
