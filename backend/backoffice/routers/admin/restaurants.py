"""
Restaurant management endpoints.

Every mutation answers with the restaurant fetched again from the backend.
"""

from fastapi import APIRouter, Depends, Query, status

from backoffice.routers._common.deps import get_restaurant_service
from backoffice.routers._common.pagination import Pagination, get_pagination
from backoffice.services.domain import RestaurantService
from shared.utils.admin_schemas import (
    RestaurantCreate,
    RestaurantDeleteRequest,
    RestaurantDetail,
    RestaurantStats,
    RestaurantUpdate,
)


router = APIRouter(tags=["admin-restaurants"])


@router.get("/restaurants")
async def list_restaurants(
    search: str | None = Query(default=None, max_length=100),
    location: str | None = Query(default=None, max_length=100),
    status_filter: str | None = Query(default=None, alias="status"),
    pagination: Pagination = Depends(get_pagination),
    service: RestaurantService = Depends(get_restaurant_service),
) -> dict:
    page = await service.list(
        search=search,
        location=location,
        status=status_filter,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return {
        "items": [r.model_dump(mode="json") for r in page.restaurants],
        "pagination": pagination.to_dict(total=page.total),
    }


@router.get("/restaurants/stats", response_model=RestaurantStats)
async def restaurant_stats(service: RestaurantService = Depends(get_restaurant_service)) -> RestaurantStats:
    return await service.stats()


@router.get("/restaurants/detail/{restaurant_id}")
async def restaurant_detail_page(
    restaurant_id: int,
    service: RestaurantService = Depends(get_restaurant_service),
) -> dict:
    """Aggregated payload of the restaurant detail page."""
    return await service.detail(restaurant_id)


@router.get("/restaurants/{restaurant_id}", response_model=RestaurantDetail)
async def get_restaurant(
    restaurant_id: int,
    service: RestaurantService = Depends(get_restaurant_service),
) -> RestaurantDetail:
    return await service.get(restaurant_id)


@router.post("/restaurants", response_model=RestaurantDetail, status_code=status.HTTP_201_CREATED)
async def create_restaurant(
    body: RestaurantCreate,
    service: RestaurantService = Depends(get_restaurant_service),
) -> RestaurantDetail:
    return await service.create(body)


@router.put("/restaurants/{restaurant_id}", response_model=RestaurantDetail)
async def update_restaurant(
    restaurant_id: int,
    body: RestaurantUpdate,
    service: RestaurantService = Depends(get_restaurant_service),
) -> RestaurantDetail:
    return await service.update(restaurant_id, body)


@router.patch("/restaurants/{restaurant_id}/archive", response_model=RestaurantDetail)
async def archive_restaurant(
    restaurant_id: int,
    service: RestaurantService = Depends(get_restaurant_service),
) -> RestaurantDetail:
    """Deactivate a restaurant. Team, tables and POS configuration are kept."""
    return await service.archive(restaurant_id)


@router.patch("/restaurants/{restaurant_id}/restore", response_model=RestaurantDetail)
async def restore_restaurant(
    restaurant_id: int,
    service: RestaurantService = Depends(get_restaurant_service),
) -> RestaurantDetail:
    return await service.restore(restaurant_id)


@router.delete("/restaurants/{restaurant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_restaurant(
    restaurant_id: int,
    body: RestaurantDeleteRequest,
    service: RestaurantService = Depends(get_restaurant_service),
) -> None:
    """Permanent delete. The body must repeat the restaurant name exactly."""
    await service.delete(restaurant_id, body)
