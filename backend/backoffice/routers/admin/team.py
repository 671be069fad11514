"""Team management endpoints for one restaurant."""

from fastapi import APIRouter, Depends, status

from backoffice.routers._common.deps import get_team_service
from backoffice.services.domain import TeamService
from shared.utils.admin_schemas import TeamList, TeamMemberCreate, TeamMemberUpdate


router = APIRouter(tags=["admin-team"])


@router.get("/restaurants/{restaurant_id}/team", response_model=TeamList)
async def list_team(restaurant_id: int, service: TeamService = Depends(get_team_service)) -> TeamList:
    return await service.list(restaurant_id)


@router.post("/restaurants/{restaurant_id}/team", response_model=TeamList, status_code=status.HTTP_201_CREATED)
async def create_member(
    restaurant_id: int,
    body: TeamMemberCreate,
    service: TeamService = Depends(get_team_service),
) -> TeamList:
    return await service.create(restaurant_id, body)


@router.put("/restaurants/{restaurant_id}/team/{member_id}", response_model=TeamList)
async def update_member(
    restaurant_id: int,
    member_id: int,
    body: TeamMemberUpdate,
    service: TeamService = Depends(get_team_service),
) -> TeamList:
    return await service.update(restaurant_id, member_id, body)


@router.patch("/restaurants/{restaurant_id}/team/{member_id}/toggle", response_model=TeamList)
async def toggle_member(
    restaurant_id: int,
    member_id: int,
    service: TeamService = Depends(get_team_service),
) -> TeamList:
    return await service.toggle_active(restaurant_id, member_id)


@router.delete("/restaurants/{restaurant_id}/team/{member_id}", response_model=TeamList)
async def delete_member(
    restaurant_id: int,
    member_id: int,
    service: TeamService = Depends(get_team_service),
) -> TeamList:
    return await service.delete(restaurant_id, member_id)
