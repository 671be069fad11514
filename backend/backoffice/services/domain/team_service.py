"""
Team Service.

Team members carry two role flags upstream (`is_restaurant_admin`,
`is_restaurant_staff`). Forms only know a single role, which is mapped so
exactly one flag is set. Records read back with both or neither flag set
are kept, counted and logged.
"""

from __future__ import annotations

from typing import Any

from backoffice.gateway.team import TeamGateway
from shared.config.constants import TeamRole
from shared.config.logging import get_logger
from shared.utils.admin_schemas import TeamList, TeamMember, TeamMemberCreate, TeamMemberUpdate
from shared.utils.exceptions import NotFoundError, ValidationError
from shared.utils.validators import validate_email

logger = get_logger(__name__)


def role_flags(role: str) -> dict[str, bool]:
    """Backend flags for a form role. Exactly one is True."""
    if role not in TeamRole.ALL:
        raise ValidationError(f"Unknown role: {role}", field="role")
    return {
        "is_restaurant_admin": role == TeamRole.MANAGER,
        "is_restaurant_staff": role == TeamRole.STAFF,
    }


def member_role(member: TeamMember) -> str | None:
    """Single role for a backend record, None when the flags conflict."""
    if member.role_conflict:
        return None
    return TeamRole.MANAGER if member.is_restaurant_admin else TeamRole.STAFF


class TeamService:
    """
    Service for restaurant team management.

    Business rules:
    - One REST call per action, then the whole team is fetched again
    - Counts are derived from the member list
    - Toggling status flips `is_active` through an update
    """

    def __init__(self, team: TeamGateway):
        self._team = team

    async def list(self, restaurant_id: int) -> TeamList:
        team = await self._team.list(restaurant_id)
        members = team.team

        conflicts = [m for m in members if m.role_conflict]
        for member in conflicts:
            logger.warning(
                "Team member has conflicting role flags",
                restaurant_id=restaurant_id,
                member_id=member.id,
                is_restaurant_admin=member.is_restaurant_admin,
                is_restaurant_staff=member.is_restaurant_staff,
            )

        for member in members:
            if member.role is None:
                member.role = member_role(member)

        return team.model_copy(
            update={
                "total": len(members),
                "admin_count": sum(1 for m in members if m.is_restaurant_admin),
                "staff_count": sum(1 for m in members if m.is_restaurant_staff),
                "active_count": sum(1 for m in members if m.is_active),
                "conflict_count": len(conflicts),
            }
        )

    async def _find(self, restaurant_id: int, member_id: int) -> TeamMember:
        team = await self._team.list(restaurant_id)
        for member in team.team:
            if member.id == member_id:
                return member
        raise NotFoundError("Team member", member_id, restaurant_id=restaurant_id)

    async def create(self, restaurant_id: int, body: TeamMemberCreate) -> TeamList:
        try:
            email = validate_email(body.email)
        except ValueError as e:
            raise ValidationError(str(e), field="email") from e

        payload: dict[str, Any] = body.model_dump(exclude_none=True)
        payload["email"] = email
        payload.update(role_flags(body.role))

        await self._team.create(restaurant_id, payload)
        logger.info("Team member created", restaurant_id=restaurant_id, role=body.role)
        return await self.list(restaurant_id)

    async def update(self, restaurant_id: int, member_id: int, body: TeamMemberUpdate) -> TeamList:
        payload: dict[str, Any] = body.model_dump(exclude_none=True, exclude={"role"})
        if body.role is not None:
            payload.update(role_flags(body.role))
        if "email" in payload:
            try:
                payload["email"] = validate_email(payload["email"])
            except ValueError as e:
                raise ValidationError(str(e), field="email") from e
        if not payload:
            raise ValidationError("Nothing to update")

        await self._team.update(restaurant_id, member_id, payload)
        logger.info("Team member updated", restaurant_id=restaurant_id, member_id=member_id, fields=sorted(payload))
        return await self.list(restaurant_id)

    async def toggle_active(self, restaurant_id: int, member_id: int) -> TeamList:
        member = await self._find(restaurant_id, member_id)
        await self._team.update(restaurant_id, member_id, {"is_active": not member.is_active})
        logger.info(
            "Team member status toggled",
            restaurant_id=restaurant_id,
            member_id=member_id,
            is_active=not member.is_active,
        )
        return await self.list(restaurant_id)

    async def delete(self, restaurant_id: int, member_id: int) -> TeamList:
        await self._team.delete(restaurant_id, member_id)
        logger.info("Team member deleted", restaurant_id=restaurant_id, member_id=member_id)
        return await self.list(restaurant_id)
