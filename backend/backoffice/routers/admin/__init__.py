"""
Admin router - combines all admin sub-routers.

- restaurants: list, stats, detail, create, update, archive, restore, delete
- team: team members with role mapping and status toggle
- tables: sections, tables, batch creation, QR codes
- pos: POS credentials, connection test, connections overview
- onboarding: the onboarding wizard
- payments: transaction listing

All routes are prefixed with /admin and require a stored token.
"""

from fastapi import APIRouter, Depends

from backoffice.routers._common.deps import get_api_client

from .restaurants import router as restaurants_router
from .team import router as team_router
from .tables import router as tables_router
from .pos import router as pos_router
from .onboarding import router as onboarding_router
from .payments import router as payments_router


router = APIRouter(prefix="/admin", dependencies=[Depends(get_api_client)])

router.include_router(restaurants_router)
router.include_router(team_router)
router.include_router(tables_router)
router.include_router(pos_router)
router.include_router(onboarding_router)
router.include_router(payments_router)
