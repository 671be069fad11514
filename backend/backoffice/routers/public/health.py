"""
Health endpoints: a liveness check and a detailed check of the key-value store.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from shared.config.settings import settings
from shared.infrastructure.kv_store import KeyValueStore
from shared.utils.health import HealthStatus, health_check_with_timeout, summarize


router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health_check():
    """Liveness only; dependencies are not touched."""
    return {
        "status": "healthy",
        "service": "backoffice",
        "environment": settings.environment,
    }


@health_check_with_timeout(timeout=3.0, component="kv_store")
async def check_kv_store(store: KeyValueStore) -> dict:
    if not await store.ping():
        return False
    return {"backend": settings.kv_backend}


@router.get("/health/detailed")
async def detailed_health_check(request: Request):
    """503 when the key-value store is unreachable (tokens and snapshots live there)."""
    report = await summarize([check_kv_store(request.app.state.kv_store)])

    body = {
        "service": "backoffice",
        "environment": settings.environment,
        "status": report["status"],
        "dependencies": report["components"],
        "backend": settings.api_base_url,
    }
    if report["status"] != HealthStatus.HEALTHY.value:
        return JSONResponse(content=body, status_code=503)
    return body
