"""
Back-office main application.
Entry point for the FastAPI server.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse

from backoffice.core import configure_cors, lifespan, register_middlewares
from backoffice.routers.admin import router as admin_router
from backoffice.routers.auth import router as auth_router
from backoffice.routers.public.health import router as health_router
from shared.config.logging import audit_auth_event
from shared.config.settings import settings
from shared.security.token_store import TokenStore
from shared.utils.exceptions import UnauthorizedError, ValidationError


# Create FastAPI application
app = FastAPI(
    title="Restaurant Back-Office",
    description="Super-admin back-office for restaurants, teams, POS and onboarding",
    version="0.1.0",
    lifespan=lifespan,
)

configure_cors(app)
register_middlewares(app)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(UnauthorizedError)
async def unauthorized_handler(request: Request, exc: UnauthorizedError) -> RedirectResponse:
    """Any 401: clear both token locations for this browser and go to the login page."""
    client_id = request.cookies.get(settings.client_cookie_name)
    await TokenStore(request.app.state.kv_store).clear(client_id)
    audit_auth_event("FORCED_LOGOUT", client_id, success=False, reason=exc.detail, path=request.url.path)
    return RedirectResponse(settings.login_path, status_code=status.HTTP_303_SEE_OTHER)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Inline field messages for the form that was submitted."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "errors": exc.errors},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = {
        ".".join(str(p) for p in err["loc"] if p != "body"): err["msg"]
        for err in exc.errors()
    }
    return JSONResponse(
        status_code=422,
        content={"detail": "Please fix the highlighted fields", "errors": errors},
    )


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(admin_router)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "backoffice.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
    )
