"""
Authentication router.
Handles login, logout and the current admin.

The backend issues the bearer token; it is stored server-side per browser
(client cookie) in the session location, or in the persistent location when
"remember me" is checked.
"""

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import RedirectResponse

from backoffice.gateway import AuthGateway, BackofficeApiClient
from backoffice.routers._common.deps import (
    ensure_client_id,
    get_auth_gateway,
    get_client_id,
    get_public_api_client,
    get_token_store,
)
from shared.config.logging import audit_auth_event, auth_logger as logger, mask_email
from shared.config.settings import settings
from shared.security.token_store import TokenStore
from shared.utils.admin_schemas import CurrentUser, LoginForm
from shared.utils.exceptions import AppException, UnauthorizedError


router = APIRouter(tags=["auth"])

HOME_PATH = "/admin/restaurants"


@router.get("/login")
async def login_page(
    client_id: str | None = Depends(get_client_id),
    tokens: TokenStore = Depends(get_token_store),
) -> dict:
    """
    Target of the forced-logout and logout redirects.

    Tells the front end whether this browser still holds a token and where
    to go next: the admin home, or the login form (POST /login).
    """
    if await tokens.get(client_id):
        return {"authenticated": True, "redirect_to": HOME_PATH}
    return {"authenticated": False, "detail": "Login required", "login_url": settings.login_path}


@router.post("/login")
async def login(
    body: LoginForm,
    response: Response,
    client_id: str = Depends(ensure_client_id),
    api: BackofficeApiClient = Depends(get_public_api_client),
    tokens: TokenStore = Depends(get_token_store),
) -> dict:
    """
    Exchange credentials for a backend token and store it for this browser.

    Any token left from an earlier login is cleared first so the persistent
    location never shadows a fresh session token.
    """
    try:
        result = await AuthGateway(api).login(body.username, body.password)
    except UnauthorizedError:
        audit_auth_event("LOGIN", client_id, email=body.username, success=False, reason="invalid_credentials")
        raise AppException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            log_level=None,
        )

    await tokens.clear(client_id)
    await tokens.save(client_id, result.access_token, remember=body.remember_me)

    audit_auth_event("LOGIN", client_id, email=body.username, success=True, remember_me=body.remember_me)
    logger.info("Admin logged in", email=mask_email(body.username))
    return {"success": True, "redirect_to": HOME_PATH}


@router.post("/logout")
async def logout(
    client_id: str | None = Depends(get_client_id),
    tokens: TokenStore = Depends(get_token_store),
) -> RedirectResponse:
    """Clear both token locations and go back to the login page."""
    await tokens.clear(client_id)
    audit_auth_event("LOGOUT", client_id, success=True)
    return RedirectResponse(settings.login_path, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/api/auth/me", response_model=CurrentUser)
async def me(auth: AuthGateway = Depends(get_auth_gateway)) -> CurrentUser:
    return await auth.me()
