"""Authentication endpoints of the backend."""

from backoffice.gateway.client import BackofficeApiClient
from shared.utils.admin_schemas import CurrentUser, LoginResult


class AuthGateway:
    def __init__(self, api: BackofficeApiClient):
        self.api = api

    async def login(self, username: str, password: str) -> LoginResult:
        """POST /auth/login with form fields; returns the bearer token."""
        data = await self.api.post("/auth/login", data={"username": username, "password": password})
        return LoginResult.model_validate(data)

    async def me(self) -> CurrentUser:
        data = await self.api.get("/auth/me")
        return CurrentUser.model_validate(data or {})
