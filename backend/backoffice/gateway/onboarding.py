"""Onboarding endpoints of the backend."""

from typing import Any

from backoffice.gateway.client import SUPER_ADMIN, BackofficeApiClient


class OnboardingGateway:
    def __init__(self, api: BackofficeApiClient):
        self.api = api

    def _base(self, restaurant_id: int) -> str:
        return f"{SUPER_ADMIN}/restaurants/{restaurant_id}/onboarding"

    async def progress(self, restaurant_id: int) -> dict[str, Any]:
        return await self.api.get(f"{self._base(restaurant_id)}/progress") or {}

    async def complete_personnel(self, restaurant_id: int, personnel: list[dict[str, Any]]) -> Any:
        return await self.api.post(f"{self._base(restaurant_id)}/step/1/personnel", json={"personnel": personnel})

    async def complete_stripe(self, restaurant_id: int, connected: bool, stripe_account_id: str | None = None) -> Any:
        payload: dict[str, Any] = {"connected": connected}
        if stripe_account_id:
            payload["stripe_account_id"] = stripe_account_id
        return await self.api.post(f"{self._base(restaurant_id)}/step/2/stripe", json=payload)

    async def stripe_oauth_url(self, restaurant_id: int) -> str:
        data = await self.api.get(f"{self._base(restaurant_id)}/stripe/oauth-url") or {}
        return data.get("url") or data.get("oauth_url") or ""

    async def complete_pos(self, restaurant_id: int, payload: dict[str, Any]) -> Any:
        return await self.api.post(f"{self._base(restaurant_id)}/step/3/pos", json=payload)

    async def configure_qr(self, restaurant_id: int, payload: dict[str, Any]) -> Any:
        return await self.api.post(f"{self._base(restaurant_id)}/qr/configure", json=payload)

    async def check_domain(self, restaurant_id: int, domain: str) -> dict[str, Any]:
        return await self.api.post(f"{self._base(restaurant_id)}/qr/check-domain", json={"domain": domain}) or {}

    async def complete_google_reviews(self, restaurant_id: int, place_id: str, review_link: str) -> Any:
        return await self.api.post(
            f"{self._base(restaurant_id)}/step/5/google-reviews",
            json={"place_id": place_id, "review_link": review_link},
        )

    async def complete_telegram(self, restaurant_id: int, restaurant_name: str) -> dict[str, Any]:
        return await self.api.post(
            f"{self._base(restaurant_id)}/step/6/telegram",
            json={"restaurant_name": restaurant_name, "configured": True},
        ) or {}

    async def skip_step(self, restaurant_id: int, step: int) -> Any:
        return await self.api.post(f"{self._base(restaurant_id)}/step/{step}/skip")

    async def complete(self, restaurant_id: int) -> Any:
        return await self.api.post(f"{self._base(restaurant_id)}/complete")
