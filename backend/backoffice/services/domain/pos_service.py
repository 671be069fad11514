"""
POS Service.

Turns the POS form into a backend config (deriving the base URL from the
provider fields) and back. Test and save are independent calls; nothing
checks reachability locally.
"""

from __future__ import annotations

from typing import Any

from backoffice.gateway.pos import PosGateway
from backoffice.services.pos_urls import derive_base_url, parse_base_url
from shared.config.constants import Limits, PosType
from shared.config.logging import get_logger
from shared.utils.admin_schemas import PosConfig, PosForm, PosTestResult
from shared.utils.exceptions import ValidationError
from shared.utils.validators import sanitize_search_term

logger = get_logger(__name__)


def form_to_config(form: PosForm) -> PosConfig:
    """
    Build the backend config from a form.

    Raises:
        ValidationError: Required credentials missing or no base URL can be
            derived from the provider fields.
    """
    errors: dict[str, str] = {}
    if not form.username.strip():
        errors["username"] = "Username is required"
    if not form.password:
        errors["password"] = "Password is required"

    base_url = (form.base_url or "").strip() or derive_base_url(
        form.pos_type, port=form.port, ip=form.ip, database=form.database
    )
    if not base_url:
        if form.pos_type == PosType.MPLUSKASSA:
            errors["port"] = "Port is required"
        else:
            errors["base_url"] = "IP address, port and database are required"

    if errors:
        raise ValidationError(next(iter(errors.values())), errors=errors)

    return PosConfig(
        pos_type=form.pos_type,
        username=form.username.strip(),
        password=form.password,
        base_url=base_url,
        environment=form.environment,
        is_active=form.is_active,
    )


def config_to_form(config: PosConfig) -> dict[str, Any]:
    """Form values for a stored config, with the provider fields recovered from its URL."""
    values = config.model_dump(exclude={"password"})
    values.update(parse_base_url(config.pos_type, config.base_url))
    return values


class PosService:
    def __init__(self, pos: PosGateway):
        self._pos = pos

    async def load(self, restaurant_id: int) -> dict[str, Any] | None:
        config = await self._pos.get_config(restaurant_id)
        if config is None:
            return None
        return config_to_form(config)

    async def test(self, restaurant_id: int, form: PosForm) -> PosTestResult:
        config = form_to_config(form)
        result = await self._pos.test_connection(restaurant_id, config)
        logger.info(
            "POS connection tested",
            restaurant_id=restaurant_id,
            pos_type=config.pos_type,
            success=result.success,
        )
        return result

    async def save(self, restaurant_id: int, form: PosForm) -> dict[str, Any] | None:
        config = form_to_config(form)
        await self._pos.save(restaurant_id, config)
        logger.info("POS configuration saved", restaurant_id=restaurant_id, pos_type=config.pos_type)
        return await self.load(restaurant_id)

    async def overview(
        self,
        *,
        search: str | None = None,
        pos_type: str | None = None,
        limit: int = Limits.DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> dict[str, Any]:
        """POS connections across all restaurants."""
        if pos_type in ("", "all"):
            pos_type = None
        if pos_type is not None and pos_type not in PosType.ALL:
            raise ValidationError(f"Unknown POS type: {pos_type}", field="pos_type")
        return await self._pos.list_connections(
            search=sanitize_search_term(search or "") or None,
            pos_type=pos_type,
            limit=max(1, min(limit, Limits.MAX_PAGE_SIZE)),
            offset=max(0, offset),
        )
