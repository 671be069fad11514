"""Section and table endpoints of the backend."""

from typing import Any

from backoffice.gateway.client import SUPER_ADMIN, BackofficeApiClient
from shared.utils.admin_schemas import SectionOutput, TableOutput


def _tables(data: Any) -> list[TableOutput]:
    if isinstance(data, dict):
        data = data.get("tables", [])
    return [TableOutput.model_validate(t) for t in data or []]


class TableGateway:
    def __init__(self, api: BackofficeApiClient):
        self.api = api

    def _base(self, restaurant_id: int) -> str:
        return f"{SUPER_ADMIN}/restaurants/{restaurant_id}"

    async def list_sections(self, restaurant_id: int) -> list[SectionOutput]:
        data = await self.api.get(f"{self._base(restaurant_id)}/sections")
        if isinstance(data, dict):
            data = data.get("sections", [])
        return [SectionOutput.model_validate(s) for s in data or []]

    async def create_section(self, restaurant_id: int, payload: dict[str, Any]) -> SectionOutput:
        data = await self.api.post(f"{self._base(restaurant_id)}/sections", json=payload)
        return SectionOutput.model_validate(data)

    async def update_section(self, restaurant_id: int, section_id: int, payload: dict[str, Any]) -> SectionOutput:
        data = await self.api.put(f"{self._base(restaurant_id)}/sections/{section_id}", json=payload)
        return SectionOutput.model_validate(data)

    async def delete_section(self, restaurant_id: int, section_id: int) -> Any:
        return await self.api.delete(f"{self._base(restaurant_id)}/sections/{section_id}")

    async def create_table(self, restaurant_id: int, section_id: int, table_number: int) -> TableOutput:
        data = await self.api.post(
            f"{self._base(restaurant_id)}/sections/{section_id}/tables",
            json={"table_number": table_number},
        )
        return TableOutput.model_validate(data)

    async def create_tables_batch(self, restaurant_id: int, section_id: int, table_numbers: list[int]) -> list[TableOutput]:
        data = await self.api.post(
            f"{self._base(restaurant_id)}/sections/{section_id}/tables/batch",
            json={"table_numbers": table_numbers},
        )
        return _tables(data)

    async def delete_table(self, restaurant_id: int, table_id: int) -> Any:
        return await self.api.delete(f"{self._base(restaurant_id)}/tables/{table_id}")

    async def toggle_table(self, restaurant_id: int, table_id: int) -> Any:
        return await self.api.patch(f"{self._base(restaurant_id)}/tables/{table_id}/toggle")

    async def list_qr_tables(self, restaurant_id: int) -> list[TableOutput]:
        data = await self.api.get(f"{self._base(restaurant_id)}/tables/qr/all")
        return _tables(data)
