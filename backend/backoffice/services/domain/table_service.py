"""
Table Service.

Sections and tables of a restaurant, plus QR codes for table links.

Usage:
    service = TableService(tables)
    sections = await service.create_tables(restaurant_id, section_id, TableBatchCreate(table_numbers="1, 2, 5"))
    png = await service.qr_png(restaurant_id, table_id)
"""

from __future__ import annotations

from backoffice.gateway.tables import TableGateway
from backoffice.services.qr import render_qr_png
from shared.config.logging import get_logger
from shared.utils.admin_schemas import (
    SectionCreate,
    SectionOutput,
    SectionUpdate,
    TableBatchCreate,
    TableOutput,
)
from shared.utils.exceptions import NotFoundError, ValidationError
from shared.utils.validators import parse_table_numbers

logger = get_logger(__name__)


class TableService:
    """
    Service for sections and tables.

    Business rules:
    - Mutations return the refreshed section list
    - Batch creation accepts a list or a comma-separated string; invalid
      entries are ignored, duplicates collapse, an empty result is rejected
    - Table numbers already present in the section are not sent again
    """

    def __init__(self, tables: TableGateway):
        self._tables = tables

    async def list_sections(self, restaurant_id: int) -> list[SectionOutput]:
        return await self._tables.list_sections(restaurant_id)

    async def _section(self, restaurant_id: int, section_id: int) -> SectionOutput:
        for section in await self._tables.list_sections(restaurant_id):
            if section.id == section_id:
                return section
        raise NotFoundError("Section", section_id, restaurant_id=restaurant_id)

    # =========================================================================
    # Sections
    # =========================================================================

    async def create_section(self, restaurant_id: int, body: SectionCreate) -> list[SectionOutput]:
        name = body.name.strip()
        if not name:
            raise ValidationError("Section name is required", field="name")
        await self._tables.create_section(restaurant_id, {"name": name, "design": body.design})
        logger.info("Section created", restaurant_id=restaurant_id, name=name)
        return await self.list_sections(restaurant_id)

    async def update_section(self, restaurant_id: int, section_id: int, body: SectionUpdate) -> list[SectionOutput]:
        changes = body.model_dump(exclude_none=True)
        if not changes:
            raise ValidationError("Nothing to update")
        await self._tables.update_section(restaurant_id, section_id, changes)
        return await self.list_sections(restaurant_id)

    async def delete_section(self, restaurant_id: int, section_id: int) -> list[SectionOutput]:
        await self._tables.delete_section(restaurant_id, section_id)
        logger.info("Section deleted", restaurant_id=restaurant_id, section_id=section_id)
        return await self.list_sections(restaurant_id)

    # =========================================================================
    # Tables
    # =========================================================================

    async def create_table(self, restaurant_id: int, section_id: int, table_number: int) -> list[SectionOutput]:
        if table_number <= 0:
            raise ValidationError("Table number must be a positive number", field="table_number")
        await self._tables.create_table(restaurant_id, section_id, table_number)
        return await self.list_sections(restaurant_id)

    async def create_tables(self, restaurant_id: int, section_id: int, body: TableBatchCreate) -> list[SectionOutput]:
        raw = body.table_numbers
        numbers = raw if isinstance(raw, list) else parse_table_numbers(raw)
        numbers = sorted(set(numbers))
        if not numbers:
            raise ValidationError("Specify at least one table number", field="table_numbers")

        section = await self._section(restaurant_id, section_id)
        existing = {t.table_number for t in section.tables}
        new_numbers = [n for n in numbers if n not in existing]
        if not new_numbers:
            raise ValidationError("All of these tables already exist in this section", field="table_numbers")

        await self._tables.create_tables_batch(restaurant_id, section_id, new_numbers)
        logger.info(
            "Tables created",
            restaurant_id=restaurant_id,
            section_id=section_id,
            count=len(new_numbers),
        )
        return await self.list_sections(restaurant_id)

    async def toggle_table(self, restaurant_id: int, table_id: int) -> list[SectionOutput]:
        await self._tables.toggle_table(restaurant_id, table_id)
        return await self.list_sections(restaurant_id)

    async def delete_table(self, restaurant_id: int, table_id: int) -> list[SectionOutput]:
        await self._tables.delete_table(restaurant_id, table_id)
        logger.info("Table deleted", restaurant_id=restaurant_id, table_id=table_id)
        return await self.list_sections(restaurant_id)

    # =========================================================================
    # QR
    # =========================================================================

    async def list_qr_tables(self, restaurant_id: int) -> list[TableOutput]:
        return await self._tables.list_qr_tables(restaurant_id)

    async def qr_png(self, restaurant_id: int, table_id: int) -> bytes:
        """PNG QR code of a table's link."""
        for table in await self._tables.list_qr_tables(restaurant_id):
            if table.id == table_id:
                if not table.table_link:
                    raise ValidationError("This table has no link yet", field="table_link")
                return render_qr_png(table.table_link)
        raise NotFoundError("Table", table_id, restaurant_id=restaurant_id)
