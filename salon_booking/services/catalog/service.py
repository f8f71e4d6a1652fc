"""
Catalog backed by the Technicians and Services sheets.
"""

from typing import Dict, List, Optional, Tuple

from ...core.exceptions import CatalogError, SheetsAPIError
from ...core.models.catalog import ServiceCatalog, Technician
from ...utils.logging import get_logger
from ..external.sheets import SheetsClient

logger = get_logger("catalog")


class SheetsCatalog:
    """Read-only lookup of technicians, services and prices."""

    def __init__(self, client: SheetsClient, technician_sheet: str, service_sheet: str):
        self.client = client
        self.technician_sheet = technician_sheet
        self.service_sheet = service_sheet

    async def _rows(self, range_: str) -> List[List[str]]:
        try:
            rows = await self.client.get_values(range_)
        except SheetsAPIError as e:
            raise CatalogError(f"Catalog read failed: {e}") from e
        # First row is the header
        return rows[1:]

    async def list_technicians(self) -> List[Technician]:
        """Technicians sheet: A = name, B = LINE user id."""
        technicians = []
        for row in await self._rows(f"{self.technician_sheet}!A:B"):
            name = str(row[0]).strip() if row else ""
            if not name:
                continue
            channel = str(row[1]).strip() if len(row) > 1 and row[1] else None
            technicians.append(Technician(name=name, notify_channel_id=channel or None))
        return technicians

    async def find_technician(self, name: str) -> Optional[Technician]:
        for technician in await self.list_technicians():
            if technician.name == name:
                return technician
        return None

    async def list_services(self) -> ServiceCatalog:
        """Services sheet: A = main service, B = sub service, C = price."""
        main_services: List[str] = []
        sub_services: List[str] = []
        prices: Dict[Tuple[str, str], int] = {}

        for row in await self._rows(f"{self.service_sheet}!A:C"):
            main = str(row[0]).strip() if len(row) > 0 and row[0] else ""
            sub = str(row[1]).strip() if len(row) > 1 and row[1] else ""

            if main and main not in main_services:
                main_services.append(main)
            if sub and sub not in sub_services:
                sub_services.append(sub)

            raw_price = str(row[2]).replace(",", "").strip() if len(row) > 2 else ""
            try:
                price = int(float(raw_price))
            except (ValueError, OverflowError):
                if main:
                    logger.warning(f"Skipping price for {main}-{sub}: {raw_price!r}")
                continue
            prices[(main, sub)] = price

        return ServiceCatalog(
            main_services=main_services,
            sub_services=sub_services,
            prices=prices,
        )
