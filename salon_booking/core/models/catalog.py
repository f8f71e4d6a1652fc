"""
Catalog models: technicians, services and prices.
"""

from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


class Technician(BaseModel):
    """Technician (chair) with an optional LINE user id for alerts."""

    model_config = ConfigDict(extra="forbid")

    name: str
    notify_channel_id: Optional[str] = None


class ServiceCatalog(BaseModel):
    """Main services, sub services and the price table."""

    model_config = ConfigDict(extra="forbid")

    main_services: List[str] = Field(default_factory=list)
    sub_services: List[str] = Field(default_factory=list)
    prices: Dict[Tuple[str, str], int] = Field(default_factory=dict)

    def price_for(self, main: Optional[str], sub: Optional[str]) -> Optional[int]:
        """Look up the price of a (main, sub) combination; sub may be empty."""
        return self.prices.get((main or "", sub or ""))

    def to_api(self) -> Dict:
        """Projection served by GET /api/services."""
        return {
            "mainServices": list(self.main_services),
            "subServices": list(self.sub_services),
            "prices": {f"{main}-{sub}": price for (main, sub), price in self.prices.items()},
        }

    def format_price_list(self) -> str:
        """Price list for chat replies."""
        if not self.prices:
            return "ยังไม่มีรายการบริการ"

        lines = []
        for (main, sub), price in self.prices.items():
            title = f"{main} + {sub}" if sub else main
            lines.append(f"• {title} - {price} บาท")
        return "\n".join(lines)
