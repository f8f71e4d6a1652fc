"""
Booking service: catalog enrichment in front of the reservation guard.
"""

import asyncio
from typing import List, Optional

from ...core.exceptions import BookingValidationError, CatalogError
from ...core.models.booking import BookingRequest, ReservationResult
from ...core.models.catalog import ServiceCatalog, Technician
from ...utils.logging import get_logger
from ..catalog import SheetsCatalog
from .guard import SlotReservationGuard

logger = get_logger("booking")


class BookingService:
    """Service for handling appointment bookings."""

    def __init__(self, guard: SlotReservationGuard, catalog: SheetsCatalog, catalog_timeout: float = 10.0):
        self.guard = guard
        self.catalog = catalog
        self.catalog_timeout = catalog_timeout

    async def _catalog_call(self, coro, description: str):
        try:
            return await asyncio.wait_for(coro, timeout=self.catalog_timeout)
        except asyncio.TimeoutError as e:
            raise CatalogError(f"Catalog {description} timed out") from e

    async def technicians(self) -> List[Technician]:
        return await self._catalog_call(self.catalog.list_technicians(), "technicians")

    async def services(self) -> ServiceCatalog:
        return await self._catalog_call(self.catalog.list_services(), "services")

    async def available_slots(self, date: str) -> List[str]:
        """Booked time slots on ``date``; the client greys these out."""
        slots = await self.guard.list_booked_slots(date)
        logger.info(f"Checking slots on {date}: Found {len(slots)} bookings.")
        return slots

    async def _resolve_price(self, request: BookingRequest) -> BookingRequest:
        """Replace the client price with the catalog price for the chosen service."""
        if not request.main_service:
            if request.price is not None:
                logger.warning(f"Dropping client price {request.price}: no service selected")
            return request.model_copy(update={"price": None})

        catalog = await self.services()
        price = catalog.price_for(request.main_service, request.sub_service)
        if price is None:
            raise BookingValidationError(
                f"unknown service: {request.main_service} {request.sub_service or ''}".strip()
            )

        if request.price is not None and float(request.price) != float(price):
            logger.warning(
                f"Client price {request.price} differs from catalog price {price} "
                f"for {request.main_service}-{request.sub_service or ''}; using catalog"
            )
        return request.model_copy(update={"price": float(price)})

    async def _resolve_technician(self, request: BookingRequest) -> Optional[Technician]:
        if not request.technician:
            return None

        technician = await self._catalog_call(
            self.catalog.find_technician(request.technician), "technician lookup"
        )
        if technician is None:
            raise BookingValidationError(f"unknown technician: {request.technician}")
        return technician

    async def submit(self, request: BookingRequest) -> ReservationResult:
        """
        Validate, enrich from the catalog and reserve a booking.

        Raises:
            CatalogError: catalog unavailable
            LedgerError: ledger unavailable
        """
        try:
            self.guard.slot_key_for(request)
            request = await self._resolve_price(request)
            technician = await self._resolve_technician(request)
        except BookingValidationError as e:
            logger.info({"event": "booking_invalid", "reason": str(e)})
            return ReservationResult.invalid(str(e))

        return await self.guard.reserve(request, technician)
