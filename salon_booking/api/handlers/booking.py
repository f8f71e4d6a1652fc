"""
Booking REST API used by the LIFF mini-app.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ...core.enums import ReservationOutcome
from ...core.models.booking import BookingRequest, ReservationResult
from ...services.booking import BookingService
from ...utils.logging import get_logger

logger = get_logger("api.booking")

MSG_DATE_REQUIRED = "โปรดระบุวันที่ที่ต้องการตรวจสอบ"
MSG_SLOT_TAKEN = "ช่วงเวลาที่คุณเลือกมีผู้จองแล้ว"
MSG_CONFIRMED = "Booking confirmed successfully."
MSG_CONFIRMED_NOT_NOTIFIED = (
    "Booking confirmed successfully, but the LINE confirmation could not be delivered."
)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


class BookingHandler:
    """Handler for /api endpoints."""

    def __init__(self, booking: BookingService):
        self.booking = booking
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):
        """Setup booking API routes."""

        @self.router.get("/technicians")
        async def list_technicians():
            """Technician names for the mini-app dropdown."""
            technicians = await self.booking.technicians()
            return [t.name for t in technicians]

        @self.router.get("/services")
        async def list_services():
            """Main services, sub services and the price table."""
            catalog = await self.booking.services()
            return catalog.to_api()

        @self.router.get("/availability")
        async def availability(date: Optional[str] = None):
            """Time slots already booked on ``date``."""
            if not date or not date.strip():
                return error_response(status.HTTP_400_BAD_REQUEST, MSG_DATE_REQUIRED)
            return await self.booking.available_slots(date.strip())

        @self.router.post("/booking")
        async def create_booking(request: Request):
            """Reserve a slot from the LIFF booking form."""
            try:
                body = await request.json()
            except ValueError:
                return error_response(status.HTTP_400_BAD_REQUEST, "Request body must be JSON")

            if not isinstance(body, dict):
                return error_response(status.HTTP_400_BAD_REQUEST, "Request body must be an object")

            logger.info({"event": "booking_received", "date": body.get("date"), "time": body.get("time")})

            try:
                booking_request = BookingRequest.model_validate(body)
            except ValidationError as e:
                return error_response(status.HTTP_400_BAD_REQUEST, f"Invalid booking: {e.errors()[0]['msg']}")

            result = await self.booking.submit(booking_request)
            return self._booking_response(result)

    @staticmethod
    def _booking_response(result: ReservationResult) -> JSONResponse:
        if result.outcome == ReservationOutcome.REJECTED_INVALID:
            return error_response(status.HTTP_400_BAD_REQUEST, result.reason or "Invalid booking")

        if result.outcome == ReservationOutcome.REJECTED_CONFLICT:
            return error_response(status.HTTP_409_CONFLICT, MSG_SLOT_TAKEN)

        notified = result.outcome == ReservationOutcome.ACCEPTED_NOTIFIED
        content: Dict[str, Any] = {
            "success": True,
            "message": MSG_CONFIRMED if notified else MSG_CONFIRMED_NOT_NOTIFIED,
            "bookingRef": result.record.booking_ref,
            "notified": notified,
        }
        return JSONResponse(status_code=status.HTTP_200_OK, content=content)
