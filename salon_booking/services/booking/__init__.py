"""
Booking service module.
"""

from .guard import SlotReservationGuard
from .service import BookingService

__all__ = [
    "SlotReservationGuard",
    "BookingService",
]
