"""
Core data models for the salon booking system.
"""

from .booking import BookingRequest, BookingRecord, SlotKey, ReservationResult
from .catalog import Technician, ServiceCatalog
from .line import LineEvent

__all__ = [
    "BookingRequest",
    "BookingRecord",
    "SlotKey",
    "ReservationResult",
    "Technician",
    "ServiceCatalog",
    "LineEvent",
]
