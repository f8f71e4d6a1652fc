"""
Service layer for the salon booking system.
"""

from .booking import BookingService, SlotReservationGuard
from .catalog import SheetsCatalog
from .external import LineMessagingService, SheetsClient
from .ledger import Ledger, SheetsLedger, SQLiteLedger, MemoryLedger

__all__ = [
    "BookingService",
    "SlotReservationGuard",
    "SheetsCatalog",
    "LineMessagingService",
    "SheetsClient",
    "Ledger",
    "SheetsLedger",
    "SQLiteLedger",
    "MemoryLedger",
]
