"""
Booking ledger backends.
"""

from .base import Ledger
from .sheets import SheetsLedger
from .sqlite import SQLiteLedger
from .memory import MemoryLedger

__all__ = [
    "Ledger",
    "SheetsLedger",
    "SQLiteLedger",
    "MemoryLedger",
]
