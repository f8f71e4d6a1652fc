"""
Enums for the salon booking system.
"""

from .booking import ReservationOutcome, AppendStatus, SlotScope, LedgerBackend

__all__ = [
    "ReservationOutcome",
    "AppendStatus",
    "SlotScope",
    "LedgerBackend",
]
