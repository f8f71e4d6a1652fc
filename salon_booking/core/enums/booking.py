"""
Booking-related enums.
"""

from enum import Enum


class ReservationOutcome(str, Enum):
    """Terminal outcome of a single reservation attempt."""

    REJECTED_INVALID = "rejected_invalid"
    REJECTED_CONFLICT = "rejected_conflict"
    ACCEPTED_NOTIFIED = "accepted_notified"
    ACCEPTED_NOTIFICATION_FAILED = "accepted_notification_failed"

    @property
    def accepted(self) -> bool:
        return self in (
            ReservationOutcome.ACCEPTED_NOTIFIED,
            ReservationOutcome.ACCEPTED_NOTIFICATION_FAILED,
        )


class AppendStatus(str, Enum):
    """Result of a conditional ledger append."""

    ACCEPTED = "accepted"
    CONFLICT = "conflict"


class SlotScope(str, Enum):
    """What makes a slot unique."""

    # One queue for the whole salon: (date, time)
    SALON = "salon"
    # One queue per chair: (date, time, technician)
    TECHNICIAN = "technician"


class LedgerBackend(str, Enum):
    """Storage backends for the booking ledger."""

    SHEETS = "sheets"
    SQLITE = "sqlite"
    MEMORY = "memory"
