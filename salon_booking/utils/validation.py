"""
Validation utilities for booking input.
"""

import re
from datetime import datetime
from typing import List, Optional, Tuple

from ..core.enums import SlotScope
from ..core.models.booking import BookingRequest


TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


class ValidationUtils:
    """Validation utilities for booking requests."""

    @staticmethod
    def validate_date(value: Optional[str]) -> Tuple[bool, Optional[str], Optional[str]]:
        """
        Validate a calendar date.

        Args:
            value: Date string, expected YYYY-MM-DD

        Returns:
            Tuple of (is_valid, error_message, normalized_date)
        """
        if not value:
            return False, "date is required", None

        try:
            parsed = datetime.strptime(value.strip(), "%Y-%m-%d")
        except ValueError:
            return False, f"date must be YYYY-MM-DD, got {value!r}", None

        return True, None, parsed.strftime("%Y-%m-%d")

    @staticmethod
    def validate_time(value: Optional[str]) -> Tuple[bool, Optional[str], Optional[str]]:
        """
        Validate a time-of-day slot.

        Args:
            value: Time string, H:MM or HH:MM (24h)

        Returns:
            Tuple of (is_valid, error_message, normalized_time)
        """
        if not value:
            return False, "time is required", None

        m = TIME_RE.match(value.strip())
        if not m:
            return False, f"time must be HH:MM, got {value!r}", None

        hour, minute = int(m.group(1)), int(m.group(2))
        if hour > 23 or minute > 59:
            return False, f"time out of range: {value!r}", None

        return True, None, f"{hour:02d}:{minute:02d}"

    @staticmethod
    def validate_booking_request(
        request: BookingRequest, scope: SlotScope
    ) -> Tuple[List[str], Optional[str], Optional[str]]:
        """
        Validate the slot fields of a booking request.

        Returns:
            Tuple of (errors, normalized_date, normalized_time)
        """
        errors = []

        ok, err, date = ValidationUtils.validate_date(request.date)
        if not ok:
            errors.append(err)

        ok, err, time = ValidationUtils.validate_time(request.time)
        if not ok:
            errors.append(err)

        if scope == SlotScope.TECHNICIAN and not request.technician:
            errors.append("technician is required")

        return errors, date, time
