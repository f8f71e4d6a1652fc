"""
Date and time parsing utilities.
"""

import re
from datetime import datetime, timedelta, date as date_type
from typing import Optional
import pytz
from dateparser import parse as parse_date

from ..config import get_settings


# Relative day words understood before falling back to dateparser
RELATIVE_DAYS = {
    "วันนี้": 0,
    "today": 0,
    "พรุ่งนี้": 1,
    "tomorrow": 1,
    "มะรืน": 2,
    "มะรืนนี้": 2,
}

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class DateParser:
    """Date parsing utilities with Thai and English support."""

    def __init__(self, timezone: Optional[str] = None):
        self.tz = pytz.timezone(timezone or get_settings().timezone)

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def today(self) -> date_type:
        return self.now().date()

    def now_iso(self) -> str:
        """Current time as ISO-8601 with offset, e.g. 2025-04-01T10:00:00+07:00."""
        return self.now().isoformat(timespec="seconds")

    def parse_natural_date(self, text: str) -> Optional[str]:
        """
        Parse dates like '2025-04-01', 'พรุ่งนี้' or 'next Friday'.

        Args:
            text: Date string from a chat message

        Returns:
            Date in YYYY-MM-DD format or None if parsing fails
        """
        if not text:
            return None

        text = text.strip()
        if ISO_DATE_RE.match(text):
            try:
                return datetime.strptime(text, "%Y-%m-%d").strftime("%Y-%m-%d")
            except ValueError:
                return None

        offset = RELATIVE_DAYS.get(text.lower())
        if offset is not None:
            return (self.today() + timedelta(days=offset)).strftime("%Y-%m-%d")

        parsed = parse_date(
            text,
            languages=["th", "en"],
            settings={
                "PREFER_DATES_FROM": "future",
                "TIMEZONE": str(self.tz),
                "RETURN_AS_TIMEZONE_AWARE": False,
            },
        )
        if not parsed:
            return None

        return parsed.strftime("%Y-%m-%d")
