"""
In-process ledger for local development.
"""

from typing import List, Tuple

from ...core.enums import AppendStatus
from ...core.models.booking import BookingRecord, SlotKey
from .base import Ledger


class MemoryLedger(Ledger):
    """Keeps records in a list; lost on restart."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._records: List[BookingRecord] = []

    async def append_if_absent(self, slot_key: SlotKey, record: BookingRecord) -> AppendStatus:
        for existing in self._records:
            if slot_key.matches(existing.date, existing.time, existing.technician):
                return AppendStatus.CONFLICT
        self._records.append(record)
        return AppendStatus.ACCEPTED

    async def query_by_date(self, date: str) -> List[Tuple[SlotKey, BookingRecord]]:
        return [(r.slot_key(self.scope), r) for r in self._records if r.date == date]

    def __len__(self) -> int:
        return len(self._records)
