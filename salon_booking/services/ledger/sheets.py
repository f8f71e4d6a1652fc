"""
Google Sheets booking ledger.

One booking per row in the booking sheet:

    A timestamp | B date | C time | D mainService | E subService |
    F technician | G price | H customerName | I lineUserId |
    J phoneNumber | K notes | L acceptedAt | M bookingRef

Row 1 is a header. Sheets has no conditional append, so the read-check-append
in ``append_if_absent`` is only atomic while the caller holds the per-slot
lock (SlotReservationGuard does).
"""

from typing import Any, List, Optional, Tuple

from ...core.enums import AppendStatus, SlotScope
from ...core.exceptions import LedgerError, SheetsAPIError
from ...core.models.booking import BookingRecord, SlotKey
from ...utils.logging import get_logger
from ...utils.validation import ValidationUtils
from ..external.sheets import SheetsClient
from .base import Ledger

logger = get_logger("ledger.sheets")


def _cell(row: List[Any], index: int) -> Optional[str]:
    if index >= len(row):
        return None
    value = row[index]
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _parse_price(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value.replace(",", ""))
    except ValueError:
        return None


def record_to_row(record: BookingRecord) -> List[Any]:
    """Serialize a record to the sheet's column order."""
    return [
        record.submitted_at or record.accepted_at,
        record.date,
        record.time,
        record.main_service or "",
        record.sub_service or "",
        record.technician or "",
        record.price_label() if record.price is not None else "",
        record.customer_name or "",
        record.customer_channel_id or "",
        record.contact_phone or "",
        record.notes or "",
        record.accepted_at,
        record.booking_ref,
    ]


def row_to_record(row: List[Any]) -> Optional[BookingRecord]:
    """Parse a sheet row; rows without a date or time are skipped."""
    date = _cell(row, 1)
    raw_time = _cell(row, 2)
    if not date or not raw_time:
        return None

    # Rows typed in by hand may use 9:00 instead of 09:00
    ok, _, time = ValidationUtils.validate_time(raw_time)
    if not ok:
        time = raw_time

    timestamp = _cell(row, 0)
    return BookingRecord(
        booking_ref=_cell(row, 12) or "",
        date=date,
        time=time,
        main_service=_cell(row, 3),
        sub_service=_cell(row, 4),
        technician=_cell(row, 5),
        price=_parse_price(_cell(row, 6)),
        customer_name=_cell(row, 7),
        customer_channel_id=_cell(row, 8),
        contact_phone=_cell(row, 9),
        notes=_cell(row, 10),
        submitted_at=timestamp,
        accepted_at=_cell(row, 11) or timestamp or "",
    )


class SheetsLedger(Ledger):
    """Booking ledger stored in a Google Sheets tab."""

    def __init__(self, client: SheetsClient, sheet_name: str, scope: SlotScope = SlotScope.SALON):
        super().__init__(scope)
        self.client = client
        self.sheet_name = sheet_name

    @property
    def range(self) -> str:
        return f"{self.sheet_name}!A:M"

    async def _read_records(self) -> List[BookingRecord]:
        try:
            rows = await self.client.get_values(self.range)
        except SheetsAPIError as e:
            raise LedgerError(f"Ledger read failed: {e}") from e

        records = []
        for row in rows[1:]:
            record = row_to_record(row)
            if record is not None:
                records.append(record)
        return records

    async def append_if_absent(self, slot_key: SlotKey, record: BookingRecord) -> AppendStatus:
        for existing in await self._read_records():
            if slot_key.matches(existing.date, existing.time, existing.technician):
                logger.info(f"slot {slot_key} already held by row {existing.booking_ref or '<manual>'}")
                return AppendStatus.CONFLICT

        try:
            await self.client.append_values(self.range, [record_to_row(record)])
        except SheetsAPIError as e:
            raise LedgerError(f"Ledger write failed: {e}") from e

        return AppendStatus.ACCEPTED

    async def query_by_date(self, date: str) -> List[Tuple[SlotKey, BookingRecord]]:
        return [
            (r.slot_key(self.scope), r)
            for r in await self._read_records()
            if r.date == date
        ]
