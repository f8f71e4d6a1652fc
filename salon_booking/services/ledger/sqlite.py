"""SQLite-backed booking ledger.

Uniqueness is enforced by the table itself: ``UNIQUE(date, time,
technician_key)``. A second insert for the same slot fails with
``IntegrityError`` and is reported as a conflict, even when several
processes share the database file. Blocking sqlite calls run in
``asyncio.to_thread``.
"""

import asyncio
import sqlite3
from typing import List, Tuple

from ...core.enums import AppendStatus, SlotScope
from ...core.exceptions import LedgerError
from ...core.models.booking import BookingRecord, SlotKey
from ...utils.logging import get_logger
from .base import Ledger

logger = get_logger("ledger.sqlite")


class SQLiteLedger(Ledger):
    """Booking ledger stored in a local SQLite file."""

    def __init__(self, db_path: str, scope: SlotScope = SlotScope.SALON):
        super().__init__(scope)
        self.db_path = db_path
        self._lock = asyncio.Lock()
        self._ready = False

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path, timeout=5.0)

    async def _ensure_table(self) -> None:
        """Ensure the bookings table exists."""
        if self._ready:
            return

        def _create_table():
            conn = self._connect()
            try:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS bookings (
                        booking_ref TEXT PRIMARY KEY,
                        date TEXT NOT NULL,
                        time TEXT NOT NULL,
                        technician_key TEXT NOT NULL,
                        payload TEXT NOT NULL,
                        accepted_at TEXT NOT NULL,
                        UNIQUE (date, time, technician_key)
                    )
                    """
                )
                conn.commit()
            finally:
                conn.close()

        try:
            await asyncio.to_thread(_create_table)
        except sqlite3.Error as e:
            raise LedgerError(f"Cannot initialise ledger at {self.db_path}: {e}") from e
        self._ready = True

    async def append_if_absent(self, slot_key: SlotKey, record: BookingRecord) -> AppendStatus:
        await self._ensure_table()
        payload = record.model_dump_json()

        async with self._lock:
            def _insert() -> bool:
                conn = self._connect()
                try:
                    conn.execute(
                        "INSERT INTO bookings (booking_ref, date, time, technician_key, payload, accepted_at) "
                        "VALUES (?, ?, ?, ?, ?, ?)",
                        (
                            record.booking_ref,
                            slot_key.date,
                            slot_key.time,
                            slot_key.technician or "",
                            payload,
                            record.accepted_at,
                        ),
                    )
                    conn.commit()
                    return True
                except sqlite3.IntegrityError:
                    conn.rollback()
                    return False
                finally:
                    conn.close()

            try:
                inserted = await asyncio.to_thread(_insert)
            except sqlite3.Error as e:
                logger.error(f"insert failed for {slot_key}: {e}")
                raise LedgerError(f"Ledger write failed: {e}") from e

        return AppendStatus.ACCEPTED if inserted else AppendStatus.CONFLICT

    async def query_by_date(self, date: str) -> List[Tuple[SlotKey, BookingRecord]]:
        await self._ensure_table()

        def _fetch() -> List[str]:
            conn = self._connect()
            try:
                cur = conn.execute(
                    "SELECT payload FROM bookings WHERE date = ? ORDER BY rowid", (date,)
                )
                return [row[0] for row in cur.fetchall()]
            finally:
                conn.close()

        try:
            payloads = await asyncio.to_thread(_fetch)
        except sqlite3.Error as e:
            raise LedgerError(f"Ledger read failed: {e}") from e

        records = [BookingRecord.model_validate_json(p) for p in payloads]
        return [(r.slot_key(self.scope), r) for r in records]
