"""
Ledger contract.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple

from ...core.enums import AppendStatus, SlotScope
from ...core.models.booking import BookingRecord, SlotKey


class Ledger(ABC):
    """
    Durable store of accepted bookings.

    ``append_if_absent`` must not admit a second record for a SlotKey that is
    already held. Backends without a native conditional write rely on the
    caller serializing calls per SlotKey.
    """

    def __init__(self, scope: SlotScope = SlotScope.SALON):
        self.scope = scope

    @abstractmethod
    async def append_if_absent(self, slot_key: SlotKey, record: BookingRecord) -> AppendStatus:
        """
        Persist ``record`` unless ``slot_key`` is already held.

        Raises:
            LedgerError: the store could not be read or written
        """

    @abstractmethod
    async def query_by_date(self, date: str) -> List[Tuple[SlotKey, BookingRecord]]:
        """All records booked on ``date``, in insertion order."""
