"""
Slot reservation guard.

Admits or rejects booking requests so that no two accepted bookings hold the
same SlotKey. The check against the ledger and the append happen inside a
per-SlotKey critical section; two concurrent requests for one slot are
serialized and the second sees the first's row.

Lifecycle of one attempt:

    Received -> Validated -> (Conflict | Reserved) -> [Notified | NotificationFailed]

Only ledger failures raise (LedgerError / LedgerTimeoutError). Invalid input,
conflicts and notification failures are returned as ReservationResult.
"""

import asyncio
from typing import List, Optional, Protocol

from ...core.enums import AppendStatus, ReservationOutcome, SlotScope
from ...core.exceptions import BookingValidationError, ExternalAPIError, LedgerTimeoutError
from ...core.models.booking import BookingRecord, BookingRequest, ReservationResult, SlotKey
from ...core.models.catalog import Technician
from ...utils.date import DateParser
from ...utils.locks import KeyedLock
from ...utils.logging import get_logger
from ...utils.validation import ValidationUtils
from ..ledger.base import Ledger
from ..notifier.templates import format_customer_confirmation, format_technician_alert

logger = get_logger("guard")


class Notifier(Protocol):
    async def send(self, channel_id: str, text: str) -> bool:
        ...


class SlotReservationGuard:
    """Serializes reservations per slot and notifies after durable acceptance."""

    def __init__(
        self,
        ledger: Ledger,
        notifier: Notifier,
        *,
        scope: SlotScope = SlotScope.SALON,
        ledger_timeout: float = 10.0,
        notifier_timeout: float = 10.0,
        timezone: Optional[str] = None,
    ):
        self.ledger = ledger
        self.notifier = notifier
        self.scope = scope
        self.ledger_timeout = ledger_timeout
        self.notifier_timeout = notifier_timeout
        self.clock = DateParser(timezone)
        self._locks = KeyedLock()

    def slot_key_for(self, request: BookingRequest) -> SlotKey:
        """
        Validate the slot fields of ``request`` and derive its SlotKey.

        Raises:
            BookingValidationError: date/time missing or malformed
        """
        errors, date, time = ValidationUtils.validate_booking_request(request, self.scope)
        if errors:
            raise BookingValidationError("; ".join(errors))
        return SlotKey.build(date, time, request.technician, self.scope)

    async def _ledger_call(self, coro, description: str):
        try:
            return await asyncio.wait_for(coro, timeout=self.ledger_timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"ledger {description} timed out after {self.ledger_timeout}s")
            raise LedgerTimeoutError(f"Ledger {description} timed out") from e

    async def _append_holding_lock(self, slot_key: SlotKey, record: BookingRecord) -> AppendStatus:
        """
        Run the conditional append; the caller holds the slot lock.

        A write that outlives ``ledger_timeout`` may still land (Sheets calls
        run in worker threads that cannot be cancelled), so the lock stays
        held until it settles and only then is the timeout reported.
        """
        task = asyncio.ensure_future(self.ledger.append_if_absent(slot_key, record))
        done, _ = await asyncio.wait({task}, timeout=self.ledger_timeout)
        if task in done:
            return task.result()

        logger.error(f"ledger append timed out after {self.ledger_timeout}s; waiting for {slot_key}")
        await asyncio.wait({task})
        late = "failed" if task.exception() is not None else task.result().value
        logger.error({"event": "ledger_late_append", "slot": str(slot_key), "result": late})
        raise LedgerTimeoutError("Ledger append timed out")

    async def reserve(
        self, request: BookingRequest, technician: Optional[Technician] = None
    ) -> ReservationResult:
        """
        Reserve the request's slot.

        Args:
            request: Booking submission
            technician: Catalog entry of the booked technician, used for the alert

        Returns:
            ReservationResult with one of the four terminal outcomes

        Raises:
            LedgerError: the ledger failed; nothing is known to be reserved
        """
        try:
            slot_key = self.slot_key_for(request)
        except BookingValidationError as e:
            logger.info({"event": "booking_invalid", "reason": str(e)})
            return ReservationResult.invalid(str(e))

        async with self._locks.hold(slot_key):
            record = BookingRecord.from_request(request, slot_key, self.clock.now_iso())
            status = await self._append_holding_lock(slot_key, record)

        if status == AppendStatus.CONFLICT:
            logger.warning({"event": "booking_conflict", "slot": str(slot_key)})
            return ReservationResult.conflict(slot_key)

        logger.info({"event": "booking_accepted", "slot": str(slot_key), "ref": record.booking_ref})

        failed = await self._notify(record, technician)
        if failed:
            return ReservationResult(
                outcome=ReservationOutcome.ACCEPTED_NOTIFICATION_FAILED,
                record=record,
                reason="Booking saved but some notifications were not delivered",
                failed_recipients=failed,
            )
        return ReservationResult(outcome=ReservationOutcome.ACCEPTED_NOTIFIED, record=record)

    async def _notify(self, record: BookingRecord, technician: Optional[Technician]) -> List[str]:
        """Send the confirmation and alert; return the recipients that failed."""
        messages = []
        if record.customer_channel_id:
            messages.append((record.customer_channel_id, format_customer_confirmation(record)))

        if technician and technician.notify_channel_id:
            messages.append((technician.notify_channel_id, format_technician_alert(record)))
        elif record.technician:
            logger.warning(f"No LINE user id for technician {record.technician}; alert not sent")

        results = await asyncio.gather(*(self._send(to, text) for to, text in messages))
        return [to for (to, _), ok in zip(messages, results) if not ok]

    async def _send(self, channel_id: str, text: str) -> bool:
        try:
            ok = await asyncio.wait_for(
                self.notifier.send(channel_id, text), timeout=self.notifier_timeout
            )
        except asyncio.TimeoutError:
            logger.error(f"notification to {channel_id} timed out")
            return False
        except ExternalAPIError:
            logger.exception(f"notification to {channel_id} failed")
            return False

        if not ok:
            logger.error(f"notification to {channel_id} was not delivered")
        return bool(ok)

    async def list_booked_slots(self, date: str) -> List[str]:
        """Booked time strings on ``date`` as currently stored in the ledger."""
        rows = await self._ledger_call(self.ledger.query_by_date(date), "query")
        return [record.time for _, record in rows]
