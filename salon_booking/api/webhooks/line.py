"""
LINE webhook handler.
"""

import json
from collections import OrderedDict
from typing import Optional

from fastapi import APIRouter, Request, Response, status

from ...config import Settings
from ...core.exceptions import CatalogError, LedgerError, LineAPIError
from ...core.models.line import LineEvent
from ...services.booking import BookingService
from ...services.external import LineMessagingService
from ...utils.date import DateParser
from ...utils.logging import get_logger
from ...utils.text import TextProcessor

logger = get_logger("webhook")

BOOK_COMMANDS = {"จองคิว", "จอง", "book", "booking"}
PRICE_COMMANDS = {"ราคา", "บริการ", "services", "price", "prices"}
TECHNICIAN_COMMANDS = {"ช่าง", "technicians", "technician"}
AVAILABILITY_PREFIXES = ("คิวว่าง", "คิว", "availability", "available")

MSG_GREETING = (
    "สวัสดีครับ ยินดีต้อนรับสู่ร้านทำผมของเรา 💇\n"
    "พิมพ์ 'จองคิว' เพื่อจอง, 'ราคา' เพื่อดูราคา, 'ช่าง' เพื่อดูรายชื่อช่าง "
    "หรือ 'คิว 2025-04-01' เพื่อดูคิวที่ถูกจองแล้ว"
)
MSG_BOOKING_OFFLINE = "ขออภัย ระบบจองออนไลน์ยังไม่พร้อมใช้งาน"
MSG_TEMPORARY_ERROR = "ขออภัย ระบบขัดข้องชั่วคราว กรุณาลองใหม่อีกครั้ง"

DEDUPE_SIZE = 1000


class LineWebhook:
    """Handler for LINE webhook events."""

    def __init__(self, settings: Settings, booking: BookingService, line: LineMessagingService):
        self.settings = settings
        self.booking = booking
        self.line = line
        self.router = APIRouter()

        self.text_processor = TextProcessor()
        self.date_parser = DateParser(settings.timezone)

        # Recently seen webhookEventId values; LINE redelivers on timeouts
        self._seen_events: "OrderedDict[str, None]" = OrderedDict()

        self._setup_routes()

    def _setup_routes(self):
        """Setup LINE webhook routes."""

        @self.router.post("/line")
        async def receive_line_events(request: Request):
            """Handle incoming LINE events."""
            raw = await request.body()
            signature = request.headers.get("X-Line-Signature")

            if not self.line.verify_signature(raw, signature):
                logger.warning({"event": "line_verify_failed"})
                return Response(status_code=status.HTTP_401_UNAUTHORIZED)

            try:
                body = json.loads(raw)
            except ValueError:
                return Response(status_code=status.HTTP_400_BAD_REQUEST)

            if not isinstance(body, dict):
                return Response(status_code=status.HTTP_400_BAD_REQUEST)

            handled = 0
            for event in LineEvent.parse_body(body):
                if self._is_duplicate_event(event):
                    continue
                await self._handle_event(event)
                handled += 1

            return {"status": "ok", "handled": handled}

    def _is_duplicate_event(self, event: LineEvent) -> bool:
        """Check and record an event id."""
        event_id = event.webhook_event_id
        if not event_id:
            return False
        if event_id in self._seen_events:
            logger.info({"event": "line_dedupe", "id": event_id})
            return True

        self._seen_events[event_id] = None
        if len(self._seen_events) > DEDUPE_SIZE:
            self._seen_events.popitem(last=False)
        return False

    async def _handle_event(self, event: LineEvent) -> None:
        logger.info({"event": "line_inbound", "type": event.type, "user": event.user_id})

        if event.type == "follow":
            reply: Optional[str] = MSG_GREETING
        elif event.is_text_message:
            try:
                reply = await self.reply_for(event.text)
            except (CatalogError, LedgerError) as e:
                logger.error(f"command {event.text!r} failed: {e}")
                reply = MSG_TEMPORARY_ERROR
        else:
            reply = None

        if reply and event.reply_token:
            await self._send_reply(event.reply_token, reply)

    async def reply_for(self, text: str) -> Optional[str]:
        """Reply text for a recognised command, or None to stay silent."""
        command = self.text_processor.normalize_command(text)

        if command in BOOK_COMMANDS:
            if not self.settings.liff_url:
                return MSG_BOOKING_OFFLINE
            return f"จองคิวทำผมได้ที่นี่ 👉 {self.settings.liff_url}"

        if command in PRICE_COMMANDS:
            catalog = await self.booking.services()
            return "💈 รายการบริการและราคา\n" + catalog.format_price_list()

        if command in TECHNICIAN_COMMANDS:
            technicians = await self.booking.technicians()
            if not technicians:
                return "ยังไม่มีรายชื่อช่าง"
            return "✂️ ช่างของเรา\n" + "\n".join(f"• {t.name}" for t in technicians)

        for prefix in AVAILABILITY_PREFIXES:
            if command == prefix or command.startswith(prefix + " "):
                return await self._availability_reply(command[len(prefix):].strip())

        return None

    async def _availability_reply(self, date_text: str) -> str:
        if not date_text:
            return "โปรดระบุวันที่ เช่น 'คิว 2025-04-01' หรือ 'คิว พรุ่งนี้'"

        date = self.date_parser.parse_natural_date(date_text)
        if not date:
            return f"ไม่เข้าใจวันที่ '{date_text}' กรุณาใช้รูปแบบ 2025-04-01"

        slots = await self.booking.available_slots(date)
        if not slots:
            return f"วันที่ {date} ยังว่างทุกช่วงเวลา"
        return f"วันที่ {date} มีคิวแล้วเวลา: " + ", ".join(sorted(slots))

    async def _send_reply(self, reply_token: str, text: str) -> None:
        try:
            await self.line.reply_message(reply_token, text)
        except LineAPIError as e:
            logger.error(f"LINE reply failed: {e}")
