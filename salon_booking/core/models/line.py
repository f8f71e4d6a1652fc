"""
LINE webhook event models.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict


class LineEvent(BaseModel):
    """The subset of a LINE webhook event the chat handler needs."""

    model_config = ConfigDict(extra="forbid")

    type: str
    webhook_event_id: Optional[str] = None
    reply_token: Optional[str] = None
    user_id: Optional[str] = None
    message_type: Optional[str] = None
    text: Optional[str] = None

    @classmethod
    def from_payload(cls, event: Dict[str, Any]) -> "LineEvent":
        """Create LineEvent from one entry of the webhook ``events`` array."""
        source = event.get("source") or {}
        message = event.get("message") or {}

        text = message.get("text") if isinstance(message, dict) else None

        return cls(
            type=str(event.get("type") or ""),
            webhook_event_id=event.get("webhookEventId"),
            reply_token=event.get("replyToken"),
            user_id=source.get("userId") if isinstance(source, dict) else None,
            message_type=message.get("type") if isinstance(message, dict) else None,
            text=text.strip() if isinstance(text, str) else None,
        )

    @classmethod
    def parse_body(cls, body: Dict[str, Any]) -> List["LineEvent"]:
        events = body.get("events") or []
        return [cls.from_payload(e) for e in events if isinstance(e, dict)]

    @property
    def is_text_message(self) -> bool:
        return self.type == "message" and self.message_type == "text" and bool(self.text)
