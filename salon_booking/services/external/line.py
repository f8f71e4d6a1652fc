"""
LINE Messaging API client.
"""

import base64
import hashlib
import hmac
from typing import Any, Dict, List, Optional

import httpx

from ...config import ExternalAPIConfig
from ...core.exceptions import LineAPIError
from ...utils.logging import get_logger
from ...utils.text import TextProcessor

logger = get_logger("line")


class LineMessagingService:
    """Push/reply messages and webhook signature checks for one LINE channel."""

    def __init__(self, config: ExternalAPIConfig):
        self.config = config
        self.timeout = config.line_timeout

    async def _make_request(self, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST JSON to the Messaging API with error handling."""
        headers = {"Authorization": f"Bearer {self.config.line_channel_access_token}"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, json=payload, headers=headers)
                response.raise_for_status()
                return response.json() if response.content else {}
        except httpx.TimeoutException as e:
            raise LineAPIError("Request timed out") from e
        except httpx.HTTPStatusError as e:
            raise LineAPIError(
                f"HTTP error {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise LineAPIError(f"Request failed: {e}") from e

    def _text_messages(self, text: str) -> List[Dict[str, str]]:
        chunks = TextProcessor.split_text(text, self.config.line_max_message_length)
        limit = self.config.line_max_messages_per_request
        if len(chunks) > limit:
            logger.warning(f"Message truncated from {len(chunks)} to {limit} parts")
            chunks = chunks[:limit]
        return [{"type": "text", "text": chunk} for chunk in chunks]

    async def push_message(self, to: str, text: str) -> None:
        """Push a text message to a user id."""
        await self._make_request(
            self.config.get_push_url(),
            {"to": to, "messages": self._text_messages(text)},
        )

    async def reply_message(self, reply_token: str, text: str) -> None:
        """Reply to a webhook event using its reply token."""
        await self._make_request(
            self.config.get_reply_url(),
            {"replyToken": reply_token, "messages": self._text_messages(text)},
        )

    async def send(self, channel_id: str, text: str) -> bool:
        """Push ``text`` to ``channel_id``; False if LINE could not be reached."""
        if not self.config.line_channel_access_token:
            logger.warning("Skipping LINE push: access token not configured")
            return False

        try:
            await self.push_message(channel_id, text)
            return True
        except LineAPIError as e:
            logger.error(f"LINE push to {channel_id} failed: {e}")
            return False

    def verify_signature(self, body: bytes, signature: Optional[str]) -> bool:
        """Check the X-Line-Signature header against the raw request body."""
        secret = self.config.line_channel_secret
        if not secret or not signature:
            return False

        digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()
        expected = base64.b64encode(digest).decode("utf-8")
        return hmac.compare_digest(expected, signature)
