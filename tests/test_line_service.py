"""
Tests for the LINE Messaging API client.
"""

import base64
import hashlib
import hmac
import json

import httpx
import pytest

from salon_booking.config import ExternalAPIConfig
from salon_booking.core.exceptions import LineAPIError
from salon_booking.services.external import LineMessagingService


def _patch_transport(monkeypatch, handler):
    transport = httpx.MockTransport(handler)
    original_client = httpx.AsyncClient

    def client_factory(*args, **kwargs):
        kwargs["transport"] = transport
        return original_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", client_factory)


class TestPush:

    @pytest.mark.asyncio
    async def test_push_message(self, monkeypatch, line_service):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={})

        _patch_transport(monkeypatch, handler)

        assert await line_service.send("U1", "hello") is True
        assert seen["path"] == "/v2/bot/message/push"
        assert seen["auth"] == "Bearer test-token"
        assert seen["body"] == {"to": "U1", "messages": [{"type": "text", "text": "hello"}]}

    @pytest.mark.asyncio
    async def test_send_returns_false_on_http_error(self, monkeypatch, line_service):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"message": "Invalid reply token"})

        _patch_transport(monkeypatch, handler)

        assert await line_service.send("U1", "hello") is False

    @pytest.mark.asyncio
    async def test_push_raises_line_api_error(self, monkeypatch, line_service):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="oops")

        _patch_transport(monkeypatch, handler)

        with pytest.raises(LineAPIError) as exc:
            await line_service.push_message("U1", "hello")
        assert "500" in str(exc.value)

    @pytest.mark.asyncio
    async def test_timeout(self, monkeypatch, line_service):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        _patch_transport(monkeypatch, handler)

        with pytest.raises(LineAPIError) as exc:
            await line_service.push_message("U1", "hello")
        assert "timed out" in str(exc.value)

    @pytest.mark.asyncio
    async def test_send_without_token(self):
        service = LineMessagingService(ExternalAPIConfig())

        assert await service.send("U1", "hello") is False

    @pytest.mark.asyncio
    async def test_long_text_is_split(self, monkeypatch):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={})

        _patch_transport(monkeypatch, handler)
        service = LineMessagingService(
            ExternalAPIConfig(line_channel_access_token="t", line_max_message_length=10)
        )

        await service.reply_message("r1", "\n".join(["line"] * 40))

        messages = seen["body"]["messages"]
        assert seen["body"]["replyToken"] == "r1"
        assert len(messages) == 5
        assert all(len(m["text"]) <= 10 for m in messages)


class TestSignature:

    def _sign(self, secret: str, body: bytes) -> str:
        digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()
        return base64.b64encode(digest).decode("utf-8")

    def test_valid_signature(self, line_service):
        body = b'{"events":[]}'

        assert line_service.verify_signature(body, self._sign("test-secret", body))

    def test_invalid_signature(self, line_service):
        body = b'{"events":[]}'

        assert not line_service.verify_signature(body, self._sign("other", body))
        assert not line_service.verify_signature(body, None)
        assert not line_service.verify_signature(body + b" ", self._sign("test-secret", body))
