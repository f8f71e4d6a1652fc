"""
Tests for the booking REST API.
"""

import pytest
from unittest.mock import AsyncMock
from httpx import ASGITransport, AsyncClient

from salon_booking.api import create_app
from salon_booking.bootstrap import AppServices
from salon_booking.core.exceptions import CatalogError, LedgerError, LedgerTimeoutError

BOOKING = {
    "date": "2025-04-01",
    "time": "10:00",
    "technician": "A",
    "mainService": "Cut",
    "subService": "Wash",
    "price": 300,
    "customerName": "X",
    "lineUserId": "U-customer",
    "phoneNumber": "0812345678",
    "notes": "",
    "timestamp": "2025-03-30 09:00",
}


@pytest.fixture
def app(settings, booking_service, line_service):
    return create_app(settings, services=AppServices(settings, booking_service, line_service))


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


class TestHealth:

    @pytest.mark.asyncio
    async def test_root_text(self, client):
        resp = await client.get("/")

        assert resp.status_code == 200
        assert resp.text == "Server for Hair Salon Booking is running."

    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/health/")

        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "healthy"
        assert body["ledger"] == "memory"
        assert body["slot_scope"] == "salon"
        assert resp.headers["X-Content-Type-Options"] == "nosniff"


class TestCatalogEndpoints:

    @pytest.mark.asyncio
    async def test_technicians(self, client):
        resp = await client.get("/api/technicians")

        assert resp.status_code == 200
        assert resp.json() == ["A", "B"]
        assert resp.headers["Cache-Control"] == "no-store"

    @pytest.mark.asyncio
    async def test_services(self, client):
        resp = await client.get("/api/services")

        assert resp.status_code == 200
        body = resp.json()
        assert body["mainServices"] == ["Cut", "Color"]
        assert body["prices"]["Cut-Wash"] == 300
        assert body["prices"]["Cut-"] == 200

    @pytest.mark.asyncio
    async def test_catalog_failure_is_500(self, client, mock_catalog):
        mock_catalog.list_technicians.side_effect = CatalogError("HTTP 403")

        resp = await client.get("/api/technicians")

        assert resp.status_code == 500
        assert resp.json() == {"success": False, "message": "Internal Server Error"}


class TestAvailability:

    @pytest.mark.asyncio
    async def test_requires_date(self, client):
        resp = await client.get("/api/availability")

        assert resp.status_code == 400
        assert resp.json()["message"] == "โปรดระบุวันที่ที่ต้องการตรวจสอบ"

    @pytest.mark.asyncio
    async def test_lists_booked_times(self, client):
        await client.post("/api/booking", json=BOOKING)

        resp = await client.get("/api/availability", params={"date": "2025-04-01"})

        assert resp.status_code == 200
        assert resp.json() == ["10:00"]

    @pytest.mark.asyncio
    async def test_ledger_timeout_is_503(self, client, guard):
        guard.ledger.query_by_date = AsyncMock(side_effect=LedgerTimeoutError("Ledger query timed out"))

        resp = await client.get("/api/availability", params={"date": "2025-04-01"})

        assert resp.status_code == 503
        assert resp.json()["success"] is False


class TestBooking:

    @pytest.mark.asyncio
    async def test_booking_confirmed(self, client, mock_notifier):
        resp = await client.post("/api/booking", json=BOOKING)

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["notified"] is True
        assert body["bookingRef"].startswith("BK-")
        assert mock_notifier.send.call_count == 2

    @pytest.mark.asyncio
    async def test_second_booking_for_slot_is_409(self, client):
        await client.post("/api/booking", json=BOOKING)

        resp = await client.post("/api/booking", json={**BOOKING, "customerName": "Y"})

        assert resp.status_code == 409
        assert resp.json() == {"success": False, "message": "ช่วงเวลาที่คุณเลือกมีผู้จองแล้ว"}

    @pytest.mark.asyncio
    async def test_notification_failure_still_confirms(self, client, mock_notifier):
        mock_notifier.send.return_value = False

        resp = await client.post("/api/booking", json=BOOKING)

        assert resp.status_code == 200
        assert resp.json()["notified"] is False

    @pytest.mark.asyncio
    async def test_missing_time_is_400(self, client, mock_notifier):
        resp = await client.post("/api/booking", json={**BOOKING, "time": ""})

        assert resp.status_code == 400
        assert "time is required" in resp.json()["message"]
        assert mock_notifier.send.call_count == 0

    @pytest.mark.asyncio
    async def test_malformed_body(self, client):
        resp = await client.post(
            "/api/booking", content=b"not json", headers={"Content-Type": "application/json"}
        )
        assert resp.status_code == 400

        resp = await client.post("/api/booking", json=["2025-04-01", "10:00"])
        assert resp.status_code == 400

        resp = await client.post("/api/booking", json={**BOOKING, "price": "free"})
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_ledger_failure_is_500(self, client, guard, mock_notifier):
        guard.ledger.append_if_absent = AsyncMock(side_effect=LedgerError("write failed"))

        resp = await client.post("/api/booking", json=BOOKING)

        assert resp.status_code == 500
        assert resp.json()["message"] == "Booking storage unavailable"
        assert mock_notifier.send.call_count == 0
