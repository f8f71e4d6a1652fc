"""
Pytest configuration and fixtures.
"""

import pytest
from unittest.mock import Mock, AsyncMock

from salon_booking.config import Settings, ExternalAPIConfig
from salon_booking.core.enums import SlotScope
from salon_booking.core.models.booking import BookingRequest
from salon_booking.core.models.catalog import ServiceCatalog, Technician
from salon_booking.services.booking import BookingService, SlotReservationGuard
from salon_booking.services.catalog import SheetsCatalog
from salon_booking.services.external import LineMessagingService
from salon_booking.services.ledger import MemoryLedger


TECHNICIANS = [
    Technician(name="A", notify_channel_id="U-tech-a"),
    Technician(name="B", notify_channel_id=None),
]

SERVICES = ServiceCatalog(
    main_services=["Cut", "Color"],
    sub_services=["Wash"],
    prices={("Cut", "Wash"): 300, ("Cut", ""): 200, ("Color", ""): 1200},
)


@pytest.fixture
def settings():
    """Settings that never read the developer's .env."""
    return Settings(
        _env_file=None,
        line_channel_access_token="test-token",
        line_channel_secret="test-secret",
        google_sheet_id="sheet-123",
        liff_url="https://liff.line.me/test",
        ledger_backend="memory",
        timezone="Asia/Bangkok",
        log_level="WARNING",
    )


@pytest.fixture
def ledger():
    return MemoryLedger()


@pytest.fixture
def mock_notifier():
    """Notifier that always delivers."""
    notifier = Mock()
    notifier.send = AsyncMock(return_value=True)
    return notifier


@pytest.fixture
def mock_catalog():
    """Catalog with two technicians and three priced services."""
    catalog = Mock(spec=SheetsCatalog)
    catalog.list_technicians = AsyncMock(return_value=list(TECHNICIANS))
    catalog.find_technician = AsyncMock(
        side_effect=lambda name: next((t for t in TECHNICIANS if t.name == name), None)
    )
    catalog.list_services = AsyncMock(return_value=SERVICES)
    return catalog


@pytest.fixture
def guard(ledger, mock_notifier):
    return SlotReservationGuard(
        ledger,
        mock_notifier,
        scope=SlotScope.SALON,
        ledger_timeout=1.0,
        notifier_timeout=1.0,
        timezone="Asia/Bangkok",
    )


@pytest.fixture
def booking_service(guard, mock_catalog):
    return BookingService(guard, mock_catalog, catalog_timeout=1.0)


@pytest.fixture
def line_service(settings):
    return LineMessagingService(ExternalAPIConfig.from_settings(settings))


@pytest.fixture
def sample_request():
    """The booking from the mini-app used across tests."""
    return BookingRequest.model_validate(
        {
            "date": "2025-04-01",
            "time": "10:00",
            "technician": "A",
            "mainService": "Cut",
            "subService": "Wash",
            "price": 300,
            "customerName": "X",
            "lineUserId": "U-customer",
            "phoneNumber": "0812345678",
            "notes": "short please",
            "timestamp": "2025-03-30T09:00:00+07:00",
        }
    )
