"""
Startup wiring: builds every adapter once, failing fast on bad configuration.
"""

from dataclasses import dataclass

import pytz

from .config import ExternalAPIConfig, Settings, load_service_account_credentials
from .core.enums import LedgerBackend
from .core.exceptions import ConfigurationError
from .services.booking import BookingService, SlotReservationGuard
from .services.catalog import SheetsCatalog
from .services.external import LineMessagingService, SheetsClient
from .services.ledger import Ledger, MemoryLedger, SheetsLedger, SQLiteLedger
from .utils.logging import get_logger

logger = get_logger("bootstrap")


@dataclass
class AppServices:
    """Adapters shared by all requests for the lifetime of the process."""

    settings: Settings
    booking: BookingService
    line: LineMessagingService


def build_ledger(settings: Settings, sheets: SheetsClient) -> Ledger:
    if settings.ledger_backend == LedgerBackend.SQLITE:
        return SQLiteLedger(settings.sqlite_ledger_path, scope=settings.slot_scope)
    if settings.ledger_backend == LedgerBackend.MEMORY:
        logger.warning("Using in-memory ledger: bookings are lost on restart")
        return MemoryLedger(scope=settings.slot_scope)
    return SheetsLedger(sheets, settings.booking_sheet_name, scope=settings.slot_scope)


def build_services(settings: Settings) -> AppServices:
    """
    Construct the LINE client, Sheets client, ledger, catalog and guard.

    Raises:
        ConfigurationError: missing or malformed credentials/configuration
    """
    api_config = ExternalAPIConfig.from_settings(settings)

    if not api_config.is_line_configured():
        raise ConfigurationError(
            "LINE_CHANNEL_ACCESS_TOKEN and LINE_CHANNEL_SECRET are required"
        )
    if not api_config.is_sheets_configured():
        raise ConfigurationError("GOOGLE_SHEET_ID is required")

    try:
        pytz.timezone(settings.timezone)
    except pytz.UnknownTimeZoneError as e:
        raise ConfigurationError(f"Unknown TIMEZONE: {settings.timezone}") from e

    credentials = load_service_account_credentials(settings)
    sheets = SheetsClient(credentials, settings.google_sheet_id, timeout=api_config.sheets_timeout)

    line = LineMessagingService(api_config)
    ledger = build_ledger(settings, sheets)
    catalog = SheetsCatalog(sheets, settings.technician_sheet_name, settings.service_sheet_name)

    guard = SlotReservationGuard(
        ledger,
        line,
        scope=settings.slot_scope,
        ledger_timeout=settings.ledger_timeout,
        notifier_timeout=settings.notifier_timeout,
        timezone=settings.timezone,
    )
    booking = BookingService(guard, catalog, catalog_timeout=settings.catalog_timeout)

    logger.info(
        f"Services ready: ledger={settings.ledger_backend.value} scope={settings.slot_scope.value}"
    )
    return AppServices(settings=settings, booking=booking, line=line)
