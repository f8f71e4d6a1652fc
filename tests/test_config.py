"""
Tests for configuration and startup wiring.
"""

import json

import pytest

from salon_booking.bootstrap import build_ledger, build_services
from salon_booking.config import Settings, load_service_account_credentials
from salon_booking.config.credentials import _parse_key
from salon_booking.core.enums import LedgerBackend, SlotScope
from salon_booking.core.exceptions import ConfigurationError
from salon_booking.services.ledger import MemoryLedger, SheetsLedger, SQLiteLedger


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.port == 3000
        assert settings.booking_sheet_name == "Hair_Salon_Bookings"
        assert settings.ledger_backend == LedgerBackend.SHEETS
        assert settings.slot_scope == SlotScope.SALON

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("SLOT_SCOPE", "technician")
        monkeypatch.setenv("LEDGER_BACKEND", "sqlite")
        monkeypatch.setenv("PORT", "8080")

        settings = Settings(_env_file=None)

        assert settings.slot_scope == SlotScope.TECHNICIAN
        assert settings.ledger_backend == LedgerBackend.SQLITE
        assert settings.port == 8080

    def test_timeouts_must_be_positive(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, ledger_timeout=0)


class TestCredentials:

    def test_invalid_json(self):
        with pytest.raises(ConfigurationError):
            _parse_key("{not json")

    def test_not_an_object(self):
        with pytest.raises(ConfigurationError):
            _parse_key('["a"]')

    def test_missing_fields(self):
        with pytest.raises(ConfigurationError) as exc:
            _parse_key(json.dumps({"client_email": "svc@example.com"}))
        assert "private_key" in str(exc.value)

    def test_escaped_newlines(self):
        info = _parse_key(
            json.dumps({"client_email": "svc@example.com", "private_key": "a\\nb"})
        )

        assert info["private_key"] == "a\nb"

    def test_no_credentials(self, settings):
        with pytest.raises(ConfigurationError):
            load_service_account_credentials(settings)

    def test_missing_file(self, settings, tmp_path):
        settings.google_service_account_file = str(tmp_path / "missing.json")

        with pytest.raises(ConfigurationError) as exc:
            load_service_account_credentials(settings)
        assert "not found" in str(exc.value)

    def test_malformed_private_key(self, settings):
        settings.google_service_account_key = json.dumps(
            {
                "type": "service_account",
                "client_email": "svc@example.com",
                "private_key": "not-a-pem",
                "token_uri": "https://oauth2.googleapis.com/token",
            }
        )

        with pytest.raises(ConfigurationError):
            load_service_account_credentials(settings)


class TestBuildServices:

    def test_line_required(self, settings):
        settings.line_channel_access_token = None

        with pytest.raises(ConfigurationError) as exc:
            build_services(settings)
        assert "LINE_CHANNEL_ACCESS_TOKEN" in str(exc.value)

    def test_sheet_id_required(self, settings):
        settings.google_sheet_id = None

        with pytest.raises(ConfigurationError):
            build_services(settings)

    def test_unknown_timezone(self, settings):
        settings.timezone = "Mars/Olympus"

        with pytest.raises(ConfigurationError):
            build_services(settings)

    def test_missing_credentials_stop_startup(self, settings):
        with pytest.raises(ConfigurationError):
            build_services(settings)


class TestBuildLedger:

    def test_backends(self, settings, tmp_path):
        assert isinstance(build_ledger(settings, None), MemoryLedger)

        settings.ledger_backend = LedgerBackend.SQLITE
        settings.sqlite_ledger_path = str(tmp_path / "bookings.db")
        assert isinstance(build_ledger(settings, None), SQLiteLedger)

        settings.ledger_backend = LedgerBackend.SHEETS
        assert isinstance(build_ledger(settings, None), SheetsLedger)


class TestBuildServicesWiring:

    def test_sheets_client_uses_configured_timeout(self, settings, monkeypatch):
        monkeypatch.setattr(
            "salon_booking.bootstrap.load_service_account_credentials",
            lambda settings: object(),
        )
        settings.ledger_timeout = 4.5

        services = build_services(settings)

        catalog = services.booking.catalog
        assert catalog.client.timeout == 4.5
        assert services.booking.guard.ledger_timeout == 4.5
        assert isinstance(services.booking.guard.ledger, MemoryLedger)
