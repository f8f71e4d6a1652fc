"""
Application settings and configuration.
"""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings

from ..core.enums import LedgerBackend, SlotScope


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Hair Salon Booking"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000

    # LINE Messaging API
    line_channel_access_token: Optional[str] = None
    line_channel_secret: Optional[str] = None
    line_api_base: str = "https://api.line.me"
    line_max_message_length: int = 5000
    liff_url: Optional[str] = None

    # Google Sheets
    google_service_account_key: Optional[str] = None
    google_service_account_file: Optional[str] = None
    google_sheet_id: Optional[str] = None
    booking_sheet_name: str = "Hair_Salon_Bookings"
    technician_sheet_name: str = "Technicians"
    service_sheet_name: str = "Services"

    # Ledger
    ledger_backend: LedgerBackend = LedgerBackend.SHEETS
    sqlite_ledger_path: str = "bookings.db"
    slot_scope: SlotScope = SlotScope.SALON

    # Time budgets (seconds)
    ledger_timeout: float = Field(default=10.0, gt=0)
    notifier_timeout: float = Field(default=10.0, gt=0)
    catalog_timeout: float = Field(default=10.0, gt=0)

    # Timezone
    timezone: str = "Asia/Bangkok"

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()
