"""
External API configuration.
"""

from typing import List, Optional
from pydantic import BaseModel

from .settings import Settings


SHEETS_SCOPES: List[str] = ["https://www.googleapis.com/auth/spreadsheets"]


class ExternalAPIConfig(BaseModel):
    """External API configuration settings."""

    # LINE Messaging API
    line_api_base: str = "https://api.line.me"
    line_channel_access_token: Optional[str] = None
    line_channel_secret: Optional[str] = None
    line_timeout: float = 10.0
    line_max_message_length: int = 5000
    line_max_messages_per_request: int = 5

    # Google Sheets
    google_sheet_id: Optional[str] = None
    sheets_timeout: float = 10.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "ExternalAPIConfig":
        return cls(
            line_api_base=settings.line_api_base.rstrip("/"),
            line_channel_access_token=settings.line_channel_access_token,
            line_channel_secret=settings.line_channel_secret,
            line_timeout=settings.notifier_timeout,
            line_max_message_length=settings.line_max_message_length,
            google_sheet_id=settings.google_sheet_id,
            sheets_timeout=settings.ledger_timeout,
        )

    def get_push_url(self) -> str:
        """Get LINE push message URL."""
        return f"{self.line_api_base}/v2/bot/message/push"

    def get_reply_url(self) -> str:
        """Get LINE reply message URL."""
        return f"{self.line_api_base}/v2/bot/message/reply"

    def is_line_configured(self) -> bool:
        """Check if LINE Messaging API is properly configured."""
        return bool(self.line_channel_access_token and self.line_channel_secret)

    def is_sheets_configured(self) -> bool:
        """Check if a spreadsheet id is configured."""
        return bool(self.google_sheet_id)
