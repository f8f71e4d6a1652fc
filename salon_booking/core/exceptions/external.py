"""
External API-related exceptions.
"""


class ExternalAPIError(Exception):
    """Base exception for external API errors."""
    pass


class SheetsAPIError(ExternalAPIError):
    """Exception raised when Google Sheets API calls fail."""
    pass


class LedgerError(ExternalAPIError):
    """Exception raised when the booking ledger cannot be read or written."""
    pass


class LedgerTimeoutError(LedgerError):
    """Exception raised when a ledger call exceeds its time budget."""
    pass


class CatalogError(ExternalAPIError):
    """Exception raised when the service/technician catalog cannot be read."""
    pass


class LineAPIError(ExternalAPIError):
    """Exception raised when LINE Messaging API calls fail."""
    pass
