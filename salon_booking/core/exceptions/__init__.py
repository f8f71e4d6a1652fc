"""
Custom exceptions for the salon booking system.
"""

from .booking import BookingFlowError, BookingValidationError
from .external import (
    ExternalAPIError,
    LedgerError,
    LedgerTimeoutError,
    SheetsAPIError,
    CatalogError,
    LineAPIError,
)
from .config import ConfigurationError

__all__ = [
    "BookingFlowError",
    "BookingValidationError",
    "ExternalAPIError",
    "LedgerError",
    "LedgerTimeoutError",
    "SheetsAPIError",
    "CatalogError",
    "LineAPIError",
    "ConfigurationError",
]
