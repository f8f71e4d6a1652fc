"""
Utility modules for the salon booking system.
"""

from .text import TextProcessor
from .date import DateParser
from .validation import ValidationUtils
from .locks import KeyedLock
from .logging import get_logger, configure_logging

__all__ = [
    "TextProcessor",
    "DateParser",
    "ValidationUtils",
    "KeyedLock",
    "get_logger",
    "configure_logging",
]
