"""
Clients for external platforms.
"""

from .sheets import SheetsClient
from .line import LineMessagingService

__all__ = [
    "SheetsClient",
    "LineMessagingService",
]
