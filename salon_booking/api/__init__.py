"""
API layer for the salon booking system.
"""

from .app import create_app
from .webhooks import LineWebhook
from .middleware import SecurityHeaders, LoggingMiddleware

__all__ = [
    "create_app",
    "LineWebhook",
    "SecurityHeaders",
    "LoggingMiddleware",
]
