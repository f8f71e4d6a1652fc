"""
Webhook handlers for chat platforms.
"""

from .line import LineWebhook

__all__ = [
    "LineWebhook",
]
