"""
Notification message templates.
"""

from .templates import format_customer_confirmation, format_technician_alert

__all__ = [
    "format_customer_confirmation",
    "format_technician_alert",
]
