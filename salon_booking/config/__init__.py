"""
Configuration management for the salon booking system.
"""

from .settings import Settings, get_settings
from .external_apis import ExternalAPIConfig
from .credentials import load_service_account_credentials

__all__ = [
    "Settings",
    "get_settings",
    "ExternalAPIConfig",
    "load_service_account_credentials",
]
