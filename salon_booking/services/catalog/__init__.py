"""
Service and technician catalog.
"""

from .service import SheetsCatalog

__all__ = [
    "SheetsCatalog",
]
