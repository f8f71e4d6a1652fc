"""
Entry point for running the application as a module.
"""

import uvicorn

from .config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run("salon_booking.main:app", host=settings.host, port=settings.port)
