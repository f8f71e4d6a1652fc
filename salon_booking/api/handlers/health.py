"""
Health check handler.
"""

from datetime import datetime

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from ...config import Settings


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    version: str
    uptime: float
    ledger: str
    slot_scope: str


class HealthHandler:
    """Liveness text at ``/`` and a status summary at ``/health``."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.start_time = datetime.now()
        self.root_router = APIRouter()
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):
        @self.root_router.get("/", response_class=PlainTextResponse)
        async def index():
            return "Server for Hair Salon Booking is running."

        @self.router.get("/", response_model=HealthResponse)
        async def health_check():
            return HealthResponse(
                status="healthy",
                version=self.settings.app_version,
                uptime=(datetime.now() - self.start_time).total_seconds(),
                ledger=self.settings.ledger_backend.value,
                slot_scope=self.settings.slot_scope.value,
            )
