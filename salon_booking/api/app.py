"""
FastAPI application factory and configuration.
"""

from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware

from ..bootstrap import AppServices, build_services
from ..config import Settings, get_settings
from ..core.exceptions import CatalogError, LedgerError, LedgerTimeoutError
from ..utils.logging import configure_logging, get_logger
from .handlers import BookingHandler, HealthHandler
from .handlers.booking import error_response
from .middleware import LoggingMiddleware, SecurityHeaders
from .webhooks import LineWebhook

logger = get_logger("app")


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(LedgerTimeoutError)
    async def ledger_timeout(request: Request, exc: LedgerTimeoutError):
        logger.error(f"{request.method} {request.url.path}: {exc}")
        return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "Booking storage timed out, please retry")

    @app.exception_handler(LedgerError)
    async def ledger_error(request: Request, exc: LedgerError):
        logger.error(f"{request.method} {request.url.path}: {exc}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Booking storage unavailable")

    @app.exception_handler(CatalogError)
    async def catalog_error(request: Request, exc: CatalogError):
        logger.error(f"{request.method} {request.url.path}: {exc}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path}: unhandled error")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


def create_app(settings: Optional[Settings] = None, services: Optional[AppServices] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Adapters are built here, before the app accepts traffic; a
    ConfigurationError propagates and stops startup.
    """
    if settings is None:
        settings = services.settings if services else get_settings()
    configure_logging(settings.log_level)

    if services is None:
        services = build_services(settings)

    app = FastAPI(
        title=settings.app_name,
        description="LINE booking server for a hair salon",
        version=settings.app_version,
        debug=settings.debug,
    )
    app.state.services = services

    # The LIFF page is served from another origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeaders)
    app.add_middleware(LoggingMiddleware)

    health_handler = HealthHandler(settings)
    booking_handler = BookingHandler(services.booking)
    line_webhook = LineWebhook(settings, services.booking, services.line)

    app.include_router(health_handler.root_router, tags=["health"])
    app.include_router(health_handler.router, prefix="/health", tags=["health"])
    app.include_router(booking_handler.router, prefix="/api", tags=["booking"])
    app.include_router(line_webhook.router, prefix="/webhook", tags=["webhooks"])

    _register_exception_handlers(app)
    return app
