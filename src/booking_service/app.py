"""
FastAPI Application

Builds the booking API. Store and client handles are constructed once here
and injected into the service; tests pass their own collaborators instead.

Usage:
    python -m booking_service

    or

    uvicorn --factory booking_service.app:create_app --port 3008
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request

from booking_service import __version__
from booking_service.api import bookings
from booking_service.api.errors import handle_unknown_error, register_error_handlers
from booking_service.clients.auth_client import AuthClient
from booking_service.clients.timeslot_client import TimeslotClient
from booking_service.config import BookingConfig, load_env_files
from booking_service.db.booking import BookingDB
from booking_service.features.booking.repo import BookingRepo
from booking_service.features.booking.service import BookingService
from booking_service.logging_config import generate_request_id, setup_logging

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[BookingConfig] = None,
    booking_service: Optional[BookingService] = None,
    auth_client: Optional[AuthClient] = None,
    db: Optional[BookingDB] = None,
) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        config: Settings; read from the environment (and .env files) if omitted
        booking_service: Prebuilt service; built from ``db`` and a new
            TimeslotClient if omitted
        auth_client: Token verifier; built from config if omitted
        db: Bookings table handle; built from config if omitted. Used for
            table bootstrap at startup.
    """
    if config is None:
        load_env_files()
        config = BookingConfig()

    setup_logging(
        app_name="booking_service",
        log_level=config.LOG_LEVEL,
        log_format=config.LOG_FORMAT,
        log_file=config.LOG_FILE,
    )

    owned_clients = []
    if booking_service is None:
        if db is None:
            db = BookingDB(
                table_name=config.BOOKINGS_TABLE,
                region_name=config.AWS_REGION,
                endpoint_url=config.DYNAMODB_ENDPOINT,
            )
        timeslots = TimeslotClient(base_url=config.TIMESLOT_SERVICE_URL, timeout=config.TIMESLOT_TIMEOUT)
        owned_clients.append(timeslots)
        booking_service = BookingService(repo=BookingRepo(db), timeslots=timeslots)
    if auth_client is None:
        auth_client = AuthClient(base_url=config.AUTH_SERVICE_URL, timeout=config.AUTH_TIMEOUT)
        owned_clients.append(auth_client)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Booking Server", extra={"port": config.API_PORT})
        if db is not None and config.INIT_TABLE_ON_STARTUP:
            try:
                db.ensure_table()
            except Exception:
                logger.error("Failed to initialize bookings table", exc_info=True)
                raise
        yield
        for client in owned_clients:
            client.close()

    app = FastAPI(
        title="Booking Service API",
        description="Booking records with timeslot synchronization",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.db = db
    app.state.booking_service = booking_service
    app.state.auth_client = auth_client

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Track request timing, tag it with a request ID and log completion."""
        start_time = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception as exc:
            response = await handle_unknown_error(request, exc)

        if config.ENABLE_REQUEST_LOGGING:
            duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
            logger.info(f"{request.method} {request.url.path} {response.status_code}", extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            })
        response.headers["X-Request-ID"] = request_id
        return response

    register_error_handlers(app)
    app.include_router(bookings.router, prefix="/api/bookings", tags=["bookings"])

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {"status": "ok"}

    return app
