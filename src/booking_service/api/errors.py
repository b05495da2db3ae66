"""
API error handlers.

Maps the error taxonomy in booking_service.errors onto HTTP responses that
use the standard envelope. Unknown errors become 500s whose message is
hidden outside development; the full traceback is always logged.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from booking_service.errors import AppError, TimeslotUpdateError
from booking_service.utils.response import format_response

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


def _error_response(status_code: int, message: str, data=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=format_response(message, data, success=False))


def _is_production(request: Request) -> bool:
    config = getattr(request.app.state, "config", None)
    return bool(config and config.is_production())


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    msg = first.get("msg", "Invalid value")
    return f"{field}: {msg}" if field else msg


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _validation_message(exc)
    logger.warning("Request validation failed", extra={"path": request.url.path, "error": message})
    return _error_response(400, message)


async def handle_timeslot_update_error(request: Request, exc: TimeslotUpdateError) -> JSONResponse:
    logger.error("Booking persisted without timeslot reservation", extra={
        "booking_id": (exc.booking or {}).get("id"),
        "error": exc.message,
    })
    return await handle_unknown_error(request, exc)


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        return await handle_unknown_error(request, exc)
    logger.error("Known error caught by middleware", extra={
        "error_type": type(exc).__name__,
        "error": exc.message,
        "path": request.url.path,
    })
    return _error_response(exc.status_code, exc.message)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = "Not found" if exc.status_code == 404 else str(exc.detail)
    return _error_response(exc.status_code, message)


async def handle_unknown_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unknown error caught by middleware", extra={
        "error_type": type(exc).__name__,
        "error": str(exc),
        "path": request.url.path,
    }, exc_info=exc)
    message = GENERIC_ERROR_MESSAGE if _is_production(request) else (str(exc) or GENERIC_ERROR_MESSAGE)
    return _error_response(500, message)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(TimeslotUpdateError, handle_timeslot_update_error)
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unknown_error)
