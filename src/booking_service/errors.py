"""
Booking Service - Error Classes

Custom exceptions shared by the store, the remote clients, the booking
service and the API layer.

HTTP-facing errors carry a ``status_code`` that the API error handlers use
to build the response envelope:
- ValidationError (400): malformed input
- UnauthorizedError (401): missing, invalid or unverifiable token
- ForbiddenError (403): reserved
- NotFoundError (404): referenced booking is absent
- ConflictError (409): reserved
"""

from typing import Any, Dict, Optional


class AppError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """Raised when request input does not match its schema."""
    status_code = 400


class UnauthorizedError(AppError):
    """Raised when the bearer token is missing, invalid or cannot be verified."""
    status_code = 401


class ForbiddenError(AppError):
    status_code = 403


class NotFoundError(AppError):
    """Raised when a booking does not exist for the given (id, clientId)."""
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class StoreError(AppError):
    """Raised when a DynamoDB read or write fails."""
    status_code = 500


class UpstreamError(Exception):
    """Raised when an upstream HTTP service fails."""
    pass


class RemoteCallError(UpstreamError):
    """Raised when the timeslot service call does not report success."""
    pass


class TimeslotUpdateError(AppError):
    """
    Raised when a booking was persisted but its timeslot could not be reserved.

    The booking record is not rolled back; it is attached as ``booking`` so
    callers can surface or reconcile it.
    """

    status_code = 500

    def __init__(self, message: str, booking: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.booking = booking
