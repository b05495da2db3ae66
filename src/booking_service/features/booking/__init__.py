"""
Booking package for handling booking-related operations.
"""

from .service import BookingService
from .repo import BookingRepo, Lookup
from .validators import BookingCreate, BookingStatus, BookingStatusUpdate, UPDATABLE_STATUSES

__all__ = [
    'BookingService',
    'BookingRepo',
    'Lookup',
    'BookingCreate',
    'BookingStatus',
    'BookingStatusUpdate',
    'UPDATABLE_STATUSES',
]
