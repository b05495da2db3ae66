"""
Upstream HTTP clients.

The timeslot client performs the cross-service side effect of a booking;
the auth client verifies bearer tokens for the API layer.
"""

from .base_client import BaseClient
from .auth_client import AuthClient
from .timeslot_client import TimeslotClient, TIMESLOT_AVAILABLE, TIMESLOT_BOOKED

__all__ = [
    "BaseClient",
    "AuthClient",
    "TimeslotClient",
    "TIMESLOT_AVAILABLE",
    "TIMESLOT_BOOKED",
]
