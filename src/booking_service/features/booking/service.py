"""
Booking service layer.

Owns the consistency policy between a booking record and the provider
timeslot it occupies in the timeslot service:

- create: the booking is written first; marking the timeslot "booked" must
  then succeed, otherwise TimeslotUpdateError is raised with the booking
  left in place.
- cancel: releasing the timeslot is best effort; a failure is logged and
  the cancellation still succeeds.

No rollback and no retries happen here.
"""

import logging
from typing import Any, Dict, List

from booking_service.clients.timeslot_client import (
    TIMESLOT_AVAILABLE,
    TIMESLOT_BOOKED,
    TimeslotClient,
)
from booking_service.errors import NotFoundError, TimeslotUpdateError
from booking_service.features.booking.repo import BookingRepo
from booking_service.features.booking.validators import BookingStatus

logger = logging.getLogger(__name__)


class BookingService:
    """Service class for booking operations."""

    def __init__(self, repo: BookingRepo, timeslots: TimeslotClient):
        self.repo = repo
        self.timeslots = timeslots

    def create_booking(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Persist a booking and reserve its timeslot.

        Args:
            data: Validated booking fields (clientId, providerUserSub,
                timeslotId, serviceId, optional status and notes)

        Returns:
            The stored booking, including generated id and timestamps

        Raises:
            StoreError: If the booking could not be written
            TimeslotUpdateError: If the booking was written but the timeslot
                could not be marked as booked
        """
        data = dict(data)
        data.setdefault("status", BookingStatus.PENDING.value)

        booking = self.repo.create(data)
        logger.info("Booking created successfully", extra={"booking_id": booking["id"]})

        try:
            self.timeslots.set_timeslot_status(
                booking["providerUserSub"],
                booking["timeslotId"],
                TIMESLOT_BOOKED,
                booking["id"],
            )
        except Exception as e:
            logger.error("Error updating timeslot", extra={
                "booking_id": booking["id"],
                "timeslot_id": booking["timeslotId"],
                "error": str(e),
            })
            raise TimeslotUpdateError(
                f"Booking created but failed to update timeslot: {e}",
                booking=booking,
            ) from e

        logger.info("Timeslot updated successfully", extra={"timeslot_id": booking["timeslotId"]})
        return booking

    def get_booking(self, booking_id: str, client_id: str) -> Dict[str, Any]:
        lookup = self.repo.get(booking_id, client_id)
        if not lookup.found:
            raise NotFoundError("Booking not found")
        logger.info("Booking retrieved successfully", extra={"booking_id": booking_id, "client_id": client_id})
        return lookup.unwrap()

    def update_booking_status(self, booking_id: str, client_id: str, status: str) -> Dict[str, Any]:
        """
        Update a booking's status, releasing its timeslot on cancellation.

        Raises:
            NotFoundError: If the booking does not exist
            StoreError: If the status update could not be written
        """
        lookup = self.repo.get(booking_id, client_id)
        if not lookup.found:
            raise NotFoundError("Booking not found")
        booking = lookup.unwrap()

        updated = self.repo.update_status(booking_id, client_id, status)
        logger.info("Booking status updated successfully", extra={
            "booking_id": booking_id,
            "client_id": client_id,
            "status": status,
        })

        if status == BookingStatus.CANCELLED.value:
            self._release_timeslot(booking)

        return updated

    def _release_timeslot(self, booking: Dict[str, Any]) -> None:
        # Failure leaves the timeslot marked booked; never surfaced to the caller.
        try:
            self.timeslots.set_timeslot_status(
                booking["providerUserSub"],
                booking["timeslotId"],
                TIMESLOT_AVAILABLE,
                None,
            )
        except Exception as e:
            logger.error("Error updating timeslot status to available", extra={
                "booking_id": booking.get("id"),
                "timeslot_id": booking.get("timeslotId"),
                "error": str(e),
            })
            return
        logger.info("Timeslot status updated to available", extra={"timeslot_id": booking["timeslotId"]})

    def get_bookings_by_provider(self, provider_user_sub: str) -> List[Dict[str, Any]]:
        bookings = self.repo.get_by_provider(provider_user_sub)
        if not bookings:
            logger.info("No bookings found for provider", extra={"provider_user_sub": provider_user_sub})
        else:
            logger.info("Provider bookings retrieved successfully", extra={
                "provider_user_sub": provider_user_sub,
                "count": len(bookings),
            })
        return bookings

    def get_bookings_by_client(self, client_id: str) -> List[Dict[str, Any]]:
        bookings = self.repo.get_by_client(client_id)
        logger.info("Client bookings retrieved successfully", extra={
            "client_id": client_id,
            "count": len(bookings),
        })
        return bookings
