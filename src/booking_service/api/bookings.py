"""
Booking API Endpoints

Thin FastAPI router: validates input, delegates to BookingService and wraps
results in the standard {success, message, data} envelope. Errors are mapped
to responses by the handlers in booking_service.api.errors.
"""

from fastapi import APIRouter, Depends, Request, status

from booking_service.api.auth import require_token
from booking_service.features.booking.service import BookingService
from booking_service.features.booking.validators import BookingCreate, BookingStatusUpdate
from booking_service.utils.response import format_response

router = APIRouter(dependencies=[Depends(require_token)])


def get_booking_service(request: Request) -> BookingService:
    return request.app.state.booking_service


@router.post("", status_code=status.HTTP_201_CREATED)
def create_booking(payload: BookingCreate, service: BookingService = Depends(get_booking_service)):
    result = service.create_booking(payload.model_dump(exclude_unset=True))
    return format_response("Booking created successfully", result)


@router.get("/id/{booking_id}/{client_id}")
def get_booking(booking_id: str, client_id: str, service: BookingService = Depends(get_booking_service)):
    result = service.get_booking(booking_id, client_id)
    return format_response("Booking retrieved successfully", result)


@router.put("/id/{booking_id}/{client_id}/status")
def update_booking_status(
    booking_id: str,
    client_id: str,
    payload: BookingStatusUpdate,
    service: BookingService = Depends(get_booking_service),
):
    result = service.update_booking_status(booking_id, client_id, payload.status)
    return format_response("Booking status updated successfully", result)


@router.get("/provider/{provider_user_sub}")
def get_bookings_by_provider(provider_user_sub: str, service: BookingService = Depends(get_booking_service)):
    result = service.get_bookings_by_provider(provider_user_sub)
    return format_response("Provider bookings retrieved successfully", result)


@router.get("/client/{client_id}")
def get_bookings_by_client(client_id: str, service: BookingService = Depends(get_booking_service)):
    result = service.get_bookings_by_client(client_id)
    return format_response("Client bookings retrieved successfully", result)
