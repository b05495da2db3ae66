import pytest
from pydantic import ValidationError

from booking_service.features.booking.validators import (
    BookingCreate,
    BookingStatus,
    BookingStatusUpdate,
    UPDATABLE_STATUSES,
)

VALID = {"clientId": "c1", "providerUserSub": "p1", "timeslotId": "t1", "serviceId": "s1"}


def test_create_defaults():
    booking = BookingCreate(**VALID)
    assert booking.status == "pending"
    assert booking.notes is None


@pytest.mark.parametrize("field", ["clientId", "providerUserSub", "timeslotId", "serviceId"])
def test_create_requires_field(field):
    payload = {k: v for k, v in VALID.items() if k != field}
    with pytest.raises(ValidationError):
        BookingCreate(**payload)


def test_create_rejects_empty_strings():
    with pytest.raises(ValidationError):
        BookingCreate(**{**VALID, "clientId": ""})


def test_create_rejects_unknown_status():
    with pytest.raises(ValidationError):
        BookingCreate(**VALID, status="archived")


def test_create_allows_empty_notes():
    assert BookingCreate(**VALID, notes="").notes == ""


def test_create_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        BookingCreate(**VALID, id="forced")


@pytest.mark.parametrize("status", ["confirmed", "cancelled", "completed"])
def test_status_update_accepts(status):
    assert BookingStatusUpdate(status=status).status == status


@pytest.mark.parametrize("status", ["pending", "unknown", ""])
def test_status_update_rejects(status):
    with pytest.raises(ValidationError):
        BookingStatusUpdate(status=status)


def test_pending_is_not_updatable():
    assert BookingStatus.PENDING.value not in UPDATABLE_STATUSES


def test_create_status_is_stored_as_plain_value():
    dumped = BookingCreate(**VALID, status="confirmed").model_dump(exclude_unset=True)
    assert dumped["status"] == "confirmed"
    assert type(dumped["status"]) is str


def test_create_dump_skips_unset_optional_fields():
    assert BookingCreate(**VALID).model_dump(exclude_unset=True) == VALID


def test_status_update_accepts_every_updatable_status():
    for status in UPDATABLE_STATUSES:
        assert BookingStatusUpdate(status=status).status == status


def test_status_update_rejects_pending_with_allowed_values():
    with pytest.raises(ValidationError, match="cancelled, completed, confirmed"):
        BookingStatusUpdate(status=BookingStatus.PENDING.value)
