import pytest
from unittest.mock import Mock

from booking_service.errors import NotFoundError, RemoteCallError, StoreError, TimeslotUpdateError
from booking_service.features.booking.repo import BookingRepo, Lookup
from booking_service.features.booking.service import BookingService

PAYLOAD = {"clientId": "c1", "providerUserSub": "p1", "timeslotId": "t1", "serviceId": "s1"}

STORED = {
    "id": "b1",
    "clientId": "c1",
    "providerUserSub": "p1",
    "timeslotId": "t1",
    "serviceId": "s1",
    "status": "pending",
    "createdAt": "2026-01-01T00:00:00.000Z",
    "updatedAt": "2026-01-01T00:00:00.000Z",
}


@pytest.fixture
def mock_repo():
    repo = Mock(spec=BookingRepo)
    repo.create.side_effect = lambda data: {**data, "id": "b1", "createdAt": "now", "updatedAt": "now"}
    repo.get.return_value = Lookup.of(dict(STORED))
    return repo


@pytest.fixture
def mock_timeslots():
    return Mock()


@pytest.fixture
def service(mock_repo, mock_timeslots):
    return BookingService(repo=mock_repo, timeslots=mock_timeslots)


class TestCreateBooking:

    def test_defaults_status_to_pending(self, service, mock_repo):
        result = service.create_booking(PAYLOAD)

        assert result["status"] == "pending"
        assert mock_repo.create.call_args.args[0]["status"] == "pending"

    def test_keeps_explicit_status(self, service):
        result = service.create_booking({**PAYLOAD, "status": "confirmed"})
        assert result["status"] == "confirmed"

    def test_does_not_mutate_input(self, service):
        payload = dict(PAYLOAD)
        service.create_booking(payload)
        assert "status" not in payload

    def test_marks_timeslot_booked_with_booking_id(self, service, mock_timeslots):
        service.create_booking(PAYLOAD)

        mock_timeslots.set_timeslot_status.assert_called_once_with("p1", "t1", "booked", "b1")

    def test_writes_booking_before_remote_call(self, service, mock_repo, mock_timeslots):
        order = []
        mock_repo.create.side_effect = lambda data: order.append("store") or {**data, "id": "b1"}
        mock_timeslots.set_timeslot_status.side_effect = lambda *a: order.append("remote")

        service.create_booking(PAYLOAD)

        assert order == ["store", "remote"]

    def test_remote_failure_raises_distinct_error_and_keeps_booking(self, service, mock_repo, mock_timeslots):
        mock_timeslots.set_timeslot_status.side_effect = RemoteCallError("Timeslot already booked")

        with pytest.raises(TimeslotUpdateError) as exc_info:
            service.create_booking(PAYLOAD)

        assert "failed to update timeslot" in str(exc_info.value)
        assert "Timeslot already booked" in str(exc_info.value)
        assert exc_info.value.booking["id"] == "b1"
        assert exc_info.value.status_code == 500
        mock_repo.create.assert_called_once()

    def test_any_remote_exception_is_wrapped(self, service, mock_timeslots):
        mock_timeslots.set_timeslot_status.side_effect = TimeoutError("timed out")

        with pytest.raises(TimeslotUpdateError):
            service.create_booking(PAYLOAD)

    def test_store_failure_propagates_without_remote_call(self, service, mock_repo, mock_timeslots):
        mock_repo.create.side_effect = StoreError("write failed")

        with pytest.raises(StoreError):
            service.create_booking(PAYLOAD)

        mock_timeslots.set_timeslot_status.assert_not_called()


class TestGetBooking:

    def test_returns_stored_attributes(self, service, mock_repo):
        assert service.get_booking("b1", "c1") == STORED
        mock_repo.get.assert_called_once_with("b1", "c1")

    def test_missing_raises_not_found(self, service, mock_repo):
        mock_repo.get.return_value = Lookup.empty()

        with pytest.raises(NotFoundError, match="Booking not found"):
            service.get_booking("missing", "c1")


class TestUpdateBookingStatus:

    def test_missing_booking_is_rejected(self, service, mock_repo, mock_timeslots):
        mock_repo.get.return_value = Lookup.empty()

        with pytest.raises(NotFoundError):
            service.update_booking_status("missing", "c1", "confirmed")

        mock_repo.update_status.assert_not_called()
        mock_timeslots.set_timeslot_status.assert_not_called()

    @pytest.mark.parametrize("status", ["confirmed", "completed"])
    def test_non_cancel_statuses_never_call_timeslot_service(self, service, mock_repo, mock_timeslots, status):
        mock_repo.update_status.return_value = {**STORED, "status": status}

        result = service.update_booking_status("b1", "c1", status)

        assert result["status"] == status
        mock_repo.update_status.assert_called_once_with("b1", "c1", status)
        mock_timeslots.set_timeslot_status.assert_not_called()

    def test_cancel_releases_timeslot(self, service, mock_repo, mock_timeslots):
        mock_repo.update_status.return_value = {**STORED, "status": "cancelled"}

        result = service.update_booking_status("b1", "c1", "cancelled")

        assert result["status"] == "cancelled"
        mock_timeslots.set_timeslot_status.assert_called_once_with("p1", "t1", "available", None)

    def test_cancel_remote_failure_is_not_surfaced(self, service, mock_repo, mock_timeslots):
        updated = {**STORED, "status": "cancelled", "updatedAt": "later"}
        mock_repo.update_status.return_value = updated
        mock_timeslots.set_timeslot_status.side_effect = RemoteCallError("Error calling timeslot service")

        result = service.update_booking_status("b1", "c1", "cancelled")

        assert result == updated
        mock_timeslots.set_timeslot_status.assert_called_once()

    def test_store_failure_on_update_propagates(self, service, mock_repo):
        mock_repo.update_status.side_effect = StoreError("update failed")

        with pytest.raises(StoreError):
            service.update_booking_status("b1", "c1", "confirmed")


class TestIndexLookups:

    def test_by_provider(self, service, mock_repo):
        mock_repo.get_by_provider.return_value = [STORED]
        assert service.get_bookings_by_provider("p1") == [STORED]

    def test_by_provider_empty_is_not_an_error(self, service, mock_repo):
        mock_repo.get_by_provider.return_value = []
        assert service.get_bookings_by_provider("nobody") == []

    def test_by_client_empty_is_not_an_error(self, service, mock_repo):
        mock_repo.get_by_client.return_value = []
        assert service.get_bookings_by_client("nobody") == []
