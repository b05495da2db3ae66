from typing import Any, Dict, List, Optional
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from booking_service.app import create_app
from booking_service.config import BookingConfig
from booking_service.features.booking.repo import BookingRepo
from booking_service.features.booking.service import BookingService


class InMemoryBookingDB:
    """Dict-backed stand-in for BookingDB with the same method surface."""

    def __init__(self):
        self.items: Dict[tuple, Dict[str, Any]] = {}

    def ensure_table(self) -> None:
        pass

    def put_booking(self, item: Dict[str, Any]) -> Dict[str, Any]:
        self.items[(item["id"], item["clientId"])] = dict(item)
        return item

    def get_booking(self, booking_id: str, client_id: str) -> Optional[Dict[str, Any]]:
        item = self.items.get((booking_id, client_id))
        return dict(item) if item is not None else None

    def update_status(self, booking_id: str, client_id: str, status: str, updated_at: str) -> Dict[str, Any]:
        item = self.items.setdefault((booking_id, client_id), {"id": booking_id, "clientId": client_id})
        item["status"] = status
        item["updatedAt"] = updated_at
        return dict(item)

    def query_by_provider(self, provider_user_sub: str) -> List[Dict[str, Any]]:
        return sorted(
            (dict(i) for i in self.items.values() if i.get("providerUserSub") == provider_user_sub),
            key=lambda i: i["id"],
        )

    def query_by_client(self, client_id: str) -> List[Dict[str, Any]]:
        return sorted(
            (dict(i) for i in self.items.values() if i.get("clientId") == client_id),
            key=lambda i: i["id"],
        )


@pytest.fixture
def memory_db():
    return InMemoryBookingDB()


@pytest.fixture
def timeslot_client():
    client = Mock()
    client.set_timeslot_status.return_value = {"status": "booked"}
    return client


@pytest.fixture
def auth_client():
    client = Mock()
    client.verify_token.return_value = True
    return client


@pytest.fixture
def test_config(monkeypatch):
    monkeypatch.setenv("APP_ENV", "development")
    monkeypatch.setenv("INIT_TABLE_ON_STARTUP", "false")
    monkeypatch.setenv("ENABLE_REQUEST_LOGGING", "false")
    return BookingConfig()


@pytest.fixture
def booking_service(memory_db, timeslot_client):
    return BookingService(repo=BookingRepo(memory_db), timeslots=timeslot_client)


@pytest.fixture
def app(test_config, booking_service, auth_client, memory_db):
    return create_app(
        config=test_config,
        booking_service=booking_service,
        auth_client=auth_client,
        db=memory_db,
    )


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer good-token"}
