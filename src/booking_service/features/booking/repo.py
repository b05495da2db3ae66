"""
Booking repository layer for data access operations.
"""

import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from booking_service.db.booking import BookingDB, now_iso


@dataclass(frozen=True)
class Lookup:
    """Result of a point lookup: either a found item or empty."""

    item: Optional[Dict[str, Any]] = None

    @classmethod
    def of(cls, item: Optional[Dict[str, Any]]) -> "Lookup":
        return cls(item=item)

    @classmethod
    def empty(cls) -> "Lookup":
        return cls(item=None)

    @property
    def found(self) -> bool:
        return self.item is not None

    def unwrap(self) -> Dict[str, Any]:
        if self.item is None:
            raise LookupError("Lookup is empty")
        return self.item


class BookingRepo:
    """
    Thin data-access adapter around BookingDB.
    """

    def __init__(self, db: BookingDB):
        self.db = db

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Assign a fresh id and timestamps, write the booking and return it."""
        timestamp = now_iso()
        item = {
            **data,
            "id": str(uuid.uuid4()),
            "createdAt": timestamp,
            "updatedAt": timestamp,
        }
        return self.db.put_booking(item)

    def get(self, booking_id: str, client_id: str) -> Lookup:
        item = self.db.get_booking(booking_id, client_id)
        return Lookup.of(item) if item is not None else Lookup.empty()

    def update_status(self, booking_id: str, client_id: str, status: str) -> Dict[str, Any]:
        """Set status and refresh updatedAt. Does not check that the booking exists."""
        return self.db.update_status(booking_id, client_id, status, updated_at=now_iso())

    def get_by_provider(self, provider_user_sub: str) -> List[Dict[str, Any]]:
        return self.db.query_by_provider(provider_user_sub)

    def get_by_client(self, client_id: str) -> List[Dict[str, Any]]:
        return self.db.query_by_client(client_id)
