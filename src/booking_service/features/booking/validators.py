"""
Request schemas for booking endpoints.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


# pending is only ever set at creation
UPDATABLE_STATUSES = frozenset({
    BookingStatus.CONFIRMED.value,
    BookingStatus.CANCELLED.value,
    BookingStatus.COMPLETED.value,
})


class BookingCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", use_enum_values=True)

    clientId: str = Field(min_length=1)
    providerUserSub: str = Field(min_length=1)
    timeslotId: str = Field(min_length=1)
    serviceId: str = Field(min_length=1)
    status: BookingStatus = BookingStatus.PENDING
    notes: Optional[str] = None


class BookingStatusUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", use_enum_values=True)

    status: BookingStatus

    @field_validator("status")
    @classmethod
    def check_updatable(cls, value):
        if BookingStatus(value).value not in UPDATABLE_STATUSES:
            allowed = ", ".join(sorted(UPDATABLE_STATUSES))
            raise ValueError(f"status must be one of: {allowed}")
        return value
