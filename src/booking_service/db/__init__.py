from .booking import BookingDB

__all__ = ["BookingDB"]
