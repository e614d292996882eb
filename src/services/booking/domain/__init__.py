from .draft import BookingDraft
from .entity import Booking
from .enum import BookingStatus
from .factory import BookingFactory
from .repository import BookingRepository
from .value_object import BookingId, ContactInfo

__all__ = [
    "Booking",
    "BookingDraft",
    "BookingFactory",
    "BookingId",
    "BookingRepository",
    "BookingStatus",
    "ContactInfo",
]
