from .booking_id import BookingId
from .contact_info import ContactInfo

__all__ = ["BookingId", "ContactInfo"]
