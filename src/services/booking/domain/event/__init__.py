from .booking_events import BookingCreated, BookingStatusChanged, PaymentRecorded, PriceQuoted

__all__ = ["BookingCreated", "BookingStatusChanged", "PaymentRecorded", "PriceQuoted"]
