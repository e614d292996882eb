from dataclasses import dataclass

from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import BookingId


@dataclass(frozen=True)
class BookingCreated:
    booking_id: BookingId
    status: BookingStatus
    payment_status: str


@dataclass(frozen=True)
class BookingStatusChanged:
    booking_id: BookingId
    from_status: BookingStatus
    to_status: BookingStatus
    actor: str


@dataclass(frozen=True)
class PaymentRecorded:
    booking_id: BookingId
    actor: str


@dataclass(frozen=True)
class PriceQuoted:
    booking_id: BookingId
    amount: str
    actor: str
