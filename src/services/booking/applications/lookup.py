from services.booking.domain import Booking, BookingId, BookingRepository
from services.pricing.domain import ResourceType
from services.shared.domain.exception import ResourceNotFoundException


def get_booking_or_raise(
    repository: BookingRepository, resource_type: ResourceType, booking_id: BookingId
) -> Booking:
    """予約を取得する（存在しなければ ResourceNotFoundException）"""
    booking = repository.find_by_id(booking_id, resource_type)
    if booking is None:
        raise ResourceNotFoundException(
            f"{resource_type.value} booking not found: {booking_id}"
        )
    return booking
