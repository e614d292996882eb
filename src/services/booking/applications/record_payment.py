from services.booking.applications.lookup import get_booking_or_raise
from services.booking.domain import Booking, BookingId, BookingRepository
from services.pricing.domain import ResourceType
from services.shared.utils import ActingContext


class RecordPaymentService:
    """ホテル払いの受領を記録するユースケース（支払いステータスの訂正）"""

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def record(
        self, resource_type: ResourceType, booking_id: BookingId, context: ActingContext
    ) -> Booking:
        booking = get_booking_or_raise(self._repository, resource_type, booking_id)
        expected_status = booking.status
        expected_version = booking.version
        booking.record_payment(actor=context.actor)
        self._repository.update(
            booking, expected_status=expected_status, expected_version=expected_version
        )
        return booking
