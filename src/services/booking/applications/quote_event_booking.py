from services.booking.applications.lookup import get_booking_or_raise
from services.booking.domain import Booking, BookingId, BookingRepository
from services.pricing.domain import ResourceType
from services.shared.domain import Money
from services.shared.utils import ActingContext


class QuoteEventBookingService:
    """イベントスペース予約の料金を設定するユースケース（スタッフ操作）"""

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def quote(
        self,
        resource_type: ResourceType,
        booking_id: BookingId,
        amount: Money,
        context: ActingContext,
    ) -> Booking:
        booking = get_booking_or_raise(self._repository, resource_type, booking_id)
        expected_status = booking.status
        expected_version = booking.version
        booking.quote(amount, actor=context.actor)
        self._repository.update(
            booking, expected_status=expected_status, expected_version=expected_version
        )
        return booking
