from services.booking.applications.lookup import get_booking_or_raise
from services.booking.domain import Booking, BookingId, BookingRepository, BookingStatus
from services.pricing.domain import ResourceType
from services.shared.utils import ActingContext


class TransitionBookingService:
    """予約ステータス遷移のユースケース（スタッフ操作）

    認可は呼び出し側（管理画面のルート）で行う。
    """

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def transition(
        self,
        resource_type: ResourceType,
        booking_id: BookingId,
        target: BookingStatus,
        context: ActingContext,
    ) -> Booking:
        """予約ステータスを遷移させる"""
        booking = get_booking_or_raise(self._repository, resource_type, booking_id)
        expected_status = booking.status
        expected_version = booking.version
        booking.transition_to(target, actor=context.actor)
        self._repository.update(
            booking, expected_status=expected_status, expected_version=expected_version
        )
        return booking
