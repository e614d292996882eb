from dataclasses import dataclass

from services.booking.applications.lookup import get_booking_or_raise
from services.booking.domain import Booking, BookingId, BookingRepository, BookingStatus
from services.pricing.domain import ResourceType
from services.shared.domain import Money
from services.shared.utils import ActingContext


@dataclass(frozen=True)
class BookingChanges:
    """スタッフによる予約更新の内容（指定された項目のみ適用する）"""

    status: BookingStatus | None = None
    record_payment: bool = False
    total_amount: Money | None = None


class UpdateBookingService:
    """予約の複数項目をまとめて更新するユースケース（スタッフ操作）

    料金設定 → 支払い記録 → ステータス遷移の順にメモリ上で適用し、
    1回の条件付き更新で保存する。途中で拒否された場合は何も書き込まない。
    """

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def apply(
        self,
        resource_type: ResourceType,
        booking_id: BookingId,
        changes: BookingChanges,
        context: ActingContext,
    ) -> Booking:
        booking = get_booking_or_raise(self._repository, resource_type, booking_id)
        expected_status = booking.status
        expected_version = booking.version

        if changes.total_amount is not None:
            booking.quote(changes.total_amount, actor=context.actor)
        if changes.record_payment:
            booking.record_payment(actor=context.actor)
        if changes.status is not None:
            booking.transition_to(changes.status, actor=context.actor)

        self._repository.update(
            booking, expected_status=expected_status, expected_version=expected_version
        )
        return booking
