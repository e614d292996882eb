from datetime import date

from services.booking.domain import Booking, BookingDraft, BookingFactory, BookingRepository
from services.shared.domain.exception import DuplicateResourceException


class SubmitInquiryService:
    """イベントスペースの問い合わせを受け付けるユースケース

    決済は行わず、料金未設定・未払いの保留中予約として保存する。
    """

    def __init__(self, repository: BookingRepository, factory: BookingFactory) -> None:
        self._repository = repository
        self._factory = factory

    def submit(
        self, draft: BookingDraft, request_id: str | None = None, today: date | None = None
    ) -> Booking:
        """問い合わせを保存する"""
        draft.check_submittable(today)
        booking = self._factory.create_inquiry(draft, request_id)
        try:
            self._repository.save(booking)
        except DuplicateResourceException:
            existing = self._repository.find_by_id(booking.id, booking.resource_type)
            if existing is not None:
                return existing
            raise
        return booking
