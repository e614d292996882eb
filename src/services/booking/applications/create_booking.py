from aws_lambda_powertools import Logger

from services.booking.domain import Booking, BookingDraft, BookingFactory, BookingRepository
from services.payment.domain import SettlementOutcome
from services.shared.domain.exception import (
    DuplicateResourceException,
    PersistenceException,
)

logger = Logger(child=True)


class CreateBookingService:
    """決済結果から予約を作成するユースケース

    予約IDは取引参照番号から導出されるため、同じ決済結果での再作成は
    条件付き書き込みで弾かれ、既存の予約をそのまま返す（決済の二重適用なし）。
    """

    def __init__(self, repository: BookingRepository, factory: BookingFactory) -> None:
        self._repository = repository
        self._factory = factory

    def create(self, draft: BookingDraft, outcome: SettlementOutcome) -> Booking:
        """予約を作成する"""
        booking = self._factory.create(draft, outcome)
        try:
            self._repository.save(booking)
        except DuplicateResourceException:
            existing = self._repository.find_by_id(booking.id, booking.resource_type)
            if existing is None:
                raise PersistenceException(
                    f"Booking reported as duplicate but not readable: {booking.id}"
                ) from None
            logger.info(
                "Booking already created for transaction reference",
                extra={"booking_id": str(existing.id)},
            )
            return existing
        return booking
