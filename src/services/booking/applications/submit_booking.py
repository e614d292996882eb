from datetime import date

from aws_lambda_powertools import Logger

from services.booking.applications.create_booking import CreateBookingService
from services.booking.domain import Booking, BookingDraft
from services.payment.applications.settle_payment import SettlePaymentService
from services.payment.domain import (
    PaymentDetails,
    SettlementLedger,
    SettlementOutcome,
    SubmissionContext,
)
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    DuplicateResourceException,
    PersistenceException,
    SettlementCancelledException,
)

logger = Logger(child=True)


class SubmitBookingService:
    """予約申込みのユースケース（ドラフト → 決済 → 予約作成）

    決済後に申込みが破棄されていた場合、予約は作成しない。
    冪等キー付きの申込みは決済結果を台帳に記録し、再送時は決済せずに
    記録済みの結果（同じ取引参照番号 = 同じ予約ID）から予約を作成する。
    """

    def __init__(
        self,
        settlement: SettlePaymentService,
        creator: CreateBookingService,
        ledger: SettlementLedger | None = None,
    ) -> None:
        self._settlement = settlement
        self._creator = creator
        self._ledger = ledger

    def submit(
        self,
        draft: BookingDraft,
        details: PaymentDetails,
        today: date | None = None,
        submission: SubmissionContext | None = None,
        idempotency_key: str | None = None,
    ) -> Booking:
        """申込みを決済して予約を作成する"""
        outcome = self._recorded_outcome(idempotency_key, draft, details)
        if outcome is None:
            submission = submission or SubmissionContext()
            outcome = self._settlement.settle(draft, details, today, submission)
            if not submission.is_open:
                raise SettlementCancelledException(
                    "Submission was abandoned before the booking was created"
                )
            outcome = self._record(idempotency_key, outcome)
        return self._creator.create(draft, outcome)

    def _recorded_outcome(
        self, idempotency_key: str | None, draft: BookingDraft, details: PaymentDetails
    ) -> SettlementOutcome | None:
        if idempotency_key is None or self._ledger is None:
            return None
        outcome = self._ledger.find(idempotency_key)
        if outcome is None:
            return None
        if outcome.method != details.method or outcome.amount != draft.computed_total():
            raise BusinessRuleViolationException(
                f"Request id {idempotency_key} was already used for a different booking"
            )
        logger.info(
            "Reusing recorded settlement",
            extra={"transaction_reference": str(outcome.transaction_reference)},
        )
        return outcome

    def _record(
        self, idempotency_key: str | None, outcome: SettlementOutcome
    ) -> SettlementOutcome:
        if idempotency_key is None or self._ledger is None:
            return outcome
        try:
            self._ledger.record(idempotency_key, outcome)
        except DuplicateResourceException:
            # 同じキーの並行リクエストが先に記録した結果に揃える
            recorded = self._ledger.find(idempotency_key)
            if recorded is None:
                raise PersistenceException(
                    f"Settlement reported as duplicate but not readable: {idempotency_key}"
                ) from None
            logger.warning(
                "Settlement already recorded by a concurrent request",
                extra={
                    "discarded_reference": str(outcome.transaction_reference),
                    "transaction_reference": str(recorded.transaction_reference),
                },
            )
            return recorded
        return outcome
