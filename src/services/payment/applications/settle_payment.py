import os
from concurrent.futures import Executor, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from datetime import date
from typing import Protocol

from services.payment.domain import (
    PaymentDetails,
    PaymentGateway,
    PaymentMethodRegistry,
    SettlementOutcome,
    SubmissionContext,
)
from services.shared.domain import Money
from services.shared.domain.exception import (
    DraftIncompleteException,
    SettlementCancelledException,
    SettlementTimeoutException,
)

_DEFAULT_EXECUTOR = ThreadPoolExecutor(max_workers=8, thread_name_prefix="settlement")


class SettleableDraft(Protocol):
    """決済の対象になれる予約ドラフト"""

    def check_submittable(self, today: date | None = None) -> None: ...

    def computed_total(self) -> Money | None: ...


class SettlePaymentService:
    """決済処理ユースケース

    1. ドラフトが送信可能か検証する
    2. 支払い方法の必須項目を検証する
    3. 決済レールでオーソリする（唯一ブロックする箇所。制限時間とキャンセルを適用）
    4. 支払いステータスを決定して結果を返す
    """

    def __init__(
        self,
        gateway: PaymentGateway,
        registry: PaymentMethodRegistry | None = None,
        timeout_seconds: float | None = None,
        executor: Executor | None = None,
    ) -> None:
        if timeout_seconds is None:
            timeout_seconds = float(os.getenv("SETTLEMENT_TIMEOUT_SECONDS", "10.0"))
        self._gateway = gateway
        self._registry = registry or PaymentMethodRegistry()
        self._timeout_seconds = timeout_seconds
        self._executor = executor or _DEFAULT_EXECUTOR

    def settle(
        self,
        draft: SettleableDraft,
        details: PaymentDetails,
        today: date | None = None,
        submission: SubmissionContext | None = None,
    ) -> SettlementOutcome:
        """ドラフトを決済する"""
        draft.check_submittable(today)
        amount = draft.computed_total()
        if amount is None or amount.is_zero():
            raise DraftIncompleteException(
                "Total amount must be greater than zero", field="total_amount"
            )
        self._registry.validate(details.method, details)

        submission = submission or SubmissionContext()
        if not submission.is_open:
            raise SettlementCancelledException("Submission was abandoned")

        future = self._executor.submit(
            self._gateway.authorize, amount, details, submission.cancel_event
        )
        try:
            reference = future.result(timeout=self._timeout_seconds)
        except FuturesTimeoutError as e:
            # 遅れて届いた結果は破棄される
            submission.cancel()
            raise SettlementTimeoutException(
                f"Payment authorization timed out after {self._timeout_seconds}s"
            ) from e

        return SettlementOutcome(
            method=details.method,
            transaction_reference=reference,
            payment_status=self._registry.resulting_status(details.method),
            amount=amount,
        )
