import os
import threading

from aws_lambda_powertools import Logger

from services.payment.domain import PaymentDetails, PaymentGateway, TransactionReference
from services.shared.domain import Money
from services.shared.domain.exception import SettlementCancelledException

logger = Logger(child=True)


class SimulatedPaymentGateway(PaymentGateway):
    """決済レールのシミュレーター

    固定の遅延後に必ず成功する。遅延中のキャンセルのみ受け付ける。
    """

    def __init__(self, delay_seconds: float | None = None) -> None:
        if delay_seconds is None:
            delay_seconds = float(os.getenv("SETTLEMENT_DELAY_SECONDS", "2.0"))
        if delay_seconds < 0:
            raise ValueError("Delay cannot be negative")
        self.delay_seconds = delay_seconds

    def authorize(
        self,
        amount: Money,
        details: PaymentDetails,
        cancel_event: threading.Event,
    ) -> TransactionReference:
        logger.debug(
            "Simulating payment authorization",
            extra={"method": details.method.value, "amount": str(amount)},
        )
        if cancel_event.wait(self.delay_seconds):
            raise SettlementCancelledException("Submission was abandoned")

        reference = TransactionReference.generate()
        logger.info(
            "Payment authorized",
            extra={
                "method": details.method.value,
                "transaction_reference": str(reference),
            },
        )
        return reference
