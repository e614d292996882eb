from dataclasses import dataclass

from services.payment.domain.enum import PaymentMethod, PaymentStatus
from services.payment.domain.value_object.transaction_reference import (
    TransactionReference,
)
from services.shared.domain import Money


@dataclass(frozen=True)
class SettlementOutcome:
    """決済の結果

    予約作成時に一度だけ消費される。冪等キー付きの申込みでは決済台帳に記録される。
    """

    method: PaymentMethod
    transaction_reference: TransactionReference
    payment_status: PaymentStatus
    amount: Money

    def __post_init__(self) -> None:
        assert self.payment_status in (PaymentStatus.PAID, PaymentStatus.PENDING), (
            f"Settlement cannot resolve to {self.payment_status}"
        )
        assert self.transaction_reference is not None, (
            "Settlement requires a transaction reference"
        )
        assert (self.payment_status == PaymentStatus.PENDING) == (
            self.method == PaymentMethod.PAY_AT_HOTEL
        ), f"{self.method.value} cannot resolve to {self.payment_status.value}"
