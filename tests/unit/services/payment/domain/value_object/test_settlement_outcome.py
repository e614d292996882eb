import pytest

from services.payment.domain import (
    PaymentMethod,
    PaymentStatus,
    SettlementOutcome,
    TransactionReference,
)
from services.shared.domain import Money


class TestSettlementOutcome:
    def test_pay_at_hotel_cannot_be_paid(self):
        with pytest.raises(AssertionError):
            SettlementOutcome(
                method=PaymentMethod.PAY_AT_HOTEL,
                transaction_reference=TransactionReference.generate(),
                payment_status=PaymentStatus.PAID,
                amount=Money.etb(800),
            )

    def test_online_method_cannot_be_pending(self):
        with pytest.raises(AssertionError):
            SettlementOutcome(
                method=PaymentMethod.TELEBIRR,
                transaction_reference=TransactionReference.generate(),
                payment_status=PaymentStatus.PENDING,
                amount=Money.etb(800),
            )

    def test_unpaid_is_never_a_settlement_result(self):
        with pytest.raises(AssertionError):
            SettlementOutcome(
                method=PaymentMethod.AMOLE,
                transaction_reference=TransactionReference.generate(),
                payment_status=PaymentStatus.UNPAID,
                amount=Money.etb(800),
            )
