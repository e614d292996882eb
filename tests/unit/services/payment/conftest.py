from datetime import date

import pytest

from services.payment.infrastructure.simulated_payment_gateway import (
    SimulatedPaymentGateway,
)
from services.shared.domain import Money
from services.shared.domain.exception import DraftIncompleteException


class StubDraft:
    """決済対象ドラフトのスタブ（送信可否と合計金額のみ持つ）"""

    def __init__(self, total: Money | None, submittable: bool = True) -> None:
        self._total = total
        self._submittable = submittable

    def check_submittable(self, today: date | None = None) -> None:
        if not self._submittable:
            raise DraftIncompleteException("check_in is required", field="check_in")

    def computed_total(self) -> Money | None:
        return self._total


@pytest.fixture
def create_draft():
    """StubDraft を生成する Factory fixture"""

    def _factory(total: Money | None = Money.etb(360), submittable: bool = True) -> StubDraft:
        return StubDraft(total=total, submittable=submittable)

    return _factory


@pytest.fixture
def instant_gateway():
    """遅延なしで成功する決済レール"""
    return SimulatedPaymentGateway(delay_seconds=0)
