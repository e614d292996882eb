from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from .currency import Currency

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """金額（通貨情報含む）

    金額は Decimal の固定小数点（小数2桁）で保持し、float を経由しない。
    """

    amount: Decimal
    currency: Currency

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise TypeError("Amount must be a Decimal")
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")
        object.__setattr__(
            self, "amount", self.amount.quantize(_CENT, rounding=ROUND_HALF_UP)
        )

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def add(self, other: Money) -> Money:
        """金額を加算する"""
        if self.currency != other.currency:
            raise ValueError("Cannot add money with different currencies")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def multiply(self, factor: int) -> Money:
        """整数倍した金額を返す（泊数・人数・数量）"""
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError("Factor must be an integer")
        if factor < 0:
            raise ValueError("Factor cannot be negative")
        return Money(amount=self.amount * factor, currency=self.currency)

    def is_zero(self) -> bool:
        return self.amount == 0

    @classmethod
    def zero(cls, currency: Currency) -> Money:
        return cls(Decimal("0"), currency)

    @classmethod
    def etb(cls, amount: Decimal | int | str) -> Money:
        """エチオピア・ブルで Money を生成"""
        return cls(Decimal(str(amount)), Currency.etb())
