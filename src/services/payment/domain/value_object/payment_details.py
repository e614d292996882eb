from dataclasses import dataclass

from services.payment.domain.enum import PaymentMethod


@dataclass(frozen=True)
class PaymentDetails:
    """支払いダイアログの入力（支払い方法 + 方法ごとの必須項目）"""

    method: PaymentMethod
    phone_number: str | None = None
    account_number: str | None = None

    def field_value(self, name: str) -> str | None:
        """項目名から入力値を取り出す（未知の項目は None）"""
        value = getattr(self, name, None)
        return value if isinstance(value, str) else None
