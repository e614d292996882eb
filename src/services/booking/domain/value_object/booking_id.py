from __future__ import annotations

import uuid
from dataclasses import dataclass

from services.payment.domain import TransactionReference


@dataclass(frozen=True)
class BookingId:
    """予約ID"""

    value: str

    def __post_init__(self) -> None:
        if not self.value or len(self.value.strip()) == 0:
            raise ValueError("Booking id cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_transaction_reference(cls, reference: TransactionReference) -> BookingId:
        """取引参照番号から冪等な BookingId を生成する"""
        return cls(value=f"booking_for_{reference}")

    @classmethod
    def from_request_id(cls, request_id: str) -> BookingId:
        """問い合わせのリクエストIDから冪等な BookingId を生成する"""
        return cls(value=f"inquiry_for_{request_id}")

    @classmethod
    def generate(cls) -> BookingId:
        return cls(value=f"inquiry_{uuid.uuid4().hex}")
