from enum import Enum


class PaymentStatus(str, Enum):
    """支払いステータス（予約ステータスとは独立）"""

    UNPAID = "unpaid"
    PENDING = "pending"
    PAID = "paid"
