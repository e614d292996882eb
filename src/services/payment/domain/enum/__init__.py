from .payment_method import PaymentMethod
from .payment_status import PaymentStatus

__all__ = ["PaymentMethod", "PaymentStatus"]
