from .payment_method_registry import PAYMENT_METHODS, PaymentMethodRegistry, PaymentMethodSpec

__all__ = ["PAYMENT_METHODS", "PaymentMethodRegistry", "PaymentMethodSpec"]
