from dataclasses import dataclass

from services.payment.domain.enum import PaymentMethod, PaymentStatus
from services.payment.domain.value_object import PaymentDetails
from services.pricing.domain import ResourceType
from services.shared.domain.exception import MissingFieldException, ValidationException


@dataclass(frozen=True)
class PaymentMethodSpec:
    """支払い方法の定義（必須項目と決済後の支払いステータス）"""

    method: PaymentMethod
    display_name: str
    description: str
    required_fields: frozenset[str]
    resulting_status: PaymentStatus


PAYMENT_METHODS: tuple[PaymentMethodSpec, ...] = (
    PaymentMethodSpec(
        method=PaymentMethod.TELEBIRR,
        display_name="Telebirr",
        description="Pay with Telebirr mobile money",
        required_fields=frozenset({"phone_number"}),
        resulting_status=PaymentStatus.PAID,
    ),
    PaymentMethodSpec(
        method=PaymentMethod.CBE_BIRR,
        display_name="CBE Birr",
        description="Commercial Bank of Ethiopia mobile banking",
        required_fields=frozenset({"phone_number"}),
        resulting_status=PaymentStatus.PAID,
    ),
    PaymentMethodSpec(
        method=PaymentMethod.AMOLE,
        display_name="Amole",
        description="Dashen Bank mobile payment",
        required_fields=frozenset({"phone_number"}),
        resulting_status=PaymentStatus.PAID,
    ),
    PaymentMethodSpec(
        method=PaymentMethod.BANK_TRANSFER,
        display_name="Bank Transfer",
        description="Transfer from any Ethiopian bank",
        required_fields=frozenset({"account_number"}),
        resulting_status=PaymentStatus.PAID,
    ),
    PaymentMethodSpec(
        method=PaymentMethod.PAY_AT_HOTEL,
        display_name="Pay at Hotel",
        description="Pay when you arrive",
        required_fields=frozenset(),
        resulting_status=PaymentStatus.PENDING,
    ),
)


class PaymentMethodRegistry:
    """支払い方法のカタログ

    プロセス起動時に一度だけ定義され、以後は変更されない。
    検証は必須項目が空でないことのみ（電話番号・口座番号の形式は見ない）。
    """

    def __init__(self, methods: tuple[PaymentMethodSpec, ...] = PAYMENT_METHODS) -> None:
        self._methods = methods
        self._by_method = {spec.method: spec for spec in methods}

    def methods_for(self, resource_type: ResourceType | None = None) -> list[PaymentMethodSpec]:
        """提示する支払い方法（予約種別に関わらず全件、定義順）"""
        return list(self._methods)

    def spec(self, method: PaymentMethod) -> PaymentMethodSpec:
        try:
            return self._by_method[method]
        except KeyError:
            raise ValidationException(
                f"Unsupported payment method: {method}", field="method"
            ) from None

    def required_fields(self, method: PaymentMethod) -> frozenset[str]:
        return self.spec(method).required_fields

    def resulting_status(self, method: PaymentMethod) -> PaymentStatus:
        return self.spec(method).resulting_status

    def validate(self, method: PaymentMethod, details: PaymentDetails) -> None:
        """必須項目の入力有無を検証する"""
        for name in sorted(self.required_fields(method)):
            value = details.field_value(name)
            if value is None or not value.strip():
                raise MissingFieldException(name)
