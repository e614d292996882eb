from decimal import Decimal

from pydantic import BaseModel, Field, field_validator, model_validator

from services.booking.applications.build_draft import BookingDetails
from services.booking.domain import BookingStatus
from services.payment.domain import PaymentDetails, PaymentMethod
from services.shared.utils import to_decimal

_DATE = r"^\d{4}-\d{2}-\d{2}$"
_TIME = r"^\d{2}:\d{2}$"

_PARAMETER_FIELDS = (
    "check_in",
    "check_out",
    "num_guests",
    "event_type",
    "event_date",
    "start_time",
    "end_time",
    "expected_guests",
    "catering_required",
    "booking_date",
    "booking_time",
    "party_size",
    "participants",
    "transfer_type",
    "flight_number",
    "pickup_date",
    "pickup_time",
    "passengers",
    "luggage_count",
    "room_number",
)


class PaymentRequest(BaseModel):
    """支払い方法のリクエストモデル"""

    method: PaymentMethod
    phone_number: str | None = Field(default=None, max_length=20)
    account_number: str | None = Field(default=None, max_length=34)

    def to_details(self) -> PaymentDetails:
        return PaymentDetails(
            method=self.method,
            phone_number=self.phone_number,
            account_number=self.account_number,
        )


class CartItemRequest(BaseModel):
    """ルームサービスのカート明細のリクエストモデル"""

    menu_item_id: str = Field(..., min_length=1)
    quantity: int = Field(default=1, ge=1, le=50)


class CreateBookingRequest(BaseModel):
    """予約作成リクエストモデル（全種別共通、種別固有の項目は任意）"""

    guest_name: str = Field(..., min_length=1, max_length=100)
    guest_email: str = Field(..., min_length=3, max_length=254)
    guest_phone: str | None = Field(default=None, max_length=20)
    resource_ref: str | None = Field(default=None, description="客室ID・スパID・車両クラス等")
    request_id: str | None = Field(
        default=None,
        min_length=1,
        max_length=64,
        description="冪等キー（再送時は同じ値を送る。決済は一度だけ行われる）",
    )
    special_requests: str | None = Field(default=None, max_length=1000)

    check_in: str | None = Field(default=None, pattern=_DATE, examples=["2024-06-01"])
    check_out: str | None = Field(default=None, pattern=_DATE, examples=["2024-06-04"])
    num_guests: int | None = Field(default=None, ge=1)

    event_type: str | None = Field(default=None, max_length=100)
    event_date: str | None = Field(default=None, pattern=_DATE)
    start_time: str | None = Field(default=None, pattern=_TIME)
    end_time: str | None = Field(default=None, pattern=_TIME)
    expected_guests: int | None = Field(default=None, ge=1)
    catering_required: bool | None = None

    booking_date: str | None = Field(default=None, pattern=_DATE)
    booking_time: str | None = Field(default=None, pattern=_TIME)
    party_size: int | None = Field(default=None, ge=1)
    participants: int | None = Field(default=None, ge=1)

    transfer_type: str | None = Field(default=None, pattern="^(pickup|dropoff)$")
    flight_number: str | None = Field(default=None, max_length=10)
    pickup_date: str | None = Field(default=None, pattern=_DATE)
    pickup_time: str | None = Field(default=None, pattern=_TIME)
    passengers: int | None = Field(default=None, ge=1)
    luggage_count: int | None = Field(default=None, ge=0)

    room_number: str | None = Field(default=None, max_length=10)
    items: list[CartItemRequest] = Field(default_factory=list)

    payment: PaymentRequest | None = None

    def to_details(self) -> BookingDetails:
        """ドラフト組み立て用の入力に変換する（未指定の項目は含めない）"""
        parameters = {
            name: getattr(self, name)
            for name in _PARAMETER_FIELDS
            if getattr(self, name) is not None
        }
        details: BookingDetails = {
            "resource_ref": self.resource_ref,
            "guest_name": self.guest_name,
            "guest_email": self.guest_email,
            "guest_phone": self.guest_phone,
            "notes": self.special_requests,
            "parameters": parameters,
            "items": [
                {"menu_item_id": item.menu_item_id, "quantity": item.quantity}
                for item in self.items
            ],
        }
        return details


class UpdateBookingRequest(BaseModel):
    """予約更新リクエストモデル（スタッフ操作）"""

    status: BookingStatus | None = None
    payment_status: str | None = Field(default=None, pattern="^paid$")
    total_amount: Decimal | None = Field(
        default=None,
        gt=0,
        decimal_places=2,
        description="イベントスペース予約の料金（ETB）",
    )

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_amount_to_decimal(cls, v: object) -> Decimal | None:
        if v is None:
            return None
        return to_decimal(v)

    @model_validator(mode="after")
    def require_one_change(self) -> "UpdateBookingRequest":
        if self.status is None and self.payment_status is None and self.total_amount is None:
            raise ValueError("One of status, payment_status or total_amount is required")
        return self
