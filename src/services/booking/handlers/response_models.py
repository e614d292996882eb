from __future__ import annotations

from pydantic import BaseModel

from services.booking.domain import Booking


class BookingData(BaseModel):
    """予約データのレスポンスモデル"""

    booking_id: str
    resource_type: str
    resource_ref: str | None
    guest_name: str
    guest_email: str
    guest_phone: str | None
    parameters: dict
    total_amount: str | None
    currency: str | None
    payment_method: str | None
    payment_status: str
    transaction_reference: str | None
    status: str
    notes: str | None
    created_at: str
    updated_at: str
    version: int


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    status: str = "success"
    data: BookingData


class ListResponse(BaseModel):
    """一覧レスポンスモデル"""

    status: str = "success"
    data: list[BookingData]
    count: int


def to_booking_data(booking: Booking) -> BookingData:
    """Booking エンティティをレスポンスモデルに変換する"""
    total = booking.total_amount
    return BookingData(
        booking_id=str(booking.id),
        resource_type=booking.resource_type.value,
        resource_ref=booking.resource_ref,
        guest_name=booking.contact.name,
        guest_email=booking.contact.email,
        guest_phone=booking.contact.phone,
        parameters=booking.parameters,
        total_amount=str(total.amount) if total else None,
        currency=str(total.currency) if total else None,
        payment_method=booking.payment_method.value if booking.payment_method else None,
        payment_status=booking.payment_status.value,
        transaction_reference=(
            str(booking.transaction_reference) if booking.transaction_reference else None
        ),
        status=booking.status.value,
        notes=booking.notes,
        created_at=str(booking.created_at),
        updated_at=str(booking.updated_at),
        version=booking.version,
    )


def to_response(booking: Booking) -> dict:
    """Booking エンティティをレスポンス辞書に変換する"""
    return SuccessResponse(data=to_booking_data(booking)).model_dump()


def to_list_response(bookings: list[Booking]) -> dict:
    data = [to_booking_data(booking) for booking in bookings]
    return ListResponse(data=data, count=len(data)).model_dump()
