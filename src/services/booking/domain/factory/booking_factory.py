from services.booking.domain.draft.booking_draft import BookingDraft
from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import BookingId
from services.payment.domain import PaymentStatus, SettlementOutcome
from services.pricing.domain import ResourceType
from services.pricing.domain.tariff import AIRPORT, HOTEL
from services.shared.domain.exception import BusinessRuleViolationException

_INITIAL_STATUS: dict[PaymentStatus, BookingStatus] = {
    PaymentStatus.PAID: BookingStatus.CONFIRMED,
    PaymentStatus.PENDING: BookingStatus.PENDING,
}


def _stored_parameters(draft: BookingDraft) -> dict:
    """ドラフトの入力を永続化用の辞書に変換する"""
    parameters = dict(draft.parameters)
    if draft.resource_type == ResourceType.ROOM_SERVICE:
        parameters["items"] = [line.to_dict() for line in draft.cart.lines]
    elif draft.resource_type == ResourceType.TRANSFER:
        is_pickup = parameters.get("transfer_type") == "pickup"
        parameters["pickup_location"] = AIRPORT if is_pickup else HOTEL
        parameters["dropoff_location"] = HOTEL if is_pickup else AIRPORT
    return parameters


class BookingFactory:
    """予約エンティティを生成する Factory"""

    def create(self, draft: BookingDraft, outcome: SettlementOutcome) -> Booking:
        """決済済みのドラフトから予約を生成する"""
        total = draft.computed_total()
        if total != outcome.amount:
            raise BusinessRuleViolationException(
                "Draft total changed after settlement"
            )

        return Booking.open(
            id=BookingId.from_transaction_reference(outcome.transaction_reference),
            resource_type=draft.resource_type,
            resource_ref=draft.resource_ref,
            contact=draft.contact(),
            parameters=_stored_parameters(draft),
            total_amount=total,
            payment_method=outcome.method,
            payment_status=outcome.payment_status,
            transaction_reference=outcome.transaction_reference,
            status=_INITIAL_STATUS[outcome.payment_status],
            notes=draft.notes,
        )

    def create_inquiry(self, draft: BookingDraft, request_id: str | None = None) -> Booking:
        """決済を伴わない問い合わせ（イベントスペース）の予約を生成する"""
        if draft.requires_payment:
            raise BusinessRuleViolationException(
                f"{draft.resource_type.value} bookings require payment"
            )
        booking_id = (
            BookingId.from_request_id(request_id) if request_id else BookingId.generate()
        )
        return Booking.open(
            id=booking_id,
            resource_type=draft.resource_type,
            resource_ref=draft.resource_ref,
            contact=draft.contact(),
            parameters=_stored_parameters(draft),
            total_amount=None,
            payment_method=None,
            payment_status=PaymentStatus.UNPAID,
            transaction_reference=None,
            status=BookingStatus.PENDING,
            notes=draft.notes,
        )
