from services.booking.domain.enum import BookingStatus
from services.booking.domain.event import (
    BookingCreated,
    BookingStatusChanged,
    PaymentRecorded,
    PriceQuoted,
)
from services.booking.domain.value_object import BookingId, ContactInfo
from services.payment.domain import PaymentMethod, PaymentStatus, TransactionReference
from services.pricing.domain import ResourceType
from services.shared.domain import AggregateRoot, IsoDateTime, Money
from services.shared.domain.exception import InvalidTransitionException

_ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


class Booking(AggregateRoot[BookingId]):
    """予約エンティティ

    7種別の予約で共通の形を持ち、種別固有の入力は parameters に保持する。
    状態変更のたびに version を進め、永続化時の楽観ロックに使う。
    """

    def __init__(
        self,
        id: BookingId,
        resource_type: ResourceType,
        resource_ref: str | None,
        contact: ContactInfo,
        parameters: dict,
        total_amount: Money | None,
        payment_method: PaymentMethod | None,
        payment_status: PaymentStatus,
        transaction_reference: TransactionReference | None,
        status: BookingStatus = BookingStatus.PENDING,
        notes: str | None = None,
        created_at: IsoDateTime | None = None,
        updated_at: IsoDateTime | None = None,
        version: int = 1,
        updated_by: str | None = None,
    ) -> None:
        super().__init__(id)
        self._resource_type = resource_type
        self._resource_ref = resource_ref
        self._contact = contact
        self._parameters = dict(parameters)
        self._total_amount = total_amount
        self._payment_method = payment_method
        self._payment_status = payment_status
        self._transaction_reference = transaction_reference
        self._status = status
        self._notes = notes
        self._created_at = created_at or IsoDateTime.now()
        self._updated_at = updated_at or self._created_at
        self._version = version
        self._updated_by = updated_by
        self._assert_payment_consistency()

    @classmethod
    def open(cls, **kwargs) -> "Booking":
        """新規予約を生成し、作成イベントを記録する"""
        booking = cls(**kwargs)
        booking.add_domain_event(
            BookingCreated(
                booking_id=booking.id,
                status=booking.status,
                payment_status=booking.payment_status.value,
            )
        )
        return booking

    @property
    def resource_type(self) -> ResourceType:
        return self._resource_type

    @property
    def resource_ref(self) -> str | None:
        return self._resource_ref

    @property
    def contact(self) -> ContactInfo:
        return self._contact

    @property
    def parameters(self) -> dict:
        return dict(self._parameters)

    @property
    def total_amount(self) -> Money | None:
        return self._total_amount

    @property
    def payment_method(self) -> PaymentMethod | None:
        return self._payment_method

    @property
    def payment_status(self) -> PaymentStatus:
        return self._payment_status

    @property
    def transaction_reference(self) -> TransactionReference | None:
        return self._transaction_reference

    @property
    def status(self) -> BookingStatus:
        return self._status

    @property
    def notes(self) -> str | None:
        return self._notes

    @property
    def created_at(self) -> IsoDateTime:
        return self._created_at

    @property
    def updated_at(self) -> IsoDateTime:
        return self._updated_at

    @property
    def version(self) -> int:
        return self._version

    @property
    def updated_by(self) -> str | None:
        return self._updated_by

    def can_transition_to(self, target: BookingStatus) -> bool:
        return target in _ALLOWED_TRANSITIONS[self._status]

    def transition_to(self, target: BookingStatus, actor: str) -> None:
        """予約ステータスを遷移させる"""
        if not self.can_transition_to(target):
            raise InvalidTransitionException(
                f"Cannot transition booking from {self._status.value} to {target.value}"
            )
        previous = self._status
        self._status = target
        self._touch(actor)
        self.add_domain_event(
            BookingStatusChanged(
                booking_id=self.id, from_status=previous, to_status=target, actor=actor
            )
        )

    def confirm(self, actor: str) -> None:
        self.transition_to(BookingStatus.CONFIRMED, actor)

    def complete(self, actor: str) -> None:
        self.transition_to(BookingStatus.COMPLETED, actor)

    def cancel(self, actor: str) -> None:
        self.transition_to(BookingStatus.CANCELLED, actor)

    def record_payment(self, actor: str) -> None:
        """ホテル払いの支払いを受領済みにする（支払いステータスの訂正）"""
        if self._payment_status != PaymentStatus.PENDING:
            raise InvalidTransitionException(
                f"Cannot record payment for a booking in {self._payment_status.value} payment status"
            )
        if self._status == BookingStatus.CANCELLED:
            raise InvalidTransitionException("Cannot record payment for a cancelled booking")
        self._payment_status = PaymentStatus.PAID
        self._touch(actor)
        self._assert_payment_consistency()
        self.add_domain_event(PaymentRecorded(booking_id=self.id, actor=actor))

    def quote(self, amount: Money, actor: str) -> None:
        """イベントスペース予約の料金をスタッフが設定する"""
        if self._resource_type != ResourceType.EVENT_SPACE:
            raise InvalidTransitionException(
                "Only event space bookings are priced by staff"
            )
        if self._status.is_terminal:
            raise InvalidTransitionException(
                f"Cannot quote a {self._status.value} booking"
            )
        if amount.is_zero():
            raise InvalidTransitionException("Quoted amount must be greater than zero")
        self._total_amount = amount
        self._touch(actor)
        self.add_domain_event(
            PriceQuoted(booking_id=self.id, amount=str(amount), actor=actor)
        )

    def _touch(self, actor: str) -> None:
        self._version += 1
        self._updated_at = IsoDateTime.now()
        self._updated_by = actor

    def _assert_payment_consistency(self) -> None:
        if self._payment_status == PaymentStatus.PAID:
            assert self._transaction_reference is not None, (
                f"Paid booking without transaction reference: {self.id}"
            )
        if self._payment_method is None:
            assert self._payment_status == PaymentStatus.UNPAID, (
                f"Booking without payment method must be unpaid: {self.id}"
            )
