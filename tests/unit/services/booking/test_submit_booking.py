from datetime import date

import pytest

from services.booking.applications.create_booking import CreateBookingService
from services.booking.applications.submit_booking import SubmitBookingService
from services.booking.domain import BookingFactory, BookingStatus
from services.payment.applications.settle_payment import SettlePaymentService
from services.payment.domain import (
    PaymentDetails,
    PaymentGateway,
    PaymentMethod,
    PaymentStatus,
    SubmissionContext,
    TransactionReference,
)
from services.payment.infrastructure.simulated_payment_gateway import (
    SimulatedPaymentGateway,
)
from services.pricing.domain import ResourceType
from services.shared.domain import Money
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    DraftIncompleteException,
    DuplicateResourceException,
    PersistenceException,
    SettlementCancelledException,
)

TODAY = date(2024, 5, 1)


class AbandoningGateway(PaymentGateway):
    """オーソリ中に申込みが破棄されても結果を返してしまう決済レール"""

    def __init__(self, submission: SubmissionContext) -> None:
        self.submission = submission

    def authorize(self, amount, details, cancel_event):
        self.submission.cancel()
        return TransactionReference.generate()


class TestSubmitBookingService:
    def test_room_paid_by_bank_transfer_is_confirmed(self, submit_service, create_draft, repository):
        draft = create_draft()
        assert draft.computed_total() == Money.etb(360)

        booking = submit_service.submit(
            draft,
            PaymentDetails(method=PaymentMethod.BANK_TRANSFER, account_number="1000123456"),
            today=TODAY,
        )

        assert booking.total_amount == Money.etb(360)
        assert booking.payment_status == PaymentStatus.PAID
        assert booking.status == BookingStatus.CONFIRMED
        assert str(booking.id) == f"booking_for_{booking.transaction_reference}"
        assert booking.contact.email == "abebe@example.com"
        assert repository.find_by_id(booking.id, ResourceType.ROOM) is not None

    def test_spa_paid_at_hotel_is_pending(self, submit_service, create_draft, spa):
        draft = create_draft(
            ResourceType.SPA, spa, {"booking_date": "2024-06-01", "booking_time": "10:00"}
        )

        booking = submit_service.submit(
            draft, PaymentDetails(method=PaymentMethod.PAY_AT_HOTEL), today=TODAY
        )

        assert booking.total_amount == Money.etb(800)
        assert booking.payment_status == PaymentStatus.PENDING
        assert booking.status == BookingStatus.PENDING
        assert booking.transaction_reference is not None

    def test_room_service_stores_cart_snapshot(self, submit_service, create_draft, menu):
        draft = (
            create_draft(ResourceType.ROOM_SERVICE, None, {"room_number": "204"})
            .add_item(menu["tibs"], 2)
            .add_item(menu["kitfo"], 1)
            .remove_item("kitfo")
        )

        booking = submit_service.submit(
            draft,
            PaymentDetails(method=PaymentMethod.TELEBIRR, phone_number="0911000000"),
            today=TODAY,
        )

        assert booking.total_amount == Money.etb(300)
        assert booking.parameters["items"] == [
            {"id": "tibs", "name": "Tibs", "price": "150.00", "quantity": 2}
        ]
        assert booking.resource_ref is None

    def test_incomplete_draft_creates_nothing(self, submit_service, create_draft, repository):
        draft = create_draft().update("check_in", None)

        with pytest.raises(DraftIncompleteException):
            submit_service.submit(
                draft,
                PaymentDetails(method=PaymentMethod.TELEBIRR, phone_number="0911000000"),
                today=TODAY,
            )

        assert repository.items == {}

    def test_abandoned_submission_creates_nothing(self, create_draft, repository):
        submission = SubmissionContext()
        service = SubmitBookingService(
            settlement=SettlePaymentService(gateway=AbandoningGateway(submission)),
            creator=CreateBookingService(repository=repository, factory=BookingFactory()),
        )

        with pytest.raises(SettlementCancelledException):
            service.submit(
                create_draft(),
                PaymentDetails(method=PaymentMethod.TELEBIRR, phone_number="0911000000"),
                today=TODAY,
                submission=submission,
            )

        assert repository.save_calls == 0


class TestCreateBookingService:
    @pytest.fixture
    def outcome(self, create_draft, instant_settlement):
        return instant_settlement.settle(
            create_draft(),
            PaymentDetails(method=PaymentMethod.AMOLE, phone_number="0911000000"),
            today=TODAY,
        )

    @pytest.fixture
    def instant_settlement(self):
        return SettlePaymentService(gateway=SimulatedPaymentGateway(delay_seconds=0))

    def test_create_is_idempotent_per_settlement(self, repository, create_draft, outcome):
        service = CreateBookingService(repository=repository, factory=BookingFactory())

        first = service.create(create_draft(), outcome)
        second = service.create(create_draft(), outcome)

        assert first.id == second.id
        assert len(repository.items) == 1
        assert repository.save_calls == 2

    def test_total_changed_after_settlement(self, repository, create_draft, outcome):
        service = CreateBookingService(repository=repository, factory=BookingFactory())
        changed = create_draft().update("check_out", "2024-06-05")

        with pytest.raises(BusinessRuleViolationException):
            service.create(changed, outcome)

        assert repository.items == {}


class TestSubmitBookingRetry:
    @pytest.fixture
    def details(self):
        return PaymentDetails(method=PaymentMethod.TELEBIRR, phone_number="0911000000")

    @pytest.fixture
    def failing_once(self, repository, monkeypatch):
        """最初の保存だけ失敗させる"""
        save = repository.save
        calls = []

        def _save(booking):
            calls.append(booking.id)
            if len(calls) == 1:
                raise PersistenceException("table unavailable")
            save(booking)

        monkeypatch.setattr(repository, "save", _save)
        return calls

    def test_retry_after_save_failure_reuses_settlement(
        self, submit_service, create_draft, details, repository, gateway, ledger, failing_once
    ):
        with pytest.raises(PersistenceException):
            submit_service.submit(create_draft(), details, today=TODAY, idempotency_key="req-1")

        booking = submit_service.submit(
            create_draft(), details, today=TODAY, idempotency_key="req-1"
        )

        assert len(gateway.authorizations) == 1
        assert booking.transaction_reference == gateway.authorizations[0]
        assert ledger.find("req-1").transaction_reference == gateway.authorizations[0]
        assert len(repository.items) == 1

    def test_repeated_request_returns_same_booking(
        self, submit_service, create_draft, details, repository, gateway
    ):
        first = submit_service.submit(create_draft(), details, today=TODAY, idempotency_key="req-1")
        second = submit_service.submit(
            create_draft(), details, today=TODAY, idempotency_key="req-1"
        )

        assert first.id == second.id
        assert len(gateway.authorizations) == 1
        assert len(repository.items) == 1

    def test_without_key_each_request_settles(self, submit_service, create_draft, details, gateway):
        submit_service.submit(create_draft(), details, today=TODAY)
        submit_service.submit(create_draft(), details, today=TODAY)

        assert len(gateway.authorizations) == 2

    def test_key_reused_for_different_amount(
        self, submit_service, create_draft, details, repository, gateway
    ):
        submit_service.submit(create_draft(), details, today=TODAY, idempotency_key="req-1")
        longer_stay = create_draft().update("check_out", "2024-06-05")

        with pytest.raises(BusinessRuleViolationException):
            submit_service.submit(longer_stay, details, today=TODAY, idempotency_key="req-1")

        assert len(gateway.authorizations) == 1
        assert len(repository.items) == 1

    def test_concurrent_record_uses_first_settlement(
        self, submit_service, create_draft, details, repository, gateway, ledger, monkeypatch
    ):
        # 台帳の確認後、記録前に別リクエストが同じキーで記録したケース
        earlier = SettlePaymentService(gateway=SimulatedPaymentGateway(delay_seconds=0)).settle(
            create_draft(), details, today=TODAY
        )
        record = ledger.record

        def _record(key, outcome):
            record(key, earlier)
            raise DuplicateResourceException(f"Settlement already recorded: {key}")

        monkeypatch.setattr(ledger, "record", _record)

        booking = submit_service.submit(
            create_draft(), details, today=TODAY, idempotency_key="req-1"
        )

        assert booking.transaction_reference == earlier.transaction_reference
        assert len(repository.items) == 1
