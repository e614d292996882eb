import pytest

from services.booking.applications.list_bookings import ListBookingsService
from services.booking.applications.quote_event_booking import QuoteEventBookingService
from services.booking.applications.record_payment import RecordPaymentService
from services.booking.applications.transition_booking import TransitionBookingService
from services.booking.applications.update_booking import BookingChanges, UpdateBookingService
from services.booking.domain import BookingId, BookingStatus
from services.payment.domain import PaymentMethod, PaymentStatus
from services.pricing.domain import ResourceType
from services.shared.domain import Money
from services.shared.domain.exception import (
    InvalidTransitionException,
    OptimisticLockException,
    ResourceNotFoundException,
)


class TestTransitionBookingService:
    def test_confirm_pending_booking(self, repository, create_booking, staff_context):
        booking = create_booking(status=BookingStatus.PENDING)
        repository.save(booking)
        service = TransitionBookingService(repository=repository)

        updated = service.transition(
            ResourceType.ROOM, booking.id, BookingStatus.CONFIRMED, staff_context
        )

        assert updated.status == BookingStatus.CONFIRMED
        stored = repository.find_by_id(booking.id, ResourceType.ROOM)
        assert stored.status == BookingStatus.CONFIRMED
        assert stored.version == 2
        assert stored.updated_by == "staff-01"

    def test_completed_booking_cannot_be_confirmed(self, repository, create_booking, staff_context):
        booking = create_booking(status=BookingStatus.COMPLETED)
        repository.save(booking)
        service = TransitionBookingService(repository=repository)

        with pytest.raises(InvalidTransitionException):
            service.transition(
                ResourceType.ROOM, booking.id, BookingStatus.CONFIRMED, staff_context
            )

        assert repository.find_by_id(booking.id).status == BookingStatus.COMPLETED

    def test_unknown_booking(self, repository, staff_context):
        service = TransitionBookingService(repository=repository)
        with pytest.raises(ResourceNotFoundException):
            service.transition(
                ResourceType.ROOM,
                BookingId(value="missing"),
                BookingStatus.CANCELLED,
                staff_context,
            )

    def test_wrong_resource_type_is_not_found(self, repository, create_booking, staff_context):
        booking = create_booking()
        repository.save(booking)
        service = TransitionBookingService(repository=repository)
        with pytest.raises(ResourceNotFoundException):
            service.transition(
                ResourceType.SPA, booking.id, BookingStatus.CANCELLED, staff_context
            )

    def test_concurrent_transition_conflicts(self, repository, create_booking, staff_context):
        booking = create_booking(status=BookingStatus.CONFIRMED)
        repository.save(booking)

        stale = repository.find_by_id(booking.id, ResourceType.ROOM)
        TransitionBookingService(repository=repository).transition(
            ResourceType.ROOM, booking.id, BookingStatus.COMPLETED, staff_context
        )
        stale.cancel(actor="staff-02")

        with pytest.raises(OptimisticLockException):
            repository.update(stale, expected_status=BookingStatus.CONFIRMED, expected_version=1)

        assert repository.find_by_id(booking.id).status == BookingStatus.COMPLETED

    def test_transition_with_mock_repository(self, mock_repository, create_booking, staff_context):
        booking = create_booking(status=BookingStatus.CONFIRMED)
        mock_repository.find_by_id.return_value = booking
        service = TransitionBookingService(repository=mock_repository)

        service.transition(ResourceType.ROOM, booking.id, BookingStatus.CANCELLED, staff_context)

        mock_repository.update.assert_called_once_with(
            booking, expected_status=BookingStatus.CONFIRMED, expected_version=1
        )


class TestRecordPaymentService:
    def test_record_pay_at_hotel_payment(self, repository, create_booking, staff_context):
        booking = create_booking(
            status=BookingStatus.PENDING,
            payment_method=PaymentMethod.PAY_AT_HOTEL,
            payment_status=PaymentStatus.PENDING,
        )
        repository.save(booking)

        updated = RecordPaymentService(repository=repository).record(
            ResourceType.ROOM, booking.id, staff_context
        )

        assert updated.payment_status == PaymentStatus.PAID
        assert updated.status == BookingStatus.PENDING


class TestQuoteEventBookingService:
    def test_quote_then_confirm(self, repository, create_booking, staff_context):
        booking = create_booking(
            status=BookingStatus.PENDING,
            resource_type=ResourceType.EVENT_SPACE,
            payment_method=None,
            payment_status=PaymentStatus.UNPAID,
            total_amount=None,
            booking_id="inquiry_for_req-1",
        )
        repository.save(booking)

        QuoteEventBookingService(repository=repository).quote(
            ResourceType.EVENT_SPACE, booking.id, Money.etb(25000), staff_context
        )
        confirmed = TransitionBookingService(repository=repository).transition(
            ResourceType.EVENT_SPACE, booking.id, BookingStatus.CONFIRMED, staff_context
        )

        assert confirmed.total_amount == Money.etb(25000)
        assert confirmed.version == 3


class TestUpdateBookingService:
    def test_quote_and_confirm_in_one_write(self, repository, create_booking, staff_context):
        booking = create_booking(
            status=BookingStatus.PENDING,
            resource_type=ResourceType.EVENT_SPACE,
            payment_method=None,
            payment_status=PaymentStatus.UNPAID,
            total_amount=None,
            booking_id="inquiry_for_req-1",
        )
        repository.save(booking)
        updates = []
        update = repository.update

        def _update(*args, **kwargs):
            updates.append(args[0].version)
            update(*args, **kwargs)

        repository.update = _update

        updated = UpdateBookingService(repository=repository).apply(
            ResourceType.EVENT_SPACE,
            booking.id,
            BookingChanges(status=BookingStatus.CONFIRMED, total_amount=Money.etb(25000)),
            staff_context,
        )

        assert updated.total_amount == Money.etb(25000)
        assert updated.status == BookingStatus.CONFIRMED
        assert updates == [3]
        assert repository.find_by_id(booking.id).version == 3

    def test_rejected_step_leaves_booking_unchanged(
        self, repository, create_booking, staff_context
    ):
        booking = create_booking(
            status=BookingStatus.PENDING,
            payment_method=PaymentMethod.PAY_AT_HOTEL,
            payment_status=PaymentStatus.PENDING,
        )
        repository.save(booking)

        with pytest.raises(InvalidTransitionException):
            UpdateBookingService(repository=repository).apply(
                ResourceType.ROOM,
                booking.id,
                BookingChanges(status=BookingStatus.COMPLETED, record_payment=True),
                staff_context,
            )

        stored = repository.find_by_id(booking.id)
        assert stored.payment_status == PaymentStatus.PENDING
        assert stored.version == 1


class TestListBookingsService:
    def test_by_contact_is_newest_first(self, repository, create_booking):
        older = create_booking(
            booking_id="booking_for_TXN1", created_at="2024-05-01T09:00:00+00:00"
        )
        newer = create_booking(
            booking_id="booking_for_TXN2", created_at="2024-05-02T09:00:00+00:00"
        )
        other = create_booking(booking_id="booking_for_TXN3", email="other@example.com")
        for booking in (older, newer, other):
            repository.save(booking)

        bookings = ListBookingsService(repository=repository).by_contact("GUEST@example.com")

        assert [str(b.id) for b in bookings] == ["booking_for_TXN2", "booking_for_TXN1"]

    def test_by_filter_with_status(self, repository, create_booking):
        repository.save(create_booking(booking_id="a", status=BookingStatus.CONFIRMED))
        repository.save(create_booking(booking_id="b", status=BookingStatus.CANCELLED))

        bookings = ListBookingsService(repository=repository).by_filter(
            ResourceType.ROOM, BookingStatus.CANCELLED
        )

        assert [str(b.id) for b in bookings] == ["b"]
