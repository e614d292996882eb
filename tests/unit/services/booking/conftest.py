import copy

import pytest

from services.booking.applications.build_draft import BuildDraftService
from services.booking.applications.create_booking import CreateBookingService
from services.booking.applications.submit_booking import SubmitBookingService
from services.booking.applications.submit_inquiry import SubmitInquiryService
from services.booking.domain import (
    Booking,
    BookingDraft,
    BookingFactory,
    BookingId,
    BookingRepository,
    BookingStatus,
    ContactInfo,
)
from services.payment.applications.settle_payment import SettlePaymentService
from services.payment.domain import (
    PaymentMethod,
    PaymentStatus,
    SettlementLedger,
    SettlementOutcome,
    TransactionReference,
)
from services.payment.infrastructure.simulated_payment_gateway import (
    SimulatedPaymentGateway,
)
from services.pricing.domain import CatalogEntry, CatalogRepository, ResourceType, UnitBasis
from services.pricing.domain.tariff import static_entry
from services.shared.domain import IsoDateTime, Money
from services.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
)


class InMemoryBookingRepository(BookingRepository):
    """条件付き書き込みを再現するインメモリの BookingRepository"""

    def __init__(self) -> None:
        self.items: dict[tuple[str, ResourceType], Booking] = {}
        self.save_calls = 0

    def save(self, booking: Booking) -> None:
        self.save_calls += 1
        key = (str(booking.id), booking.resource_type)
        if key in self.items:
            raise DuplicateResourceException(f"Booking already exists: {booking.id}")
        self.items[key] = copy.deepcopy(booking)

    def find_by_id(
        self, booking_id: BookingId, resource_type: ResourceType | None = None
    ) -> Booking | None:
        for (stored_id, stored_type), booking in self.items.items():
            if stored_id == str(booking_id) and resource_type in (None, stored_type):
                return copy.deepcopy(booking)
        return None

    def update(
        self, booking: Booking, expected_status: BookingStatus, expected_version: int
    ) -> None:
        key = (str(booking.id), booking.resource_type)
        stored = self.items.get(key)
        if (
            stored is None
            or stored.status != expected_status
            or stored.version != expected_version
        ):
            raise OptimisticLockException(f"Booking status conflict: {booking.id}")
        self.items[key] = copy.deepcopy(booking)

    def find_by_contact(self, email, resource_type=None, status=None):
        return self._select(
            lambda b: b.contact.email == email.strip().lower(), resource_type, status
        )

    def find_by_resource_type(self, resource_type, status=None):
        return self._select(lambda b: True, resource_type, status)

    def _select(self, predicate, resource_type, status):
        bookings = [
            copy.deepcopy(b)
            for b in self.items.values()
            if predicate(b)
            and (resource_type is None or b.resource_type == resource_type)
            and (status is None or b.status == status)
        ]
        return sorted(bookings, key=lambda b: b.created_at.value, reverse=True)


class InMemorySettlementLedger(SettlementLedger):
    """条件付き書き込みを再現するインメモリの SettlementLedger"""

    def __init__(self) -> None:
        self.outcomes: dict[str, SettlementOutcome] = {}

    def find(self, idempotency_key: str) -> SettlementOutcome | None:
        return self.outcomes.get(idempotency_key)

    def record(self, idempotency_key: str, outcome: SettlementOutcome) -> None:
        if idempotency_key in self.outcomes:
            raise DuplicateResourceException(
                f"Settlement already recorded: {idempotency_key}"
            )
        self.outcomes[idempotency_key] = outcome


class RecordingGateway(SimulatedPaymentGateway):
    """遅延なしで成功し、発行した取引参照番号を記録する決済レール"""

    def __init__(self) -> None:
        super().__init__(delay_seconds=0)
        self.authorizations: list[TransactionReference] = []

    def authorize(self, amount, details, cancel_event):
        reference = super().authorize(amount, details, cancel_event)
        self.authorizations.append(reference)
        return reference


class InMemoryCatalogRepository(CatalogRepository):
    def __init__(self, entries: list[CatalogEntry]) -> None:
        self.entries = {(e.resource_type, e.id): e for e in entries}

    def find(self, resource_type: ResourceType, resource_id: str) -> CatalogEntry | None:
        return self.entries.get((resource_type, resource_id)) or static_entry(
            resource_type, resource_id
        )


@pytest.fixture
def repository():
    return InMemoryBookingRepository()


@pytest.fixture
def room(create_catalog_entry):
    return create_catalog_entry(price=120, capacity=2)


@pytest.fixture
def spa(create_catalog_entry):
    return create_catalog_entry(
        resource_type=ResourceType.SPA,
        entry_id="massage",
        name="Traditional Massage",
        price=800,
        unit_basis=UnitBasis.PER_PERSON,
    )


@pytest.fixture
def menu(create_catalog_entry):
    return {
        "tibs": create_catalog_entry(
            resource_type=ResourceType.ROOM_SERVICE,
            entry_id="tibs",
            name="Tibs",
            price=150,
            unit_basis=UnitBasis.PER_ITEM,
        ),
        "kitfo": create_catalog_entry(
            resource_type=ResourceType.ROOM_SERVICE,
            entry_id="kitfo",
            name="Kitfo",
            price=300,
            unit_basis=UnitBasis.PER_ITEM,
        ),
    }


@pytest.fixture
def catalog(room, spa, menu, create_catalog_entry):
    return InMemoryCatalogRepository(
        [
            room,
            spa,
            *menu.values(),
            create_catalog_entry(
                resource_type=ResourceType.EXPERIENCE,
                entry_id="coffee-ceremony",
                name="Coffee Ceremony",
                price=450,
                unit_basis=UnitBasis.PER_PERSON,
                capacity=10,
            ),
            create_catalog_entry(
                resource_type=ResourceType.EVENT_SPACE,
                entry_id="grand-hall",
                name="Grand Hall",
                price=None,
                unit_basis=UnitBasis.PER_DAY,
                capacity=200,
            ),
        ]
    )


@pytest.fixture
def create_draft(room):
    """入力済みの BookingDraft を生成する Factory fixture"""

    def _factory(
        resource_type: ResourceType = ResourceType.ROOM,
        catalog_entry: CatalogEntry | None = None,
        parameters: dict | None = None,
        guest_name: str = "Abebe Kebede",
        guest_email: str = "Abebe@Example.com",
    ) -> BookingDraft:
        if resource_type == ResourceType.ROOM and catalog_entry is None:
            catalog_entry = room
            if parameters is None:
                parameters = {
                    "check_in": "2024-06-01",
                    "check_out": "2024-06-04",
                    "num_guests": 2,
                }
        draft = BookingDraft.create(resource_type, catalog_entry)
        draft = draft.update("guest_name", guest_name).update("guest_email", guest_email)
        for name, value in (parameters or {}).items():
            draft = draft.update(name, value)
        return draft

    return _factory


@pytest.fixture
def create_booking():
    """Booking を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        status: BookingStatus = BookingStatus.CONFIRMED,
        resource_type: ResourceType = ResourceType.ROOM,
        payment_method: PaymentMethod | None = PaymentMethod.TELEBIRR,
        payment_status: PaymentStatus = PaymentStatus.PAID,
        total_amount: Money | None = Money.etb(360),
        booking_id: str = "booking_for_TXN1",
        email: str = "guest@example.com",
        created_at: str = "2024-05-01T09:00:00+00:00",
    ) -> Booking:
        reference = (
            TransactionReference(value="TXN1") if payment_method is not None else None
        )
        return Booking(
            id=BookingId(value=booking_id),
            resource_type=resource_type,
            resource_ref="room-101",
            contact=ContactInfo(name="Abebe Kebede", email=email),
            parameters={"check_in": "2024-06-01", "check_out": "2024-06-04", "num_guests": 2},
            total_amount=total_amount,
            payment_method=payment_method,
            payment_status=payment_status,
            transaction_reference=reference,
            status=status,
            created_at=IsoDateTime.from_string(created_at),
        )

    return _factory


@pytest.fixture
def ledger():
    return InMemorySettlementLedger()


@pytest.fixture
def gateway():
    return RecordingGateway()


@pytest.fixture
def submit_service(repository, ledger, gateway):
    return SubmitBookingService(
        settlement=SettlePaymentService(gateway=gateway),
        creator=CreateBookingService(repository=repository, factory=BookingFactory()),
        ledger=ledger,
    )


@pytest.fixture
def inquiry_service(repository):
    return SubmitInquiryService(repository=repository, factory=BookingFactory())


@pytest.fixture
def draft_builder(catalog):
    return BuildDraftService(catalog=catalog)
