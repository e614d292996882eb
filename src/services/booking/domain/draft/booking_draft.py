from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import date
from types import MappingProxyType

from services.booking.domain.value_object import ContactInfo
from services.pricing.domain import (
    CatalogEntry,
    PricingCalculator,
    ResourceType,
    RoomServiceCart,
    StayPeriod,
    rules_for,
)
from services.shared.domain import Money
from services.shared.domain.exception import (
    DraftIncompleteException,
    InvalidRangeException,
    ValidationException,
)
from services.shared.utils import hotel_today

CONTACT_FIELDS = frozenset({"guest_name", "guest_email", "guest_phone", "notes"})
TRANSFER_TYPES = frozenset({"pickup", "dropoff"})

_COUNT_FIELDS = frozenset(
    {"num_guests", "party_size", "participants", "passengers", "expected_guests"}
)
_calculator = PricingCalculator()


def _frozen(parameters: Mapping[str, object]) -> Mapping[str, object]:
    return MappingProxyType(dict(parameters))


@dataclass(frozen=True)
class BookingDraft:
    """予約ドラフト（永続化前の入力状態）

    フォームの各入力は update() で新しいドラフトを返す純粋な変換として表現する。
    合計金額は常に resource + parameters から PricingCalculator で再計算され、
    手入力されることはない。
    """

    resource_type: ResourceType
    resource_ref: str | None = None
    catalog_entry: CatalogEntry | None = None
    guest_name: str = ""
    guest_email: str = ""
    guest_phone: str | None = None
    notes: str | None = None
    parameters: Mapping[str, object] = field(default_factory=lambda: _frozen({}))
    cart: RoomServiceCart = field(default_factory=RoomServiceCart)

    @classmethod
    def create(
        cls,
        resource_type: ResourceType,
        catalog_entry: CatalogEntry | None = None,
        resource_ref: str | None = None,
    ) -> BookingDraft:
        """空のドラフトを生成する（この時点では送信不可）"""
        if catalog_entry is not None:
            if catalog_entry.resource_type != resource_type:
                raise ValueError(
                    f"Catalog entry {catalog_entry.id} is not a {resource_type.value}"
                )
            resource_ref = catalog_entry.id
        return cls(
            resource_type=resource_type,
            resource_ref=resource_ref,
            catalog_entry=catalog_entry,
        )

    def update(self, name: str, value: object) -> BookingDraft:
        """1項目を更新した新しいドラフトを返す"""
        if name in CONTACT_FIELDS:
            return replace(self, **{name: value})

        if name not in rules_for(self.resource_type).allowed:
            raise ValidationException(
                f"Unknown field for {self.resource_type.value}: {name}", field=name
            )
        parameters = dict(self.parameters)
        if value is None or value == "":
            parameters.pop(name, None)
        else:
            parameters[name] = value
        return replace(self, parameters=_frozen(parameters))

    def add_item(self, item: CatalogEntry, quantity: int = 1) -> BookingDraft:
        self._require_cart()
        return replace(self, cart=self.cart.add(item, quantity))

    def update_item_quantity(self, item_id: str, delta: int) -> BookingDraft:
        self._require_cart()
        return replace(self, cart=self.cart.update_quantity(item_id, delta))

    def remove_item(self, item_id: str) -> BookingDraft:
        self._require_cart()
        return replace(self, cart=self.cart.remove(item_id))

    def pricing_parameters(self) -> Mapping[str, object]:
        if self.resource_type == ResourceType.ROOM_SERVICE:
            return {**self.parameters, "items": self.cart}
        return self.parameters

    def computed_total(self) -> Money | None:
        """合計金額（見積もり制の種別は None）"""
        return _calculator.compute_total(
            self.resource_type, self.catalog_entry, self.pricing_parameters()
        )

    def contact(self) -> ContactInfo:
        return ContactInfo(
            name=self.guest_name, email=self.guest_email, phone=self.guest_phone
        )

    @property
    def requires_payment(self) -> bool:
        return rules_for(self.resource_type).requires_payment

    def is_submittable(self, today: date | None = None) -> bool:
        try:
            self.check_submittable(today)
        except ValidationException:
            return False
        return True

    def check_submittable(self, today: date | None = None) -> None:
        """送信可能か検証する（不可なら理由となる項目付きの例外を送出）"""
        today = today or hotel_today()
        rules = rules_for(self.resource_type)

        try:
            self.contact()
        except ValidationException as e:
            raise DraftIncompleteException(str(e), field=e.field) from e

        if rules.requires_catalog_entry and self.catalog_entry is None:
            raise DraftIncompleteException("Resource is not selected", field="resource_ref")

        for name in rules.required:
            if self.parameters.get(name) in (None, ""):
                raise DraftIncompleteException(f"{name} is required", field=name)

        if self.resource_type == ResourceType.ROOM_SERVICE and self.cart.is_empty():
            raise DraftIncompleteException("Your cart is empty", field="items")

        self._check_counts(rules.capacity_field)
        self._check_time_slot(rules.time_field, rules.time_slots)
        self._check_dates(rules.future_dates, today)
        self._check_resource_specific()

        # 料金計算が成立すること（期間の逆転などはここで検出される）
        self.computed_total()

    def _require_cart(self) -> None:
        if self.resource_type != ResourceType.ROOM_SERVICE:
            raise ValidationException(
                f"{self.resource_type.value} has no cart", field="items"
            )

    def _check_counts(self, capacity_field: str | None) -> None:
        for name, value in self.parameters.items():
            if name not in _COUNT_FIELDS and name != "luggage_count":
                continue
            minimum = 0 if name == "luggage_count" else 1
            if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
                raise ValidationException(f"{name} must be at least {minimum}", field=name)

        if capacity_field is None or self.catalog_entry is None:
            return
        capacity = self.catalog_entry.capacity
        value = self.parameters.get(capacity_field)
        if capacity is not None and isinstance(value, int) and value > capacity:
            raise DraftIncompleteException(
                f"{capacity_field} exceeds capacity of {capacity}", field=capacity_field
            )

    def _check_time_slot(self, time_field: str | None, slots: tuple[str, ...]) -> None:
        if time_field is None or not slots:
            return
        if self.parameters.get(time_field) not in slots:
            raise ValidationException("Please select an available time", field=time_field)

    def _check_dates(self, future_dates: tuple[str, ...], today: date) -> None:
        for name in future_dates:
            try:
                value = date.fromisoformat(str(self.parameters[name]))
            except ValueError as e:
                raise ValidationException(f"Invalid date format: {e}", field=name) from e
            if value < today:
                raise InvalidRangeException("Date cannot be in the past", field=name)

    def _check_resource_specific(self) -> None:
        if self.resource_type == ResourceType.ROOM:
            StayPeriod(
                check_in=str(self.parameters["check_in"]),
                check_out=str(self.parameters["check_out"]),
            )
        elif self.resource_type == ResourceType.TRANSFER:
            if self.parameters["transfer_type"] not in TRANSFER_TYPES:
                raise ValidationException(
                    "Transfer type must be pickup or dropoff", field="transfer_type"
                )
        elif self.resource_type == ResourceType.EVENT_SPACE:
            start = self.parameters.get("start_time")
            end = self.parameters.get("end_time")
            if start and end and str(end) <= str(start):
                raise InvalidRangeException(
                    "End time must be after start time", field="end_time"
                )
