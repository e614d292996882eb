from dataclasses import dataclass

from services.pricing.domain.enum import ResourceType
from services.pricing.domain.tariff import SPA_TIME_SLOTS, TABLE_TIME_SLOTS, TRANSFER_TIME_SLOTS


@dataclass(frozen=True)
class ResourceRules:
    """予約種別ごとの入力ルール"""

    required: tuple[str, ...]
    optional: tuple[str, ...] = ()
    future_dates: tuple[str, ...] = ()
    capacity_field: str | None = None
    time_field: str | None = None
    time_slots: tuple[str, ...] = ()
    requires_catalog_entry: bool = True
    requires_payment: bool = True

    @property
    def allowed(self) -> frozenset[str]:
        return frozenset(self.required) | frozenset(self.optional)


RESOURCE_RULES: dict[ResourceType, ResourceRules] = {
    ResourceType.ROOM: ResourceRules(
        required=("check_in", "check_out", "num_guests"),
        future_dates=("check_in",),
        capacity_field="num_guests",
    ),
    ResourceType.EVENT_SPACE: ResourceRules(
        required=("event_type", "event_date"),
        optional=("start_time", "end_time", "expected_guests", "catering_required"),
        future_dates=("event_date",),
        capacity_field="expected_guests",
        requires_catalog_entry=False,
        requires_payment=False,
    ),
    ResourceType.TABLE: ResourceRules(
        required=("booking_date", "booking_time", "party_size"),
        future_dates=("booking_date",),
        time_field="booking_time",
        time_slots=TABLE_TIME_SLOTS,
    ),
    ResourceType.SPA: ResourceRules(
        required=("booking_date", "booking_time"),
        future_dates=("booking_date",),
        time_field="booking_time",
        time_slots=SPA_TIME_SLOTS,
    ),
    ResourceType.EXPERIENCE: ResourceRules(
        required=("booking_date", "participants"),
        future_dates=("booking_date",),
        capacity_field="participants",
    ),
    ResourceType.TRANSFER: ResourceRules(
        required=(
            "transfer_type",
            "pickup_date",
            "pickup_time",
            "passengers",
            "luggage_count",
        ),
        optional=("flight_number",),
        future_dates=("pickup_date",),
        capacity_field="passengers",
        time_field="pickup_time",
        time_slots=TRANSFER_TIME_SLOTS,
    ),
    ResourceType.ROOM_SERVICE: ResourceRules(
        required=("room_number",),
        requires_catalog_entry=False,
    ),
}


def rules_for(resource_type: ResourceType) -> ResourceRules:
    return RESOURCE_RULES[resource_type]
