"""ホテル側で固定されている料金表

テーブル予約の予約料と空港送迎の車両クラスはレコードストアに存在せず、
サイト上で固定値として提示されている。
"""

from services.pricing.domain.enum import ResourceType, UnitBasis
from services.pricing.domain.value_object import CatalogEntry
from services.shared.domain import Money

TABLE_RESERVATION_FEE = Money.etb(200)

MAIN_DINING = CatalogEntry(
    id="main_dining",
    resource_type=ResourceType.TABLE,
    name="Main Dining Room",
    unit_price=TABLE_RESERVATION_FEE,
    unit_basis=UnitBasis.FLAT_FEE,
)

VEHICLE_CLASSES: dict[str, CatalogEntry] = {
    entry.id: entry
    for entry in (
        CatalogEntry(
            id="sedan",
            resource_type=ResourceType.TRANSFER,
            name="Sedan",
            unit_price=Money.etb(800),
            unit_basis=UnitBasis.FLAT_FEE,
            capacity=3,
        ),
        CatalogEntry(
            id="suv",
            resource_type=ResourceType.TRANSFER,
            name="SUV",
            unit_price=Money.etb(1200),
            unit_basis=UnitBasis.FLAT_FEE,
            capacity=5,
        ),
        CatalogEntry(
            id="van",
            resource_type=ResourceType.TRANSFER,
            name="Van",
            unit_price=Money.etb(1800),
            unit_basis=UnitBasis.FLAT_FEE,
            capacity=8,
        ),
        CatalogEntry(
            id="luxury",
            resource_type=ResourceType.TRANSFER,
            name="Luxury",
            unit_price=Money.etb(2500),
            unit_basis=UnitBasis.FLAT_FEE,
            capacity=3,
        ),
    )
}

TABLE_TIME_SLOTS: tuple[str, ...] = (
    "12:00", "12:30", "13:00", "13:30", "14:00", "14:30",
    "18:00", "18:30", "19:00", "19:30", "20:00", "20:30", "21:00",
)  # fmt: skip

SPA_TIME_SLOTS: tuple[str, ...] = (
    "09:00", "10:00", "11:00", "12:00", "14:00", "15:00", "16:00", "17:00", "18:00",
)  # fmt: skip

TRANSFER_TIME_SLOTS: tuple[str, ...] = tuple(
    f"{hour:02d}:{minute:02d}" for hour in range(24) for minute in (0, 30)
)

AIRPORT = "Addis Ababa Bole International Airport"
HOTEL = "Meskerem Hotel, Addis Ababa"


def static_entry(resource_type: ResourceType, resource_ref: str) -> CatalogEntry | None:
    """固定料金表からカタログエントリを引く（対象外の種別は None）"""
    if resource_type == ResourceType.TABLE:
        return MAIN_DINING if resource_ref == MAIN_DINING.id else None
    if resource_type == ResourceType.TRANSFER:
        return VEHICLE_CLASSES.get(resource_ref)
    return None
