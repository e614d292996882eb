from collections.abc import Callable, Mapping

from services.pricing.domain.enum import ResourceType
from services.pricing.domain.value_object import CatalogEntry, RoomServiceCart, StayPeriod
from services.shared.domain import Money
from services.shared.domain.exception import DraftIncompleteException, ValidationException

PricingStrategy = Callable[[CatalogEntry | None, Mapping[str, object]], Money | None]


def _require_entry(entry: CatalogEntry | None) -> CatalogEntry:
    if entry is None:
        raise DraftIncompleteException("Resource is not selected", field="resource_ref")
    return entry


def _require(parameters: Mapping[str, object], name: str) -> object:
    value = parameters.get(name)
    if value is None or value == "":
        raise DraftIncompleteException(f"{name} is required", field=name)
    return value


def _positive_int(parameters: Mapping[str, object], name: str) -> int:
    value = _require(parameters, name)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationException(f"{name} must be a positive integer", field=name)
    return value


def _price_room(entry: CatalogEntry | None, parameters: Mapping[str, object]) -> Money:
    stay = StayPeriod(
        check_in=str(_require(parameters, "check_in")),
        check_out=str(_require(parameters, "check_out")),
    )
    return _require_entry(entry).require_price().multiply(stay.nights())


def _price_event_space(
    entry: CatalogEntry | None, parameters: Mapping[str, object]
) -> None:
    # 見積もり制: 料金はスタッフが後から設定する
    return None


def _price_flat(entry: CatalogEntry | None, parameters: Mapping[str, object]) -> Money:
    return _require_entry(entry).require_price()


def _price_experience(
    entry: CatalogEntry | None, parameters: Mapping[str, object]
) -> Money:
    participants = _positive_int(parameters, "participants")
    return _require_entry(entry).require_price().multiply(participants)


def _price_room_service(
    entry: CatalogEntry | None, parameters: Mapping[str, object]
) -> Money:
    cart = parameters.get("items")
    if not isinstance(cart, RoomServiceCart):
        raise DraftIncompleteException("Cart is required", field="items")
    return cart.total()


_STRATEGIES: dict[ResourceType, PricingStrategy] = {
    ResourceType.ROOM: _price_room,
    ResourceType.EVENT_SPACE: _price_event_space,
    ResourceType.TABLE: _price_flat,
    ResourceType.SPA: _price_flat,
    ResourceType.EXPERIENCE: _price_experience,
    ResourceType.TRANSFER: _price_flat,
    ResourceType.ROOM_SERVICE: _price_room_service,
}


class PricingCalculator:
    """予約種別ごとの料金計算

    種別ごとの計算ルールは戦略テーブルで切り替える。
    イベントスペースは見積もり制のため None を返す。
    """

    def compute_total(
        self,
        resource_type: ResourceType,
        catalog_entry: CatalogEntry | None,
        parameters: Mapping[str, object],
    ) -> Money | None:
        """合計金額を計算する"""
        return _STRATEGIES[resource_type](catalog_entry, parameters)
