from typing import TypedDict

from services.booking.domain import BookingDraft
from services.booking.domain.draft.booking_draft import CONTACT_FIELDS
from services.pricing.domain import CatalogRepository, ResourceType
from services.pricing.domain.tariff import MAIN_DINING
from services.shared.domain.exception import ResourceNotFoundException


class CartItemDetails(TypedDict):
    """ルームサービスのカート明細の入力"""

    menu_item_id: str
    quantity: int


class BookingDetails(TypedDict, total=False):
    """予約フォームの入力データ構造（TypedDict）"""

    resource_ref: str | None
    guest_name: str
    guest_email: str
    guest_phone: str | None
    notes: str | None
    parameters: dict[str, object]
    items: list[CartItemDetails]


class BuildDraftService:
    """フォーム入力からドラフトを組み立てるユースケース

    カタログ（外部レコードストア）から料金計算の入力を引き当て、
    各入力を BookingDraft.update() の連続適用として反映する。
    """

    def __init__(self, catalog: CatalogRepository) -> None:
        self._catalog = catalog

    def build(self, resource_type: ResourceType, details: BookingDetails) -> BookingDraft:
        """ドラフトを組み立てる"""
        resource_ref = details.get("resource_ref")
        parameters = dict(details.get("parameters") or {})
        if resource_type == ResourceType.ROOM_SERVICE:
            resource_ref = parameters.get("room_number")  # type: ignore[assignment]
        elif resource_type == ResourceType.TABLE:
            resource_ref = resource_ref or MAIN_DINING.id

        catalog_entry = None
        if resource_ref and resource_type != ResourceType.ROOM_SERVICE:
            catalog_entry = self._catalog.find(resource_type, resource_ref)
            if catalog_entry is None:
                raise ResourceNotFoundException(
                    f"{resource_type.value} not found: {resource_ref}"
                )

        draft = BookingDraft.create(resource_type, catalog_entry, resource_ref)
        for name in sorted(CONTACT_FIELDS):
            if name in details:
                draft = draft.update(name, details[name])  # type: ignore[literal-required]
        for name, value in parameters.items():
            draft = draft.update(name, value)

        for line in details.get("items") or []:
            menu_item = self._catalog.find(ResourceType.ROOM_SERVICE, line["menu_item_id"])
            if menu_item is None:
                raise ResourceNotFoundException(
                    f"Menu item not found: {line['menu_item_id']}"
                )
            draft = draft.add_item(menu_item, line["quantity"])
        return draft
