from __future__ import annotations

from dataclasses import dataclass, replace

from services.pricing.domain.value_object.catalog_entry import CatalogEntry
from services.shared.domain import Currency, Money


@dataclass(frozen=True)
class CartLine:
    """ルームサービスのカート明細（注文時点の単価スナップショット）"""

    item_id: str
    name: str
    unit_price: Money
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValueError("Quantity cannot be negative")

    def subtotal(self) -> Money:
        return self.unit_price.multiply(self.quantity)

    def to_dict(self) -> dict:
        return {
            "id": self.item_id,
            "name": self.name,
            "price": str(self.unit_price.amount),
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class RoomServiceCart:
    """ルームサービスのカート

    すべての操作は新しいカートを返す。数量は 0 で下げ止まり、
    数量 0 の明細はカートから取り除かれる。
    """

    lines: tuple[CartLine, ...] = ()
    currency: Currency = Currency.etb()

    def add(self, item: CatalogEntry, quantity: int = 1) -> RoomServiceCart:
        """メニュー項目を追加する（既存の明細なら数量を加算）"""
        if quantity < 1:
            raise ValueError("Quantity to add must be at least 1")
        price = item.require_price()
        if price.currency != self.currency:
            raise ValueError("Cannot mix currencies in one cart")

        for line in self.lines:
            if line.item_id == item.id:
                return self.update_quantity(item.id, quantity)

        line = CartLine(
            item_id=item.id, name=item.name, unit_price=price, quantity=quantity
        )
        return replace(self, lines=self.lines + (line,))

    def update_quantity(self, item_id: str, delta: int) -> RoomServiceCart:
        """数量を増減する"""
        lines = tuple(
            replace(line, quantity=max(0, line.quantity + delta))
            if line.item_id == item_id
            else line
            for line in self.lines
        )
        return replace(self, lines=tuple(line for line in lines if line.quantity > 0))

    def remove(self, item_id: str) -> RoomServiceCart:
        """明細を削除する"""
        return replace(
            self, lines=tuple(line for line in self.lines if line.item_id != item_id)
        )

    def total(self) -> Money:
        total = Money.zero(self.currency)
        for line in self.lines:
            total = total.add(line.subtotal())
        return total

    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def is_empty(self) -> bool:
        return not self.lines
