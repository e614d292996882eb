from dataclasses import dataclass

from services.pricing.domain.enum import ResourceType, UnitBasis
from services.shared.domain import Money


@dataclass(frozen=True)
class CatalogEntry:
    """カタログ（客室・イベントスペース・スパ・体験・車両・メニュー等）の読み取り専用エントリ

    外部のレコードストアが所有し、料金計算の入力としてのみ参照する。
    """

    id: str
    resource_type: ResourceType
    name: str
    unit_price: Money | None
    unit_basis: UnitBasis
    capacity: int | None = None
    is_active: bool = True

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Catalog entry id cannot be empty")
        if self.capacity is not None and self.capacity < 1:
            raise ValueError("Capacity must be at least 1")

    def require_price(self) -> Money:
        """単価が未設定のエントリは料金計算に使えない"""
        if self.unit_price is None:
            raise ValueError(f"Catalog entry has no price: {self.id}")
        return self.unit_price
