import os
from decimal import Decimal

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from services.pricing.domain import CatalogEntry, CatalogRepository, ResourceType, UnitBasis
from services.pricing.domain.tariff import static_entry
from services.shared.domain import Currency, Money
from services.shared.domain.exception import PersistenceException

_DEFAULT_UNIT_BASIS: dict[ResourceType, UnitBasis] = {
    ResourceType.ROOM: UnitBasis.PER_NIGHT,
    ResourceType.EVENT_SPACE: UnitBasis.PER_DAY,
    ResourceType.SPA: UnitBasis.PER_PERSON,
    ResourceType.EXPERIENCE: UnitBasis.PER_PERSON,
    ResourceType.ROOM_SERVICE: UnitBasis.PER_ITEM,
}


class DynamoDBCatalogRepository(CatalogRepository):
    """DynamoDB を使用した CatalogRepository の具象実装

    テーブル予約と空港送迎は固定料金表から引く。
    """

    def __init__(self, table_name: str | None = None, table=None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        if table is None:
            table = boto3.resource("dynamodb").Table(self.table_name)
        self.table = table

    def find(self, resource_type: ResourceType, resource_id: str) -> CatalogEntry | None:
        """カタログエントリを検索する"""
        if resource_type in (ResourceType.TABLE, ResourceType.TRANSFER):
            return static_entry(resource_type, resource_id)

        try:
            response = self.table.get_item(
                Key={
                    "PK": f"CATALOG#{resource_type.key_prefix}",
                    "SK": f"ITEM#{resource_id}",
                }
            )
        except (BotoCoreError, ClientError) as e:
            raise PersistenceException(
                f"Failed to read catalog entry: {resource_type.value}/{resource_id}"
            ) from e

        item = response.get("Item")
        if not item or not item.get("is_active", True):
            return None
        return self._to_entry(resource_type, item)

    def _to_entry(self, resource_type: ResourceType, item: dict) -> CatalogEntry:
        """DynamoDB アイテムをカタログエントリに変換する"""
        unit_price = None
        if item.get("unit_price") is not None:
            unit_price = Money(
                amount=Decimal(str(item["unit_price"])),
                currency=Currency(item.get("currency", "ETB")),
            )
        capacity = item.get("capacity")
        return CatalogEntry(
            id=item["id"],
            resource_type=resource_type,
            name=item["name"],
            unit_price=unit_price,
            unit_basis=UnitBasis(
                item.get("unit_basis", _DEFAULT_UNIT_BASIS[resource_type].value)
            ),
            capacity=int(capacity) if capacity is not None else None,
            is_active=bool(item.get("is_active", True)),
        )
