import os
from decimal import Decimal

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import BotoCoreError, ClientError

from services.booking.domain import (
    Booking,
    BookingId,
    BookingRepository,
    BookingStatus,
    ContactInfo,
)
from services.payment.domain import PaymentMethod, PaymentStatus, TransactionReference
from services.pricing.domain import ResourceType
from services.shared.domain import Currency, IsoDateTime, Money
from services.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
    PersistenceException,
)


def _is_conditional_check_failure(e: ClientError) -> bool:
    return e.response["Error"]["Code"] == "ConditionalCheckFailedException"


class DynamoDBBookingRepository(BookingRepository):
    """DynamoDBを使用した BookingRepository の具象実装

    1予約 = 1アイテム。作成は条件付き put_item、更新は status と version の
    条件付き update_item（compare-and-swap）で行う。
    """

    def __init__(self, table_name: str | None = None, table=None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        if table is None:
            table = boto3.resource("dynamodb").Table(self.table_name)
        self.table = table

    def save(self, booking: Booking) -> None:
        """予約をDBに保存する"""
        item = self._to_item(booking)
        try:
            self.table.put_item(Item=item, ConditionExpression=Attr("PK").not_exists())
        except ClientError as e:
            if _is_conditional_check_failure(e):
                raise DuplicateResourceException(
                    f"Booking already exists: {booking.id}"
                ) from e
            raise PersistenceException(f"Failed to save booking: {booking.id}") from e
        except BotoCoreError as e:
            raise PersistenceException(f"Failed to save booking: {booking.id}") from e

    def find_by_id(
        self, booking_id: BookingId, resource_type: ResourceType | None = None
    ) -> Booking | None:
        """予約IDで検索"""
        try:
            if resource_type is not None:
                response = self.table.get_item(
                    Key={"PK": f"BOOKING#{booking_id}", "SK": resource_type.key_prefix},
                    ConsistentRead=True,
                )
                item = response.get("Item")
            else:
                response = self.table.query(
                    KeyConditionExpression=Key("PK").eq(f"BOOKING#{booking_id}"),
                    ConsistentRead=True,
                )
                items = response.get("Items", [])
                item = items[0] if items else None
        except (BotoCoreError, ClientError) as e:
            raise PersistenceException(f"Failed to read booking: {booking_id}") from e

        if not item:
            return None
        return self._to_entity(item)

    def update(
        self,
        booking: Booking,
        expected_status: BookingStatus,
        expected_version: int,
    ) -> None:
        """予約のステータス・支払い・料金を更新する"""
        values: dict = {
            ":status": booking.status.value,
            ":payment_status": booking.payment_status.value,
            ":total_amount": (
                str(booking.total_amount.amount) if booking.total_amount else None
            ),
            ":currency": (
                str(booking.total_amount.currency) if booking.total_amount else None
            ),
            ":updated_at": str(booking.updated_at),
            ":updated_by": booking.updated_by,
            ":version": booking.version,
        }
        try:
            self.table.update_item(
                Key={"PK": f"BOOKING#{booking.id}", "SK": booking.resource_type.key_prefix},
                UpdateExpression=(
                    "SET #status = :status, payment_status = :payment_status, "
                    "total_amount = :total_amount, currency = :currency, "
                    "updated_at = :updated_at, updated_by = :updated_by, "
                    "version = :version"
                ),
                ExpressionAttributeNames={"#status": "status"},
                ExpressionAttributeValues=values,
                ConditionExpression=Attr("status").eq(expected_status.value)
                & Attr("version").eq(expected_version),
            )
        except ClientError as e:
            if _is_conditional_check_failure(e):
                raise OptimisticLockException(
                    f"Booking status conflict: "
                    f"expected {expected_status.value} (version {expected_version}), "
                    f"booking_id={booking.id}"
                ) from e
            raise PersistenceException(f"Failed to update booking: {booking.id}") from e
        except BotoCoreError as e:
            raise PersistenceException(f"Failed to update booking: {booking.id}") from e

    def find_by_contact(
        self,
        email: str,
        resource_type: ResourceType | None = None,
        status: BookingStatus | None = None,
    ) -> list[Booking]:
        """連絡先メールアドレスで予約を検索する"""
        kwargs: dict = {
            "IndexName": "GSI1",
            "KeyConditionExpression": Key("GSI1PK").eq(f"CONTACT#{email.strip().lower()}"),
            "ScanIndexForward": False,
        }
        filters = []
        if resource_type is not None:
            filters.append(Attr("resource_type").eq(resource_type.value))
        if status is not None:
            filters.append(Attr("status").eq(status.value))
        if filters:
            condition = filters[0]
            for f in filters[1:]:
                condition = condition & f
            kwargs["FilterExpression"] = condition
        return self._query_all(kwargs)

    def find_by_resource_type(
        self, resource_type: ResourceType, status: BookingStatus | None = None
    ) -> list[Booking]:
        """予約種別で予約を検索する"""
        kwargs: dict = {
            "IndexName": "GSI2",
            "KeyConditionExpression": Key("GSI2PK").eq(
                f"RESOURCE#{resource_type.key_prefix}"
            ),
            "ScanIndexForward": False,
        }
        if status is not None:
            kwargs["FilterExpression"] = Attr("status").eq(status.value)
        return self._query_all(kwargs)

    def _query_all(self, kwargs: dict) -> list[Booking]:
        items: list[dict] = []
        try:
            while True:
                response = self.table.query(**kwargs)
                items.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs = {**kwargs, "ExclusiveStartKey": last_key}
        except (BotoCoreError, ClientError) as e:
            raise PersistenceException("Failed to query bookings") from e
        return [self._to_entity(item) for item in items]

    def _to_item(self, booking: Booking) -> dict:
        """ドメインエンティティを DynamoDB アイテムに変換する"""
        created_at = str(booking.created_at)
        return {
            "PK": f"BOOKING#{booking.id}",
            "SK": booking.resource_type.key_prefix,
            "entity_type": "BOOKING",
            "booking_id": str(booking.id),
            "resource_type": booking.resource_type.value,
            "resource_ref": booking.resource_ref,
            "guest_name": booking.contact.name,
            "guest_email": booking.contact.email,
            "guest_phone": booking.contact.phone,
            "params": booking.parameters,
            "total_amount": (
                str(booking.total_amount.amount) if booking.total_amount else None
            ),
            "currency": (
                str(booking.total_amount.currency) if booking.total_amount else None
            ),
            "payment_method": (
                booking.payment_method.value if booking.payment_method else None
            ),
            "payment_status": booking.payment_status.value,
            "transaction_reference": (
                str(booking.transaction_reference)
                if booking.transaction_reference
                else None
            ),
            "status": booking.status.value,
            "notes": booking.notes,
            "created_at": created_at,
            "updated_at": str(booking.updated_at),
            "updated_by": booking.updated_by,
            "version": booking.version,
            "GSI1PK": f"CONTACT#{booking.contact.email}",
            "GSI1SK": created_at,
            "GSI2PK": f"RESOURCE#{booking.resource_type.key_prefix}",
            "GSI2SK": created_at,
        }

    def _to_entity(self, item: dict) -> Booking:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        total_amount = None
        if item.get("total_amount") is not None:
            total_amount = Money(
                amount=Decimal(item["total_amount"]),
                currency=Currency(item.get("currency") or "ETB"),
            )
        payment_method = item.get("payment_method")
        reference = item.get("transaction_reference")
        return Booking(
            id=BookingId(value=item["booking_id"]),
            resource_type=ResourceType(item["resource_type"]),
            resource_ref=item.get("resource_ref"),
            contact=ContactInfo(
                name=item["guest_name"],
                email=item["guest_email"],
                phone=item.get("guest_phone"),
            ),
            parameters=_from_dynamo(item.get("params") or {}),
            total_amount=total_amount,
            payment_method=PaymentMethod(payment_method) if payment_method else None,
            payment_status=PaymentStatus(item["payment_status"]),
            transaction_reference=(
                TransactionReference(value=reference) if reference else None
            ),
            status=BookingStatus(item["status"]),
            notes=item.get("notes"),
            created_at=IsoDateTime.from_string(item["created_at"]),
            updated_at=IsoDateTime.from_string(item["updated_at"]),
            version=int(item.get("version", 1)),
            updated_by=item.get("updated_by"),
        )


def _from_dynamo(value):
    """DynamoDB が返す Decimal を int に戻す（数量・人数は整数のみ保存している）"""
    if isinstance(value, dict):
        return {k: _from_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_from_dynamo(v) for v in value]
    if isinstance(value, Decimal) and value == value.to_integral_value():
        return int(value)
    return value
