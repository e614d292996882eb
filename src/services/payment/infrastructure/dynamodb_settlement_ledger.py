import os
from decimal import Decimal

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import BotoCoreError, ClientError

from services.payment.domain import (
    PaymentMethod,
    PaymentStatus,
    SettlementLedger,
    SettlementOutcome,
    TransactionReference,
)
from services.shared.domain import Currency, IsoDateTime, Money
from services.shared.domain.exception import (
    DuplicateResourceException,
    PersistenceException,
)


class DynamoDBSettlementLedger(SettlementLedger):
    """DynamoDBを使用した SettlementLedger の具象実装

    予約と同じテーブルに PK=SETTLEMENT#<冪等キー>, SK=OUTCOME で保存する。
    """

    def __init__(self, table_name: str | None = None, table=None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        if table is None:
            table = boto3.resource("dynamodb").Table(self.table_name)
        self.table = table

    def find(self, idempotency_key: str) -> SettlementOutcome | None:
        try:
            response = self.table.get_item(
                Key={"PK": f"SETTLEMENT#{idempotency_key}", "SK": "OUTCOME"},
                ConsistentRead=True,
            )
        except (BotoCoreError, ClientError) as e:
            raise PersistenceException(
                f"Failed to read settlement: {idempotency_key}"
            ) from e
        item = response.get("Item")
        if not item:
            return None
        return SettlementOutcome(
            method=PaymentMethod(item["method"]),
            transaction_reference=TransactionReference(value=item["transaction_reference"]),
            payment_status=PaymentStatus(item["payment_status"]),
            amount=Money(
                amount=Decimal(item["amount"]), currency=Currency(item["currency"])
            ),
        )

    def record(self, idempotency_key: str, outcome: SettlementOutcome) -> None:
        item = {
            "PK": f"SETTLEMENT#{idempotency_key}",
            "SK": "OUTCOME",
            "entity_type": "SETTLEMENT",
            "method": outcome.method.value,
            "transaction_reference": str(outcome.transaction_reference),
            "payment_status": outcome.payment_status.value,
            "amount": str(outcome.amount.amount),
            "currency": str(outcome.amount.currency),
            "created_at": str(IsoDateTime.now()),
        }
        try:
            self.table.put_item(Item=item, ConditionExpression=Attr("PK").not_exists())
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise DuplicateResourceException(
                    f"Settlement already recorded: {idempotency_key}"
                ) from e
            raise PersistenceException(
                f"Failed to record settlement: {idempotency_key}"
            ) from e
        except BotoCoreError as e:
            raise PersistenceException(
                f"Failed to record settlement: {idempotency_key}"
            ) from e
