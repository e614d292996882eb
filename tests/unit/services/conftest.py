import os
from dataclasses import dataclass
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

# handler モジュールは import 時に boto3 リソースを生成するため先に設定する
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("TABLE_NAME", "test-table")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "hotel-booking-test")

from services.pricing.domain import CatalogEntry, ResourceType, UnitBasis  # noqa: E402
from services.shared.domain import Money  # noqa: E402
from services.shared.utils import ActingContext, ActorRole  # noqa: E402


@dataclass
class FakeLambdaContext:
    function_name: str = "test-function"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:test-function"
    aws_request_id: str = "test-request-id"


@pytest.fixture
def lambda_context():
    """Lambda コンテキストのフェイク"""
    return FakeLambdaContext()


@pytest.fixture
def mock_repository():
    """リポジトリのモックフィクスチャ"""
    return MagicMock()


@pytest.fixture
def staff_context():
    return ActingContext(actor="staff-01", role=ActorRole.STAFF)


@pytest.fixture
def guest_context():
    return ActingContext(actor="guest@example.com", role=ActorRole.GUEST)


@pytest.fixture
def create_catalog_entry():
    """CatalogEntry を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        resource_type: ResourceType = ResourceType.ROOM,
        entry_id: str = "room-101",
        name: str = "Deluxe Room",
        price: Decimal | int | str | None = 120,
        unit_basis: UnitBasis = UnitBasis.PER_NIGHT,
        capacity: int | None = None,
    ) -> CatalogEntry:
        return CatalogEntry(
            id=entry_id,
            resource_type=resource_type,
            name=name,
            unit_price=Money.etb(price) if price is not None else None,
            unit_basis=unit_basis,
            capacity=capacity,
        )

    return _factory
