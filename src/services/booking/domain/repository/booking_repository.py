from abc import abstractmethod

from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import BookingId
from services.pricing.domain import ResourceType
from services.shared.domain import Repository


class BookingRepository(Repository[Booking, BookingId]):
    """予約レポジトリのインターフェース"""

    @abstractmethod
    def save(self, booking: Booking) -> None:
        """予約を新規保存する（同一IDが存在すれば DuplicateResourceException）"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(
        self, booking_id: BookingId, resource_type: ResourceType | None = None
    ) -> Booking | None:
        """予約IDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def update(
        self,
        booking: Booking,
        expected_status: BookingStatus,
        expected_version: int,
    ) -> None:
        """予約を更新する（期待値と異なれば OptimisticLockException）"""
        raise NotImplementedError

    @abstractmethod
    def find_by_contact(
        self,
        email: str,
        resource_type: ResourceType | None = None,
        status: BookingStatus | None = None,
    ) -> list[Booking]:
        """連絡先メールアドレスで検索する（作成日時の新しい順）"""
        raise NotImplementedError

    @abstractmethod
    def find_by_resource_type(
        self, resource_type: ResourceType, status: BookingStatus | None = None
    ) -> list[Booking]:
        """予約種別で検索する（作成日時の新しい順）"""
        raise NotImplementedError
