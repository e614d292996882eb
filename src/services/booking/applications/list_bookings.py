from services.booking.domain import Booking, BookingRepository, BookingStatus
from services.pricing.domain import ResourceType


class ListBookingsService:
    """予約一覧の読み取りユースケース

    - by_contact: ゲストの「マイ予約」
    - by_filter: スタッフの管理画面
    """

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def by_contact(
        self,
        email: str,
        resource_type: ResourceType | None = None,
        status: BookingStatus | None = None,
    ) -> list[Booking]:
        return self._repository.find_by_contact(email, resource_type, status)

    def by_filter(
        self, resource_type: ResourceType, status: BookingStatus | None = None
    ) -> list[Booking]:
        return self._repository.find_by_resource_type(resource_type, status)
