from dataclasses import dataclass
from datetime import date
from functools import cached_property

from services.shared.domain.exception import InvalidRangeException, ValidationException


@dataclass(frozen=True)
class StayPeriod:
    """滞在期間(チェックイン日 + チェックアウト日)"""

    check_in: str
    check_out: str

    def __post_init__(self) -> None:
        try:
            check_in_date = self.check_in_date
            check_out_date = self.check_out_date
        except (TypeError, ValueError) as e:
            raise ValidationException(f"Invalid date format: {e}", field="check_in") from e

        if check_out_date <= check_in_date:
            raise InvalidRangeException(
                "Check-out date must be after check-in date", field="check_out"
            )

    @cached_property
    def check_in_date(self) -> date:
        return date.fromisoformat(self.check_in)

    @cached_property
    def check_out_date(self) -> date:
        return date.fromisoformat(self.check_out)

    def nights(self) -> int:
        """宿泊数を計算する"""
        return max(0, (self.check_out_date - self.check_in_date).days)
