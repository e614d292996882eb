import pytest

from services.pricing.domain import StayPeriod
from services.shared.domain.exception import InvalidRangeException, ValidationException


class TestStayPeriod:
    def test_valid_stay_period(self):
        stay_period = StayPeriod(check_in="2024-06-01", check_out="2024-06-04")
        assert stay_period.check_in == "2024-06-01"
        assert stay_period.check_out == "2024-06-04"

    def test_nights_calculation(self):
        assert StayPeriod(check_in="2024-06-01", check_out="2024-06-04").nights() == 3

    def test_nights_across_month_boundary(self):
        assert StayPeriod(check_in="2024-01-30", check_out="2024-02-02").nights() == 3

    def test_checkout_before_checkin_raises_error(self):
        with pytest.raises(
            InvalidRangeException, match="Check-out date must be after check-in date"
        ):
            StayPeriod(check_in="2024-06-03", check_out="2024-06-01")

    def test_same_date_raises_error(self):
        with pytest.raises(InvalidRangeException):
            StayPeriod(check_in="2024-06-01", check_out="2024-06-01")

    def test_invalid_date_format_raises_error(self):
        with pytest.raises(ValidationException, match="Invalid date format"):
            StayPeriod(check_in="not-a-date", check_out="2024-06-03")
