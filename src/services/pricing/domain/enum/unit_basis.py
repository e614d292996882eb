from enum import Enum


class UnitBasis(str, Enum):
    """カタログ価格の課金単位"""

    PER_NIGHT = "per_night"
    PER_HOUR = "per_hour"
    PER_DAY = "per_day"
    PER_PERSON = "per_person"
    PER_ITEM = "per_item"
    FLAT_FEE = "flat_fee"
