import os
from datetime import date, datetime
from zoneinfo import ZoneInfo


def hotel_today() -> date:
    """ホテル所在地のタイムゾーンでの「今日」"""
    tz = ZoneInfo(os.getenv("HOTEL_TIMEZONE", "Africa/Addis_Ababa"))
    return datetime.now(tz).date()
