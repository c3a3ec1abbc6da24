from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from topics.models import Bookmark
from topics.utils import next_business_day, reminder_at_for

SEOUL = ZoneInfo("Asia/Seoul")
Types = Bookmark.ReminderType


@pytest.mark.parametrize("now, expected", [
    (datetime(2026, 10, 14, 15, 30, tzinfo=SEOUL), datetime(2026, 10, 15, 8, 0, tzinfo=SEOUL)),  # 수 -> 목
    (datetime(2026, 10, 16, 15, 30, tzinfo=SEOUL), datetime(2026, 10, 19, 8, 0, tzinfo=SEOUL)),  # 금 -> 월
    (datetime(2026, 10, 17, 9, 0, tzinfo=SEOUL), datetime(2026, 10, 19, 8, 0, tzinfo=SEOUL)),   # 토 -> 월
])
def test_next_business_day(now, expected):
    assert next_business_day(now) == expected


def test_reminder_at_for_each_type():
    now = datetime(2026, 10, 14, 15, 30, tzinfo=SEOUL)  # 수요일

    assert reminder_at_for(Types.LATER_TODAY, now) == datetime(2026, 10, 14, 18, 0, tzinfo=SEOUL)
    assert reminder_at_for(Types.TOMORROW, now) == datetime(2026, 10, 15, 8, 0, tzinfo=SEOUL)
    assert reminder_at_for(Types.NEXT_WEEK, now) == datetime(2026, 10, 19, 8, 0, tzinfo=SEOUL)
    assert reminder_at_for(Types.NEXT_MONTH, now) == datetime(2026, 11, 1, 8, 0, tzinfo=SEOUL)
    assert reminder_at_for(Types.CUSTOM, now) is None


def test_later_today_after_evening_adds_three_hours():
    now = datetime(2026, 10, 14, 19, 0, tzinfo=SEOUL)
    assert reminder_at_for(Types.LATER_TODAY, now) == datetime(2026, 10, 14, 22, 0, tzinfo=SEOUL)
