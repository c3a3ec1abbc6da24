# topics/utils.py

from dateutil.relativedelta import relativedelta, MO
from django.utils import timezone

# 리마인더 기본 시각 (사이트 타임존 기준)
START_OF_DAY_HOUR = 8
END_OF_DAY_HOUR = 18


def _at_hour(dt, hour):
    return dt.replace(hour=hour, minute=0, second=0, microsecond=0)


def next_business_day(now):
    """
    다음 영업일 오전 8시.
    금/토요일에 호출하면 다음 월요일로 넘어갑니다.
    """
    day = now + relativedelta(days=+1)
    if day.weekday() >= 5:
        day = day + relativedelta(weekday=MO)
    return _at_hour(day, START_OF_DAY_HOUR)


def reminder_at_for(reminder_type, now=None):
    """
    리마인더 종류(Bookmark.ReminderType 값)를 실제 알림 시각으로 변환합니다.
    CUSTOM은 호출자가 시각을 직접 넣어야 하므로 None을 반환합니다.
    """
    from .models import Bookmark

    now = timezone.localtime(now or timezone.now())
    types = Bookmark.ReminderType

    if reminder_type == types.LATER_TODAY:
        later = _at_hour(now, END_OF_DAY_HOUR)
        # 이미 저녁이 지났다면 3시간 뒤
        return later if later > now else now + relativedelta(hours=+3)
    if reminder_type == types.NEXT_BUSINESS_DAY:
        return next_business_day(now)
    if reminder_type == types.TOMORROW:
        return _at_hour(now + relativedelta(days=+1), START_OF_DAY_HOUR)
    if reminder_type == types.NEXT_WEEK:
        return _at_hour(now + relativedelta(days=+1, weekday=MO), START_OF_DAY_HOUR)
    if reminder_type == types.NEXT_MONTH:
        return _at_hour(now + relativedelta(months=+1, day=1), START_OF_DAY_HOUR)
    return None
