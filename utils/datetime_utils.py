from datetime import datetime, date, timedelta, tzinfo
from typing import Optional, Union

import pytz

DEFAULT_TIMEZONE = "UTC"


def get_timezone(name: Optional[str] = None) -> tzinfo:
    """Часовой пояс по имени из базы tz (по умолчанию UTC)"""
    return pytz.timezone(name or DEFAULT_TIMEZONE)


def to_local(dt: datetime, tz: tzinfo) -> datetime:
    """Перевод в часовой пояс tz; наивное время считается уже локальным"""
    if dt.tzinfo is None:
        return tz.localize(dt) if hasattr(tz, "localize") else dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def calendar_day(dt: datetime, tz: tzinfo) -> date:
    return to_local(dt, tz).date()


def is_same_day(first: datetime, second: datetime, tz: tzinfo) -> bool:
    return calendar_day(first, tz) == calendar_day(second, tz)


def is_previous_day(earlier: datetime, later: datetime, tz: tzinfo) -> bool:
    """earlier приходится ровно на предыдущий календарный день относительно later"""
    return calendar_day(earlier, tz) == calendar_day(later, tz) - timedelta(days=1)


def parse_datetime(value: Union[str, datetime, None]) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value.replace('Z', '+00:00'))


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


class Clock:
    """Источник текущего времени в заданном часовом поясе"""

    def __init__(self, timezone: Union[str, tzinfo, None] = None):
        if timezone is None or isinstance(timezone, str):
            timezone = get_timezone(timezone)
        self.tz = timezone

    def now(self) -> datetime:
        return datetime.now(self.tz)
