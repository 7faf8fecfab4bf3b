"""Local-calendar day arithmetic. ``tz=None`` means the system local timezone."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional, Union

DayLike = Union[date, datetime]


def _local_tz(tz: Optional[tzinfo]) -> tzinfo:
    if tz is not None:
        return tz
    return datetime.now().astimezone().tzinfo


def local_day(value: DayLike, tz: Optional[tzinfo] = None) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.astimezone()
        return value.astimezone(_local_tz(tz)).date()
    return value


def start_of_day(value: DayLike, tz: Optional[tzinfo] = None) -> datetime:
    day = local_day(value, tz)
    midnight = datetime.combine(day, time.min)
    if tz is None:
        # Resolve the offset for that date, not today's (DST).
        return midnight.astimezone()
    return midnight.replace(tzinfo=tz)


def is_same_day(a: DayLike, b: DayLike, tz: Optional[tzinfo] = None) -> bool:
    return local_day(a, tz) == local_day(b, tz)


def adjusted_trading_day(value: DayLike, tz: Optional[tzinfo] = None) -> datetime:
    """Start of day, rolled back over a weekend to the preceding Friday."""
    day = local_day(value, tz)
    while day.weekday() >= 5:
        day -= timedelta(days=1)
    return start_of_day(day, tz)


def local_now() -> datetime:
    return datetime.now().astimezone()


def as_aware(dt: datetime) -> datetime:
    """Naive values are taken as local wall-clock time."""
    return dt.astimezone() if dt.tzinfo is None else dt
