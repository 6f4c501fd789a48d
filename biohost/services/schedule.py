from __future__ import annotations

from datetime import date, datetime, time, timezone, tzinfo
from typing import Iterable

from .ruleset import Schedule


def day_of_week(moment: datetime) -> int:
    """0=Sunday .. 6=Saturday."""
    return moment.isoweekday() % 7


def end_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=23, minute=59, second=59, microsecond=999999)


def to_naive(value: datetime, tz: tzinfo = timezone.utc) -> datetime:
    """Wall-clock time of an aware value in tz, without tzinfo. Naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone(tz).replace(tzinfo=None)


def _align(value: datetime, now: datetime) -> datetime:
    # Naive stored values are read in the clock's zone; a naive clock is read as UTC
    if value.tzinfo is None and now.tzinfo is not None:
        return value.replace(tzinfo=now.tzinfo)
    if value.tzinfo is not None and now.tzinfo is None:
        return to_naive(value)
    return value


def within_date_range(
    now: datetime,
    start: datetime | None,
    end: datetime | None,
    *,
    inclusive_end_day: bool = True,
) -> bool:
    if start is not None and now < _align(start, now):
        return False
    if end is not None:
        end = _align(end, now)
        if inclusive_end_day:
            end = end_of_day(end)
        if now > end:
            return False
    return True


def within_time_window(now: datetime, time_start: int | None, time_end: int | None) -> bool:
    # Only applied when both bounds are present
    if time_start is None or time_end is None:
        return True
    minutes = now.hour * 60 + now.minute
    return time_start <= minutes <= time_end


def on_allowed_day(now: datetime, days: Iterable[int]) -> bool:
    days = frozenset(days)
    if not days:
        return True
    return day_of_week(now) in days


def is_within_schedule(schedule: Schedule | None, now: datetime) -> bool:
    if schedule is None:
        return True
    return (
        within_date_range(now, schedule.start_date, schedule.end_date)
        and within_time_window(now, schedule.time_start, schedule.time_end)
        and on_allowed_day(now, schedule.days_of_week)
    )


def _column_bound(value: date | datetime | None, *, end: bool) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.combine(value, time.max if end else time.min)


def is_within_block_window(
    start: date | datetime | None, end: date | datetime | None, now: datetime
) -> bool:
    """Block start_date/end_date columns: exact datetime bounds, no time-of-day or weekday."""
    return within_date_range(
        now,
        _column_bound(start, end=False),
        _column_bound(end, end=True),
        inclusive_end_day=False,
    )
