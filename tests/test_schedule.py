from datetime import date, datetime, timedelta, timezone

from biohost.services.ruleset import Schedule
from biohost.services.schedule import (
    day_of_week,
    is_within_block_window,
    is_within_schedule,
    to_naive,
    within_time_window,
)

UTC = timezone.utc


def at(*args) -> datetime:
    return datetime(*args, tzinfo=UTC)


def test_day_of_week_is_sunday_based():
    assert day_of_week(at(2024, 6, 9)) == 0  # Sunday
    assert day_of_week(at(2024, 6, 10)) == 1  # Monday
    assert day_of_week(at(2024, 6, 15)) == 6  # Saturday


def test_no_schedule_or_empty_schedule_passes():
    assert is_within_schedule(None, at(2024, 6, 12))
    assert is_within_schedule(Schedule(), at(2024, 6, 12))


def test_start_date_excludes_earlier_moments():
    schedule = Schedule(start_date=datetime(2024, 6, 12))
    assert not is_within_schedule(schedule, at(2024, 6, 11, 23, 59, 59))
    assert is_within_schedule(schedule, at(2024, 6, 12, 0, 0))


def test_end_date_is_inclusive_through_end_of_day():
    schedule = Schedule(end_date=datetime(2024, 6, 12))
    assert is_within_schedule(schedule, at(2024, 6, 12, 23, 59, 59))
    assert not is_within_schedule(schedule, at(2024, 6, 13, 0, 0, 0))


def test_time_window_needs_both_bounds():
    noon = at(2024, 6, 12, 12, 0)
    assert within_time_window(noon, 13 * 60, None)
    assert within_time_window(noon, None, 11 * 60)
    assert is_within_schedule(Schedule(time_start=13 * 60), noon)


def test_time_window_bounds_are_inclusive_to_the_minute():
    schedule = Schedule(time_start=9 * 60, time_end=17 * 60)
    assert is_within_schedule(schedule, at(2024, 6, 12, 9, 0))
    assert is_within_schedule(schedule, at(2024, 6, 12, 17, 0, 59))
    assert not is_within_schedule(schedule, at(2024, 6, 12, 8, 59))
    assert not is_within_schedule(schedule, at(2024, 6, 12, 17, 1))


def test_days_of_week():
    weekdays = Schedule(days_of_week=frozenset({1, 2, 3, 4, 5}))
    assert is_within_schedule(weekdays, at(2024, 6, 12))  # Wednesday
    assert not is_within_schedule(weekdays, at(2024, 6, 15))  # Saturday
    assert not is_within_schedule(weekdays, at(2024, 6, 16))  # Sunday


def test_all_sub_checks_must_pass():
    schedule = Schedule(
        start_date=datetime(2024, 1, 1),
        end_date=datetime(2024, 12, 31),
        time_start=9 * 60,
        time_end=17 * 60,
        days_of_week=frozenset({1, 2, 3, 4, 5}),
    )
    assert is_within_schedule(schedule, at(2024, 6, 12, 10, 0))
    assert not is_within_schedule(schedule, at(2024, 6, 12, 18, 0))
    assert not is_within_schedule(schedule, at(2025, 1, 1, 10, 0))


def test_aware_schedule_dates_compare_across_zones():
    plus_two = timezone(timedelta(hours=2))
    schedule = Schedule(start_date=datetime(2024, 6, 12, 12, 0, tzinfo=plus_two))
    assert is_within_schedule(schedule, at(2024, 6, 12, 10, 0))
    assert not is_within_schedule(schedule, at(2024, 6, 12, 9, 59))


def test_aware_bound_against_naive_clock_is_read_as_utc():
    plus_two = timezone(timedelta(hours=2))
    start = datetime(2024, 6, 12, 12, 0, tzinfo=plus_two)
    assert is_within_block_window(start, None, datetime(2024, 6, 12, 10, 0))
    assert not is_within_block_window(start, None, datetime(2024, 6, 12, 9, 59))


def test_to_naive_gives_wall_clock_in_zone():
    plus_two = timezone(timedelta(hours=2))
    assert to_naive(at(2024, 6, 12, 10, 0), plus_two) == datetime(2024, 6, 12, 12, 0)
    assert to_naive(datetime(2024, 6, 12, 10, 0)) == datetime(2024, 6, 12, 10, 0)


def test_block_window_uses_exact_datetimes():
    end = at(2024, 6, 12, 10, 0)
    assert is_within_block_window(None, end, at(2024, 6, 12, 10, 0))
    assert not is_within_block_window(None, end, at(2024, 6, 12, 10, 1))
    assert not is_within_block_window(at(2024, 6, 13), None, at(2024, 6, 12))
    assert is_within_block_window(None, None, at(2024, 6, 12))


def test_block_window_accepts_naive_columns_and_plain_dates():
    now = at(2024, 6, 12, 12, 0)
    assert is_within_block_window(datetime(2024, 6, 12, 11, 0), None, now)
    assert is_within_block_window(None, date(2024, 6, 12), at(2024, 6, 12, 23, 0))
    assert not is_within_block_window(None, date(2024, 6, 11), now)
