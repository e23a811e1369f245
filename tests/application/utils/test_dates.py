"""Tests for the calendar-day helpers and the system-local zone."""

from datetime import date, datetime, timedelta, timezone

from leetsrs.application.utils.dates import (
    LOCAL_TZ,
    calendar_day,
    end_of_day,
    local_now,
    start_of_day,
)
from tests.helpers import EASTERN

EST = timedelta(hours=-5)
EDT = timedelta(hours=-4)


def test_local_now_uses_system_zone():
    assert local_now().tzinfo is LOCAL_TZ


def test_offset_follows_dst_per_date(eastern_local_time):
    assert datetime(2026, 1, 5, 12, tzinfo=LOCAL_TZ).utcoffset() == EST
    assert datetime(2026, 7, 1, 12, tzinfo=LOCAL_TZ).utcoffset() == EDT


def test_day_bounds_on_switch_days(eastern_local_time):
    spring = date(2026, 3, 8)
    assert start_of_day(spring, LOCAL_TZ).utcoffset() == EST
    assert end_of_day(spring, LOCAL_TZ).utcoffset() == EDT

    autumn = date(2026, 11, 1)
    assert start_of_day(autumn, LOCAL_TZ).utcoffset() == EDT
    assert end_of_day(autumn, LOCAL_TZ).utcoffset() == EST


def test_repeated_hour_converts_both_ways(eastern_local_time):
    first = datetime(2026, 11, 1, 5, 30, tzinfo=timezone.utc).astimezone(LOCAL_TZ)
    second = datetime(2026, 11, 1, 6, 30, tzinfo=timezone.utc).astimezone(LOCAL_TZ)

    assert (first.hour, first.minute) == (second.hour, second.minute) == (1, 30)
    assert first.utcoffset() == EDT
    assert second.utcoffset() == EST
    assert second.astimezone(timezone.utc) == datetime(2026, 11, 1, 6, 30, tzinfo=timezone.utc)


def test_winter_late_evening_keeps_its_day(eastern_local_time):
    late = datetime(2026, 1, 5, 23, 30, tzinfo=EASTERN)
    assert calendar_day(late, LOCAL_TZ) == date(2026, 1, 5)
    assert calendar_day(late.astimezone(timezone.utc), LOCAL_TZ) == date(2026, 1, 5)


def test_calendar_day_in_injected_zone():
    late = datetime(2026, 1, 6, 4, 30, tzinfo=timezone.utc)
    assert calendar_day(late, EASTERN) == date(2026, 1, 5)
    assert calendar_day(late, timezone.utc) == date(2026, 1, 6)
