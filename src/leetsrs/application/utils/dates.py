"""Calendar-day helpers shared by the scheduling engines.

All day comparisons happen on the local calendar of the reference ``now``
(midnight to midnight), never on rolling 24 hour windows.
"""

import time as _time
from datetime import date, datetime, time, timedelta, timezone, tzinfo


class SystemLocalTimezone(tzinfo):
    """
    The machine's local zone, with its DST rules applied per instant.

    Unlike the fixed offset from ``datetime.now().astimezone()``, the offset
    is looked up from the operating system for each datetime.
    """

    def utcoffset(self, dt):
        if dt is None:
            return None
        return self._as_local(dt).utcoffset()

    def dst(self, dt):
        if dt is None:
            return None
        return self.utcoffset(dt) - timedelta(seconds=-_time.timezone)

    def tzname(self, dt):
        if dt is None:
            return None
        return self._as_local(dt).tzname()

    def fromutc(self, dt):
        local = dt.replace(tzinfo=timezone.utc).astimezone()
        wall = local.replace(tzinfo=None)
        # Second pass through a repeated hour when DST ends
        fold = 0 if wall.astimezone().utcoffset() == local.utcoffset() else 1
        return wall.replace(tzinfo=self, fold=fold)

    @staticmethod
    def _as_local(dt: datetime) -> datetime:
        return dt.replace(tzinfo=None).astimezone()

    def __repr__(self) -> str:
        return "SystemLocalTimezone()"


LOCAL_TZ = SystemLocalTimezone()


def local_now() -> datetime:
    """Current time in the machine's local zone."""
    return datetime.now(LOCAL_TZ)


def ensure_aware(ts: datetime) -> datetime:
    """Treat naive datetimes as local time."""
    if ts.tzinfo is None:
        return ts.astimezone()
    return ts


def calendar_day(ts: datetime, tz: tzinfo | None) -> date:
    """The calendar day ``ts`` falls on, seen from timezone ``tz``."""
    return ensure_aware(ts).astimezone(tz).date()


def start_of_day(day: date, tz: tzinfo | None) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def end_of_day(day: date, tz: tzinfo | None) -> datetime:
    return datetime.combine(day, time.max, tzinfo=tz)
