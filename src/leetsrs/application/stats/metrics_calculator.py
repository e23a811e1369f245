"""
Metrics calculator for summarising a problem collection.

This is a pure computation module with no I/O.
"""

import math
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo

from leetsrs.application.selection import (
    SelectionLimits,
    get_mastered_problems,
    select_due_today,
)
from leetsrs.application.utils.dates import calendar_day, end_of_day, local_now, start_of_day
from leetsrs.domain.constants import (
    CYCLE_START_DAY,
    CYCLE_START_MONTH,
    HEATMAP_DATE_FORMAT,
    ROLLING_WINDOW_DAYS,
)
from leetsrs.domain.problems.models import Difficulty, Problem
from leetsrs.domain.stats.models import ActivityHeatmap, Stats

ROLLING_WINDOW = "window_year"
CYCLE_WINDOW = "calendar_year"


@dataclass(frozen=True)
class HeatmapSettings:
    """Which heatmap windows to build."""

    rolling_window_days: int = ROLLING_WINDOW_DAYS
    cycle_start_month: int = CYCLE_START_MONTH
    cycle_start_day: int = CYCLE_START_DAY


def rolling_window(today: date, days: int = ROLLING_WINDOW_DAYS) -> tuple[date, date]:
    """The ``days`` calendar days ending with ``today`` (inclusive)."""
    return today - timedelta(days=days - 1), today


def cycle_window(
    today: date,
    start_month: int = CYCLE_START_MONTH,
    start_day: int = CYCLE_START_DAY,
) -> tuple[date, date]:
    """
    The annual cycle containing ``today``.

    A cycle starts on ``start_month``/``start_day`` and ends the day before
    the same date one year later.
    """
    start = date(today.year, start_month, start_day)
    if today < start:
        start = date(today.year - 1, start_month, start_day)
    end = date(start.year + 1, start_month, start_day) - timedelta(days=1)
    return start, end


def build_heatmap(
    problems: Iterable[Problem],
    first_day: date,
    last_day: date,
    tz: tzinfo | None = None,
) -> ActivityHeatmap:
    """
    Count attempts per calendar day between ``first_day`` and ``last_day``.

    Days are taken on the calendar of ``tz``. Days without attempts are left out.
    """
    counts: dict[str, int] = defaultdict(int)
    for problem in problems:
        for attempt in problem.attempts:
            day = calendar_day(attempt.date, tz)
            if first_day <= day <= last_day:
                counts[day.strftime(HEATMAP_DATE_FORMAT)] += 1

    return ActivityHeatmap(
        start_date=start_of_day(first_day, tz),
        end_date=end_of_day(last_day, tz),
        values=dict(sorted(counts.items())),
    )


def average_ease_factor(problems: list[Problem]) -> float:
    """
    Mean ease factor rounded half-up to 2 decimals; 0 for an empty collection.
    """
    if not problems:
        return 0
    mean = sum(p.ease_factor for p in problems) / len(problems)
    return math.floor(mean * 100 + 0.5) / 100


class MetricsCalculator:
    """
    Computes summary statistics from a problem collection.

    Stateless and side-effect free.
    """

    def __init__(
        self,
        limits: SelectionLimits | None = None,
        heatmaps: HeatmapSettings | None = None,
    ):
        self.limits = limits or SelectionLimits()
        self.heatmaps = heatmaps or HeatmapSettings()

    def compute(self, problems: Iterable[Problem], now: datetime | None = None) -> Stats:
        """
        Summarise the collection as of ``now``.
        """
        now = now or local_now()
        problems = list(problems)
        today = now.date()
        tz = now.tzinfo

        by_difficulty = {d.value: 0 for d in Difficulty}
        for problem in problems:
            by_difficulty[problem.difficulty.value] += 1

        rolling_start, rolling_end = rolling_window(today, self.heatmaps.rolling_window_days)
        cycle_start, cycle_end = cycle_window(
            today, self.heatmaps.cycle_start_month, self.heatmaps.cycle_start_day
        )

        return Stats(
            total_problems=len(problems),
            problems_due_today=len(select_due_today(problems, now, self.limits)),
            mastered_problems=len(get_mastered_problems(problems)),
            problems_by_difficulty=by_difficulty,
            average_ease_factor=average_ease_factor(problems),
            activity_heatmap={
                ROLLING_WINDOW: build_heatmap(problems, rolling_start, rolling_end, tz),
                CYCLE_WINDOW: build_heatmap(problems, cycle_start, cycle_end, tz),
            },
        )


def compute_stats(
    problems: Iterable[Problem],
    now: datetime | None = None,
    limits: SelectionLimits | None = None,
    heatmaps: HeatmapSettings | None = None,
) -> Stats:
    return MetricsCalculator(limits, heatmaps).compute(problems, now)
