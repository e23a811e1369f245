"""
Domain models for collection statistics.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ActivityHeatmap:
    """
    Attempt counts bucketed by calendar day over an inclusive window.

    Attributes:
        start_date: Start of the first day in the window.
        end_date: End of the last day in the window.
        values: ``YYYY-MM-DD`` -> attempt count. Days without attempts are omitted.
    """

    start_date: datetime
    end_date: datetime
    values: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class Stats:
    """
    Summary of the whole collection as of one point in time.
    """

    total_problems: int
    problems_due_today: int
    mastered_problems: int
    problems_by_difficulty: dict[str, int]
    average_ease_factor: float

    # Named windows, e.g. "window_year" and "calendar_year"
    activity_heatmap: dict[str, ActivityHeatmap] = field(default_factory=dict)
