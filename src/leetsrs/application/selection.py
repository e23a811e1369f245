"""
Selection engine for the daily review queue.

Builds the ordered "due today" list by:
1. Taking every overdue repeat that has not been reviewed yet today
2. Topping up with at most a couple of new problems, easiest first,
   keeping any new problem already started today at the front
3. Concatenating both groups and de-duplicating by id

All comparisons use local calendar days of the reference ``now``.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from leetsrs.application.utils.dates import calendar_day, local_now
from leetsrs.domain.constants import (
    NEW_ATTEMPTS_PER_DAY,
    NEW_PROBLEMS_PER_DAY,
    REPEAT_ATTEMPTS_PER_DAY,
)
from leetsrs.domain.problems.models import Problem

logger = logging.getLogger(__name__)

ProblemView = Literal["active", "due", "mastered", "all"]


@dataclass(frozen=True)
class SelectionLimits:
    """Daily caps for the review queue."""

    new_problems_per_day: int = NEW_PROBLEMS_PER_DAY
    new_attempts_per_day: int = NEW_ATTEMPTS_PER_DAY  # per new problem
    repeat_attempts_per_day: int = REPEAT_ATTEMPTS_PER_DAY  # per repeat


def attempts_on(problem: Problem, now: datetime) -> int:
    """Number of attempts logged on the calendar day of ``now``."""
    today = now.date()
    return sum(1 for a in problem.attempts if calendar_day(a.date, now.tzinfo) == today)


def is_due(problem: Problem, now: datetime) -> bool:
    """Whether the next review falls on or before the day of ``now`` (time of day ignored)."""
    return calendar_day(problem.next_review_date, now.tzinfo) <= now.date()


def select_due_today(
    problems: Iterable[Problem],
    now: datetime | None = None,
    limits: SelectionLimits | None = None,
) -> list[Problem]:
    """
    Select the problems to work on today, in display order.

    Args:
        problems: The full collection.
        now: Reference time; read from the clock once if omitted.
        limits: Daily caps; defaults to SelectionLimits().

    Returns:
        Repeats first (collection order), then the chosen new problems.
    """
    now = now or local_now()
    limits = limits or SelectionLimits()
    tz = now.tzinfo
    today = now.date()

    repeats: list[Problem] = []
    new_candidates: list[tuple[Problem, int]] = []

    for problem in problems:
        if problem.mastered:
            continue

        today_count = 0
        before_today = 0
        for attempt in problem.attempts:
            day = calendar_day(attempt.date, tz)
            if day == today:
                today_count += 1
            elif day < today:
                before_today += 1

        if before_today == 0 and today_count == len(problem.attempts):
            # Never practised before today
            if today_count < limits.new_attempts_per_day:
                new_candidates.append((problem, today_count))
        elif is_due(problem, now) and today_count < limits.repeat_attempts_per_day:
            repeats.append(problem)

    # Started-today first, then Easy < Medium < Hard. Sort is stable.
    new_candidates.sort(key=lambda c: (0 if c[1] > 0 else 1, c[0].difficulty.priority))
    picked = [p for p, _ in new_candidates[: limits.new_problems_per_day]]

    unique: dict[str, Problem] = {}
    for problem in [*repeats, *picked]:
        unique.setdefault(problem.id, problem)

    logger.debug(
        f"Due today: {len(repeats)} repeats, {len(picked)}/{len(new_candidates)} new"
    )
    return list(unique.values())


def get_mastered_problems(problems: Iterable[Problem]) -> list[Problem]:
    return [p for p in problems if p.mastered]


def filter_problems(
    problems: Iterable[Problem],
    view: ProblemView = "active",
    now: datetime | None = None,
) -> list[Problem]:
    """
    Listing views over the collection.

    - active: everything not yet mastered
    - due: not mastered, next review falls on today
    - mastered: mastered only
    - all: the whole collection
    """
    if view == "all":
        return list(problems)
    if view == "mastered":
        return get_mastered_problems(problems)
    if view == "due":
        now = now or local_now()
        today = now.date()
        return [
            p
            for p in problems
            if not p.mastered and calendar_day(p.next_review_date, now.tzinfo) == today
        ]
    return [p for p in problems if not p.mastered]
