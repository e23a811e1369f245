"""Builders shared by the test suite."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from leetsrs.domain.problems.models import Attempt, Difficulty, Problem, ProblemStatus

# Fixed reference time so day-boundary behaviour is deterministic.
NOW = datetime(2026, 3, 10, 15, 0, tzinfo=timezone.utc)
EASTERN = ZoneInfo("America/New_York")


def days_ago(n: int, hour: int = 12) -> datetime:
    return (NOW - timedelta(days=n)).replace(hour=hour, minute=0)


def make_attempt(when: datetime, success: bool = True, rating: int = 2) -> Attempt:
    return Attempt(
        id=f"att_{when.isoformat()}",
        date=when,
        success=success,
        difficulty_rating=rating,
    )


def make_problem(
    pid: str,
    difficulty: Difficulty = Difficulty.EASY,
    attempts: tuple[Attempt, ...] = (),
    next_review: datetime | None = None,
    status: ProblemStatus | None = None,
    interval: int = 0,
    ease: float = 2.5,
) -> Problem:
    if status is None:
        status = ProblemStatus.REVIEWING if attempts else ProblemStatus.NEW
    return Problem(
        id=pid,
        name=f"Problem {pid}",
        url=f"https://leetcode.com/problems/{pid}/",
        difficulty=difficulty,
        category="Array",
        status=status,
        attempts=attempts,
        next_review_date=next_review or NOW + timedelta(days=1),
        ease_factor=ease,
        interval=interval,
        last_reviewed=attempts[-1].date if attempts else None,
        created_at=NOW - timedelta(days=30),
    )
