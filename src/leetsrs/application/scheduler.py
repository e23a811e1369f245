"""
Update engine for spaced-repetition scheduling.

Turns one recorded attempt into a new scheduling state:
1. Score the attempt's quality (0-5)
2. Adjust the ease factor (SM-2 formula, floored)
3. Pick the next interval with the configured interval policy
4. Advance the status state machine

This is a pure computation module with no I/O. Inputs are never mutated.
"""

import math
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Protocol

from leetsrs.application.id_service import generate_attempt_id, generate_problem_id
from leetsrs.application.utils.dates import local_now
from leetsrs.domain.constants import (
    DEFAULT_EASE_FACTOR,
    FIRST_REVIEW_DELAY_DAYS,
    GRADUATED_SECOND_INTERVAL,
    MASTERY_INTERVAL_DAYS,
    MAX_QUALITY,
    MIN_EASE_FACTOR,
)
from leetsrs.domain.problems.models import (
    Attempt,
    AttemptInput,
    Difficulty,
    Problem,
    ProblemStatus,
    next_status,
)


class IntervalPolicy(Protocol):
    name: str

    def next_interval(self, current_interval: int, ease_factor: float, quality: int) -> int: ...


class DoublingIntervalPolicy:
    """
    Exponential doubling with instant reset (1, 2, 4, 8, 16...).

    A failed attempt resets to 1 day, never 0.
    """

    name = "doubling"

    def next_interval(self, current_interval: int, ease_factor: float, quality: int) -> int:
        if quality <= 0:
            return 1
        if current_interval <= 0:
            return 1
        return current_interval * 2


class GraduatedIntervalPolicy:
    """
    Classic SM-2 graduation: 1 day, then 6 days, then interval * ease.
    """

    name = "graduated"

    def next_interval(self, current_interval: int, ease_factor: float, quality: int) -> int:
        if quality <= 0:
            return 1
        if current_interval <= 0:
            return 1
        if current_interval == 1:
            return GRADUATED_SECOND_INTERVAL
        return _round_half_up(current_interval * ease_factor)


_POLICIES: dict[str, IntervalPolicy] = {
    DoublingIntervalPolicy.name: DoublingIntervalPolicy(),
    GraduatedIntervalPolicy.name: GraduatedIntervalPolicy(),
}


def get_interval_policy(name: str = "doubling") -> IntervalPolicy:
    try:
        return _POLICIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown interval policy '{name}'. Expected one of: {', '.join(_POLICIES)}"
        ) from None


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_quality(success: bool, difficulty_rating: int) -> int:
    """
    Map an attempt to SM-2 quality.

    A failure is always 0. A success maps the difficulty rating inversely,
    so a trivial solve (rating 0) scores 5. Out-of-range ratings are clamped.
    """
    if not success:
        return 0
    return max(0, min(MAX_QUALITY, MAX_QUALITY - difficulty_rating))


def calculate_ease_factor(current_ease: float, quality: int) -> float:
    """
    SM-2 ease adjustment, floored at MIN_EASE_FACTOR with no upper cap.

    ease' = ease + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
    """
    miss = MAX_QUALITY - quality
    new_ease = current_ease + (0.1 - miss * (0.08 + miss * 0.02))
    if new_ease < MIN_EASE_FACTOR:
        return MIN_EASE_FACTOR
    return new_ease


def create_problem(
    name: str,
    url: str,
    difficulty: Difficulty | str,
    category: str,
    now: datetime | None = None,
) -> Problem:
    """
    Create a new problem with default scheduling values.

    The first review is due the next day.
    """
    now = now or local_now()
    return Problem(
        id=generate_problem_id(),
        name=name,
        url=url,
        difficulty=Difficulty(difficulty),
        category=category,
        status=ProblemStatus.NEW,
        attempts=(),
        next_review_date=now + timedelta(days=FIRST_REVIEW_DELAY_DAYS),
        ease_factor=DEFAULT_EASE_FACTOR,
        interval=0,
        last_reviewed=None,
        created_at=now,
    )


def edit_problem(
    problem: Problem,
    *,
    name: str | None = None,
    url: str | None = None,
    difficulty: Difficulty | str | None = None,
    category: str | None = None,
) -> Problem:
    """
    Change descriptive fields only. Scheduling state is left untouched.
    """
    changes: dict = {}
    if name is not None:
        changes["name"] = name
    if url is not None:
        changes["url"] = url
    if difficulty is not None:
        changes["difficulty"] = Difficulty(difficulty)
    if category is not None:
        changes["category"] = category
    return replace(problem, **changes) if changes else problem


def apply_attempt(
    problem: Problem,
    attempt: AttemptInput,
    now: datetime | None = None,
    policy: IntervalPolicy | None = None,
    mastery_interval: int = MASTERY_INTERVAL_DAYS,
) -> Problem:
    """
    Record one attempt and recompute every scheduling field.

    Args:
        problem: The current record (not mutated).
        attempt: success, difficulty rating and optional notes.
        now: Time of the attempt; read from the clock once if omitted.
        policy: Interval policy; doubling if omitted.
        mastery_interval: Interval (days) at which a problem becomes mastered.

    Returns:
        A new Problem with the attempt appended and scheduling state updated.
    """
    now = now or local_now()
    policy = policy or _POLICIES[DoublingIntervalPolicy.name]

    quality = calculate_quality(attempt.success, attempt.difficulty_rating)
    new_ease = calculate_ease_factor(problem.ease_factor, quality)
    new_interval = policy.next_interval(problem.interval, new_ease, quality)

    logged = Attempt(
        id=generate_attempt_id(),
        date=now,
        success=attempt.success,
        difficulty_rating=attempt.difficulty_rating,
        notes=attempt.notes,
    )

    return replace(
        problem,
        attempts=(*problem.attempts, logged),
        ease_factor=new_ease,
        interval=new_interval,
        next_review_date=now + timedelta(days=new_interval),
        last_reviewed=now,
        status=next_status(problem.status, new_interval, mastery_interval),
    )
