"""
Domain models for tracked problems and their attempt log.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from leetsrs.domain.constants import DEFAULT_EASE_FACTOR, MASTERY_INTERVAL_DAYS


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    @property
    def priority(self) -> int:
        """Sort priority for new-problem intake (lower is picked first)."""
        return _DIFFICULTY_PRIORITY[self]


_DIFFICULTY_PRIORITY = {
    Difficulty.EASY: 1,
    Difficulty.MEDIUM: 2,
    Difficulty.HARD: 3,
}


class ProblemStatus(str, Enum):
    NEW = "new"
    LEARNING = "learning"
    REVIEWING = "reviewing"
    MASTERED = "mastered"


def next_status(
    status: ProblemStatus,
    new_interval: int,
    mastery_interval: int = MASTERY_INTERVAL_DAYS,
) -> ProblemStatus:
    """
    Single transition of the progress state machine.

    ``mastered`` is absorbing. Any other state moves to ``mastered`` once the
    interval reaches the mastery threshold, otherwise ``new`` advances to
    ``learning`` and everything else settles in ``reviewing``.
    """
    if status is ProblemStatus.MASTERED:
        return ProblemStatus.MASTERED
    if new_interval >= mastery_interval:
        return ProblemStatus.MASTERED
    if status is ProblemStatus.NEW:
        return ProblemStatus.LEARNING
    return ProblemStatus.REVIEWING


@dataclass(frozen=True)
class AttemptInput:
    """
    The caller-supplied part of an attempt.

    Attributes:
        success: Whether the problem was solved.
        difficulty_rating: Perceived difficulty, 0 (trivial) to 5 (very hard).
        notes: Optional free text.
    """

    success: bool
    difficulty_rating: int
    notes: str | None = None


@dataclass(frozen=True)
class Attempt:
    """
    One logged practice event.

    ``id`` and ``date`` are assigned by the update engine, never by callers.
    """

    id: str
    date: datetime
    success: bool
    difficulty_rating: int
    notes: str | None = None


@dataclass(frozen=True)
class Problem:
    """
    One tracked practice item and its scheduling state.

    Progress is a single state machine held in ``status``; ``mastered`` is
    derived from it so the flag cannot drift out of sync or revert.
    """

    id: str
    name: str
    url: str
    difficulty: Difficulty
    category: str
    next_review_date: datetime
    created_at: datetime

    # Scheduling state
    status: ProblemStatus = ProblemStatus.NEW
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval: int = 0
    last_reviewed: datetime | None = None

    # Append-only, chronological
    attempts: tuple[Attempt, ...] = field(default_factory=tuple)

    @property
    def mastered(self) -> bool:
        return self.status is ProblemStatus.MASTERED

    @property
    def is_new(self) -> bool:
        return not self.attempts
