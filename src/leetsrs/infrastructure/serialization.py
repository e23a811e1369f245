"""
JSON codec for problems and the export/import backup document.

Wire field names are camelCase (``nextReviewDate``, ``easeFactor`` ...) and
timestamps are ISO-8601, so stored data and backups stay interchangeable
with the browser build of the tracker.
"""

import json
import logging
from datetime import datetime
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    ValidationError,
)
from pydantic.alias_generators import to_camel

from leetsrs.application.utils.dates import ensure_aware, local_now
from leetsrs.domain.constants import DEFAULT_EASE_FACTOR, EXPORT_SCHEMA_VERSION, MIN_EASE_FACTOR
from leetsrs.domain.errors import InvalidBackupFormatError
from leetsrs.domain.problems.models import Attempt, Difficulty, Problem, ProblemStatus
from leetsrs.domain.stats.models import ActivityHeatmap, Stats

logger = logging.getLogger(__name__)


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class AttemptRecord(_CamelModel):
    id: str
    date: datetime
    success: bool
    difficulty_rating: int
    notes: str | None = None

    @classmethod
    def from_domain(cls, attempt: Attempt) -> "AttemptRecord":
        return cls(
            id=attempt.id,
            date=attempt.date,
            success=attempt.success,
            difficulty_rating=attempt.difficulty_rating,
            notes=attempt.notes,
        )

    def to_domain(self) -> Attempt:
        return Attempt(
            id=self.id,
            date=ensure_aware(self.date),
            success=self.success,
            difficulty_rating=self.difficulty_rating,
            notes=self.notes,
        )


class ProblemRecord(_CamelModel):
    id: str
    name: str
    url: str = ""
    difficulty: Difficulty
    category: str = ""
    status: ProblemStatus = ProblemStatus.NEW
    attempts: list[AttemptRecord] = Field(default_factory=list)
    next_review_date: datetime
    ease_factor: float = Field(default=DEFAULT_EASE_FACTOR, ge=MIN_EASE_FACTOR)
    interval: int = Field(default=0, ge=0)
    last_reviewed: datetime | None = None
    mastered: bool = False
    created_at: datetime

    @classmethod
    def from_domain(cls, problem: Problem) -> "ProblemRecord":
        return cls(
            id=problem.id,
            name=problem.name,
            url=problem.url,
            difficulty=problem.difficulty,
            category=problem.category,
            status=problem.status,
            attempts=[AttemptRecord.from_domain(a) for a in problem.attempts],
            next_review_date=problem.next_review_date,
            ease_factor=problem.ease_factor,
            interval=problem.interval,
            last_reviewed=problem.last_reviewed,
            mastered=problem.mastered,
            created_at=problem.created_at,
        )

    def to_domain(self) -> Problem:
        # The stored flag is sticky: either representation of mastery wins.
        status = ProblemStatus.MASTERED if self.mastered else self.status
        if not self.attempts:
            # Status only moves on through attempts
            status = ProblemStatus.NEW
        return Problem(
            id=self.id,
            name=self.name,
            url=self.url,
            difficulty=self.difficulty,
            category=self.category,
            status=status,
            attempts=tuple(a.to_domain() for a in self.attempts),
            next_review_date=ensure_aware(self.next_review_date),
            ease_factor=self.ease_factor,
            interval=self.interval,
            last_reviewed=ensure_aware(self.last_reviewed) if self.last_reviewed else None,
            created_at=ensure_aware(self.created_at),
        )


class BackupDocument(_CamelModel):
    # Any number is accepted so newer exports still import.
    version: StrictInt | StrictFloat
    exported_at: datetime | None = None
    problems: list[ProblemRecord]


def problem_to_dict(problem: Problem) -> dict[str, Any]:
    return ProblemRecord.from_domain(problem).model_dump(mode="json", by_alias=True)


def problem_from_dict(data: dict[str, Any]) -> Problem:
    return ProblemRecord.model_validate(data).to_domain()


def dump_problems(problems: list[Problem]) -> str:
    return json.dumps([problem_to_dict(p) for p in problems], indent=2)


def load_problems(text: str) -> list[Problem]:
    """
    Decode a stored problem list.

    Raises:
        ValueError: If the text is not a JSON list of problems.
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("Stored problems must be a JSON array")
    return [problem_from_dict(item) for item in data]


def build_export_json(problems: list[Problem], now: datetime | None = None) -> str:
    """
    Wrap the collection in the versioned backup document.
    """
    payload = {
        "version": EXPORT_SCHEMA_VERSION,
        "exportedAt": (now or local_now()).isoformat(),
        "problems": [problem_to_dict(p) for p in problems],
    }
    return json.dumps(payload, indent=2)


def parse_backup_json(text: str) -> list[Problem]:
    """
    Validate a backup document and decode its problems.

    Raises:
        InvalidBackupFormatError: Not JSON, or ``version`` is not a number,
            or ``problems`` is not an array of problems.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise InvalidBackupFormatError("not valid JSON") from e

    if not isinstance(data, dict):
        raise InvalidBackupFormatError("expected a JSON object")

    try:
        document = BackupDocument.model_validate(data)
    except ValidationError as e:
        raise InvalidBackupFormatError(f"{e.error_count()} validation error(s)") from e

    if document.version != EXPORT_SCHEMA_VERSION:
        logger.info(f"Importing backup with schema version {document.version}")

    return [record.to_domain() for record in document.problems]


def _heatmap_to_dict(heatmap: ActivityHeatmap) -> dict[str, Any]:
    return {
        "startDate": heatmap.start_date.isoformat(),
        "endDate": heatmap.end_date.isoformat(),
        "values": dict(heatmap.values),
    }


def stats_to_dict(stats: Stats) -> dict[str, Any]:
    return {
        "totalProblems": stats.total_problems,
        "problemsDueToday": stats.problems_due_today,
        "masteredProblems": stats.mastered_problems,
        "problemsByDifficulty": dict(stats.problems_by_difficulty),
        "averageEaseFactor": stats.average_ease_factor,
        "activityHeatmap": {
            to_camel(name): _heatmap_to_dict(h) for name, h in stats.activity_heatmap.items()
        },
    }
