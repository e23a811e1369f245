"""
Problem Service: Application layer orchestrator.

Coordinates the storage port with the update, selection and aggregation
engines. Every call reads "now" once and passes the same value to each
engine it uses.
"""

import logging
from datetime import datetime

from leetsrs.application.config import AppConfig
from leetsrs.application.scheduler import (
    apply_attempt,
    create_problem,
    edit_problem,
    get_interval_policy,
)
from leetsrs.application.selection import (
    ProblemView,
    SelectionLimits,
    filter_problems,
    select_due_today,
)
from leetsrs.application.stats.metrics_calculator import HeatmapSettings, MetricsCalculator
from leetsrs.application.utils.dates import local_now
from leetsrs.domain.errors import ProblemNotFoundError
from leetsrs.domain.problems.models import AttemptInput, Difficulty, Problem
from leetsrs.domain.problems.ports import ProblemRepository
from leetsrs.domain.stats.models import Stats
from leetsrs.infrastructure.serialization import build_export_json, parse_backup_json

logger = logging.getLogger(__name__)


class ProblemService:
    """
    Application service for the use cases the presentation layer calls.

    Follows Dependency Inversion: depends on the ProblemRepository
    abstraction, not a concrete storage adapter.
    """

    def __init__(
        self,
        repository: ProblemRepository,
        config: AppConfig | None = None,
        clock=local_now,
    ):
        """
        Args:
            repository: The storage port for the problem collection.
            config: Scheduling settings; defaults are used if not provided.
            clock: Callable returning the current aware datetime.
        """
        config = config or AppConfig()
        self._repo = repository
        self._clock = clock
        self._policy = get_interval_policy(config.interval_policy)
        self._mastery_interval = config.mastery_interval
        self._limits = SelectionLimits(
            new_problems_per_day=config.new_problems_per_day,
            new_attempts_per_day=config.new_attempts_per_day,
            repeat_attempts_per_day=config.repeat_attempts_per_day,
        )
        self._calc = MetricsCalculator(
            limits=self._limits,
            heatmaps=HeatmapSettings(
                rolling_window_days=config.rolling_window_days,
                cycle_start_month=config.cycle_start_month,
                cycle_start_day=config.cycle_start_day,
            ),
        )

    def _now(self) -> datetime:
        return self._clock()

    # ---------- Reads ----------

    def list_problems(self, view: ProblemView = "active") -> list[Problem]:
        return filter_problems(self._repo.load_all(), view, self._now())

    def get_problem(self, problem_id: str) -> Problem:
        problem = self._repo.get(problem_id)
        if problem is None:
            raise ProblemNotFoundError(problem_id)
        return problem

    def due_today(self) -> list[Problem]:
        return select_due_today(self._repo.load_all(), self._now(), self._limits)

    def stats(self) -> Stats:
        return self._calc.compute(self._repo.load_all(), self._now())

    # ---------- Writes ----------

    def add_problem(
        self,
        name: str,
        url: str,
        difficulty: Difficulty | str,
        category: str,
    ) -> Problem:
        problem = create_problem(name, url, difficulty, category, now=self._now())
        self._repo.upsert(problem)
        logger.info(f"Added problem {problem.id} ({problem.name})")
        return problem

    def edit_problem(self, problem_id: str, **fields) -> Problem:
        """
        Update name/url/difficulty/category. Scheduling state is not touched.
        """
        updated = edit_problem(self.get_problem(problem_id), **fields)
        self._repo.upsert(updated)
        return updated

    def record_attempt(self, problem_id: str, attempt: AttemptInput) -> Problem:
        """
        Apply one attempt through the update engine and persist the result.
        """
        problem = self.get_problem(problem_id)
        updated = apply_attempt(
            problem,
            attempt,
            now=self._now(),
            policy=self._policy,
            mastery_interval=self._mastery_interval,
        )
        self._repo.upsert(updated)
        logger.info(
            f"Recorded attempt on {problem_id}: success={attempt.success} "
            f"interval={problem.interval}->{updated.interval} status={updated.status.value}"
        )
        return updated

    def delete_problem(self, problem_id: str) -> None:
        if not self._repo.delete(problem_id):
            raise ProblemNotFoundError(problem_id)
        logger.info(f"Deleted problem {problem_id}")

    # ---------- Backup ----------

    def export_json(self) -> str:
        return build_export_json(self._repo.load_all(), now=self._now())

    def import_json(self, text: str) -> int:
        """
        Replace the whole collection with the contents of a backup.

        Storage is only touched after the document validates.

        Returns:
            Number of problems imported.

        Raises:
            InvalidBackupFormatError: If the backup is malformed.
        """
        problems = parse_backup_json(text)
        self._repo.replace_all(problems)
        logger.info(f"Imported {len(problems)} problems")
        return len(problems)
