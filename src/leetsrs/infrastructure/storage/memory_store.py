"""
In-memory problem repository.

Keeps the collection in a process-local list. Useful for tests and for
embedding the engines without touching disk.
"""

from leetsrs.domain.problems.models import Problem
from leetsrs.domain.problems.ports import ProblemRepository


class InMemoryProblemRepository(ProblemRepository):
    def __init__(self, problems: list[Problem] | None = None):
        self._problems: list[Problem] = list(problems or [])

    def load_all(self) -> list[Problem]:
        return list(self._problems)

    def replace_all(self, problems: list[Problem]) -> None:
        self._problems = list(problems)
