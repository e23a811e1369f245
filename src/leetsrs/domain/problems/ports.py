"""
Ports (interfaces) for problem storage.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from .models import Problem


class ProblemRepository(ABC):
    """
    Port for loading and saving the problem collection.

    The whole collection is treated as one record; ``replace_all`` is assumed
    atomic.

    Implementations:
        - JsonFileProblemRepository: A single JSON document on disk.
        - InMemoryProblemRepository: Process-local list, for tests and embedding.
    """

    @abstractmethod
    def load_all(self) -> list[Problem]:
        """
        Load every stored problem, in insertion order.

        Returns:
            List of Problem records; empty if nothing is stored.
        """
        pass

    @abstractmethod
    def replace_all(self, problems: list[Problem]) -> None:
        """
        Replace the entire stored collection.

        Args:
            problems: The new collection.
        """
        pass

    def get(self, problem_id: str) -> Problem | None:
        for problem in self.load_all():
            if problem.id == problem_id:
                return problem
        return None

    def upsert(self, problem: Problem) -> None:
        """
        Insert a new problem or replace the stored one with the same id.

        New problems are appended; existing ones keep their position.
        """
        problems = self.load_all()
        for i, existing in enumerate(problems):
            if existing.id == problem.id:
                problems[i] = problem
                break
        else:
            problems.append(problem)
        self.replace_all(problems)

    def delete(self, problem_id: str) -> bool:
        """
        Remove a problem entirely.

        Returns:
            True if a record was removed.
        """
        problems = self.load_all()
        remaining = [p for p in problems if p.id != problem_id]
        if len(remaining) == len(problems):
            return False
        self.replace_all(remaining)
        return True
