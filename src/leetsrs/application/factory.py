"""
Service Factory
Centralizes the wiring of storage adapters and application services.
"""

from leetsrs.application.config import AppConfig
from leetsrs.application.problem_service import ProblemService
from leetsrs.domain.problems.ports import ProblemRepository
from leetsrs.infrastructure.storage.json_store import JsonFileProblemRepository


def get_problem_repository(config: AppConfig) -> ProblemRepository:
    """
    Returns the storage adapter for the configured data file.
    """
    return JsonFileProblemRepository(config.data_file)


def get_problem_service(config: AppConfig) -> ProblemService:
    return ProblemService(get_problem_repository(config), config)
