# Problem storage adapters
from .json_store import JsonFileProblemRepository
from .memory_store import InMemoryProblemRepository

__all__ = ["JsonFileProblemRepository", "InMemoryProblemRepository"]
