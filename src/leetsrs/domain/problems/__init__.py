# Domain Problems Package
from .models import Attempt, AttemptInput, Difficulty, Problem, ProblemStatus, next_status
from .ports import ProblemRepository

__all__ = [
    "Attempt",
    "AttemptInput",
    "Difficulty",
    "Problem",
    "ProblemStatus",
    "ProblemRepository",
    "next_status",
]
