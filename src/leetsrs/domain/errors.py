"""Domain errors surfaced across the storage/presentation boundary."""


class LeetSrsError(Exception):
    """Base class for all leetsrs errors."""


class InvalidBackupFormatError(LeetSrsError):
    """An import payload is not valid JSON or does not have the backup shape."""

    def __init__(self, reason: str | None = None):
        self.reason = reason
        message = "Invalid backup format"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ProblemNotFoundError(LeetSrsError):
    """No problem with the given id exists in the collection."""

    def __init__(self, problem_id: str):
        self.problem_id = problem_id
        super().__init__(f"Problem not found: {problem_id}")
