"""Service for generating stable identifiers for problems and attempts."""

from ulid import ULID


def generate_problem_id() -> str:
    """Generate a stable problem ID using ULID."""
    return f"prob_{ULID()}"


def generate_attempt_id() -> str:
    """Generate an attempt ID using ULID (sorts by creation time)."""
    return f"att_{ULID()}"
