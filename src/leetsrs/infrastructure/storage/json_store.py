"""
JSON File Problem Repository: Infrastructure adapter for on-disk storage.

Implements ProblemRepository with one JSON document holding the whole
collection. Writes go to a temp file that is swapped in with ``os.replace``,
so a replace is all-or-nothing.
"""

import logging
import os
import tempfile
from pathlib import Path

from leetsrs.domain.problems.models import Problem
from leetsrs.domain.problems.ports import ProblemRepository
from leetsrs.infrastructure.serialization import dump_problems, load_problems

logger = logging.getLogger(__name__)


class JsonFileProblemRepository(ProblemRepository):
    """
    Stores the problem collection as a JSON array in a single file.

    A missing file is an empty collection. An unreadable or corrupt file is
    logged and also read as empty.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load_all(self) -> list[Problem]:
        if not self.path.exists():
            return []

        try:
            text = self.path.read_text(encoding="utf-8")
            if not text.strip():
                return []
            return load_problems(text)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading problems from {self.path}: {e}")
            return []

    def replace_all(self, problems: list[Problem]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = dump_problems(problems)

        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug(f"Saved {len(problems)} problems to {self.path}")
