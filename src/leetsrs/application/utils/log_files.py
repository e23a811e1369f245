"""File logging under the configured ``log_dir``."""

import logging
from pathlib import Path

LOG_FILE_NAME = "leetsrs.log"


def attach_log_file(log_dir: Path) -> Path:
    """
    Mirror records from the ``leetsrs`` loggers into ``log_dir/leetsrs.log``.

    At most one file handler is attached; pointing at a new directory
    replaces the previous handler.

    Returns:
        Path of the log file.
    """
    package_logger = logging.getLogger("leetsrs")
    path = (log_dir / LOG_FILE_NAME).resolve()

    for handler in list(package_logger.handlers):
        if isinstance(handler, logging.FileHandler):
            if Path(handler.baseFilename) == path:
                return path
            package_logger.removeHandler(handler)
            handler.close()

    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    package_logger.addHandler(handler)
    return path
