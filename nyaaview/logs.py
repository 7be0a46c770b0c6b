"""File logging setup.

The terminal belongs to the TUI, so log records go to a file only.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_PATH = Path(user_log_dir("nyaaview", appauthor=False)) / "nyaaview.log"


def configure_logging(path: Path | None = None, level: int = logging.INFO) -> Path | None:
    """Attach a file handler to the ``nyaaview`` logger.

    Returns the log path in use, or ``None`` when the file cannot be opened;
    logging is then left unconfigured rather than failing startup.
    """
    log_path = path if path is not None else DEFAULT_LOG_PATH
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("nyaaview")
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
        existing.close()
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False
    return log_path
