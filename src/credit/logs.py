"""File logging. Nothing goes to the terminal while the TUI owns it."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "credit"
MAX_BYTES = 2_000_000
BACKUP_COUNT = 2


def setup_logging(log_path: Path, level: str = "WARNING") -> logging.Logger:
    """Attach a rotating file handler to the package logger.

    Existing handlers are replaced so repeated calls (tests, re-runs) do not
    duplicate output.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    log_path.parent.mkdir(parents=True, exist_ok=True)
    fh = RotatingFileHandler(log_path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8")
    fh.setLevel(getattr(logging, level.upper(), logging.WARNING))
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(fh)
    return logger
