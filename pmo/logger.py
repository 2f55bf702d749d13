"""Application-wide logger writing to the per-user log directory."""

from __future__ import annotations

import logging
import logging.handlers

from .config import default_log_dir

_LOGGER_NAME = "pmo"
_LOG_FILE = "pmo.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the application logger (or a child of it), initialising it on first call."""
    global _logger
    if _logger is None:
        _logger = _build_logger()
    return _logger.getChild(name) if name else _logger


def _build_logger() -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    if logger.handlers:
        return logger

    try:
        log_dir = default_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.handlers.RotatingFileHandler(
            log_dir / _LOG_FILE,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError:
        # read-only home: keep logging, just not to disk
        handler = logging.StreamHandler()
        handler.setLevel(logging.WARNING)

    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    logger.addHandler(handler)
    return logger
