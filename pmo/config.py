from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir, user_log_dir

APP_NAME = "Pomodoro"
APP_TITLE = "pmo"
DB_FILENAME = "pomodoro.db"

DEFAULT_DURATION_SEC = 25 * 60
HISTORY_LIMIT = 50

WINDOW_WIDTH = 320
WINDOW_HEIGHT = 145


def _env_path(name: str) -> Path | None:
    raw = os.getenv(name, "").strip()
    return Path(raw).expanduser() if raw else None


def default_data_dir() -> Path:
    return _env_path("PMO_DATA_DIR") or Path(user_config_dir(APP_NAME, appauthor=False))


def default_db_path() -> Path:
    return default_data_dir() / DB_FILENAME


def default_log_dir() -> Path:
    return _env_path("PMO_LOG_DIR") or Path(user_log_dir(APP_NAME, appauthor=False))


def journal_mode() -> str:
    raw = os.getenv("PMO_JOURNAL_MODE", "").strip()
    return raw.upper() if raw else "WAL"


def dev_url() -> str | None:
    return os.getenv("PMO_DEV_URL", "").strip() or None
