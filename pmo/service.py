from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
import sqlite3
from threading import Lock

from .config import DEFAULT_DURATION_SEC, HISTORY_LIMIT, default_db_path
from .engine import TimerEngine, TimerReading, TimerState
from .logger import get_logger
from .store import SessionRecord, SessionStore


class StartupError(RuntimeError):
    pass


class PomodoroApp:
    """Command surface the shell talks to: one timer, one session store."""

    def __init__(self, store: SessionStore, duration_sec: int = DEFAULT_DURATION_SEC) -> None:
        self.store = store
        self._engine = TimerEngine(duration_sec=duration_sec)
        self._lock = Lock()

    @classmethod
    def startup(cls, db_path: Path | None = None) -> PomodoroApp:
        log = get_logger("app")
        resolved = Path(db_path or default_db_path())
        try:
            store = SessionStore(resolved)
        except (OSError, sqlite3.Error) as exc:
            log.error("cannot open session store at %s: %s", resolved, exc)
            raise StartupError(f"cannot open session store at {resolved}: {exc}") from exc
        return cls(store)

    def shutdown(self) -> None:
        self.store.close()

    # ----- timer -----
    def set_task(self, task: str) -> None:
        with self._lock:
            self._engine.set_task(task)

    def get_task(self) -> str:
        with self._lock:
            return self._engine.get_task()

    def start_timer(self, duration: int) -> bool:
        with self._lock:
            return self._engine.start_timer(duration)

    def pause_timer(self) -> bool:
        with self._lock:
            return self._engine.pause_timer()

    def reset_timer(self) -> None:
        with self._lock:
            self._engine.reset_timer()

    def sync_remaining(self, seconds: int) -> bool:
        with self._lock:
            return self._engine.sync_remaining(seconds)

    def get_timer(self) -> TimerReading:
        with self._lock:
            return self._engine.get_timer()

    def timer_state(self) -> TimerState:
        with self._lock:
            return self._engine.snapshot()

    # ----- sessions -----
    def save_completed_session(
        self,
        start_time: datetime,
        end_time: datetime,
        completed_cycles: int,
    ) -> bool:
        return self.store.save_completed(self.get_task(), start_time, end_time, completed_cycles)

    def save_partial_session(
        self,
        start_time: datetime,
        end_time: datetime,
        completed_cycles: int,
    ) -> bool:
        return self.store.save_partial(self.get_task(), start_time, end_time, completed_cycles)

    def get_sessions_by_date(self, day: date) -> list[SessionRecord]:
        return self.store.query_by_date(day)

    def get_session_history(self) -> list[SessionRecord]:
        return self.store.query_recent(HISTORY_LIMIT)
