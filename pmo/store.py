from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
import sqlite3
from threading import Lock

from .config import HISTORY_LIMIT, journal_mode
from .logger import get_logger

_COLUMNS = "task_name, start_time, end_time, duration, completed_cycles, is_completed"


def _to_text(value: datetime) -> str:
    # stored as given: no time zone conversion
    return value.isoformat()


def _from_text(text: str) -> datetime:
    return datetime.fromisoformat(text)


def duration_minutes(start_time: datetime, end_time: datetime) -> int:
    return int((end_time - start_time).total_seconds() // 60)


@dataclass(frozen=True)
class SessionRecord:
    task_name: str
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    completed_cycles: int
    is_completed: bool


class SessionStore:
    """Append-only SQLite log of finished Pomodoro sessions.

    One connection is opened by the constructor and shared for the lifetime of
    the store; statements are serialized with a lock so the store can be used
    from a web server's worker threads.
    """

    def __init__(self, db_path: Path, journal: str | None = None) -> None:
        self.db_path = Path(db_path)
        self.journal_mode = (journal or journal_mode()).upper()
        self._log = get_logger("store")
        self._lock = Lock()

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._apply_journal_mode()
        self.init_schema()
        self._log.info("session store opened at %s", self.db_path)

    def _apply_journal_mode(self) -> None:
        try:
            self._conn.execute(f"PRAGMA journal_mode={self.journal_mode}")
        except sqlite3.OperationalError:
            self._log.warning("journal mode %s rejected, using MEMORY", self.journal_mode)
            self._conn.execute("PRAGMA journal_mode=MEMORY")
        self._conn.execute("PRAGMA synchronous=NORMAL")

    def init_schema(self) -> None:
        with self._lock, self._conn:
            self._conn.execute(
                """
                CREATE TABLE IF NOT EXISTS sessions (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    task_name TEXT NOT NULL,
                    start_time TEXT NOT NULL,
                    end_time TEXT NOT NULL,
                    duration INTEGER NOT NULL,
                    completed_cycles INTEGER NOT NULL,
                    is_completed INTEGER NOT NULL DEFAULT 0
                )
                """
            )
            self._conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_sessions_start_time
                ON sessions(start_time)
                """
            )

    def save_completed(
        self,
        task: str,
        start_time: datetime,
        end_time: datetime,
        completed_cycles: int,
    ) -> bool:
        if not task:
            return False
        self._insert(task, start_time, end_time, completed_cycles, completed=True)
        return True

    def save_partial(
        self,
        task: str,
        start_time: datetime,
        end_time: datetime,
        completed_cycles: int,
    ) -> bool:
        # partial sessions without a finished cycle are not worth keeping
        if not task or completed_cycles < 1:
            return False
        self._insert(task, start_time, end_time, completed_cycles, completed=False)
        return True

    def _insert(
        self,
        task: str,
        start_time: datetime,
        end_time: datetime,
        completed_cycles: int,
        completed: bool,
    ) -> None:
        if (start_time.tzinfo is None) != (end_time.tzinfo is None):
            raise ValueError("start_time and end_time must both be naive or both be aware")
        if end_time < start_time:
            raise ValueError("end_time must not be earlier than start_time")
        if completed_cycles < 0:
            raise ValueError("completed_cycles must not be negative")

        minutes = duration_minutes(start_time, end_time)
        with self._lock, self._conn:
            self._conn.execute(
                f"INSERT INTO sessions ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                (
                    task,
                    _to_text(start_time),
                    _to_text(end_time),
                    minutes,
                    int(completed_cycles),
                    1 if completed else 0,
                ),
            )
        self._log.info(
            "saved %s session %r: %d min, %d cycles",
            "completed" if completed else "partial",
            task,
            minutes,
            completed_cycles,
        )

    def query_by_date(self, day: date) -> list[SessionRecord]:
        """Sessions whose stored start_time begins with ``day``, newest first."""
        query = (
            f"SELECT {_COLUMNS} FROM sessions "
            "WHERE substr(start_time, 1, 10) = ? "
            "ORDER BY start_time DESC, id DESC"
        )
        return self._read_sessions(query, [day.isoformat()])

    def query_recent(self, limit: int = HISTORY_LIMIT) -> list[SessionRecord]:
        """Newest sessions first, at most ``limit`` of them.

        Ordering compares the stored ISO text, so it is chronological only for
        timestamps sharing one UTC offset (across a DST change it is not).
        """
        if limit < 1:
            return []
        query = f"SELECT {_COLUMNS} FROM sessions ORDER BY start_time DESC, id DESC LIMIT ?"
        return self._read_sessions(query, [int(limit)])

    def count(self) -> int:
        with self._lock:
            row = self._conn.execute("SELECT COUNT(1) AS c FROM sessions").fetchone()
        return int(row["c"])

    def close(self) -> None:
        with self._lock:
            self._conn.close()
        self._log.info("session store closed")

    def _read_sessions(self, query: str, params: list[object]) -> list[SessionRecord]:
        with self._lock:
            rows = self._conn.execute(query, params).fetchall()

        return [
            SessionRecord(
                task_name=row["task_name"],
                start_time=_from_text(row["start_time"]),
                end_time=_from_text(row["end_time"]),
                duration_minutes=int(row["duration"]),
                completed_cycles=int(row["completed_cycles"]),
                is_completed=bool(row["is_completed"]),
            )
            for row in rows
        ]
