from __future__ import annotations

from datetime import date, datetime, timedelta
import os
from threading import Thread
import unittest
from unittest import mock

from pmo.config import default_db_path
from pmo.service import PomodoroApp, StartupError
from pmo.tests.test_helpers import local_tmp_dir


class TestStartup(unittest.TestCase):
    def test_startup_creates_data_directory(self) -> None:
        with local_tmp_dir() as tmp:
            db_path = tmp / "nested" / "Pomodoro" / "pomodoro.db"
            app = PomodoroApp.startup(db_path)
            try:
                self.assertTrue(db_path.exists())
                self.assertEqual(app.get_timer().seconds, 1500)
            finally:
                app.shutdown()

    def test_startup_uses_data_dir_override(self) -> None:
        with local_tmp_dir() as tmp:
            with mock.patch.dict(os.environ, {"PMO_DATA_DIR": str(tmp / "data")}):
                self.assertEqual(default_db_path(), tmp / "data" / "pomodoro.db")
                app = PomodoroApp.startup()
            try:
                self.assertEqual(app.store.db_path, tmp / "data" / "pomodoro.db")
            finally:
                app.shutdown()

    def test_startup_failure_is_fatal(self) -> None:
        with local_tmp_dir() as tmp:
            blocker = tmp / "not-a-dir"
            blocker.write_text("x", encoding="utf-8")

            with self.assertRaises(StartupError) as ctx:
                PomodoroApp.startup(blocker / "pomodoro.db")

            self.assertIsInstance(ctx.exception.__cause__, OSError)


class TestPomodoroApp(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = local_tmp_dir()
        tmp = self._tmp.__enter__()
        self.app = PomodoroApp.startup(tmp / "pomodoro.db")

    def tearDown(self) -> None:
        self.app.shutdown()
        self._tmp.__exit__(None, None, None)

    def test_save_uses_current_task(self) -> None:
        start = datetime(2026, 2, 13, 9, 0)
        self.app.set_task("Write report")
        self.assertTrue(self.app.save_completed_session(start, start + timedelta(minutes=25), 1))

        records = self.app.get_sessions_by_date(date(2026, 2, 13))
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].task_name, "Write report")
        self.assertTrue(records[0].is_completed)

    def test_save_without_task_is_noop(self) -> None:
        start = datetime(2026, 2, 13, 9, 0)
        self.assertFalse(self.app.save_completed_session(start, start + timedelta(minutes=25), 1))
        self.assertFalse(self.app.save_partial_session(start, start + timedelta(minutes=25), 1))
        self.assertEqual(self.app.get_session_history(), [])

    def test_reset_clears_task_so_later_saves_are_dropped(self) -> None:
        start = datetime(2026, 2, 13, 9, 0)
        self.app.set_task("Write report")
        self.app.start_timer(1500)
        self.app.reset_timer()
        self.assertFalse(self.app.save_partial_session(start, start + timedelta(minutes=30), 1))
        self.assertEqual(self.app.store.count(), 0)

    def test_partial_session(self) -> None:
        start = datetime(2026, 2, 13, 9, 0)
        self.app.set_task("Read")
        self.assertFalse(self.app.save_partial_session(start, start + timedelta(minutes=5), 0))
        self.assertTrue(self.app.save_partial_session(start, start + timedelta(minutes=30), 1))

        history = self.app.get_session_history()
        self.assertEqual(len(history), 1)
        self.assertFalse(history[0].is_completed)

    def test_history_is_capped_at_fifty(self) -> None:
        self.app.set_task("Batch")
        start = datetime(2026, 1, 1, 8, 0)
        for i in range(55):
            begin = start + timedelta(hours=i)
            self.app.save_completed_session(begin, begin + timedelta(minutes=25), 1)

        history = self.app.get_session_history()
        self.assertEqual(len(history), 50)
        self.assertEqual(history[0].start_time, start + timedelta(hours=54))

    def test_timer_commands_report_applied(self) -> None:
        self.assertFalse(self.app.pause_timer())
        self.assertTrue(self.app.start_timer(600))
        self.assertFalse(self.app.start_timer(600))
        self.assertTrue(self.app.sync_remaining(300))
        self.assertTrue(self.app.pause_timer())
        self.assertEqual(self.app.get_timer().phase, "paused")
        self.assertEqual(self.app.timer_state().remaining, 300)

    def test_concurrent_commands_keep_invariants(self) -> None:
        def worker() -> None:
            for _ in range(200):
                self.app.start_timer(60)
                self.app.sync_remaining(30)
                self.app.pause_timer()
                self.app.get_timer()

        threads = [Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        state = self.app.timer_state()
        self.assertFalse(state.running and state.paused)
        self.assertEqual(state.configured_duration, 60)


if __name__ == "__main__":
    unittest.main()
