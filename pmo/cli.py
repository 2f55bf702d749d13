from __future__ import annotations

import argparse
from datetime import date
from pathlib import Path

from .config import HISTORY_LIMIT, default_db_path, dev_url
from .desktop import launch_desktop
from .service import PomodoroApp, StartupError
from .store import SessionRecord


def parse_day(value: str) -> date:
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pmo",
        description="pmo: a minimal Pomodoro timer with a local session history",
    )
    parser.add_argument(
        "--db",
        default=str(default_db_path()),
        help="SQLite database path (default: per-user config directory)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    history_parser = subparsers.add_parser("history", help="show the most recent sessions")
    history_parser.add_argument(
        "--limit",
        type=int,
        default=HISTORY_LIMIT,
        help=f"maximum number of sessions (default {HISTORY_LIMIT})",
    )

    day_parser = subparsers.add_parser("day", help="show the sessions started on one day")
    day_parser.add_argument(
        "--date",
        dest="day",
        type=parse_day,
        default=None,
        help="calendar date YYYY-MM-DD (default: today)",
    )

    serve_parser = subparsers.add_parser("serve", help="run the local API without a window")
    serve_parser.add_argument("--host", default="127.0.0.1", help="bind address")
    serve_parser.add_argument("--port", type=int, default=8765, help="bind port")

    subparsers.add_parser("gui", help="open the desktop timer")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    db_path = Path(args.db)

    if args.command == "gui":
        return launch_desktop(db_path)
    if args.command == "history" and args.limit < 1:
        parser.error("--limit must be at least 1")

    try:
        pomodoro = PomodoroApp.startup(db_path)
    except StartupError as exc:
        print(f"pmo: {exc}")
        return 2

    try:
        if args.command == "history":
            return _print_sessions(pomodoro.store.query_recent(args.limit))
        if args.command == "day":
            day = args.day or date.today()
            return _print_sessions(pomodoro.get_sessions_by_date(day))
        if args.command == "serve":
            return _handle_serve(args, pomodoro)
    finally:
        pomodoro.shutdown()

    parser.print_help()
    return 2


def format_session(item: SessionRecord) -> str:
    day_text = item.start_time.strftime("%Y-%m-%d")
    span = f"{item.start_time.strftime('%H:%M')} - {item.end_time.strftime('%H:%M')}"
    cycles = f"{item.completed_cycles} {'cycle' if item.completed_cycles == 1 else 'cycles'}"
    state = "Complete" if item.is_completed else "Partial"
    return f"{day_text} {span} | {item.duration_minutes} min | {cycles} | {state} | {item.task_name}"


def _print_sessions(sessions: list[SessionRecord]) -> int:
    if not sessions:
        print("No sessions recorded.")
        return 0
    for item in sessions:
        print(format_session(item))
    return 0


def _handle_serve(args: argparse.Namespace, pomodoro: PomodoroApp) -> int:
    import uvicorn

    from .api.app import FRONTEND_DIST, create_app

    app = create_app(pomodoro=pomodoro, frontend_dist=FRONTEND_DIST, dev_url=dev_url())
    uvicorn.run(app, host=args.host, port=int(args.port), log_level="info")
    return 0
