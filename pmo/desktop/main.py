from __future__ import annotations

import socket
import threading
import time
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any

from ..config import APP_TITLE, WINDOW_HEIGHT, WINDOW_WIDTH, dev_url
from ..logger import get_logger
from ..service import PomodoroApp, StartupError


class WindowBridge:
    """Methods the page can call through ``window.pywebview.api``."""

    def __init__(self) -> None:
        self._window: Any = None

    def attach(self, window: Any) -> None:
        self._window = window

    def set_window_height(self, height: int) -> bool:
        if self._window is None:
            return False
        self._window.resize(WINDOW_WIDTH, max(WINDOW_HEIGHT, int(height)))
        return True


def launch_desktop(db_path: Path | None = None) -> int:
    log = get_logger("desktop")
    try:
        import uvicorn
        import webview
    except Exception as exc:
        print(f"GUI failed to start: missing dependency (fastapi/uvicorn/pywebview). {exc}")
        print("Install the GUI dependencies: pip install 'pmo[gui]'")
        return 2

    try:
        pomodoro = PomodoroApp.startup(db_path)
    except StartupError as exc:
        print(f"GUI failed to start: {exc}")
        return 2

    app = _create_api_app(pomodoro)
    host = "127.0.0.1"
    port = _find_free_port()
    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=host,
            port=port,
            log_level="warning",
        )
    )
    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()
    log.info("local API starting on http://%s:%d", host, port)

    try:
        if not _wait_for_api(host, port, timeout_sec=12.0):
            print("GUI failed to start: the local API did not come up in time.")
            log.error("local API on port %d not ready", port)
            return 2

        bridge = WindowBridge()
        window = webview.create_window(
            APP_TITLE,
            f"http://{host}:{port}",
            js_api=bridge,
            width=WINDOW_WIDTH,
            height=WINDOW_HEIGHT,
            resizable=False,
            frameless=True,
            on_top=True,
            transparent=True,
        )
        bridge.attach(window)
        webview.start(debug=False)
    except Exception as exc:
        print(f"GUI failed to start: {exc}")
        log.exception("window failed")
        return 2
    finally:
        server.should_exit = True
        thread.join(timeout=2.0)
        pomodoro.shutdown()
        log.info("desktop shell stopped")

    return 0


def _create_api_app(pomodoro: PomodoroApp):
    from ..api.app import FRONTEND_DIST, create_app

    return create_app(pomodoro=pomodoro, frontend_dist=FRONTEND_DIST, dev_url=dev_url())


def _find_free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return int(s.getsockname()[1])


def _wait_for_api(host: str, port: int, timeout_sec: float) -> bool:
    deadline = time.time() + timeout_sec
    url = f"http://{host}:{port}/api/v1/health"
    while time.time() < deadline:
        try:
            with urllib.request.urlopen(url, timeout=1.2) as resp:
                if resp.status == 200:
                    return True
        except (urllib.error.URLError, TimeoutError):
            time.sleep(0.2)
            continue
    return False
