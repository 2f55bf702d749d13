from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from .. import __version__
from ..service import PomodoroApp
from .routes.health import router as health_router
from .routes.meta import router as meta_router
from .routes.sessions import router as sessions_router
from .routes.timer import router as timer_router

FRONTEND_DIST = Path(__file__).resolve().parents[1] / "frontend" / "dist"


def create_app(
    pomodoro: PomodoroApp | None = None,
    db_path: Path | None = None,
    frontend_dist: Path | None = None,
    dev_url: str | None = None,
) -> FastAPI:
    """Build the local API the embedded web UI calls into.

    Either pass an already started PomodoroApp (the desktop launcher does, so it
    can close the store on exit) or let the factory start one on ``db_path``.
    """
    core = pomodoro or PomodoroApp.startup(db_path)

    app = FastAPI(title="pmo API", version=__version__)
    app.state.pomodoro = core

    app.include_router(health_router)
    app.include_router(meta_router)
    app.include_router(timer_router)
    app.include_router(sessions_router)

    if dev_url:
        app.add_api_route("/", lambda: HTMLResponse(_dev_html(dev_url)), methods=["GET"])
    elif frontend_dist and (frontend_dist / "index.html").exists():
        app.mount("/", StaticFiles(directory=str(frontend_dist), html=True), name="frontend")
    else:
        app.add_api_route("/", lambda: HTMLResponse(_missing_frontend_html()), methods=["GET"])

    return app


def _missing_frontend_html() -> str:
    return """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>pmo</title>
    <style>
      body { font-family: system-ui, sans-serif; margin: 0; padding: 0.75rem; background: #18181b; color: #f4f4f5; }
      code { background: #27272a; padding: 0.1rem 0.3rem; border-radius: 0.25rem; }
    </style>
  </head>
  <body>
    <p>No web UI found. The timer UI ships separately: set <code>PMO_DEV_URL</code> to its server, or place a built copy in <code>pmo/frontend/dist</code>.</p>
    <p>API docs: <a href="/docs" style="color:#a1a1aa">/docs</a></p>
  </body>
</html>
"""


def _dev_html(dev_url: str) -> str:
    return f"""
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta http-equiv="refresh" content="0; url={dev_url}" />
    <title>pmo</title>
  </head>
  <body>
    Redirecting to the frontend dev server: {dev_url}
  </body>
</html>
"""
