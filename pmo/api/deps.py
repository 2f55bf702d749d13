from __future__ import annotations

from fastapi import Request

from ..service import PomodoroApp


def get_app(request: Request) -> PomodoroApp:
    return request.app.state.pomodoro
