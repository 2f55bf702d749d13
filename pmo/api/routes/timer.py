from __future__ import annotations

from fastapi import APIRouter, Depends

from ...service import PomodoroApp
from ..deps import get_app
from ..schemas import RemainingRequest, TaskIn, TaskOut, TimerCommandOut, TimerOut, TimerStartRequest

router = APIRouter(prefix="/api/v1", tags=["timer"])


def _command_result(app: PomodoroApp, applied: bool) -> TimerCommandOut:
    reading = app.get_timer()
    return TimerCommandOut(applied=applied, phase=reading.phase, seconds=reading.seconds)


@router.get("/task", response_model=TaskOut)
def get_task(app: PomodoroApp = Depends(get_app)) -> TaskOut:
    return TaskOut(task=app.get_task())


@router.put("/task", response_model=TaskOut)
def set_task(payload: TaskIn, app: PomodoroApp = Depends(get_app)) -> TaskOut:
    app.set_task(payload.task)
    return TaskOut(task=app.get_task())


@router.get("/timer", response_model=TimerOut)
def get_timer(app: PomodoroApp = Depends(get_app)) -> TimerOut:
    reading = app.get_timer()
    return TimerOut(phase=reading.phase, seconds=reading.seconds)


@router.post("/timer/start", response_model=TimerCommandOut)
def start_timer(payload: TimerStartRequest, app: PomodoroApp = Depends(get_app)) -> TimerCommandOut:
    return _command_result(app, app.start_timer(payload.duration))


@router.post("/timer/pause", response_model=TimerCommandOut)
def pause_timer(app: PomodoroApp = Depends(get_app)) -> TimerCommandOut:
    return _command_result(app, app.pause_timer())


@router.post("/timer/reset", response_model=TimerCommandOut)
def reset_timer(app: PomodoroApp = Depends(get_app)) -> TimerCommandOut:
    app.reset_timer()
    return _command_result(app, True)


@router.put("/timer/remaining", response_model=TimerCommandOut)
def sync_remaining(payload: RemainingRequest, app: PomodoroApp = Depends(get_app)) -> TimerCommandOut:
    return _command_result(app, app.sync_remaining(payload.seconds))
