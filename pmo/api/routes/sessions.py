from __future__ import annotations

from datetime import date
import sqlite3
from typing import Callable, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query

from ...service import PomodoroApp
from ...store import SessionRecord
from ..deps import get_app
from ..schemas import SessionOut, SessionSaveOut, SessionSaveRequest

router = APIRouter(prefix="/api/v1", tags=["sessions"])

T = TypeVar("T")


def _to_out(records: list[SessionRecord]) -> list[SessionOut]:
    return [SessionOut(**vars(item)) for item in records]


def _run_storage(call: Callable[[], T]) -> T:
    try:
        return call()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except sqlite3.Error as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.post("/sessions/completed", response_model=SessionSaveOut)
def save_completed(payload: SessionSaveRequest, app: PomodoroApp = Depends(get_app)) -> SessionSaveOut:
    saved = _run_storage(
        lambda: app.save_completed_session(payload.start_time, payload.end_time, payload.completed_cycles)
    )
    return SessionSaveOut(saved=saved)


@router.post("/sessions/partial", response_model=SessionSaveOut)
def save_partial(payload: SessionSaveRequest, app: PomodoroApp = Depends(get_app)) -> SessionSaveOut:
    saved = _run_storage(
        lambda: app.save_partial_session(payload.start_time, payload.end_time, payload.completed_cycles)
    )
    return SessionSaveOut(saved=saved)


@router.get("/sessions", response_model=list[SessionOut])
def sessions_by_date(
    day: date = Query(alias="date"),
    app: PomodoroApp = Depends(get_app),
) -> list[SessionOut]:
    return _to_out(_run_storage(lambda: app.get_sessions_by_date(day)))


@router.get("/sessions/history", response_model=list[SessionOut])
def session_history(app: PomodoroApp = Depends(get_app)) -> list[SessionOut]:
    return _to_out(_run_storage(app.get_session_history))
