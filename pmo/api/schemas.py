from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthOut(BaseModel):
    status: str = Field(default="ok")


class MetaOut(BaseModel):
    app: str
    version: str
    db_path: str
    sessions: int
    platform: str


class TaskIn(BaseModel):
    task: str = ""


class TaskOut(BaseModel):
    task: str


class TimerStartRequest(BaseModel):
    duration: int = Field(ge=0)


class RemainingRequest(BaseModel):
    seconds: int = Field(ge=0)


class TimerOut(BaseModel):
    phase: Literal["idle", "running", "paused"]
    seconds: int


class TimerCommandOut(TimerOut):
    applied: bool


class SessionSaveRequest(BaseModel):
    start_time: datetime
    end_time: datetime
    completed_cycles: int = Field(ge=0)


class SessionSaveOut(BaseModel):
    saved: bool


class SessionOut(BaseModel):
    task_name: str
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    completed_cycles: int
    is_completed: bool
