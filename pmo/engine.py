from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

from .config import DEFAULT_DURATION_SEC

TimerPhase = Literal["idle", "running", "paused"]


@dataclass(frozen=True)
class TimerState:
    task: str = ""
    configured_duration: int = DEFAULT_DURATION_SEC
    remaining: int = DEFAULT_DURATION_SEC
    running: bool = False
    paused: bool = False


@dataclass(frozen=True)
class TimerReading:
    phase: TimerPhase
    seconds: int


class TimerEngine:
    """
    Single Pomodoro timer state machine: idle -> running <-> paused -> idle.

    Nothing here ticks. The shell owns the countdown and reports it back
    through sync_remaining(); every command is total and degrades to a
    no-op (returning False) when it does not apply to the current phase.
    """

    def __init__(self, duration_sec: int = DEFAULT_DURATION_SEC) -> None:
        self._state = TimerState(
            configured_duration=int(duration_sec),
            remaining=int(duration_sec),
        )

    @property
    def phase(self) -> TimerPhase:
        if self._state.running:
            return "running"
        if self._state.paused:
            return "paused"
        return "idle"

    def snapshot(self) -> TimerState:
        return replace(self._state)

    def set_task(self, name: str) -> None:
        self._state = replace(self._state, task=name)

    def get_task(self) -> str:
        return self._state.task

    def start_timer(self, duration: int) -> bool:
        phase = self.phase
        if phase == "running":
            return False

        if phase == "paused":
            # resume keeps progress, the new duration is ignored
            self._state = replace(self._state, running=True, paused=False)
            return True

        seconds = max(0, int(duration))
        self._state = replace(
            self._state,
            configured_duration=seconds,
            remaining=seconds,
            running=True,
            paused=False,
        )
        return True

    def pause_timer(self) -> bool:
        if self.phase != "running":
            return False
        self._state = replace(self._state, running=False, paused=True)
        return True

    def reset_timer(self) -> None:
        self._state = replace(
            self._state,
            task="",
            remaining=self._state.configured_duration,
            running=False,
            paused=False,
        )

    def sync_remaining(self, seconds: int) -> bool:
        if self.phase != "running":
            return False
        clamped = max(0, min(int(seconds), self._state.configured_duration))
        self._state = replace(self._state, remaining=clamped)
        return True

    def get_timer(self) -> TimerReading:
        phase = self.phase
        if phase == "idle":
            return TimerReading(phase=phase, seconds=self._state.configured_duration)
        return TimerReading(phase=phase, seconds=self._state.remaining)
