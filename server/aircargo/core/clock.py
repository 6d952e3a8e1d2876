"""Injectable time source for booking references and timeline timestamps."""

from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """Anything that can tell the current time as a naive UTC datetime."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        # Columns store naive UTC values
        return datetime.now(timezone.utc).replace(tzinfo=None)


class ManualClock:
    """Clock that only moves when told to. Used by tests and scripted replays."""

    def __init__(self, start: datetime, step: timedelta | None = None):
        self._current = start
        self._step = step

    def now(self) -> datetime:
        current = self._current
        if self._step:
            self._current = current + self._step
        return current

    def advance(self, delta: timedelta) -> None:
        self._current += delta

    def set(self, value: datetime) -> None:
        self._current = value


system_clock = SystemClock()
