"""Startup phase timing for the theming bootstrap.

Collects named phase durations (config load, platform wiring, pre-paint
cycle) so a slow pre-paint routine shows up in logs. The pre-paint cycle
runs before any themed content is visible; when it exceeds
``PREPAINT_BUDGET_MS`` a warning is logged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter
from typing import Iterator, List

__all__ = ["TimingEvent", "TimingLogger", "PREPAINT_BUDGET_MS"]

_logger = logging.getLogger(__name__)

PREPAINT_BUDGET_MS = 50.0


@dataclass
class TimingEvent:
    name: str
    start: float
    end: float

    @property
    def duration(self) -> float:  # seconds
        return self.end - self.start

    @property
    def duration_ms(self) -> float:
        return self.duration * 1000.0


class TimingLogger:
    """Collects timing events for labelled phases.

    Usage:
        t = TimingLogger()
        with t.measure("prepaint"):
            service.initialize()
        t.stop()

    Phases do not nest; after ``stop()`` no further events may be added.
    """

    def __init__(self) -> None:
        self._started_at = perf_counter()
        self._events: List[TimingEvent] = []
        self._current_name: str | None = None
        self._current_start: float | None = None
        self._stopped_at: float | None = None

    def begin(self, name: str) -> None:
        if self._stopped_at is not None:
            raise RuntimeError("TimingLogger already stopped")
        if self._current_name is not None:
            raise RuntimeError(
                f"Attempted to begin phase '{name}' while phase "
                f"'{self._current_name}' still active"
            )
        self._current_name = name
        self._current_start = perf_counter()

    def end(self) -> TimingEvent:
        if self._current_name is None or self._current_start is None:
            raise RuntimeError("No active timing phase to end")
        event = TimingEvent(name=self._current_name, start=self._current_start, end=perf_counter())
        self._events.append(event)
        self._current_name = None
        self._current_start = None
        return event

    class _PhaseCtx:
        def __init__(self, logger: "TimingLogger", name: str, budget_ms: float | None) -> None:
            self._logger = logger
            self._name = name
            self._budget_ms = budget_ms

        def __enter__(self) -> "TimingLogger._PhaseCtx":  # noqa: D401 (simple)
            self._logger.begin(self._name)
            return self

        def __exit__(self, exc_type, exc, tb) -> None:  # noqa: D401
            # Elapsed time is recorded even when the body raised.
            event = self._logger.end()
            if self._budget_ms is not None and event.duration_ms > self._budget_ms:
                _logger.warning(
                    "Phase %s took %.1fms (budget %.1fms)",
                    event.name,
                    event.duration_ms,
                    self._budget_ms,
                )

    def measure(self, name: str, *, budget_ms: float | None = None) -> "TimingLogger._PhaseCtx":
        return TimingLogger._PhaseCtx(self, name, budget_ms)

    def stop(self) -> None:
        if self._stopped_at is None:
            if self._current_name is not None:
                self.end()
            self._stopped_at = perf_counter()

    @property
    def events(self) -> List[TimingEvent]:
        return list(self._events)

    @property
    def total_duration(self) -> float:
        end = self._stopped_at if self._stopped_at is not None else perf_counter()
        return end - self._started_at

    def as_dict(self) -> dict:
        return {
            "total_duration": self.total_duration,
            "events": [
                {"name": e.name, "duration_ms": round(e.duration_ms, 3)} for e in self._events
            ],
        }

    def __iter__(self) -> Iterator[TimingEvent]:
        return iter(self._events)
