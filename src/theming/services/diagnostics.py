"""Diagnostic error channel for recovered theming faults.

Every leaf component reports the faults it recovers from (storage errors,
unsupported color-scheme facility, missing render target, ...) through an
``on_error(kind, exc)`` callback. ``ThemeDiagnostics.record`` is that
callback: it keeps a capacity-bound ring buffer of ``ThemeErrorRecord``,
counts occurrences per kind, logs, and publishes ``ThemeEvent.THEME_ERROR``.

Nothing recorded here is ever re-raised.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter, deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Deque, Dict, List, Optional

from theming.models import ThemeErrorKind
from .event_bus import EventBus, ThemeEvent

__all__ = ["ThemeErrorRecord", "ThemeDiagnostics", "ErrorCallback"]

_logger = logging.getLogger(__name__)

ErrorCallback = Callable[[ThemeErrorKind, Optional[BaseException]], None]


@dataclass(frozen=True)
class ThemeErrorRecord:
    """Structured capture of one recovered fault.

    Attributes
    ----------
    kind: ThemeErrorKind
        Fault category.
    message: str
        Human readable summary (exception text when one was supplied).
    exc_type: str | None
        Exception class name, if the fault came from an exception.
    timestamp: float
        POSIX timestamp when recorded.
    iso_time: str
        ISO 8601 UTC timestamp for display / export.
    """

    kind: ThemeErrorKind
    message: str
    exc_type: Optional[str]
    timestamp: float
    iso_time: str

    def summary(self, max_len: int = 120) -> str:
        msg = f"{self.kind.value}: {self.message}"
        return msg if len(msg) <= max_len else msg[: max_len - 3] + "..."


class ThemeDiagnostics:
    def __init__(self, *, capacity: int = 20, event_bus: EventBus | None = None) -> None:
        self._capacity = max(1, capacity)
        self._records: Deque[ThemeErrorRecord] = deque(maxlen=self._capacity)
        self._counts: Counter[ThemeErrorKind] = Counter()
        self._lock = threading.RLock()
        self._event_bus = event_bus
        self._observers: List[Callable[[ThemeErrorRecord], None]] = []

    def record(
        self,
        kind: ThemeErrorKind,
        exc: Optional[BaseException] = None,
        message: Optional[str] = None,
    ) -> ThemeErrorRecord:
        now = datetime.now(timezone.utc)
        text = message or (str(exc) if exc is not None else kind.value)
        rec = ThemeErrorRecord(
            kind=kind,
            message=text,
            exc_type=type(exc).__name__ if exc is not None else None,
            timestamp=now.timestamp(),
            iso_time=now.isoformat().replace("+00:00", "Z"),
        )
        with self._lock:
            self._records.append(rec)
            self._counts[kind] += 1
        # The reporting component already logged the fault at its own level.
        _logger.debug("Recorded theming fault %s", rec.summary())
        for observer in list(self._observers):
            observer(rec)
        if self._event_bus is not None:
            self._event_bus.publish(
                ThemeEvent.THEME_ERROR,
                {"kind": kind.value, "message": rec.message, "iso_time": rec.iso_time},
            )
        return rec

    def add_observer(self, observer: Callable[[ThemeErrorRecord], None]) -> None:
        """Call ``observer`` synchronously with every new record."""
        self._observers.append(observer)

    # Callback form used by the leaf components --------------------------
    def __call__(self, kind: ThemeErrorKind, exc: Optional[BaseException] = None) -> None:
        self.record(kind, exc)

    # Introspection -------------------------------------------------------
    def recent(self, limit: Optional[int] = None) -> List[ThemeErrorRecord]:
        with self._lock:
            data = list(self._records)
        if limit is None:
            return data
        return data[-limit:] if limit > 0 else []

    def last(self) -> Optional[ThemeErrorRecord]:
        with self._lock:
            return self._records[-1] if self._records else None

    def counts(self) -> Dict[ThemeErrorKind, int]:
        with self._lock:
            return dict(self._counts)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
            self._counts.clear()

    def to_dict(self) -> dict[str, Any]:
        return {
            "counts": {k.value: v for k, v in self.counts().items()},
            "recent": [
                {"kind": r.kind.value, "message": r.message, "iso_time": r.iso_time}
                for r in self.recent()
            ],
        }
