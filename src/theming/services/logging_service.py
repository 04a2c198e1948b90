"""In-process capture of theming log records.

Leaf components log each recovered fault with ``extra=fault_extra(kind)``;
``LoggingService`` keeps the records of the ``theming`` logger tree in a
bounded buffer, with the ``ThemeErrorKind`` attached where one was given,
so a diagnostics panel can list "what degraded and why" next to the
plain log text. Each captured record is announced as
``ThemeEvent.LOG_RECORD_ADDED`` when a bus is supplied.

The service only installs a handler; it leaves the logger's own level
alone. Records below the logger's effective level never reach it.
"""

from __future__ import annotations

import json
import logging
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from threading import RLock
from typing import Any, Deque, Dict, List, Optional

from theming.models import ThemeErrorKind
from .event_bus import EventBus, ThemeEvent

__all__ = ["LogEntry", "LoggingService", "ROOT_LOGGER_NAME", "fault_extra"]

ROOT_LOGGER_NAME = "theming"

_FAULT_ATTR = "theme_error"


def fault_extra(kind: ThemeErrorKind) -> Dict[str, str]:
    """``extra`` mapping tagging a log call with the fault it reports."""
    return {_FAULT_ATTR: kind.value}


def _fault_of(record: logging.LogRecord) -> Optional[ThemeErrorKind]:
    raw = getattr(record, _FAULT_ATTR, None)
    if raw is None:
        return None
    try:
        return ThemeErrorKind(raw)
    except ValueError:
        return None


@dataclass(frozen=True)
class LogEntry:
    level: str
    logger: str
    message: str
    created: float
    error_kind: Optional[ThemeErrorKind] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "logger": self.logger,
            "message": self.message,
            "created": self.created,
            "error_kind": self.error_kind.value if self.error_kind else None,
        }


class _CaptureHandler(logging.Handler):
    def __init__(self, owner: "LoggingService") -> None:
        super().__init__()
        self._owner = owner

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D401
        try:
            self._owner._capture(record)
        except Exception:  # noqa: BLE001 - logging must never raise into callers
            self.handleError(record)


class LoggingService:
    def __init__(
        self,
        capacity: int = 200,
        *,
        logger_name: str = ROOT_LOGGER_NAME,
        event_bus: EventBus | None = None,
    ) -> None:
        self._entries: Deque[LogEntry] = deque(maxlen=max(1, capacity))
        self._lock = RLock()
        self._handler = _CaptureHandler(self)
        self._logger_name = logger_name
        self._event_bus = event_bus
        self._attached = False
        self._publishing = False

    def attach(self, level: int = logging.DEBUG) -> None:
        """Start capturing records at ``level`` or above (handler level only)."""
        self._handler.setLevel(level)
        if self._attached:
            return
        logging.getLogger(self._logger_name).addHandler(self._handler)
        self._attached = True

    def detach(self) -> None:
        if self._attached:
            logging.getLogger(self._logger_name).removeHandler(self._handler)
            self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    def _capture(self, record: logging.LogRecord) -> None:
        entry = LogEntry(
            level=record.levelname,
            logger=record.name,
            message=record.getMessage(),
            created=record.created,
            error_kind=_fault_of(record),
        )
        with self._lock:
            self._entries.append(entry)
        # Handlers that log while receiving LOG_RECORD_ADDED must not recurse.
        if self._event_bus is None or self._publishing:
            return
        self._publishing = True
        try:
            self._event_bus.publish(ThemeEvent.LOG_RECORD_ADDED, entry.to_dict())
        finally:
            self._publishing = False

    def recent(self, limit: Optional[int] = None) -> List[LogEntry]:
        with self._lock:
            data = list(self._entries)
        if limit is None:
            return data
        return data[-limit:] if limit > 0 else []

    def filter(
        self,
        *,
        level: str | None = None,
        name_contains: str | None = None,
        error_kind: ThemeErrorKind | None = None,
    ) -> List[LogEntry]:
        return [
            e
            for e in self.recent()
            if (level is None or e.level == level)
            and (name_contains is None or name_contains in e.logger)
            and (error_kind is None or e.error_kind == error_kind)
        ]

    def faults(self) -> List[LogEntry]:
        """Captured records that report a recovered theming fault."""
        return [e for e in self.recent() if e.error_kind is not None]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def export_jsonl(self, path: str | Path, *, faults_only: bool = False) -> int:
        """Write captured entries as JSON Lines; return the number written."""
        entries = self.faults() if faults_only else self.recent()
        target = Path(path)
        with target.open("w", encoding="utf-8") as fh:
            for e in entries:
                fh.write(json.dumps(e.to_dict(), sort_keys=True) + "\n")
        return len(entries)
