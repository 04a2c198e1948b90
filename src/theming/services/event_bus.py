"""Synchronous publish/subscribe for theme change notifications.

Consumers such as a toggle control or a reduced-motion aware widget
subscribe here instead of polling ``ThemeService``.

Goals:
 - No Qt dependency
 - One failing handler doesn't break the publish cycle
 - One-shot (once) subscriptions
 - Idempotent unsubscribe handles
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = [
    "ThemeEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]

_logger = logging.getLogger(__name__)


class ThemeEvent(str, Enum):
    THEME_CHANGED = "theme_changed"
    PREFERENCE_CHANGED = "preference_changed"
    SYSTEM_SIGNAL_CHANGED = "system_signal_changed"
    READY = "ready"
    THEME_ERROR = "theme_error"
    LOG_RECORD_ADDED = "log_record_added"
    REDUCED_MOTION_CHANGED = "reduced_motion_changed"


@dataclass
class Event:
    name: str  # matches ThemeEvent value or custom string
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401 - protocol signature docs implicit
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


class EventBus:
    """Synchronous event dispatcher.

    Handlers run on the publishing call stack, in subscription order. The
    subscriber list is copied before dispatch so handlers may subscribe or
    unsubscribe while an event is being delivered.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    # ------------------------------------------------------------------
    # Subscription management
    # ------------------------------------------------------------------
    def subscribe(
        self, name: str | ThemeEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        key = name.value if isinstance(name, ThemeEvent) else name
        sub = Subscription(event=key, handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(key, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket:
                self._subs[sub.event] = [s for s in bucket if s is not sub]
                if not self._subs[sub.event]:
                    self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------
    def publish(self, name: str | ThemeEvent, payload: Any = None) -> Event:
        key = name.value if isinstance(name, ThemeEvent) else name
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
        to_remove: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                _logger.warning("Handler for %s raised: %s", key, exc)
                with self._lock:
                    self._errors.append((evt, exc))
            else:
                if sub.once:
                    to_remove.append(sub)
        for sub in to_remove:
            self.unsubscribe(sub)
        return evt

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def subscriber_count(self, name: str | ThemeEvent) -> int:
        key = name.value if isinstance(name, ThemeEvent) else name
        with self._lock:
            return len(self._subs.get(key, ()))

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)
