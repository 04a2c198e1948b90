"""System Preference Monitor.

Reads and watches the platform light/dark signal through a
``ColorSchemeSource`` (``theming.platform.qt_color_scheme`` in the Qt
application, fakes in tests).

Fallbacks:
 - No source, or ``is_dark`` raises -> ``ResolvedTheme.LIGHT``
   (MonitorUnsupported).
 - ``add_listener`` raises -> subscription becomes a no-op and the returned
   unsubscribe does nothing (MonitorSubscribeFailed).
 - ``remove_listener`` raises -> logged, unsubscribe still returns normally.

The unsubscribe callable returned by ``subscribe`` is idempotent.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, runtime_checkable

from theming.models import ResolvedTheme, ThemeErrorKind
from .diagnostics import ErrorCallback
from .logging_service import fault_extra

__all__ = [
    "ColorSchemeSource",
    "SystemPreferenceMonitor",
    "Unsubscribe",
]

_logger = logging.getLogger(__name__)

Unsubscribe = Callable[[], None]


@runtime_checkable
class ColorSchemeSource(Protocol):  # pragma: no cover - structural protocol
    def is_dark(self) -> bool: ...

    def add_listener(self, callback: Callable[[bool], None]) -> None: ...

    def remove_listener(self, callback: Callable[[bool], None]) -> None: ...


def _noop() -> None:
    return None


class SystemPreferenceMonitor:
    def __init__(
        self, source: Optional[ColorSchemeSource], *, on_error: Optional[ErrorCallback] = None
    ) -> None:
        self._source = source
        self._on_error = on_error

    @property
    def supported(self) -> bool:
        return self._source is not None

    def _report(self, kind: ThemeErrorKind, exc: Optional[BaseException]) -> None:
        if self._on_error is None:
            return
        try:
            self._on_error(kind, exc)
        except Exception:  # noqa: BLE001
            _logger.exception("Theme error callback failed")

    def read(self) -> ResolvedTheme:
        if self._source is None:
            _logger.warning(
                "Color scheme query unsupported; assuming light",
                extra=fault_extra(ThemeErrorKind.MONITOR_UNSUPPORTED),
            )
            self._report(ThemeErrorKind.MONITOR_UNSUPPORTED, None)
            return ResolvedTheme.LIGHT
        try:
            return ResolvedTheme.from_dark_flag(bool(self._source.is_dark()))
        except Exception as exc:  # noqa: BLE001 - facility may be partially implemented
            _logger.warning(
                "Color scheme query failed, assuming light: %s", exc,
                extra=fault_extra(ThemeErrorKind.MONITOR_UNSUPPORTED),
            )
            self._report(ThemeErrorKind.MONITOR_UNSUPPORTED, exc)
            return ResolvedTheme.LIGHT

    def subscribe(self, on_change: Callable[[ResolvedTheme], None]) -> Unsubscribe:
        """Register ``on_change`` for platform scheme changes.

        Returns a zero-argument unsubscribe function that is safe to call
        any number of times.
        """
        source = self._source
        if source is None:
            self._report(ThemeErrorKind.MONITOR_UNSUPPORTED, None)
            return _noop

        def listener(is_dark: bool) -> None:
            try:
                on_change(ResolvedTheme.from_dark_flag(bool(is_dark)))
            except Exception:  # noqa: BLE001 - keep the platform callback chain alive
                _logger.exception("Color scheme change handler failed")

        try:
            source.add_listener(listener)
        except Exception as exc:  # noqa: BLE001
            _logger.warning(
                "Could not watch color scheme changes: %s", exc,
                extra=fault_extra(ThemeErrorKind.MONITOR_SUBSCRIBE_FAILED),
            )
            self._report(ThemeErrorKind.MONITOR_SUBSCRIBE_FAILED, exc)
            return _noop

        removed = False

        def unsubscribe() -> None:
            nonlocal removed
            if removed:
                return
            removed = True
            try:
                source.remove_listener(listener)
            except Exception as exc:  # noqa: BLE001
                _logger.warning(
                    "Could not stop watching color scheme changes: %s", exc,
                    extra=fault_extra(ThemeErrorKind.MONITOR_SUBSCRIBE_FAILED),
                )
                self._report(ThemeErrorKind.MONITOR_SUBSCRIBE_FAILED, exc)

        return unsubscribe
