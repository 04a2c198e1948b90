"""Qt color-scheme source for ``SystemPreferenceMonitor``.

Reads ``QGuiApplication.styleHints().colorScheme()`` (Qt 6.5+) and relays
``colorSchemeChanged``. ``Qt.ColorScheme.Unknown`` reads as light.

When PyQt6 is missing, or no application instance exists yet, every call
raises ``RuntimeError``; the monitor turns that into its light fallback.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

try:  # Lazy / optional Qt import
    from PyQt6.QtCore import Qt  # type: ignore
    from PyQt6.QtGui import QGuiApplication  # type: ignore

    _QT_AVAILABLE = True
except Exception:  # noqa: BLE001
    Qt = None  # type: ignore
    QGuiApplication = None  # type: ignore
    _QT_AVAILABLE = False

__all__ = ["QtColorSchemeSource", "qt_available"]


def qt_available() -> bool:
    return _QT_AVAILABLE


class QtColorSchemeSource:
    def __init__(self, app: Optional[Any] = None) -> None:
        self._app = app
        self._slots: Dict[Callable[[bool], None], Callable[[Any], None]] = {}

    def _hints(self) -> Any:
        if not _QT_AVAILABLE:
            raise RuntimeError("PyQt6 is not installed")
        app = self._app if self._app is not None else QGuiApplication.instance()
        if app is None:
            raise RuntimeError("No QGuiApplication instance")
        return app.styleHints()

    @staticmethod
    def _is_dark_scheme(scheme: Any) -> bool:
        return scheme == Qt.ColorScheme.Dark

    def is_dark(self) -> bool:
        return self._is_dark_scheme(self._hints().colorScheme())

    def add_listener(self, callback: Callable[[bool], None]) -> None:
        hints = self._hints()

        def slot(scheme: Any) -> None:
            callback(self._is_dark_scheme(scheme))

        hints.colorSchemeChanged.connect(slot)
        self._slots[callback] = slot

    def remove_listener(self, callback: Callable[[bool], None]) -> None:
        slot = self._slots.pop(callback, None)
        if slot is None:
            return
        self._hints().colorSchemeChanged.disconnect(slot)
