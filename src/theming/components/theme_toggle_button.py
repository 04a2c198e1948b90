"""Theme toggle button.

Thin Qt shell around ``ThemeToggleViewModel``: shows the current
preference, cycles it on click or Enter/Space, and keeps the accessible
name/description plus a polite announcement string up to date. The
announcement clears itself after ``ANNOUNCE_CLEAR_MS``. Transition hints
(``reducedMotion``, ``transitionClasses``, ``transitionMs`` properties) are
refreshed on theme and reduced-motion changes.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, QTimer, pyqtSignal
from PyQt6.QtWidgets import QPushButton

from theming.services.event_bus import Event
from theming.services.theme_service import ThemeService
from theming.viewmodels.theme_toggle_viewmodel import ThemeToggleViewModel

__all__ = ["ThemeToggleButton", "ANNOUNCE_CLEAR_MS"]

ANNOUNCE_CLEAR_MS = 1000

_KEY_NAMES = {
    Qt.Key.Key_Return: "Enter",
    Qt.Key.Key_Enter: "Enter",
    Qt.Key.Key_Space: " ",
}


class ThemeToggleButton(QPushButton):
    announced = pyqtSignal(str)

    def __init__(self, service: ThemeService, *, show_label: bool = False, parent=None):
        super().__init__(parent)
        self.setObjectName("themeToggleButton")
        self._vm = ThemeToggleViewModel(service)
        self._show_label = show_label
        self._clear_timer = QTimer(self)
        self._clear_timer.setSingleShot(True)
        self._clear_timer.timeout.connect(self._clear_announcement)
        self.clicked.connect(self._activate)
        self.setCheckable(True)
        subscriptions = [
            service.subscribe(self._on_theme_changed),
            service.subscribe_motion(self._on_theme_changed),
        ]

        def _release(*_args) -> None:
            for sub in subscriptions:
                service.unsubscribe(sub)

        self.destroyed.connect(_release)
        self._refresh()

    # Public -----------------------------------------------------------
    def view_model(self) -> ThemeToggleViewModel:
        return self._vm

    def announcement(self) -> str:
        return self._vm.announcement

    # Qt overrides -------------------------------------------------------
    def keyPressEvent(self, event):  # noqa: N802 - Qt naming
        key_name = _KEY_NAMES.get(event.key())
        if key_name is not None:
            event.accept()
            self._announce(self._vm.handle_key(key_name))
            return
        super().keyPressEvent(event)

    # Internal -----------------------------------------------------------
    def _activate(self) -> None:
        self._announce(self._vm.activate())

    def _announce(self, text: str | None) -> None:
        if not text:
            return
        self.announced.emit(text)
        self._clear_timer.start(ANNOUNCE_CLEAR_MS)
        self._refresh()

    def _clear_announcement(self) -> None:
        self._vm.clear_announcement()

    def _on_theme_changed(self, _event: Event) -> None:
        self._refresh()

    def _refresh(self) -> None:
        info = self._vm.info()
        self.setText(info.label if self._show_label else "")
        self.setProperty("icon", info.icon)
        self.setToolTip(info.title)
        self.setAccessibleName(info.action)
        self.setAccessibleDescription(
            f"Theme toggle button. Currently using {info.current}. "
            f"Activate to switch to {info.next}."
        )
        self.setChecked(info.pressed)
        self.setProperty("reducedMotion", self._vm.reduced_motion)
        self.setProperty("transitionClasses", self._vm.transition_classes())
        self.setProperty("transitionMs", self._vm.transition_duration())
