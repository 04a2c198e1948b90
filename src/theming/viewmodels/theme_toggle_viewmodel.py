"""ViewModel for the theme toggle control.

Separates the headless toggle logic from any widget. The control cycles
light -> dark -> system -> light and announces each switch for screen
readers.

Core Responsibilities:
 - Describe the current preference (icon, short label, accessible action text).
 - Activate: advance the preference through ``ThemeService.toggle`` and
   produce the announcement text.
 - Keyboard activation (Enter / Space) mirrors clicks.
 - Transition classes and duration collapse when the user asks for reduced
   motion; widgets re-read them on ``ThemeEvent.REDUCED_MOTION_CHANGED``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from theming.design.reduced_motion import transition_classes
from theming.design.theme_resolver import next_preference
from theming.models import ThemePreference
from theming.services.theme_service import ThemeService

__all__ = ["ThemeToggleViewModel", "ToggleInfo", "ACTIVATION_KEYS"]

ACTIVATION_KEYS = frozenset({"Enter", " ", "Space"})

_ICONS: Dict[ThemePreference, str] = {
    ThemePreference.LIGHT: "sun",
    ThemePreference.DARK: "moon",
    ThemePreference.SYSTEM: "monitor",
}

_SHORT_LABELS: Dict[ThemePreference, str] = {
    ThemePreference.LIGHT: "Light",
    ThemePreference.DARK: "Dark",
    ThemePreference.SYSTEM: "Auto",
}

_ACTIONS: Dict[ThemePreference, str] = {
    ThemePreference.LIGHT: "Switch to dark mode",
    ThemePreference.DARK: "Switch to system theme",
    ThemePreference.SYSTEM: "Switch to light mode",
}

_DEFAULT_TRANSITION = "transition-all duration-300 ease-in-out hover:scale-105 active:scale-95"


def _theme_name(pref: ThemePreference) -> str:
    return f"{pref.value} theme"


@dataclass(frozen=True)
class ToggleInfo:
    current: str
    next: str
    action: str
    title: str
    icon: str
    label: str
    pressed: bool


@dataclass
class ThemeToggleViewModel:
    service: ThemeService
    announcement: str = ""

    @property
    def preference(self) -> ThemePreference:
        return self.service.preference

    def info(self) -> ToggleInfo:
        pref = self.preference
        upcoming = next_preference(pref)
        current_name = _theme_name(pref)
        next_name = _theme_name(upcoming)
        return ToggleInfo(
            current=current_name,
            next=next_name,
            action=_ACTIONS[pref],
            title=f"Current: {current_name}. Click to switch to {next_name}.",
            icon=_ICONS[pref],
            label=_SHORT_LABELS[pref],
            pressed=pref == ThemePreference.DARK,
        )

    def activate(self) -> str:
        """Advance the preference; return (and keep) the announcement text."""
        before = self.preference
        self.service.toggle()
        after = self.preference
        if after == before:
            self.announcement = "Theme toggle failed"
        else:
            self.announcement = f"Switched to {_theme_name(after)}"
        return self.announcement

    def handle_key(self, key: str) -> Optional[str]:
        """Activate for Enter/Space; return the announcement or None if ignored."""
        if key not in ACTIVATION_KEYS:
            return None
        return self.activate()

    def clear_announcement(self) -> None:
        self.announcement = ""

    @property
    def reduced_motion(self) -> bool:
        return self.service.prefers_reduced_motion()

    def transition_classes(self, default: str = _DEFAULT_TRANSITION) -> str:
        return transition_classes(default, "", self.service.motion_source)

    def transition_duration(self) -> int:
        return self.service.transition_duration()
