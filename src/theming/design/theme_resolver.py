"""Pure theme resolution rules.

Combines the user preference with the platform signal into the theme that
is actually rendered. No I/O and no logging: callers feed in whatever the
store and the system monitor produced.

Public API:
- is_valid_preference(value) -> bool
- parse_preference(value) -> ThemePreference | None
- resolve(preference, system_signal) -> ResolvedTheme
- get_initial_preference(stored) -> ThemePreference
- get_resolved_theme(preference) -> ResolvedTheme
- next_preference(current) -> ThemePreference

Two different fallbacks live here on purpose. ``get_initial_preference``
treats anything unusable as "follow the system", while
``get_resolved_theme`` has no system signal to consult and therefore falls
back to light.
"""

from __future__ import annotations

from typing import Any, Optional

from theming.models import ResolvedTheme, ThemePreference

__all__ = [
    "VALID_PREFERENCES",
    "is_valid_preference",
    "parse_preference",
    "resolve",
    "get_initial_preference",
    "get_resolved_theme",
    "next_preference",
]

VALID_PREFERENCES: frozenset[str] = frozenset(p.value for p in ThemePreference)

_TOGGLE_CYCLE = {
    ThemePreference.LIGHT: ThemePreference.DARK,
    ThemePreference.DARK: ThemePreference.SYSTEM,
    ThemePreference.SYSTEM: ThemePreference.LIGHT,
}


def is_valid_preference(value: Any) -> bool:
    """Return True only for the canonical ``light``/``dark``/``system`` forms."""
    if isinstance(value, ThemePreference):
        return True
    return isinstance(value, str) and value in VALID_PREFERENCES


def parse_preference(value: Any) -> Optional[ThemePreference]:
    if not is_valid_preference(value):
        return None
    return ThemePreference(value)


def resolve(preference: ThemePreference, system_signal: ResolvedTheme) -> ResolvedTheme:
    if preference == ThemePreference.LIGHT:
        return ResolvedTheme.LIGHT
    if preference == ThemePreference.DARK:
        return ResolvedTheme.DARK
    return ResolvedTheme(system_signal)


def get_initial_preference(stored: Optional[str]) -> ThemePreference:
    """Parse a raw stored value; unusable content reads as "nothing stored"."""
    parsed = parse_preference(stored)
    return parsed if parsed is not None else ThemePreference.SYSTEM


def get_resolved_theme(preference: Any) -> ResolvedTheme:
    parsed = parse_preference(preference)
    if parsed == ThemePreference.DARK:
        return ResolvedTheme.DARK
    return ResolvedTheme.LIGHT


def next_preference(current: Any) -> ThemePreference:
    """Toggle order: light -> dark -> system -> light."""
    parsed = parse_preference(current)
    return _TOGGLE_CYCLE[parsed if parsed is not None else ThemePreference.SYSTEM]
