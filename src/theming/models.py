"""Core theme data model.

Plain value types shared by the resolver, the leaf adapters and the
``ThemeService`` wrapper. Nothing here performs I/O.

``ThemePreference`` is the user-facing choice and the only value that is
ever persisted. ``ResolvedTheme`` is what actually gets rendered and can
never be "system".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

__all__ = [
    "ThemePreference",
    "ResolvedTheme",
    "ThemeErrorKind",
    "Status",
    "ThemeState",
    "DEFAULT_STORAGE_KEY",
]

DEFAULT_STORAGE_KEY = "theme"


class ThemePreference(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class ResolvedTheme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def from_dark_flag(cls, is_dark: bool) -> "ResolvedTheme":
        return cls.DARK if is_dark else cls.LIGHT


class ThemeErrorKind(str, Enum):
    """Fault categories recorded on the diagnostic channel.

    Only ``INVALID_COLOR_FORMAT`` is ever raised to a caller (from the
    contrast helpers); every other kind is recovered where it occurs.
    """

    STORAGE_UNAVAILABLE = "StorageUnavailable"
    STORAGE_WRITE_FAILED = "StorageWriteFailed"
    INVALID_STORED_VALUE = "InvalidStoredValue"
    MONITOR_UNSUPPORTED = "MonitorUnsupported"
    MONITOR_SUBSCRIBE_FAILED = "MonitorSubscribeFailed"
    RENDER_TARGET_UNAVAILABLE = "RenderTargetUnavailable"
    RENDER_MUTATION_FAILED = "RenderMutationFailed"
    INVALID_COLOR_FORMAT = "InvalidColorFormat"


class Status(str, Enum):
    UNINITIALIZED = "uninitialized"
    RESOLVING = "resolving"
    APPLIED = "applied"


@dataclass
class ThemeState:
    """Mutable per-application theme state.

    Attributes
    ----------
    preference: The user's choice (light / dark / system).
    resolved: Concrete theme currently rendered. Recomputed from
        ``preference`` and ``system_signal``; never assigned on its own.
    system_signal: Last platform color-scheme reading.
    ready: True once the full resolve/apply cycle has run at least once.
    last_error: Most recent recovered fault, if any.
    status: Position in the uninitialized -> resolving -> applied cycle.
    """

    preference: ThemePreference = ThemePreference.SYSTEM
    resolved: ResolvedTheme = ResolvedTheme.LIGHT
    system_signal: ResolvedTheme = ResolvedTheme.LIGHT
    ready: bool = False
    last_error: Optional[ThemeErrorKind] = None
    status: Status = Status.UNINITIALIZED

    def to_dict(self) -> dict[str, object]:
        return {
            "preference": self.preference.value,
            "resolved": self.resolved.value,
            "system_signal": self.system_signal.value,
            "ready": self.ready,
            "last_error": self.last_error.value if self.last_error else None,
            "status": self.status.value,
        }
