"""Service layer exports.

Responsibilities:
 - Fault-tolerant leaf adapters (preference store, system monitor, applicator)
 - ``ThemeService`` wrapper and its diagnostics / event bus
"""

from .event_bus import EventBus, ThemeEvent  # noqa: F401
from .diagnostics import ThemeDiagnostics, ThemeErrorRecord  # noqa: F401
from .preference_store import PreferenceStore, MemoryStorage, JsonFileStorage  # noqa: F401
from .system_monitor import SystemPreferenceMonitor  # noqa: F401
from .theme_applicator import ThemeApplicator  # noqa: F401
from .theme_service import ThemeService  # noqa: F401

__all__ = [
    "EventBus",
    "ThemeEvent",
    "ThemeDiagnostics",
    "ThemeErrorRecord",
    "PreferenceStore",
    "MemoryStorage",
    "JsonFileStorage",
    "SystemPreferenceMonitor",
    "ThemeApplicator",
    "ThemeService",
]
