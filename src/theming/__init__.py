"""Theme preference resolution and persistence.

Curated surface for callers (application bootstrap, toggle controls,
tests). Deeper helpers stay namespaced, e.g. ``theming.design.contrast``.

- ``ThemeService``: resilient entry point owning the ``ThemeState``
- ``ThemePreference`` / ``ResolvedTheme``: the preference and rendered theme
- ``create_theme_app``: wires storage, platform bindings and the service
"""

from __future__ import annotations

from .models import (  # noqa: F401
    ThemePreference,
    ResolvedTheme,
    ThemeState,
    ThemeErrorKind,
    Status,
    DEFAULT_STORAGE_KEY,
)
from .services.event_bus import EventBus, ThemeEvent, Event  # noqa: F401
from .services.theme_service import ThemeService  # noqa: F401
from .app.bootstrap import create_theme_app, ThemeContext  # noqa: F401

# Namespaced access: from theming import design
from . import design  # noqa: F401

__all__ = [
    "ThemePreference",
    "ResolvedTheme",
    "ThemeState",
    "ThemeErrorKind",
    "Status",
    "DEFAULT_STORAGE_KEY",
    "EventBus",
    "ThemeEvent",
    "Event",
    "ThemeService",
    "create_theme_app",
    "ThemeContext",
    "design",
]
