"""Static light/dark color token sets.

The hex palettes feed contrast validation; ``theme_properties`` exposes the
CSS custom properties (space separated RGB triplets) that a render target
can push onto its root element.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from theming.models import ResolvedTheme

__all__ = [
    "ThemePalette",
    "LIGHT_PALETTE",
    "DARK_PALETTE",
    "palette_for",
    "theme_properties",
]


@dataclass(frozen=True)
class ThemePalette:
    background: str
    foreground: str
    primary: str
    secondary: str
    muted: str
    muted_foreground: str


LIGHT_PALETTE = ThemePalette(
    background="#ffffff",
    foreground="#000000",
    primary="#3b82f6",
    secondary="#6b7280",
    muted="#f3f4f6",
    muted_foreground="#6b7280",
)

DARK_PALETTE = ThemePalette(
    background="#111827",
    foreground="#ffffff",
    primary="#60a5fa",
    secondary="#9ca3af",
    muted="#1f2937",
    muted_foreground="#9ca3af",
)

_LIGHT_PROPERTIES: Dict[str, str] = {
    "--background": "255 255 255",
    "--foreground": "0 0 0",
    "--primary": "59 130 246",
    "--primary-foreground": "255 255 255",
    "--secondary": "243 244 246",
    "--secondary-foreground": "17 24 39",
    "--muted": "243 244 246",
    "--muted-foreground": "107 114 128",
    "--border": "229 231 235",
    "--input": "229 231 235",
    "--ring": "59 130 246",
}

_DARK_PROPERTIES: Dict[str, str] = {
    "--background": "17 24 39",
    "--foreground": "255 255 255",
    "--primary": "96 165 250",
    "--primary-foreground": "17 24 39",
    "--secondary": "31 41 55",
    "--secondary-foreground": "243 244 246",
    "--muted": "31 41 55",
    "--muted-foreground": "156 163 175",
    "--border": "55 65 81",
    "--input": "55 65 81",
    "--ring": "96 165 250",
}


def _is_light(theme: Any) -> bool:
    return theme == ResolvedTheme.LIGHT.value


def palette_for(theme: Any) -> ThemePalette:
    """Return the light palette for "light", the dark palette for anything else."""
    return LIGHT_PALETTE if _is_light(theme) else DARK_PALETTE


def theme_properties(theme: Any) -> Dict[str, str]:
    return dict(_LIGHT_PROPERTIES if _is_light(theme) else _DARK_PROPERTIES)
