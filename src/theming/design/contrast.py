"""Contrast utilities for validating theme palette accessibility.

Implements WCAG 2.1 contrast ratio calculations.

Public API:
- contrast_ratio(a: str, b: str) -> float
- relative_luminance(color: str) -> float
- meets_aa(fg, bg, is_large_text=False) -> bool
- meets_aaa(fg, bg, is_large_text=False) -> bool
- validate_theme_palette(theme) -> PaletteReport

Colors must be 6-digit hex strings with an optional leading ``#``. Any other
form raises ``InvalidColorFormat``; this is the one theming error that is
allowed to reach the caller since it means the caller passed bad input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .palette import palette_for

__all__ = [
    "InvalidColorFormat",
    "PaletteReport",
    "AA_NORMAL",
    "AA_LARGE",
    "AAA_NORMAL",
    "AAA_LARGE",
    "contrast_ratio",
    "relative_luminance",
    "meets_aa",
    "meets_aaa",
    "validate_theme_palette",
]

AA_NORMAL = 4.5
AA_LARGE = 3.0
AAA_NORMAL = 7.0
AAA_LARGE = 4.5

_HEX_RE = re.compile(r"#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})")
_HEX_ERR = "Invalid color format (use 6-digit hex like #ffffff): {value!r}"


class InvalidColorFormat(ValueError):
    """Raised when a color is not a 6-digit hex string."""


@dataclass
class PaletteReport:
    """Outcome of running the contrast battery for one theme.

    Attributes
    ----------
    is_valid : bool
        True when ``violations`` is empty.
    violations : list[str]
        One message per failing pair, e.g. ``"muted-text: 4.39 (requires 4.5)"``.
    ratios : dict[str, float]
        Contrast ratio per named pair.
    """

    is_valid: bool
    violations: List[str] = field(default_factory=list)
    ratios: Dict[str, float] = field(default_factory=dict)


def _parse_hex(color: Any) -> tuple[int, int, int]:
    if not isinstance(color, str):
        raise InvalidColorFormat(_HEX_ERR.format(value=color))
    match = _HEX_RE.fullmatch(color)
    if match is None:
        raise InvalidColorFormat(_HEX_ERR.format(value=color))
    r, g, b = (int(part, 16) for part in match.groups())
    return r, g, b


def _linear_channel(c: float) -> float:
    c = c / 255.0
    if c <= 0.03928:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(color: str) -> float:
    r, g, b = _parse_hex(color)
    # Rec. 709 coefficients used by WCAG
    return 0.2126 * _linear_channel(r) + 0.7152 * _linear_channel(g) + 0.0722 * _linear_channel(b)


def contrast_ratio(a: str, b: str) -> float:
    l1 = relative_luminance(a)
    l2 = relative_luminance(b)
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def meets_aa(fg: str, bg: str, is_large_text: bool = False) -> bool:
    threshold = AA_LARGE if is_large_text else AA_NORMAL
    return contrast_ratio(fg, bg) >= threshold


def meets_aaa(fg: str, bg: str, is_large_text: bool = False) -> bool:
    threshold = AAA_LARGE if is_large_text else AAA_NORMAL
    return contrast_ratio(fg, bg) >= threshold


def _battery(theme: Any) -> List[Tuple[str, str, str, bool]]:
    p = palette_for(theme)
    return [
        ("body-text", p.foreground, p.background, False),
        ("primary-text", p.primary, p.background, False),
        ("secondary-text", p.secondary, p.background, False),
        ("muted-text", p.muted_foreground, p.muted, False),
        ("large-text", p.foreground, p.background, True),
    ]


def validate_theme_palette(theme: Any) -> PaletteReport:
    """Run the fixed AA battery of foreground/background pairs for ``theme``.

    Parameters
    ----------
    theme : ResolvedTheme | str
        ``"light"`` checks the light palette; any other value checks the
        dark palette.

    Returns
    -------
    PaletteReport
        Named ratios plus a violation message for each pair below AA.
    """
    violations: List[str] = []
    ratios: Dict[str, float] = {}
    for name, fg, bg, large in _battery(theme):
        try:
            ratio = contrast_ratio(fg, bg)
        except InvalidColorFormat as exc:
            violations.append(f"{name}: Error calculating ratio - {exc}")
            continue
        ratios[name] = ratio
        required = AA_LARGE if large else AA_NORMAL
        if ratio < required:
            violations.append(f"{name}: {ratio:.2f} (requires {required:.1f})")
    return PaletteReport(is_valid=not violations, violations=violations, ratios=ratios)
