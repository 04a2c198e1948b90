"""Headless theme design helpers.

Resolution rules, palettes, contrast validation, reduced motion and the
pre-paint script. Nothing in this subpackage imports Qt.
"""

from .theme_resolver import (  # noqa: F401
    is_valid_preference,
    parse_preference,
    resolve,
    get_initial_preference,
    get_resolved_theme,
    next_preference,
)
from .palette import ThemePalette, LIGHT_PALETTE, DARK_PALETTE, palette_for, theme_properties  # noqa: F401
from .contrast import (  # noqa: F401
    InvalidColorFormat,
    PaletteReport,
    contrast_ratio,
    relative_luminance,
    meets_aa,
    meets_aaa,
    validate_theme_palette,
)
from .reduced_motion import (  # noqa: F401
    prefers_reduced_motion,
    transition_duration,
    transition_classes,
    set_reduced_motion,
    register_motion_source,
    temporarily_reduced_motion,
)
from .prepaint import render_prepaint_script, render_prepaint_tag  # noqa: F401
