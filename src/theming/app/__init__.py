"""Application wiring for theming (config, bootstrap, startup timing)."""

from .config_store import ThemeConfig, load_config, save_config  # noqa: F401
from .bootstrap import ThemeContext, create_theme_app  # noqa: F401
