"""Theming configuration persistence.

Stores the knobs that shape theme resolution: which storage key holds the
preference, which file backs the store, the marker name on the render root
and the default transition duration.

Design principles:
- Pure logic (no Qt import) so it can be unit-tested headless.
- Explicit schema with version field to enable future migrations.
- Graceful fallback: corrupt or incompatible files produce defaults instead of raising.
- Environment overrides (``THEMING_STORAGE_KEY``, ``THEMING_MARKER``) win
  over the file so deployments can rename the slot without editing it.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict

from theming.models import DEFAULT_STORAGE_KEY

__all__ = ["ThemeConfig", "load_config", "save_config", "CONFIG_VERSION", "DEFAULT_FILENAME"]

_logger = logging.getLogger(__name__)

CONFIG_VERSION = 1  # Increment when structure changes

DEFAULT_FILENAME = "theming_config.json"


@dataclass(slots=True)
class ThemeConfig:
    """Serializable theming configuration.

    Attributes
    ----------
    version: Schema version for migration handling.
    storage_key: Key of the persisted preference slot.
    store_filename: File name (inside the data directory) of the JSON store.
    marker: Marker toggled on the render root for the dark theme.
    default_transition_ms: Theme transition length when motion is allowed.
    apply_custom_properties: Push CSS custom properties onto the render root.
    """

    version: int = CONFIG_VERSION
    storage_key: str = DEFAULT_STORAGE_KEY
    store_filename: str = "theme_store.json"
    marker: str = "dark"
    default_transition_ms: int = 300
    apply_custom_properties: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ThemeConfig":
        defaults = cls()
        return cls(
            version=int(data.get("version", CONFIG_VERSION)),
            storage_key=str(data.get("storage_key") or defaults.storage_key),
            store_filename=str(data.get("store_filename") or defaults.store_filename),
            marker=str(data.get("marker") or defaults.marker),
            default_transition_ms=max(
                0, int(data.get("default_transition_ms", defaults.default_transition_ms))
            ),
            apply_custom_properties=bool(data.get("apply_custom_properties", False)),
        )

    def store_path(self, base_dir: str | Path | None = None) -> Path:
        base = Path(base_dir) if base_dir else Path.cwd()
        return base / self.store_filename


def _resolve_path(base_dir: str | Path | None) -> Path:
    base = Path(base_dir) if base_dir else Path.cwd()
    return base / DEFAULT_FILENAME


def _apply_env(cfg: ThemeConfig) -> ThemeConfig:
    key = os.getenv("THEMING_STORAGE_KEY", "").strip()
    if key:
        cfg.storage_key = key
    marker = os.getenv("THEMING_MARKER", "").strip()
    if marker:
        cfg.marker = marker
    return cfg


def load_config(base_dir: str | Path | None = None) -> ThemeConfig:
    """Load theming config from directory.

    Parameters
    ----------
    base_dir: The directory containing the config file (defaults to CWD).
    """
    path = _resolve_path(base_dir)
    if not path.exists():
        return _apply_env(ThemeConfig())
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        cfg = ThemeConfig.from_dict(data)
    except Exception as exc:  # noqa: BLE001
        _logger.warning("Unreadable theming config %s, using defaults: %s", path, exc)
        return _apply_env(ThemeConfig())
    if cfg.version != CONFIG_VERSION:
        # Reset to defaults but keep the storage key so stored preferences stay reachable.
        return _apply_env(ThemeConfig(storage_key=cfg.storage_key))
    return _apply_env(cfg)


def save_config(cfg: ThemeConfig, base_dir: str | Path | None = None) -> Path:
    """Persist theming config to directory.

    Returns the path written for convenience.
    """
    path = _resolve_path(base_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(cfg.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(path)
    return path
