import json
from pathlib import Path

from theming.app.config_store import (
    CONFIG_VERSION,
    DEFAULT_FILENAME,
    ThemeConfig,
    load_config,
    save_config,
)


def test_load_returns_defaults_when_missing(tmp_path: Path):
    cfg = load_config(tmp_path)
    assert cfg.version == CONFIG_VERSION
    assert cfg.storage_key == "theme"
    assert cfg.marker == "dark"


def test_save_and_reload_round_trip(tmp_path: Path):
    cfg = ThemeConfig(storage_key="ui-theme", marker="night", apply_custom_properties=True)
    path = save_config(cfg, tmp_path)
    assert path.name == DEFAULT_FILENAME
    assert load_config(tmp_path).to_dict() == cfg.to_dict()


def test_corrupt_file_graceful_fallback(tmp_path: Path):
    (tmp_path / DEFAULT_FILENAME).write_text("not json", encoding="utf-8")
    cfg = load_config(tmp_path)
    assert isinstance(cfg, ThemeConfig)
    assert cfg.storage_key == "theme"


def test_version_mismatch_resets_but_preserves_storage_key(tmp_path: Path):
    data = {"version": CONFIG_VERSION + 10, "storage_key": "keepme", "marker": "night"}
    (tmp_path / DEFAULT_FILENAME).write_text(json.dumps(data), encoding="utf-8")
    cfg = load_config(tmp_path)
    assert cfg.marker == "dark"  # reset
    assert cfg.storage_key == "keepme"  # preserved


def test_env_overrides_file(tmp_path: Path, monkeypatch):
    save_config(ThemeConfig(storage_key="file-key"), tmp_path)
    monkeypatch.setenv("THEMING_STORAGE_KEY", "env-key")
    monkeypatch.setenv("THEMING_MARKER", "night")
    cfg = load_config(tmp_path)
    assert cfg.storage_key == "env-key"
    assert cfg.marker == "night"


def test_from_dict_sanitizes_values():
    cfg = ThemeConfig.from_dict({"storage_key": "", "default_transition_ms": -20})
    assert cfg.storage_key == "theme"
    assert cfg.default_transition_ms == 0


def test_store_path(tmp_path: Path):
    assert ThemeConfig().store_path(tmp_path) == tmp_path / "theme_store.json"
