import json

import pytest

from theming import ResolvedTheme, ThemeErrorKind, ThemePreference, create_theme_app
from theming.app.config_store import ThemeConfig, save_config
from theming.design import reduced_motion
from theming.testing import FakeColorSchemeSource, FakeMotionSource, RecordingRenderSink


@pytest.fixture
def contexts():
    created = []
    yield created
    for ctx in created:
        ctx.shutdown()


def test_headless_bootstrap_applies_before_return(tmp_path, contexts):
    sink = RecordingRenderSink()
    ctx = create_theme_app(
        data_dir=tmp_path,
        headless=True,
        root_widget=sink,
        color_source=FakeColorSchemeSource(dark=True),
    )
    contexts.append(ctx)
    assert ctx.headless is True
    assert ctx.qt_app is None
    assert ctx.service.ready is True
    assert ctx.service.resolved_theme == ResolvedTheme.DARK
    assert sink.markers == {"dark"}
    assert [e.name for e in ctx.timing.events] == ["load_config", "platform_bindings", "prepaint"]
    assert ctx.duration_s >= 0


def test_preference_persists_across_bootstraps(tmp_path, contexts):
    first = create_theme_app(data_dir=tmp_path, headless=True)
    contexts.append(first)
    first.service.set_preference("dark")
    stored = json.loads((tmp_path / "theme_store.json").read_text(encoding="utf-8"))
    assert stored == {"theme": "dark"}

    second = create_theme_app(data_dir=tmp_path, headless=True, root_widget=RecordingRenderSink())
    contexts.append(second)
    assert second.service.preference == ThemePreference.DARK
    assert second.service.resolved_theme == ResolvedTheme.DARK


def test_config_controls_key_and_marker(tmp_path, contexts):
    save_config(ThemeConfig(storage_key="ui-theme", marker="night"), tmp_path)
    (tmp_path / "theme_store.json").write_text(json.dumps({"ui-theme": "dark"}), encoding="utf-8")
    sink = RecordingRenderSink()
    ctx = create_theme_app(data_dir=tmp_path, headless=True, root_widget=sink)
    contexts.append(ctx)
    assert ctx.service.storage_key == "ui-theme"
    assert sink.markers == {"night"}


def test_attach_root_after_bootstrap(tmp_path, contexts):
    ctx = create_theme_app(
        data_dir=tmp_path, headless=True, color_source=FakeColorSchemeSource(dark=True)
    )
    contexts.append(ctx)
    assert ctx.service.last_error == ThemeErrorKind.RENDER_TARGET_UNAVAILABLE
    sink = RecordingRenderSink()
    ctx.attach_root(sink)
    assert ctx.render_target() is sink
    assert sink.markers == {"dark"}
    assert sink.style_hint == "dark"


def test_corrupt_store_file_degrades_to_system(tmp_path, contexts):
    (tmp_path / "theme_store.json").write_text("{", encoding="utf-8")
    ctx = create_theme_app(data_dir=tmp_path, headless=True)
    contexts.append(ctx)
    assert ctx.service.preference == ThemePreference.SYSTEM
    assert ctx.service.resolved_theme == ResolvedTheme.LIGHT
    assert ctx.service.diagnostics.counts()[ThemeErrorKind.STORAGE_UNAVAILABLE] == 1


def test_logging_service_captures_recovered_faults(tmp_path, contexts):
    (tmp_path / "theme_store.json").write_text("{", encoding="utf-8")
    ctx = create_theme_app(data_dir=tmp_path, headless=True)
    contexts.append(ctx)
    messages = [e.message for e in ctx.logging_service.filter(level="WARNING")]
    assert any("Failed to read 'theme'" in m for m in messages)
    kinds = {e.error_kind for e in ctx.logging_service.faults()}
    assert ThemeErrorKind.STORAGE_UNAVAILABLE in kinds


def test_configured_transition_duration_reaches_service(tmp_path, contexts):
    ctx = create_theme_app(
        data_dir=tmp_path,
        headless=True,
        color_source=FakeColorSchemeSource(dark=False),
        config=ThemeConfig(default_transition_ms=120),
    )
    contexts.append(ctx)
    assert ctx.service.transition_duration() == 120
    with reduced_motion.temporarily_reduced_motion(True):
        assert ctx.service.transition_duration() == 0


def test_motion_source_is_watched(tmp_path, contexts):
    motion = FakeMotionSource()
    ctx = create_theme_app(
        data_dir=tmp_path,
        headless=True,
        color_source=FakeColorSchemeSource(dark=False),
        motion_source=motion,
    )
    contexts.append(ctx)
    seen = []
    ctx.service.subscribe_motion(lambda evt: seen.append(evt.payload["reduced"]))
    motion.emit(True)
    assert seen == [True]
    ctx.shutdown()
    assert motion.listeners == []
