from theming.models import ResolvedTheme, ThemeErrorKind
from theming.services.theme_applicator import ThemeApplicator
from theming.testing import ExplodingRenderSink, RecordingRenderSink


def test_dark_adds_marker_and_hint():
    sink = RecordingRenderSink()
    applicator = ThemeApplicator(lambda: sink)
    assert applicator.apply(ResolvedTheme.DARK) is True
    assert sink.markers == {"dark"}
    assert sink.style_hint == "dark"


def test_light_removes_marker():
    sink = RecordingRenderSink()
    applicator = ThemeApplicator(lambda: sink)
    applicator.apply(ResolvedTheme.DARK)
    applicator.apply(ResolvedTheme.LIGHT)
    assert sink.markers == set()
    assert sink.style_hint == "light"
    assert applicator.last_applied == ResolvedTheme.LIGHT


def test_reapplying_same_theme_is_noop():
    sink = RecordingRenderSink()
    applicator = ThemeApplicator(lambda: sink)
    applicator.apply(ResolvedTheme.DARK)
    calls = list(sink.calls)
    assert applicator.apply(ResolvedTheme.DARK) is True
    assert sink.calls == calls


def test_reset_forces_rewrite():
    sink = RecordingRenderSink()
    applicator = ThemeApplicator(lambda: sink)
    applicator.apply(ResolvedTheme.DARK)
    applicator.reset()
    applicator.apply(ResolvedTheme.DARK)
    assert sink.calls.count(("add_marker", "dark")) == 2


def test_replaced_sink_gets_full_apply():
    first, second = RecordingRenderSink(), RecordingRenderSink()
    current = {"sink": first}
    applicator = ThemeApplicator(lambda: current["sink"])
    applicator.apply(ResolvedTheme.DARK)
    current["sink"] = second
    applicator.apply(ResolvedTheme.DARK)
    assert second.markers == {"dark"}


def test_missing_sink_is_noop():
    kinds = []
    applicator = ThemeApplicator(lambda: None, on_error=lambda k, e=None: kinds.append(k))
    assert applicator.apply(ResolvedTheme.DARK) is False
    assert kinds == [ThemeErrorKind.RENDER_TARGET_UNAVAILABLE]
    assert applicator.last_applied is None


def test_provider_exception_treated_as_missing_sink():
    def provider():
        raise AttributeError("root not built")

    assert ThemeApplicator(provider).apply(ResolvedTheme.LIGHT) is False


def test_mutation_failure_reported_not_raised():
    kinds = []
    applicator = ThemeApplicator(
        lambda: ExplodingRenderSink(), on_error=lambda k, e=None: kinds.append(k)
    )
    assert applicator.apply(ResolvedTheme.DARK) is False
    assert kinds == [ThemeErrorKind.RENDER_MUTATION_FAILED]


def test_custom_marker_and_properties():
    sink = RecordingRenderSink()
    applicator = ThemeApplicator(lambda: sink, marker="night", apply_custom_properties=True)
    applicator.apply(ResolvedTheme.DARK)
    assert sink.markers == {"night"}
    assert sink.properties["--background"] == "17 24 39"
