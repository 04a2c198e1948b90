from theming.models import ResolvedTheme, ThemeErrorKind
from theming.services.system_monitor import SystemPreferenceMonitor
from theming.testing import FakeColorSchemeSource


def _collector():
    kinds = []

    def on_error(kind, exc=None):
        kinds.append(kind)

    return kinds, on_error


def test_read_reports_platform_signal():
    assert SystemPreferenceMonitor(FakeColorSchemeSource(dark=True)).read() == ResolvedTheme.DARK
    assert SystemPreferenceMonitor(FakeColorSchemeSource(dark=False)).read() == ResolvedTheme.LIGHT


def test_unsupported_facility_reads_light():
    kinds, on_error = _collector()
    monitor = SystemPreferenceMonitor(None, on_error=on_error)
    assert monitor.supported is False
    assert monitor.read() == ResolvedTheme.LIGHT
    assert kinds == [ThemeErrorKind.MONITOR_UNSUPPORTED]


def test_failing_query_reads_light():
    kinds, on_error = _collector()
    monitor = SystemPreferenceMonitor(FakeColorSchemeSource(dark=True, fail_read=True), on_error=on_error)
    assert monitor.read() == ResolvedTheme.LIGHT
    assert kinds == [ThemeErrorKind.MONITOR_UNSUPPORTED]


def test_subscribe_delivers_changes_until_unsubscribed():
    source = FakeColorSchemeSource()
    seen = []
    unsubscribe = SystemPreferenceMonitor(source).subscribe(seen.append)
    source.emit(True)
    source.emit(False)
    assert seen == [ResolvedTheme.DARK, ResolvedTheme.LIGHT]
    unsubscribe()
    source.emit(True)
    assert len(seen) == 2
    assert source.listeners == []


def test_unsubscribe_is_idempotent():
    source = FakeColorSchemeSource()
    unsubscribe = SystemPreferenceMonitor(source).subscribe(lambda _t: None)
    unsubscribe()
    unsubscribe()
    assert source.remove_calls == 1


def test_subscribe_failure_returns_noop():
    kinds, on_error = _collector()
    source = FakeColorSchemeSource(fail_add=True)
    unsubscribe = SystemPreferenceMonitor(source, on_error=on_error).subscribe(lambda _t: None)
    unsubscribe()
    assert kinds == [ThemeErrorKind.MONITOR_SUBSCRIBE_FAILED]
    assert source.remove_calls == 0


def test_subscribe_without_facility_returns_noop():
    kinds, on_error = _collector()
    unsubscribe = SystemPreferenceMonitor(None, on_error=on_error).subscribe(lambda _t: None)
    unsubscribe()
    assert kinds == [ThemeErrorKind.MONITOR_UNSUPPORTED]


def test_remove_failure_is_swallowed():
    kinds, on_error = _collector()
    source = FakeColorSchemeSource(fail_remove=True)
    unsubscribe = SystemPreferenceMonitor(source, on_error=on_error).subscribe(lambda _t: None)
    unsubscribe()
    assert kinds == [ThemeErrorKind.MONITOR_SUBSCRIBE_FAILED]


def test_handler_exception_does_not_reach_platform():
    source = FakeColorSchemeSource()

    def handler(_theme):
        raise ValueError("consumer bug")

    SystemPreferenceMonitor(source).subscribe(handler)
    source.emit(True)  # must not raise
