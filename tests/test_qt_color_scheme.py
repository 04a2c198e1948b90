import pytest

pytest.importorskip("PyQt6")

from theming.models import ResolvedTheme  # noqa: E402
from theming.platform.qt_color_scheme import QtColorSchemeSource, qt_available  # noqa: E402
from theming.services.system_monitor import SystemPreferenceMonitor  # noqa: E402


def test_qt_available():
    assert qt_available() is True


def test_reads_platform_scheme(qtbot):
    source = QtColorSchemeSource()
    assert isinstance(source.is_dark(), bool)
    assert SystemPreferenceMonitor(source).read() in (ResolvedTheme.LIGHT, ResolvedTheme.DARK)


def test_listener_lifecycle(qtbot):
    source = QtColorSchemeSource()
    unsubscribe = SystemPreferenceMonitor(source).subscribe(lambda _t: None)
    assert len(source._slots) == 1
    unsubscribe()
    assert source._slots == {}
