import pytest

pytest.importorskip("PyQt6")

from PyQt6.QtCore import Qt  # noqa: E402

from theming.components.theme_toggle_button import ThemeToggleButton  # noqa: E402
from theming.models import ThemePreference  # noqa: E402
from theming.testing import FakeMotionSource  # noqa: E402


@pytest.fixture
def service(make_service):
    svc = make_service()
    svc.initialize()
    return svc


def test_initial_rendering(qtbot, service):
    btn = ThemeToggleButton(service)
    qtbot.addWidget(btn)
    assert btn.property("icon") == "monitor"
    assert btn.accessibleName() == "Switch to light mode"
    assert btn.toolTip() == "Current: system theme. Click to switch to light theme."
    assert btn.text() == ""
    assert btn.isChecked() is False


def test_click_cycles_and_announces(qtbot, service):
    btn = ThemeToggleButton(service, show_label=True)
    qtbot.addWidget(btn)
    with qtbot.waitSignal(btn.announced, timeout=1000) as blocker:
        qtbot.mouseClick(btn, Qt.MouseButton.LeftButton)
    assert blocker.args == ["Switched to light theme"]
    assert service.preference == ThemePreference.LIGHT
    assert btn.text() == "Light"
    qtbot.mouseClick(btn, Qt.MouseButton.LeftButton)
    assert service.preference == ThemePreference.DARK
    assert btn.isChecked() is True


def test_keyboard_activation(qtbot, service):
    btn = ThemeToggleButton(service)
    qtbot.addWidget(btn)
    qtbot.keyClick(btn, Qt.Key.Key_Return)
    assert service.preference == ThemePreference.LIGHT
    qtbot.keyClick(btn, Qt.Key.Key_Space)
    assert service.preference == ThemePreference.DARK
    assert btn.announcement() == "Switched to dark theme"


def test_announcement_clears(qtbot, service):
    btn = ThemeToggleButton(service)
    qtbot.addWidget(btn)
    qtbot.mouseClick(btn, Qt.MouseButton.LeftButton)
    qtbot.waitUntil(lambda: btn.announcement() == "", timeout=3000)


def test_external_change_refreshes_button(qtbot, service):
    btn = ThemeToggleButton(service)
    qtbot.addWidget(btn)
    service.set_preference("dark")
    assert btn.property("icon") == "moon"
    assert btn.isChecked() is True


def test_motion_change_refreshes_transition_properties(qtbot, make_service):
    motion = FakeMotionSource()
    svc = make_service(motion_source=motion, default_transition_ms=200)
    svc.initialize()
    btn = ThemeToggleButton(svc)
    qtbot.addWidget(btn)
    assert btn.property("reducedMotion") is False
    assert btn.property("transitionMs") == 200
    motion.emit(True)
    assert btn.property("reducedMotion") is True
    assert btn.property("transitionMs") == 0
    assert btn.property("transitionClasses") == ""
