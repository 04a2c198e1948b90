# Shared fixtures for the theming test-suite.
#
# Qt runs on the offscreen platform so widget tests work without a display.
# Reduced-motion state is module-global; it is reset around every test.

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from theming.design import reduced_motion  # noqa: E402
from theming.services.preference_store import MemoryStorage  # noqa: E402
from theming.services.theme_service import ThemeService  # noqa: E402
from theming.testing import FakeColorSchemeSource, RecordingRenderSink  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_reduced_motion():
    reduced_motion.set_reduced_motion(None)
    reduced_motion.register_motion_source(None)
    yield
    reduced_motion.set_reduced_motion(None)
    reduced_motion.register_motion_source(None)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def color_source():
    return FakeColorSchemeSource(dark=False)


@pytest.fixture
def sink():
    return RecordingRenderSink()


@pytest.fixture
def make_service(storage, color_source, sink):
    """Factory building a ``ThemeService`` over the default fakes.

    Keyword arguments override ``ThemeService.create`` parameters; pass
    ``sink=None`` to run without a render target.
    """
    created = []

    def _make(**overrides):
        target = overrides.pop("sink", sink)
        params = {
            "storage": storage,
            "color_source": color_source,
            "sink_provider": lambda: target,
        }
        params.update(overrides)
        svc = ThemeService.create(**params)
        created.append(svc)
        return svc

    yield _make
    for svc in created:
        svc.teardown()
