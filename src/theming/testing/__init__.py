"""Test doubles for the theming leaf facilities.

Headless-safe: nothing here imports Qt. Used by the test suite and handy
for applications that want to exercise theme flows without a platform.
"""

from __future__ import annotations

__all__ = [
    "RecordingRenderSink",
    "ExplodingRenderSink",
    "FakeColorSchemeSource",
    "FailingStorage",
    "FakeMotionSource",
]

from .fakes import (
    RecordingRenderSink,
    ExplodingRenderSink,
    FakeColorSchemeSource,
    FailingStorage,
    FakeMotionSource,
)
