"""Reduced motion detection and transition helpers.

Single source of truth for whether theme transitions and other animations
should be suppressed.

Resolution order for ``prefers_reduced_motion``:
1. Explicit override set through ``set_reduced_motion`` (or bootstrapped
   from ``APP_PREFER_REDUCED_MOTION=1`` / "true" / "yes" / "on").
2. The motion source passed in, or the one registered with
   ``register_motion_source``. A motion source is any zero-argument callable
   returning True when the platform asks for reduced motion.
3. ``False`` when no source exists or the source raises.

The query never raises. A failing source is logged and read as False.

Public API:
- set_reduced_motion(enabled: bool | None) -> None
- register_motion_source(source) -> None
- prefers_reduced_motion(source=None) -> bool
- transition_duration(default_ms=300, source=None) -> int
- transition_classes(default, reduced="", source=None) -> str
- temporarily_reduced_motion(force=True) -> context manager
- subscribe_reduced_motion(on_change, source=None) -> unsubscribe

A source that also offers ``add_listener(cb)`` / ``remove_listener(cb)``
(``WatchableMotionSource``) can be watched for changes; plain callables are
polled only.
"""

from __future__ import annotations

import contextlib
import logging
import os
from typing import Callable, Iterator, Optional, Protocol, runtime_checkable

__all__ = [
    "MotionSource",
    "DEFAULT_TRANSITION_MS",
    "set_reduced_motion",
    "register_motion_source",
    "prefers_reduced_motion",
    "transition_duration",
    "transition_classes",
    "temporarily_reduced_motion",
    "subscribe_reduced_motion",
    "WatchableMotionSource",
]

_logger = logging.getLogger(__name__)

MotionSource = Callable[[], bool]


@runtime_checkable
class WatchableMotionSource(Protocol):
    def __call__(self) -> bool: ...

    def add_listener(self, callback: Callable[[bool], None]) -> None: ...

    def remove_listener(self, callback: Callable[[bool], None]) -> None: ...


DEFAULT_TRANSITION_MS = 300

# Internal state
_override: Optional[bool] = None
_registered_source: Optional[MotionSource] = None

# Bootstrap from environment
_env_value = os.getenv("APP_PREFER_REDUCED_MOTION", "").strip().lower()
if _env_value in {"1", "true", "yes", "on"}:
    _override = True


def set_reduced_motion(enabled: Optional[bool]) -> None:
    """Force reduced motion on/off; ``None`` clears the override."""
    global _override
    _override = None if enabled is None else bool(enabled)


def register_motion_source(source: Optional[MotionSource]) -> None:
    global _registered_source
    _registered_source = source


def prefers_reduced_motion(source: Optional[MotionSource] = None) -> bool:
    if _override is not None:
        return _override
    probe = source if source is not None else _registered_source
    if probe is None:
        return False
    try:
        return bool(probe())
    except Exception as exc:  # noqa: BLE001 - platform facility may fail arbitrarily
        _logger.warning("Reduced motion query failed, assuming motion allowed: %s", exc)
        return False


def transition_duration(
    default_ms: int = DEFAULT_TRANSITION_MS, source: Optional[MotionSource] = None
) -> int:
    """Return 0 when reduced motion is requested, else ``default_ms`` (clamped >= 0)."""
    if prefers_reduced_motion(source):
        return 0
    return max(0, default_ms)


def transition_classes(
    default: str, reduced: str = "", source: Optional[MotionSource] = None
) -> str:
    return reduced if prefers_reduced_motion(source) else default


@contextlib.contextmanager
def temporarily_reduced_motion(force: bool = True) -> Iterator[None]:
    """Temporarily override the reduced motion preference.

    Parameters
    ----------
    force: bool
        True (default) forces reduced motion ON within the context, False
        forces it OFF. The previous override (including "no override") is
        restored on exit, also when the body raises.
    """
    prev = _override
    try:
        set_reduced_motion(force)
        yield
    finally:
        set_reduced_motion(prev)


def _noop() -> None:
    return None


def subscribe_reduced_motion(
    on_change: Callable[[bool], None], source: Optional[MotionSource] = None
) -> Callable[[], None]:
    """Call ``on_change(prefers_reduced_motion)`` whenever the source reports a change.

    Returns a zero-argument unsubscribe that is safe to call repeatedly.
    Sources without listener support, and sources whose registration
    fails, yield a no-op unsubscribe. The value handed to ``on_change`` is
    re-read through ``prefers_reduced_motion`` so an active override still
    wins.
    """
    probe = source if source is not None else _registered_source
    if not isinstance(probe, WatchableMotionSource):
        _logger.debug("Reduced motion source cannot be watched; polling only")
        return _noop

    def listener(_reduced: bool) -> None:
        try:
            on_change(prefers_reduced_motion(probe))
        except Exception:  # noqa: BLE001 - keep the platform callback chain alive
            _logger.exception("Reduced motion change handler failed")

    try:
        probe.add_listener(listener)
    except Exception as exc:  # noqa: BLE001
        _logger.warning("Could not watch reduced motion changes: %s", exc)
        return _noop

    removed = False

    def unsubscribe() -> None:
        nonlocal removed
        if removed:
            return
        removed = True
        try:
            probe.remove_listener(listener)
        except Exception as exc:  # noqa: BLE001
            _logger.warning("Could not stop watching reduced motion changes: %s", exc)

    return unsubscribe
