"""Theme service: resilient entry point for theme resolution.

Composes the preference store, the system preference monitor, the pure
resolver and the applicator into one object that always yields a valid
``ResolvedTheme`` and never raises.

Lifecycle
---------
``UNINITIALIZED -> RESOLVING -> APPLIED``, looping back to ``RESOLVING`` on
every preference change or system signal change. There is no terminal
state; ``teardown`` only stops listening to the platform.

Two-phase startup:
 1. ``placeholder_theme()`` - what to paint before storage and the platform
    signal are known (server render / before the root widget exists). It is
    light, the same value ``initialize`` reaches when both facilities are
    missing, so the hand-over to phase 2 does not flash.
 2. ``initialize()`` - the pre-paint routine: read store, read monitor,
    resolve, apply, mark ``ready``. Must run synchronously before themed
    content becomes visible.

Events (``ThemeEvent``) published on the service bus:
 - READY once, after the first successful ``initialize``
 - THEME_CHANGED whenever preference or resolved theme changes (and on
   ``initialize``), payload ``{"preference", "resolved", "system_signal"}``
 - PREFERENCE_CHANGED after a valid ``set_preference``
 - SYSTEM_SIGNAL_CHANGED on every platform change notification, after the
   theme has been re-resolved for it
 - REDUCED_MOTION_CHANGED when a watchable motion source reports a change,
   payload ``{"reduced": bool}``
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from theming.design import reduced_motion
from theming.design.theme_resolver import (
    get_initial_preference,
    next_preference,
    parse_preference,
    resolve,
)
from theming.models import (
    DEFAULT_STORAGE_KEY,
    ResolvedTheme,
    Status,
    ThemeErrorKind,
    ThemePreference,
    ThemeState,
)
from .diagnostics import ThemeDiagnostics, ThemeErrorRecord
from .event_bus import Event, EventBus, Subscription, ThemeEvent
from .logging_service import fault_extra
from .preference_store import KeyValueStorage, PreferenceStore
from .system_monitor import ColorSchemeSource, SystemPreferenceMonitor, Unsubscribe
from .theme_applicator import DEFAULT_MARKER, SinkProvider, ThemeApplicator

_logger = logging.getLogger(__name__)

__all__ = ["ThemeService", "PLACEHOLDER_THEME"]

PLACEHOLDER_THEME = ResolvedTheme.LIGHT


def _no_sink() -> None:
    return None


class ThemeService:
    """Fallback/error wrapper owning the application's ``ThemeState``.

    Construct one per application root and hand it to consumers; there is
    no module-level instance. Leaf components should report faults into
    the same ``ThemeDiagnostics`` so ``last_error`` reflects them; the
    ``create`` factory wires that up.
    """

    def __init__(
        self,
        store: PreferenceStore,
        monitor: SystemPreferenceMonitor,
        applicator: ThemeApplicator,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        event_bus: Optional[EventBus] = None,
        diagnostics: Optional[ThemeDiagnostics] = None,
        motion_source: Optional[reduced_motion.MotionSource] = None,
        default_transition_ms: int = reduced_motion.DEFAULT_TRANSITION_MS,
    ) -> None:
        self.store = store
        self.monitor = monitor
        self.applicator = applicator
        self.storage_key = storage_key
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self.diagnostics = (
            diagnostics if diagnostics is not None else ThemeDiagnostics(event_bus=self.event_bus)
        )
        self.motion_source = motion_source
        self.default_transition_ms = max(0, int(default_transition_ms))
        self._state = ThemeState()
        self._unsubscribe_monitor: Optional[Unsubscribe] = None
        self._unsubscribe_motion: Optional[Unsubscribe] = None
        self.diagnostics.add_observer(self._on_fault)

    @classmethod
    def create(
        cls,
        *,
        storage: Optional[KeyValueStorage] = None,
        color_source: Optional[ColorSchemeSource] = None,
        sink_provider: SinkProvider = _no_sink,
        storage_key: str = DEFAULT_STORAGE_KEY,
        marker: str = DEFAULT_MARKER,
        apply_custom_properties: bool = False,
        event_bus: Optional[EventBus] = None,
        motion_source: Optional[reduced_motion.MotionSource] = None,
        default_transition_ms: int = reduced_motion.DEFAULT_TRANSITION_MS,
    ) -> "ThemeService":
        """Build a service whose leaf components all report into one diagnostics channel.

        Any of ``storage`` / ``color_source`` / ``sink_provider`` may be
        absent; the service then runs on the documented fallbacks.
        """
        bus = event_bus if event_bus is not None else EventBus()
        diagnostics = ThemeDiagnostics(event_bus=bus)
        return cls(
            PreferenceStore(storage, on_error=diagnostics),
            SystemPreferenceMonitor(color_source, on_error=diagnostics),
            ThemeApplicator(
                sink_provider,
                marker=marker,
                apply_custom_properties=apply_custom_properties,
                on_error=diagnostics,
            ),
            storage_key=storage_key,
            event_bus=bus,
            diagnostics=diagnostics,
            motion_source=motion_source,
            default_transition_ms=default_transition_ms,
        )

    # Accessors ---------------------------------------------------------
    @property
    def state(self) -> ThemeState:
        return self._state

    @property
    def resolved_theme(self) -> ResolvedTheme:
        return self._state.resolved

    @property
    def preference(self) -> ThemePreference:
        return self._state.preference

    @property
    def system_signal(self) -> ResolvedTheme:
        return self._state.system_signal

    @property
    def ready(self) -> bool:
        return self._state.ready

    @property
    def status(self) -> Status:
        return self._state.status

    @property
    def last_error(self) -> Optional[ThemeErrorKind]:
        return self._state.last_error

    @staticmethod
    def placeholder_theme() -> ResolvedTheme:
        """Theme to paint before the environment is known (phase 1)."""
        return PLACEHOLDER_THEME

    # Lifecycle ---------------------------------------------------------
    def initialize(self) -> ResolvedTheme:
        """Run the pre-paint cycle: store -> monitor -> resolve -> apply."""
        try:
            self._state.status = Status.RESOLVING
            raw = self.store.get(self.storage_key)
            if raw is not None and parse_preference(raw) is None:
                _logger.warning(
                    "Ignoring invalid stored theme value %r",
                    raw,
                    extra=fault_extra(ThemeErrorKind.INVALID_STORED_VALUE),
                )
                self.diagnostics.record(
                    ThemeErrorKind.INVALID_STORED_VALUE, message=f"stored value {raw!r}"
                )
            self._state.preference = get_initial_preference(raw)
            self._state.system_signal = self.monitor.read()
            self._apply_cycle(force_event=True)
            if self._unsubscribe_monitor is None:
                self._unsubscribe_monitor = self.monitor.subscribe(self._on_system_change)
            if self._unsubscribe_motion is None:
                self._unsubscribe_motion = reduced_motion.subscribe_reduced_motion(
                    self._on_motion_change, self.motion_source
                )
            first = not self._state.ready
            self._state.ready = True
            if first:
                self.event_bus.publish(ThemeEvent.READY, self._payload())
        except Exception:  # noqa: BLE001 - the wrapper must never raise
            _logger.exception("Theme initialization failed; keeping %s", self._state.resolved.value)
            self._state.status = Status.APPLIED
        return self._state.resolved

    def teardown(self) -> None:
        """Stop watching the platform signals. Safe to call repeatedly."""
        pending = (self._unsubscribe_monitor, self._unsubscribe_motion)
        self._unsubscribe_monitor = self._unsubscribe_motion = None
        for unsubscribe in pending:
            if unsubscribe is None:
                continue
            try:
                unsubscribe()
            except Exception:  # noqa: BLE001
                _logger.exception("Platform unsubscribe failed")

    # Mutations ---------------------------------------------------------
    def set_preference(self, preference: Any) -> ResolvedTheme:
        """Persist and apply a user choice; invalid values are ignored."""
        parsed = parse_preference(preference)
        if parsed is None:
            _logger.warning("Ignoring invalid theme preference %r", preference)
            return self._state.resolved
        try:
            self.store.set(self.storage_key, parsed.value)
            changed = parsed != self._state.preference
            self._state.preference = parsed
            self._state.status = Status.RESOLVING
            self._apply_cycle(force_event=changed)
            self.event_bus.publish(ThemeEvent.PREFERENCE_CHANGED, self._payload())
        except Exception:  # noqa: BLE001
            _logger.exception("Setting theme preference %s failed", parsed.value)
            self._state.status = Status.APPLIED
        return self._state.resolved

    def toggle(self) -> ResolvedTheme:
        """Advance light -> dark -> system -> light."""
        return self.set_preference(next_preference(self._state.preference))

    def _on_system_change(self, signal: ResolvedTheme) -> None:
        try:
            self._state.system_signal = ResolvedTheme(signal)
            if self._state.preference == ThemePreference.SYSTEM:
                self._state.status = Status.RESOLVING
                self._apply_cycle(force_event=False)
            self.event_bus.publish(ThemeEvent.SYSTEM_SIGNAL_CHANGED, self._payload())
        except Exception:  # noqa: BLE001
            _logger.exception("Handling system color scheme change failed")
            self._state.status = Status.APPLIED

    # Change subscription -------------------------------------------------
    def subscribe(self, handler: Callable[[Event], None]) -> Subscription:
        return self.event_bus.subscribe(ThemeEvent.THEME_CHANGED, handler)

    def unsubscribe(self, sub: Subscription) -> None:
        self.event_bus.unsubscribe(sub)

    # Reduced motion ------------------------------------------------------
    def prefers_reduced_motion(self) -> bool:
        return reduced_motion.prefers_reduced_motion(self.motion_source)

    def transition_duration(self, default_ms: Optional[int] = None) -> int:
        """0 under reduced motion, else ``default_ms`` or the configured default."""
        if default_ms is None:
            default_ms = self.default_transition_ms
        return reduced_motion.transition_duration(default_ms, self.motion_source)

    def subscribe_motion(self, handler: Callable[[Event], None]) -> Subscription:
        return self.event_bus.subscribe(ThemeEvent.REDUCED_MOTION_CHANGED, handler)

    def _on_motion_change(self, reduced: bool) -> None:
        self.event_bus.publish(ThemeEvent.REDUCED_MOTION_CHANGED, {"reduced": bool(reduced)})

    # Diagnostics ---------------------------------------------------------
    def snapshot(self) -> dict[str, object]:
        """Return a deterministic description of the current theme state."""
        return {
            "state": self._state.to_dict(),
            "storage_key": self.storage_key,
            "store_available": self.store.available,
            "monitor_supported": self.monitor.supported,
            "monitor_subscribed": self._unsubscribe_monitor is not None,
            "default_transition_ms": self.default_transition_ms,
            "errors": self.diagnostics.to_dict(),
        }

    # Internal ------------------------------------------------------------
    def _apply_cycle(self, *, force_event: bool) -> None:
        previous = self._state.resolved
        self._state.resolved = resolve(self._state.preference, self._state.system_signal)
        self.applicator.apply(self._state.resolved)
        self._state.status = Status.APPLIED
        if force_event or self._state.resolved != previous:
            self.event_bus.publish(ThemeEvent.THEME_CHANGED, self._payload())

    def _payload(self) -> dict[str, str]:
        return {
            "preference": self._state.preference.value,
            "resolved": self._state.resolved.value,
            "system_signal": self._state.system_signal.value,
        }

    def _on_fault(self, record: ThemeErrorRecord) -> None:
        self._state.last_error = record.kind
