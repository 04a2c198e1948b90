"""Theming bootstrap.

Responsibilities:
 - Load ``ThemeConfig`` (file + environment overrides)
 - Pick the platform bindings: Qt color-scheme source and root-widget render
   target when PyQt6 is available and not headless, nothing otherwise
 - Build the ``ThemeService`` with a JSON file store under ``data_dir``
 - Run the pre-paint cycle (``initialize``) before returning, so callers can
   show their window right after

PyQt6 is imported lazily-guarded so headless callers and tests never need
a display.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from theming.app.config_store import ThemeConfig, load_config
from theming.app.timing import PREPAINT_BUDGET_MS, TimingLogger
from theming.design.reduced_motion import MotionSource
from theming.platform.qt_color_scheme import QtColorSchemeSource, qt_available
from theming.platform.qt_render_target import QtRenderTarget
from theming.services.event_bus import EventBus
from theming.services.logging_service import LoggingService
from theming.services.preference_store import JsonFileStorage, KeyValueStorage
from theming.services.system_monitor import ColorSchemeSource
from theming.services.theme_applicator import RenderSink
from theming.services.theme_service import ThemeService

__all__ = ["ThemeContext", "create_theme_app"]

_logger = logging.getLogger(__name__)


@dataclass
class ThemeContext:
    """Objects created during bootstrap.

    Attributes
    ----------
    config: Effective theming configuration.
    service: The initialized ``ThemeService``.
    event_bus: Bus shared by the service and the logging service.
    logging_service: Ring-buffer capture attached to the ``theming`` logger.
    qt_app: The QApplication (None when headless).
    headless: Whether Qt bindings were skipped.
    timing: Phase timings of this bootstrap.
    """

    config: ThemeConfig
    service: ThemeService
    event_bus: EventBus
    logging_service: LoggingService
    qt_app: Optional[Any]
    headless: bool
    timing: TimingLogger
    _render_target: Optional[RenderSink] = field(default=None, repr=False)

    @property
    def duration_s(self) -> float:
        return self.timing.total_duration

    def render_target(self) -> Optional[RenderSink]:
        return self._render_target

    def attach_root(self, target: Any) -> None:
        """Bind (or replace) the render root after bootstrap and re-apply.

        Accepts a ``RenderSink`` or a QWidget (wrapped in ``QtRenderTarget``).
        """
        if not hasattr(target, "add_marker"):
            target = QtRenderTarget(target)
        self._render_target = target
        self.service.applicator.reset()
        self.service.applicator.apply(self.service.resolved_theme)

    def shutdown(self) -> None:
        self.service.teardown()
        self.logging_service.detach()


def create_theme_app(
    *,
    data_dir: str | Path | None = None,
    headless: bool | None = None,
    root_widget: Any = None,
    storage: Optional[KeyValueStorage] = None,
    color_source: Optional[ColorSchemeSource] = None,
    config: Optional[ThemeConfig] = None,
    motion_source: Optional[MotionSource] = None,
) -> ThemeContext:
    """Create the theming context and run the pre-paint cycle.

    Parameters
    ----------
    data_dir: Directory for the config and JSON store (defaults to CWD).
    headless: Skip Qt entirely. If None, inferred from PyQt6 availability.
    root_widget: QWidget (or ``RenderSink``) receiving the theme; may also be
        attached later with ``ThemeContext.attach_root``.
    storage: Storage backend override (defaults to the JSON file store).
    color_source: Platform signal override (defaults to Qt when not headless).
    config: Explicit config instead of loading from ``data_dir``.
    motion_source: Reduced-motion query; a source with ``add_listener`` is
        also watched for changes.
    """
    if headless is None:
        headless = not qt_available()
    timing = TimingLogger()

    with timing.measure("load_config"):
        cfg = config if config is not None else load_config(data_dir)

    bus = EventBus()
    logging_service = LoggingService(event_bus=bus)
    logging_service.attach()

    qt_app = None
    with timing.measure("platform_bindings"):
        if not headless and qt_available():
            from PyQt6.QtWidgets import QApplication  # type: ignore

            qt_app = QApplication.instance() or QApplication(sys.argv[:1])
            if color_source is None:
                color_source = QtColorSchemeSource(qt_app)
        if storage is None:
            storage = JsonFileStorage(cfg.store_path(data_dir))

    ctx_holder: dict[str, ThemeContext] = {}

    def sink_provider() -> Optional[RenderSink]:
        ctx = ctx_holder.get("ctx")
        return ctx.render_target() if ctx is not None else None

    service = ThemeService.create(
        storage=storage,
        color_source=color_source,
        sink_provider=sink_provider,
        storage_key=cfg.storage_key,
        marker=cfg.marker,
        apply_custom_properties=cfg.apply_custom_properties,
        event_bus=bus,
        motion_source=motion_source,
        default_transition_ms=cfg.default_transition_ms,
    )
    initial_target: Optional[RenderSink] = None
    if root_widget is not None:
        initial_target = (
            root_widget if hasattr(root_widget, "add_marker") else QtRenderTarget(root_widget)
        )
    ctx = ThemeContext(
        config=cfg,
        service=service,
        event_bus=bus,
        logging_service=logging_service,
        qt_app=qt_app,
        headless=headless,
        timing=timing,
        _render_target=initial_target,
    )
    ctx_holder["ctx"] = ctx

    with timing.measure("prepaint", budget_ms=PREPAINT_BUDGET_MS):
        resolved = service.initialize()
    timing.stop()
    _logger.info(
        "Theme ready: preference=%s resolved=%s (%.1fms)",
        service.preference.value,
        resolved.value,
        timing.total_duration * 1000.0,
    )
    return ctx
