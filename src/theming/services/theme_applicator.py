"""Theme Applicator.

Pushes a resolved theme onto the render root through a ``RenderSink``:

 - dark  -> add the marker (default ``"dark"``), style hint ``"dark"``
 - light -> remove the marker, style hint ``"light"``
 - optionally the CSS custom properties from ``theming.design.palette``

The sink is obtained from a provider callable on every call because the
render root may not exist yet (server render, before the root widget is
built). A missing sink makes ``apply`` a no-op; a sink that raises is
logged and reported, and ``apply`` still returns normally.

Repeated calls with the value already on the sink skip the mutations.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, runtime_checkable

from theming.design.palette import theme_properties
from theming.models import ResolvedTheme, ThemeErrorKind
from .diagnostics import ErrorCallback
from .logging_service import fault_extra

__all__ = ["RenderSink", "SinkProvider", "ThemeApplicator", "DEFAULT_MARKER"]

_logger = logging.getLogger(__name__)

DEFAULT_MARKER = "dark"


@runtime_checkable
class RenderSink(Protocol):  # pragma: no cover - structural protocol
    def add_marker(self, name: str) -> None: ...

    def remove_marker(self, name: str) -> None: ...

    def set_style_hint(self, value: str) -> None: ...

    def set_property(self, name: str, value: str) -> None: ...


SinkProvider = Callable[[], Optional[RenderSink]]


class ThemeApplicator:
    def __init__(
        self,
        sink_provider: SinkProvider,
        *,
        marker: str = DEFAULT_MARKER,
        apply_custom_properties: bool = False,
        on_error: Optional[ErrorCallback] = None,
    ) -> None:
        self._sink_provider = sink_provider
        self.marker = marker
        self.apply_custom_properties = apply_custom_properties
        self._on_error = on_error
        self._applied: Optional[tuple[int, ResolvedTheme]] = None

    @property
    def last_applied(self) -> Optional[ResolvedTheme]:
        return self._applied[1] if self._applied else None

    def _report(self, kind: ThemeErrorKind, exc: Optional[BaseException]) -> None:
        if self._on_error is None:
            return
        try:
            self._on_error(kind, exc)
        except Exception:  # noqa: BLE001
            _logger.exception("Theme error callback failed")

    def _target(self) -> Optional[RenderSink]:
        try:
            return self._sink_provider()
        except Exception as exc:  # noqa: BLE001 - provider probing a half-built root
            _logger.debug("Render target lookup failed: %s", exc)
            return None

    def apply(self, resolved: ResolvedTheme) -> bool:
        """Apply ``resolved``; return True when the sink now reflects it."""
        resolved = ResolvedTheme(resolved)
        sink = self._target()
        if sink is None:
            _logger.debug(
                "No render target; skipping apply of %s", resolved.value,
                extra=fault_extra(ThemeErrorKind.RENDER_TARGET_UNAVAILABLE),
            )
            self._report(ThemeErrorKind.RENDER_TARGET_UNAVAILABLE, None)
            return False
        # Keyed on sink identity so a replaced root gets a full apply.
        if self._applied == (id(sink), resolved):
            return True
        try:
            if resolved == ResolvedTheme.DARK:
                sink.add_marker(self.marker)
            else:
                sink.remove_marker(self.marker)
            sink.set_style_hint(resolved.value)
            if self.apply_custom_properties:
                for name, value in theme_properties(resolved).items():
                    sink.set_property(name, value)
        except Exception as exc:  # noqa: BLE001 - degraded but non-fatal
            _logger.warning(
                "Failed to apply %s theme to render target: %s",
                resolved.value,
                exc,
                extra=fault_extra(ThemeErrorKind.RENDER_MUTATION_FAILED),
            )
            self._report(ThemeErrorKind.RENDER_MUTATION_FAILED, exc)
            self._applied = None
            return False
        self._applied = (id(sink), resolved)
        return True

    def reset(self) -> None:
        """Forget the last applied value so the next ``apply`` re-writes the sink."""
        self._applied = None
