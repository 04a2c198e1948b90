"""Qt render target for ``ThemeApplicator``.

Maps the render-sink operations onto dynamic properties of the root
widget so stylesheets can select on them:

 - markers: boolean property per marker (``QWidget[dark="true"]``) plus the
   sorted list in ``themeMarkers``
 - style hint: ``colorScheme`` property (``"light"`` / ``"dark"``)
 - custom properties: ``cssVariables`` mapping

The widget style is re-polished after each mutation so selectors update.
"""

from __future__ import annotations

from typing import Any, Dict, List

__all__ = ["QtRenderTarget"]


class QtRenderTarget:
    def __init__(self, widget: Any) -> None:
        self.widget = widget

    # Introspection ---------------------------------------------------
    def markers(self) -> List[str]:
        return list(self.widget.property("themeMarkers") or [])

    def style_hint(self) -> str | None:
        return self.widget.property("colorScheme")

    def variables(self) -> Dict[str, str]:
        return dict(self.widget.property("cssVariables") or {})

    # RenderSink ------------------------------------------------------
    def add_marker(self, name: str) -> None:
        markers = set(self.markers())
        markers.add(name)
        self.widget.setProperty("themeMarkers", sorted(markers))
        self.widget.setProperty(name, True)
        self._repolish()

    def remove_marker(self, name: str) -> None:
        markers = set(self.markers())
        markers.discard(name)
        self.widget.setProperty("themeMarkers", sorted(markers))
        self.widget.setProperty(name, False)
        self._repolish()

    def set_style_hint(self, value: str) -> None:
        self.widget.setProperty("colorScheme", value)
        self._repolish()

    def set_property(self, name: str, value: str) -> None:
        variables = self.variables()
        variables[name] = value
        self.widget.setProperty("cssVariables", variables)

    def _repolish(self) -> None:
        style = self.widget.style()
        style.unpolish(self.widget)
        style.polish(self.widget)
        self.widget.update()
