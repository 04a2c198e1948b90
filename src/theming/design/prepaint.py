"""Inline pre-paint script for server-rendered pages.

A page that renders HTML on the server cannot run ``ThemeService`` in the
browser, but it still has to pick the theme before the first paint. The
script produced here is injected at the top of ``<head>`` and performs the
same read store -> read system signal -> resolve -> apply sequence. Any
failure falls back to light, matching ``ThemeService.placeholder_theme``.
"""

from __future__ import annotations

import json

from theming.models import DEFAULT_STORAGE_KEY

__all__ = ["render_prepaint_script", "render_prepaint_tag"]

_SCRIPT_TEMPLATE = """(function() {
  var root = document.documentElement;
  try {
    var stored = null;
    try { stored = window.localStorage.getItem(%(key)s); } catch (e) {}
    var valid = stored === 'light' || stored === 'dark' || stored === 'system';
    var preference = valid ? stored : 'system';
    var systemDark = !!(window.matchMedia &&
      window.matchMedia('(prefers-color-scheme: dark)').matches);
    var active = preference === 'system' ? (systemDark ? 'dark' : 'light') : preference;
    if (active === 'dark') {
      root.classList.add(%(marker)s);
    } else {
      root.classList.remove(%(marker)s);
    }
    root.style.colorScheme = active;
  } catch (e) {
    root.classList.remove(%(marker)s);
    root.style.colorScheme = 'light';
  }
})();"""


def _js_string(value: str) -> str:
    # json.dumps gives a valid JS string literal; "</" is broken up so the
    # value cannot close the surrounding script element.
    return json.dumps(value).replace("</", "<\\/")


def render_prepaint_script(storage_key: str = DEFAULT_STORAGE_KEY, marker: str = "dark") -> str:
    return _SCRIPT_TEMPLATE % {"key": _js_string(storage_key), "marker": _js_string(marker)}


def render_prepaint_tag(storage_key: str = DEFAULT_STORAGE_KEY, marker: str = "dark") -> str:
    return "<script>" + render_prepaint_script(storage_key, marker) + "</script>"
