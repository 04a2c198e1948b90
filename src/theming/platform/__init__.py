"""Platform bindings for the theming services.

Modules here import PyQt6 lazily-guarded so the rest of the package stays
importable (and testable) without a Qt installation.
"""
