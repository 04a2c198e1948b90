"""Qt widgets built on the theming services (imports PyQt6)."""
