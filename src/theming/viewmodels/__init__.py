"""View models backing the theming widgets."""
