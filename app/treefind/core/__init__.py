"""Core infrastructure for treefind: paths, settings, theme and reporting."""
