"""Utility modules for treefind.

This module exports commonly used utility functions.
"""

from treefind.utils.formatting import apply_theme, err_console, print_warning

__all__ = [
    "apply_theme",
    "err_console",
    "print_warning",
]
