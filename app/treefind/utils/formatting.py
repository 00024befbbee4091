"""Rich console formatting utilities.

Provides consistent formatting for CLI diagnostics using Rich. Search
results are never written through this console; they go to stdout
verbatim.
"""

import sys

from rich.console import Console
from rich.markup import escape

from treefind.core.theme import ThemeColors, get_rich_theme


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stderr.isatty():
        return "truecolor"
    return None


# Shared diagnostics console
err_console = Console(theme=get_rich_theme(), stderr=True, color_system=_detect_color_system())


def apply_theme(colors: ThemeColors) -> None:
    """Switch the diagnostics console to the given colors."""
    err_console.push_theme(get_rich_theme(colors))


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")
