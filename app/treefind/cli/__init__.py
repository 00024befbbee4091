"""CLI package for treefind.

This package contains the Typer application.
"""

from treefind.cli.main import app

__all__ = ["app"]
