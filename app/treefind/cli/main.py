"""Main CLI application entry point.

Defines the Typer application. The command line is::

    treefind [--config PATH] [--verbose] <root> [criteria...]

Options are only recognised before the root path. Every token after the
root is handed to the criteria parser as is, so find-style options such
as ``-name`` or ``-path`` never reach the option parser.
"""

import io
import locale
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from treefind import __version__
from treefind.core.paths import APP_NAME
from treefind.core.reporting import Reporter
from treefind.core.settings import load_settings
from treefind.finder.criteria import (
    OPTION_LS,
    OPTION_NAME,
    OPTION_NOUSER,
    OPTION_PATH,
    OPTION_PRINT,
    OPTION_TYPE,
    OPTION_USER,
    CriteriaError,
    parse_criteria,
)
from treefind.finder.principals import SystemPrincipals
from treefind.finder.traversal import RootStatError, run_search
from treefind.utils.formatting import apply_theme, err_console

logger = logging.getLogger(__name__)

app = typer.Typer(
    name=APP_NAME,
    help="Search a directory tree for entries matching all given criteria.",
    add_completion=False,
    rich_markup_mode=None,
)


def usage_lines(progname: str) -> list[str]:
    """Build the usage synopsis shown for configuration errors."""
    return [
        f"Usage: {progname} <FILE/DIRECTORY> [PARAMETER]",
        "       PARAMETER may be any combination of the following:",
        f"       {OPTION_USER:<8} <username/uid> match given user's files",
        f"       {OPTION_NAME:<8} <expression> match filenames that match given expression",
        f"       {OPTION_PATH:<8} <expression> match filenames that match given path and file name",
        f"       {OPTION_TYPE:<8} <b/c/d/p/f/l/s> match files of given type",
        f"       {OPTION_NOUSER:<8} match files owned by a unknown uid according to /etc/passwd",
        f"       {OPTION_LS:<8} prints detailed information about matching files",
        f"       {OPTION_PRINT:<8} prints filename explicitly "
        f'(this is the default behaviour unless "{OPTION_LS}" specified)',
    ]


def _exit_with_usage(progname: str) -> typer.Exit:
    for line in usage_lines(progname):
        err_console.print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)
    return typer.Exit(code=1)


def _configure_logging(level: str) -> None:
    """Route package log records to the stderr console."""
    package_logger = logging.getLogger(APP_NAME)
    package_logger.handlers.clear()
    package_logger.addHandler(RichHandler(console=err_console, show_time=False, show_path=False))
    package_logger.setLevel(level)
    package_logger.propagate = False


def _configure_locale() -> None:
    """Use the environment locale so month names in listings are localized."""
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error as e:
        logger.warning("Cannot set locale from environment: %s", e)


def _prepare_stdout() -> None:
    """Let undecodable file names pass through stdout byte for byte."""
    if isinstance(sys.stdout, io.TextIOWrapper):
        sys.stdout.reconfigure(errors="surrogateescape")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"{APP_NAME} version {__version__}")
        raise typer.Exit()


@app.command(
    context_settings={
        "help_option_names": ["--help"],
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
)
def main(
    ctx: typer.Context,
    root: Annotated[
        str | None,
        typer.Argument(help="File or directory to start from.", show_default=False),
    ] = None,
    criteria: Annotated[
        list[str] | None,
        typer.Argument(
            help="Criteria: -user <name/uid>, -name <glob>, -path <glob>, "
            "-type <bcdpfls>, -nouser, -print, -ls.",
            show_default=False,
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", help="Settings file to use instead of the default."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Search a directory tree for entries matching all given criteria.

    Criteria are evaluated left to right for every entry. Without -print
    or -ls, matching entries are printed.
    """
    progname = ctx.find_root().info_name or APP_NAME
    reporter = Reporter(progname)

    settings = load_settings(config)
    apply_theme(settings.theme)
    _configure_logging("DEBUG" if verbose else settings.find.log_level)
    _configure_locale()

    if root is None:
        raise _exit_with_usage(progname)

    principals = SystemPrincipals()
    try:
        parsed = parse_criteria(criteria or [], principals)
    except CriteriaError as e:
        reporter.error(str(e))
        if e.show_usage:
            err_console.print()
            raise _exit_with_usage(progname) from None
        raise typer.Exit(code=1) from None

    logger.debug("Searching %s with %d criteria", root, len(parsed))
    _prepare_stdout()

    try:
        run_search(
            root,
            parsed,
            stream=sys.stdout,
            principals=principals,
            reporter=reporter,
            sort_children=settings.find.sort_children,
        )
    except RootStatError as e:
        reporter.path_error("Could not stat", e.root, e.error)
        raise typer.Exit(code=1) from None
    except MemoryError:
        reporter.error("Memory allocation failed, exiting.")
        raise typer.Exit(code=1) from None

    logger.debug("Search of %s finished with %d diagnostic(s)", root, reporter.count)


if __name__ == "__main__":
    app()
