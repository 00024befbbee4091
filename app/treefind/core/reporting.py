"""Error reporting for traversal and configuration diagnostics.

Every diagnostic is a single line on stderr prefixed with the program name,
e.g. ``treefind: Could not stat /tmp/x - No such file or directory``.
"""

from rich.console import Console
from rich.markup import escape

from treefind.utils.formatting import err_console


def describe_os_error(exc: OSError) -> str:
    """Return the OS error text for an exception (``strerror`` style)."""
    return exc.strerror or str(exc)


class Reporter:
    """Writes program-name prefixed diagnostics to the error console.

    Args:
        progname: Name used as the diagnostic prefix.
        console: Console to write to. Defaults to the shared stderr console.
    """

    def __init__(self, progname: str, console: Console | None = None) -> None:
        self._progname = progname
        self._console = console if console is not None else err_console
        self._count = 0

    @property
    def count(self) -> int:
        """Number of diagnostics reported so far."""
        return self._count

    def error(self, message: str) -> None:
        """Report a diagnostic line.

        Args:
            message: Text after the program-name prefix.
        """
        self._count += 1
        self._console.print(
            f"[error]{escape(self._progname)}:[/] {escape(message)}",
            soft_wrap=True,
            highlight=False,
            emoji=False,
        )

    def path_error(self, action: str, path: str, exc: OSError) -> None:
        """Report an OS failure for a path.

        Args:
            action: What was attempted, e.g. "Could not stat".
            path: Path the failure refers to.
            exc: The OS error raised.
        """
        self.error(f"{action} {path} - {describe_os_error(exc)}")

    def write_failed(self) -> None:
        """Report a failed write to the primary output stream."""
        self.error("writing to stdout failed!")
