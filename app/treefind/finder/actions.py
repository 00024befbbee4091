"""Output actions for matched entries.

Results go to the primary output stream verbatim, one line per action.
Failures while writing, and unreadable link targets, are reported as
diagnostics and never stop the traversal.
"""

import logging
from typing import TextIO

from treefind.core.reporting import Reporter
from treefind.finder.criteria import Action, ListAction, PrintAction
from treefind.finder.listing import format_record
from treefind.finder.models import Entry, EntryKind
from treefind.finder.principals import PrincipalLookup

logger = logging.getLogger(__name__)


class ActionExecutor:
    """Performs print and listing actions on entries.

    Args:
        stream: Primary output stream.
        principals: Resolver for owner and group names in listings.
        reporter: Diagnostic sink.
    """

    def __init__(self, stream: TextIO, principals: PrincipalLookup, reporter: Reporter) -> None:
        self._stream = stream
        self._principals = principals
        self._reporter = reporter

    def run(self, action: Action, entry: Entry) -> None:
        """Execute an action criterion for an entry."""
        if isinstance(action, PrintAction):
            self.print_path(entry)
        elif isinstance(action, ListAction):
            self.list_entry(entry)
        else:
            msg = f"Not an action: {action!r}"
            raise TypeError(msg)

    def print_path(self, entry: Entry) -> None:
        """Write the entry path on its own line."""
        self._write(f"{entry.path}\n")

    def list_entry(self, entry: Entry) -> None:
        """Write a detailed listing record for the entry.

        Owner and group fall back to their numeric ids when no name is
        known. The target of a symbolic link is read only here.
        """
        owner = self._principals.user_name(entry.uid)
        group = self._principals.group_name(entry.gid)

        link_target: str | None = None
        link_error = False
        if entry.kind is EntryKind.SYMLINK:
            try:
                link_target = entry.read_link_target()
            except OSError as e:
                link_error = True
                self._reporter.path_error("Error reading link", entry.path, e)

        record = format_record(
            entry,
            owner if owner is not None else str(entry.uid),
            group if group is not None else str(entry.gid),
            link_target=link_target,
            link_error=link_error,
        )
        self._write(f"{record}\n")

    def _write(self, text: str) -> None:
        try:
            self._stream.write(text)
        except OSError as e:
            logger.debug("write failed: %s", e)
            self._reporter.write_failed()
