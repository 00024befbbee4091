"""Depth-first traversal of a directory tree.

Walks the tree below a root path in pre-order: every entry goes through
the entry pipeline when it is discovered, and a directory is descended
into right after its own entry has been processed. Siblings are visited
in the order the directory listing returns them, which depends on the
platform and filesystem, unless sorting is requested.

Only the root is required to exist. Any later failure (an entry that
vanished, a directory that cannot be opened or read) is reported and the
walk moves on to the next sibling.
"""

import logging
import os
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import TextIO

from treefind.core.reporting import Reporter
from treefind.finder.actions import ActionExecutor
from treefind.finder.criteria import Criterion
from treefind.finder.metadata import stat_entry
from treefind.finder.models import Entry
from treefind.finder.pipeline import EntryPipeline
from treefind.finder.principals import PrincipalLookup

logger = logging.getLogger(__name__)


class RootStatError(Exception):
    """Raised when the root path itself cannot be stat'ed."""

    def __init__(self, root: str, error: OSError) -> None:
        super().__init__(f"Could not stat {root}")
        self.root = root
        self.error = error


@dataclass(frozen=True, slots=True)
class TraversalContext:
    """Immutable configuration of one traversal.

    Attributes:
        root: Root path exactly as given.
        criteria: Ordered criteria list.
        sort_children: Visit siblings in sorted name order.
    """

    root: str
    criteria: tuple[Criterion, ...]
    sort_children: bool = False


def child_path(directory: str, name: str) -> str:
    """Join a directory path and an entry name.

    The separator is omitted only when the directory is ``/`` itself; any
    other path is used verbatim, trailing slash included.
    """
    if directory == "/":
        return f"/{name}"
    return f"{directory}/{name}"


class TreeWalker:
    """Drives the entry pipeline over a directory tree.

    Args:
        context: Traversal configuration.
        pipeline: Pipeline run once for every discovered entry.
        reporter: Diagnostic sink for per-entry failures.
    """

    def __init__(self, context: TraversalContext, pipeline: EntryPipeline, reporter: Reporter) -> None:
        self._context = context
        self._pipeline = pipeline
        self._reporter = reporter

    def walk(self) -> None:
        """Walk the tree below the root.

        The root entry is processed first. If it is a directory, its
        contents follow depth-first; otherwise the walk ends there.

        Raises:
            RootStatError: If the root cannot be stat'ed.
        """
        root = self._context.root
        try:
            entry = stat_entry(root)
        except OSError as e:
            raise RootStatError(root, e) from e

        self._visit(entry)

    def _visit(self, entry: Entry) -> None:
        self._pipeline.process(entry)
        if entry.is_dir:
            self._walk_directory(entry.path)

    def _visit_child(self, path: str) -> None:
        try:
            entry = stat_entry(path)
        except OSError as e:
            logger.debug("Skipping %s: %s", path, e)
            self._reporter.path_error("Could not stat", path, e)
            return
        self._visit(entry)

    def _walk_directory(self, directory: str) -> None:
        """Visit every entry of a directory, recursing into subdirectories.

        The directory stream stays open while its subdirectories are
        walked and is closed on every way out of this method.
        """
        try:
            stream = os.scandir(directory)
        except OSError as e:
            self._reporter.path_error("Error opening", directory, e)
            return

        logger.debug("Entering %s", directory)
        with stream:
            for name in self._child_names(stream, directory):
                self._visit_child(child_path(directory, name))
        logger.debug("Leaving %s", directory)

    def _child_names(self, stream: Iterator[os.DirEntry[str]], directory: str) -> Iterator[str]:
        """Yield entry names from an open directory stream.

        A read error ends the listing of this directory only. When sorting,
        the names read before the error are still visited.
        """
        collected: list[str] = []
        try:
            for e in stream:
                if self._context.sort_children:
                    collected.append(e.name)
                else:
                    yield e.name
        except OSError as e:
            self._reporter.path_error("Error reading directory entry in", directory, e)
        yield from sorted(collected)


def run_search(
    root: str,
    criteria: Sequence[Criterion],
    *,
    stream: TextIO,
    principals: PrincipalLookup,
    reporter: Reporter,
    sort_children: bool = False,
) -> None:
    """Search a tree and perform the configured actions.

    Args:
        root: Root path to start from.
        criteria: Parsed criteria list.
        stream: Primary output stream for results.
        principals: Resolver for owner and group names.
        reporter: Diagnostic sink.
        sort_children: Visit siblings in sorted name order.

    Raises:
        RootStatError: If the root cannot be stat'ed.
    """
    context = TraversalContext(root=root, criteria=tuple(criteria), sort_children=sort_children)
    executor = ActionExecutor(stream, principals, reporter)
    pipeline = EntryPipeline(context.criteria, executor, principals)
    TreeWalker(context, pipeline, reporter).walk()
