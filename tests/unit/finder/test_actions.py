"""Tests for output actions."""

import io
import os
from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from treefind.core.reporting import Reporter
from treefind.finder.actions import ActionExecutor
from treefind.finder.criteria import ListAction, NameGlob, PrintAction
from treefind.finder.listing import LINK_ERROR_MARKER
from treefind.finder.metadata import stat_entry


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def executor(out: io.StringIO, principals: object, reporter: Reporter) -> ActionExecutor:
    return ActionExecutor(out, principals, reporter)  # type: ignore[arg-type]


class TestPrint:
    """Tests for the print action."""

    def test_prints_path(self, executor: ActionExecutor, out: io.StringIO, tree: Path) -> None:
        executor.run(PrintAction(), stat_entry(str(tree / "a.txt")))
        assert out.getvalue() == f"{tree}/a.txt\n"

    def test_write_failure_is_reported(
        self, principals: object, reporter: Reporter, err_buffer: io.StringIO, tree: Path
    ) -> None:
        """A failing stream is reported and does not raise."""
        stream = MagicMock()
        stream.write.side_effect = BrokenPipeError(32, "Broken pipe")
        executor = ActionExecutor(stream, principals, reporter)  # type: ignore[arg-type]

        executor.print_path(stat_entry(str(tree)))

        assert "treefind: writing to stdout failed!" in err_buffer.getvalue()


class TestList:
    """Tests for the listing action."""

    def test_lists_with_names(
        self, executor: ActionExecutor, out: io.StringIO, tree: Path
    ) -> None:
        """Known owner and group are shown by name."""
        entry = stat_entry(str(tree / "a.txt"))
        executor.run(ListAction(), entry)

        fields = out.getvalue().split()
        assert fields[0] == str(entry.inode)
        assert fields[1] == str(entry.blocks // 2)
        assert fields[2].startswith("-")
        assert fields[4] in ("tester", "root")
        assert fields[5] in ("testers", "root")
        assert fields[6] == "6"
        assert fields[-1] == f"{tree}/a.txt"

    def test_unknown_owner_falls_back_to_ids(
        self,
        out: io.StringIO,
        reporter: Reporter,
        tree: Path,
        make_principals: Callable[..., object],
    ) -> None:
        """Owner and group without names are shown numerically."""
        executor = ActionExecutor(out, make_principals(), reporter)  # type: ignore[arg-type]
        executor.list_entry(stat_entry(str(tree / "a.txt")))

        fields = out.getvalue().split()
        assert fields[4] == str(os.getuid())
        assert fields[5] == str(os.getgid())

    def test_symlink_target(self, executor: ActionExecutor, out: io.StringIO, tree: Path) -> None:
        """Link targets are appended to the record."""
        link = tree / "link"
        link.symlink_to("a.txt")

        executor.list_entry(stat_entry(str(link)))

        assert out.getvalue().endswith(f"{link} -> a.txt\n")

    def test_unreadable_symlink(
        self,
        executor: ActionExecutor,
        out: io.StringIO,
        err_buffer: io.StringIO,
        tree: Path,
    ) -> None:
        """An unreadable link target is marked and reported."""
        link = tree / "link"
        link.symlink_to("a.txt")
        entry = stat_entry(str(link))

        with patch(
            "treefind.finder.models.os.readlink",
            side_effect=PermissionError(13, "Permission denied"),
        ):
            executor.list_entry(entry)

        assert out.getvalue().endswith(f"{link} -> {LINK_ERROR_MARKER}\n")
        assert f"Error reading link {link} - Permission denied" in err_buffer.getvalue()

    def test_predicate_is_not_an_action(self, executor: ActionExecutor, tree: Path) -> None:
        with pytest.raises(TypeError):
            executor.run(NameGlob("*"), stat_entry(str(tree)))  # type: ignore[arg-type]
