"""Tests for entry classification and the Entry snapshot."""

import os
import stat
from pathlib import Path

import pytest
from treefind.finder.models import Entry, EntryKind, classify_mode


def _entry(path: str, kind: EntryKind = EntryKind.REGULAR_FILE) -> Entry:
    return Entry(
        path=path,
        inode=1,
        size=0,
        blocks=0,
        mode=0o100644,
        uid=0,
        gid=0,
        nlink=1,
        mtime=0,
        kind=kind,
    )


class TestEntryKind:
    """Tests for EntryKind enum."""

    def test_values_are_type_letters(self) -> None:
        """Every kind is valued by its -type letter."""
        assert [k.value for k in EntryKind] == ["b", "c", "d", "p", "f", "l", "s", "u"]

    def test_listing_letter_for_regular_file(self) -> None:
        """Regular files are shown as '-' in listings."""
        assert EntryKind.REGULAR_FILE.listing_letter == "-"

    @pytest.mark.parametrize(
        "kind",
        [k for k in EntryKind if k is not EntryKind.REGULAR_FILE],
    )
    def test_listing_letter_for_other_kinds(self, kind: EntryKind) -> None:
        """All other kinds keep their letter in listings."""
        assert kind.listing_letter == kind.value


class TestClassifyMode:
    """Tests for classify_mode."""

    @pytest.mark.parametrize(
        ("type_bits", "expected"),
        [
            (stat.S_IFBLK, EntryKind.BLOCK_DEVICE),
            (stat.S_IFCHR, EntryKind.CHAR_DEVICE),
            (stat.S_IFDIR, EntryKind.DIRECTORY),
            (stat.S_IFLNK, EntryKind.SYMLINK),
            (stat.S_IFSOCK, EntryKind.SOCKET),
            (stat.S_IFIFO, EntryKind.NAMED_PIPE),
            (stat.S_IFREG, EntryKind.REGULAR_FILE),
        ],
    )
    def test_type_bits(self, type_bits: int, expected: EntryKind) -> None:
        """Each file type maps to its kind regardless of permission bits."""
        assert classify_mode(type_bits | 0o4755) is expected

    def test_no_type_bits_is_unknown(self) -> None:
        """A mode without recognised type bits is UNKNOWN."""
        assert classify_mode(0o644) is EntryKind.UNKNOWN


class TestEntry:
    """Tests for the Entry snapshot."""

    def test_from_stat_copies_metadata(self, tmp_path: Path) -> None:
        """from_stat takes every field from the stat result."""
        target = tmp_path / "file.txt"
        target.write_text("hello")
        st = os.lstat(target)

        entry = Entry.from_stat(str(target), st)

        assert entry.path == str(target)
        assert entry.inode == st.st_ino
        assert entry.size == 5
        assert entry.blocks == st.st_blocks
        assert entry.mode == st.st_mode
        assert entry.uid == st.st_uid
        assert entry.gid == st.st_gid
        assert entry.nlink == 1
        assert entry.mtime == st.st_mtime_ns // 1_000_000_000
        assert entry.kind is EntryKind.REGULAR_FILE

    def test_is_dir(self) -> None:
        """Only directory entries report is_dir."""
        assert _entry("/x", EntryKind.DIRECTORY).is_dir is True
        assert _entry("/x", EntryKind.SYMLINK).is_dir is False

    @pytest.mark.parametrize(
        ("path", "name"),
        [
            ("/a/b/x.c", "x.c"),
            ("x.c", "x.c"),
            ("/tmp/t/", "t"),
            ("/tmp/t//", "t"),
            ("/", "/"),
            ("//", "/"),
            ("/tmp//a.txt", "a.txt"),
        ],
    )
    def test_name_follows_basename_rules(self, path: str, name: str) -> None:
        """name ignores trailing slashes and keeps '/' for the root."""
        assert _entry(path).name == name

    def test_entry_is_immutable(self) -> None:
        """Entries cannot be modified after creation."""
        entry = _entry("/x")
        with pytest.raises(AttributeError):
            entry.path = "/y"  # type: ignore[misc]

    def test_read_link_target(self, tmp_path: Path) -> None:
        """read_link_target returns the link text without resolving it."""
        link = tmp_path / "link"
        link.symlink_to("does/not/exist")
        entry = Entry.from_stat(str(link), os.lstat(link))

        assert entry.kind is EntryKind.SYMLINK
        assert entry.read_link_target() == "does/not/exist"

    def test_read_link_target_on_non_link_raises(self, tmp_path: Path) -> None:
        """Reading the target of a non-link raises OSError."""
        target = tmp_path / "plain"
        target.write_text("")
        entry = Entry.from_stat(str(target), os.lstat(target))

        with pytest.raises(OSError):
            entry.read_link_target()
