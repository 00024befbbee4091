"""Filesystem entry models for tree scanning.

This module defines the classification of filesystem objects and the
immutable metadata snapshot taken for every visited path.
"""

import os
import stat
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class EntryKind(str, Enum):
    """Type of a filesystem entry, valued by its ``-type`` letter.

    Attributes:
        BLOCK_DEVICE: Block special file.
        CHAR_DEVICE: Character special file.
        DIRECTORY: Directory.
        NAMED_PIPE: FIFO.
        REGULAR_FILE: Regular file.
        SYMLINK: Symbolic link (the link itself, never its target).
        SOCKET: Unix domain socket.
        UNKNOWN: Anything the type bits do not identify.
    """

    BLOCK_DEVICE = "b"
    CHAR_DEVICE = "c"
    DIRECTORY = "d"
    NAMED_PIPE = "p"
    REGULAR_FILE = "f"
    SYMLINK = "l"
    SOCKET = "s"
    UNKNOWN = "u"

    @property
    def listing_letter(self) -> str:
        """Letter used in the first column of a detailed listing.

        Regular files are shown as ``-``; every other kind uses its
        ``-type`` letter.
        """
        if self is EntryKind.REGULAR_FILE:
            return "-"
        return self.value


# Checked in order; the first matching test wins.
_KIND_TESTS: tuple[tuple[EntryKind, Callable[[int], bool]], ...] = (
    (EntryKind.BLOCK_DEVICE, stat.S_ISBLK),
    (EntryKind.CHAR_DEVICE, stat.S_ISCHR),
    (EntryKind.DIRECTORY, stat.S_ISDIR),
    (EntryKind.SYMLINK, stat.S_ISLNK),
    (EntryKind.SOCKET, stat.S_ISSOCK),
    (EntryKind.NAMED_PIPE, stat.S_ISFIFO),
    (EntryKind.REGULAR_FILE, stat.S_ISREG),
)


def classify_mode(mode: int) -> EntryKind:
    """Map raw ``st_mode`` type bits to an EntryKind.

    Args:
        mode: The ``st_mode`` value of a stat result.

    Returns:
        The matching EntryKind, or UNKNOWN.
    """
    for kind, test in _KIND_TESTS:
        if test(mode):
            return kind
    return EntryKind.UNKNOWN


@dataclass(frozen=True, slots=True)
class Entry:
    """Metadata snapshot of one visited path.

    Built once per visit from a single ``lstat`` call and discarded when
    the path has been processed.

    Attributes:
        path: Path exactly as it was built during traversal.
        inode: Inode number.
        size: Size in bytes.
        blocks: Allocated blocks in 512-byte units.
        mode: Full ``st_mode`` (type and permission bits).
        uid: Owner id.
        gid: Group id.
        nlink: Hard link count.
        mtime: Modification time in whole seconds since the epoch.
        kind: Classified entry type.
    """

    path: str
    inode: int
    size: int
    blocks: int
    mode: int
    uid: int
    gid: int
    nlink: int
    mtime: int
    kind: EntryKind

    @classmethod
    def from_stat(cls, path: str, st: os.stat_result) -> "Entry":
        """Build an Entry from a stat result.

        Args:
            path: Path the stat result belongs to.
            st: Result of ``os.lstat(path)``.

        Returns:
            New Entry instance.
        """
        return cls(
            path=path,
            inode=st.st_ino,
            size=st.st_size,
            blocks=getattr(st, "st_blocks", 0),
            mode=st.st_mode,
            uid=st.st_uid,
            gid=st.st_gid,
            nlink=st.st_nlink,
            mtime=st.st_mtime_ns // 1_000_000_000,
            kind=classify_mode(st.st_mode),
        )

    @property
    def is_dir(self) -> bool:
        """Check if this entry is a directory (links to directories are not)."""
        return self.kind is EntryKind.DIRECTORY

    @property
    def name(self) -> str:
        """Final path component, following POSIX ``basename`` rules.

        Trailing slashes are ignored and ``/`` is its own basename.
        """
        stripped = self.path.rstrip("/")
        if not stripped:
            return "/" if self.path else ""
        return stripped.rsplit("/", 1)[-1]

    def read_link_target(self) -> str:
        """Read the target of a symbolic link entry.

        Returns:
            The link target text.

        Raises:
            OSError: If the link cannot be read.
        """
        return os.readlink(self.path)
