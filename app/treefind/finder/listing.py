"""Detailed listing record formatting.

Renders one fixed-column line per entry in the style of ``find -ls``::

    <inode> <1k-blocks> <mode> <links> <owner> <group> <size> <Mon DD HH:MM> <path>[ -> <target>]

All names passed in here are already resolved; this module only lays
fields out.
"""

import stat
from datetime import datetime

from treefind.finder.models import Entry

LINK_ERROR_MARKER = "ERROR READING LINK"

# (read bit, write bit, execute bit, special bit, special letter) per class
_PERMISSION_CLASSES: tuple[tuple[int, int, int, int, str], ...] = (
    (stat.S_IRUSR, stat.S_IWUSR, stat.S_IXUSR, stat.S_ISUID, "s"),
    (stat.S_IRGRP, stat.S_IWGRP, stat.S_IXGRP, stat.S_ISGID, "s"),
    (stat.S_IROTH, stat.S_IWOTH, stat.S_IXOTH, stat.S_ISVTX, "t"),
)


def format_permissions(mode: int) -> str:
    """Render the nine permission characters of a mode.

    Setuid, setgid and sticky bits replace the matching execute slot with
    ``s``/``s``/``t`` when execute is set and ``S``/``S``/``T`` when it is
    not.

    Args:
        mode: ``st_mode`` value.

    Returns:
        Nine-character string such as ``rwxr-sr-T``.
    """
    chars: list[str] = []
    for read, write, execute, special, letter in _PERMISSION_CLASSES:
        chars.append("r" if mode & read else "-")
        chars.append("w" if mode & write else "-")
        if mode & special:
            chars.append(letter if mode & execute else letter.upper())
        elif mode & execute:
            chars.append("x")
        else:
            chars.append("-")
    return "".join(chars)


def format_mode(entry: Entry) -> str:
    """Render the ten-character type and permission column."""
    return entry.kind.listing_letter + format_permissions(entry.mode)


def format_timestamp(mtime: int) -> str:
    """Render a modification time as ``Mon DD HH:MM`` in local time.

    The day of month is padded with a space instead of a leading zero.
    The month abbreviation follows the process locale. Times outside the
    range the platform can convert are shown as right-aligned seconds.
    """
    try:
        moment = datetime.fromtimestamp(int(mtime))
    except (OverflowError, ValueError, OSError):
        return f"{int(mtime):>12d}"
    day = moment.strftime("%d")
    if day.startswith("0"):
        day = " " + day[1:]
    return f"{moment.strftime('%b')} {day} {moment.strftime('%H:%M')}"


def format_record(
    entry: Entry,
    owner: str,
    group: str,
    link_target: str | None = None,
    link_error: bool = False,
) -> str:
    """Render a complete listing line (without trailing newline).

    Args:
        entry: Entry to describe.
        owner: Owner name, or the numeric uid as text.
        group: Group name, or the numeric gid as text.
        link_target: Target of a symbolic link, appended after ``->``.
        link_error: The entry is a link whose target could not be read.

    Returns:
        Formatted listing line.
    """
    line = (
        f"{entry.inode:6d} {entry.blocks // 2:4d} {format_mode(entry)} {entry.nlink:3d}"
        f" {owner:<8} {group:<8} {entry.size:8d} {format_timestamp(entry.mtime)} {entry.path}"
    )
    if link_error:
        return f"{line} -> {LINK_ERROR_MARKER}"
    if link_target is not None:
        return f"{line} -> {link_target}"
    return line
