"""Metadata access for visited paths.

Paths are stat'ed without following a final symbolic link, so a link is
classified as a link and never as the object it points to.
"""

import logging
import os

from treefind.finder.models import Entry

logger = logging.getLogger(__name__)


def stat_entry(path: str) -> Entry:
    """Take the metadata snapshot for a path.

    Args:
        path: Path to inspect.

    Returns:
        Entry built from a single ``lstat`` call.

    Raises:
        OSError: If the path vanished, is not accessible or the stat
            call failed for any other reason.
    """
    st = os.lstat(path)
    entry = Entry.from_stat(path, st)
    logger.debug("stat %s: kind=%s uid=%d", path, entry.kind.value, entry.uid)
    return entry
