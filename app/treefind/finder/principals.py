"""User and group name resolution.

Wraps the system account databases (``pwd``/``grp``) behind a small
interface so the rest of the finder can be exercised with a fake.
Lookups are cached for the lifetime of the resolver, which is one run.
"""

import grp
import pwd
from typing import Protocol


class PrincipalLookup(Protocol):
    """Contract for resolving owner and group ids to names and back."""

    def uid_for_name(self, name: str) -> int | None:
        """Return the uid of a user name, or None if there is no such user."""
        ...

    def user_name(self, uid: int) -> str | None:
        """Return the user name of a uid, or None if it has none."""
        ...

    def group_name(self, gid: int) -> str | None:
        """Return the group name of a gid, or None if it has none."""
        ...


class SystemPrincipals:
    """Resolves principals through the system account databases."""

    def __init__(self) -> None:
        self._uids: dict[str, int | None] = {}
        self._users: dict[int, str | None] = {}
        self._groups: dict[int, str | None] = {}

    def uid_for_name(self, name: str) -> int | None:
        if name not in self._uids:
            try:
                self._uids[name] = pwd.getpwnam(name).pw_uid
            except KeyError:
                self._uids[name] = None
        return self._uids[name]

    def user_name(self, uid: int) -> str | None:
        if uid not in self._users:
            try:
                self._users[uid] = pwd.getpwuid(uid).pw_name
            except KeyError:
                self._users[uid] = None
        return self._users[uid]

    def group_name(self, gid: int) -> str | None:
        if gid not in self._groups:
            try:
                self._groups[gid] = grp.getgrgid(gid).gr_name
            except KeyError:
                self._groups[gid] = None
        return self._groups[gid]


def is_numeric_id(text: str) -> bool:
    """Check if text is a plain decimal id (ASCII digits only, non-empty)."""
    return text.isascii() and text.isdigit()
