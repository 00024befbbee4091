"""Predicate evaluation against entry snapshots.

Globs follow POSIX ``fnmatch(3)``: ``*``, ``?``, bracket expressions with
``!`` or ``^`` negation and ``[:class:]`` names, and backslash escapes.
"""

from wcmatch import fnmatch

from treefind.finder.criteria import (
    NameGlob,
    OwnerEquals,
    OwnerUnknown,
    PathGlob,
    Predicate,
    TypeEquals,
)
from treefind.finder.models import Entry
from treefind.finder.principals import PrincipalLookup

# Case-sensitive, leading dots not special, no brace or extended syntax
GLOB_FLAGS = fnmatch.CASE | fnmatch.DOTMATCH | fnmatch.FORCEUNIX


def match_name(pattern: str, name: str) -> bool:
    """Match a basename against a shell glob.

    Wildcards may match any character and a leading dot is not special.
    Matching is case-sensitive.
    """
    if not pattern:
        return not name
    return fnmatch.fnmatch(name, pattern, flags=GLOB_FLAGS)


def match_path(pattern: str, path: str) -> bool:
    """Match a full path against a shell glob that respects ``/``.

    ``*``, ``?`` and bracket expressions never match a ``/``; every ``/``
    in the path has to be matched by a literal ``/`` in the pattern. The
    pattern and the path are therefore compared component by component.

    Examples:
        >>> match_path("/a/*/x.c", "/a/b/x.c")
        True
        >>> match_path("/a/*", "/a/b/x.c")
        False
    """
    pattern_parts = pattern.split("/")
    path_parts = path.split("/")
    if len(pattern_parts) != len(path_parts):
        return False
    return all(match_name(pat, part) for pat, part in zip(pattern_parts, path_parts, strict=True))


def evaluate(predicate: Predicate, entry: Entry, principals: PrincipalLookup) -> bool:
    """Evaluate one predicate against an entry.

    Args:
        predicate: Predicate criterion to test.
        entry: Metadata snapshot of the visited path.
        principals: Resolver used for owner name lookups.

    Returns:
        True if the entry satisfies the predicate.
    """
    if isinstance(predicate, OwnerEquals):
        return entry.uid == predicate.uid
    if isinstance(predicate, NameGlob):
        return match_name(predicate.pattern, entry.name)
    if isinstance(predicate, PathGlob):
        return match_path(predicate.pattern, entry.path)
    if isinstance(predicate, TypeEquals):
        return entry.kind is predicate.kind
    if isinstance(predicate, OwnerUnknown):
        return principals.user_name(entry.uid) is None
    msg = f"Not a predicate: {predicate!r}"
    raise TypeError(msg)
