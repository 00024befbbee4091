"""Search criteria and their command-line parser.

A search is configured by an ordered tuple of criteria. Each criterion is
one of a closed set of small immutable records: predicates that test an
entry, and actions that produce output. The tuple is parsed once before
the traversal starts and is never modified afterwards.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from treefind.finder.models import EntryKind
from treefind.finder.principals import PrincipalLookup, is_numeric_id

OPTION_USER = "-user"
OPTION_NAME = "-name"
OPTION_PATH = "-path"
OPTION_TYPE = "-type"
OPTION_NOUSER = "-nouser"
OPTION_PRINT = "-print"
OPTION_LS = "-ls"

# Options that consume the following token as their argument
VALUE_OPTIONS: tuple[str, ...] = (OPTION_USER, OPTION_NAME, OPTION_PATH, OPTION_TYPE)

# Letters accepted by -type, in usage order
TYPE_LETTERS = "bcdpfls"


# =============================================================================
# Criteria
# =============================================================================


@dataclass(frozen=True, slots=True)
class OwnerEquals:
    """Entry is owned by a given user.

    Attributes:
        argument: User name or numeric id as given on the command line.
        uid: Owner id the argument resolved to.
    """

    argument: str
    uid: int


@dataclass(frozen=True, slots=True)
class NameGlob:
    """Entry basename matches a shell glob."""

    pattern: str


@dataclass(frozen=True, slots=True)
class PathGlob:
    """Entry path matches a shell glob whose wildcards stop at ``/``."""

    pattern: str


@dataclass(frozen=True, slots=True)
class TypeEquals:
    """Entry is of a given kind."""

    kind: EntryKind


@dataclass(frozen=True, slots=True)
class OwnerUnknown:
    """Entry owner id has no user name."""


@dataclass(frozen=True, slots=True)
class PrintAction:
    """Write the entry path on its own line."""


@dataclass(frozen=True, slots=True)
class ListAction:
    """Write a detailed listing record for the entry."""


Predicate = OwnerEquals | NameGlob | PathGlob | TypeEquals | OwnerUnknown
Action = PrintAction | ListAction
Criterion = Predicate | Action


def is_action(criterion: Criterion) -> bool:
    """Check if a criterion is an action rather than a predicate."""
    return isinstance(criterion, PrintAction | ListAction)


def has_action(criteria: Sequence[Criterion]) -> bool:
    """Check if any criterion in the list is an action."""
    return any(is_action(c) for c in criteria)


# =============================================================================
# Errors
# =============================================================================


class CriteriaError(Exception):
    """Base exception for invalid search criteria.

    Attributes:
        show_usage: Whether the usage text should follow the message.
    """

    show_usage = True


class MissingArgumentError(CriteriaError):
    """Raised when an option that needs an argument is the last token."""

    def __init__(self, option: str) -> None:
        super().__init__(f"Option {option} needs an argument.")
        self.option = option


class InvalidTypeError(CriteriaError):
    """Raised when -type is given a letter outside the accepted set."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Option {OPTION_TYPE} needs an argument of [{TYPE_LETTERS}].")
        self.value = value


class UnknownUserError(CriteriaError):
    """Raised when -user names neither a known user nor a numeric id."""

    show_usage = False

    def __init__(self, user: str) -> None:
        super().__init__(f"User not found: {user}")
        self.user = user


class UnknownParameterError(CriteriaError):
    """Raised for a token that is not a known option."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Unknown parameter given: {token} .")
        self.token = token


# =============================================================================
# Parser
# =============================================================================


def _resolve_owner(argument: str, principals: PrincipalLookup) -> int:
    """Resolve a -user argument to a uid.

    A known user name wins over a numeric reading of the same text.

    Raises:
        UnknownUserError: If the argument is neither a user nor numeric.
    """
    uid = principals.uid_for_name(argument)
    if uid is not None:
        return uid
    if is_numeric_id(argument):
        return int(argument)
    raise UnknownUserError(argument)


def _parse_valued(option: str, value: str, principals: PrincipalLookup) -> Criterion:
    if option == OPTION_TYPE:
        if len(value) != 1 or value not in TYPE_LETTERS:
            raise InvalidTypeError(value)
        return TypeEquals(EntryKind(value))
    if option == OPTION_USER:
        return OwnerEquals(argument=value, uid=_resolve_owner(value, principals))
    if option == OPTION_NAME:
        return NameGlob(value)
    return PathGlob(value)


_FLAG_OPTIONS: dict[str, Criterion] = {
    OPTION_NOUSER: OwnerUnknown(),
    OPTION_PRINT: PrintAction(),
    OPTION_LS: ListAction(),
}


def parse_criteria(args: Sequence[str], principals: PrincipalLookup) -> tuple[Criterion, ...]:
    """Parse the tokens following the root path into criteria.

    Tokens are read left to right and the resulting criteria keep that
    order, which decides evaluation order later on.

    Args:
        args: Command-line tokens after the root path.
        principals: Resolver used to validate and resolve -user arguments.

    Returns:
        Ordered tuple of criteria (empty if no tokens were given).

    Raises:
        MissingArgumentError: If a value option has no argument.
        InvalidTypeError: If -type is not given one of ``bcdpfls``.
        UnknownUserError: If -user cannot be resolved.
        UnknownParameterError: If a token is not a known option.
    """
    criteria: list[Criterion] = []
    i = 0
    while i < len(args):
        token = args[i]
        if token in VALUE_OPTIONS:
            if i + 1 == len(args):
                raise MissingArgumentError(token)
            criteria.append(_parse_valued(token, args[i + 1], principals))
            i += 2
            continue

        flag = _FLAG_OPTIONS.get(token)
        if flag is None:
            raise UnknownParameterError(token)
        criteria.append(flag)
        i += 1

    return tuple(criteria)
