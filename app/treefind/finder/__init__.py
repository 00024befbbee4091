"""Directory tree search.

This module provides entry classification, search criteria and their
parser, predicate evaluation, output actions and the traversal engine.
"""

from treefind.finder.criteria import CriteriaError, Criterion, parse_criteria
from treefind.finder.models import Entry, EntryKind
from treefind.finder.principals import PrincipalLookup, SystemPrincipals
from treefind.finder.traversal import RootStatError, TreeWalker, run_search

__all__ = [
    "CriteriaError",
    "Criterion",
    "Entry",
    "EntryKind",
    "PrincipalLookup",
    "RootStatError",
    "SystemPrincipals",
    "TreeWalker",
    "parse_criteria",
    "run_search",
]
