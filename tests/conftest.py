"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import io
import os
from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console
from treefind.core.reporting import Reporter


class FakePrincipals:
    """In-memory principal resolver for tests."""

    def __init__(
        self,
        users: dict[str, int] | None = None,
        groups: dict[str, int] | None = None,
    ) -> None:
        self._users = users or {}
        self._groups = groups or {}

    def uid_for_name(self, name: str) -> int | None:
        return self._users.get(name)

    def user_name(self, uid: int) -> str | None:
        for name, known in self._users.items():
            if known == uid:
                return name
        return None

    def group_name(self, gid: int) -> str | None:
        for name, known in self._groups.items():
            if known == gid:
                return name
        return None


@pytest.fixture
def make_principals() -> Callable[..., FakePrincipals]:
    """Factory for fake principal resolvers."""
    return FakePrincipals


@pytest.fixture
def principals() -> FakePrincipals:
    """Resolver knowing the current user and group plus ``root``."""
    return FakePrincipals(
        users={"root": 0, "tester": os.getuid()},
        groups={"root": 0, "testers": os.getgid()},
    )


@pytest.fixture
def err_buffer() -> io.StringIO:
    """Buffer receiving diagnostics."""
    return io.StringIO()


@pytest.fixture
def reporter(err_buffer: io.StringIO) -> Reporter:
    """Reporter writing plain text into ``err_buffer``."""
    console = Console(file=err_buffer, color_system=None, width=200)
    return Reporter("treefind", console=console)


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Small tree: ``t/a.txt``, ``t/sub/`` and ``t/sub/b.txt``."""
    root = tmp_path / "t"
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_text("alpha\n")
    (root / "sub" / "b.txt").write_text("beta\n")
    return root
