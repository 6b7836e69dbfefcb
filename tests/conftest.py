"""Shared pytest fixtures for brewhook tests."""

from __future__ import annotations

import os
import tempfile

# Keep log files out of the home directory.
os.environ.setdefault("BREWHOOK_LOG_DIR", tempfile.mkdtemp(prefix="brewhook-logs-"))

import asyncio
from pathlib import Path
from typing import Any, Callable, Sequence

import pytest

from brewhook.core.cache import InstalledCache
from brewhook.core.errors import BrewCommandError
from brewhook.core.hook import BrewHook
from brewhook.core.models import PackageKind
from brewhook.core.repo import Repository


# ============================================================================
# Fake backend
# ============================================================================

class FakeBackend:
    """Records every call and answers from canned data."""

    def __init__(
        self,
        formulas: Sequence[str] = (),
        casks: Sequence[str] = (),
        taps: Sequence[str] = (),
        info: dict[str, Any] | None = None,
        install_codes: dict[str, int] | None = None,
        command_codes: dict[str, int] | None = None,
        list_error: bool = False,
    ) -> None:
        self.formulas = list(formulas)
        self.casks = list(casks)
        self.taps = list(taps)
        self.info_data = info or {}
        self.install_codes = install_codes or {}
        self.command_codes = command_codes or {}
        self.list_error = list_error
        self.calls: list[tuple] = []

    def count(self, operation: str) -> int:
        return sum(1 for call in self.calls if call[0] == operation)

    def ops(self, *operations: str) -> list[tuple]:
        return [call for call in self.calls if call[0] in operations]

    async def list_installed(self, kind: PackageKind) -> list[str]:
        self.calls.append(("list", kind.value))
        if self.list_error:
            raise BrewCommandError(command="brew list", returncode=1, error="not set up")
        return list(self.formulas if kind is PackageKind.FORMULA else self.casks)

    async def install(self, name: str, options: Sequence[str], kind: PackageKind) -> int:
        self.calls.append(("install", kind.value, name, tuple(options)))
        return self.install_codes.get(name, 0)

    async def info(self, name: str, kind: PackageKind) -> Any:
        self.calls.append(("info", kind.value, name))
        value = self.info_data.get(name)
        if isinstance(value, Exception):
            raise value
        if value is not None:
            return value
        if kind is PackageKind.CASK:
            return {"formulae": [], "casks": [{"token": name, "version": "1.0"}]}
        return {
            "formulae": [{"name": name, "versions": {"stable": "1.0"}, "dependencies": []}],
            "casks": [],
        }

    async def tap(self, name: str) -> int:
        self.calls.append(("tap", name))
        return self.command_codes.get("tap", 0)

    async def untap(self, name: str) -> int:
        self.calls.append(("untap", name))
        return self.command_codes.get("untap", 0)

    async def update(self) -> int:
        self.calls.append(("update",))
        return self.command_codes.get("update", 0)

    async def upgrade(self) -> int:
        self.calls.append(("upgrade",))
        return self.command_codes.get("upgrade", 0)

    async def cleanup(self) -> int:
        self.calls.append(("cleanup",))
        return self.command_codes.get("cleanup", 0)

    async def list_taps(self) -> list[str]:
        self.calls.append(("list_taps",))
        if "list_taps" in self.command_codes:
            raise BrewCommandError(command="brew tap", returncode=self.command_codes["list_taps"])
        return list(self.taps)

    async def run(self, command: str, args: Sequence[str]) -> int:
        self.calls.append(("run", command, tuple(args)))
        return self.command_codes.get(command, 0)


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def make_backend() -> Callable[..., FakeBackend]:
    """Factory for fake backends."""
    return FakeBackend


@pytest.fixture
def backend() -> FakeBackend:
    """Backend with nothing installed."""
    return FakeBackend()


@pytest.fixture
def make_repo() -> Callable[[FakeBackend], Repository]:
    """Build a repository with a cache loaded from the given backend."""
    def build(fake: FakeBackend) -> Repository:
        cache = asyncio.run(InstalledCache.load(fake))
        return Repository(fake, cache)
    return build


@pytest.fixture
def make_hook() -> Callable[[FakeBackend], BrewHook]:
    """Build a hook around the given backend."""
    def build(fake: FakeBackend) -> BrewHook:
        return asyncio.run(BrewHook.create(backend=fake))
    return build


@pytest.fixture
def make_brew_script(tmp_path) -> Callable[[str], Path]:
    """Write an executable shell script standing in for brew."""
    def build(body: str) -> Path:
        script = tmp_path / "brew"
        script.write_text(f"#!/bin/sh\n{body}\n")
        script.chmod(0o755)
        return script
    return build
