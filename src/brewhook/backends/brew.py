"""Homebrew backend."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from brewhook.core.config import BrewhookENV
from brewhook.core.locator import find_brew
from brewhook.core.models import PackageKind
from brewhook.core.shell import run_interactive, run_json, run_lines


class BrewBackend:
    """Runs brew subcommands against a located executable."""

    def __init__(self, executable: Path | str) -> None:
        self.executable = str(executable)

    @classmethod
    def locate(cls, env: BrewhookENV | None = None) -> BrewBackend:
        """Build a backend for the brew found on this machine.

        Raises:
            BrewNotFoundError: If brew cannot be found.
        """
        return cls(find_brew(env))

    async def list_installed(self, kind: PackageKind) -> list[str]:
        flag = "--cask" if kind is PackageKind.CASK else "--formula"
        return await run_lines(self.executable, "list", flag)

    async def install(self, name: str, options: Sequence[str], kind: PackageKind) -> int:
        if kind is PackageKind.CASK:
            return await run_interactive(self.executable, "install", "--cask", name, *options)
        return await run_interactive(self.executable, "install", name, *options)

    async def info(self, name: str, kind: PackageKind) -> Any:
        if kind is PackageKind.CASK:
            return await run_json(self.executable, "info", "--cask", "--json=v2", name)
        return await run_json(self.executable, "info", "--json=v2", name)

    async def tap(self, name: str) -> int:
        return await run_interactive(self.executable, "tap", name)

    async def untap(self, name: str) -> int:
        return await run_interactive(self.executable, "untap", name)

    async def update(self) -> int:
        return await run_interactive(self.executable, "update")

    async def upgrade(self) -> int:
        return await run_interactive(self.executable, "upgrade")

    async def cleanup(self) -> int:
        return await run_interactive(self.executable, "cleanup")

    async def list_taps(self) -> list[str]:
        return await run_lines(self.executable, "tap")

    async def run(self, command: str, args: Sequence[str]) -> int:
        return await run_interactive(self.executable, command, *args)
