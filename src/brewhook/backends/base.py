"""Backend protocol for the system package manager."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from brewhook.core.models import PackageKind


class SystemBackend(Protocol):
    """Protocol for system package manager backends.

    Query methods raise ``BrewError`` subclasses on failure. Methods that
    change the system return the command's exit status.
    """

    async def list_installed(self, kind: PackageKind) -> list[str]:
        """List names of installed packages of the given kind."""
        ...

    async def install(self, name: str, options: Sequence[str], kind: PackageKind) -> int:
        """Install a package, passing options through verbatim."""
        ...

    async def info(self, name: str, kind: PackageKind) -> Any:
        """Get machine-readable metadata for a single package."""
        ...

    async def tap(self, name: str) -> int:
        ...

    async def untap(self, name: str) -> int:
        ...

    async def update(self) -> int:
        ...

    async def upgrade(self) -> int:
        ...

    async def cleanup(self) -> int:
        ...

    async def list_taps(self) -> list[str]:
        """List currently tapped repositories."""
        ...

    async def run(self, command: str, args: Sequence[str]) -> int:
        """Run an arbitrary backend subcommand."""
        ...
