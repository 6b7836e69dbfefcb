"""Repository of Homebrew operations backed by the installed-state cache."""

from __future__ import annotations

import time
from typing import Awaitable, Callable, Sequence

from rich.console import Console

from brewhook.backends.base import SystemBackend
from brewhook.core.cache import InstalledCache
from brewhook.core.errors import BrewError
from brewhook.core.logging import get_logger
from brewhook.core.models import (
    CommandResult,
    InstallOutcome,
    InstallResult,
    PackageKind,
    PackageRecord,
    SystemSnapshot,
    TapResult,
)
from brewhook.providers import brew_cask, brew_formula

log = get_logger(__name__)
console = Console(stderr=True)


class Repository:
    """Homebrew operations.

    Every backend failure is logged and reported through the returned
    result; nothing here raises on a failed brew command.
    """

    def __init__(self, backend: SystemBackend, cache: InstalledCache) -> None:
        self.backend = backend
        self.cache = cache

    async def _status(self, command: str, call: Callable[[], Awaitable[int]]) -> int | None:
        try:
            return await call()
        except BrewError as e:
            log.error("brew_invocation_failed", command=command, error=str(e))
            return None

    async def get_details(self, name: str, kind: PackageKind) -> PackageRecord:
        """Get a package record, using the cache for the installed flag.

        Args:
            name: Name of the package.
            kind: Kind of the package (formula or cask).

        Returns:
            A PackageRecord; degraded if metadata could not be obtained.
        """
        installed = self.cache.contains(kind, name)
        if kind is PackageKind.FORMULA:
            return await brew_formula.info(self.backend, name, installed)
        return await brew_cask.info(self.backend, name, installed)

    async def install(
        self, name: str, kind: PackageKind, options: Sequence[str] = ()
    ) -> InstallResult:
        """Install a formula or cask unless it is already known to be installed.

        Args:
            name: Name of the formula or cask.
            kind: Kind of the package.
            options: Flags passed through verbatim to ``brew install``.

        Returns:
            The install outcome together with the package record.
        """
        if not name:
            log.warning("install_skipped", reason="empty_name", kind=kind.value)
            return InstallResult(
                record=PackageRecord.unresolved(name, kind, installed=False),
                outcome=InstallOutcome.FAILED,
            )

        console.print(f"  Installing {kind.value}: {name}")
        if self.cache.contains(kind, name):
            console.print(f"  ✓ Already installed: {name}", style="green")
            log.info("install_skipped", package=name, kind=kind.value, reason="installed")
            record = await self.get_details(name, kind)
            return InstallResult(record=record, outcome=InstallOutcome.ALREADY_INSTALLED)

        start = time.perf_counter()
        log.info("install_start", package=name, kind=kind.value, options=list(options))
        code = await self._status(
            f"install {name}", lambda: self.backend.install(name, options, kind)
        )

        if code == 0:
            self.cache.add(kind, name)
            outcome = InstallOutcome.INSTALLED
        else:
            console.print(f"  ✗ Failed to install {kind.value}: {name}", style="bold red")
            outcome = InstallOutcome.FAILED

        duration_ms = int((time.perf_counter() - start) * 1000)
        log.info(
            "install_complete",
            package=name,
            kind=kind.value,
            outcome=outcome.value,
            returncode=code,
            duration_ms=duration_ms
        )

        record = await self.get_details(name, kind)
        return InstallResult(record=record, outcome=outcome, returncode=code)

    async def install_formula(self, name: str, options: Sequence[str] = ()) -> InstallResult:
        return await self.install(name, PackageKind.FORMULA, options)

    async def install_cask(self, name: str, options: Sequence[str] = ()) -> InstallResult:
        return await self.install(name, PackageKind.CASK, options)

    async def add_tap(self, tap: str | None) -> TapResult:
        if not tap:
            log.warning("tap_skipped", reason="missing_name")
            return TapResult(tap="", action="tap", success=False)

        console.print(f"  Adding tap: {tap}")
        code = await self._status(f"tap {tap}", lambda: self.backend.tap(tap))
        log.info("tap_complete", package=tap, returncode=code)
        return TapResult(tap=tap, action="tap", success=code == 0)

    async def remove_tap(self, tap: str | None) -> TapResult:
        if not tap:
            log.warning("untap_skipped", reason="missing_name")
            return TapResult(tap="", action="untap", success=False)

        console.print(f"  Removing tap: {tap}")
        code = await self._status(f"untap {tap}", lambda: self.backend.untap(tap))
        log.info("untap_complete", package=tap, returncode=code)
        return TapResult(tap=tap, action="untap", success=code == 0)

    async def update(self) -> CommandResult:
        console.print("  Updating Homebrew...")
        code = await self._status("update", self.backend.update)
        return CommandResult(command="update", success=code == 0)

    async def upgrade(self) -> CommandResult:
        console.print("  Upgrading all packages...")
        code = await self._status("upgrade", self.backend.upgrade)
        return CommandResult(command="upgrade", success=code == 0)

    async def cleanup(self) -> CommandResult:
        console.print("  Cleaning up old versions...")
        code = await self._status("cleanup", self.backend.cleanup)
        return CommandResult(command="cleanup", success=code == 0)

    async def passthrough(self, command: str, args: Sequence[str] = ()) -> CommandResult:
        """Run any other brew subcommand as given."""
        args = tuple(args)
        if not command:
            log.warning("passthrough_skipped", reason="empty_command", args=list(args))
            return CommandResult(command="", args=args, success=False)

        console.print(f"  Executing: brew {' '.join((command, *args))}")
        code = await self._status(command, lambda: self.backend.run(command, args))
        return CommandResult(command=command, args=args, success=code == 0)

    async def export_snapshot(self) -> SystemSnapshot:
        """Describe every cached formula and cask, plus the current taps.

        One info query per installed package; meant for explicit,
        infrequent use.
        """
        start = time.perf_counter()
        console.print("Extracting Homebrew state...")
        log.info("snapshot_start")

        formulas = [await self.get_details(n, PackageKind.FORMULA) for n in self.cache.formulas]
        casks = [await self.get_details(n, PackageKind.CASK) for n in self.cache.casks]

        try:
            taps = await self.backend.list_taps()
        except BrewError as e:
            log.warning("tap_list_failed", error=str(e))
            taps = []

        duration_ms = int((time.perf_counter() - start) * 1000)
        log.info(
            "snapshot_complete",
            formulas=len(formulas),
            casks=len(casks),
            taps=len(taps),
            duration_ms=duration_ms
        )

        return SystemSnapshot(formulas=tuple(formulas), casks=tuple(casks), taps=tuple(taps))
