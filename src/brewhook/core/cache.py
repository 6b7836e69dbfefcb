"""In-memory record of installed formulas and casks."""

from __future__ import annotations

import time

from brewhook.backends.base import SystemBackend
from brewhook.core.errors import BrewError
from brewhook.core.logging import get_logger
from brewhook.core.models import PackageKind, ScanStatus

log = get_logger(__name__)


class InstalledCache:
    """Names of installed formulas and casks.

    Filled once from the backend and extended after each successful
    install. Entries are never removed, and changes made outside this
    process are not noticed.
    """

    def __init__(self) -> None:
        self._names: dict[PackageKind, set[str]] = {
            PackageKind.FORMULA: set(),
            PackageKind.CASK: set(),
        }
        self.status = ScanStatus.PENDING

    @classmethod
    async def load(cls, backend: SystemBackend) -> InstalledCache:
        """Create a cache populated from the backend.

        A failed scan leaves the cache empty; brew may not be set up yet.

        Args:
            backend: Backend to list installed packages from.

        Returns:
            The populated cache.
        """
        cache = cls()
        start = time.perf_counter()
        log.debug("cache_scan_start")

        try:
            formulas = await backend.list_installed(PackageKind.FORMULA)
            casks = await backend.list_installed(PackageKind.CASK)
        except BrewError as e:
            cache.status = ScanStatus.FAILED
            log.warning("cache_scan_failed", error=str(e), context=e.context)
            return cache

        cache._names[PackageKind.FORMULA].update(formulas)
        cache._names[PackageKind.CASK].update(casks)
        cache.status = ScanStatus.LOADED

        duration_ms = int((time.perf_counter() - start) * 1000)
        log.info(
            "cache_scan_complete",
            formulas=len(formulas),
            casks=len(casks),
            duration_ms=duration_ms
        )

        return cache

    def contains(self, kind: PackageKind, name: str) -> bool:
        return name in self._names[kind]

    def add(self, kind: PackageKind, name: str) -> None:
        self._names[kind].add(name)
        log.debug("cache_add", package=name, kind=kind.value)

    @property
    def formulas(self) -> tuple[str, ...]:
        return tuple(sorted(self._names[PackageKind.FORMULA]))

    @property
    def casks(self) -> tuple[str, ...]:
        return tuple(sorted(self._names[PackageKind.CASK]))
