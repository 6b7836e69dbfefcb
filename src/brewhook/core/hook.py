"""Entry point for package managers delegating specifiers to Homebrew."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from brewhook.backends.base import SystemBackend
from brewhook.backends.brew import BrewBackend
from brewhook.core.cache import InstalledCache
from brewhook.core.config import BrewhookENV
from brewhook.core.dispatch import Dispatcher
from brewhook.core.grammar import parse_specifier, should_awaken
from brewhook.core.harmonize import harmonize
from brewhook.core.logging import get_logger
from brewhook.core.models import AwakenResult, HarmonyReport, Manifest
from brewhook.core.repo import Repository, console

log = get_logger(__name__)


class BrewHook:
    """Handle owned by the host package manager.

    Build one with :meth:`create` and pass it to wherever specifiers are
    resolved. Operations on one hook run their brew commands one after
    another; concurrent callers are not serialised.

    Example:
        hook = await BrewHook.create()
        if hook.should_awaken("brew:wget"):
            result = await hook.awaken("wget", "brew:wget")
    """

    def __init__(self, backend: SystemBackend, cache: InstalledCache) -> None:
        self.backend = backend
        self.cache = cache
        self.repo = Repository(backend, cache)
        self.dispatcher = Dispatcher(self.repo)

    @classmethod
    async def create(
        cls, backend: SystemBackend | None = None, env: BrewhookENV | None = None
    ) -> BrewHook:
        """Locate brew (unless a backend is given) and scan installed packages.

        Raises:
            BrewNotFoundError: If no backend is given and brew cannot be found.
        """
        backend = backend or BrewBackend.locate(env)
        cache = await InstalledCache.load(backend)
        return cls(backend, cache)

    def should_awaken(self, spec: str) -> bool:
        return should_awaken(spec)

    async def awaken(self, package_name: str, spec: str) -> AwakenResult:
        """Carry out a specifier.

        Args:
            package_name: Dependency name the specifier was declared under.
            spec: The specifier, e.g. ``brew:wget`` or ``system:tap:foo/bar``.

        Returns:
            InstallResult, TapResult, CommandResult or SystemSnapshot
            depending on the operation.
        """
        console.print(f"🍺 Resolving {package_name} via Homebrew")
        log.info("awaken", package=package_name, spec=spec)
        return await self.dispatcher.dispatch(parse_specifier(spec), package_name)

    async def harmonize(self, document: Manifest | Mapping[str, Any]) -> HarmonyReport:
        """Apply the ``system.brew`` section of a manifest-bearing document.

        Raises:
            ManifestError: If the section has the wrong shape.
        """
        manifest = document if isinstance(document, Manifest) else Manifest.from_document(document)
        console.print("Applying Homebrew manifest...")
        report = await harmonize(self.repo, manifest)
        if report.ok:
            console.print("  ✓ System harmonized", style="green")
        else:
            console.print(f"  ✗ {len(report.failures)} item(s) failed", style="bold red")
        return report
