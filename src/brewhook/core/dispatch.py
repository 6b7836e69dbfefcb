"""Route parsed specifiers to repository operations."""

from __future__ import annotations

from brewhook.core.logging import get_logger
from brewhook.core.models import AwakenResult, Specifier
from brewhook.core.repo import Repository

log = get_logger(__name__)


class Dispatcher:
    """Maps a specifier to exactly one repository operation.

    - ``brew:<name>`` installs a formula, ``cask:<name>`` a cask.
    - ``system:tap:<tap>`` / ``system:untap:<tap>`` manage taps.
    - ``system:update``, ``system:upgrade``, ``system:cleanup`` run maintenance.
    - ``system:soul`` exports a snapshot.
    - Any other system command, or any other protocol, is passed to brew as is.
    """

    def __init__(self, repo: Repository) -> None:
        self.repo = repo

    async def dispatch(self, spec: Specifier, package_name: str) -> AwakenResult:
        log.debug(
            "dispatch",
            package=package_name,
            protocol=spec.protocol,
            command=spec.command,
            args=list(spec.args),
        )

        if spec.protocol == "brew":
            return await self.repo.install_formula(spec.target(package_name), spec.args)
        if spec.protocol == "cask":
            return await self.repo.install_cask(spec.target(package_name), spec.args)
        if spec.protocol == "system":
            return await self._system(spec)
        return await self.repo.passthrough(spec.command, spec.args)

    async def _system(self, spec: Specifier) -> AwakenResult:
        command = spec.command
        first = spec.args[0] if spec.args else None

        if command == "tap":
            return await self.repo.add_tap(first)
        if command == "untap":
            return await self.repo.remove_tap(first)
        if command == "update":
            return await self.repo.update()
        if command == "upgrade":
            return await self.repo.upgrade()
        if command == "cleanup":
            return await self.repo.cleanup()
        if command == "soul":
            return await self.repo.export_snapshot()
        return await self.repo.passthrough(command, spec.args)
