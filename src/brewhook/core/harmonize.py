"""Apply a declarative Homebrew manifest."""

from __future__ import annotations

import time

from brewhook.core.logging import get_logger
from brewhook.core.models import HarmonyReport, Manifest
from brewhook.core.repo import Repository

log = get_logger(__name__)


async def harmonize(repo: Repository, manifest: Manifest) -> HarmonyReport:
    """Install every formula and cask in the manifest, then add its taps.

    Formulas go first, then casks, then taps. Each item is attempted even
    if an earlier one failed, and nothing is rolled back. Versions in the
    manifest are ignored. Packages already in the cache are skipped, so
    repeated runs are cheap.

    Args:
        repo: Repository to run the operations against.
        manifest: Desired state.

    Returns:
        A report with one result per item.
    """
    start = time.perf_counter()
    log.info(
        "harmonize_start",
        formulas=len(manifest.formulas),
        casks=len(manifest.casks),
        taps=len(manifest.taps),
    )

    report = HarmonyReport()
    for name in manifest.formulas:
        report.formulas.append(await repo.install_formula(name))
    for name in manifest.casks:
        report.casks.append(await repo.install_cask(name))
    for tap in manifest.taps:
        report.taps.append(await repo.add_tap(tap))

    duration_ms = int((time.perf_counter() - start) * 1000)
    log.info(
        "harmonize_complete",
        failures=len(report.failures),
        duration_ms=duration_ms,
    )

    return report
