"""Homebrew Cask metadata provider."""

from __future__ import annotations

import time
from typing import Any

from brewhook.backends.base import SystemBackend
from brewhook.core.errors import BrewError
from brewhook.core.logging import get_logger
from brewhook.core.models import LookupStatus, PackageKind, PackageRecord

log = get_logger(__name__)


def normalize(data: Any, name: str, installed: bool) -> PackageRecord:
    """Build a cask record from ``brew info --cask --json=v2`` output.

    Casks carry no dependency list.
    """
    casks = data.get("casks") if isinstance(data, dict) else None
    c = casks[0] if isinstance(casks, list) and casks else None
    if not isinstance(c, dict):
        log.warning("cask_info_missing", package=name)
        return PackageRecord.unresolved(name, PackageKind.CASK, installed)

    return PackageRecord(
        name=str(c.get("token") or name),
        version=str(c.get("version") or "unknown"),
        installed=installed,
        kind=PackageKind.CASK,
        lookup=LookupStatus.RESOLVED,
    )


async def info(backend: SystemBackend, name: str, installed: bool) -> PackageRecord:
    """Get cask info by name, degrading to a minimal record on failure."""
    start = time.perf_counter()
    log.debug("cask_info_start", package=name)

    try:
        data = await backend.info(name, PackageKind.CASK)
    except BrewError as e:
        log.warning("cask_info_failed", package=name, error=str(e))
        return PackageRecord.unresolved(name, PackageKind.CASK, installed)

    record = normalize(data, name, installed)
    duration_ms = int((time.perf_counter() - start) * 1000)
    log.info(
        "cask_info_complete",
        package=name,
        lookup=record.lookup.value,
        duration_ms=duration_ms
    )

    return record
