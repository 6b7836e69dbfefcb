"""Homebrew formula metadata provider."""

from __future__ import annotations

import time
from typing import Any

from brewhook.backends.base import SystemBackend
from brewhook.core.errors import BrewError
from brewhook.core.logging import get_logger
from brewhook.core.models import LookupStatus, PackageKind, PackageRecord

log = get_logger(__name__)


def normalize(data: Any, name: str, installed: bool) -> PackageRecord:
    """Build a formula record from ``brew info --json=v2`` output.

    Args:
        data: Parsed JSON document.
        name: The queried formula name.
        installed: Whether the formula is known to be installed.

    Returns:
        The formula record. Degraded if the document has no formula entry.
    """
    formulae = data.get("formulae") if isinstance(data, dict) else None
    f = formulae[0] if isinstance(formulae, list) and formulae else None
    if not isinstance(f, dict):
        log.warning("formula_info_missing", package=name)
        return PackageRecord.unresolved(name, PackageKind.FORMULA, installed)

    versions = f.get("versions") if isinstance(f.get("versions"), dict) else {}
    deps = f.get("dependencies") if isinstance(f.get("dependencies"), list) else []

    return PackageRecord(
        name=str(f.get("name") or name),
        version=str(versions.get("stable") or "unknown"),
        installed=installed,
        kind=PackageKind.FORMULA,
        dependencies=tuple(str(d) for d in deps),
        lookup=LookupStatus.RESOLVED,
    )


async def info(backend: SystemBackend, name: str, installed: bool) -> PackageRecord:
    """Get formula info by name.

    Never raises: any failure yields a degraded record.

    Args:
        backend: Backend to query.
        name: Name of the formula.
        installed: Whether the formula is known to be installed.

    Returns:
        A PackageRecord for the formula.
    """
    start = time.perf_counter()
    log.debug("formula_info_start", package=name)

    try:
        data = await backend.info(name, PackageKind.FORMULA)
    except BrewError as e:
        log.warning("formula_info_failed", package=name, error=str(e))
        return PackageRecord.unresolved(name, PackageKind.FORMULA, installed)

    record = normalize(data, name, installed)
    duration_ms = int((time.perf_counter() - start) * 1000)
    log.info(
        "formula_info_complete",
        package=name,
        lookup=record.lookup.value,
        duration_ms=duration_ms
    )

    return record
