"""Locate the Homebrew executable."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from brewhook.core.config import BrewhookENV, discover_env
from brewhook.core.errors import BrewNotFoundError
from brewhook.core.logging import get_logger

log = get_logger(__name__)


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def find_brew(env: BrewhookENV | None = None) -> Path:
    """Find the brew executable.

    Checks the explicit override, then the well-known install locations,
    then PATH.

    Args:
        env: Environment to use; discovered from the process if omitted.

    Returns:
        Path to the brew executable.

    Raises:
        BrewNotFoundError: If brew cannot be found anywhere.
    """
    env = env or discover_env()
    candidates = [env.brew_override] if env.brew_override else []
    candidates.extend(env.probe_paths)

    for path in candidates:
        if _is_executable(path):
            log.debug("brew_found", path=str(path))
            return path

    found = shutil.which("brew")
    if found:
        log.debug("brew_found", path=found, source="PATH")
        return Path(found)

    searched = [str(p) for p in candidates] + ["PATH"]
    log.error("brew_not_found", searched=searched)
    raise BrewNotFoundError(searched=searched)
