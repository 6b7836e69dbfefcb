"""Configuration module for the brewhook environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Well-known Homebrew install locations, probed in order.
BREW_PROBE_PATHS: tuple[Path, ...] = (
    Path("/opt/homebrew/bin/brew"),  # Apple Silicon
    Path("/usr/local/bin/brew"),  # Intel Mac
    Path("/home/linuxbrew/.linuxbrew/bin/brew"),  # Linux
)

# Applied to commands whose output is parsed.
ENV_OVERRIDES = {
    "LANG": "C",
    "HOMEBREW_NO_COLOR": "1",
}


@dataclass
class BrewhookENV:
    """Configuration for the brewhook environment."""
    home: Path
    log_dir: Path
    log_level: str = "INFO"
    brew_override: Path | None = None
    probe_paths: tuple[Path, ...] = BREW_PROBE_PATHS


def discover_env() -> BrewhookENV:
    """Discover the brewhook environment from environment variables."""
    home = Path(os.environ.get("BREWHOOK_HOME") or Path.home() / ".brewhook")
    log_dir = Path(os.environ.get("BREWHOOK_LOG_DIR") or home / "logs")
    override = os.environ.get("BREWHOOK_BREW")

    return BrewhookENV(
        home=home,
        log_dir=log_dir,
        log_level=os.environ.get("BREWHOOK_LOG_LEVEL", "INFO").upper(),
        brew_override=Path(override) if override else None,
        probe_paths=BREW_PROBE_PATHS,
    )


def capture_env() -> dict[str, str]:
    """Get the environment for captured brew commands.

    Returns:
        dict[str, str]: The process environment with brew output overrides.
    """
    env = os.environ.copy()
    env.update(ENV_OVERRIDES)

    return env
