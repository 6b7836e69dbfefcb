"""Recognise and parse ``brew:``, ``cask:`` and ``system:`` specifiers.

A specifier is split on every colon: ``protocol:command:arg:arg``. There is
no quoting, so an argument cannot itself contain a colon.
"""

from __future__ import annotations

from typing import Any

from brewhook.core.models import Specifier

PREFIXES = ("brew:", "cask:", "system:")


def should_awaken(spec: Any) -> bool:
    """Whether a dependency specifier belongs to the system package manager."""
    return isinstance(spec, str) and spec.startswith(PREFIXES)


def parse_specifier(spec: str) -> Specifier:
    """Split a specifier into protocol, command and arguments.

    Examples:
        >>> parse_specifier("brew:wget")
        Specifier(protocol='brew', command='wget', args=())
        >>> parse_specifier("system:tap:homebrew/cask-fonts")
        Specifier(protocol='system', command='tap', args=('homebrew/cask-fonts',))
    """
    protocol, _, rest = spec.partition(":")
    parts = rest.split(":") if rest else []
    command = parts[0] if parts else ""
    return Specifier(protocol=protocol, command=command, args=tuple(parts[1:]))
