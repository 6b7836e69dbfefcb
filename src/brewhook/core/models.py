"""Data models for specifiers, package records and operation results."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from brewhook.core.errors import ManifestError


class PackageKind(Enum):
    """Enumeration of package kinds."""

    FORMULA = "formula"
    CASK = "cask"


class LookupStatus(Enum):
    """How a package record was obtained."""

    RESOLVED = "resolved"
    DEGRADED = "degraded"


class InstallOutcome(Enum):
    """What an install request did."""

    ALREADY_INSTALLED = "already_installed"
    INSTALLED = "installed"
    FAILED = "failed"


class ScanStatus(Enum):
    """Result of the startup scan of installed packages."""

    PENDING = "pending"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class Specifier:
    """A parsed ``protocol:command:arg...`` dependency specifier."""

    protocol: str
    command: str = ""
    args: tuple[str, ...] = ()

    def target(self, fallback: str) -> str:
        """Name to install: the command, or the caller's package name if empty."""
        return self.command or fallback


@dataclass(frozen=True)
class PackageRecord:
    """One formula or cask as the backend describes it."""

    name: str
    version: str
    installed: bool
    kind: PackageKind
    dependencies: tuple[str, ...] | None = None
    lookup: LookupStatus = LookupStatus.RESOLVED

    @property
    def is_cask(self) -> bool:
        return self.kind is PackageKind.CASK

    @classmethod
    def unresolved(cls, name: str, kind: PackageKind, installed: bool) -> PackageRecord:
        """Minimal record used when metadata could not be obtained."""
        return cls(
            name=name,
            version="unknown",
            installed=installed,
            kind=kind,
            lookup=LookupStatus.DEGRADED,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "version": self.version,
            "installed": self.installed,
            "is_cask": self.is_cask,
            "lookup": self.lookup.value,
        }
        if self.dependencies is not None:
            data["dependencies"] = list(self.dependencies)
        return data


@dataclass(frozen=True)
class InstallResult:
    """Result of installing one formula or cask."""

    record: PackageRecord
    outcome: InstallOutcome
    returncode: int | None = None

    @property
    def success(self) -> bool:
        return self.outcome is not InstallOutcome.FAILED

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "install",
            "package": self.record.to_dict(),
            "outcome": self.outcome.value,
            "returncode": self.returncode,
            "success": self.success,
        }


@dataclass(frozen=True)
class TapResult:
    """Result of adding or removing a tap."""

    tap: str
    action: str
    success: bool

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.action, "tap": self.tap, "success": self.success}


@dataclass(frozen=True)
class CommandResult:
    """Result of a maintenance or passthrough brew command."""

    command: str
    args: tuple[str, ...] = ()
    success: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "command",
            "command": self.command,
            "args": list(self.args),
            "success": self.success,
        }


@dataclass(frozen=True)
class SystemSnapshot:
    """Installed formulas and casks with their metadata, plus current taps."""

    formulas: tuple[PackageRecord, ...] = ()
    casks: tuple[PackageRecord, ...] = ()
    taps: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "snapshot",
            "formulas": [r.to_dict() for r in self.formulas],
            "casks": [r.to_dict() for r in self.casks],
            "taps": list(self.taps),
        }


AwakenResult = InstallResult | TapResult | CommandResult | SystemSnapshot


def _require_mapping(section: str, value: Any) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ManifestError(section=section, context={"got": type(value).__name__})
    return value


@dataclass(frozen=True)
class Manifest:
    """Declarative desired state for Homebrew.

    Versions are carried for reference only; pinning is not supported.
    """

    formulas: Mapping[str, str] = field(default_factory=dict)
    casks: Mapping[str, str] = field(default_factory=dict)
    taps: tuple[str, ...] = ()

    @classmethod
    def from_document(cls, document: Mapping[str, Any] | None) -> Manifest:
        """Read the optional ``system.brew`` section of a manifest-bearing document.

        Args:
            document: Parsed document, e.g. the contents of a package.json.

        Returns:
            The manifest, empty when the section is absent.

        Raises:
            ManifestError: If a section has the wrong type.
        """
        document = _require_mapping("document", document or {})
        system = document.get("system") or {}
        if not isinstance(system, Mapping):
            raise ManifestError(section="system")
        brew = system.get("brew") or {}
        if not isinstance(brew, Mapping):
            raise ManifestError(section="system.brew")

        formulas = _require_mapping("system.brew.formulas", brew.get("formulas") or {})
        casks = _require_mapping("system.brew.casks", brew.get("casks") or {})
        taps = brew.get("taps") or []
        if isinstance(taps, (str, bytes)) or not isinstance(taps, Sequence):
            raise ManifestError(section="system.brew.taps")

        return cls(
            formulas={str(k): str(v) for k, v in formulas.items()},
            casks={str(k): str(v) for k, v in casks.items()},
            taps=tuple(str(t) for t in taps),
        )


@dataclass
class HarmonyReport:
    """Per-item results of applying a manifest, in application order."""

    formulas: list[InstallResult] = field(default_factory=list)
    casks: list[InstallResult] = field(default_factory=list)
    taps: list[TapResult] = field(default_factory=list)

    @property
    def failures(self) -> list[InstallResult | TapResult]:
        return [r for r in [*self.formulas, *self.casks, *self.taps] if not r.success]

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict[str, Any]:
        return {
            "formulas": [r.to_dict() for r in self.formulas],
            "casks": [r.to_dict() for r in self.casks],
            "taps": [r.to_dict() for r in self.taps],
            "ok": self.ok,
        }
