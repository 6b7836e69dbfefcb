"""Renderers for displaying brewhook results in the CLI using Rich."""

from __future__ import annotations

from typing import Iterable

from rich import box
from rich.console import Console
from rich.table import Table

from brewhook.core.models import (
    AwakenResult,
    CommandResult,
    HarmonyReport,
    InstallOutcome,
    InstallResult,
    LookupStatus,
    PackageRecord,
    SystemSnapshot,
    TapResult,
)

console = Console()

OUTCOME_LABELS = {
    InstallOutcome.ALREADY_INSTALLED: "[green]Already installed[/green]",
    InstallOutcome.INSTALLED: "[green]Installed[/green]",
    InstallOutcome.FAILED: "[red]Failed[/red]",
}


def success_label(success: bool) -> str:
    return "[green]OK[/green]" if success else "[red]Failed[/red]"


def package_table(records: Iterable[PackageRecord]) -> Table:
    """Create a Rich Table listing package records.

    Args:
        records: Records to display.

    Returns:
        A Rich Table with one row per record.
    """
    table = Table(box=box.MINIMAL_HEAVY_HEAD)
    table.add_column("Kind", style="bold")
    table.add_column("Name", style="bold")
    table.add_column("Version")
    table.add_column("Installed")
    table.add_column("Depends on", style="dim")

    for r in records:
        version = r.version
        if r.lookup is LookupStatus.DEGRADED:
            version = f"[yellow]{version}[/yellow]"
        table.add_row(
            "cask" if r.is_cask else "formula",
            r.name,
            version,
            "yes" if r.installed else "no",
            ", ".join(r.dependencies or ()),
        )

    return table


def snapshot_table(snapshot: SystemSnapshot) -> Table:
    """Packages from a snapshot, followed by a taps row."""
    table = package_table([*snapshot.formulas, *snapshot.casks])
    table.add_section()
    table.add_row("taps", ", ".join(snapshot.taps) or "-", "", "", "")
    return table


def report_table(report: HarmonyReport) -> Table:
    """One row per manifest item with its outcome."""
    table = Table(box=box.MINIMAL_HEAVY_HEAD)
    table.add_column("Kind", style="bold")
    table.add_column("Name", style="bold")
    table.add_column("Result")

    for r in [*report.formulas, *report.casks]:
        table.add_row(r.record.kind.value, r.record.name, OUTCOME_LABELS[r.outcome])
    for t in report.taps:
        table.add_row("tap", t.tap, success_label(t.success))

    return table


def render_result(result: AwakenResult) -> Table | str:
    """Render any result returned by ``BrewHook.awaken``."""
    if isinstance(result, SystemSnapshot):
        return snapshot_table(result)
    if isinstance(result, InstallResult):
        table = package_table([result.record])
        table.caption = OUTCOME_LABELS[result.outcome]
        return table
    if isinstance(result, TapResult):
        return f"{result.action} {result.tap}: {success_label(result.success)}"
    if isinstance(result, CommandResult):
        line = " ".join((result.command, *result.args))
        return f"brew {line}: {success_label(result.success)}"
    raise TypeError(f"Unsupported result type: {type(result).__name__}")
