"""CLI entry point for brewhook."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import typer

from brewhook.cli.renderers import console, render_result, report_table, snapshot_table
from brewhook.core.errors import (
    EXIT_SUCCESS,
    EXIT_SYSTEM_ERROR,
    EXIT_TRANSIENT_ERROR,
    EXIT_USER_ERROR,
    BrewError,
    ManifestError,
    SystemError,
    TransientError,
    UserError,
    format_error_message,
)
from brewhook.core.grammar import should_awaken
from brewhook.core.hook import BrewHook
from brewhook.core.logging import configure_logging, get_logger

log = get_logger(__name__)

app = typer.Typer(help="brewhook: delegate brew:, cask: and system: dependencies to Homebrew.")


def handle_error(error: Exception) -> int:
    """Handle errors and return appropriate exit codes.

    Args:
        error: The exception to handle.

    Returns:
        An integer exit code.
    """
    if isinstance(error, BrewError):
        log.error(
            "cli_error",
            error_type=type(error).__name__,
            message=error.message,
            context=error.context,
        )
        console.print(f"\n{format_error_message(error)}\n", style="bold red")

        if isinstance(error, TransientError):
            return EXIT_TRANSIENT_ERROR
        elif isinstance(error, UserError):
            return EXIT_USER_ERROR
        elif isinstance(error, SystemError):
            return EXIT_SYSTEM_ERROR
        else:
            return EXIT_USER_ERROR
    else:
        log.error(
            "unexpected_error",
            error=str(error),
            exc_info=True
        )
        console.print(
            f"\n⚠️ Unexpected error occurred: {error}\n",
            style="bold red"
        )
        return EXIT_SYSTEM_ERROR


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG | INFO | WARNING"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Also log to stderr"),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(level=log_level, enable_console=verbose, force=True)


@app.command()
def check(spec: str) -> None:
    """Exit 0 if SPEC is handled by Homebrew, 1 otherwise."""
    claimed = should_awaken(spec)
    console.print("yes" if claimed else "no")
    raise typer.Exit(EXIT_SUCCESS if claimed else EXIT_USER_ERROR)


@app.command()
def awaken(
    name: str,
    spec: str,
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Carry out SPEC for the dependency NAME.

    Args:
        name: Dependency name the specifier is declared under.
        spec: Specifier such as brew:wget or system:tap:homebrew/cask-fonts.
        as_json: Print JSON instead of a table.
    """
    try:
        async def run():
            hook = await BrewHook.create()
            return await hook.awaken(name, spec)

        result = asyncio.run(run())
        if as_json:
            console.print_json(data=result.to_dict())
        else:
            console.print(render_result(result))
    except Exception as e:
        sys.exit(handle_error(e))


@app.command()
def harmonize(
    path: Path = typer.Argument(Path("package.json"), help="JSON file with a system.brew section"),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
) -> None:
    """Install the formulas, casks and taps listed in a manifest file."""
    try:
        try:
            document = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise ManifestError(
                f"Cannot read manifest {path}",
                context={"error": str(e)},
            ) from e

        async def run():
            hook = await BrewHook.create()
            return await hook.harmonize(document)

        report = asyncio.run(run())
        if as_json:
            console.print_json(data=report.to_dict())
        else:
            console.print(report_table(report))

        if not report.ok:
            raise typer.Exit(EXIT_USER_ERROR)
    except typer.Exit:
        raise
    except Exception as e:
        sys.exit(handle_error(e))


@app.command()
def soul(
    as_json: bool = typer.Option(False, "--json", help="Print the snapshot as JSON"),
) -> None:
    """Show installed formulas and casks with their versions, plus taps."""
    try:
        async def run():
            hook = await BrewHook.create()
            return await hook.repo.export_snapshot()

        snapshot = asyncio.run(run())
        if as_json:
            console.print_json(data=snapshot.to_dict())
        else:
            console.print(snapshot_table(snapshot))
    except Exception as e:
        sys.exit(handle_error(e))


if __name__ == "__main__":
    app()
