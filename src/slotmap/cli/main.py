"""Main CLI entry point using Typer.

This module defines the top-level CLI commands:
- slotmap check: Check a key set for slot collisions
"""

from __future__ import annotations

import logging
from pathlib import Path  # noqa: TC003 - Typer requires runtime access
from typing import Annotated

import structlog
import typer
from rich.console import Console

from slotmap import __version__
from slotmap.config import get_config

app = typer.Typer(
    name="slotmap",
    help="slotmap - Fixed slot map tooling",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"slotmap {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output."),
    ] = False,
) -> None:
    """slotmap - Fixed slot map tooling.

    Use 'slotmap COMMAND --help' for information on specific commands.
    """
    level = logging.DEBUG if verbose else logging.getLevelNamesMapping()[get_config().log_level]
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(level))


@app.command()
def check(
    keys_file: Annotated[
        Path,
        typer.Argument(help="JSON array of keys, or an object whose keys are used."),
    ],
    hasher: Annotated[
        str | None,
        typer.Option("--hasher", help="Hash function: builtin or blake2b."),
    ] = None,
    slots: Annotated[
        bool,
        typer.Option("--slots", help="Print the slot layout."),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output raw JSON."),
    ] = False,
) -> None:
    """Check that a key set maps to distinct slots.

    Exits with status 1 if any two keys share a slot.

    Examples:
        slotmap check keys.json

        slotmap check keys.json --hasher blake2b --slots
    """
    from slotmap.cli.commands.check import run_check  # noqa: PLC0415

    run_check(
        keys_file=keys_file,
        hasher_name=hasher or get_config().hasher,
        show_slots=slots,
        json_output=json_output,
    )


if __name__ == "__main__":
    app()
