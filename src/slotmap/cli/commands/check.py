"""Check command implementation."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import structlog
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from slotmap._internal.indexing import HASHERS, find_collisions, next_power_of_two, slot_index

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

console = Console()
err_console = Console(stderr=True)
logger = structlog.get_logger()

_SCALAR_TYPES = (str, int, float, bool, type(None))


def run_check(
    *,
    keys_file: Path,
    hasher_name: str,
    show_slots: bool,
    json_output: bool,
) -> None:
    """Execute check command.

    Args:
        keys_file: JSON file holding the key set.
        hasher_name: Name of the hash function to place keys with.
        show_slots: Print the slot layout.
        json_output: Output raw JSON.
    """
    hasher = HASHERS.get(hasher_name)
    if hasher is None:
        err_console.print(
            f"[red]✗[/red] Unknown hasher {escape(repr(hasher_name))}. "
            f"Choose from: {', '.join(HASHERS)}"
        )
        raise SystemExit(1)

    try:
        keys = load_keys(keys_file)
    except (OSError, ValueError) as e:
        err_console.print(
            f"[red]✗[/red] Cannot read keys from {escape(str(keys_file))}: {escape(str(e))}"
        )
        raise SystemExit(1) from None

    capacity = next_power_of_two(len(keys))
    collisions = find_collisions(keys, capacity, hasher)
    logger.debug(
        "checked_key_set",
        keys=len(keys),
        capacity=capacity,
        hasher=hasher_name,
        collisions=len(collisions),
    )

    if json_output:
        console.print_json(
            data={
                "capacity": capacity,
                "keys": len(keys),
                "hasher": hasher_name,
                "collisions": {str(slot): ks for slot, ks in sorted(collisions.items())},
                "slots": [[slot_index(k, capacity, hasher), k] for k in keys],
            }
        )
    else:
        console.print(
            f"[blue]i[/blue] {len(keys)} keys, capacity {capacity}, hasher {hasher_name}"
        )
        if hasher_name == "builtin" and any(isinstance(k, str) for k in keys):
            console.print(
                "[yellow]![/yellow] String hashes vary between processes unless "
                "PYTHONHASHSEED is fixed; use --hasher blake2b for a stable layout."
            )
        if show_slots:
            console.print(_render_slot_table(keys, capacity, hasher))

    if collisions:
        err_console.print(f"[red]✗[/red] Found {len(collisions)} slot collisions:")
        for slot, colliding in sorted(collisions.items()):
            err_console.print(f"  • slot {slot}: {_format_keys(colliding)}")
        raise SystemExit(1)

    if not json_output:
        console.print("[green]✓[/green] All keys map to distinct slots")


def load_keys(path: Path) -> list[object]:
    """Read a key set from a JSON array, or the keys of a JSON object."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        return list(data)
    if not isinstance(data, list):
        msg = f"expected a JSON array or object, got {type(data).__name__}"
        raise ValueError(msg)
    for key in data:
        if not isinstance(key, _SCALAR_TYPES):
            msg = f"keys must be JSON scalars, got {key!r}"
            raise ValueError(msg)
    return data


def _render_slot_table(
    keys: list[object],
    capacity: int,
    hasher: Callable[[object], int],
) -> Table:
    occupants: dict[int, list[object]] = {}
    for key in keys:
        found = occupants.setdefault(slot_index(key, capacity, hasher), [])
        if not any(k is key or k == key for k in found):
            found.append(key)

    table = Table(title="Slot Layout")
    table.add_column("Slot", style="cyan", justify="right")
    table.add_column("Key")
    for slot in range(capacity):
        found = occupants.get(slot, [])
        if not found:
            table.add_row(str(slot), "[dim]vacant[/dim]")
        elif len(found) == 1:
            table.add_row(str(slot), _format_keys(found))
        else:
            table.add_row(str(slot), f"[red]{_format_keys(found)}[/red]")
    return table


def _format_keys(keys: list[object]) -> str:
    return escape(", ".join(repr(k) for k in keys))
