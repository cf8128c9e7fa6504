"""Exceptions raised by slot maps."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

_MAX_COLLISIONS_IN_ERROR_MESSAGE = 10


class SlotMapError(Exception):
    """Base class for slot map errors."""


class UnsupportedOperationError(SlotMapError, TypeError):
    """A mutation was attempted on a read-only slot map."""

    def __init__(self, operation: str, owner: str = "FixedSlotMap") -> None:
        self.operation = operation
        super().__init__(f"{owner} does not support {operation}()")


class SlotCollisionError(SlotMapError, ValueError):
    """Two or more distinct keys resolve to the same slot.

    Only raised when collision checking is enabled; unchecked construction
    keeps the last pair written to a shared slot.
    """

    def __init__(self, capacity: int, collisions: dict[int, Sequence[object]]) -> None:
        self.capacity = capacity
        self.collisions = {slot: list(keys) for slot, keys in collisions.items()}

        msg_lines = [f"{len(self.collisions)} slot collision(s) at capacity {capacity}:"]
        slots = sorted(self.collisions)
        for slot in slots[:_MAX_COLLISIONS_IN_ERROR_MESSAGE]:
            keys = ", ".join(repr(k) for k in self.collisions[slot])
            msg_lines.append(f"- slot {slot}: {keys}")
        if len(slots) > _MAX_COLLISIONS_IN_ERROR_MESSAGE:
            msg_lines.append(f"- ... and {len(slots) - _MAX_COLLISIONS_IN_ERROR_MESSAGE} more")

        super().__init__("\n".join(msg_lines))
