"""Slot arithmetic shared by the map and the CLI."""

from __future__ import annotations

import hashlib
from enum import Enum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


class _Vacant(Enum):
    """Marker for a slot that holds no pair."""

    SLOT = "vacant"

    def __repr__(self) -> str:
        return "<vacant>"


VACANT: Final = _Vacant.SLOT


def next_power_of_two(n: int) -> int:
    """Return the smallest power of two that is >= ``n`` (at least 1)."""
    if n < 0:
        msg = f"Slot count must be non-negative, got {n}"
        raise ValueError(msg)
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def slot_index(key: object, capacity: int, hasher: Callable[[object], int] = hash) -> int:
    """Map ``key`` to a slot: the low bits of its hash, masked by ``capacity - 1``.

    Negative hashes are fine; Python's ``&`` works on two's complement.
    """
    return hasher(key) & (capacity - 1)


def stable_hash(key: object) -> int:
    """64-bit blake2b hash of ``repr(key)``.

    Unlike ``hash()``, the result does not change between interpreter runs,
    so slot layouts of ``str`` and ``bytes`` keys can be checked offline.
    """
    digest = hashlib.blake2b(repr(key).encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "little")


HASHERS: Final[dict[str, Callable[[object], int]]] = {
    "builtin": hash,
    "blake2b": stable_hash,
}


def find_collisions(
    keys: Iterable[object],
    capacity: int,
    hasher: Callable[[object], int] = hash,
) -> dict[int, list[object]]:
    """Group distinct keys sharing a slot.

    Returns:
        Mapping of slot index to the colliding keys, in input order. Slots
        with a single key are omitted; a key repeated verbatim is not a
        collision.
    """
    by_slot: dict[int, list[object]] = {}
    for key in keys:
        occupants = by_slot.setdefault(slot_index(key, capacity, hasher), [])
        if not any(k is key or k == key for k in occupants):
            occupants.append(key)
    return {slot: ks for slot, ks in by_slot.items() if len(ks) > 1}
