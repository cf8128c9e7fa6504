"""Fixed-capacity, read-only map with collision-free slot addressing.

Every key lives at ``hasher(key) & (capacity - 1)`` in a slot array sized to
the next power of two at or above the number of supplied pairs. Lookups
recompute that slot and never probe, chain or rehash. The caller guarantees
that no two distinct keys share a slot; nothing repairs a violation.

Example:
    >>> m = FixedSlotMap([(4, "d"), (5, "e"), (6, "f")])
    >>> m.get(5)
    'e'
    >>> [tuple(e) for e in m.entry_set()]
    [(4, 'd'), (5, 'e'), (6, 'f')]
"""

from __future__ import annotations

from collections.abc import ItemsView, Iterable, Iterator, KeysView, Mapping
from typing import TYPE_CHECKING, Generic, TypeVar

import structlog

from slotmap._internal.indexing import (
    VACANT,
    find_collisions,
    next_power_of_two,
    slot_index,
)
from slotmap.config import get_map_settings
from slotmap.errors import SlotCollisionError, UnsupportedOperationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from slotmap._internal.indexing import _Vacant

logger = structlog.get_logger()

KT = TypeVar("KT")
VT = TypeVar("VT")


class SlotEntry(Generic[KT, VT]):
    """A read-only view of one occupied slot.

    ``value`` is looked up through the owning map on every access rather than
    captured when the entry is created.
    """

    __slots__ = ("_key", "_owner")

    def __init__(self, owner: FixedSlotMap[KT, VT], key: KT) -> None:
        self._owner = owner
        self._key = key

    @property
    def key(self) -> KT:
        return self._key

    @property
    def value(self) -> VT:
        return self._owner[self._key]

    def set_value(self, value: VT) -> VT:
        raise UnsupportedOperationError("set_value", owner="SlotEntry")

    def __iter__(self) -> Iterator[KT | VT]:
        yield self._key
        yield self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SlotEntry):
            other = tuple(other)
        if isinstance(other, tuple):
            return (self._key, self.value) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._key, self.value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._key!r}, {self.value!r})"


class SlotEntrySet(ItemsView[KT, VT], Generic[KT, VT]):
    """Set-like view of a map's entries, iterated in slot order."""

    _mapping: FixedSlotMap[KT, VT]

    def __iter__(self) -> Iterator[SlotEntry[KT, VT]]:  # type: ignore[override]
        for key in self._mapping:
            yield SlotEntry(self._mapping, key)


class FixedSlotMap(Mapping[KT, VT], Generic[KT, VT]):
    """A read-only map whose key set is fixed at construction.

    Args:
        pairs: ``(key, value)`` pairs, or a mapping. A ``None`` item is
            padding: it widens the table without occupying a slot.
        hasher: Hash function, total over the key domain. Defaults to
            :func:`hash`.
        check_collisions: Scan for distinct keys sharing a slot and raise
            :class:`SlotCollisionError`. ``None`` defers to
            ``SLOTMAP_CHECK_COLLISIONS``.

    Without the check, pairs that share a slot overwrite each other and the
    last one written wins.
    """

    _slots: tuple[tuple[KT, VT] | _Vacant, ...]

    def __init__(
        self,
        pairs: Mapping[KT, VT] | Iterable[tuple[KT, VT] | None] = (),
        /,
        *,
        hasher: Callable[[object], int] = hash,
        check_collisions: bool | None = None,
    ) -> None:
        if isinstance(pairs, Mapping):
            items: list[tuple[KT, VT] | None] = [(k, v) for k, v in pairs.items()]
        else:
            items = list(pairs)
        capacity = next_power_of_two(len(items))

        if check_collisions is None:
            check_collisions = get_map_settings().check_collisions
        if check_collisions:
            _check_collisions([p[0] for p in items if p is not None], capacity, hasher)

        slots: list[tuple[KT, VT] | _Vacant] = [VACANT] * capacity
        for pair in items:
            if pair is None:
                continue
            key, value = pair
            slots[slot_index(key, capacity, hasher)] = (key, value)

        self._capacity = capacity
        self._hasher = hasher
        self._slots = tuple(slots)

    @classmethod
    def of(
        cls,
        *pairs: tuple[KT, VT] | None,
        hasher: Callable[[object], int] = hash,
        check_collisions: bool | None = None,
    ) -> FixedSlotMap[KT, VT]:
        """Build a map from positional pairs."""
        return cls(pairs, hasher=hasher, check_collisions=check_collisions)

    @property
    def capacity(self) -> int:
        """Number of slots, a power of two fixed at construction."""
        return self._capacity

    def slot_of(self, key: object) -> int:
        """Slot that ``key`` resolves to, occupied or not."""
        return slot_index(key, self._capacity, self._hasher)

    def _find(self, key: object) -> tuple[KT, VT] | _Vacant:
        slot = self._slots[self.slot_of(key)]
        if slot is VACANT or not (slot[0] is key or slot[0] == key):
            return VACANT
        return slot

    def _occupied(self) -> Iterator[tuple[KT, VT]]:
        for slot in self._slots:
            if slot is not VACANT:
                yield slot

    # Mapping protocol

    def __getitem__(self, key: object) -> VT:
        pair = self._find(key)
        if pair is VACANT:
            raise KeyError(key)
        return pair[1]

    def __iter__(self) -> Iterator[KT]:
        for key, _ in self._occupied():
            yield key

    def __len__(self) -> int:
        return sum(1 for _ in self._occupied())

    def __contains__(self, key: object) -> bool:
        return self._find(key) is not VACANT

    def get(self, key: object, default: VT | None = None) -> VT | None:
        pair = self._find(key)
        return default if pair is VACANT else pair[1]

    def values(self) -> tuple[VT, ...]:  # type: ignore[override]
        """Stored values in slot order."""
        return tuple(value for _, value in self._occupied())

    def items(self) -> SlotEntrySet[KT, VT]:
        return SlotEntrySet(self)

    # Read-only capability

    def contains_key(self, key: object) -> bool:
        return key in self

    def contains_value(self, value: object) -> bool:
        return any(v is value or v == value for _, v in self._occupied())

    def size(self) -> int:
        return len(self)

    def is_empty(self) -> bool:
        return self.size() == 0

    def key_set(self) -> KeysView[KT]:
        return self.keys()

    def entry_set(self) -> SlotEntrySet[KT, VT]:
        return self.items()

    # Mutation is never supported

    def put(self, key: KT, value: VT) -> VT | None:
        raise UnsupportedOperationError("put")

    def put_all(self, other: Mapping[KT, VT] | Iterable[tuple[KT, VT]]) -> None:
        raise UnsupportedOperationError("put_all")

    def remove(self, key: object) -> VT | None:
        raise UnsupportedOperationError("remove")

    def clear(self) -> None:
        raise UnsupportedOperationError("clear")

    def __setitem__(self, key: KT, value: VT) -> None:
        raise UnsupportedOperationError("__setitem__")

    def __delitem__(self, key: KT) -> None:
        raise UnsupportedOperationError("__delitem__")

    def pop(self, key: KT, *default: VT) -> VT:
        raise UnsupportedOperationError("pop")

    def popitem(self) -> tuple[KT, VT]:
        raise UnsupportedOperationError("popitem")

    def setdefault(self, key: KT, default: VT | None = None) -> VT | None:
        raise UnsupportedOperationError("setdefault")

    def update(self, *args: object, **kwargs: VT) -> None:
        raise UnsupportedOperationError("update")

    # Value semantics

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return self.to_dict() == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self.to_dict().items()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._occupied())!r}, capacity={self._capacity})"

    def to_dict(self) -> dict[KT, VT]:
        """Convert to a plain dict, in slot order."""
        return dict(self._occupied())


def _check_collisions(
    keys: list[object],
    capacity: int,
    hasher: Callable[[object], int],
) -> None:
    collisions = find_collisions(keys, capacity, hasher)
    if collisions:
        logger.warning(
            "slot_collisions_detected",
            capacity=capacity,
            slots=sorted(collisions),
        )
        raise SlotCollisionError(capacity, collisions)
    logger.debug("slot_map_validated", capacity=capacity, entries=len(keys))
