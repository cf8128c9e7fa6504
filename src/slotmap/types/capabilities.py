"""Associative container capabilities.

``ReadOnlyAssociative`` is the query surface every slot map offers.
``MutableAssociative`` adds the update surface of a general-purpose map;
read-only containers expose it only so they can stand in where a mutable
map is expected, and fail on every call.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping, Set
from typing import Protocol, TypeVar, runtime_checkable

KT = TypeVar("KT")
VT = TypeVar("VT")


@runtime_checkable
class ReadOnlyAssociative(Protocol[KT, VT]):
    """Lookup, membership and enumeration."""

    def contains_key(self, key: object) -> bool: ...

    def contains_value(self, value: object) -> bool: ...

    def get(self, key: object, default: VT | None = None) -> VT | None: ...

    def size(self) -> int: ...

    def is_empty(self) -> bool: ...

    def key_set(self) -> Set[KT]: ...

    def values(self) -> Collection[VT]: ...

    def entry_set(self) -> Set[tuple[KT, VT]]: ...


@runtime_checkable
class MutableAssociative(ReadOnlyAssociative[KT, VT], Protocol[KT, VT]):
    """Read-only capability plus in-place updates."""

    def put(self, key: KT, value: VT) -> VT | None: ...

    def put_all(self, other: Mapping[KT, VT] | Iterable[tuple[KT, VT]]) -> None: ...

    def remove(self, key: object) -> VT | None: ...

    def clear(self) -> None: ...
