"""Capability protocols for associative containers."""

from __future__ import annotations

from slotmap.types.capabilities import MutableAssociative, ReadOnlyAssociative

__all__ = ["MutableAssociative", "ReadOnlyAssociative"]
