"""Fixed slot maps.

Read-only maps for key sets known up front, addressed by
``hash(key) & (capacity - 1)`` with no probing.

Example:
    >>> from slotmap import FixedSlotMap
    >>>
    >>> opcodes = FixedSlotMap([(0, "nop"), (1, "load"), (2, "store")])
    >>> opcodes[1]
    'load'
    >>> 3 in opcodes
    False
"""

from __future__ import annotations

from slotmap.errors import SlotCollisionError, SlotMapError, UnsupportedOperationError
from slotmap.map import FixedSlotMap, SlotEntry, SlotEntrySet
from slotmap.types import MutableAssociative, ReadOnlyAssociative

__version__ = "0.1.0"

__all__ = [
    "FixedSlotMap",
    "MutableAssociative",
    "ReadOnlyAssociative",
    "SlotCollisionError",
    "SlotEntry",
    "SlotEntrySet",
    "SlotMapError",
    "UnsupportedOperationError",
    "__version__",
]
