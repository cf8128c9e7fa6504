"""Tests for slot arithmetic."""
from __future__ import annotations

import pytest


class TestNextPowerOfTwo:
    """Tests for next_power_of_two."""

    @pytest.mark.parametrize(
        ("n", "expected"),
        [(0, 1), (1, 1), (2, 2), (3, 4), (4, 4), (5, 8), (1000, 1024), (1024, 1024)],
    )
    def test_values(self, n: int, expected: int) -> None:
        """Result is the smallest power of two >= n."""
        from slotmap._internal.indexing import is_power_of_two, next_power_of_two

        result = next_power_of_two(n)

        assert result == expected
        assert is_power_of_two(result)

    def test_negative_rejected(self) -> None:
        """Negative counts are invalid."""
        from slotmap._internal.indexing import next_power_of_two

        with pytest.raises(ValueError, match="non-negative"):
            next_power_of_two(-1)


class TestSlotIndex:
    """Tests for slot_index."""

    def test_masks_low_bits(self) -> None:
        """The slot is the hash masked by capacity - 1."""
        from slotmap._internal.indexing import slot_index

        assert slot_index(5, 4) == 1
        assert slot_index(6, 4) == 2
        assert slot_index(12, 8) == 4
        assert slot_index(99, 1) == 0

    def test_negative_hash_stays_in_range(self) -> None:
        """Negative hashes still land inside the table."""
        from slotmap._internal.indexing import slot_index

        for key in (-1, -7, -1024):
            assert 0 <= slot_index(key, 8) < 8

    def test_custom_hasher(self) -> None:
        """The hasher argument replaces hash()."""
        from slotmap._internal.indexing import slot_index

        assert slot_index("abc", 4, hasher=len) == 3


class TestStableHash:
    """Tests for stable_hash."""

    def test_known_vector(self) -> None:
        """stable_hash is the little-endian blake2b-64 digest of repr(key)."""
        import hashlib

        from slotmap._internal.indexing import stable_hash

        digest = hashlib.blake2b(b"'events'", digest_size=8).digest()

        assert stable_hash("events") == int.from_bytes(digest, "little")

    def test_distinguishes_types(self) -> None:
        """1 and '1' hash differently."""
        from slotmap._internal.indexing import stable_hash

        assert stable_hash(1) != stable_hash("1")

    def test_non_negative_64_bit(self) -> None:
        """The result fits in an unsigned 64-bit integer."""
        from slotmap._internal.indexing import stable_hash

        for key in ("a", 0, None, (1, 2), b"raw"):
            assert 0 <= stable_hash(key) < 2**64


class TestFindCollisions:
    """Tests for find_collisions."""

    def test_none_for_distinct_slots(self) -> None:
        """Distinct slots report nothing."""
        from slotmap._internal.indexing import find_collisions

        assert find_collisions([4, 5, 6], 4) == {}

    def test_groups_by_slot(self) -> None:
        """Colliding keys are grouped in input order."""
        from slotmap._internal.indexing import find_collisions

        result = find_collisions([1, 5, 2, 9, 3], 4)

        assert result == {1: [1, 5, 9]}

    def test_equal_keys_ignored(self) -> None:
        """A repeated key is not its own collision."""
        from slotmap._internal.indexing import find_collisions

        assert find_collisions(["a", "a"], 2) == {}

    def test_vacant_marker_repr(self) -> None:
        """The vacant marker is a distinct singleton."""
        from slotmap._internal.indexing import VACANT

        assert VACANT is not None
        assert repr(VACANT) == "<vacant>"
