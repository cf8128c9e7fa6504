"""Tests for construction-time collision checking."""
from __future__ import annotations

import os
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def _fresh_config():
    from slotmap.config import clear_config_cache

    clear_config_cache()
    yield
    clear_config_cache()


class TestCollisionCheck:
    """Tests for check_collisions."""

    def test_raises_on_shared_slot(self) -> None:
        """Distinct keys in one slot raise SlotCollisionError."""
        from slotmap import FixedSlotMap, SlotCollisionError

        with pytest.raises(SlotCollisionError) as exc_info:
            FixedSlotMap([(0, "a"), (2, "b")], check_collisions=True)

        assert exc_info.value.capacity == 2
        assert exc_info.value.collisions == {0: [0, 2]}
        assert "slot 0: 0, 2" in str(exc_info.value)

    def test_collision_error_is_value_error(self) -> None:
        """Collision errors are configuration errors."""
        from slotmap import FixedSlotMap

        with pytest.raises(ValueError, match="collision"):
            FixedSlotMap([(1, "a"), (3, "b")], check_collisions=True)

    def test_passes_for_distinct_slots(self) -> None:
        """A collision-free key set builds normally."""
        from slotmap import FixedSlotMap

        m = FixedSlotMap([(4, "d"), (5, "e"), (6, "f")], check_collisions=True)

        assert m.size() == 3

    def test_repeated_key_is_not_a_collision(self) -> None:
        """The same key twice keeps the later value."""
        from slotmap import FixedSlotMap

        m = FixedSlotMap([(1, "a"), (1, "b")], check_collisions=True)

        assert m.get(1) == "b"
        assert m.size() == 1
        assert m.capacity == 2

    def test_padding_is_ignored(self) -> None:
        """Padding never collides."""
        from slotmap import FixedSlotMap

        m = FixedSlotMap([None, (1, "a"), None], check_collisions=True)

        assert m.capacity == 4
        assert m.get(1) == "a"

    def test_message_truncates_long_lists(self) -> None:
        """Only the first ten colliding slots are listed."""
        from slotmap.errors import SlotCollisionError

        collisions = {slot: [slot, slot + 16] for slot in range(12)}
        err = SlotCollisionError(16, collisions)

        assert "12 slot collision(s) at capacity 16" in str(err)
        assert "slot 9: 9, 25" in str(err)
        assert "slot 10:" not in str(err)
        assert "... and 2 more" in str(err)

    def test_enabled_from_environment(self) -> None:
        """SLOTMAP_CHECK_COLLISIONS turns the check on by default."""
        from slotmap import FixedSlotMap, SlotCollisionError

        with patch.dict(os.environ, {"SLOTMAP_CHECK_COLLISIONS": "1"}, clear=True):
            with pytest.raises(SlotCollisionError):
                FixedSlotMap([(0, "a"), (2, "b")])

    def test_disabled_by_default(self) -> None:
        """Without configuration, collisions go undetected."""
        from slotmap import FixedSlotMap

        with patch.dict(os.environ, {}, clear=True):
            m = FixedSlotMap([(0, "a"), (2, "b")])

        assert m.size() == 1

    def test_explicit_argument_overrides_environment(self) -> None:
        """check_collisions=False wins over the environment."""
        from slotmap import FixedSlotMap

        with patch.dict(os.environ, {"SLOTMAP_CHECK_COLLISIONS": "true"}, clear=True):
            m = FixedSlotMap([(0, "a"), (2, "b")], check_collisions=False)

        assert m.get(2) == "b"

    @pytest.mark.parametrize(
        "env",
        [{"SLOTMAP_LOG_LEVEL": "chatty"}, {"SLOTMAP_HASHER": "md5"}],
    )
    def test_cli_settings_do_not_affect_construction(self, env: dict[str, str]) -> None:
        """Invalid CLI-only settings leave map construction working."""
        from slotmap import FixedSlotMap

        with patch.dict(os.environ, env, clear=True):
            m = FixedSlotMap([(1, "a")])

        assert m.get(1) == "a"

    def test_cli_settings_with_check_enabled(self) -> None:
        """The collision check still reads its own variable alongside bad CLI settings."""
        from slotmap import FixedSlotMap, SlotCollisionError

        env = {"SLOTMAP_CHECK_COLLISIONS": "1", "SLOTMAP_LOG_LEVEL": "chatty"}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(SlotCollisionError):
                FixedSlotMap([(0, "a"), (2, "b")])
