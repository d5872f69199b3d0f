"""Comprehensive property-based tests for enums module.

Tests all enum classes for completeness, serialization, and invariants.
"""

from hypothesis import event, given
from hypothesis import strategies as st

from cldrprovider import enums
from cldrprovider.enums import BufferFormat, FallbackPriority, FallbackSupplement, IsoWeekday


class TestStrEnums:
    """Property-based tests for the string enums."""

    @given(member=st.sampled_from([*FallbackPriority, *FallbackSupplement, *BufferFormat]))
    def test_str_returns_value(self, member: FallbackPriority) -> None:
        """Property: __str__ returns the enum value for all members."""
        event(f"enum={type(member).__name__}")
        assert str(member) == member.value
        assert member.value

    def test_fallback_priorities(self) -> None:
        """Verify all expected FallbackPriority members exist."""
        assert {p.value for p in FallbackPriority} == {"language", "region", "collation"}

    def test_buffer_formats(self) -> None:
        """Verify all expected BufferFormat members exist."""
        assert BufferFormat("json") is BufferFormat.JSON
        assert BufferFormat("packed") is BufferFormat.PACKED
        assert BufferFormat("postcard1") is BufferFormat.POSTCARD1


class TestIsoWeekday:
    """Tests for IsoWeekday numbering."""

    def test_iso_numbering(self) -> None:
        """Monday is 1 and Sunday is 7."""
        assert IsoWeekday.MONDAY == 1
        assert IsoWeekday.SUNDAY == 7
        assert len(IsoWeekday) == 7

    @given(value=st.integers(min_value=1, max_value=7))
    def test_round_trips_through_int(self, value: int) -> None:
        """Property: every ISO day number maps to a member."""
        assert int(IsoWeekday(value)) == value


class TestModuleExports:
    """Test the module's public names."""

    def test_all_exports_exist(self) -> None:
        """Every name in __all__ is defined."""
        for name in enums.__all__:
            assert hasattr(enums, name)
