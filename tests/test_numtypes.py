"""
Numeric Type Unit Tests
=======================

Tests for the masked U12/U4 integers and nibble extraction.
"""

import pytest
from chip8_vm.isa import U12, U4, nibble_at, nibbles


# =============================================================================
# U12 Tests
# =============================================================================

class TestU12:
    """Test 12-bit masked addresses."""

    def test_masks_on_construction(self):
        """Values wider than 12 bits are masked."""
        assert U12.of(0x1234) == 0x234
        assert U12(0xFFFF) == 0xFFF
        assert U12(-1) == 0xFFF

    def test_modify_masks(self):
        """modify() wraps at 12 bits."""
        addr = U12(0xFFE)
        addr.modify(lambda a: a + 3)
        assert addr == 0x001

    def test_from_nibbles(self):
        """Three nibbles compose an address, most significant first."""
        assert U12.from_nibbles(0x1, 0x2, 0x3) == 0x123
        assert U12.from_nibbles(0x1F, 0x0, 0x0) == 0xF00

    def test_int_and_index(self):
        """Converts with int() and works as a sequence index."""
        assert int(U12(0x10)) == 16
        assert list(range(20))[U12(5)] == 5

    def test_equality_and_hash(self):
        """Compares and hashes by value."""
        assert U12(0x200) == U12(0x200)
        assert U12(0x200) != U12(0x201)
        assert hash(U12(0x200)) == hash(U12(0x1200))
        assert len({U12(1), U12(0x1001)}) == 1

    def test_different_widths_not_equal(self):
        """A U12 and a U4 holding the same value are different types."""
        assert U12(5) != U4(5)

    def test_repr(self):
        assert repr(U12(0x234)) == "U12(0x234)"


# =============================================================================
# U4 Tests
# =============================================================================

class TestU4:
    """Test 4-bit nibbles."""

    def test_masks_on_construction(self):
        assert U4.of(0x1F) == 0xF
        assert U4(0x10) == 0

    def test_modify_masks(self):
        n = U4(0xF)
        n.modify(lambda v: v + 1)
        assert n == 0

    def test_ordering(self):
        assert U4(3) < U4(4)
        assert sorted([U4(9), U4(1)]) == [U4(1), U4(9)]

    def test_repr(self):
        assert repr(U4(5)) == "U4(0x5)"


# =============================================================================
# Nibble Extraction Tests
# =============================================================================

class TestNibbles:
    """Test nibble_at() and nibbles()."""

    def test_nibble_at_16bit(self):
        assert nibble_at(0xABCD, 0) == 0xD
        assert nibble_at(0xABCD, 1) == 0xC
        assert nibble_at(0xABCD, 2) == 0xB
        assert nibble_at(0xABCD, 3) == 0xA

    def test_nibble_at_8bit(self):
        assert nibble_at(0xAB, 0, width=8) == 0xB
        assert nibble_at(0xAB, 1, width=8) == 0xA

    def test_nibble_at_returns_u4(self):
        assert isinstance(nibble_at(0x1234, 2), U4)

    def test_nibble_index_out_of_range(self):
        """Reading past the value width is a programming error."""
        with pytest.raises(ValueError):
            nibble_at(0xAB, 2, width=8)
        with pytest.raises(ValueError):
            nibble_at(0xABCD, 4)
        with pytest.raises(ValueError):
            nibble_at(0xABCD, -1)

    def test_unsupported_width(self):
        with pytest.raises(ValueError):
            nibble_at(0xABC, 0, width=12)

    def test_nibbles_most_significant_first(self):
        assert nibbles(0xABCD) == (0xA, 0xB, 0xC, 0xD)
        assert nibbles(0x00E0) == (0x0, 0x0, 0xE, 0x0)
