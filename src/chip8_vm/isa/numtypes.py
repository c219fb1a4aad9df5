"""
Fixed-Width Integer Types
=========================

Masked unsigned integers for the two odd widths CHIP-8 uses:

- U12: 12-bit addresses (the index register, jump and call targets)
- U4: 4-bit nibbles (sprite heights, register selectors)

Both mask on construction and on every modification, so no instance can
ever hold a value wider than its bit width.

Example:
    >>> addr = U12.of(0x1234)
    >>> hex(int(addr))
    '0x234'
    >>> addr.modify(lambda a: a + 0xE00)
    >>> hex(int(addr))
    '0x34'
"""

from typing import Callable, Tuple


class _Masked:
    """Unsigned integer masked to BITS bits."""

    BITS = 0
    MASK = 0

    __slots__ = ("_value",)

    def __init__(self, value: int = 0):
        self._value = int(value) & self.MASK

    @classmethod
    def of(cls, value: int):
        """Construct by masking value to the valid width (never fails)."""
        return cls(value)

    @property
    def value(self) -> int:
        return self._value

    def modify(self, transform: Callable[[int], int]) -> None:
        """Replace the value with transform(value), masked to the valid width."""
        self._value = int(transform(self._value)) & self.MASK

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __eq__(self, other) -> bool:
        if isinstance(other, _Masked):
            return type(self) is type(other) and self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other) -> bool:
        return self._value < int(other)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._value))

    def __repr__(self) -> str:
        width = (self.BITS + 3) // 4
        return f"{type(self).__name__}(0x{self._value:0{width}X})"


class U12(_Masked):
    """12-bit unsigned quantity (0x000-0xFFF)."""

    BITS = 12
    MASK = 0xFFF

    __slots__ = ()

    @classmethod
    def from_nibbles(cls, hi: int, mid: int, lo: int) -> "U12":
        """Compose an address from three nibbles, most significant first."""
        return cls((hi & 0xF) << 8 | (mid & 0xF) << 4 | (lo & 0xF))


class U4(_Masked):
    """4-bit unsigned quantity (0x0-0xF)."""

    BITS = 4
    MASK = 0xF

    __slots__ = ()


def nibble_at(value: int, idx: int, width: int = 16) -> U4:
    """
    Read the nibble at position idx of an 8- or 16-bit value.

    Args:
        value: The value to read from
        idx: Nibble position, 0 = least significant
        width: Bit width of value (8 or 16)

    Returns:
        The nibble as a U4

    Raises:
        ValueError: If width is unsupported or idx is outside the value.
            Call sites are fixed, so this is a programming error.
    """
    if width not in (8, 16):
        raise ValueError(f"nibble_at supports 8 or 16 bit values, got width {width}")
    if not 0 <= idx < width // 4:
        raise ValueError(f"nibble index {idx} out of range for a {width}-bit value")
    return U4(value >> (idx * 4))


def nibbles(word: int) -> Tuple[int, int, int, int]:
    """Split a 16-bit word into its four nibbles, most significant first."""
    return (
        int(nibble_at(word, 3)),
        int(nibble_at(word, 2)),
        int(nibble_at(word, 1)),
        int(nibble_at(word, 0)),
    )
