"""
Memory Subsystem for the CHIP-8 VM
==================================

Memory Map:
    $000-$04F  Built-in hexadecimal font (16 glyphs x 5 bytes)
    $050-$1FF  Reserved (interpreter area on the original hardware, zeroed)
    $200-$DFF  Program image
    $E00-$FFF  Above the program area; valid program loads never reach it

All addresses wrap modulo 4096 on access, so I+n arithmetic near the top
of memory reads from the bottom rather than raising.

Font glyphs are 4 pixels wide (high nibble of each byte) and 5 rows tall.
The glyph for digit d starts at d * 5.
"""

import logging
from pathlib import Path
from typing import Union

from ..errors import ProgramTooLargeError

logger = logging.getLogger(__name__)

MEMORY_SIZE = 0x1000
ADDRESS_MASK = MEMORY_SIZE - 1

FONT_ADDRESS = 0x000
FONT_GLYPH_SIZE = 5
PROGRAM_START = 0x200
PROGRAM_MAX_SIZE = 0xE00

# Hex digit glyphs 0-F, 5 bytes each
FONT = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])


class Memory:
    """
    4KB flat memory with the font preloaded.

    Example:
        >>> mem = Memory(bytes([0x00, 0xE0]))
        >>> hex(mem.read_word(0x200))
        '0xe0'
    """

    def __init__(self, program: bytes = b""):
        """
        Build the memory image.

        Args:
            program: Program image, copied to $200

        Raises:
            ProgramTooLargeError: If the program is longer than $E00 bytes
        """
        if len(program) > PROGRAM_MAX_SIZE:
            raise ProgramTooLargeError(len(program), PROGRAM_MAX_SIZE)

        self._data = bytearray(MEMORY_SIZE)
        self._data[FONT_ADDRESS:FONT_ADDRESS + len(FONT)] = FONT
        self._data[PROGRAM_START:PROGRAM_START + len(program)] = program
        self._program_size = len(program)

    @property
    def program_size(self) -> int:
        """Size of the loaded program image in bytes."""
        return self._program_size

    def read(self, address: int) -> int:
        """Read byte (address wraps modulo 4096)."""
        return self._data[address & ADDRESS_MASK]

    def write(self, address: int, value: int) -> None:
        """Write byte (address wraps modulo 4096, value masked to 8 bits)."""
        self._data[address & ADDRESS_MASK] = value & 0xFF

    def read_word(self, address: int) -> int:
        """Read a big-endian 16-bit word."""
        return (self.read(address) << 8) | self.read(address + 1)

    def read_bytes(self, address: int, count: int) -> bytes:
        """Read count bytes starting at address, wrapping at the top."""
        return bytes(self.read(address + i) for i in range(count))

    def write_bytes(self, address: int, data: bytes) -> None:
        """Write data starting at address, wrapping at the top."""
        for i, byte in enumerate(data):
            self.write(address + i, byte)

    def __getitem__(self, address: int) -> int:
        return self.read(address)

    def __setitem__(self, address: int, value: int) -> None:
        self.write(address, value)

    def __len__(self) -> int:
        return MEMORY_SIZE

    def dump(self) -> bytes:
        """Copy of the full 4KB image."""
        return bytes(self._data)


def glyph_address(digit: int) -> int:
    """Address of the font glyph for a hex digit."""
    return FONT_ADDRESS + (digit & 0xF) * FONT_GLYPH_SIZE


def load_program_file(path: Union[str, Path]) -> bytes:
    """
    Read a ROM image from disk.

    Args:
        path: Path to the .ch8 / .c8 file

    Returns:
        The program bytes

    Raises:
        FileNotFoundError: If the file doesn't exist
        ProgramTooLargeError: If the image does not fit below $E00
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"ROM file not found: {path}")

    data = path.read_bytes()
    if len(data) > PROGRAM_MAX_SIZE:
        raise ProgramTooLargeError(len(data), PROGRAM_MAX_SIZE)

    logger.debug(f"Loaded ROM '{path.name}' ({len(data)} bytes)")
    return data
