"""
General Purpose Registers
=========================

CHIP-8 has sixteen 8-bit registers V0-VF. VF doubles as the carry, borrow
and collision flag and is overwritten as a side effect by several opcodes.

Register values are their 4-bit index, so a Register can index a
bytearray directly:

    >>> regs = bytearray(16)
    >>> regs[Register.VA] = 0x42
"""

from enum import IntEnum
from typing import Optional


class Register(IntEnum):
    """General purpose register identifier (index 0x0-0xF)."""
    V0 = 0x0
    V1 = 0x1
    V2 = 0x2
    V3 = 0x3
    V4 = 0x4
    V5 = 0x5
    V6 = 0x6
    V7 = 0x7
    V8 = 0x8
    V9 = 0x9
    VA = 0xA
    VB = 0xB
    VC = 0xC
    VD = 0xD
    VE = 0xE
    VF = 0xF  # Flag register

    @classmethod
    def indexed(cls, index: int) -> Optional["Register"]:
        """Return the register with the given index, or None if index > 0xF."""
        if 0 <= index <= 0xF:
            return cls(index)
        return None

    @property
    def index(self) -> int:
        """4-bit register index."""
        return int(self)

    def __str__(self) -> str:
        return self.name

    def __format__(self, spec: str) -> str:
        # Bare {} gives the name, a format spec formats the index
        if spec:
            return format(int(self), spec)
        return self.name


FLAG_REGISTER = Register.VF

REGISTER_COUNT = len(Register)
