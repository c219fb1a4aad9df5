"""
CHIP-8 Instruction Decoder
==========================

Turns a 16-bit instruction word into an `Instruction`.

The word is split into four nibbles and matched against the documented
opcode table. Matching is exhaustive over the high nibble; the families
that share a high nibble (0x0, 0x8, 0xE, 0xF) dispatch on their trailing
nibbles. Anything left over raises a `DecodeError` subclass:

- UnknownOpcodeError: the word matched no pattern (e.g. 0x0nnn other than
  00E0/00EE, or 5xy1)
- UnknownSubcodeError: family 0x8 with an undefined operation nibble
- InvalidRegisterError: a register nibble did not map to a register

Decoding is pure: the same word always gives the same result.

Usage:
    >>> decode(0x6A02)
    Ldl(vx=<Register.VA: 10>, byte=2)
    >>> decode_bytes(0x00, 0xE0)
    Cls()
"""

from .numtypes import U12, U4, nibbles
from .registers import Register
from .instructions import (
    Instruction,
    Cls, Ret, Jp, Call, Seq, SneLit, Se, Ldl, Addl,
    Ld, Or, And, Xor, AddC, SubC, ShrC, SubN, ShlC,
    Sne, Ldi, Jpl, Rnd, Drw, Skp, Sknp,
    MovDt, LdKb, LdDt, LdSt, AddI, LdSpr, LdBcd, PushReg, PopReg,
)
from ..errors import InvalidRegisterError, UnknownOpcodeError, UnknownSubcodeError


# Family 0x8 operation nibble -> instruction class
_ALU_OPS = {
    0x0: Ld,
    0x1: Or,
    0x2: And,
    0x3: Xor,
    0x4: AddC,
    0x5: SubC,
    0x6: ShrC,
    0x7: SubN,
    0xE: ShlC,
}

# Family 0xF low byte -> instruction class
_MISC_OPS = {
    0x07: MovDt,
    0x0A: LdKb,
    0x15: LdDt,
    0x18: LdSt,
    0x1E: AddI,
    0x29: LdSpr,
    0x33: LdBcd,
    0x55: PushReg,
    0x65: PopReg,
}


def _register(word: int, nibble: int) -> Register:
    reg = Register.indexed(nibble)
    if reg is None:
        raise InvalidRegisterError(word, nibble)
    return reg


def decode(word: int) -> Instruction:
    """
    Decode a 16-bit instruction word.

    Args:
        word: Instruction word (big-endian composition of two memory bytes)

    Returns:
        The decoded instruction

    Raises:
        UnknownOpcodeError: No opcode pattern matched
        UnknownSubcodeError: Family 0x8 with an undefined operation nibble
        InvalidRegisterError: A register nibble did not map to a register
    """
    word &= 0xFFFF
    family, x, y, n = nibbles(word)
    byte = word & 0xFF
    addr = U12.from_nibbles(x, y, n)

    match family:
        case 0x0:
            if word == 0x00E0:
                return Cls()
            if word == 0x00EE:
                return Ret()
            raise UnknownOpcodeError(word)
        case 0x1:
            return Jp(addr)
        case 0x2:
            return Call(addr)
        case 0x3:
            return Seq(_register(word, x), byte)
        case 0x4:
            return SneLit(_register(word, x), byte)
        case 0x5:
            if n != 0x0:
                raise UnknownOpcodeError(word)
            return Se(_register(word, x), _register(word, y))
        case 0x6:
            return Ldl(_register(word, x), byte)
        case 0x7:
            return Addl(_register(word, x), byte)
        case 0x8:
            vx = _register(word, x)
            vy = _register(word, y)
            op = _ALU_OPS.get(n)
            if op is None:
                raise UnknownSubcodeError(family, n, word)
            return op(vx, vy)
        case 0x9:
            if n != 0x0:
                raise UnknownOpcodeError(word)
            return Sne(_register(word, x), _register(word, y))
        case 0xA:
            return Ldi(addr)
        case 0xB:
            return Jpl(addr)
        case 0xC:
            return Rnd(_register(word, x), byte)
        case 0xD:
            return Drw(_register(word, x), _register(word, y), U4(n))
        case 0xE:
            if byte == 0x9E:
                return Skp(_register(word, x))
            if byte == 0xA1:
                return Sknp(_register(word, x))
            raise UnknownOpcodeError(word)
        case _:
            # family 0xF
            op = _MISC_OPS.get(byte)
            if op is None:
                raise UnknownOpcodeError(word)
            return op(_register(word, x))


def decode_bytes(hi: int, lo: int) -> Instruction:
    """Decode the word formed by two bytes in memory order (big-endian)."""
    return decode((hi & 0xFF) << 8 | (lo & 0xFF))
