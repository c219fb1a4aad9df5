"""
CHIP-8 Instruction Set Architecture
===================================

Pure, side-effect free building blocks shared by the machine and the
disassembler:

- `numtypes.py`: U12/U4 masked integers and nibble extraction
- `registers.py`: the V0-VF register identifier
- `instructions.py`: one frozen dataclass per opcode family
- `decoder.py`: 16-bit word -> Instruction
"""

from .numtypes import U12, U4, nibble_at, nibbles
from .registers import Register, FLAG_REGISTER, REGISTER_COUNT
from .instructions import (
    Instruction,
    INSTRUCTION_SET,
    Cls, Ret, Jp, Call, Seq, SneLit, Se, Ldl, Addl,
    Ld, Or, And, Xor, AddC, SubC, ShrC, SubN, ShlC,
    Sne, Ldi, Jpl, Rnd, Drw, Skp, Sknp,
    MovDt, LdKb, LdDt, LdSt, AddI, LdSpr, LdBcd, PushReg, PopReg,
)
from .decoder import decode, decode_bytes

__all__ = [
    # Numeric types
    "U12",
    "U4",
    "nibble_at",
    "nibbles",

    # Registers
    "Register",
    "FLAG_REGISTER",
    "REGISTER_COUNT",

    # Decoder
    "decode",
    "decode_bytes",

    # Instructions
    "Instruction",
    "INSTRUCTION_SET",
    "Cls", "Ret", "Jp", "Call", "Seq", "SneLit", "Se", "Ldl", "Addl",
    "Ld", "Or", "And", "Xor", "AddC", "SubC", "ShrC", "SubN", "ShlC",
    "Sne", "Ldi", "Jpl", "Rnd", "Drw", "Skp", "Sknp",
    "MovDt", "LdKb", "LdDt", "LdSt", "AddI", "LdSpr", "LdBcd", "PushReg", "PopReg",
]
