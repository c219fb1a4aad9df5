"""
CHIP-8 Instruction Set
======================

The closed set of CHIP-8 instructions, one frozen dataclass per opcode
family. Instructions are produced only by the decoder and consumed by the
machine's single `match` statement, so adding a variant here without
handling it in `Machine._execute` is caught by the exhaustiveness tests.

Operand conventions (from Cowgod's CHIP-8 technical reference):

    nnn or addr - 12-bit address, lowest 12 bits of the word (U12)
    n or nibble - 4-bit value, lowest 4 bits of the word (U4)
    x           - register selector, low nibble of the high byte
    y           - register selector, high nibble of the low byte
    kk or byte  - 8-bit literal, low byte of the word

Each class carries:
    MNEMONIC: the short tag used in traces (e.g. "SNELIT")
    PATTERN:  the documented bit pattern (e.g. "4xkk")

and `str(instr)` renders conventional assembly syntax ("SNE V3, $1F").
"""

from dataclasses import dataclass
from typing import ClassVar, Tuple, Type

from .numtypes import U12, U4
from .registers import Register


@dataclass(frozen=True)
class Instruction:
    """Base class for all decoded instructions."""

    MNEMONIC: ClassVar[str] = ""
    PATTERN: ClassVar[str] = ""

    def asm(self) -> str:
        """Assembly-style rendering of the instruction."""
        return self.MNEMONIC

    def __str__(self) -> str:
        return self.asm()


# =============================================================================
# Operand Shapes
# =============================================================================

@dataclass(frozen=True)
class _Addr(Instruction):
    addr: U12


@dataclass(frozen=True)
class _RegByte(Instruction):
    vx: Register
    byte: int


@dataclass(frozen=True)
class _RegReg(Instruction):
    vx: Register
    vy: Register


@dataclass(frozen=True)
class _Reg(Instruction):
    vx: Register


def _hex_addr(addr: U12) -> str:
    return f"${int(addr):03X}"


def _hex_byte(byte: int) -> str:
    return f"${byte:02X}"


# =============================================================================
# 0x0 - 0x2: Flow Control
# =============================================================================

@dataclass(frozen=True)
class Cls(Instruction):
    """00E0 - CLS: clear the display."""
    MNEMONIC: ClassVar[str] = "CLS"
    PATTERN: ClassVar[str] = "00E0"


@dataclass(frozen=True)
class Ret(Instruction):
    """00EE - RET: return from a subroutine."""
    MNEMONIC: ClassVar[str] = "RET"
    PATTERN: ClassVar[str] = "00EE"


@dataclass(frozen=True)
class Jp(_Addr):
    """1nnn - JP addr: jump to nnn."""
    MNEMONIC: ClassVar[str] = "JP"
    PATTERN: ClassVar[str] = "1nnn"

    def asm(self) -> str:
        return f"JP {_hex_addr(self.addr)}"


@dataclass(frozen=True)
class Call(_Addr):
    """2nnn - CALL addr: call subroutine at nnn."""
    MNEMONIC: ClassVar[str] = "CALL"
    PATTERN: ClassVar[str] = "2nnn"

    def asm(self) -> str:
        return f"CALL {_hex_addr(self.addr)}"


# =============================================================================
# 0x3 - 0x7: Skips and Literals
# =============================================================================

@dataclass(frozen=True)
class Seq(_RegByte):
    """3xkk - SE Vx, byte: skip next instruction if Vx == kk."""
    MNEMONIC: ClassVar[str] = "SEQ"
    PATTERN: ClassVar[str] = "3xkk"

    def asm(self) -> str:
        return f"SE {self.vx}, {_hex_byte(self.byte)}"


@dataclass(frozen=True)
class SneLit(_RegByte):
    """4xkk - SNE Vx, byte: skip next instruction if Vx != kk."""
    MNEMONIC: ClassVar[str] = "SNELIT"
    PATTERN: ClassVar[str] = "4xkk"

    def asm(self) -> str:
        return f"SNE {self.vx}, {_hex_byte(self.byte)}"


@dataclass(frozen=True)
class Se(_RegReg):
    """5xy0 - SE Vx, Vy: skip next instruction if Vx == Vy."""
    MNEMONIC: ClassVar[str] = "SE"
    PATTERN: ClassVar[str] = "5xy0"

    def asm(self) -> str:
        return f"SE {self.vx}, {self.vy}"


@dataclass(frozen=True)
class Ldl(_RegByte):
    """6xkk - LD Vx, byte: Vx = kk."""
    MNEMONIC: ClassVar[str] = "LDL"
    PATTERN: ClassVar[str] = "6xkk"

    def asm(self) -> str:
        return f"LD {self.vx}, {_hex_byte(self.byte)}"


@dataclass(frozen=True)
class Addl(_RegByte):
    """7xkk - ADD Vx, byte: Vx = Vx + kk (wrapping, VF untouched)."""
    MNEMONIC: ClassVar[str] = "ADDL"
    PATTERN: ClassVar[str] = "7xkk"

    def asm(self) -> str:
        return f"ADD {self.vx}, {_hex_byte(self.byte)}"


# =============================================================================
# 0x8: Register-Register ALU
# =============================================================================

@dataclass(frozen=True)
class Ld(_RegReg):
    """8xy0 - LD Vx, Vy: Vx = Vy."""
    MNEMONIC: ClassVar[str] = "LD"
    PATTERN: ClassVar[str] = "8xy0"

    def asm(self) -> str:
        return f"LD {self.vx}, {self.vy}"


@dataclass(frozen=True)
class Or(_RegReg):
    """8xy1 - OR Vx, Vy: Vx = Vx | Vy."""
    MNEMONIC: ClassVar[str] = "OR"
    PATTERN: ClassVar[str] = "8xy1"

    def asm(self) -> str:
        return f"OR {self.vx}, {self.vy}"


@dataclass(frozen=True)
class And(_RegReg):
    """8xy2 - AND Vx, Vy: Vx = Vx & Vy."""
    MNEMONIC: ClassVar[str] = "AND"
    PATTERN: ClassVar[str] = "8xy2"

    def asm(self) -> str:
        return f"AND {self.vx}, {self.vy}"


@dataclass(frozen=True)
class Xor(_RegReg):
    """8xy3 - XOR Vx, Vy: Vx = Vx ^ Vy."""
    MNEMONIC: ClassVar[str] = "XOR"
    PATTERN: ClassVar[str] = "8xy3"

    def asm(self) -> str:
        return f"XOR {self.vx}, {self.vy}"


@dataclass(frozen=True)
class AddC(_RegReg):
    """8xy4 - ADD Vx, Vy: Vx = Vx + Vy, VF = carry."""
    MNEMONIC: ClassVar[str] = "ADDC"
    PATTERN: ClassVar[str] = "8xy4"

    def asm(self) -> str:
        return f"ADD {self.vx}, {self.vy}"


@dataclass(frozen=True)
class SubC(_RegReg):
    """8xy5 - SUB Vx, Vy: Vx = Vx - Vy, VF = NOT borrow."""
    MNEMONIC: ClassVar[str] = "SUBC"
    PATTERN: ClassVar[str] = "8xy5"

    def asm(self) -> str:
        return f"SUB {self.vx}, {self.vy}"


@dataclass(frozen=True)
class ShrC(_RegReg):
    """8xy6 - SHR Vx {, Vy}: shift right, VF = bit shifted out."""
    MNEMONIC: ClassVar[str] = "SHRC"
    PATTERN: ClassVar[str] = "8xy6"

    def asm(self) -> str:
        return f"SHR {self.vx}, {self.vy}"


@dataclass(frozen=True)
class SubN(_RegReg):
    """8xy7 - SUBN Vx, Vy: Vx = Vy - Vx, VF = NOT borrow."""
    MNEMONIC: ClassVar[str] = "SUBN"
    PATTERN: ClassVar[str] = "8xy7"

    def asm(self) -> str:
        return f"SUBN {self.vx}, {self.vy}"


@dataclass(frozen=True)
class ShlC(_RegReg):
    """8xyE - SHL Vx {, Vy}: shift left, VF = bit shifted out."""
    MNEMONIC: ClassVar[str] = "SHLC"
    PATTERN: ClassVar[str] = "8xyE"

    def asm(self) -> str:
        return f"SHL {self.vx}, {self.vy}"


# =============================================================================
# 0x9 - 0xD
# =============================================================================

@dataclass(frozen=True)
class Sne(_RegReg):
    """9xy0 - SNE Vx, Vy: skip next instruction if Vx != Vy."""
    MNEMONIC: ClassVar[str] = "SNE"
    PATTERN: ClassVar[str] = "9xy0"

    def asm(self) -> str:
        return f"SNE {self.vx}, {self.vy}"


@dataclass(frozen=True)
class Ldi(_Addr):
    """Annn - LD I, addr: I = nnn."""
    MNEMONIC: ClassVar[str] = "LDI"
    PATTERN: ClassVar[str] = "Annn"

    def asm(self) -> str:
        return f"LD I, {_hex_addr(self.addr)}"


@dataclass(frozen=True)
class Jpl(_Addr):
    """Bnnn - JP V0, addr: jump to nnn + V0."""
    MNEMONIC: ClassVar[str] = "JPL"
    PATTERN: ClassVar[str] = "Bnnn"

    def asm(self) -> str:
        return f"JP V0, {_hex_addr(self.addr)}"


@dataclass(frozen=True)
class Rnd(_RegByte):
    """Cxkk - RND Vx, byte: Vx = random byte & kk."""
    MNEMONIC: ClassVar[str] = "RND"
    PATTERN: ClassVar[str] = "Cxkk"

    def asm(self) -> str:
        return f"RND {self.vx}, {_hex_byte(self.byte)}"


@dataclass(frozen=True)
class Drw(Instruction):
    """Dxyn - DRW Vx, Vy, nibble: draw n-byte sprite from I at (Vx, Vy)."""
    MNEMONIC: ClassVar[str] = "DRW"
    PATTERN: ClassVar[str] = "Dxyn"

    vx: Register
    vy: Register
    nibble: U4

    def asm(self) -> str:
        return f"DRW {self.vx}, {self.vy}, {int(self.nibble)}"


# =============================================================================
# 0xE: Keyboard Skips
# =============================================================================

@dataclass(frozen=True)
class Skp(_Reg):
    """Ex9E - SKP Vx: skip next instruction if key Vx is down."""
    MNEMONIC: ClassVar[str] = "SKP"
    PATTERN: ClassVar[str] = "Ex9E"

    def asm(self) -> str:
        return f"SKP {self.vx}"


@dataclass(frozen=True)
class Sknp(_Reg):
    """ExA1 - SKNP Vx: skip next instruction if key Vx is up."""
    MNEMONIC: ClassVar[str] = "SKNP"
    PATTERN: ClassVar[str] = "ExA1"

    def asm(self) -> str:
        return f"SKNP {self.vx}"


# =============================================================================
# 0xF: Timers, Keyboard Wait, Index Register and Memory
# =============================================================================

@dataclass(frozen=True)
class MovDt(_Reg):
    """Fx07 - LD Vx, DT: Vx = delay timer."""
    MNEMONIC: ClassVar[str] = "MOVDT"
    PATTERN: ClassVar[str] = "Fx07"

    def asm(self) -> str:
        return f"LD {self.vx}, DT"


@dataclass(frozen=True)
class LdKb(_Reg):
    """Fx0A - LD Vx, K: wait for a key press, store the key in Vx."""
    MNEMONIC: ClassVar[str] = "LDKB"
    PATTERN: ClassVar[str] = "Fx0A"

    def asm(self) -> str:
        return f"LD {self.vx}, K"


@dataclass(frozen=True)
class LdDt(_Reg):
    """Fx15 - LD DT, Vx: delay timer = Vx."""
    MNEMONIC: ClassVar[str] = "LDDT"
    PATTERN: ClassVar[str] = "Fx15"

    def asm(self) -> str:
        return f"LD DT, {self.vx}"


@dataclass(frozen=True)
class LdSt(_Reg):
    """Fx18 - LD ST, Vx: sound timer = Vx."""
    MNEMONIC: ClassVar[str] = "LDST"
    PATTERN: ClassVar[str] = "Fx18"

    def asm(self) -> str:
        return f"LD ST, {self.vx}"


@dataclass(frozen=True)
class AddI(_Reg):
    """Fx1E - ADD I, Vx: I = I + Vx (12-bit)."""
    MNEMONIC: ClassVar[str] = "ADDI"
    PATTERN: ClassVar[str] = "Fx1E"

    def asm(self) -> str:
        return f"ADD I, {self.vx}"


@dataclass(frozen=True)
class LdSpr(_Reg):
    """Fx29 - LD F, Vx: I = address of font glyph for digit Vx."""
    MNEMONIC: ClassVar[str] = "LDSPR"
    PATTERN: ClassVar[str] = "Fx29"

    def asm(self) -> str:
        return f"LD F, {self.vx}"


@dataclass(frozen=True)
class LdBcd(_Reg):
    """Fx33 - LD B, Vx: store BCD of Vx at I, I+1, I+2."""
    MNEMONIC: ClassVar[str] = "LDBCD"
    PATTERN: ClassVar[str] = "Fx33"

    def asm(self) -> str:
        return f"LD B, {self.vx}"


@dataclass(frozen=True)
class PushReg(_Reg):
    """Fx55 - LD [I], Vx: store V0..Vx (inclusive) at I."""
    MNEMONIC: ClassVar[str] = "PUSHREG"
    PATTERN: ClassVar[str] = "Fx55"

    def asm(self) -> str:
        return f"LD [I], {self.vx}"


@dataclass(frozen=True)
class PopReg(_Reg):
    """Fx65 - LD Vx, [I]: load V0..Vx (inclusive) from I."""
    MNEMONIC: ClassVar[str] = "POPREG"
    PATTERN: ClassVar[str] = "Fx65"

    def asm(self) -> str:
        return f"LD {self.vx}, [I]"


# =============================================================================
# Instruction Set Table
# =============================================================================

INSTRUCTION_SET: Tuple[Type[Instruction], ...] = (
    Cls, Ret, Jp, Call, Seq, SneLit, Se, Ldl, Addl,
    Ld, Or, And, Xor, AddC, SubC, ShrC, SubN, ShlC,
    Sne, Ldi, Jpl, Rnd, Drw, Skp, Sknp,
    MovDt, LdKb, LdDt, LdSt, AddI, LdSpr, LdBcd, PushReg, PopReg,
)
