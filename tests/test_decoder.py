"""
Decoder Unit Tests
==================

Tests for the CHIP-8 instruction decoder.

Test coverage includes:
- Totality: every 16-bit word decodes or raises a DecodeError
- Determinism
- Round trip of every documented bit pattern
- Error classification for undefined words
- Assembly rendering
"""

import pytest
from chip8_vm.errors import (
    Chip8Error,
    DecodeError,
    UnknownOpcodeError,
    UnknownSubcodeError,
)
from chip8_vm.isa import (
    U12,
    U4,
    Register,
    INSTRUCTION_SET,
    decode,
    decode_bytes,
    Cls, Ret, Jp, Call, Seq, SneLit, Se, Ldl, Addl,
    Ld, Or, And, Xor, AddC, SubC, ShrC, SubN, ShlC,
    Sne, Ldi, Jpl, Rnd, Drw, Skp, Sknp,
    MovDt, LdKb, LdDt, LdSt, AddI, LdSpr, LdBcd, PushReg, PopReg,
)

V0, V1, V2, V3, VA = Register.V0, Register.V1, Register.V2, Register.V3, Register.VA


# =============================================================================
# Documented Pattern Table
# =============================================================================

DOCUMENTED = [
    (0x00E0, Cls()),
    (0x00EE, Ret()),
    (0x1228, Jp(U12(0x228))),
    (0x2ABC, Call(U12(0xABC))),
    (0x3A1F, Seq(VA, 0x1F)),
    (0x431F, SneLit(V3, 0x1F)),
    (0x5120, Se(V1, V2)),
    (0x6A02, Ldl(VA, 0x02)),
    (0x7105, Addl(V1, 0x05)),
    (0x8120, Ld(V1, V2)),
    (0x8121, Or(V1, V2)),
    (0x8122, And(V1, V2)),
    (0x8123, Xor(V1, V2)),
    (0x8124, AddC(V1, V2)),
    (0x8125, SubC(V1, V2)),
    (0x8126, ShrC(V1, V2)),
    (0x8127, SubN(V1, V2)),
    (0x812E, ShlC(V1, V2)),
    (0x9120, Sne(V1, V2)),
    (0xA234, Ldi(U12(0x234))),
    (0xB300, Jpl(U12(0x300))),
    (0xC3FF, Rnd(V3, 0xFF)),
    (0xD125, Drw(V1, V2, U4(5))),
    (0xE19E, Skp(V1)),
    (0xE1A1, Sknp(V1)),
    (0xF107, MovDt(V1)),
    (0xF10A, LdKb(V1)),
    (0xF115, LdDt(V1)),
    (0xF118, LdSt(V1)),
    (0xF11E, AddI(V1)),
    (0xF129, LdSpr(V1)),
    (0xF133, LdBcd(V1)),
    (0xF155, PushReg(V1)),
    (0xF165, PopReg(V1)),
]


# =============================================================================
# Totality and Determinism
# =============================================================================

class TestDecoderTotality:
    """Every word either decodes or raises a DecodeError."""

    def test_all_words(self):
        """No word raises anything other than a DecodeError."""
        decoded = 0
        failed = 0
        for word in range(0x10000):
            try:
                decode(word)
                decoded += 1
            except DecodeError:
                failed += 1
        assert decoded + failed == 0x10000
        assert decoded > failed

    def test_every_instruction_class_reachable(self):
        """Each instruction class is produced by at least one word."""
        seen = set()
        for word in range(0x10000):
            try:
                seen.add(type(decode(word)))
            except DecodeError:
                pass
        assert seen == set(INSTRUCTION_SET)

    def test_deterministic(self):
        """The same word always decodes to an equal instruction."""
        for word in range(0, 0x10000, 97):
            try:
                first = decode(word)
            except DecodeError as e:
                with pytest.raises(type(e)):
                    decode(word)
                continue
            assert decode(word) == first


# =============================================================================
# Round Trip of Documented Patterns
# =============================================================================

class TestDocumentedPatterns:
    """Each documented pattern decodes to its instruction with exact operands."""

    @pytest.mark.parametrize("word,expected", DOCUMENTED, ids=lambda v: f"{v:04X}" if isinstance(v, int) else None)
    def test_pattern(self, word, expected):
        assert decode(word) == expected

    def test_table_covers_instruction_set(self):
        assert {type(instr) for _, instr in DOCUMENTED} == set(INSTRUCTION_SET)

    def test_instruction_set_size(self):
        assert len(INSTRUCTION_SET) == 34

    def test_decode_bytes_big_endian(self):
        assert decode_bytes(0x00, 0xE0) == Cls()
        assert decode_bytes(0xA2, 0x34) == Ldi(U12(0x234))

    def test_bnnn_is_jump_with_offset(self):
        """Bnnn decodes to JP V0, addr, not a plain jump."""
        instr = decode(0xBFFF)
        assert isinstance(instr, Jpl)
        assert instr.addr == 0xFFF

    def test_operand_types(self):
        """Operands carry their masked types."""
        drw = decode(0xDABF)
        assert drw.vx is Register.VA
        assert drw.vy is Register.VB
        assert isinstance(drw.nibble, U4)
        assert drw.nibble == 0xF

        jp = decode(0x1FFF)
        assert isinstance(jp.addr, U12)

    def test_instructions_are_immutable(self):
        instr = decode(0x6A02)
        with pytest.raises(AttributeError):
            instr.byte = 3


# =============================================================================
# Decode Errors
# =============================================================================

class TestDecodeErrors:
    """Undefined words raise the right DecodeError subclass."""

    @pytest.mark.parametrize("word", [0x0000, 0x0123, 0x00E1, 0x00FF, 0x0FFF])
    def test_family_0_unknown(self, word):
        """0nnn other than CLS/RET is not decoded."""
        with pytest.raises(UnknownOpcodeError) as exc_info:
            decode(word)
        assert exc_info.value.word == word

    @pytest.mark.parametrize("word", [0x5121, 0x512F, 0x9121, 0x912E])
    def test_register_compare_needs_zero_nibble(self, word):
        with pytest.raises(UnknownOpcodeError):
            decode(word)

    @pytest.mark.parametrize("op", [0x8, 0x9, 0xA, 0xB, 0xC, 0xD, 0xF])
    def test_alu_unknown_subcode(self, op):
        word = 0x8120 | op
        with pytest.raises(UnknownSubcodeError) as exc_info:
            decode(word)
        err = exc_info.value
        assert err.family == 0x8
        assert err.op == op
        assert err.word == word

    @pytest.mark.parametrize("word", [0xE100, 0xE19F, 0xE1A0])
    def test_keyboard_family_unknown(self, word):
        with pytest.raises(UnknownOpcodeError):
            decode(word)

    @pytest.mark.parametrize("word", [0xF100, 0xF108, 0xF166, 0xF1FF])
    def test_misc_family_unknown(self, word):
        with pytest.raises(UnknownOpcodeError):
            decode(word)

    def test_error_hierarchy(self):
        with pytest.raises(DecodeError):
            decode(0x0123)
        with pytest.raises(Chip8Error):
            decode(0x8128)

    def test_error_message_without_address(self):
        """A bare decode failure has no address attached."""
        with pytest.raises(UnknownOpcodeError) as exc_info:
            decode(0x0123)
        assert exc_info.value.address is None
        assert str(exc_info.value) == "error: unknown opcode $0123"


# =============================================================================
# Assembly Rendering
# =============================================================================

class TestAssemblyRendering:
    """str(instruction) gives conventional assembly syntax."""

    @pytest.mark.parametrize("word,text", [
        (0x00E0, "CLS"),
        (0x00EE, "RET"),
        (0x1228, "JP $228"),
        (0x2ABC, "CALL $ABC"),
        (0x3A1F, "SE VA, $1F"),
        (0x431F, "SNE V3, $1F"),
        (0x6A02, "LD VA, $02"),
        (0x8124, "ADD V1, V2"),
        (0x8127, "SUBN V1, V2"),
        (0xA234, "LD I, $234"),
        (0xB300, "JP V0, $300"),
        (0xD125, "DRW V1, V2, 5"),
        (0xE19E, "SKP V1"),
        (0xF30A, "LD V3, K"),
        (0xF129, "LD F, V1"),
        (0xF555, "LD [I], V5"),
        (0xF565, "LD V5, [I]"),
    ])
    def test_asm(self, word, text):
        assert str(decode(word)) == text

    def test_mnemonic_tags(self):
        assert decode(0x431F).MNEMONIC == "SNELIT"
        assert decode(0x431F).PATTERN == "4xkk"
        assert decode(0xF155).MNEMONIC == "PUSHREG"
