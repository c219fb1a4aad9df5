"""
CHIP-8 Disassembler
===================

Disassembles CHIP-8 program images into human-readable assembly.

CHIP-8 instructions are always two bytes, big-endian. The disassembler
walks the image in two-byte steps from the load address ($200 by default)
and decodes each word with the same decoder the machine uses. ROMs mix
sprite data with code, so words that do not decode are emitted as data
with the decode error as a comment rather than stopping the listing.

Usage:
    disasm = Chip8Disassembler()

    # Disassemble a whole ROM
    for instr in disasm.disassemble(rom_bytes):
        print(instr)

    # Disassemble a single word
    instr = disasm.disassemble_one(rom_bytes, address=0x200)
    print(f"{instr.address:03X}: {instr.mnemonic} {instr.operand_str}")
"""

from dataclasses import dataclass
from typing import List, Optional

from ..errors import DecodeError
from ..isa import Instruction, decode
from ..emulator.memory import PROGRAM_START


# =============================================================================
# Data Structures
# =============================================================================

@dataclass
class DisassembledInstruction:
    """
    Represents a single disassembled CHIP-8 word.

    Attributes:
        address: Memory address of the word
        word: The 16-bit word (or the lone trailing byte)
        instruction: Decoded instruction, None for data
        mnemonic: Assembly mnemonic (e.g. "LD", "DRW", ".WORD")
        operand_str: Formatted operands
        raw_bytes: Bytes making up this entry
        comment: Optional comment (decode error, jump target note)
    """
    address: int
    word: int
    instruction: Optional[Instruction]
    mnemonic: str
    operand_str: str
    raw_bytes: bytes
    comment: str = ""

    @property
    def size(self) -> int:
        return len(self.raw_bytes)

    @property
    def is_data(self) -> bool:
        return self.instruction is None

    def __str__(self) -> str:
        """Format as listing line: ADDRESS: BYTES  MNEMONIC OPERANDS"""
        hex_bytes = " ".join(f"{b:02X}" for b in self.raw_bytes).ljust(5)

        if self.operand_str:
            asm = f"{self.mnemonic} {self.operand_str}"
        else:
            asm = self.mnemonic

        if self.comment:
            return f"${self.address:03X}: {hex_bytes}  {asm:<16} ; {self.comment}"
        return f"${self.address:03X}: {hex_bytes}  {asm}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "address": f"${self.address:03X}",
            "address_int": self.address,
            "word": f"${self.word:04X}",
            "mnemonic": self.mnemonic,
            "operand": self.operand_str,
            "tag": self.instruction.MNEMONIC if self.instruction else None,
            "size": self.size,
            "bytes": [f"${b:02X}" for b in self.raw_bytes],
            "comment": self.comment,
        }


# =============================================================================
# CHIP-8 Disassembler
# =============================================================================

class Chip8Disassembler:
    """
    Disassembler for CHIP-8 program images.
    """

    def disassemble_one(
        self,
        data: bytes,
        address: int = PROGRAM_START,
        offset: int = 0,
    ) -> DisassembledInstruction:
        """
        Disassemble the word at offset.

        Args:
            data: Byte buffer containing the program
            address: Memory address of the word (for display)
            offset: Offset into data where the word starts

        Returns:
            DisassembledInstruction; undecodable words come back as data

        Raises:
            ValueError: If offset is beyond the data
        """
        if offset >= len(data):
            raise ValueError(f"Offset {offset} beyond data length {len(data)}")

        if offset + 1 >= len(data):
            # Odd-length image: lone trailing byte
            byte = data[offset]
            return DisassembledInstruction(
                address=address,
                word=byte,
                instruction=None,
                mnemonic=".BYTE",
                operand_str=f"${byte:02X}",
                raw_bytes=bytes([byte]),
                comment="trailing byte",
            )

        raw = bytes(data[offset:offset + 2])
        word = (raw[0] << 8) | raw[1]

        try:
            instr = decode(word)
        except DecodeError as e:
            return DisassembledInstruction(
                address=address,
                word=word,
                instruction=None,
                mnemonic=".WORD",
                operand_str=f"${word:04X}",
                raw_bytes=raw,
                comment=e.message,
            )

        mnemonic, _, operands = instr.asm().partition(" ")
        comment = ""
        if instr.MNEMONIC == "JP" and int(instr.addr) == address:
            comment = "halt (jump to self)"

        return DisassembledInstruction(
            address=address,
            word=word,
            instruction=instr,
            mnemonic=mnemonic,
            operand_str=operands,
            raw_bytes=raw,
            comment=comment,
        )

    def disassemble(
        self,
        data: bytes,
        start_address: int = PROGRAM_START,
        count: Optional[int] = None,
    ) -> List[DisassembledInstruction]:
        """
        Disassemble a program image.

        Args:
            data: Program bytes
            start_address: Address of data[0] (default $200)
            count: Maximum number of entries (default: whole image)

        Returns:
            List of DisassembledInstruction, one per two-byte word
        """
        result = []
        offset = 0

        while offset < len(data):
            if count is not None and len(result) >= count:
                break
            entry = self.disassemble_one(data, start_address + offset, offset)
            result.append(entry)
            offset += entry.size

        return result
