"""
CHIP-8 Disassembler Module
==========================

Produces assembly listings of CHIP-8 program images, for the c8disasm
tool and for tracing in the runner.

Usage:
    from chip8_vm.disassembler import Chip8Disassembler

    disasm = Chip8Disassembler()
    listing = disasm.disassemble(rom_bytes, start_address=0x200)
"""

from .chip8 import Chip8Disassembler, DisassembledInstruction

__all__ = [
    "Chip8Disassembler",
    "DisassembledInstruction",
]
