"""
CHIP-8 VM - A CHIP-8 Virtual Machine and Toolkit
================================================

This package emulates the CHIP-8 virtual machine, the 1977 bytecode
format for small games first interpreted on the RCA COSMAC VIP.

The machine has sixteen 8-bit registers, a 12-bit index register, 4KB of
memory, a 64x32 monochrome display, a 16-key hex keypad and two 60Hz
countdown timers. Programs load at $200.

Main Components
---------------
- **isa**: Instruction set
    Numeric types, registers, instruction classes and the decoder

- **emulator**: The machine
    Memory, frame buffer, keyboard, timers, quirks and the step engine

- **disassembler**: ROM listings
    Decodes program images word by word for inspection

- **cli**: Command-line tools
    c8run, c8disasm and c8font

Quick Start
-----------
Run a ROM until it halts:
    >>> from chip8_vm import Machine, load_program_file
    >>> m = Machine(load_program_file("maze.ch8"))
    >>> m.run(max_steps=10_000)
    >>> print(m.frame_buffer.get_text())

Decode a single word:
    >>> from chip8_vm import decode
    >>> str(decode(0xD125))
    'DRW V1, V2, 5'

Or use the command-line tools:
    $ c8run maze.ch8 --max-steps 5000
    $ c8disasm maze.ch8 -o maze.asm
    $ c8font --png font.png

Reference Documentation
-----------------------
- Cowgod's CHIP-8 Technical Reference: http://devernay.free.fr/hacks/chip8/C8TECH10.HTM
- Quirks overview: https://chip8.gulrak.net/

Version History
---------------
1.0.0 - Initial release with emulator, disassembler and runner
"""

__version__ = "1.0.0"
__author__ = "CHIP-8 VM Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from chip8_vm.errors import (
    Chip8Error,
    DecodeError,
    UnknownOpcodeError,
    UnknownSubcodeError,
    InvalidRegisterError,
    MachineError,
    StackOverflowError,
    StackUnderflowError,
    InvalidKeyError,
    ProgramError,
    ProgramTooLargeError,
)
from chip8_vm.isa import U12, U4, Register, Instruction, decode, decode_bytes
from chip8_vm.emulator import (
    Machine,
    Key,
    Keyboard,
    FrameBuffer,
    Timers,
    Quirks,
    QUIRKS_COSMAC_VIP,
    QUIRKS_MODERN,
    QUIRKS_DEFAULT,
    get_quirks,
    load_program_file,
)
from chip8_vm.config import EmulatorConfig, get_default_config, set_default_config
from chip8_vm.disassembler import Chip8Disassembler

__all__ = [
    # Version info
    "__version__",
    "__author__",

    # Machine
    "Machine",
    "Key",
    "Keyboard",
    "FrameBuffer",
    "Timers",
    "Quirks",
    "QUIRKS_COSMAC_VIP",
    "QUIRKS_MODERN",
    "QUIRKS_DEFAULT",
    "get_quirks",
    "load_program_file",

    # Instruction set
    "U12",
    "U4",
    "Register",
    "Instruction",
    "decode",
    "decode_bytes",

    # Tools
    "Chip8Disassembler",
    "EmulatorConfig",
    "get_default_config",
    "set_default_config",

    # Errors
    "Chip8Error",
    "DecodeError",
    "UnknownOpcodeError",
    "UnknownSubcodeError",
    "InvalidRegisterError",
    "MachineError",
    "StackOverflowError",
    "StackUnderflowError",
    "InvalidKeyError",
    "ProgramError",
    "ProgramTooLargeError",
]
