"""
CHIP-8 Emulator
===============

The machine state and the decode/execute engine.

Quick Start
-----------

Basic usage::

    >>> from chip8_vm.emulator import Machine, QUIRKS_MODERN
    >>> m = Machine(rom_bytes, QUIRKS_MODERN)
    >>> while not m.halted:
    ...     m.step(next_key=None)
    >>> print(m.frame_buffer.get_text())

Module Structure
----------------

- `machine.py`: Machine class (state + step)
- `memory.py`: 4KB memory, font, program loading
- `display.py`: 64x32 frame buffer and rendering
- `keyboard.py`: 16-key hex keypad
- `timers.py`: 60Hz delay and sound timers
- `quirks.py`: compatibility flags and presets
"""

# Main entry point
from .machine import Machine, MachineState, STACK_LIMIT

# Memory subsystem
from .memory import (
    Memory,
    FONT,
    FONT_GLYPH_SIZE,
    MEMORY_SIZE,
    PROGRAM_START,
    PROGRAM_MAX_SIZE,
    glyph_address,
    load_program_file,
)

# I/O
from .display import FrameBuffer, DisplayState, DISPLAY_WIDTH, DISPLAY_HEIGHT, COLOR_SCHEMES
from .keyboard import Key, Keyboard, KEYPAD_LAYOUT, HOST_KEY_MAP, resolve_key
from .timers import Timers, TIMER_HZ, TIMER_PERIOD

# Configuration
from .quirks import (
    Quirks,
    QUIRKS_COSMAC_VIP,
    QUIRKS_MODERN,
    QUIRKS_DEFAULT,
    get_quirks,
    list_quirks,
)

__all__ = [
    # Main API
    "Machine",
    "MachineState",
    "STACK_LIMIT",

    # Memory
    "Memory",
    "FONT",
    "FONT_GLYPH_SIZE",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "PROGRAM_MAX_SIZE",
    "glyph_address",
    "load_program_file",

    # Display
    "FrameBuffer",
    "DisplayState",
    "DISPLAY_WIDTH",
    "DISPLAY_HEIGHT",
    "COLOR_SCHEMES",

    # Keyboard
    "Key",
    "Keyboard",
    "KEYPAD_LAYOUT",
    "HOST_KEY_MAP",
    "resolve_key",

    # Timers
    "Timers",
    "TIMER_HZ",
    "TIMER_PERIOD",

    # Quirks
    "Quirks",
    "QUIRKS_COSMAC_VIP",
    "QUIRKS_MODERN",
    "QUIRKS_DEFAULT",
    "get_quirks",
    "list_quirks",
]
