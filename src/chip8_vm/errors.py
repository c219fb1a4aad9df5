"""
CHIP-8 VM Error Hierarchy
=========================

This module defines the exception hierarchy for the whole package. All
exceptions inherit from Chip8Error, allowing drivers to catch every
VM-related failure with a single except clause if desired.

Exception Hierarchy
-------------------
Chip8Error (base)
├── DecodeError (fetched word is not a CHIP-8 instruction)
│   ├── UnknownOpcodeError - no opcode pattern matched the word
│   ├── UnknownSubcodeError - family matched, trailing operation did not
│   └── InvalidRegisterError - a register nibble did not map to a register
├── MachineError (valid instruction hit an invalid machine state)
│   ├── StackOverflowError - CALL with a full call stack
│   ├── StackUnderflowError - RET with an empty call stack
│   └── InvalidKeyError - SKP/SKNP on a register holding a value > 0xF
└── ProgramError (program image rejected at load time)
    └── ProgramTooLargeError - image does not fit below 0xE00

Design Philosophy
-----------------
Both decode and machine errors are fatal to the running program. The engine
never skips or guesses; it raises, and the driver decides whether to halt,
log, or show the error. Every error raised by the engine carries the
address of the failing instruction when one is known.

Error messages follow this format:
    error at $0204: description
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class Chip8Error(Exception):
    """
    Base exception for all CHIP-8 VM errors.

    Attributes:
        message: The error description
        address: Address of the instruction that failed (optional)
    """

    def __init__(self, message: str, address: Optional[int] = None):
        self.message = message
        self.address = address
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.address is not None:
            return f"error at ${self.address:04X}: {self.message}"
        return f"error: {self.message}"

    def __str__(self) -> str:
        # address may be attached after construction (see Machine.step)
        return self._format_message()


# =============================================================================
# Decode Exceptions
# =============================================================================

class DecodeError(Chip8Error):
    """
    Base exception for words that do not decode to an instruction.

    Attributes:
        word: The 16-bit instruction word that failed to decode
    """

    def __init__(self, message: str, word: int, address: Optional[int] = None):
        self.word = word
        super().__init__(message, address)


class UnknownOpcodeError(DecodeError):
    """The full instruction word did not match any opcode pattern."""

    def __init__(self, word: int, address: Optional[int] = None):
        super().__init__(f"unknown opcode ${word:04X}", word, address)


class UnknownSubcodeError(DecodeError):
    """
    The family nibble matched but the trailing operation nibble did not.

    Only family 0x8 (register-register ALU operations) has sub-operations
    that are reported this way.

    Attributes:
        family: High nibble of the word
        op: Trailing operation nibble
    """

    def __init__(self, family: int, op: int, word: int, address: Optional[int] = None):
        self.family = family
        self.op = op
        super().__init__(
            f"unknown sub-operation ${op:X} for family ${family:X} (word ${word:04X})",
            word,
            address,
        )


class InvalidRegisterError(DecodeError):
    """
    A register-position nibble did not map to a general purpose register.

    Unreachable while the register mapping is total over 4 bits, but kept
    as a distinct failure mode.

    Attributes:
        nibble: The offending register nibble
    """

    def __init__(self, word: int, nibble: int, address: Optional[int] = None):
        self.nibble = nibble
        super().__init__(
            f"invalid register index ${nibble:X} in word ${word:04X}", word, address
        )


# =============================================================================
# Machine (Runtime) Exceptions
# =============================================================================

class MachineError(Chip8Error):
    """
    Base exception for structurally valid instructions that reached an
    invalid machine state.
    """
    pass


class StackOverflowError(MachineError):
    """CALL executed while the call stack already holds 16 return addresses."""

    def __init__(self, address: int):
        super().__init__("stack overflow", address)


class StackUnderflowError(MachineError):
    """RET executed with an empty call stack."""

    def __init__(self, address: int):
        super().__init__("stack underflow", address)


class InvalidKeyError(MachineError):
    """
    SKP/SKNP read a key value outside 0x0-0xF from its register.

    Attributes:
        value: The register value that was used as a key
    """

    def __init__(self, value: int, address: int):
        self.value = value
        super().__init__(f"invalid key ${value:02X}", address)


# =============================================================================
# Program Load Exceptions
# =============================================================================

class ProgramError(Chip8Error):
    """Base exception for program images rejected at load time."""
    pass


class ProgramTooLargeError(ProgramError):
    """
    Program image does not fit in the program area.

    Attributes:
        size: Size of the rejected image in bytes
        limit: Maximum accepted size in bytes
    """

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"program is {size} bytes, must be at most {limit} bytes")
