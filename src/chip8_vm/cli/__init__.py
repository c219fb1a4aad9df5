"""
CHIP-8 VM Command-Line Interface
================================

This package provides command-line tools for the CHIP-8 VM:

- **c8run**: Headless ROM runner with text display output
- **c8disasm**: ROM disassembler
- **c8font**: Built-in font viewer

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["c8run", "c8disasm", "c8font"]
