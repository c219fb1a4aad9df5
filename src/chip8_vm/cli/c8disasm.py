"""
c8disasm - CHIP-8 Disassembler Command-Line Interface
=====================================================

This module implements the command-line interface for the CHIP-8 ROM
disassembler. ROM images are decoded in two-byte words from the load
address. Sprite data mixed into the code shows up as .WORD lines with the
decode error as a comment.

Usage Examples
--------------
Disassemble a ROM:
    $ c8disasm maze.ch8

Limit number of words:
    $ c8disasm maze.ch8 --count 20

Output to file:
    $ c8disasm maze.ch8 -o maze.asm

Hex dump with disassembly:
    $ c8disasm maze.ch8 --hex
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from chip8_vm import __version__
from chip8_vm.cli.errors import ExitCode, handle_cli_exception
from chip8_vm.disassembler import Chip8Disassembler
from chip8_vm.emulator.memory import PROGRAM_START, load_program_file


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "-a", "--address",
    type=str,
    default=f"0x{PROGRAM_START:03X}",
    help="Load address of the image (hex with 0x or $ prefix, or decimal). Default: 0x200",
)
@click.option(
    "-c", "--count",
    type=int,
    default=None,
    help="Maximum number of words to disassemble (default: all)",
)
@click.option(
    "--hex",
    "show_hex",
    is_flag=True,
    help="Include hex dump before disassembly",
)
@click.option(
    "--no-bytes",
    is_flag=True,
    help="Omit raw bytes from output (show only mnemonic and operand)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="c8disasm")
def main(
    input_file: Path,
    output: Optional[Path],
    address: str,
    count: Optional[int],
    show_hex: bool,
    no_bytes: bool,
    verbose: bool,
) -> None:
    """
    Disassemble a CHIP-8 ROM image.

    INPUT_FILE is the ROM to disassemble (.ch8).

    Examples:

        # Disassemble a whole ROM
        c8disasm maze.ch8

        # First 20 words to a file
        c8disasm maze.ch8 --count 20 -o listing.asm
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")

    # Parse base address
    try:
        if address.lower().startswith("0x"):
            base_address = int(address, 16)
        elif address.startswith("$"):
            base_address = int(address[1:], 16)
        else:
            base_address = int(address)
    except ValueError:
        click.echo(f"Error: Invalid address '{address}'", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    if not 0 <= base_address <= 0xFFF:
        click.echo("Error: Address must be 0-4095 (0x000-0xFFF)", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    try:
        data = load_program_file(input_file)
    except Exception as e:
        handle_cli_exception(e, verbose=verbose)

    if len(data) == 0:
        click.echo(f"Error: {input_file} is empty", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    if verbose:
        click.echo(f"Input file: {input_file} ({len(data)} bytes)", err=True)
        click.echo(f"Base address: ${base_address:03X}", err=True)

    output_lines = []

    # Header
    output_lines.append(f"; Disassembly of {input_file.name}")
    output_lines.append(f"; Size: {len(data)} bytes")
    output_lines.append(f"; Base address: ${base_address:03X}")
    output_lines.append("")

    # Hex dump (if requested)
    if show_hex:
        output_lines.append("; Hex dump:")
        output_lines.append("; " + "-" * 60)
        for i in range(0, len(data), 16):
            addr = base_address + i
            chunk = data[i:i+16]
            hex_str = " ".join(f"{b:02X}" for b in chunk)
            output_lines.append(f"; ${addr:03X}: {hex_str}")
        output_lines.append("; " + "-" * 60)
        output_lines.append("")

    disasm = Chip8Disassembler()
    instructions = disasm.disassemble(data, start_address=base_address, count=count)

    for instr in instructions:
        if no_bytes:
            # Compact format
            if instr.operand_str:
                line = f"${instr.address:03X}: {instr.mnemonic} {instr.operand_str}"
            else:
                line = f"${instr.address:03X}: {instr.mnemonic}"
            if instr.comment:
                line += f"  ; {instr.comment}"
            output_lines.append(line)
        else:
            output_lines.append(str(instr))

    result = "\n".join(output_lines) + "\n"

    if output:
        try:
            output.write_text(result, encoding="utf-8")
            if verbose:
                click.echo(f"Output written to: {output}", err=True)
        except OSError as e:
            click.echo(f"Error writing {output}: {e}", err=True)
            sys.exit(ExitCode.INVALID_ARGS)
    else:
        click.echo(result, nl=False)

    if verbose:
        data_words = sum(1 for instr in instructions if instr.is_data)
        click.echo(
            f"Words disassembled: {len(instructions)} ({data_words} as data)",
            err=True,
        )


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
