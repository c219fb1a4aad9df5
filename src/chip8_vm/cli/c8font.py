"""
c8font - Built-in Font Viewer
=============================

Prints the sixteen hexadecimal glyphs preloaded at $000, as the machine
sees them, so the font table can be checked by eye. Optionally renders
them onto the 64x32 frame buffer and saves it as a PNG.

Usage Examples
--------------
    $ c8font
    $ c8font --png font.png --scale 10 --scheme light
"""

from pathlib import Path
from typing import List, Optional

import click

from chip8_vm import __version__
from chip8_vm.cli.errors import handle_cli_exception
from chip8_vm.emulator import Machine
from chip8_vm.emulator.display import COLOR_SCHEMES
from chip8_vm.emulator.memory import FONT_GLYPH_SIZE, glyph_address

GLYPHS_PER_ROW = 8
GLYPH_WIDTH = 4


def glyph_rows(machine: Machine, digit: int) -> List[str]:
    """Text rows of one glyph, read from the machine's memory."""
    base = glyph_address(digit)
    rows = []
    for offset in range(FONT_GLYPH_SIZE):
        byte = machine.memory[base + offset]
        rows.append("".join(
            "#" if byte & (0x80 >> bit) else "." for bit in range(GLYPH_WIDTH)
        ))
    return rows


def font_sheet(machine: Machine) -> str:
    """All sixteen glyphs laid out in two rows of eight."""
    lines = []
    for first in range(0, 16, GLYPHS_PER_ROW):
        digits = range(first, first + GLYPHS_PER_ROW)
        lines.append("  ".join(f"{d:X}".ljust(GLYPH_WIDTH) for d in digits))
        glyphs = [glyph_rows(machine, d) for d in digits]
        for row in range(FONT_GLYPH_SIZE):
            lines.append("  ".join(g[row] for g in glyphs))
        lines.append("")
    return "\n".join(lines).rstrip("\n")


def draw_font(machine: Machine) -> None:
    """Blit every glyph onto the machine's frame buffer."""
    for digit in range(16):
        x = (digit % GLYPHS_PER_ROW) * 8 + 2
        y = (digit // GLYPHS_PER_ROW) * 16 + 5
        base = glyph_address(digit)
        rows = machine.memory.read_bytes(base, FONT_GLYPH_SIZE)
        machine.frame_buffer.draw_sprite(x, y, rows)


@click.command()
@click.option(
    "--png",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also render the glyphs to a PNG image",
)
@click.option(
    "--scale",
    type=click.IntRange(min=1),
    default=8,
    show_default=True,
    help="PNG pixel scale",
)
@click.option(
    "--scheme",
    type=click.Choice(sorted(COLOR_SCHEMES)),
    default="dark",
    show_default=True,
    help="PNG colour scheme",
)
@click.version_option(version=__version__, prog_name="c8font")
def main(png: Optional[Path], scale: int, scheme: str) -> None:
    """Show the built-in hexadecimal font."""
    machine = Machine()
    click.echo(font_sheet(machine))

    if png:
        draw_font(machine)
        try:
            png.write_bytes(machine.frame_buffer.render_image(scale, scheme))
        except Exception as e:
            handle_cli_exception(e)
        click.echo(f"Font image written to: {png}")


if __name__ == "__main__":
    main()
