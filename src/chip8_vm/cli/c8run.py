"""
c8run - CHIP-8 ROM Runner
=========================

Runs a CHIP-8 ROM headless in the terminal. The machine is stepped until
it halts (jumps to its own address), raises an error, or reaches the step
limit. The frame buffer is then printed as text.

There is no interactive keyboard. Programs that wait for a key (LD Vx, K)
can be fed a fixed press event with --key, and keys can be held down for
SKP/SKNP with --hold.

Usage Examples
--------------
Run a ROM with the default settings:
    $ c8run maze.ch8

Modern quirks, no throttling, with a state dump:
    $ c8run game.ch8 --quirks modern --speed 0 --dump

Redraw the screen after every step:
    $ c8run maze.ch8 --live

Save the final frame as an image:
    $ c8run maze.ch8 --png maze.png --scale 10

Environment Variables
---------------------
    CHIP8_QUIRKS: Default quirks preset
    CHIP8_SPEED: Default instructions per second
    CHIP8_SCHEME: Default PNG colour scheme
    CHIP8_SCALE: Default PNG scale
    CHIP8_START_HALTED: Start paused, as with --paused
"""

import dataclasses
import logging
import time
from pathlib import Path
from typing import Optional, Tuple

import click

from chip8_vm import __version__
from chip8_vm.cli.errors import handle_cli_exception
from chip8_vm.config import get_default_config
from chip8_vm.emulator import Machine, load_program_file, resolve_key
from chip8_vm.emulator.display import COLOR_SCHEMES
from chip8_vm.emulator.quirks import get_quirks, list_quirks
from chip8_vm.errors import Chip8Error

logger = logging.getLogger(__name__)


# =============================================================================
# Helpers
# =============================================================================

def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def frame_text(machine: Machine) -> str:
    """Frame buffer as text inside a border."""
    width = machine.frame_buffer.width
    border = "+" + "-" * width + "+"
    rows = [f"|{row}|" for row in machine.frame_buffer.get_text_grid()]
    return "\n".join([border, *rows, border])


def _parse_key(value: Optional[str]):
    if value is None:
        return None
    try:
        return resolve_key(value)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--key")


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "rom_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-q", "--quirks",
    type=str,
    default=None,
    help=f"Quirks preset ({', '.join(list_quirks())}). Default: config",
)
@click.option(
    "-n", "--max-steps",
    type=click.IntRange(min=1),
    default=1000,
    show_default=True,
    help="Maximum number of instructions to execute",
)
@click.option(
    "-s", "--speed",
    type=click.IntRange(min=0),
    default=None,
    help="Instructions per second, 0 for unthrottled. Default: config",
)
@click.option(
    "-k", "--key",
    type=str,
    default=None,
    help="Key press event fed to every step (for LD Vx, K)",
)
@click.option(
    "--hold",
    type=str,
    multiple=True,
    help="Key held down for the whole run (repeatable)",
)
@click.option(
    "--paused/--no-paused",
    default=None,
    help="Load the ROM without running it. Default: config",
)
@click.option(
    "--dump",
    is_flag=True,
    help="Print the machine state after the run",
)
@click.option(
    "--trace",
    is_flag=True,
    help="Print each executed instruction to stderr",
)
@click.option(
    "--live",
    is_flag=True,
    help="Clear the terminal and redraw the display after every step",
)
@click.option(
    "--png",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Save the final frame as a PNG image",
)
@click.option(
    "--scale",
    type=click.IntRange(min=1),
    default=None,
    help="PNG pixel scale. Default: config",
)
@click.option(
    "--scheme",
    type=click.Choice(sorted(COLOR_SCHEMES)),
    default=None,
    help="PNG colour scheme. Default: config",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="c8run")
def main(
    rom_file: Path,
    quirks: Optional[str],
    max_steps: int,
    speed: Optional[int],
    key: Optional[str],
    hold: Tuple[str, ...],
    paused: Optional[bool],
    dump: bool,
    trace: bool,
    live: bool,
    png: Optional[Path],
    scale: Optional[int],
    scheme: Optional[str],
    verbose: bool,
) -> None:
    """
    Run a CHIP-8 ROM and print the final display.

    ROM_FILE is the program image to load at $200.

    Exit status is 0 when the program halts or the step limit is reached,
    1 on a decode or machine error, 2 for bad arguments or ROM files.
    """
    setup_logging(verbose)
    config = get_default_config()
    if speed is not None:
        config = dataclasses.replace(config, speed=speed)
    if paused is not None:
        config = dataclasses.replace(config, start_halted=paused)

    try:
        preset = get_quirks(quirks if quirks is not None else config.quirks)
        next_key = _parse_key(key)
        held = [_parse_key(name) for name in hold]

        program = load_program_file(rom_file)
        machine = Machine(program, preset)
        machine.halted = config.start_halted
        for held_key in held:
            machine.keyboard.key_down(held_key)
    except ValueError as e:
        handle_cli_exception(click.BadParameter(str(e)), verbose=verbose)
    except Exception as e:
        handle_cli_exception(e, verbose=verbose)

    interval = config.step_interval

    if trace:
        machine.on_instruction = lambda address, instr: click.echo(
            f"${address:03X}: {instr}", err=True
        )

    if verbose:
        click.echo(f"ROM: {rom_file} ({len(program)} bytes)", err=True)
        click.echo(f"Quirks: {preset.describe()}", err=True)
        click.echo(f"Speed: {config.speed or 'unthrottled'}", err=True)

    steps = 0
    last_instr = None
    error: Optional[Chip8Error] = None

    try:
        while steps < max_steps and not machine.halted:
            last_instr = machine.step(next_key)
            steps += 1
            if live:
                click.clear()
                click.echo(frame_text(machine))
            if interval:
                time.sleep(interval)
    except Chip8Error as e:
        error = e
    except KeyboardInterrupt:
        click.echo("Interrupted.", err=True)

    if not live:
        click.echo(frame_text(machine))

    if config.start_halted:
        click.echo(f"Started paused at ${machine.pc:03X}; no steps executed.")
    elif machine.halted:
        click.echo(f"Execution halted at ${machine.pc:03X} after {steps} steps.")
    elif error is None:
        click.echo(f"Stopped after {steps} steps.")

    if dump:
        click.echo("")
        click.echo(machine.state_dump(last_instr))

    if png:
        cfg_scale = scale if scale is not None else config.scale
        cfg_scheme = scheme if scheme is not None else config.scheme
        try:
            png.write_bytes(machine.frame_buffer.render_image(cfg_scale, cfg_scheme))
        except Exception as e:
            handle_cli_exception(e, verbose=verbose)
        if verbose:
            click.echo(f"Frame written to: {png}", err=True)

    if error is not None:
        logger.debug(f"Run ended with {type(error).__name__} after {steps} steps")
        handle_cli_exception(error, verbose=verbose, error_type="Runtime")


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
