"""
riscz - RISC-Z Emulator Command-Line Interface
==============================================

This module implements the command-line runner for RISC-Z program binaries.
The program is read once at startup; the machine then runs until the program
counter passes the end of the program store, an instruction faults, or the
window is closed.

Usage Examples
--------------
Run in a window:
    $ riscz program.bin

Run headless and keep the final screen:
    $ riscz program.bin --headless --screenshot screen.png

Trace every instruction:
    $ riscz program.bin --headless --trace
"""

import logging
from pathlib import Path
from typing import Optional

import click

from riscz import __version__
from riscz.cli.errors import handle_cli_exception
from riscz.emulator import Emulator, EmulatorConfig, HeadlessRenderer, load_program_file
from riscz.errors import MachineFault


def setup_logging(verbose: bool, trace: bool) -> None:
    """Configure logging based on verbosity."""
    if trace:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose or trace else "%(message)s",
    )


def save_screenshot(emu: Emulator, path: Path, scale: int, verbose: bool) -> None:
    """Write the emulator's current frame to a PNG file."""
    emu.save_screenshot(path, scale=scale)
    if verbose:
        click.echo(f"Screenshot written to: {path}", err=True)


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "program",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path),
)
@click.option(
    "--headless",
    is_flag=True,
    help="Run without a window, ticks back-to-back",
)
@click.option(
    "-s", "--screenshot",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the final screen to this PNG file",
)
@click.option(
    "--scale",
    type=click.IntRange(min=1),
    default=16,
    show_default=True,
    help="Screenshot pixels per screen cell",
)
@click.option(
    "--pixel-size",
    type=click.IntRange(min=1),
    default=80,
    show_default=True,
    help="Window pixels per screen cell",
)
@click.option(
    "--fps",
    type=click.IntRange(min=0),
    default=60,
    show_default=True,
    help="Window frame cap (0 = unpaced)",
)
@click.option(
    "--trace",
    is_flag=True,
    help="Log every instruction before it runs",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="riscz")
def main(
    program: Path,
    headless: bool,
    screenshot: Optional[Path],
    scale: int,
    pixel_size: int,
    fps: int,
    trace: bool,
    verbose: bool,
) -> None:
    """
    Run a RISC-Z program binary.

    PROGRAM is a headerless file of big-endian 16-bit instruction words.

    Examples:

        # Watch a program draw
        riscz demo.bin

        # Run without a window and save the final screen
        riscz demo.bin --headless -s screen.png
    """
    setup_logging(verbose, trace)

    try:
        config = EmulatorConfig(trace=trace)

        # Read the program before opening any window
        store = load_program_file(program, capacity=config.program_capacity)
        if verbose:
            click.echo(f"Program: {program} ({store.word_count} words)", err=True)

        if headless:
            renderer = HeadlessRenderer()
        else:
            from riscz.emulator.window import WindowRenderer
            renderer = WindowRenderer(
                title=f"RISC-Z - {program.name}",
                pixel_size=pixel_size,
                fps=fps,
            )

        emu = Emulator(config, renderer=renderer)
        try:
            emu.load_program(store)
            try:
                event = emu.run()
            except MachineFault:
                # Keep the screen as it was at the fault
                if screenshot:
                    try:
                        save_screenshot(emu, screenshot, scale, verbose)
                    except OSError as e:
                        click.echo(f"Warning: screenshot not written: {e}", err=True)
                raise

            if screenshot:
                save_screenshot(emu, screenshot, scale, verbose)
        finally:
            emu.close()

        if verbose:
            click.echo(f"{event} after {event.ticks} ticks", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
