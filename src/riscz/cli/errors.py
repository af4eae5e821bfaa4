"""
Unified CLI Error Handling
==========================

Provides consistent error handling and exit codes for the CLI.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    MACHINE_ERROR = 1    # Machine fault or malformed program binary
    INVALID_ARGS = 2     # Invalid arguments, missing or unreadable files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Unified exception handler for the CLI.

    Formats the error message appropriately, optionally prints traceback
    in verbose mode, and exits with the correct exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors
        error_type: Optional prefix for the error message (default: "Program"
            for rejected binaries, "Machine" for faults)

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from riscz.errors import MachineFault, ProgramLoadError, RiscZError

    if isinstance(error, RiscZError):
        # Machine faults and rejected program binaries
        if error_type is None:
            if isinstance(error, ProgramLoadError):
                error_type = "Program"
            elif isinstance(error, MachineFault):
                error_type = "Machine"
        prefix = f"{error_type} error: " if error_type else "Error: "
        click.echo(f"{prefix}{error}", err=True)
        sys.exit(ExitCode.MACHINE_ERROR)

    elif isinstance(error, click.BadParameter):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, OSError):
        # Program unreadable after argument checks, or screenshot not writable
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, ImportError):
        # Window mode without the optional pygame dependency
        click.echo(f"Error: {error}", err=True)
        click.echo("hint: install the 'window' extra or run with --headless", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
