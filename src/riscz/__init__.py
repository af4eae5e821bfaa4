"""
RISC-Z - Emulator for the RISC-Z 16-bit Toy Machine
===================================================

This package emulates RISC-Z, a minimalist fixed-width 16-bit instruction
set machine whose only output is a 16 x 16 grid of colored cells.

The machine has:
- Sixteen 8-bit registers (r0 always reads as zero)
- 256 pages of 256 bytes of data memory, one page active at a time
- A program store of up to 4096 16-bit instructions
- A call stack and a single comparison flag driving branch/return

Main Components
---------------
- **emulator**: CPU, memory, program loader, frame renderers, breakpoints
- **cli**: the `riscz` command-line runner

Quick Start
-----------
Run a program binary from Python:
    >>> from riscz import Emulator
    >>> emu = Emulator()
    >>> emu.load_file("program.bin")
    >>> emu.run()
    >>> emu.save_screenshot("screen.png")

Or from the command line:
    $ riscz program.bin
    $ riscz program.bin --headless --screenshot screen.png

Program Format
--------------
Program binaries are headerless sequences of big-endian 16-bit words.
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from riscz.emulator import (
    Emulator,
    EmulatorConfig,
    RiscZ,
    Opcode,
    CompareMode,
    BreakEvent,
    BreakReason,
)
from riscz.errors import (
    RiscZError,
    MachineFault,
    InvalidOpcodeError,
    InvalidCompareModeError,
    DivideByZeroError,
    MachineHalted,
    ProgramLoadError,
    ProgramFormatError,
    ProgramSizeError,
)

__all__ = [
    # Version info
    "__version__",
    # Emulator
    "Emulator",
    "EmulatorConfig",
    "RiscZ",
    "Opcode",
    "CompareMode",
    "BreakEvent",
    "BreakReason",
    # Exception hierarchy
    "RiscZError",
    "MachineFault",
    "InvalidOpcodeError",
    "InvalidCompareModeError",
    "DivideByZeroError",
    "MachineHalted",
    "ProgramLoadError",
    "ProgramFormatError",
    "ProgramSizeError",
]
