"""
RISC-Z Emulator
===============

Emulation of the RISC-Z machine: a 16-bit fixed-width instruction set over
sixteen 8-bit registers and 256 pages of byte memory, with a 16 x 16 color
screen drawn from page 255.

Quick Start
-----------

Basic usage::

    >>> from riscz.emulator import Emulator
    >>> emu = Emulator()
    >>> emu.load_file("program.bin")
    >>> event = emu.run()
    >>> emu.save_screenshot("screen.png")

Building a program in code::

    >>> from riscz.emulator import Opcode, encode, encode_imm, words_to_bytes
    >>> program = words_to_bytes([
    ...     encode_imm(Opcode.LDI, 1, 5),
    ...     encode_imm(Opcode.LDI, 2, 3),
    ...     encode(Opcode.ADD, 3, 1, 2),
    ... ])
    >>> emu.load_bytes(program)
    >>> emu.run(max_ticks=3).reason
    <BreakReason.MAX_TICKS: 6>

Module Structure
----------------

- `emulator.py`: Main Emulator class (high-level API)
- `cpu.py`: Register file, machine state and the fetch-decode-execute cycle
- `isa.py`: Instruction encoding and opcode table
- `memory.py`: Paged data memory and program store
- `loader.py`: Program binary loading
- `display.py`: Frames, color decoding and the headless renderer
- `window.py`: pygame window renderer (optional `window` extra)
- `breakpoints.py`: Debugging support

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

# Main entry point
from .emulator import Emulator, EmulatorConfig

# CPU components
from .cpu import RiscZ, MachineState, RegisterFile

# Instruction set
from .isa import (
    Opcode,
    CompareMode,
    Instruction,
    decode,
    encode,
    encode_addr,
    encode_imm,
    words_to_bytes,
)

# Memory subsystem
from .memory import (
    DataMemory,
    ProgramStore,
    DEFAULT_PROGRAM_CAPACITY,
    DISPLAY_PAGE,
)

# Program loading
from .loader import load_program, load_program_file, words_from_bytes

# Rendering
from .display import (
    Frame,
    FrameRenderer,
    HeadlessRenderer,
    pixel_color,
    pixel_rgb,
    SCREEN_SIZE,
)

# Debugging support
from .breakpoints import (
    BreakpointManager,
    BreakEvent,
    BreakReason,
    RegisterCondition,
)

__all__ = [
    # Main API
    "Emulator",
    "EmulatorConfig",

    # CPU
    "RiscZ",
    "MachineState",
    "RegisterFile",

    # Instruction set
    "Opcode",
    "CompareMode",
    "Instruction",
    "decode",
    "encode",
    "encode_addr",
    "encode_imm",
    "words_to_bytes",

    # Memory
    "DataMemory",
    "ProgramStore",
    "DEFAULT_PROGRAM_CAPACITY",
    "DISPLAY_PAGE",

    # Loading
    "load_program",
    "load_program_file",
    "words_from_bytes",

    # Rendering
    "Frame",
    "FrameRenderer",
    "HeadlessRenderer",
    "pixel_color",
    "pixel_rgb",
    "SCREEN_SIZE",

    # Debugging
    "BreakpointManager",
    "BreakEvent",
    "BreakReason",
    "RegisterCondition",
]
