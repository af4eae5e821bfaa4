"""
RISC-Z Error Hierarchy
======================

This module defines the exception hierarchy for the RISC-Z emulator.
All exceptions inherit from RiscZError, allowing callers to catch every
emulator-related error with a single except clause if desired.

Exception Hierarchy
-------------------
RiscZError (base)
├── MachineFault (fatal fault raised while executing a tick)
│   ├── InvalidOpcodeError - opcode value with no table entry
│   ├── InvalidCompareModeError - CMP mode outside 0-5
│   └── DivideByZeroError - DIV with a zero divisor
├── MachineHalted - tick requested after the program counter ran off the end
└── ProgramLoadError (program binary handling)
    ├── ProgramFormatError - malformed binary (odd byte count)
    └── ProgramSizeError - binary larger than the program store

Faults carry the address of the instruction that raised them and the
offending value, so messages read like:

    fault at $012: invalid compare mode 7
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class RiscZError(Exception):
    """
    Base exception for all RISC-Z errors.

        try:
            emu.run()
        except RiscZError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Execution Faults
# =============================================================================

class MachineFault(RiscZError):
    """
    Fatal fault raised by the control unit during a tick.

    There is no recovery: the machine state is left exactly as it was when
    the fault was detected (the program counter has already been advanced
    past the faulting instruction).

    Attributes:
        message: The fault description
        address: Program store index of the faulting instruction
        value: The offending value (opcode, compare mode, divisor)
    """

    def __init__(
        self,
        message: str,
        address: Optional[int] = None,
        value: Optional[int] = None,
    ):
        self.message = message
        self.address = address
        self.value = value
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.address is None:
            return f"fault: {self.message}"
        return f"fault at ${self.address:03X}: {self.message}"


class InvalidOpcodeError(MachineFault):
    """Opcode value with no entry in the opcode table."""

    def __init__(self, opcode: int, address: Optional[int] = None):
        super().__init__(f"invalid opcode {opcode:#x}", address, opcode)


class InvalidCompareModeError(MachineFault):
    """
    CMP executed with a mode outside the defined set.

    Valid modes are 0 (eq), 1 (gt), 2 (lt), 3 (ge), 4 (le) and 5 (ne).
    """

    def __init__(self, mode: int, address: Optional[int] = None):
        super().__init__(f"invalid compare mode {mode}", address, mode)


class DivideByZeroError(MachineFault):
    """DIV executed with a divisor register reading zero."""

    def __init__(self, address: Optional[int] = None):
        super().__init__("division by zero", address, 0)


class MachineHalted(RiscZError):
    """
    A tick was requested after execution ended.

    The machine halts implicitly once the program counter reaches or
    exceeds the program store capacity; ticking further is a caller error.
    """

    def __init__(self, pc: int, capacity: int):
        self.pc = pc
        self.capacity = capacity
        super().__init__(
            f"machine halted: pc ${pc:04X} is past program store capacity {capacity}"
        )


# =============================================================================
# Program Loading Exceptions
# =============================================================================

class ProgramLoadError(RiscZError):
    """
    Base exception for program binary errors.

    Attributes:
        message: The error description
        source: Where the bytes came from (file path or "<bytes>")
    """

    def __init__(self, message: str, source: Optional[str] = None):
        self.message = message
        self.source = source
        if source:
            super().__init__(f"{source}: {message}")
        else:
            super().__init__(message)


class ProgramFormatError(ProgramLoadError):
    """
    Malformed program binary.

    Program binaries are headerless big-endian 16-bit words, so the byte
    count must be even.
    """
    pass


class ProgramSizeError(ProgramLoadError):
    """Program binary holds more words than the program store can take."""

    def __init__(self, word_count: int, capacity: int, source: Optional[str] = None):
        self.word_count = word_count
        self.capacity = capacity
        super().__init__(
            f"program has {word_count} words, program store holds {capacity}",
            source,
        )
