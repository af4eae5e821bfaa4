"""
Breakpoint System for RISC-Z Emulator
=====================================

Provides debugging stops for the run loop:
- PC breakpoints (break before the instruction at an address runs)
- Register conditions (break when a register, pc, flag or page matches)

The BreakpointManager is wired to the CPU's on_instruction hook by the
Emulator and checked before every instruction.

Example usage:

    >>> from riscz.emulator import Emulator, BreakReason
    >>> emu = Emulator()
    >>> emu.load_bytes(program)
    >>> emu.add_breakpoint(0x010)
    >>> event = emu.run()
    >>> if event.reason == BreakReason.PC_BREAKPOINT:
    ...     print(f"Stopped at ${event.address:03X}")

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Set, TYPE_CHECKING

if TYPE_CHECKING:
    from .cpu import RiscZ
    from .isa import Instruction


class BreakReason(Enum):
    """Why a run stopped."""
    HALTED = auto()              # Program counter ran past the program store
    PC_BREAKPOINT = auto()       # PC reached a breakpoint address
    REGISTER_CONDITION = auto()  # Register condition met
    RENDERER_STOP = auto()       # Renderer asked to stop (window closed)
    STEP = auto()                # Single step
    MAX_TICKS = auto()           # Requested tick count executed


@dataclass
class BreakEvent:
    """
    Information about why execution stopped.

    Attributes:
        reason: Why execution stopped
        address: Program counter when it stopped
        ticks: Ticks executed by the run that produced the event
        message: Human-readable description
    """
    reason: BreakReason
    address: Optional[int] = None
    ticks: int = 0
    message: str = ""

    def __str__(self) -> str:
        if self.message:
            return self.message
        match self.reason:
            case BreakReason.HALTED:
                return "Halted"
            case BreakReason.PC_BREAKPOINT:
                return f"Breakpoint at ${self.address:03X}" if self.address is not None else "Breakpoint"
            case BreakReason.REGISTER_CONDITION:
                return "Register condition met"
            case BreakReason.RENDERER_STOP:
                return "Renderer closed"
            case BreakReason.STEP:
                return "Single step"
            case BreakReason.MAX_TICKS:
                return "Tick limit reached"
            case _:
                return "Unknown"


class RegisterCondition:
    """
    Condition on CPU state.

    Supported targets:
    - 'r0' .. 'r15': register values as read by instructions (r0 reads 0)
    - 'pc': program counter
    - 'flag': comparison flag (compared as 0/1)
    - 'page': active data page

    Supported operators: ==, !=, <, <=, >, >=, & (bitwise test)

    Examples:
        >>> cond = RegisterCondition('r3', '==', 8)
        >>> cond = RegisterCondition('flag', '==', 1)
        >>> cond = RegisterCondition('page', '!=', 0)
    """

    VALID_OPERATORS = {'==', '!=', '<', '<=', '>', '>=', '&'}

    def __init__(self, register: str, operator: str, value: int, description: str = ""):
        self.register = register.lower()
        self.operator = operator
        self.value = value
        self.description = description or f"{register} {operator} {value}"

        valid_registers = {f"r{i}" for i in range(16)} | {'pc', 'flag', 'page'}
        if self.register not in valid_registers:
            raise ValueError(
                f"Unknown register '{register}'. Valid: r0-r15, pc, flag, page"
            )
        if self.operator not in self.VALID_OPERATORS:
            raise ValueError(
                f"Unknown operator '{operator}'. Valid operators: "
                f"{', '.join(sorted(self.VALID_OPERATORS))}"
            )

    def _actual(self, cpu: "RiscZ") -> int:
        match self.register:
            case 'pc':
                return cpu.pc
            case 'flag':
                return int(cpu.flag)
            case 'page':
                return cpu.active_page
            case _:
                return cpu.registers.read(int(self.register[1:]))

    def check(self, cpu: "RiscZ") -> bool:
        """Check if the condition holds for the CPU's current state."""
        actual = self._actual(cpu)
        match self.operator:
            case '==':
                return actual == self.value
            case '!=':
                return actual != self.value
            case '<':
                return actual < self.value
            case '<=':
                return actual <= self.value
            case '>':
                return actual > self.value
            case '>=':
                return actual >= self.value
            case '&':
                return (actual & self.value) != 0
            case _:
                return False

    def __repr__(self) -> str:
        return f"RegisterCondition({self.register!r}, {self.operator!r}, {self.value!r})"


class BreakpointManager:
    """
    Holds breakpoints and register conditions and decides when to stop.

    After a stop, the instruction at the stopping address is allowed to run
    once when execution resumes, so continuing from a breakpoint does not
    immediately stop again.

    Example:
        >>> mgr = BreakpointManager()
        >>> mgr.add_breakpoint(0x010)
        >>> cpu.on_instruction = lambda pc, inst: mgr.check_instruction(cpu, pc, inst)
    """

    def __init__(self):
        self._pc_breakpoints: Set[int] = set()
        self._register_conditions: List[RegisterCondition] = []
        self._last_event: Optional[BreakEvent] = None
        self._resume_address: Optional[int] = None

    @property
    def last_event(self) -> Optional[BreakEvent]:
        """Get the last break event recorded by check_instruction()."""
        return self._last_event

    @property
    def breakpoint_count(self) -> int:
        return len(self._pc_breakpoints)

    # =========================================================================
    # PC Breakpoints
    # =========================================================================

    def add_breakpoint(self, address: int) -> None:
        """Stop before the instruction at address runs."""
        self._pc_breakpoints.add(address & 0xFFFF)

    def remove_breakpoint(self, address: int) -> None:
        self._pc_breakpoints.discard(address & 0xFFFF)

    def has_breakpoint(self, address: int) -> bool:
        return (address & 0xFFFF) in self._pc_breakpoints

    def list_breakpoints(self) -> List[int]:
        """Get sorted list of breakpoint addresses."""
        return sorted(self._pc_breakpoints)

    # =========================================================================
    # Register Conditions
    # =========================================================================

    def add_register_condition(self, condition: RegisterCondition) -> None:
        self._register_conditions.append(condition)

    def clear_register_conditions(self) -> None:
        self._register_conditions.clear()

    def clear_all(self) -> None:
        """Remove all breakpoints and conditions."""
        self._pc_breakpoints.clear()
        self._register_conditions.clear()
        self.clear_break_request()

    def clear_break_request(self) -> None:
        """Forget the last event and any pending resume address."""
        self._last_event = None
        self._resume_address = None

    def clear_last_event(self) -> None:
        """Forget the last event but keep the resume address."""
        self._last_event = None

    # =========================================================================
    # Hook
    # =========================================================================

    def check_instruction(self, cpu: "RiscZ", pc: int, instruction: "Instruction") -> bool:
        """
        Check if we should break before executing an instruction.

        Args:
            cpu: CPU instance
            pc: Address of the instruction about to run
            instruction: The decoded instruction

        Returns:
            True to continue execution, False to break
        """
        if self._resume_address is not None:
            resume, self._resume_address = self._resume_address, None
            if resume == pc:
                return True

        if pc in self._pc_breakpoints:
            return self._break(BreakReason.PC_BREAKPOINT, pc, f"Breakpoint at ${pc:03X}")

        for cond in self._register_conditions:
            if cond.check(cpu):
                return self._break(
                    BreakReason.REGISTER_CONDITION, pc, f"Condition: {cond.description}"
                )

        return True

    def _break(self, reason: BreakReason, pc: int, message: str) -> bool:
        self._last_event = BreakEvent(reason, address=pc, message=message)
        self._resume_address = pc
        return False
