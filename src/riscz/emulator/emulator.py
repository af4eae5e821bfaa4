"""
RISC-Z Emulator - Main Orchestrator
===================================

This module provides the `Emulator` class that ties the CPU, program loader,
frame renderer and breakpoint manager together behind a small API.

The Emulator class:
- Loads programs from files or raw bytes
- Runs the machine tick by tick, handing the display page to the renderer
  after every tick and before the next
- Stops on halt, breakpoints, register conditions, renderer request or an
  optional tick count
- Exposes registers, memory and the current frame for inspection

Example usage:
    >>> from riscz.emulator import Emulator
    >>> emu = Emulator()
    >>> emu.load_file("gradient.bin")
    >>> event = emu.run()
    >>> print(event.reason, emu.total_ticks)
    >>> emu.save_screenshot("gradient.png")

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..errors import MachineFault
from .breakpoints import BreakEvent, BreakpointManager, BreakReason, RegisterCondition
from .cpu import RiscZ
from .display import Frame, FrameRenderer, HeadlessRenderer
from .isa import Instruction
from .loader import load_program, load_program_file
from .memory import DEFAULT_PROGRAM_CAPACITY, DISPLAY_PAGE, ProgramStore


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmulatorConfig:
    """
    Configuration for emulator initialization.

    Attributes:
        program_capacity: Program store size in words (default 4096)
        display_page: Data page drawn by the renderer (default 255)
        trace: Log every instruction at DEBUG level before it runs

    Example:
        >>> config = EmulatorConfig(program_capacity=256, trace=True)
    """
    program_capacity: int = DEFAULT_PROGRAM_CAPACITY
    display_page: int = DISPLAY_PAGE
    trace: bool = False

    def __post_init__(self):
        if self.program_capacity <= 0:
            raise ValueError(
                f"program_capacity must be positive, got {self.program_capacity}"
            )
        if not 0 <= self.display_page <= 0xFF:
            raise ValueError(f"display_page must be 0-255, got {self.display_page}")


class Emulator:
    """
    RISC-Z emulator with rendering and breakpoint support.

    Attributes:
        config: The EmulatorConfig used to initialize this instance
        cpu: The RiscZ CPU (accessible for low-level control)
        renderer: Frame consumer called after every tick
        breakpoints: The breakpoint manager
    """

    def __init__(
        self,
        config: Optional[EmulatorConfig] = None,
        renderer: Optional[FrameRenderer] = None,
    ):
        """
        Initialize the emulator.

        Args:
            config: EmulatorConfig (default: 4096-word store, page 255 display)
            renderer: Frame renderer (default: HeadlessRenderer)
        """
        self.config = config or EmulatorConfig()
        self.cpu = RiscZ(ProgramStore(capacity=self.config.program_capacity))
        self.renderer = renderer if renderer is not None else HeadlessRenderer()
        self.breakpoints = BreakpointManager()

        self.cpu.on_instruction = self._instruction_hook
        self.cpu.on_tick = self._tick_hook

        self._total_ticks = 0
        self._is_running = False
        self._stop_requested = False

    def _instruction_hook(self, pc: int, instruction: Instruction) -> bool:
        """Called before each instruction in run(); False stops the run."""
        if self._stop_requested:
            return False
        if self.config.trace:
            logger.debug(f"${pc:03X}: {instruction}")
        return self.breakpoints.check_instruction(self.cpu, pc, instruction)

    def _tick_hook(self) -> None:
        """Called after each tick's mutation; hands the frame to the renderer."""
        self._total_ticks += 1
        if not self.renderer.present(self.frame):
            self._stop_requested = True

    # =========================================================================
    # Program Loading
    # =========================================================================

    def load_program(self, program: ProgramStore) -> None:
        """Install a program store and reset the machine."""
        if program.capacity != self.config.program_capacity:
            raise ValueError(
                f"program store capacity {program.capacity} does not match "
                f"configured capacity {self.config.program_capacity}"
            )
        self.cpu.load(program)
        self._total_ticks = 0
        self.breakpoints.clear_break_request()

    def load_bytes(self, data: bytes) -> None:
        """
        Load a program binary from bytes.

        Raises:
            ProgramFormatError: If the byte count is odd
            ProgramSizeError: If the program exceeds the program store
        """
        self.load_program(load_program(data, capacity=self.config.program_capacity))

    def load_file(self, path: Union[str, Path]) -> None:
        """
        Load a program binary from disk.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ProgramFormatError: If the byte count is odd
            ProgramSizeError: If the program exceeds the program store
        """
        program = load_program_file(path, capacity=self.config.program_capacity)
        self.load_program(program)
        logger.info(f"Loaded {program.word_count} words from {path}")

    # =========================================================================
    # Execution Control
    # =========================================================================

    def reset(self) -> None:
        """Reset the machine to power-on state, keeping the loaded program."""
        self.cpu.reset()
        self._total_ticks = 0
        self._stop_requested = False
        self.breakpoints.clear_break_request()

    def step(self) -> BreakEvent:
        """
        Execute a single tick, ignoring breakpoints.

        Returns:
            BreakEvent with reason=STEP (or HALTED if the tick ran off the end)

        Raises:
            MachineHalted: If the machine had already halted
            MachineFault: If the instruction faults
        """
        self.cpu.tick()
        if self.cpu.halted:
            return BreakEvent(BreakReason.HALTED, address=self.cpu.pc, ticks=1)
        return BreakEvent(
            BreakReason.STEP,
            address=self.cpu.pc,
            ticks=1,
            message=f"Step to ${self.cpu.pc:03X}",
        )

    def run(self, max_ticks: Optional[int] = None) -> BreakEvent:
        """
        Run until halt, breakpoint, renderer stop or max_ticks.

        Args:
            max_ticks: Maximum ticks to execute (None runs until something
                else stops the machine)

        Returns:
            BreakEvent describing why execution stopped

        Raises:
            MachineFault: If an instruction faults; the machine state is left
                as it was at the fault

        Example:
            >>> emu.add_breakpoint(0x008)
            >>> event = emu.run()
            >>> if event.reason == BreakReason.PC_BREAKPOINT:
            ...     print(f"Hit breakpoint at ${event.address:03X}")
        """
        self.breakpoints.clear_last_event()
        self._stop_requested = False
        self._is_running = True
        start = self._total_ticks

        try:
            self.cpu.execute(max_ticks)
        except MachineFault as e:
            logger.info(f"Stopped by fault after {self._total_ticks - start} ticks: {e}")
            raise
        finally:
            self._is_running = False

        ticks = self._total_ticks - start
        pc = self.cpu.pc

        if self.cpu.halted:
            logger.info(f"Halted at ${pc:04X} after {ticks} ticks")
            return BreakEvent(BreakReason.HALTED, address=pc, ticks=ticks)
        if self._stop_requested:
            return BreakEvent(BreakReason.RENDERER_STOP, address=pc, ticks=ticks)

        event = self.breakpoints.last_event
        if event is not None:
            event.ticks = ticks
            return event

        return BreakEvent(
            BreakReason.MAX_TICKS,
            address=pc,
            ticks=ticks,
            message=f"Reached max ticks ({max_ticks})",
        )

    def run_until_pc(self, address: int, max_ticks: Optional[int] = None) -> bool:
        """
        Run until the program counter reaches an address.

        Creates a temporary breakpoint at the address and runs until hit.

        Returns:
            True if the address was reached, False if the run stopped otherwise
        """
        was_set = self.breakpoints.has_breakpoint(address)
        if not was_set:
            self.breakpoints.add_breakpoint(address)

        try:
            event = self.run(max_ticks)
            return (event.reason == BreakReason.PC_BREAKPOINT and
                    event.address == address)
        finally:
            if not was_set:
                self.breakpoints.remove_breakpoint(address)

    def close(self) -> None:
        """Release the renderer."""
        self.renderer.close()

    # =========================================================================
    # Breakpoint Management (delegates to BreakpointManager)
    # =========================================================================

    def add_breakpoint(self, address: int) -> None:
        """Stop before the instruction at address runs."""
        self.breakpoints.add_breakpoint(address)

    def remove_breakpoint(self, address: int) -> None:
        self.breakpoints.remove_breakpoint(address)

    def add_condition(self, register: str, operator: str, value: int) -> None:
        """
        Stop when a register condition holds before an instruction.

        Example:
            >>> emu.add_condition('r3', '==', 8)
        """
        self.breakpoints.add_register_condition(RegisterCondition(register, operator, value))

    def clear_breakpoints(self) -> None:
        """Remove all breakpoints and conditions."""
        self.breakpoints.clear_all()

    # =========================================================================
    # Display Output
    # =========================================================================

    @property
    def frame(self) -> Frame:
        """Current contents of the display page as a Frame."""
        return Frame(
            self.cpu.memory.page(self.config.display_page),
            tick=self._total_ticks,
        )

    def render_display(self, scale: int = 16) -> bytes:
        """Render the current frame as PNG bytes."""
        return self.frame.render_image(scale=scale)

    def save_screenshot(self, path: Union[str, Path], scale: int = 16) -> None:
        """Write the current frame to a PNG file."""
        self.frame.save(path, scale=scale)

    # =========================================================================
    # Memory Access
    # =========================================================================

    def read_byte(self, page: int, offset: int) -> int:
        return self.cpu.memory.read(page, offset)

    def write_byte(self, page: int, offset: int, value: int) -> None:
        self.cpu.memory.write(page, offset, value)

    # =========================================================================
    # State Inspection
    # =========================================================================

    @property
    def registers(self) -> dict:
        """
        Get current machine registers as a dictionary.

        Returns:
            Dictionary with keys r0-r15, pc, flag, page, stack
        """
        result = {f"r{i}": value for i, value in enumerate(self.cpu.registers.snapshot())}
        result.update({
            'pc': self.cpu.pc,
            'flag': self.cpu.flag,
            'page': self.cpu.active_page,
            'stack': list(self.cpu.stack),
        })
        return result

    @property
    def halted(self) -> bool:
        return self.cpu.halted

    @property
    def total_ticks(self) -> int:
        """Ticks executed since the last load or reset."""
        return self._total_ticks

    @property
    def is_running(self) -> bool:
        """True while inside run()."""
        return self._is_running

    def __repr__(self) -> str:
        return (
            f"Emulator(pc=${self.cpu.pc:03X}, "
            f"ticks={self._total_ticks}, "
            f"halted={self.cpu.halted})"
        )
