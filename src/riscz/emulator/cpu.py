"""
RISC-Z CPU Emulator
===================

The RISC-Z control unit: register file, machine state and the
fetch-decode-execute cycle.

Machine model:
- 16 8-bit registers, r0 hardwired to read as zero
- 256 x 256-byte data pages, one active at a time
- Program store of 16-bit words, indexed by a 16-bit program counter
- Call stack of branch targets
- One comparison flag, set by CMP and consumed by BIR

One tick:
    1. Fetch the word at program[pc]
    2. Decode every field
    3. pc := pc + 1
    4. Execute the opcode
    5. If the opcode was BIR: pc := pc - 1

Step 5 gives BIR two behaviors. With the flag clear the program counter ends
the tick back on the BIR itself, so the branch spins until the flag is set.
With the flag set the target is pushed and the program counter ends the tick
at target - 1, so the instruction just before the target runs next. RET pops
straight into the program counter, resuming exactly at the pushed target.

There is no halt instruction: the machine stops once the program counter
reaches the program store capacity. Decrementing the counter below zero
wraps it to $FFFF, which also halts.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from ..errors import DivideByZeroError, InvalidCompareModeError, MachineHalted
from .isa import CompareMode, Instruction, Opcode, decode
from .memory import DataMemory, ProgramStore


REGISTER_COUNT = 16


class RegisterFile:
    """
    Sixteen byte-sized registers.

    Register 0 always reads as zero. Writes to it are accepted and retained
    but can never be observed through read().

    Example:
        >>> regs = RegisterFile()
        >>> regs.write(0, 0x55)
        >>> regs.read(0)
        0
        >>> regs.write(1, 0x1FF)
        >>> regs.read(1)
        255
    """

    def __init__(self):
        self._slots = bytearray(REGISTER_COUNT)

    def read(self, index: int) -> int:
        """Read a register; register 0 reads as 0."""
        if index == 0:
            return 0
        return self._slots[index]

    def write(self, index: int, value: int) -> None:
        """Write a register, keeping the low 8 bits of value."""
        self._slots[index] = value & 0xFF

    def raw(self, index: int) -> int:
        """Get the stored slot value, bypassing the r0 rule."""
        return self._slots[index]

    def snapshot(self) -> tuple[int, ...]:
        """Get all sixteen observable register values."""
        return tuple(self.read(i) for i in range(REGISTER_COUNT))

    def clear(self) -> None:
        self._slots[:] = bytes(REGISTER_COUNT)


@dataclass
class MachineState:
    """
    Complete mutable machine state.

    One instance is owned by the CPU and mutated in place by every tick.
    The active page lives on `memory` since only load/store consult it.
    """
    program: ProgramStore = field(default_factory=ProgramStore)
    registers: RegisterFile = field(default_factory=RegisterFile)
    memory: DataMemory = field(default_factory=DataMemory)
    pc: int = 0
    stack: list[int] = field(default_factory=list)
    flag: bool = False


class RiscZ:
    """
    RISC-Z CPU with instrumentation hooks.

    Hooks:
    - on_instruction(pc, instruction) -> bool: called by execute() before
      each instruction runs; returning False stops execution with the
      instruction not yet executed
    - on_tick(): called after each tick's state mutation (frame handoff)

    Example:
        >>> cpu = RiscZ(ProgramStore([0xD105, 0xD203, 0x0312]))
        >>> cpu.execute(3)
        3
        >>> cpu.registers.read(3), cpu.pc
        (8, 3)
    """

    def __init__(self, program: Optional[ProgramStore] = None):
        """
        Initialize CPU with a program.

        Args:
            program: Loaded program store (default: empty 4096-word store)
        """
        self.state = MachineState(
            program=program if program is not None else ProgramStore()
        )

        self.on_instruction: Optional[Callable[[int, Instruction], bool]] = None
        self.on_tick: Optional[Callable[[], None]] = None

    # ========================================
    # State Accessors
    # ========================================

    @property
    def pc(self) -> int:
        """Program counter (16-bit)."""
        return self.state.pc

    @pc.setter
    def pc(self, value: int) -> None:
        self.state.pc = value & 0xFFFF

    @property
    def flag(self) -> bool:
        """Comparison flag."""
        return self.state.flag

    @flag.setter
    def flag(self, value: bool) -> None:
        self.state.flag = bool(value)

    @property
    def registers(self) -> RegisterFile:
        return self.state.registers

    @property
    def memory(self) -> DataMemory:
        return self.state.memory

    @property
    def program(self) -> ProgramStore:
        return self.state.program

    @property
    def stack(self) -> tuple[int, ...]:
        """Call stack contents, bottom first."""
        return tuple(self.state.stack)

    @property
    def active_page(self) -> int:
        return self.state.memory.active_page

    @property
    def halted(self) -> bool:
        """True once the program counter has run past the program store."""
        return self.state.pc >= self.state.program.capacity

    # ========================================
    # Lifecycle
    # ========================================

    def reset(self) -> None:
        """
        Reset to power-on state.

        Clears registers, memory, program counter, call stack, flag and active
        page. The program store is kept.
        """
        self.state.registers.clear()
        self.state.memory.clear()
        self.state.pc = 0
        self.state.stack.clear()
        self.state.flag = False

    def load(self, program: ProgramStore) -> None:
        """Install a new program store and reset."""
        self.state.program = program
        self.reset()

    # ========================================
    # Main Execution Loop
    # ========================================

    def fetch(self) -> Instruction:
        """Decode the instruction at the program counter without executing it."""
        if self.halted:
            raise MachineHalted(self.state.pc, self.state.program.capacity)
        return decode(self.state.program[self.state.pc], self.state.pc)

    def tick(self) -> Instruction:
        """
        Run exactly one fetch-decode-execute cycle.

        Returns:
            The instruction that was executed

        Raises:
            MachineHalted: If the program counter is already past the store
            MachineFault: If the instruction faults
        """
        address = self.state.pc
        instruction = self.fetch()

        self.pc = address + 1
        self._execute_instruction(instruction, address)

        # BIR undoes the pre-increment whether or not it branched
        if instruction.opcode is Opcode.BIR:
            self.pc = self.state.pc - 1

        if self.on_tick:
            self.on_tick()

        return instruction

    def execute(self, max_ticks: Optional[int] = None) -> int:
        """
        Run ticks back-to-back.

        Args:
            max_ticks: Maximum number of ticks (None runs until halt)

        Returns:
            Number of ticks executed

        Note:
            Execution stops early if:
            - The program counter runs past the program store
            - on_instruction returns False (instruction left unexecuted)
        """
        executed = 0

        while not self.halted and (max_ticks is None or executed < max_ticks):
            if self.on_instruction:
                if not self.on_instruction(self.state.pc, self.fetch()):
                    return executed

            self.tick()
            executed += 1

        return executed

    # ========================================
    # Opcode Table
    # ========================================

    def _execute_instruction(self, inst: Instruction, address: int) -> None:
        """
        Execute one decoded instruction against the machine state.

        Args:
            inst: Decoded instruction
            address: Program store index the instruction was fetched from
        """
        regs = self.state.registers
        state = self.state

        match inst.opcode:
            case Opcode.ADD:
                regs.write(inst.r1, regs.read(inst.r2) + regs.read(inst.r3))
            case Opcode.SUB:
                regs.write(inst.r1, regs.read(inst.r2) - regs.read(inst.r3))
            case Opcode.DIV:
                divisor = regs.read(inst.r3)
                if divisor == 0:
                    raise DivideByZeroError(address)
                regs.write(inst.r1, regs.read(inst.r2) // divisor)
            case Opcode.AND:
                regs.write(inst.r1, regs.read(inst.r2) & regs.read(inst.r3))
            case Opcode.ORR:
                regs.write(inst.r1, regs.read(inst.r2) | regs.read(inst.r3))
            case Opcode.XOR:
                regs.write(inst.r1, regs.read(inst.r2) ^ regs.read(inst.r3))
            case Opcode.NOT:
                regs.write(inst.r1, ~regs.read(inst.r2))
            case Opcode.LSH:
                # Shift amounts wrap modulo the 8-bit register width
                regs.write(inst.r1, regs.read(inst.r2) << (regs.read(inst.r3) & 0x07))
            case Opcode.RSH:
                regs.write(inst.r1, regs.read(inst.r2) >> (regs.read(inst.r3) & 0x07))
            case Opcode.RET:
                if state.stack:
                    self.pc = state.stack.pop()
            case Opcode.BIR:
                if state.flag:
                    state.stack.append(inst.addr12)
                    self.pc = inst.addr12
            case Opcode.LDM:
                regs.write(inst.r1, state.memory.load(regs.read(inst.r2)))
            case Opcode.STR:
                state.memory.store(regs.read(inst.r1), regs.read(inst.r2))
            case Opcode.LDI:
                regs.write(inst.r1, inst.imm8)
            case Opcode.CMP:
                # Mode is the value held in r1, not the field itself
                state.flag = self._compare(
                    regs.read(inst.r1), regs.read(inst.r2), regs.read(inst.r3), address
                )
            case Opcode.SPG:
                state.memory.active_page = regs.read(inst.r1)

    @staticmethod
    def _compare(mode: int, a: int, b: int, address: int) -> bool:
        """Evaluate a CMP mode; modes outside 0-5 fault."""
        match mode:
            case CompareMode.EQ:
                return a == b
            case CompareMode.GT:
                return a > b
            case CompareMode.LT:
                return a < b
            case CompareMode.GE:
                return a >= b
            case CompareMode.LE:
                return a <= b
            case CompareMode.NE:
                return a != b
            case _:
                raise InvalidCompareModeError(mode, address)

    def __repr__(self) -> str:
        return (
            f"RiscZ(pc=${self.state.pc:03X}, flag={self.state.flag}, "
            f"page={self.active_page}, stack={len(self.state.stack)})"
        )
