"""
RISC-Z Instruction Set Definition
=================================

This module defines the RISC-Z instruction encoding and opcode table.

Every instruction is one 16-bit word. All fields are extracted from every
word, whatever the opcode, and each opcode uses the subset it needs:

     15   12 11    8 7     4 3     0
    +-------+-------+-------+-------+
    |opcode |  r1   |  r2   |  r3   |
    +-------+-------+-------+-------+
            |<------- addr12 ------>|
                    |<-- imm8 ----->|

Opcode Table
------------
    0x0 ADD  r1 := r2 + r3         0x8 RSH  r1 := r2 >> r3
    0x1 SUB  r1 := r2 - r3         0x9 RET  pc := pop()
    0x2 DIV  r1 := r2 / r3         0xA BIR  branch-and-link if flag
    0x3 AND  r1 := r2 & r3         0xB LDM  r1 := mem[r2]
    0x4 ORR  r1 := r2 | r3         0xC STR  mem[r1] := r2
    0x5 XOR  r1 := r2 ^ r3         0xD LDI  r1 := imm8
    0x6 NOT  r1 := ~r2             0xE CMP  flag := r2 <mode(r1)> r3
    0x7 LSH  r1 := r2 << r3        0xF SPG  page := r1

The encode helpers build words from fields. They are used by tests and demo
programs to spell out machine code without magic numbers; there is no text
syntax behind them.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from enum import IntEnum

from ..errors import InvalidOpcodeError


# =============================================================================
# Field Layout
# =============================================================================

WORD_MASK = 0xFFFF
OPCODE_SHIFT = 12
R1_SHIFT = 8
R2_SHIFT = 4
REGISTER_MASK = 0x0F
ADDR12_MASK = 0x0FFF
IMM8_MASK = 0x00FF


# =============================================================================
# Opcode and Compare Mode Enumerations
# =============================================================================

class Opcode(IntEnum):
    """The sixteen RISC-Z operations, keyed by their 4-bit code."""
    ADD = 0x0
    SUB = 0x1
    DIV = 0x2
    AND = 0x3
    ORR = 0x4
    XOR = 0x5
    NOT = 0x6
    LSH = 0x7
    RSH = 0x8
    RET = 0x9
    BIR = 0xA
    LDM = 0xB
    STR = 0xC
    LDI = 0xD
    CMP = 0xE
    SPG = 0xF


class CompareMode(IntEnum):
    """
    CMP modes, selected by the value of the register named in the r1 field.

    Since r0 reads as zero, `CMP r0, a, b` always tests for equality.
    """
    EQ = 0
    GT = 1
    LT = 2
    GE = 3
    LE = 4
    NE = 5


# =============================================================================
# Decoded Instruction
# =============================================================================

@dataclass(frozen=True)
class Instruction:
    """
    One fully decoded instruction word.

    Immutable so the control unit can hand it to hooks without copying.

    Attributes:
        word: The raw 16-bit word
        opcode: Operation selected by bits 15-12
        r1, r2, r3: Register index fields (bits 11-8, 7-4, 3-0)
        addr12: Branch target (bits 11-0)
        imm8: Literal operand (bits 7-0)
    """
    word: int
    opcode: Opcode
    r1: int
    r2: int
    r3: int
    addr12: int
    imm8: int

    def __str__(self) -> str:
        return f"{self.opcode.name} ${self.word:04X}"


def decode(word: int, address: int | None = None) -> Instruction:
    """
    Decode a 16-bit word into an Instruction.

    Args:
        word: Instruction word (0x0000-0xFFFF)
        address: Program store index of the word, for fault reporting

    Returns:
        The decoded Instruction

    Raises:
        ValueError: If word is not a 16-bit value
        InvalidOpcodeError: If the opcode field has no table entry
    """
    if not 0 <= word <= WORD_MASK:
        raise ValueError(f"instruction word out of range: {word:#x}")

    code = word >> OPCODE_SHIFT
    try:
        opcode = Opcode(code)
    except ValueError:
        raise InvalidOpcodeError(code, address) from None

    return Instruction(
        word=word,
        opcode=opcode,
        r1=(word >> R1_SHIFT) & REGISTER_MASK,
        r2=(word >> R2_SHIFT) & REGISTER_MASK,
        r3=word & REGISTER_MASK,
        addr12=word & ADDR12_MASK,
        imm8=word & IMM8_MASK,
    )


# =============================================================================
# Encoding Helpers
# =============================================================================

def _check_field(name: str, value: int, limit: int) -> None:
    if not 0 <= value <= limit:
        raise ValueError(f"{name} must be 0-{limit}, got {value}")


def encode(opcode: int, r1: int = 0, r2: int = 0, r3: int = 0) -> int:
    """
    Build a register-form instruction word.

    Example:
        >>> hex(encode(Opcode.ADD, 3, 1, 2))
        '0x312'
    """
    _check_field("opcode", opcode, 0xF)
    _check_field("r1", r1, REGISTER_MASK)
    _check_field("r2", r2, REGISTER_MASK)
    _check_field("r3", r3, REGISTER_MASK)
    return (opcode << OPCODE_SHIFT) | (r1 << R1_SHIFT) | (r2 << R2_SHIFT) | r3


def encode_addr(opcode: int, addr12: int) -> int:
    """Build an instruction word carrying a 12-bit address (BIR)."""
    _check_field("opcode", opcode, 0xF)
    _check_field("addr12", addr12, ADDR12_MASK)
    return (opcode << OPCODE_SHIFT) | addr12


def encode_imm(opcode: int, r1: int, imm8: int) -> int:
    """Build an instruction word carrying a register and an 8-bit literal (LDI)."""
    _check_field("opcode", opcode, 0xF)
    _check_field("r1", r1, REGISTER_MASK)
    _check_field("imm8", imm8, IMM8_MASK)
    return (opcode << OPCODE_SHIFT) | (r1 << R1_SHIFT) | imm8


def words_to_bytes(words: list[int]) -> bytes:
    """Serialize words to the big-endian program binary format."""
    data = bytearray()
    for word in words:
        _check_field("word", word, WORD_MASK)
        data.append((word >> 8) & 0xFF)
        data.append(word & 0xFF)
    return bytes(data)
