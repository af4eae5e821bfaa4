#!/usr/bin/env python3
"""
RISC-Z Emulator Demo
====================

This script demonstrates how to use the RISC-Z emulator to:
1. Assemble a program from instruction words
2. Save it as a program binary
3. Run it headless with a tick limit
4. Inspect registers and take a screenshot
5. Stop at a breakpoint

Usage:
    source .venv/bin/activate
    python examples/emulator_demo.py

The saved binary can then be watched in a window:
    riscz trash/palette.bin

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from pathlib import Path
from riscz.emulator import (
    CompareMode,
    Emulator,
    Opcode,
    encode,
    encode_addr,
    encode_imm,
    words_to_bytes,
)


def palette_program() -> list[int]:
    """Paint every cell with its own index, showing all 256 colors."""
    return [
        encode_imm(Opcode.LDI, 1, 0xFF),        # $000  r1 := 255
        encode(Opcode.SPG, 1),                  # $001  select the screen page
        encode_imm(Opcode.LDI, 2, 1),           # $002  r2 := 1
        encode(Opcode.CMP, CompareMode.EQ),     # $003  flag := (r0 == r0)
        encode(Opcode.ADD),                     # $004  runs before each pass
        encode(Opcode.STR, 3, 3),               # $005  cell[r3] := r3
        encode(Opcode.ADD, 3, 3, 2),            # $006  r3 += 1
        encode_addr(Opcode.BIR, 0x005),         # $007  back to $005
    ]


def main():
    # Output directory for binaries and screenshots
    output_dir = Path("trash")
    output_dir.mkdir(exist_ok=True)

    # ==========================================================================
    # 1. Assemble and save the program
    # ==========================================================================
    # Binaries are headerless big-endian 16-bit words
    binary = words_to_bytes(palette_program())
    bin_path = output_dir / "palette.bin"
    bin_path.write_bytes(binary)
    print(f"Wrote {len(binary) // 2} words to {bin_path}")

    # ==========================================================================
    # 2. Load and run
    # ==========================================================================
    # The loop never reaches the end of the program store, so bound the run:
    # four setup ticks, then four ticks per cell
    emu = Emulator()
    emu.load_file(bin_path)

    event = emu.run(max_ticks=4 + 4 * 256)
    print(f"\n{event} after {event.ticks} ticks")

    # ==========================================================================
    # 3. Inspect the machine
    # ==========================================================================
    regs = emu.registers
    print(f"  pc=${regs['pc']:03X} page={regs['page']} flag={regs['flag']}")
    print(f"  call stack depth: {len(regs['stack'])}")
    print(f"  top-left cell: {emu.frame.color_at(0, 0)}")
    print(f"  bottom-right cell: {emu.frame.color_at(15, 15)}")

    # ==========================================================================
    # 4. Screenshot
    # ==========================================================================
    shot = output_dir / "palette.png"
    emu.save_screenshot(shot, scale=16)
    print(f"\nScreenshot saved to {shot}")

    # ==========================================================================
    # 5. Breakpoints
    # ==========================================================================
    # Stop before the first store, then once r3 reaches 8
    emu.reset()
    emu.add_breakpoint(0x005)

    event = emu.run()
    print(f"\n{event} (r3={emu.registers['r3']})")

    emu.clear_breakpoints()
    emu.add_condition('r3', '==', 8)
    event = emu.run()
    print(f"{event} after {event.ticks} more ticks")

    emu.close()


if __name__ == "__main__":
    main()
