"""
RISC-Z Command-Line Interface
=============================

This package provides the command-line runner for the RISC-Z emulator:

- **riscz**: load a program binary and run it in a window or headless

The tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["riscz"]
