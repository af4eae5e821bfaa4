"""
Program Loader
==============

Turns a RISC-Z program binary into a ProgramStore.

Binary format: a headerless sequence of big-endian 16-bit words, first byte
of each pair being the high byte:

    12 34 56 78  ->  [$1234, $5678]

The byte count must be even and the word count must fit the program store.
Both conditions are checked before anything is stored, so a rejected binary
never yields a partially filled store.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import logging
from pathlib import Path
from typing import Union

from ..errors import ProgramFormatError, ProgramSizeError
from .memory import DEFAULT_PROGRAM_CAPACITY, ProgramStore


logger = logging.getLogger(__name__)


def words_from_bytes(data: bytes, source: str = "<bytes>") -> list[int]:
    """
    Pair bytes into big-endian 16-bit words.

    Args:
        data: Raw program bytes
        source: Name used in error messages

    Returns:
        Words in file order

    Raises:
        ProgramFormatError: If the byte count is odd
    """
    if len(data) % 2:
        raise ProgramFormatError(
            f"odd byte count ({len(data)}); programs are 16-bit words", source
        )
    return [(data[i] << 8) | data[i + 1] for i in range(0, len(data), 2)]


def load_program(
    data: bytes,
    capacity: int = DEFAULT_PROGRAM_CAPACITY,
    source: str = "<bytes>",
) -> ProgramStore:
    """
    Build a program store from raw bytes.

    Args:
        data: Raw program bytes
        capacity: Program store capacity in words
        source: Name used in error messages

    Returns:
        ProgramStore holding the program

    Raises:
        ProgramFormatError: If the byte count is odd
        ProgramSizeError: If the program exceeds the capacity

    Example:
        >>> store = load_program(bytes([0x12, 0x34, 0x56, 0x78]))
        >>> store[0] == 0x1234, store[1] == 0x5678
        (True, True)
    """
    words = words_from_bytes(data, source)
    if len(words) > capacity:
        raise ProgramSizeError(len(words), capacity, source)

    logger.debug(f"Loaded {len(words)} words from {source} (capacity {capacity})")
    return ProgramStore(words, capacity=capacity)


def load_program_file(
    path: Union[str, Path],
    capacity: int = DEFAULT_PROGRAM_CAPACITY,
) -> ProgramStore:
    """
    Read a program binary from disk.

    Args:
        path: Path to the binary
        capacity: Program store capacity in words

    Returns:
        ProgramStore holding the program

    Raises:
        FileNotFoundError: If the file doesn't exist
        PermissionError: If the file can't be read
        ProgramFormatError: If the byte count is odd
        ProgramSizeError: If the program exceeds the capacity
    """
    path = Path(path)
    data = path.read_bytes()
    return load_program(data, capacity=capacity, source=str(path))
