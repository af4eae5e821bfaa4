"""
Memory Subsystem for RISC-Z Emulator
====================================

RISC-Z keeps code and data in separate stores:

    Program store   capacity x 16-bit words (4096 by default), read-only
                    once loaded, indexed by the program counter
    Data memory     256 pages x 256 bytes, one page active at a time,
                    addressed by (active page, 8-bit offset)

Page 255 doubles as the frame buffer: the renderer draws it after every tick.

Both page number and offset are full-range bytes, so no data address can be
out of range; accesses only mask values to 8 bits.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from typing import Iterable, Sequence


# Data memory geometry
PAGE_COUNT = 256
PAGE_SIZE = 256

# Page drawn by the frame renderer
DISPLAY_PAGE = 0xFF

# Program store capacity in the full configuration
DEFAULT_PROGRAM_CAPACITY = 4096


class DataMemory:
    """
    Paged byte-addressable data memory.

    Load and store address the page selected by `active_page`; writes to one
    page are never visible through another.

    Example:
        >>> mem = DataMemory()
        >>> mem.active_page = 3
        >>> mem.store(0x10, 0x42)
        >>> mem.load(0x10)
        66
        >>> mem.active_page = 4
        >>> mem.load(0x10)
        0
    """

    def __init__(self):
        self._pages = [bytearray(PAGE_SIZE) for _ in range(PAGE_COUNT)]
        self._active_page = 0

    @property
    def active_page(self) -> int:
        """Page addressed by load() and store()."""
        return self._active_page

    @active_page.setter
    def active_page(self, value: int) -> None:
        self._active_page = value & 0xFF

    def load(self, offset: int) -> int:
        """Read a byte from the active page."""
        return self._pages[self._active_page][offset & 0xFF]

    def store(self, offset: int, value: int) -> None:
        """Write a byte to the active page."""
        self._pages[self._active_page][offset & 0xFF] = value & 0xFF

    # Debugger access, independent of the active page

    def read(self, page: int, offset: int) -> int:
        return self._pages[page & 0xFF][offset & 0xFF]

    def write(self, page: int, offset: int, value: int) -> None:
        self._pages[page & 0xFF][offset & 0xFF] = value & 0xFF

    def page(self, number: int) -> bytes:
        """
        Get a read-only copy of one page.

        Args:
            number: Page number (0-255)

        Returns:
            The page's 256 bytes
        """
        return bytes(self._pages[number & 0xFF])

    def clear(self) -> None:
        """Zero every page and select page 0."""
        for page in self._pages:
            page[:] = bytes(len(page))
        self._active_page = 0


class ProgramStore:
    """
    Fixed-capacity instruction store.

    Populated once by the loader and immutable afterwards. Slots beyond the
    loaded program read as 0x0000 (ADD r0, r0, r0), so a short program runs
    through no-ops until the program counter passes the capacity.

    Attributes:
        capacity: Number of word slots
        word_count: Number of words actually loaded
    """

    def __init__(self, words: Iterable[int] = (), capacity: int = DEFAULT_PROGRAM_CAPACITY):
        """
        Build a program store.

        Args:
            words: Program words in execution order
            capacity: Number of slots (default 4096)

        Raises:
            ValueError: If capacity is not positive, a word is not 16-bit,
                or there are more words than slots
        """
        if capacity <= 0:
            raise ValueError(f"program store capacity must be positive, got {capacity}")

        loaded = list(words)
        if len(loaded) > capacity:
            raise ValueError(f"{len(loaded)} words do not fit in capacity {capacity}")
        for index, word in enumerate(loaded):
            if not 0 <= word <= 0xFFFF:
                raise ValueError(f"word {index} out of range: {word:#x}")

        self.capacity = capacity
        self.word_count = len(loaded)
        self._words: Sequence[int] = tuple(loaded) + (0,) * (capacity - len(loaded))

    def __len__(self) -> int:
        return self.capacity

    def __getitem__(self, index: int) -> int:
        if not 0 <= index < self.capacity:
            raise IndexError(f"program store index out of range: {index}")
        return self._words[index]

    def words(self) -> tuple[int, ...]:
        """Get the loaded words (without the zero padding)."""
        return tuple(self._words[:self.word_count])

    def __repr__(self) -> str:
        return f"ProgramStore(words={self.word_count}, capacity={self.capacity})"
