"""
Memory Subsystem Unit Tests
===========================

Tests for paged data memory and the program store.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import pytest
from riscz.emulator import DataMemory, ProgramStore, DEFAULT_PROGRAM_CAPACITY


# =============================================================================
# Data Memory Tests
# =============================================================================

class TestDataMemory:
    """Test DataMemory class."""

    def test_initialized_to_zero(self):
        """Memory starts zeroed on page 0."""
        mem = DataMemory()
        assert mem.active_page == 0
        assert mem.load(0x00) == 0
        assert mem.read(0xFF, 0xFF) == 0

    def test_load_store_active_page(self):
        """Load and store address the active page."""
        mem = DataMemory()
        mem.active_page = 7
        mem.store(0x20, 0x42)
        assert mem.load(0x20) == 0x42
        assert mem.read(7, 0x20) == 0x42

    def test_pages_isolated(self):
        """Writes to one page are not visible through another."""
        mem = DataMemory()
        mem.active_page = 1
        mem.store(0x10, 0xAA)
        mem.active_page = 2
        assert mem.load(0x10) == 0
        mem.store(0x10, 0xBB)
        mem.active_page = 1
        assert mem.load(0x10) == 0xAA

    def test_values_masked(self):
        """Stored values and offsets are bytes."""
        mem = DataMemory()
        mem.store(0x105, 0x1FF)
        assert mem.load(0x05) == 0xFF

    def test_active_page_masked(self):
        mem = DataMemory()
        mem.active_page = 0x1FE
        assert mem.active_page == 0xFE

    def test_page_copy(self):
        """page() returns an independent 256-byte copy."""
        mem = DataMemory()
        mem.write(255, 3, 0x99)
        page = mem.page(255)
        assert isinstance(page, bytes)
        assert len(page) == 256
        assert page[3] == 0x99
        mem.write(255, 3, 0x11)
        assert page[3] == 0x99

    def test_clear(self):
        """clear() zeroes every page and selects page 0."""
        mem = DataMemory()
        mem.active_page = 9
        mem.store(1, 1)
        mem.clear()
        assert mem.active_page == 0
        assert mem.read(9, 1) == 0


# =============================================================================
# Program Store Tests
# =============================================================================

class TestProgramStore:
    """Test ProgramStore class."""

    def test_default_capacity(self):
        store = ProgramStore()
        assert store.capacity == DEFAULT_PROGRAM_CAPACITY == 4096
        assert len(store) == 4096
        assert store.word_count == 0

    def test_words_in_order(self):
        store = ProgramStore([0x1234, 0x5678])
        assert store[0] == 0x1234
        assert store[1] == 0x5678
        assert store.word_count == 2

    def test_padding_reads_zero(self):
        """Slots past the program read as zero words."""
        store = ProgramStore([0xFFFF], capacity=4)
        assert store[3] == 0x0000
        assert store.words() == (0xFFFF,)

    def test_immutable(self):
        """The store has no item assignment."""
        store = ProgramStore([1, 2])
        with pytest.raises(TypeError):
            store[0] = 5

    def test_index_out_of_range(self):
        store = ProgramStore(capacity=4)
        with pytest.raises(IndexError):
            store[4]
        with pytest.raises(IndexError):
            store[-1]

    def test_too_many_words(self):
        with pytest.raises(ValueError):
            ProgramStore([0] * 5, capacity=4)

    def test_bad_capacity(self):
        with pytest.raises(ValueError):
            ProgramStore(capacity=0)

    def test_word_range_checked(self):
        with pytest.raises(ValueError):
            ProgramStore([0x10000])
