"""
Program Loader Unit Tests
=========================

Tests for turning program binaries into program stores.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import pytest
from riscz.emulator import load_program, load_program_file, words_from_bytes
from riscz.errors import ProgramFormatError, ProgramLoadError, ProgramSizeError


# =============================================================================
# Byte Pairing Tests
# =============================================================================

class TestWordsFromBytes:
    """Test big-endian byte pairing."""

    def test_big_endian_pairs(self):
        assert words_from_bytes(bytes([0x12, 0x34, 0x56, 0x78])) == [0x1234, 0x5678]

    def test_empty(self):
        assert words_from_bytes(b"") == []

    def test_odd_length_rejected(self):
        with pytest.raises(ProgramFormatError) as exc_info:
            words_from_bytes(bytes([0x12, 0x34, 0x56]))
        assert "odd byte count (3)" in str(exc_info.value)


# =============================================================================
# Program Store Loading Tests
# =============================================================================

class TestLoadProgram:
    """Test load_program()."""

    def test_words_in_file_order(self):
        store = load_program(bytes([0x12, 0x34, 0x56, 0x78]))
        assert store[0] == 0x1234
        assert store[1] == 0x5678
        assert store[2] == 0
        assert store.word_count == 2
        assert store.capacity == 4096

    def test_empty_program(self):
        """An empty binary loads as an all-zero store."""
        store = load_program(b"")
        assert store.word_count == 0
        assert store[0] == 0

    def test_exactly_full(self):
        store = load_program(bytes(8), capacity=4)
        assert store.word_count == 4

    def test_oversize_rejected(self):
        with pytest.raises(ProgramSizeError) as exc_info:
            load_program(bytes(10), capacity=4, source="big.bin")
        assert exc_info.value.word_count == 5
        assert exc_info.value.capacity == 4
        assert exc_info.value.source == "big.bin"
        assert str(exc_info.value).startswith("big.bin: ")

    def test_odd_checked_before_size(self):
        with pytest.raises(ProgramFormatError):
            load_program(bytes(11), capacity=4)

    def test_errors_share_base(self):
        with pytest.raises(ProgramLoadError):
            load_program(b"\x00")


class TestLoadProgramFile:
    """Test load_program_file()."""

    def test_load_file(self, tmp_path):
        path = tmp_path / "prog.bin"
        path.write_bytes(bytes([0xD1, 0x05, 0xD2, 0x03, 0x03, 0x12]))
        store = load_program_file(path)
        assert store.words() == (0xD105, 0xD203, 0x0312)

    def test_load_file_str_path(self, tmp_path):
        path = tmp_path / "prog.bin"
        path.write_bytes(bytes([0xAB, 0xCD]))
        assert load_program_file(str(path))[0] == 0xABCD

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_program_file(tmp_path / "missing.bin")

    def test_error_names_file(self, tmp_path):
        path = tmp_path / "odd.bin"
        path.write_bytes(b"\x01")
        with pytest.raises(ProgramFormatError) as exc_info:
            load_program_file(path)
        assert exc_info.value.source == str(path)
