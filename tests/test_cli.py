"""
Command-Line Runner Tests
=========================

Tests for the riscz command and its error handling.
"""

import io

import pytest
from click.testing import CliRunner

from riscz import __version__
from riscz.cli.errors import ExitCode, handle_cli_exception
from riscz.cli.riscz import main
from riscz.emulator import Opcode, encode, encode_imm, words_to_bytes
from riscz.errors import InvalidCompareModeError, ProgramFormatError


DRAW_RED = words_to_bytes([
    encode_imm(Opcode.LDI, 1, 0xFF),
    encode(Opcode.SPG, 1),
    encode_imm(Opcode.LDI, 2, 0xE0),
    encode(Opcode.STR, 0, 2),
])

# Draws, then runs CMP with mode 7 held in r4
DRAW_THEN_FAULT = DRAW_RED + words_to_bytes([
    encode_imm(Opcode.LDI, 4, 7),
    encode(Opcode.CMP, 4, 1, 2),
])


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def program(tmp_path):
    """Write a program binary and return its path."""
    def _write(data, name="prog.bin"):
        path = tmp_path / name
        path.write_bytes(data)
        return path
    return _write


# =============================================================================
# CLI Tests
# =============================================================================

class TestRiscZCLI:
    """Tests for the riscz CLI tool."""

    def test_cli_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Run a RISC-Z program binary" in result.output

    def test_cli_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_missing_argument(self, runner):
        result = runner.invoke(main, [])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path / "missing.bin"), "--headless"])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_headless_run_with_screenshot(self, runner, program, tmp_path):
        """A headless run halts normally and keeps the final screen."""
        from PIL import Image

        path = program(DRAW_RED)
        shot = tmp_path / "screen.png"
        result = runner.invoke(main, [
            str(path), "--headless", "--screenshot", str(shot), "--scale", "2",
        ])

        assert result.exit_code == ExitCode.SUCCESS
        img = Image.open(io.BytesIO(shot.read_bytes()))
        assert img.size == (32, 32)
        assert img.getpixel((0, 0)) == (255, 0, 0)
        assert img.getpixel((2, 0)) == (0, 0, 0)

    def test_verbose_reports_halt(self, runner, program):
        result = runner.invoke(main, [str(program(DRAW_RED)), "--headless", "-v"])
        assert result.exit_code == ExitCode.SUCCESS
        assert "(4 words)" in result.output
        assert "Halted after 4096 ticks" in result.output

    def test_fault_exits_with_machine_error(self, runner, program):
        path = program(words_to_bytes([
            encode_imm(Opcode.LDI, 2, 1),
            encode(Opcode.DIV, 1, 2, 3),
        ]))
        result = runner.invoke(main, [str(path), "--headless"])
        assert result.exit_code == ExitCode.MACHINE_ERROR
        assert "fault at $001: division by zero" in result.output

    def test_fault_still_writes_screenshot(self, runner, program, tmp_path):
        shot = tmp_path / "fault.png"
        result = runner.invoke(main, [str(program(DRAW_THEN_FAULT)), "--headless", "-s", str(shot)])
        assert result.exit_code == ExitCode.MACHINE_ERROR
        assert "Machine error: fault at $005: invalid compare mode 7" in result.output
        assert shot.exists()

    def test_fault_reported_when_screenshot_fails(self, runner, program, tmp_path):
        """An unwritable screenshot path does not hide the fault."""
        shot = tmp_path / "missing" / "fault.png"
        result = runner.invoke(main, [str(program(DRAW_THEN_FAULT)), "--headless", "-s", str(shot)])
        assert result.exit_code == ExitCode.MACHINE_ERROR
        assert "invalid compare mode 7" in result.output
        assert "screenshot not written" in result.output
        assert not shot.exists()

    def test_unwritable_screenshot_after_halt(self, runner, program, tmp_path):
        shot = tmp_path / "missing" / "screen.png"
        result = runner.invoke(main, [str(program(DRAW_RED)), "--headless", "-s", str(shot)])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_odd_length_program(self, runner, program):
        result = runner.invoke(main, [str(program(b"\xD1\x05\xD2")), "--headless"])
        assert result.exit_code == ExitCode.MACHINE_ERROR
        assert "Program error: " in result.output
        assert "odd byte count" in result.output
        assert "Machine error" not in result.output

    def test_oversize_program(self, runner, program):
        result = runner.invoke(main, [str(program(bytes(8194))), "--headless"])
        assert result.exit_code == ExitCode.MACHINE_ERROR
        assert "program has 4097 words" in result.output

    def test_empty_program_runs(self, runner, program):
        result = runner.invoke(main, [str(program(b"")), "--headless"])
        assert result.exit_code == ExitCode.SUCCESS

    def test_invalid_scale(self, runner, program):
        result = runner.invoke(main, [str(program(DRAW_RED)), "--headless", "--scale", "0"])
        assert result.exit_code == ExitCode.INVALID_ARGS


# =============================================================================
# Error Handler Tests
# =============================================================================

class TestHandleCliException:
    """Test exit code mapping."""

    def test_machine_fault(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(InvalidCompareModeError(6, 0x010), error_type="Machine")
        assert exc_info.value.code == ExitCode.MACHINE_ERROR
        assert "Machine error: fault at $010: invalid compare mode 6" in capsys.readouterr().err

    def test_file_error(self):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(PermissionError("denied"))
        assert exc_info.value.code == ExitCode.INVALID_ARGS

    def test_other_os_error(self):
        """Any I/O failure reading the program is an argument error."""
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(OSError(5, "Input/output error"))
        assert exc_info.value.code == ExitCode.INVALID_ARGS

    def test_default_prefix_for_faults(self, capsys):
        with pytest.raises(SystemExit):
            handle_cli_exception(InvalidCompareModeError(6, 0x010))
        assert "Machine error: " in capsys.readouterr().err

    def test_default_prefix_for_rejected_programs(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(ProgramFormatError("odd byte count (3)", "prog.bin"))
        assert exc_info.value.code == ExitCode.MACHINE_ERROR
        assert "Program error: prog.bin: odd byte count (3)" in capsys.readouterr().err

    def test_missing_window_dependency(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(ImportError("No module named 'pygame'"))
        assert exc_info.value.code == ExitCode.INVALID_ARGS
        assert "--headless" in capsys.readouterr().err

    def test_internal_error(self):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(RuntimeError("boom"))
        assert exc_info.value.code == ExitCode.INTERNAL_ERROR
