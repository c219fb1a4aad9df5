"""
Command-Line Tool Tests
=======================

Tests for c8disasm, c8run and c8font using click's CliRunner.
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from chip8_vm.cli import c8disasm, c8font, c8run
from chip8_vm.cli.errors import ExitCode
from chip8_vm.config import set_default_config


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Run the tools with the built-in configuration."""
    for name in (
        "CHIP8_QUIRKS",
        "CHIP8_SPEED",
        "CHIP8_SCHEME",
        "CHIP8_SCALE",
        "CHIP8_START_HALTED",
    ):
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


def write_rom(words, name="test.ch8") -> str:
    """Write 16-bit words big-endian into a ROM file in the current directory."""
    data = b"".join(word.to_bytes(2, "big") for word in words)
    Path(name).write_bytes(data)
    return name


# =============================================================================
# c8disasm
# =============================================================================

class TestDisasmCli:
    """Tests for the c8disasm tool."""

    def test_listing(self, runner):
        with runner.isolated_filesystem():
            rom = write_rom([0x00E0, 0xA22A, 0x1204])
            result = runner.invoke(c8disasm.main, [rom])
            assert result.exit_code == 0, result.output
            assert "; Disassembly of test.ch8" in result.output
            assert "$200: 00 E0  CLS" in result.output
            assert "LD I, $22A" in result.output
            assert "halt (jump to self)" in result.output

    def test_no_bytes(self, runner):
        with runner.isolated_filesystem():
            rom = write_rom([0x00E0, 0x0123])
            result = runner.invoke(c8disasm.main, [rom, "--no-bytes"])
            assert result.exit_code == 0
            assert "$200: CLS" in result.output
            assert "$202: .WORD $0123  ; unknown opcode $0123" in result.output

    def test_count_and_address(self, runner):
        with runner.isolated_filesystem():
            rom = write_rom([0x00E0, 0x00E0, 0x00E0])
            result = runner.invoke(c8disasm.main, [rom, "-c", "2", "-a", "$300"])
            assert result.exit_code == 0
            assert "$300:" in result.output
            assert "$302:" in result.output
            assert "$304:" not in result.output

    def test_hex_dump(self, runner):
        with runner.isolated_filesystem():
            rom = write_rom([0x00E0])
            result = runner.invoke(c8disasm.main, [rom, "--hex"])
            assert "; Hex dump:" in result.output
            assert "; $200: 00 E0" in result.output

    def test_output_file(self, runner):
        with runner.isolated_filesystem():
            rom = write_rom([0x00E0])
            result = runner.invoke(c8disasm.main, [rom, "-o", "out.asm"])
            assert result.exit_code == 0
            assert "CLS" in Path("out.asm").read_text()

    def test_empty_file(self, runner):
        with runner.isolated_filesystem():
            Path("empty.ch8").write_bytes(b"")
            result = runner.invoke(c8disasm.main, ["empty.ch8"])
            assert result.exit_code == ExitCode.INVALID_ARGS
            assert "is empty" in result.output

    def test_oversized_rom(self, runner):
        with runner.isolated_filesystem():
            Path("big.ch8").write_bytes(bytes(0xE01))
            result = runner.invoke(c8disasm.main, ["big.ch8"])
            assert result.exit_code == ExitCode.INVALID_ARGS
            assert "must be at most 3584 bytes" in result.output

    def test_bad_address(self, runner):
        with runner.isolated_filesystem():
            rom = write_rom([0x00E0])
            result = runner.invoke(c8disasm.main, [rom, "-a", "zz"])
            assert result.exit_code == ExitCode.INVALID_ARGS


# =============================================================================
# c8run
# =============================================================================

class TestRunCli:
    """Tests for the c8run tool."""

    def test_runs_to_halt(self, runner):
        with runner.isolated_filesystem():
            # LD I, glyph 0 / DRW V0, V0, 5 / JP $204
            rom = write_rom([0xA000, 0xD005, 0x1204])
            result = runner.invoke(c8run.main, [rom, "--speed", "0"])
            assert result.exit_code == 0, result.output
            assert "+" + "-" * 64 + "+" in result.output
            assert "|####" in result.output
            assert "Execution halted at $204 after 3 steps." in result.output

    def test_step_limit(self, runner):
        with runner.isolated_filesystem():
            rom = write_rom([0x7001, 0x1200])
            result = runner.invoke(c8run.main, [rom, "--speed", "0", "-n", "10"])
            assert result.exit_code == 0
            assert "Stopped after 10 steps." in result.output

    def test_machine_error_exit_code(self, runner):
        with runner.isolated_filesystem():
            rom = write_rom([0x00EE])
            result = runner.invoke(c8run.main, [rom, "--speed", "0"])
            assert result.exit_code == ExitCode.MACHINE_ERROR
            assert "Runtime error at $0200: stack underflow" in result.output

    def test_decode_error_exit_code(self, runner):
        with runner.isolated_filesystem():
            rom = write_rom([0x6001, 0x0123])
            result = runner.invoke(c8run.main, [rom, "--speed", "0"])
            assert result.exit_code == ExitCode.MACHINE_ERROR
            assert "unknown opcode $0123" in result.output

    def test_dump(self, runner):
        with runner.isolated_filesystem():
            rom = write_rom([0x6A42, 0x1202])
            result = runner.invoke(c8run.main, [rom, "--speed", "0", "--dump"])
            assert result.exit_code == 0
            assert "REGS:" in result.output
            assert "VA = 0x42" in result.output

    def test_trace(self, runner):
        with runner.isolated_filesystem():
            rom = write_rom([0x6A42, 0x1202])
            result = runner.invoke(c8run.main, [rom, "--speed", "0", "--trace"])
            assert "$200: LD VA, $42" in result.output
            assert "$202: JP $202" in result.output

    def test_key_event(self, runner):
        with runner.isolated_filesystem():
            # LD V0, K / JP $202
            rom = write_rom([0xF00A, 0x1202])
            waiting = runner.invoke(c8run.main, [rom, "--speed", "0", "-n", "5"])
            assert "Stopped after 5 steps." in waiting.output

            pressed = runner.invoke(c8run.main, [rom, "--speed", "0", "--key", "B", "--dump"])
            assert "Execution halted at $202" in pressed.output
            assert "V0 = 0x0B" in pressed.output

    def test_held_key(self, runner):
        with runner.isolated_filesystem():
            # LD V0, 5 / SKP V0 / JP $204 (not reached when held) / JP $206
            rom = write_rom([0x6005, 0xE09E, 0x1204, 0x1206])
            result = runner.invoke(c8run.main, [rom, "--speed", "0", "--hold", "5"])
            assert "Execution halted at $206" in result.output

    def test_quirks_option(self, runner):
        with runner.isolated_filesystem():
            # LD V1, $81 / SHR V1, V2 / JP $204
            rom = write_rom([0x6181, 0x8126, 0x1204])
            result = runner.invoke(
                c8run.main, [rom, "--speed", "0", "--quirks", "modern", "--dump"]
            )
            assert "V1 = 0x40" in result.output

    def test_unknown_quirks(self, runner):
        with runner.isolated_filesystem():
            rom = write_rom([0x1200])
            result = runner.invoke(c8run.main, [rom, "--quirks", "bogus"])
            assert result.exit_code == ExitCode.INVALID_ARGS
            assert "Unknown quirks preset" in result.output

    def test_bad_key(self, runner):
        with runner.isolated_filesystem():
            rom = write_rom([0x1200])
            result = runner.invoke(c8run.main, [rom, "--key", "Z"])
            assert result.exit_code == ExitCode.INVALID_ARGS

    def test_paused_option(self, runner):
        with runner.isolated_filesystem():
            rom = write_rom([0x6A42, 0x1202])
            result = runner.invoke(c8run.main, [rom, "--paused", "--dump"])
            assert result.exit_code == 0, result.output
            assert "Started paused at $200; no steps executed." in result.output
            assert "Execution halted" not in result.output
            assert "VA = 0x00" in result.output

    def test_paused_from_env(self, runner, monkeypatch):
        monkeypatch.setenv("CHIP8_START_HALTED", "1")
        with runner.isolated_filesystem():
            rom = write_rom([0x1200])
            paused = runner.invoke(c8run.main, [rom])
            assert "Started paused at $200" in paused.output

            resumed = runner.invoke(c8run.main, [rom, "--speed", "0", "--no-paused"])
            assert "Execution halted at $200 after 1 steps." in resumed.output

    @pytest.mark.parametrize("args, expected", [
        ([], 0.002),
        (["--speed", "250"], 0.004),
    ])
    def test_speed_sets_step_interval(self, runner, monkeypatch, args, expected):
        monkeypatch.setenv("CHIP8_SPEED", "500")
        sleeps = []
        monkeypatch.setattr(c8run.time, "sleep", sleeps.append)
        with runner.isolated_filesystem():
            rom = write_rom([0x7001, 0x1200])
            result = runner.invoke(c8run.main, [rom, "-n", "3", *args])
            assert result.exit_code == 0, result.output
            assert sleeps == [pytest.approx(expected)] * 3

    def test_unthrottled_never_sleeps(self, runner, monkeypatch):
        sleeps = []
        monkeypatch.setattr(c8run.time, "sleep", sleeps.append)
        with runner.isolated_filesystem():
            rom = write_rom([0x7001, 0x1200])
            runner.invoke(c8run.main, [rom, "-n", "3", "--speed", "0"])
            assert sleeps == []

    def test_png(self, runner):
        with runner.isolated_filesystem():
            rom = write_rom([0xA000, 0xD005, 0x1204])
            result = runner.invoke(
                c8run.main, [rom, "--speed", "0", "--png", "frame.png", "--scale", "2"]
            )
            assert result.exit_code == 0, result.output
            assert Path("frame.png").read_bytes()[:4] == b"\x89PNG"

    def test_missing_rom(self, runner):
        result = runner.invoke(c8run.main, ["no-such-rom.ch8"])
        assert result.exit_code == 2


# =============================================================================
# c8font
# =============================================================================

class TestFontCli:
    """Tests for the c8font tool."""

    def test_font_sheet(self, runner):
        result = runner.invoke(c8font.main, [])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0].split() == ["0", "1", "2", "3", "4", "5", "6", "7"]
        assert lines[1].startswith("####  ..#.")
        assert lines[2].startswith("#..#  .##.")

    def test_png(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(c8font.main, ["--png", "font.png"])
            assert result.exit_code == 0, result.output
            assert Path("font.png").exists()
            assert "Font image written to: font.png" in result.output
