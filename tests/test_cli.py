"""
Tests for sicasm - Command-Line Assembler
=========================================

These tests drive the click command through CliRunner and check the
files it writes and the exit codes it returns.
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from sicasm import __version__
from sicasm.cli.errors import ExitCode
from sicasm.cli.sicasm import main

COPY_SOURCE = "COPY\tSTART\t1000\nFIRST\tLDA\tALPHA\nALPHA\tWORD\t5\n-\tEND\tFIRST\n"
OPTAB_TEXT = "LDA 00\nSTA 0C\n"
ENV_VARS = [
    "SICASM_MAX_TEXT_RECORD",
    "SICASM_BREAK_ON_RESERVE",
    "SICASM_TRUNCATE_NAME",
    "SICASM_PAD_END_RECORD",
    "SICASM_WARNINGS_AS_ERRORS",
    "SICASM_MAX_ERRORS",
]


@pytest.fixture
def runner(monkeypatch) -> CliRunner:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


def write_inputs(source: str = COPY_SOURCE) -> None:
    """Write copy.asm and optab.txt into the current directory."""
    Path("copy.asm").write_text(source)
    Path("optab.txt").write_text(OPTAB_TEXT)


# =============================================================================
# Basic Invocation
# =============================================================================

class TestInvocation:
    """Tests for help, version and argument validation."""

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "--optab" in result.output
        assert "--max-record" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_optab_required(self, runner):
        with runner.isolated_filesystem():
            write_inputs()
            result = runner.invoke(main, ["copy.asm"])
            assert result.exit_code == ExitCode.INVALID_ARGS

    def test_missing_source(self, runner):
        with runner.isolated_filesystem():
            write_inputs()
            result = runner.invoke(main, ["nope.asm", "-t", "optab.txt"])
            assert result.exit_code == ExitCode.INVALID_ARGS

    def test_max_record_range(self, runner):
        with runner.isolated_filesystem():
            write_inputs()
            result = runner.invoke(main, ["copy.asm", "-t", "optab.txt", "--max-record", "0"])
            assert result.exit_code == ExitCode.INVALID_ARGS


# =============================================================================
# Assembly Output
# =============================================================================

class TestAssembly:
    """Tests for the files sicasm writes."""

    def test_default_output(self, runner):
        """Should write input.obj next to the source."""
        with runner.isolated_filesystem():
            write_inputs()
            result = runner.invoke(main, ["copy.asm", "-t", "optab.txt"])
            assert result.exit_code == 0, f"Assembly failed: {result.output}"
            assert Path("copy.obj").read_text() == (
                "H^COPY  ^001000^000006\n"
                "T^001000^06^001003^000005\n"
                "E^1000\n"
            )

    def test_all_artifacts(self, runner):
        with runner.isolated_filesystem():
            write_inputs()
            result = runner.invoke(main, [
                "copy.asm", "-t", "optab.txt", "-o", "out.obj",
                "-i", "copy.int", "-s", "copy.sym", "-l", "copy.lst",
            ])
            assert result.exit_code == 0, f"Assembly failed: {result.output}"
            assert Path("out.obj").exists()
            assert Path("copy.sym").read_text() == "FIRST\t1000\nALPHA\t1003\n"
            assert Path("copy.int").read_text().splitlines()[1] == "1000\tFIRST\tLDA\tALPHA"
            assert Path("copy.lst").read_text().splitlines()[1].endswith("\t001003")

    def test_verbose_reports_length(self, runner):
        with runner.isolated_filesystem():
            write_inputs()
            result = runner.invoke(main, ["-v", "copy.asm", "-t", "optab.txt"])
            assert result.exit_code == 0
            assert "Program Length: 6" in result.output

    def test_max_record_and_pad_end(self, runner):
        with runner.isolated_filesystem():
            write_inputs()
            result = runner.invoke(main, [
                "copy.asm", "-t", "optab.txt", "--max-record", "3", "--pad-end",
            ])
            assert result.exit_code == 0
            assert Path("copy.obj").read_text().splitlines()[1:] == [
                "T^001000^03^001003",
                "T^001003^03^000005",
                "E^001000",
            ]

    def test_environment_defaults(self, runner, monkeypatch):
        """SICASM_* variables apply when no option overrides them."""
        monkeypatch.setenv("SICASM_PAD_END_RECORD", "1")
        with runner.isolated_filesystem():
            write_inputs()
            result = runner.invoke(main, ["copy.asm", "-t", "optab.txt"])
            assert result.exit_code == 0
            assert Path("copy.obj").read_text().endswith("E^001000\n")

    def test_loader_layout(self, runner):
        """--loader caps text records at 30 bytes and splits at RESW."""
        with runner.isolated_filesystem():
            write_inputs("P START 0\nA BYTE C'" + "A" * 40 + "'\nB RESW 1\nC WORD 2\n- END P\n")
            result = runner.invoke(main, ["copy.asm", "-t", "optab.txt", "--loader"])
            assert result.exit_code == 0, f"Assembly failed: {result.output}"
            assert Path("copy.obj").read_text().splitlines()[1:4] == [
                "T^000000^1E^" + "41" * 30,
                "T^00001E^0A^" + "41" * 10,
                "T^00002B^03^000002",
            ]

    def test_truncate_name(self, runner):
        with runner.isolated_filesystem():
            write_inputs("LONGNAME START 0\n- END LONGNAME\n")
            failed = runner.invoke(main, ["copy.asm", "-t", "optab.txt"])
            assert failed.exit_code == ExitCode.BUILD_ERROR

            result = runner.invoke(main, ["copy.asm", "-t", "optab.txt", "--truncate-name"])
            assert result.exit_code == 0
            assert Path("copy.obj").read_text().startswith("H^LONGNA^")


# =============================================================================
# Diagnostics
# =============================================================================

class TestDiagnostics:
    """Tests for error and warning reporting."""

    def test_bad_operand_fails(self, runner):
        with runner.isolated_filesystem():
            write_inputs("P START 0\nA RESW MANY\n- END P\n")
            result = runner.invoke(main, ["copy.asm", "-t", "optab.txt"])
            assert result.exit_code == ExitCode.BUILD_ERROR
            assert "invalid decimal operand 'MANY'" in result.output
            assert not Path("copy.obj").exists()

    def test_warning_printed(self, runner):
        with runner.isolated_filesystem():
            write_inputs("P START 0\n- LDA NOWHERE\n- END P\n")
            result = runner.invoke(main, ["copy.asm", "-t", "optab.txt"])
            assert result.exit_code == 0
            assert "undefined symbol 'NOWHERE'" in result.output

    def test_warnings_as_errors(self, runner):
        with runner.isolated_filesystem():
            write_inputs("P START 0\n- LDA NOWHERE\n- END P\n")
            result = runner.invoke(main, ["copy.asm", "-t", "optab.txt", "-W"])
            assert result.exit_code == ExitCode.BUILD_ERROR
