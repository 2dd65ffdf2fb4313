# =============================================================================
# test_assembler.py - Full Assembler Integration Tests
# =============================================================================
# End-to-end integration tests for the complete Hack assembler.
# These tests verify the full pipeline from source code to .hack output.
#
# Test coverage includes:
#   - Complete program assembly
#   - File input and output files
#   - Options and environment configuration
#   - Command-line interface
# =============================================================================

import pytest

from click.testing import CliRunner

from hack_sdk import __version__
from hack_sdk.assembler import Assembler, AssemblerOptions, assemble, assemble_file
from hack_sdk.cli.errors import ExitCode
from hack_sdk.cli.hackasm import main
from hack_sdk.errors import (
    AssemblerError,
    DuplicateSymbolError,
    HackError,
    UnknownMnemonicError,
)


MAX_ASM = """\
// Computes R2 = max(R0, R1)

   @R0
   D=M              // D = first number
   @R1
   D=D-M            // D = first number - second number
   @OUTPUT_FIRST
   D;JGT            // if D>0 (first is greater) goto output_first
   @R1
   D=M              // D = second number
   @OUTPUT_D
   0;JMP            // goto output_d
(OUTPUT_FIRST)
   @R0
   D=M              // D = first number
(OUTPUT_D)
   @R2
   M=D              // M[2] = D (greatest number)
(INFINITE_LOOP)
   @INFINITE_LOOP
   0;JMP            // infinite loop
"""

MAX_HACK = [
    "0000000000000000",
    "1111110000010000",
    "0000000000000001",
    "1111010011010000",
    "0000000000001010",
    "1110001100000001",
    "0000000000000001",
    "1111110000010000",
    "0000000000001100",
    "1110101010000111",
    "0000000000000000",
    "1111110000010000",
    "0000000000000010",
    "1110001100001000",
    "0000000000001110",
    "1110101010000111",
]


# =============================================================================
# Full Assembly Pipeline Tests
# =============================================================================

class TestFullPipeline:
    """Test the complete assembly pipeline."""

    def test_add_program(self):
        words = assemble("@2\nD=A\n@3\nD=D+A\n0;JMP")
        assert words == [
            "0000000000000010",
            "1110110000010000",
            "0000000000000011",
            "1110000010010000",
            "1110101010000111",
        ]

    def test_max_program(self):
        assert assemble(MAX_ASM) == MAX_HACK

    def test_assemble_lines(self):
        asm = Assembler()
        lines = MAX_ASM.splitlines(keepends=True)
        assert asm.assemble_lines(lines) == MAX_HACK

    def test_symbols_after_assembly(self):
        asm = Assembler()
        asm.assemble_string(MAX_ASM)
        symbols = asm.get_symbols()
        assert symbols["OUTPUT_FIRST"] == 10
        assert symbols["OUTPUT_D"] == 12
        assert symbols["INFINITE_LOOP"] == 14
        assert symbols["R2"] == 2

    def test_variable_program(self):
        source = """
            @i
            M=1      // i = 1
            @sum
            M=0      // sum = 0
        (LOOP)
            @i
            D=M
            @100
            D=D-A
            @END
            D;JGT
            @i
            D=M
            @sum
            M=D+M
            @i
            M=M+1
            @LOOP
            0;JMP
        (END)
            @END
            0;JMP
        """
        asm = Assembler()
        words = asm.assemble_string(source)
        assert len(words) == 20
        assert words[0] == "0000000000010000"   # i
        assert words[2] == "0000000000010001"   # sum
        assert words[8] == "0000000000010010"   # END = 18
        assert words[16] == "0000000000000100"  # LOOP = 4

    def test_error_is_hack_error(self):
        with pytest.raises(HackError):
            assemble("D=D+2")

    def test_duplicate_label_option(self):
        source = "(X)\n@1\n(X)\n@X"
        with pytest.raises(DuplicateSymbolError):
            assemble(source)
        assert assemble(source, allow_label_redefinition=True)[1] == "0000000000000001"


# =============================================================================
# Files
# =============================================================================

class TestFiles:

    def test_assemble_file(self, tmp_path):
        src = tmp_path / "Max.asm"
        src.write_text(MAX_ASM)
        assert assemble_file(src) == MAX_HACK

    def test_error_uses_filename(self, tmp_path):
        src = tmp_path / "Bad.asm"
        src.write_text("@1\nD=D+2\n")
        asm = Assembler()
        with pytest.raises(UnknownMnemonicError) as exc_info:
            asm.assemble_file(src)
        assert f"{src}:2:1: error:" in str(exc_info.value)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Assembler().assemble_file(tmp_path / "nope.asm")

    def test_write_outputs(self, tmp_path):
        asm = Assembler()
        asm.assemble_string(MAX_ASM)

        asm.write_hack(tmp_path / "Max.hack")
        asm.write_listing(tmp_path / "Max.lst")
        asm.write_symbols(tmp_path / "Max.sym")

        assert (tmp_path / "Max.hack").read_text().splitlines() == MAX_HACK
        assert "OUTPUT_FIRST" in (tmp_path / "Max.lst").read_text()
        assert "OUTPUT_D 12 label" in (tmp_path / "Max.sym").read_text()

    def test_write_after_failure_refused(self, tmp_path):
        asm = Assembler()
        asm.assemble_string("@1")
        with pytest.raises(AssemblerError):
            asm.assemble_string("D=D+2")
        with pytest.raises(RuntimeError):
            asm.write_hack(tmp_path / "out.hack")
        assert not (tmp_path / "out.hack").exists()


# =============================================================================
# Options
# =============================================================================

class TestOptions:

    def test_defaults(self):
        options = AssemblerOptions()
        assert options.allow_label_redefinition is False
        assert options.verbose is False

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("HACK_ASM_ALLOW_LABEL_REDEFINITION", "yes")
        monkeypatch.setenv("HACK_ASM_VERBOSE", "0")
        options = AssemblerOptions.from_env()
        assert options.allow_label_redefinition is True
        assert options.verbose is False

    def test_from_env_unset(self, monkeypatch):
        monkeypatch.delenv("HACK_ASM_ALLOW_LABEL_REDEFINITION", raising=False)
        monkeypatch.delenv("HACK_ASM_VERBOSE", raising=False)
        assert AssemblerOptions.from_env() == AssemblerOptions()

    def test_options_reach_assembler(self):
        asm = Assembler(AssemblerOptions(allow_label_redefinition=True))
        assert asm.options.allow_label_redefinition
        assert asm.assemble_string("(X)\n(X)\n@X") == ["0000000000000000"]


# =============================================================================
# Command-Line Interface
# =============================================================================

class TestCLI:
    """Tests for the hackasm CLI tool."""

    def test_help(self):
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Assemble Hack assembly source" in result.output

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_default_output_name(self, tmp_path):
        src = tmp_path / "Max.asm"
        src.write_text(MAX_ASM)

        result = CliRunner().invoke(main, [str(src)])

        assert result.exit_code == ExitCode.SUCCESS
        assert (tmp_path / "Max.hack").read_text().splitlines() == MAX_HACK

    def test_all_outputs(self, tmp_path):
        src = tmp_path / "Max.asm"
        src.write_text(MAX_ASM)
        out = tmp_path / "out.hack"
        lst = tmp_path / "Max.lst"
        sym = tmp_path / "Max.sym"

        result = CliRunner().invoke(
            main, [str(src), "-o", str(out), "-l", str(lst), "-s", str(sym)]
        )

        assert result.exit_code == 0
        assert out.read_text().splitlines() == MAX_HACK
        assert lst.exists()
        assert sym.exists()
        assert not (tmp_path / "Max.hack").exists()

    def test_assembly_error(self, tmp_path):
        src = tmp_path / "Bad.asm"
        src.write_text("@1\nD=D+2\n")

        result = CliRunner().invoke(main, [str(src)])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "unknown comp mnemonic 'D+2'" in result.output
        assert not (tmp_path / "Bad.hack").exists()

    def test_missing_input(self, tmp_path):
        result = CliRunner().invoke(main, [str(tmp_path / "nope.asm")])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_duplicate_label_flag(self, tmp_path):
        src = tmp_path / "Dup.asm"
        src.write_text("(X)\n@1\n(X)\n@X\n")

        result = CliRunner().invoke(main, [str(src)])
        assert result.exit_code == ExitCode.BUILD_ERROR

        result = CliRunner().invoke(main, [str(src), "--allow-label-redefinition"])
        assert result.exit_code == 0
        assert (tmp_path / "Dup.hack").read_text().splitlines()[1] == "0000000000000001"

    def test_duplicate_label_env(self, tmp_path):
        src = tmp_path / "Dup.asm"
        src.write_text("(X)\n@1\n(X)\n@X\n")

        result = CliRunner().invoke(
            main, [str(src)], env={"HACK_ASM_ALLOW_LABEL_REDEFINITION": "1"}
        )
        assert result.exit_code == 0

    def test_verbose_summary(self, tmp_path):
        src = tmp_path / "Max.asm"
        src.write_text(MAX_ASM)

        result = CliRunner().invoke(main, [str(src), "-v"])

        assert result.exit_code == 0
        assert "Assembly complete: 16 words" in result.output

    def test_output_would_overwrite_input(self, tmp_path):
        src = tmp_path / "Prog.hack"
        src.write_text(MAX_ASM)

        result = CliRunner().invoke(main, [str(src)])

        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "overwrite the input" in result.output
        assert src.read_text() == MAX_ASM

    def test_failed_listing_removes_hack_file(self, tmp_path):
        src = tmp_path / "Max.asm"
        src.write_text(MAX_ASM)
        lst = tmp_path / "missing" / "Max.lst"

        result = CliRunner().invoke(main, [str(src), "-l", str(lst)])

        assert result.exit_code != ExitCode.SUCCESS
        assert not (tmp_path / "Max.hack").exists()
        assert not lst.exists()
