# =============================================================================
# test_cli.py - tacc Command-Line Tests
# =============================================================================
# Test coverage includes:
#   - Streamed listing on stdout, stdin input, -o file output
#   - --tokens, --ast, --no-ast, --enable-sub and --version
#   - Exit codes for compile errors and unreadable input
#   - Lines streamed before a strict-mode error
# =============================================================================

import pytest
from click.testing import CliRunner

from tinyacc.cli.tacc import main
from tinyacc.cli.errors import ExitCode


PROGRAM = "int x;\nx = 5;\nif (x == 5) { x = 6; }\n"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def program_file(tmp_path):
    path = tmp_path / "prog.txt"
    path.write_text(PROGRAM)
    return path


# =============================================================================
# Compilation Tests
# =============================================================================

class TestCompileCommand:

    def test_listing_on_stdout(self, runner, program_file):
        result = runner.invoke(main, [str(program_file)])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == "Program"
        header = lines.index("Assembly Code:")
        assert lines[header - 1] == ""
        assert lines[header + 1:] == [
            "  MVI A, 5",
            "  STA x",
            "  MOV A, x",
            "  CPI 5",
            "  JNZ LABEL0",
            "  MVI A, 6",
            "  STA x",
            "LABEL0:",
        ]

    def test_reads_stdin(self, runner):
        result = runner.invoke(main, [], input="int x; x = 5;")
        assert result.exit_code == 0
        assert "  MVI A, 5" in result.output.splitlines()

    def test_no_ast(self, runner, program_file):
        result = runner.invoke(main, ["--no-ast", str(program_file)])
        assert result.exit_code == 0
        assert result.output.splitlines()[0] == "Assembly Code:"

    def test_ast_only(self, runner, program_file):
        result = runner.invoke(main, ["--ast", str(program_file)])
        assert result.exit_code == 0
        assert result.output.splitlines()[:4] == [
            "Program", "  Declaration", "    Identifier", "      x",
        ]
        assert "Assembly Code:" not in result.output

    def test_tokens_only(self, runner, program_file):
        result = runner.invoke(main, ["--tokens", str(program_file)])
        assert result.exit_code == 0
        first = result.output.splitlines()[0].split()
        assert first == ["INT_KEYWORD", "'int'", "1:1"]

    def test_output_file(self, runner, program_file, tmp_path):
        out = tmp_path / "prog.asm"
        result = runner.invoke(main, [str(program_file), "-o", str(out)])
        assert result.exit_code == 0
        assert f"-> {out}" in result.output
        written = out.read_text().splitlines()
        assert "Assembly Code:" in written
        assert written[-1] == "LABEL0:"

    def test_enable_sub(self, runner):
        result = runner.invoke(main, ["--enable-sub", "--no-ast"], input="int x; x = 9 - 4;")
        assert result.exit_code == 0
        assert "  SUI 4" in result.output.splitlines()

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output


# =============================================================================
# Error Reporting Tests
# =============================================================================

class TestCommandErrors:

    def test_parse_error(self, runner):
        result = runner.invoke(main, [], input="int ;")
        assert result.exit_code == ExitCode.COMPILE_ERROR
        error_lines = [l for l in result.output.splitlines() if l.startswith("Error:")]
        assert error_lines == ["Error: <stdin>:1:5: unexpected token ';'"]
        assert "Assembly Code:" not in result.output

    def test_missing_brace(self, runner):
        result = runner.invoke(main, [], input="if (x == 1) { y = 2;")
        assert result.exit_code == ExitCode.COMPILE_ERROR
        assert "unexpected end of input" in result.output

    def test_strict_error_after_streamed_lines(self, runner):
        result = runner.invoke(main, ["--strict", "--no-ast"], input="int x; x = 5; y = 1;")
        assert result.exit_code == ExitCode.COMPILE_ERROR
        lines = result.output.splitlines()
        assert lines[:3] == ["Assembly Code:", "  MVI A, 5", "  STA x"]
        assert any("undeclared variable 'y'" in l for l in lines)

    def test_strict_error_writes_no_file(self, runner, tmp_path):
        out = tmp_path / "out.asm"
        result = runner.invoke(main, ["--strict", "-o", str(out)], input="x = 1;")
        assert result.exit_code == ExitCode.COMPILE_ERROR
        assert not out.exists()

    def test_missing_input_file(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path / "nope.txt")])
        assert result.exit_code == 2

    def test_undecodable_input_file(self, runner, tmp_path):
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"int x; x = 5; \xff")
        result = runner.invoke(main, [str(path)])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "Error: input is not valid UTF-8" in result.output
        assert "Internal error" not in result.output

    def test_deep_nesting_is_compile_error(self, runner):
        result = runner.invoke(main, [], input="if (a == 1) { " * 600 + "}" * 600)
        assert result.exit_code == ExitCode.COMPILE_ERROR
        assert "if-blocks nested too deeply" in result.output
        assert "Internal error" not in result.output


# =============================================================================
# Package Tests
# =============================================================================

class TestPackage:

    def test_exported_names_exist(self):
        import tinyacc.cli
        for name in getattr(tinyacc.cli, "__all__", []):
            assert hasattr(tinyacc.cli, name)
