"""
MiniLang Compiler Main Module
=============================

This module ties the pipeline stages together:

    Source → Lex → Parse → AST → Code Generator → Assembly

Each stage runs to completion before the next starts: the whole source
is tokenized before parsing begins, and the whole program is parsed
before any assembly is generated.

Usage
-----
Command line:
    $ tacc prog.txt
    $ tacc prog.txt -o prog.asm

Programmatic:
    >>> from tinyacc.minilang import compile_source
    >>> result = compile_source("int x; x = 5;")
    >>> [str(line) for line in result.assembly]
    ['MVI A, 5', 'STA x']

Error Handling
--------------
Every error is fatal. Compiler.compile() stops at the first failure and
returns a CompilerResult with success=False and that single error in
``errors``. compile_source() raises the error instead.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from tinyacc.minilang.lexer import Lexer, Token
from tinyacc.minilang.parser import Parser
from tinyacc.minilang.codegen import AsmLine, CodeGenerator
from tinyacc.minilang.ast import ProgramNode, dump_ast
from tinyacc.minilang.errors import MiniLangError, ErrorCollector

logger = logging.getLogger(__name__)

LISTING_HEADER = "Assembly Code:"


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        strict: Make the code generator reject shapes it cannot lower
                (plain copies, '-' without enable_subtraction, numeric
                left side of '==', undeclared assignment targets).
        enable_subtraction: Lower '-' expressions with SUB/SUI.
        dump_ast: Put the AST dump in front of the assembly listing.
    """
    strict: bool = False
    enable_subtraction: bool = False
    dump_ast: bool = True


@dataclass
class CompilerResult:
    """
    Result of a compilation.

    Attributes:
        filename: Source filename
        success: True if every stage completed
        tokens: Token list (empty if lexing was never reached)
        ast: Abstract syntax tree (if parsing succeeded)
        assembly: Generated lines (if generation succeeded)
        symbols: Declared variables and their slots
        errors: The error that ended the run, if any
        warnings: Warnings from the code generator
    """
    filename: str = ""
    success: bool = False
    tokens: list[Token] = field(default_factory=list)
    ast: Optional[ProgramNode] = None
    assembly: list[AsmLine] = field(default_factory=list)
    symbols: dict[str, int] = field(default_factory=dict)
    errors: list[MiniLangError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def error(self) -> Optional[MiniLangError]:
        """The fatal error of the run, or None."""
        return self.errors[0] if self.errors else None

    def listing(self, include_ast: bool = True) -> list[str]:
        """Full listing lines for a successful run."""
        ast_lines = dump_ast(self.ast) if include_ast and self.ast is not None else None
        return format_listing(self.assembly, ast_lines)


class Compiler:
    """
    MiniLang compiler.

    Example:
        compiler = Compiler()
        result = compiler.compile("int x; x = 5;")
        print("\\n".join(result.listing()))

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()
        self._diagnostics = ErrorCollector()

    # =========================================================================
    # Pipeline Stages
    # =========================================================================

    def tokenize(self, source: str, filename: str = "<input>") -> list[Token]:
        tokens = list(Lexer(source, filename).tokenize())
        logger.debug("%s: %d tokens", filename, len(tokens))
        return tokens

    def parse(self, source: str, filename: str = "<input>") -> ProgramNode:
        """Tokenize and parse; raises ParseError on failure."""
        return Parser(self.tokenize(source, filename), filename).parse()

    def generate(
        self,
        ast: ProgramNode,
        on_line: Optional[Callable[[AsmLine], None]] = None,
    ) -> CodeGenerator:
        """
        Run the code generator over a parsed program.

        Args:
            ast: The parsed program
            on_line: Called with each line as soon as it is emitted, so
                     output already streamed stays visible if a later
                     statement fails

        Returns:
            The generator, holding the output symbol table and warnings

        Raises:
            CodeGenError: In strict mode
        """
        generator = self._make_generator(on_line)
        generator.generate(ast)
        return generator

    def _make_generator(self, on_line: Optional[Callable[[AsmLine], None]]) -> CodeGenerator:
        return CodeGenerator(
            strict=self.options.strict,
            enable_subtraction=self.options.enable_subtraction,
            on_line=on_line,
        )

    # =========================================================================
    # Whole-Program Compilation
    # =========================================================================

    def compile(
        self,
        source: str,
        filename: str = "<input>",
        on_line: Optional[Callable[[AsmLine], None]] = None,
    ) -> CompilerResult:
        """
        Compile source text, stopping at the first error.

        Returns:
            CompilerResult; check ``success`` before using ``assembly``
        """
        self._diagnostics.clear()
        result = CompilerResult(filename=filename)

        try:
            # Stage 1: Lexical analysis
            result.tokens = self.tokenize(source, filename)

            # Stage 2: Parsing
            result.ast = Parser(result.tokens, filename).parse()

            # Stage 3: Code generation
            generator = self._make_generator(on_line)
            try:
                result.assembly = generator.generate(result.ast)
            finally:
                result.symbols = generator.symbols.slots()
                self._diagnostics.warnings.extend(generator.diagnostics.warnings)

        except MiniLangError as e:
            logger.debug("compilation of %s failed: %s", filename, e.message)
            self._diagnostics.add(e)

        result.success = not self._diagnostics.has_errors()
        result.errors = list(self._diagnostics.errors)
        result.warnings = list(self._diagnostics.warnings)
        return result

    def compile_file(self, filepath: str) -> CompilerResult:
        """
        Compile a source file.

        Raises:
            FileNotFoundError: If the file does not exist
            UnicodeDecodeError: If the file is not valid UTF-8
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")
        return self.compile(path.read_text(encoding="utf-8"), str(path))


# =============================================================================
# Convenience Functions
# =============================================================================

def format_listing(assembly: list[AsmLine], ast_lines: Optional[list[str]] = None) -> list[str]:
    """
    Lay out the final listing.

    With an AST dump: the dump, a blank line, the header, then the code.
    Without: the header, then the code.
    """
    lines = []
    if ast_lines is not None:
        lines.extend(ast_lines)
        lines.append("")
    lines.append(LISTING_HEADER)
    lines.extend(line.render() for line in assembly)
    return lines


def compile_source(
    source: str,
    filename: str = "<input>",
    options: Optional[CompilerOptions] = None,
) -> CompilerResult:
    """
    Compile MiniLang source, raising on failure.

    Raises:
        MiniLangError: The first error of the run
    """
    result = Compiler(options).compile(source, filename)
    if result.error is not None:
        raise result.error
    return result
