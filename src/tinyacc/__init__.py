"""
tinyacc - Tiny Accumulator Compiler
===================================

A teaching-scale compiler that translates MiniLang programs into a flat
assembly listing for a machine with one accumulator register.

Main Components
---------------
- **minilang**: lexer, parser, AST, symbol table and code generator
- **cli**: the ``tacc`` command-line tool

Quick Start
-----------
    >>> from tinyacc import compile_source
    >>> result = compile_source("int x; x = 5;")
    >>> [str(line) for line in result.assembly]
    ['MVI A, 5', 'STA x']

Or from the shell:
    $ tacc prog.txt
"""

__version__ = "1.0.0"

from tinyacc.errors import TinyAccError, SourceLocation
from tinyacc.minilang import (
    Compiler,
    CompilerOptions,
    CompilerResult,
    compile_source,
    MiniLangError,
    ParseError,
    CodeGenError,
)

__all__ = [
    "__version__",
    "TinyAccError",
    "SourceLocation",
    "Compiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_source",
    "MiniLangError",
    "ParseError",
    "CodeGenError",
]
