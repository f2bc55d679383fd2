"""
MiniLang Compiler
=================

This package compiles MiniLang, a minimal imperative language, into
assembly for a single-accumulator machine.

MiniLang has integer declarations, assignments whose right side is a
number, a variable or one ``+``/``-`` between two of those, and
if-blocks guarded by a single ``==`` test:

    int x;
    int y;
    x = 5;
    if (x == 5) {
        y = x + 1;
    }

Pipeline
--------
    Source → Lexer → Parser → AST → Code Generator → Assembly

The lexer never fails, the parser stops at the first error, and the
code generator fills the symbol table as it visits declarations.

Usage
-----
>>> from tinyacc.minilang import compile_source
>>> result = compile_source("int x; x = 5;")
>>> print("\\n".join(result.listing()))
"""

from tinyacc.minilang.compiler import (
    Compiler,
    CompilerOptions,
    CompilerResult,
    compile_source,
    format_listing,
)
from tinyacc.minilang.errors import (
    MiniLangError,
    ParseError,
    UnexpectedTokenError,
    UnexpectedEndOfInputError,
    CodeGenError,
)
from tinyacc.minilang.lexer import Lexer, Token, TokenType, tokenize
from tinyacc.minilang.parser import Parser, parse_source, parse_tokens
from tinyacc.minilang.codegen import AsmLine, CodeGenerator
from tinyacc.minilang.symbols import Symbol, SymbolTable
from tinyacc.minilang.ast import (
    ASTNode,
    ProgramNode,
    Declaration,
    Assignment,
    IfStatement,
    Body,
    Condition,
    BinaryOp,
    Identifier,
    Number,
    ASTPrinter,
    dump_ast,
)

__all__ = [
    # Main API
    "Compiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_source",
    "format_listing",
    # Errors
    "MiniLangError",
    "ParseError",
    "UnexpectedTokenError",
    "UnexpectedEndOfInputError",
    "CodeGenError",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    # Parser
    "Parser",
    "parse_source",
    "parse_tokens",
    # Code Generator
    "AsmLine",
    "CodeGenerator",
    "Symbol",
    "SymbolTable",
    # AST Nodes
    "ASTNode",
    "ProgramNode",
    "Declaration",
    "Assignment",
    "IfStatement",
    "Body",
    "Condition",
    "BinaryOp",
    "Identifier",
    "Number",
    "ASTPrinter",
    "dump_ast",
]
