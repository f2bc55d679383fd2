"""
Accumulator-Machine Code Generator for MiniLang
===============================================

This module walks the MiniLang AST and emits assembly for a machine
with a single accumulator register (A), using 8080-style mnemonics.

Instruction Set Used
--------------------
| Mnemonic      | Meaning                                   |
|---------------|-------------------------------------------|
| MVI A, n      | load immediate n into A                   |
| MOV A, v      | load variable v into A                    |
| ADD v / ADI n | A = A + v / A = A + n                     |
| SUB v / SUI n | A = A - v / A = A - n (opt-in, see below) |
| STA v         | store A into variable v                   |
| CPI x         | compare A with x, set the zero flag       |
| JNZ LABELn    | jump to LABELn when the zero flag is clear|
| LABELn:       | label definition                          |

Statement Lowering
------------------
    x = 5;              MVI A, 5 / STA x
    x = y + 3;          MOV A, y / ADI 3 / STA x
    if (x == 1) { .. }  MOV A, x / CPI 1 / JNZ LABEL0 / .. / LABEL0:

An if jumps past its body when the compare leaves the zero flag clear,
so the body runs only when the two sides are equal. Label numbers come
from one counter per generate() call, taken in pre-order, so an outer
if always gets a smaller number than any if nested in its body.

Permissive Mode
---------------
Some shapes the parser accepts have no lowering:

- ``x = y;`` (a plain variable copy) emits no load
- ``x = a - b;`` emits no arithmetic unless subtraction is enabled
- a Number on the left of ``==`` is emitted as ``MOV A, <digits>``
- assignment to a variable that was never declared

By default these produce a warning and generation continues (only
``STA`` is emitted for the first two). With ``strict=True`` each one
raises CodeGenError instead.

Usage
-----
>>> from tinyacc.minilang.parser import parse_source
>>> from tinyacc.minilang.codegen import CodeGenerator
>>> gen = CodeGenerator()
>>> [str(line) for line in gen.generate(parse_source("int x; x = 5;"))]
['MVI A, 5', 'STA x']
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from tinyacc.errors import SourceLocation
from tinyacc.minilang.ast import (
    ASTVisitor,
    ProgramNode,
    Declaration,
    Assignment,
    IfStatement,
    Body,
    Condition,
    BinaryOp,
    Identifier,
    Number,
    Term,
)
from tinyacc.minilang.errors import CodeGenError, ErrorCollector
from tinyacc.minilang.symbols import SymbolTable

logger = logging.getLogger(__name__)


# =============================================================================
# Output Records
# =============================================================================

@dataclass(frozen=True)
class AsmLine:
    """
    One line of generated assembly.

    Attributes:
        text: Instruction text (``MVI A, 5``) or label (``LABEL0:``)
        is_label: True for label definitions
    """
    text: str
    is_label: bool = False

    def __str__(self) -> str:
        return self.text

    def render(self) -> str:
        """Listing form: instructions indented two spaces, labels flush left."""
        if self.is_label:
            return self.text
        return f"  {self.text}"


# =============================================================================
# Code Generator Class
# =============================================================================

class CodeGenerator(ASTVisitor):
    """
    Generates accumulator-machine assembly from a MiniLang AST.

    Each call to generate() starts with an empty symbol table, an empty
    warning list and a label counter of zero.

    Attributes:
        strict: Raise CodeGenError instead of warning on unlowerable shapes
        enable_subtraction: Lower ``-`` with SUB/SUI
        symbols: Symbol table of the most recent run
        diagnostics: Warnings of the most recent run
    """

    def __init__(
        self,
        strict: bool = False,
        enable_subtraction: bool = False,
        on_line: Optional[Callable[[AsmLine], None]] = None,
    ):
        """
        Args:
            strict: Treat unlowerable shapes as errors
            enable_subtraction: Emit SUB/SUI for ``-`` expressions
            on_line: Called with every line as soon as it is emitted
        """
        self.strict = strict
        self.enable_subtraction = enable_subtraction
        self._on_line = on_line

        self.symbols = SymbolTable()
        self.diagnostics = ErrorCollector()

        self._output: list[AsmLine] = []
        self._label_counter: int = 0

    def generate(self, program: ProgramNode) -> list[AsmLine]:
        """
        Generate assembly for a whole program.

        Args:
            program: The root AST node

        Returns:
            Emitted lines in order

        Raises:
            CodeGenError: In strict mode, on the first unlowerable shape
        """
        self._output = []
        self._label_counter = 0
        self.symbols = SymbolTable()
        self.diagnostics = ErrorCollector()

        self.visit(program)

        logger.debug(
            "generated %d lines, %d labels, %d symbols",
            len(self._output), self._label_counter, len(self.symbols),
        )
        return list(self._output)

    @property
    def lines(self) -> list[AsmLine]:
        """Lines emitted so far in the current or last run."""
        return list(self._output)

    # =========================================================================
    # Assembly Output Methods
    # =========================================================================

    def _emit(self, line: AsmLine) -> None:
        self._output.append(line)
        if self._on_line is not None:
            self._on_line(line)

    def _emit_instruction(self, mnemonic: str, operand: str) -> None:
        self._emit(AsmLine(f"{mnemonic} {operand}"))

    def _emit_label(self, label: str) -> None:
        self._emit(AsmLine(f"{label}:", is_label=True))

    def _new_label(self) -> str:
        label = f"LABEL{self._label_counter}"
        self._label_counter += 1
        return label

    def _unsupported(self, message: str, location: Optional[SourceLocation]) -> None:
        """Warn about a shape with no lowering, or fail in strict mode."""
        if self.strict:
            raise CodeGenError(message, location)
        self.diagnostics.add_warning(message, location)
        logger.warning("%s", self.diagnostics.warnings[-1])

    @staticmethod
    def _operand(term: Term) -> str:
        """Operand text of a term: the variable name or the literal digits."""
        if isinstance(term, Identifier):
            return term.name
        return term.value

    # =========================================================================
    # Statements
    # =========================================================================

    def visit_ProgramNode(self, node: ProgramNode) -> None:
        for stmt in node.statements:
            self.visit(stmt)

    def visit_Body(self, node: Body) -> None:
        for stmt in node.statements:
            self.visit(stmt)

    def visit_Declaration(self, node: Declaration) -> None:
        self.symbols.declare(node.target.name, node.location)

    def visit_Assignment(self, node: Assignment) -> None:
        target = node.target.name
        if target not in self.symbols:
            self._unsupported(f"assignment to undeclared variable '{target}'", node.location)

        value = node.value
        if isinstance(value, Number):
            self._emit_instruction("MVI", f"A, {value.value}")
        elif isinstance(value, BinaryOp):
            self._generate_binary(value, target)
        else:
            self._unsupported(
                f"copy of '{self._operand(value)}' into '{target}' emits no load",
                value.location,
            )

        self._emit_instruction("STA", target)

    def _generate_binary(self, expr: BinaryOp, target: str) -> None:
        if expr.operator == "+":
            add_var, add_imm = "ADD", "ADI"
        elif expr.operator == "-" and self.enable_subtraction:
            add_var, add_imm = "SUB", "SUI"
        else:
            self._unsupported(
                f"'{expr.operator}' expression assigned to '{target}' emits no arithmetic",
                expr.location,
            )
            return

        self._generate_load(expr.left)

        if isinstance(expr.right, Identifier):
            self._emit_instruction(add_var, expr.right.name)
        else:
            self._emit_instruction(add_imm, expr.right.value)

    def _generate_load(self, term: Term) -> None:
        """Load a term into the accumulator."""
        if isinstance(term, Identifier):
            self._emit_instruction("MOV", f"A, {term.name}")
        else:
            self._emit_instruction("MVI", f"A, {term.value}")

    def visit_IfStatement(self, node: IfStatement) -> None:
        label = self._new_label()

        self.visit(node.condition)
        self._emit_instruction("JNZ", label)
        self.visit(node.body)
        self._emit_label(label)

    def visit_Condition(self, node: Condition) -> None:
        if not isinstance(node.left, Identifier):
            self._unsupported(
                f"left side of '==' should be a variable, got '{self._operand(node.left)}'",
                node.left.location,
            )
        # Both sides are copied as written; the right side is never loaded.
        self._emit_instruction("MOV", f"A, {self._operand(node.left)}")
        self._emit_instruction("CPI", self._operand(node.right))
