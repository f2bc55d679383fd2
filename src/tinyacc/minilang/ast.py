"""
MiniLang Abstract Syntax Tree (AST) Definitions
===============================================

This module defines the AST node types produced by the MiniLang parser
and consumed by the code generator.

Node Hierarchy
--------------
ASTNode (base)
├── ProgramNode - root node containing the top-level statements
├── Statements
│   ├── Declaration - int x;
│   ├── Assignment - x = expr;
│   └── IfStatement - if (cond) { body }
├── Body - statement list of an if
├── Condition - left == right
└── Expressions
    ├── BinaryOp - left + right, left - right
    ├── Identifier - variable reference
    └── Number - integer literal, kept as written

Tree Dump
---------
ASTPrinter renders one tag per line, indented two spaces per level.
Identifier and Number nodes print their payload on a line of its own
one level deeper than the wrapper:

    Program
      Assignment
        Identifier
          x
        Number
          5
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from tinyacc.errors import SourceLocation


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location of the node's first token (if known)
    """
    location: Optional[SourceLocation] = field(default=None, compare=False, kw_only=True)


@dataclass
class Statement(ASTNode):
    """Base class for statement nodes."""
    pass


# =============================================================================
# Leaf and Expression Nodes
# =============================================================================

@dataclass
class Identifier(ASTNode):
    """
    Variable reference.

    Attributes:
        name: Variable name
    """
    name: str = ""


@dataclass
class Number(ASTNode):
    """
    Integer literal.

    The digits are kept as written; the generator copies them verbatim
    into the operand field.

    Attributes:
        value: Literal digits
    """
    value: str = "0"


Term = Union[Identifier, Number]


@dataclass
class BinaryOp(ASTNode):
    """
    Binary arithmetic with exactly two terms.

    Attributes:
        operator: "+" or "-"
        left: Left operand
        right: Right operand
    """
    operator: str = "+"
    left: Term = None
    right: Term = None


Expression = Union[Identifier, Number, BinaryOp]


@dataclass
class Condition(ASTNode):
    """
    Equality test guarding an if.

    Attributes:
        left: Left operand (expected to be an Identifier)
        right: Right operand, compared as written
    """
    left: Term = None
    right: Term = None


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass
class Declaration(Statement):
    """
    Integer variable declaration ``int x;``.

    Attributes:
        target: The declared variable
    """
    target: Identifier = None


@dataclass
class Assignment(Statement):
    """
    Assignment ``x = expr;``.

    Attributes:
        target: Variable receiving the value
        value: Expression to evaluate into the accumulator
    """
    target: Identifier = None
    value: Expression = None


@dataclass
class Body(ASTNode):
    """
    Statements between the braces of an if.

    Attributes:
        statements: Statements in source order
    """
    statements: list[Statement] = field(default_factory=list)


@dataclass
class IfStatement(Statement):
    """
    Conditional block ``if (a == b) { ... }``. There is no else.

    Attributes:
        condition: The equality test
        body: Statements run when the test holds
    """
    condition: Condition = None
    body: Body = field(default_factory=Body)


# =============================================================================
# Program Root Node
# =============================================================================

@dataclass
class ProgramNode(ASTNode):
    """
    Root node of the AST.

    Attributes:
        statements: Top-level statements in source order
    """
    statements: list[Statement] = field(default_factory=list)


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Dispatches on the node's class name, e.g. ``visit_Assignment``.
    Unhandled node types fall back to generic_visit, which visits every
    child node.

    Usage:
        class MyVisitor(ASTVisitor):
            def visit_Assignment(self, node):
                ...

        MyVisitor().visit(program)
    """

    def visit(self, node: ASTNode):
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """Visit all child nodes in field order."""
        for field_value in node.__dict__.values():
            if isinstance(field_value, ASTNode):
                self.visit(field_value)
            elif isinstance(field_value, list):
                for item in field_value:
                    if isinstance(item, ASTNode):
                        self.visit(item)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Renders the indented tree dump.

    Usage:
        printer = ASTPrinter()
        lines = printer.lines(ast)
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def lines(self, node: ASTNode) -> list[str]:
        """Dump the tree and return one string per line."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return list(self.output)

    def print(self, node: ASTNode) -> str:
        """Dump the tree as a single newline-joined string."""
        return "\n".join(self.lines(node))

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _nested(self, tag: str, *children: ASTNode) -> None:
        """Emit tag, then visit children one level deeper."""
        self._emit(tag)
        self.indent_level += 1
        for child in children:
            self.visit(child)
        self.indent_level -= 1

    def _payload(self, tag: str, payload: str) -> None:
        self._emit(tag)
        self.indent_level += 1
        self._emit(payload)
        self.indent_level -= 1

    def visit_ProgramNode(self, node: ProgramNode):
        self._nested("Program", *node.statements)

    def visit_Declaration(self, node: Declaration):
        self._nested("Declaration", node.target)

    def visit_Assignment(self, node: Assignment):
        self._nested("Assignment", node.target, node.value)

    def visit_IfStatement(self, node: IfStatement):
        self._nested("If", node.condition, node.body)

    def visit_Body(self, node: Body):
        self._nested("Body", *node.statements)

    def visit_Condition(self, node: Condition):
        self._nested("==", node.left, node.right)

    def visit_BinaryOp(self, node: BinaryOp):
        self._nested(node.operator, node.left, node.right)

    def visit_Identifier(self, node: Identifier):
        self._payload("Identifier", node.name)

    def visit_Number(self, node: Number):
        self._payload("Number", node.value)


def dump_ast(node: ASTNode) -> list[str]:
    """Return the indented tree dump of node as a list of lines."""
    return ASTPrinter().lines(node)
