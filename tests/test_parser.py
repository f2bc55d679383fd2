"""
MiniLang Parser Test Suite
==========================

Covers the recursive descent parser and the AST dump.

Test Organization
-----------------
- TestStatements: declarations, assignments and if-blocks
- TestExpressions: terms and the single optional operator
- TestParseErrors: fatal errors without recovery
- TestParserState: independent parser instances
- TestASTDump: the indented tree dump
"""

import pytest
from tinyacc.minilang.lexer import tokenize
from tinyacc.minilang.parser import MAX_NESTING_DEPTH, Parser, parse_source, parse_tokens
from tinyacc.minilang.ast import (
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
from tinyacc.minilang.errors import (
    ParseError,
    UnexpectedTokenError,
    UnexpectedEndOfInputError,
)


# =============================================================================
# Statement Tests
# =============================================================================

class TestStatements:

    def test_empty_program(self):
        program = parse_source("")
        assert isinstance(program, ProgramNode)
        assert program.statements == []

    def test_whitespace_program(self):
        assert parse_source("  \n\t ").statements == []

    def test_declaration(self):
        program = parse_source("int x;")
        assert program.statements == [Declaration(target=Identifier("x"))]

    def test_assignment_number(self):
        program = parse_source("x = 5;")
        assert program.statements == [Assignment(target=Identifier("x"), value=Number("5"))]

    def test_assignment_identifier(self):
        program = parse_source("x = y;")
        assert program.statements[0].value == Identifier("y")

    def test_statements_in_order(self):
        program = parse_source("int x; int y; x = 1; y = x;")
        assert [type(s) for s in program.statements] == [
            Declaration, Declaration, Assignment, Assignment,
        ]

    def test_if_statement(self):
        program = parse_source("if (x == 1) { y = 2; }")
        stmt = program.statements[0]
        assert isinstance(stmt, IfStatement)
        assert stmt.condition == Condition(left=Identifier("x"), right=Number("1"))
        assert stmt.body == Body(statements=[
            Assignment(target=Identifier("y"), value=Number("2")),
        ])

    def test_if_with_empty_body(self):
        stmt = parse_source("if (x == 1) { }").statements[0]
        assert stmt.body.statements == []

    def test_declaration_inside_if(self):
        stmt = parse_source("if (x == 1) { int z; z = 3; }").statements[0]
        assert isinstance(stmt.body.statements[0], Declaration)
        assert isinstance(stmt.body.statements[1], Assignment)

    def test_nested_if_is_accepted(self):
        """The body is a statement list, so an if may appear inside it."""
        program = parse_source("if (a == 1) { if (b == 2) { c = 3; } }")
        inner = program.statements[0].body.statements[0]
        assert isinstance(inner, IfStatement)
        assert inner.condition.left == Identifier("b")

    def test_condition_with_identifier_on_right(self):
        cond = parse_source("if (a == b) { }").statements[0].condition
        assert cond.right == Identifier("b")

    def test_statement_locations(self):
        program = parse_source("int x;\nx = 5;", "prog.txt")
        assert str(program.statements[0].location) == "prog.txt:1:1"
        assert str(program.statements[1].location) == "prog.txt:2:1"
        assert str(program.statements[1].value.location) == "prog.txt:2:5"

    def test_locations_do_not_affect_equality(self):
        assert parse_source("x = 5;") == parse_source("\n\n   x   =   5 ;")


# =============================================================================
# Expression Tests
# =============================================================================

class TestExpressions:

    def test_addition(self):
        value = parse_source("x = y + 3;").statements[0].value
        assert value == BinaryOp(operator="+", left=Identifier("y"), right=Number("3"))

    def test_subtraction(self):
        value = parse_source("x = 7 - y;").statements[0].value
        assert value == BinaryOp(operator="-", left=Number("7"), right=Identifier("y"))

    def test_two_numbers(self):
        value = parse_source("x = 1 + 2;").statements[0].value
        assert value.left == Number("1")
        assert value.right == Number("2")

    def test_chained_operators_rejected(self):
        """At most one operator: the second '+' is where ';' was expected."""
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("x = a + b + c;")
        assert exc_info.value.found == "+"
        assert exc_info.value.expected == "SEMICOLON"

    def test_parenthesised_expression_rejected(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("x = (a + b);")
        assert exc_info.value.found == "("
        assert exc_info.value.expected == "term"

    def test_unknown_operator_rejected(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("x = 2 * 3;")
        assert exc_info.value.found == "*"

    def test_missing_term(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("x = ;")
        assert exc_info.value.expected == "term"


# =============================================================================
# Parse Error Tests
# =============================================================================

class TestParseErrors:
    """Every error is fatal and carries the offending token."""

    def test_declaration_missing_identifier(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("int ;")
        error = exc_info.value
        assert error.found == ";"
        assert error.expected == "IDENTIFIER"
        assert error.location.column == 5

    def test_error_is_parse_error(self):
        with pytest.raises(ParseError):
            parse_source("int ;")

    def test_missing_semicolon(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("int x int y;")
        assert exc_info.value.found == "int"

    def test_missing_closing_brace(self):
        """An unterminated if-body runs out of tokens instead of looping."""
        with pytest.raises(UnexpectedEndOfInputError):
            parse_source("if (x == 1) { y = 2;")

    def test_missing_closing_brace_empty_body(self):
        with pytest.raises(UnexpectedEndOfInputError):
            parse_source("if (x == 1) {")

    def test_truncated_declaration(self):
        with pytest.raises(UnexpectedEndOfInputError) as exc_info:
            parse_source("int x")
        assert exc_info.value.expected == "SEMICOLON"

    def test_end_of_input_location_follows_last_token(self):
        with pytest.raises(UnexpectedEndOfInputError) as exc_info:
            parse_source("int abc", "p.txt")
        assert str(exc_info.value.location) == "p.txt:1:8"

    def test_bare_identifier_statement(self):
        with pytest.raises(UnexpectedEndOfInputError):
            parse_source("x")

    def test_number_at_statement_start(self):
        """Anything that is not 'int' or 'if' is parsed as an assignment."""
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("5 = x;")
        assert exc_info.value.found == "5"
        assert exc_info.value.expected == "IDENTIFIER"

    def test_unknown_at_statement_start(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("# x = 1;")
        assert exc_info.value.found == "#"

    def test_stray_closing_brace(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("x = 1; }")
        assert exc_info.value.found == "}"

    def test_condition_needs_equality(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("if (x = 1) { }")
        assert exc_info.value.expected == "EQ"

    def test_condition_needs_parentheses(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("if x == 1 { }")
        assert exc_info.value.expected == "LPAREN"

    def test_error_inside_body_aborts(self):
        with pytest.raises(UnexpectedTokenError):
            parse_source("if (x == 1) { int ; } y = 2;")

    def test_error_message_format(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("int ;", "prog.txt")
        assert str(exc_info.value) == (
            "prog.txt:1:5: unexpected token ';'\n"
            "hint: expected IDENTIFIER"
        )


# =============================================================================
# Parser State Tests
# =============================================================================

class TestParserState:

    def test_parse_tokens(self):
        tokens = tokenize("int x;")
        assert parse_tokens(tokens).statements == [Declaration(target=Identifier("x"))]

    def test_independent_parsers(self):
        """Each parser has its own cursor."""
        first = Parser(tokenize("int a;"))
        second = Parser(tokenize("int b; b = 1;"))
        assert len(second.parse().statements) == 2
        assert len(first.parse().statements) == 1

    def test_program_location_uses_filename(self):
        program = Parser(tokenize("x = 1;", "f.txt"), "f.txt").parse()
        assert str(program.location) == "f.txt:1:1"


# =============================================================================
# AST Dump Tests
# =============================================================================

class TestASTDump:
    """The dump reproduces the tag tree, two spaces per level."""

    def test_empty_program(self):
        assert dump_ast(parse_source("")) == ["Program"]

    def test_declaration_and_assignment(self):
        assert dump_ast(parse_source("int x; x = 5;")) == [
            "Program",
            "  Declaration",
            "    Identifier",
            "      x",
            "  Assignment",
            "    Identifier",
            "      x",
            "    Number",
            "      5",
        ]

    def test_binary_operator(self):
        assert dump_ast(parse_source("x = y - 3;")) == [
            "Program",
            "  Assignment",
            "    Identifier",
            "      x",
            "    -",
            "      Identifier",
            "        y",
            "      Number",
            "        3",
        ]

    def test_if_statement(self):
        assert dump_ast(parse_source("if (x == 1) { y = 2; }")) == [
            "Program",
            "  If",
            "    ==",
            "      Identifier",
            "        x",
            "      Number",
            "        1",
            "    Body",
            "      Assignment",
            "        Identifier",
            "          y",
            "        Number",
            "          2",
        ]

    def test_printer_string_form(self):
        printer = ASTPrinter()
        assert printer.print(parse_source("int x;")) == (
            "Program\n  Declaration\n    Identifier\n      x"
        )

    def test_printer_is_reusable(self):
        printer = ASTPrinter()
        printer.lines(parse_source("int x;"))
        assert printer.lines(parse_source("")) == ["Program"]


# =============================================================================
# Nesting Depth Tests
# =============================================================================

def nested_ifs(depth: int) -> str:
    """Source with depth if-blocks, one inside the other."""
    return "if (a == 1) { " * depth + "}" * depth


class TestNestingDepth:
    """Deep if-nesting fails with a ParseError, never a RecursionError."""

    def test_deepest_allowed_nesting(self):
        program = parse_source(nested_ifs(MAX_NESTING_DEPTH))
        node = program.statements[0]
        for _ in range(MAX_NESTING_DEPTH - 1):
            node = node.body.statements[0]
        assert isinstance(node, IfStatement)
        assert node.body.statements == []

    def test_one_level_too_deep(self):
        with pytest.raises(ParseError) as exc_info:
            parse_source(nested_ifs(MAX_NESTING_DEPTH + 1))
        error = exc_info.value
        assert error.message == "if-blocks nested too deeply"
        assert error.location.column == 1 + MAX_NESTING_DEPTH * len("if (a == 1) { ")

    def test_hundreds_of_levels(self):
        with pytest.raises(ParseError):
            parse_source(nested_ifs(600))

    def test_sibling_ifs_do_not_count(self):
        program = parse_source("if (a == 1) { } " * (MAX_NESTING_DEPTH + 10))
        assert len(program.statements) == MAX_NESTING_DEPTH + 10
