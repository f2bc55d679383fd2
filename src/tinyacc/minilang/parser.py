"""
MiniLang Recursive Descent Parser
=================================

This module takes the token list produced by the lexer and builds the
Abstract Syntax Tree.

Grammar (EBNF)
--------------
program     ::= statement*
statement   ::= declaration | if_stmt | assignment
declaration ::= 'int' IDENTIFIER ';'
assignment  ::= IDENTIFIER '=' expression ';'
expression  ::= term (('+' | '-') term)?
term        ::= NUMBER | IDENTIFIER
condition   ::= term '==' term
if_stmt     ::= 'if' '(' condition ')' '{' statement* '}'

Expressions hold at most one operator: there is no precedence, no
parenthesised sub-expression and no chaining (``a + b + c`` fails at
the second ``+``). A condition is exactly one equality test.

Statements that start with neither ``int`` nor ``if`` are parsed as
assignments, so a stray NUMBER or UNKNOWN token at statement start is
reported as an unexpected token there.

Error Handling
--------------
The first mismatch raises a ParseError and ends the parse. There is no
recovery and no partial tree. Running out of tokens (for example an
if-body without its closing brace) raises UnexpectedEndOfInputError.
If-blocks nested more than MAX_NESTING_DEPTH deep raise ParseError.

Example Usage
-------------
>>> from tinyacc.minilang.lexer import tokenize
>>> from tinyacc.minilang.parser import Parser
>>> ast = Parser(tokenize("int x; x = 5;")).parse()
>>> len(ast.statements)
2
"""

import logging
from typing import Optional

from tinyacc.errors import SourceLocation
from tinyacc.minilang.lexer import Token, TokenType, tokenize
from tinyacc.minilang.ast import (
    ProgramNode,
    Statement,
    Declaration,
    Assignment,
    IfStatement,
    Body,
    Condition,
    BinaryOp,
    Identifier,
    Number,
    Expression,
    Term,
)
from tinyacc.minilang.errors import ParseError, UnexpectedTokenError, UnexpectedEndOfInputError

logger = logging.getLogger(__name__)

# Deepest if-block nesting the parser accepts
MAX_NESTING_DEPTH = 64


class Parser:
    """
    Recursive descent parser for MiniLang.

    The parser owns its token list and cursor, so independent parsers
    never share state. The cursor only moves forward.

    Attributes:
        tokens: Tokens to parse
        filename: Source filename for diagnostics
    """

    def __init__(self, tokens: list[Token], filename: str = "<input>"):
        self.tokens = tokens
        self.filename = filename

        # Current position in token stream
        self._pos = 0
        # Number of if-blocks currently open
        self._depth = 0

    def parse(self) -> ProgramNode:
        """
        Parse the whole token list.

        Returns:
            ProgramNode holding the top-level statements

        Raises:
            ParseError: On the first token that does not fit the grammar
        """
        statements = []
        while not self._at_end():
            statements.append(self._parse_statement())

        logger.debug("parsed %d top-level statements", len(statements))
        return ProgramNode(
            statements=statements,
            location=SourceLocation(self.filename, 1, 1),
        )

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.tokens)

    def _peek(self, expected: Optional[str] = None) -> Token:
        """
        Return the token at the cursor without consuming it.

        Raises:
            UnexpectedEndOfInputError: If the cursor is past the last token
        """
        if self._at_end():
            raise UnexpectedEndOfInputError(expected, self._end_location())
        return self.tokens[self._pos]

    def _check(self, token_type: TokenType) -> bool:
        return not self._at_end() and self.tokens[self._pos].type == token_type

    def _expect(self, token_type: TokenType) -> Token:
        """
        Consume the token at the cursor if it has the expected type.

        Raises:
            UnexpectedTokenError: If the token type differs
            UnexpectedEndOfInputError: If there is no token left
        """
        token = self._peek(token_type.name)
        if token.type != token_type:
            raise UnexpectedTokenError(token.value, token_type.name, token.location)
        self._pos += 1
        return token

    def _end_location(self) -> Optional[SourceLocation]:
        """Location just after the last token, for end-of-input errors."""
        if not self.tokens:
            return None
        last = self.tokens[-1]
        return SourceLocation(last.filename, last.line, last.column + len(last.value))

    # =========================================================================
    # Statements
    # =========================================================================

    def _parse_statement(self) -> Statement:
        token = self._peek("statement")
        if token.type == TokenType.INT_KEYWORD:
            return self._parse_declaration()
        if token.type == TokenType.IF_KEYWORD:
            return self._parse_if_statement()
        return self._parse_assignment()

    def _parse_declaration(self) -> Declaration:
        """Parse ``int name;``."""
        location = self._expect(TokenType.INT_KEYWORD).location
        target = self._parse_identifier()
        self._expect(TokenType.SEMICOLON)
        return Declaration(target=target, location=location)

    def _parse_assignment(self) -> Assignment:
        """Parse ``name = expression;``."""
        target = self._parse_identifier()
        self._expect(TokenType.ASSIGN)
        value = self._parse_expression()
        self._expect(TokenType.SEMICOLON)
        return Assignment(target=target, value=value, location=target.location)

    def _parse_if_statement(self) -> IfStatement:
        """Parse ``if (condition) { statement* }``."""
        location = self._expect(TokenType.IF_KEYWORD).location
        if self._depth >= MAX_NESTING_DEPTH:
            raise ParseError(
                "if-blocks nested too deeply",
                location,
                hint=f"at most {MAX_NESTING_DEPTH} levels are supported",
            )
        self._expect(TokenType.LPAREN)
        condition = self._parse_condition()
        self._expect(TokenType.RPAREN)
        body_location = self._expect(TokenType.LBRACE).location

        statements = []
        self._depth += 1
        while self._peek("'}'").type != TokenType.RBRACE:
            statements.append(self._parse_statement())
        self._depth -= 1
        self._expect(TokenType.RBRACE)

        return IfStatement(
            condition=condition,
            body=Body(statements=statements, location=body_location),
            location=location,
        )

    # =========================================================================
    # Expressions
    # =========================================================================

    def _parse_condition(self) -> Condition:
        left = self._parse_term()
        self._expect(TokenType.EQ)
        right = self._parse_term()
        return Condition(left=left, right=right, location=left.location)

    def _parse_expression(self) -> Expression:
        left = self._parse_term()
        if self._check(TokenType.PLUS) or self._check(TokenType.MINUS):
            operator = self.tokens[self._pos].value
            self._pos += 1
            right = self._parse_term()
            return BinaryOp(operator=operator, left=left, right=right, location=left.location)
        return left

    def _parse_term(self) -> Term:
        token = self._peek("term")
        if token.type == TokenType.NUMBER:
            self._pos += 1
            return Number(value=token.value, location=token.location)
        if token.type == TokenType.IDENTIFIER:
            return self._parse_identifier()
        raise UnexpectedTokenError(token.value, "term", token.location)

    def _parse_identifier(self) -> Identifier:
        token = self._expect(TokenType.IDENTIFIER)
        return Identifier(name=token.value, location=token.location)


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_tokens(tokens: list[Token], filename: str = "<input>") -> ProgramNode:
    """Parse an already tokenized program."""
    return Parser(tokens, filename).parse()


def parse_source(source: str, filename: str = "<input>") -> ProgramNode:
    """Tokenize and parse source text in one call."""
    return Parser(tokenize(source, filename), filename).parse()
