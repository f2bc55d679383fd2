"""
MiniLang Lexer (Tokenizer)
==========================

This module converts MiniLang source text into a list of tokens for
the parser.

Token Categories
----------------
- Keywords: int, if
- Identifiers: runs of ASCII letters
- Numbers: runs of ASCII digits (no sign, no overflow check)
- Operators: =, ==, +, -
- Delimiters: ( ) { } ;
- Anything else: a one-character UNKNOWN token

Identifiers are letters only. A digit ends the run, so ``x1`` lexes as
the identifier ``x`` followed by the number ``1``.

Lexing never fails. Characters the language does not know are passed
through as UNKNOWN tokens and rejected by the parser if it reaches them.
No end-of-input token is appended.

Example Usage
-------------
>>> from tinyacc.minilang.lexer import Lexer
>>> for token in Lexer("int x;", "test.txt").tokenize():
...     print(token)
Token(INT_KEYWORD, 'int', 1:1)
Token(IDENTIFIER, 'x', 1:5)
Token(SEMICOLON, ';', 1:6)
"""

import logging
import string
from dataclasses import dataclass
from enum import Enum, auto

from tinyacc.errors import SourceLocation

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Token kinds of the MiniLang language. The set is closed."""

    # === Operators ===
    ASSIGN = auto()         # =
    PLUS = auto()           # +
    MINUS = auto()          # -
    EQ = auto()             # ==

    # === Delimiters ===
    SEMICOLON = auto()      # ;
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    LPAREN = auto()         # (
    RPAREN = auto()         # )

    # === Keywords ===
    INT_KEYWORD = auto()    # int
    IF_KEYWORD = auto()     # if

    # === Identifiers and Literals ===
    IDENTIFIER = auto()
    NUMBER = auto()

    # === Fallback ===
    UNKNOWN = auto()        # any other single character


KEYWORDS: dict[str, TokenType] = {
    "int": TokenType.INT_KEYWORD,
    "if": TokenType.IF_KEYWORD,
}

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    ";": TokenType.SEMICOLON,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token of MiniLang source.

    Attributes:
        type: The TokenType classification
        value: The exact lexeme the token was recognised from
        line: Line number of the first character (1-indexed)
        column: Column number of the first character (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    value: str
    line: int = 1
    column: int = 1
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes MiniLang source code.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = list(lexer.tokenize())

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for diagnostics)
    """

    LETTERS = string.ascii_letters
    DIGITS = string.digits

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

        # Current position in source
        self._pos = 0
        self._line = 1
        self._column = 1

    def tokenize(self):
        """
        Generate tokens from the source code, left to right.

        Yields:
            Token objects in source order
        """
        while not self._at_end():
            char = self._peek()

            if char.isspace():
                self._advance()
                continue

            yield self._scan_token()

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Character at current position + offset, or "" past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character, tracking line/column."""
        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        return char

    def _make_token(self, token_type: TokenType, value: str, line: int, column: int) -> Token:
        return Token(token_type, value, line, column, self.filename)

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Token:
        """Scan one token starting at a non-whitespace character."""
        line = self._line
        column = self._column
        char = self._peek()

        if char == "=":
            self._advance()
            if self._peek() == "=":
                self._advance()
                return self._make_token(TokenType.EQ, "==", line, column)
            return self._make_token(TokenType.ASSIGN, "=", line, column)

        if char in SINGLE_CHAR_TOKENS:
            self._advance()
            return self._make_token(SINGLE_CHAR_TOKENS[char], char, line, column)

        if char in self.LETTERS:
            word = self._scan_run(self.LETTERS)
            token_type = KEYWORDS.get(word, TokenType.IDENTIFIER)
            return self._make_token(token_type, word, line, column)

        if char in self.DIGITS:
            return self._make_token(TokenType.NUMBER, self._scan_run(self.DIGITS), line, column)

        self._advance()
        logger.debug("unknown character %r at %d:%d", char, line, column)
        return self._make_token(TokenType.UNKNOWN, char, line, column)

    def _scan_run(self, charset: str) -> str:
        """Consume the maximal run of characters drawn from charset."""
        chars = []
        while self._peek() and self._peek() in charset:
            chars.append(self._advance())
        return "".join(chars)


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(source: str, filename: str = "<input>") -> list[Token]:
    """Tokenize a whole source string into a list."""
    return list(Lexer(source, filename).tokenize())
