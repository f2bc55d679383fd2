"""
MiniLang Compiler Error Hierarchy
=================================

All pipeline errors inherit from MiniLangError, which itself inherits
from TinyAccError for consistent handling across the package.

Exception Hierarchy
-------------------
MiniLangError (base for all pipeline errors)
├── ParseError - the token stream does not match the grammar
│   ├── UnexpectedTokenError - token at the cursor has the wrong type
│   └── UnexpectedEndOfInputError - cursor ran past the last token
└── CodeGenError - tree shape the generator refuses (strict mode only)

The lexer has no error class: unrecognised characters become UNKNOWN
tokens and surface later as UnexpectedTokenError.

Every error is fatal to the run that raised it. There is no recovery
or resynchronisation.
"""

from typing import List, Optional

from tinyacc.errors import TinyAccError, SourceLocation, format_diagnostic


# =============================================================================
# Base MiniLang Exception
# =============================================================================

class MiniLangError(TinyAccError):
    """
    Base exception for all MiniLang compiler errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        super().__init__(format_diagnostic(message, location, hint))


# =============================================================================
# Parse Errors
# =============================================================================

class ParseError(MiniLangError):
    """
    The token sequence does not match the grammar.

    Raised by the parser and never caught inside it: one ParseError
    aborts the whole parse and no partial tree is produced.
    """
    pass


class UnexpectedTokenError(ParseError):
    """
    The token at the cursor is not the one the grammar requires.

    Example:
        int ;      // IDENTIFIER expected, found ';'
    """

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
    ):
        self.found = found
        self.expected = expected
        super().__init__(
            f"unexpected token '{found}'",
            location=location,
            hint=f"expected {expected}" if expected else None,
        )


class UnexpectedEndOfInputError(ParseError):
    """
    The parser needed another token but the sequence was exhausted.

    Typical cause is an if-body missing its closing brace.
    """

    def __init__(
        self,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
    ):
        self.expected = expected
        super().__init__(
            "unexpected end of input",
            location=location,
            hint=f"expected {expected}" if expected else None,
        )


# =============================================================================
# Code Generation Errors
# =============================================================================

class CodeGenError(MiniLangError):
    """
    Error during code generation.

    Only raised in strict mode. By default the generator tolerates
    shapes it cannot lower and records a warning instead.
    """
    pass


# =============================================================================
# Warning Collection
# =============================================================================

class ErrorCollector:
    """
    Collects warnings and the fatal error of one compile run.

    Only one error can ever be recorded because every error is fatal,
    but warnings from the permissive code generator can accumulate.
    """

    def __init__(self):
        self.errors: List[MiniLangError] = []
        self.warnings: List[str] = []

    def add(self, error: MiniLangError) -> None:
        """Record the error that ended the run."""
        self.errors.append(error)

    def add_warning(self, message: str, location: Optional[SourceLocation] = None) -> None:
        """Add a warning message."""
        if location:
            self.warnings.append(f"{location}: warning: {message}")
        else:
            self.warnings.append(f"warning: {message}")

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def clear(self) -> None:
        self.errors.clear()
        self.warnings.clear()
