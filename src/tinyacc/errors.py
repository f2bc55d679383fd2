"""
tinyacc Error Hierarchy
=======================

This module defines the root of the exception hierarchy for tinyacc.
All exceptions inherit from TinyAccError, allowing callers to catch
every toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
TinyAccError (base)
└── MiniLangError (compiler pipeline, see tinyacc.minilang.errors)
    ├── ParseError
    │   ├── UnexpectedTokenError
    │   └── UnexpectedEndOfInputError
    └── CodeGenError

Error messages follow this format:
    filename:line:column: description
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class TinyAccError(Exception):
    """
    Base exception for all tinyacc errors.

        try:
            compile_source("int ;")
        except TinyAccError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A position in source text, used for diagnostics only.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


def format_diagnostic(
    message: str,
    location: Optional[SourceLocation] = None,
    hint: Optional[str] = None,
) -> str:
    """
    Build the text of a diagnostic.

    Example output:
        prog.txt:3:5: unexpected token ';'
        hint: expected IDENTIFIER
    """
    parts = [f"{location}: {message}" if location else message]
    if hint:
        parts.append(f"hint: {hint}")
    return "\n".join(parts)
