"""
CLI Error Handling
==================

Maps exceptions to a single ``Error: ...`` line on stderr and an exit code.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from tinyacc.minilang.errors import MiniLangError


class ExitCode(IntEnum):
    """Exit codes of the tacc tool."""
    SUCCESS = 0
    COMPILE_ERROR = 1    # Parse or code generation error
    INVALID_ARGS = 2     # Invalid arguments or unreadable files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report error on stderr and exit with the matching code.

    Args:
        error: The exception that was raised
        verbose: If True, print the traceback of internal errors

    Raises:
        SystemExit: Always
    """
    if isinstance(error, MiniLangError):
        # One diagnostic line; the hint only in verbose mode
        where = f"{error.location}: " if error.location else ""
        click.echo(f"Error: {where}{error.message}", err=True)
        if verbose and error.hint:
            click.echo(f"hint: {error.hint}", err=True)
        sys.exit(ExitCode.COMPILE_ERROR)

    elif isinstance(error, (FileNotFoundError, PermissionError, IsADirectoryError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, UnicodeDecodeError):
        click.echo(
            f"Error: input is not valid UTF-8 ({error.reason} at byte {error.start})",
            err=True,
        )
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
