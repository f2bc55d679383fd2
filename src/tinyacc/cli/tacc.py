"""
tacc - MiniLang Compiler Command-Line Interface
===============================================

Compiles a MiniLang program and prints the AST dump followed by the
assembly listing.

Usage Examples
--------------
Compile to the terminal:
    $ tacc prog.txt

Read from stdin:
    $ echo "int x; x = 5;" | tacc

Write the listing to a file:
    $ tacc prog.txt -o prog.asm

Inspect the front end:
    $ tacc --tokens prog.txt
    $ tacc --ast prog.txt
"""

import logging
from pathlib import Path
from typing import Optional

import click

from tinyacc import __version__
from tinyacc.cli.errors import handle_cli_exception
from tinyacc.minilang.ast import dump_ast
from tinyacc.minilang.compiler import Compiler, CompilerOptions, LISTING_HEADER, format_listing

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    default="-",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the listing to a file instead of stdout",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token list and exit",
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print the AST dump and exit",
)
@click.option(
    "--no-ast",
    is_flag=True,
    help="Leave the AST dump out of the listing",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Reject statements the code generator cannot lower "
         "(plain copies, '-', undeclared targets) instead of warning",
)
@click.option(
    "--enable-sub",
    is_flag=True,
    help="Lower '-' expressions to SUB/SUI",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="tacc")
def main(
    input_file: Path,
    output: Optional[Path],
    tokens: bool,
    ast: bool,
    no_ast: bool,
    strict: bool,
    enable_sub: bool,
    verbose: bool,
) -> None:
    """
    Compile a MiniLang program to accumulator-machine assembly.

    INPUT_FILE is the program to compile; '-' or nothing reads stdin.

    \b
    Examples:
        tacc prog.txt                # Dump and listing on stdout
        tacc prog.txt -o prog.asm    # Listing to a file
        tacc --ast prog.txt          # AST dump only
        tacc --strict prog.txt       # Fail on unlowerable statements
    """
    setup_logging(verbose)

    options = CompilerOptions(
        strict=strict,
        enable_subtraction=enable_sub,
        dump_ast=not no_ast,
    )
    filename = "<stdin>" if str(input_file) == "-" else str(input_file)

    try:
        with click.open_file(str(input_file), encoding="utf-8") as handle:
            source = handle.read()

        logger.debug("compiling %s (%d characters)", filename, len(source))
        compiler = Compiler(options)

        if tokens:
            for token in compiler.tokenize(source, filename):
                click.echo(f"{token.type.name:<12} {token.value!r:<8} {token.line}:{token.column}")
            return

        program = compiler.parse(source, filename)
        ast_lines = dump_ast(program)

        if ast:
            click.echo("\n".join(ast_lines))
            return

        if output is None:
            # Stream: lines printed before a strict-mode error stay printed
            if options.dump_ast:
                for line in ast_lines:
                    click.echo(line)
                click.echo()
            click.echo(LISTING_HEADER)
            compiler.generate(program, on_line=lambda line: click.echo(line.render()))
            return

        generator = compiler.generate(program)
        listing = format_listing(generator.lines, ast_lines if options.dump_ast else None)
        output.write_text("\n".join(listing) + "\n", encoding="utf-8")

        if verbose:
            click.echo(f"Symbols: {', '.join(s.name for s in generator.symbols) or '(none)'}")
        click.echo(f"Compiled {filename} -> {output}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
