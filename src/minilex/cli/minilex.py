"""
minilex - Token Dump Command-Line Interface
===========================================

This module implements the command-line driver for the scanner. It opens
a source file, pulls tokens from the lexer until end of input, and prints
one token per line.

Usage Examples
--------------
Dump tokens:
    $ minilex prog.ml

With source positions:
    $ minilex -l prog.ml

Verbose mode (debug logging on stderr):
    $ minilex -v prog.ml

Exit Codes
----------
0 - Success
1 - Lexical error or read failure
2 - Invalid arguments
3 - Internal error
"""

import codecs
import logging
from pathlib import Path
from typing import Optional

import click

from minilex import __version__
from minilex.cli.errors import handle_cli_exception
from minilex.config import LexerOptions
from minilex.lexer import Lexer, format_token

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def validate_encoding(
    ctx: click.Context, param: click.Parameter, value: Optional[str]
) -> Optional[str]:
    """Reject encoding names Python does not know."""
    if value is None:
        return value
    try:
        codecs.lookup(value)
    except LookupError:
        raise click.BadParameter(f"unknown encoding {value!r}")
    return value


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "source_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-l", "--locations",
    is_flag=True,
    help="Prefix each token with its line:column",
)
@click.option(
    "--encoding",
    callback=validate_encoding,
    default=None,
    help="Source file encoding (default: utf-8, or MINILEX_ENCODING)",
)
@click.option(
    "--max-token-length",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum identifier/string length, 0 for no limit "
         "(default: 65536, or MINILEX_MAX_TOKEN_LENGTH)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="minilex")
def main(
    source_file: Path,
    locations: bool,
    encoding: Optional[str],
    max_token_length: Optional[int],
    verbose: bool,
) -> None:
    """
    Scan a source file and print its tokens.

    SOURCE_FILE is the file to tokenize. Tokens are printed one per line,
    ending with EOF.

    \b
    Examples:
        minilex prog.ml              # Dump tokens
        minilex -l prog.ml           # Include line:column
        minilex --encoding latin-1 prog.ml
    """
    setup_logging(verbose)

    options = LexerOptions.from_env()
    if encoding is not None:
        options.encoding = encoding
    if max_token_length is not None:
        options.max_token_length = max_token_length or None

    try:
        logger.debug(
            "Scanning %s (encoding=%s, max_token_length=%s)",
            source_file, options.encoding, options.max_token_length,
        )

        count = 0
        with source_file.open(encoding=options.encoding) as f:
            lexer = Lexer(f, str(source_file), options)
            for token in lexer.tokenize():
                click.echo(format_token(token, show_location=locations))
                count += 1

        logger.debug("Scanned %d tokens from %s", count, source_file)

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
