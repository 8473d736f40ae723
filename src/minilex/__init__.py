"""
minilex - Scanner for a Small Language
======================================

This package provides a pull-based lexical scanner. It reads a character
stream and hands out one token per call, keeping a single character of
lookahead.

Main Components
---------------
- **lexer**: Token types, the Token value class and the Lexer
- **errors**: Exception hierarchy with source locations
- **config**: Scanner options (length cap, file encoding)
- **cli**: The ``minilex`` command that dumps the tokens of a file

Quick Start
-----------
    >>> from minilex import tokenize
    >>> [t.type.label for t in tokenize("let x = 1_2 + 3;")]
    ['LET', 'IDENT', 'EQUALS', 'NUMBER', 'PLUS', 'NUMBER', 'SEMICOLON', 'EOF']

Scan a file token by token:
    >>> from minilex import Lexer, TokenType
    >>> with open("prog.ml") as f:
    ...     lexer = Lexer(f)
    ...     while (token := lexer.next_token()).type is not TokenType.EOF:
    ...         print(token)

Or use the command-line tool:
    $ minilex prog.ml
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from minilex.config import LexerOptions
from minilex.errors import (
    MinilexError,
    SourceLocation,
    LexerError,
    InvalidCharacterError,
    UnterminatedStringError,
    TokenTooLongError,
    SourceReadError,
)
from minilex.lexer import (
    KEYWORDS,
    Lexer,
    Token,
    TokenType,
    format_token,
    tokenize,
)

__all__ = [
    # Version info
    "__version__",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "KEYWORDS",
    "format_token",
    "tokenize",
    # Configuration
    "LexerOptions",
    # Exception hierarchy
    "MinilexError",
    "SourceLocation",
    "LexerError",
    "InvalidCharacterError",
    "UnterminatedStringError",
    "TokenTooLongError",
    "SourceReadError",
]
