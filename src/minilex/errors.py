"""
minilex Error Hierarchy
=======================

This module defines the exception hierarchy for the scanner. All
exceptions inherit from MinilexError, allowing callers to catch every
scanner-related failure with a single except clause.

Exception Hierarchy
-------------------
MinilexError (base)
├── LexerError - lexical errors with source location
│   ├── InvalidCharacterError - character that cannot start a token
│   ├── UnterminatedStringError - end of input inside a string literal
│   └── TokenTooLongError - identifier or string over the length cap
└── SourceReadError - the input stream failed while being read

Error Message Format
--------------------
Lexical errors include source location information and follow this format:

    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing

Example:
    prog.ml:3:9: error: invalid character '@' (0x40)
        let x = @5;
                ^
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class MinilexError(Exception):
    """
    Base exception for all minilex errors.

        try:
            tokens = tokenize(source)
        except MinilexError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A position in source text, used by tokens and errors.

    Attributes:
        filename: Name of the source file (or "<input>" for in-memory input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Lexical Errors
# =============================================================================

class LexerError(MinilexError):
    """
    Base exception for errors found while scanning.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text of the offending line (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            prog.ml:1:5: error: unterminated string literal
                say "hello
                    ^
            hint: add a closing '"' to complete the string
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class InvalidCharacterError(LexerError):
    """
    A character that cannot begin any token.

    The scanner does not skip such characters; scanning stops here.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        hint = None
        if char == "/":
            hint = "line comments start with '//'"
        super().__init__(
            f"invalid character {char!r} (0x{ord(char):02X})",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnterminatedStringError(LexerError):
    """
    End of input reached inside a string literal.

    The location points at the opening quote.
    """

    def __init__(
        self,
        quote: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.quote = quote
        super().__init__(
            "unterminated string literal",
            location=location,
            hint=f"add a closing {quote!r} to complete the string",
            source_line=source_line,
        )


class TokenTooLongError(LexerError):
    """
    An identifier or string literal grew past the configured maximum.
    """

    def __init__(
        self,
        kind: str,
        limit: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.kind = kind
        self.limit = limit
        super().__init__(
            f"{kind} exceeds maximum length of {limit} characters",
            location=location,
            hint="raise the limit with --max-token-length or MINILEX_MAX_TOKEN_LENGTH",
            source_line=source_line,
        )


# =============================================================================
# Input Errors
# =============================================================================

class SourceReadError(MinilexError):
    """
    The input stream failed while being read.

    Raised for OS-level read failures and undecodable input. A failed
    read is never retried.
    """

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"cannot read '{filename}': {reason}")
