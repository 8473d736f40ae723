"""
minilex Lexer (Tokenizer)
=========================

Scanner for a small language: reads a character stream and produces one
token per call, with a single character of lookahead.

- Keywords: let
- Identifiers: ASCII letters, digits and underscores, not starting with a digit
- Numbers: decimal digits; underscores after the first digit are ignored
  (``1__0`` is 10, ``_10`` is a name)
- Strings: "double" or 'single' quoted, closed only by the same quote;
  \\n and \\t are mapped, any other escaped character stands for itself
- Punctuation: + - ( ) { } [ ] ; =
- Comments: // to end of line

>>> from minilex.lexer import tokenize, format_token
>>> [format_token(t) for t in tokenize("let x = 1_2;")]
['LET', 'IDENT x', 'EQUALS', 'NUMBER 12', 'SEMICOLON', 'EOF']
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional, TextIO
import io
import logging
import string

from minilex.config import LexerOptions
from minilex.errors import (
    InvalidCharacterError,
    SourceLocation,
    SourceReadError,
    TokenTooLongError,
    UnterminatedStringError,
)

logger = logging.getLogger(__name__)

# Placeholder name for sources that are not files
DEFAULT_FILENAME = "<input>"


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token types for the language.

    Keywords get their own variants instead of being identifiers with a
    special value, so a consumer can dispatch on the type alone.
    """

    # === Structural Tokens ===
    EOF = auto()            # End of input

    # === Punctuation ===
    PLUS = auto()           # +
    MINUS = auto()          # -
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    LBRACKET = auto()       # [
    RBRACKET = auto()       # ]
    SEMICOLON = auto()      # ;
    EQUALS = auto()         # =

    # === Identifiers and Literals ===
    NUMBER = auto()         # Integer literals
    IDENTIFIER = auto()     # Names
    STRING = auto()         # "..." or '...'

    # === Keywords ===
    LET = auto()            # let

    @property
    def label(self) -> str:
        """Fixed display label used in token dumps."""
        match self:
            case TokenType.EOF:
                return "EOF"
            case TokenType.PLUS:
                return "PLUS"
            case TokenType.MINUS:
                return "MINUS"
            case TokenType.LPAREN:
                return "LPAREN"
            case TokenType.RPAREN:
                return "RPAREN"
            case TokenType.LBRACE:
                return "LBRACE"
            case TokenType.RBRACE:
                return "RBRACE"
            case TokenType.LBRACKET:
                return "LBRACKET"
            case TokenType.RBRACKET:
                return "RBRACKET"
            case TokenType.SEMICOLON:
                return "SEMICOLON"
            case TokenType.EQUALS:
                return "EQUALS"
            case TokenType.NUMBER:
                return "NUMBER"
            case TokenType.IDENTIFIER:
                return "IDENT"
            case TokenType.STRING:
                return "STRING"
            case TokenType.LET:
                return "LET"
        raise AssertionError(f"no label for {self!r}")

    @property
    def symbol(self) -> Optional[str]:
        """Source character of a punctuation type, None for the rest."""
        return SYMBOLS.get(self)

    @property
    def has_payload(self) -> bool:
        """Return True if tokens of this type carry a value."""
        return self in PAYLOAD_TYPES


# =============================================================================
# Character and Keyword Tables
# =============================================================================

# Single-character punctuation marks
PUNCTUATION: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ";": TokenType.SEMICOLON,
    "=": TokenType.EQUALS,
}

SYMBOLS: dict[TokenType, str] = {kind: char for char, kind in PUNCTUATION.items()}

# Reserved words, matched against the full identifier text
KEYWORDS: dict[str, TokenType] = {
    "let": TokenType.LET,
}

# Payload Python type for each payload-carrying token type
PAYLOAD_TYPES: dict[TokenType, type] = {
    TokenType.NUMBER: int,
    TokenType.IDENTIFIER: str,
    TokenType.STRING: str,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    Represents a single token.

    Only NUMBER, IDENTIFIER and STRING carry a value; for every other
    type the value is None. This is checked on construction.

    Attributes:
        type: The TokenType classification
        value: int for NUMBER, str for IDENTIFIER and STRING, else None
        line: Line of the token's first character (1-indexed)
        column: Column of the token's first character (1-indexed)
        filename: Name of the source
    """
    type: TokenType
    value: int | str | None
    line: int
    column: int
    filename: str = DEFAULT_FILENAME

    def __post_init__(self):
        expected = PAYLOAD_TYPES.get(self.type)
        if expected is None:
            if self.value is not None:
                raise ValueError(f"{self.type.name} token cannot carry a value")
        elif not isinstance(self.value, expected) or isinstance(self.value, bool):
            raise ValueError(
                f"{self.type.name} token requires a {expected.__name__} value, "
                f"got {self.value!r}"
            )

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.value is not None:
            if isinstance(self.value, int):
                return f"Token({self.type.name}, {self.value}, {self.line}:{self.column})"
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    def __str__(self) -> str:
        """Render the token the way it reads in output."""
        match self.type:
            case TokenType.NUMBER:
                return str(self.value)
            case TokenType.IDENTIFIER:
                return self.value
            case TokenType.STRING:
                return f'"{self.value}"'
            case TokenType.LET | TokenType.EOF:
                return self.type.label
        return SYMBOLS[self.type]

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


def format_token(token: Token, show_location: bool = False) -> str:
    """
    Format a token as one line of a token dump.

    Payload-carrying tokens print their label and rendering
    (``NUMBER 12``, ``IDENT x``); the rest print the label alone.
    """
    if token.type.has_payload:
        text = f"{token.type.label} {token}"
    else:
        text = token.type.label
    if show_location:
        return f"{token.line}:{token.column}\t{text}"
    return text


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes a character stream.

    The lexer pulls characters from ``stream`` one at a time and keeps at
    most one character of lookahead, so it never reads further than the
    next token requires. It does not close the stream.

    Usage:
        with open("prog.ml") as f:
            lexer = Lexer(f, "prog.ml")
            for token in lexer.tokenize():
                ...

    Attributes:
        stream: The text stream being tokenized
        filename: Name of the source (for error reporting)
        options: Scanner options
    """

    IDENT_START = frozenset(string.ascii_letters + "_")
    IDENT_CHARS = frozenset(string.ascii_letters + string.digits + "_")
    DIGITS = frozenset(string.digits)
    NUMBER_CHARS = frozenset(string.digits + "_")
    WHITESPACE = frozenset(" \t\n\r\v\f")
    QUOTES = frozenset("\"'")

    # Escapes with a special meaning; any other escaped character is literal
    ESCAPE_SEQUENCES = {
        "n": "\n",
        "t": "\t",
    }

    def __init__(
        self,
        stream: TextIO,
        filename: Optional[str] = None,
        options: Optional[LexerOptions] = None,
    ):
        """
        Initialize the lexer over a text stream.

        Args:
            stream: Any object with a ``read(1)`` returning str, "" at end
            filename: Name used in tokens and errors (defaults to the
                      stream's ``name`` attribute)
            options: Scanner options (defaults to LexerOptions())
        """
        self.stream = stream
        if filename is None:
            filename = str(getattr(stream, "name", DEFAULT_FILENAME))
        self.filename = filename
        self.options = options or LexerOptions()

        # One character of lookahead; None when empty, "" once EOF is seen
        self._lookahead: Optional[str] = None

        # Position of the next character to be consumed
        self._line = 1
        self._column = 1

        # Characters consumed so far on the current line, for error context
        self._line_text: list[str] = []

        self._exhausted = False

    @classmethod
    def from_string(
        cls,
        source: str,
        filename: str = DEFAULT_FILENAME,
        options: Optional[LexerOptions] = None,
    ) -> "Lexer":
        """Create a lexer over an in-memory string."""
        return cls(io.StringIO(source), filename, options)

    @property
    def position(self) -> SourceLocation:
        """Location of the next unconsumed character."""
        return SourceLocation(self.filename, self._line, self._column)

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens up to and including the EOF token.

        Raises:
            LexerError: If invalid input is encountered
            SourceReadError: If the stream cannot be read
        """
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EOF:
                return

    def __iter__(self) -> Iterator[Token]:
        return self.tokenize()

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _read_char(self) -> str:
        """Read one character from the stream, "" at end of input."""
        try:
            return self.stream.read(1)
        except (OSError, UnicodeError) as e:
            raise SourceReadError(self.filename, str(e)) from e

    def _peek(self) -> str:
        """Return the next character without consuming it."""
        if self._lookahead is None:
            self._lookahead = self._read_char()
        return self._lookahead

    def _advance(self) -> str:
        """
        Consume and return the next character.

        At end of input returns "" and leaves the EOF marker in the
        lookahead slot, so the stream is not read again.
        """
        char = self._peek()
        if not char:
            return char

        self._lookahead = None
        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_text = []
        else:
            self._column += 1
            self._line_text.append(char)
        return char

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(
        self,
        token_type: TokenType,
        value: int | str | None,
        line: int,
        column: int,
    ) -> Token:
        token = Token(token_type, value, line, column, self.filename)
        logger.debug("%s: %r", token.location, token)
        return token

    def _current_line(self) -> str:
        return "".join(self._line_text)

    def _check_length(self, chars: list[str], kind: str, line: int, column: int) -> None:
        limit = self.options.max_token_length
        if limit is not None and len(chars) > limit:
            raise TokenTooLongError(
                kind,
                limit,
                SourceLocation(self.filename, line, column),
            )

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Whitespace and comments are skipped. After the EOF token has been
        returned, every further call returns EOF again without touching
        the stream.

        Raises:
            InvalidCharacterError: If a character cannot start a token
            UnterminatedStringError: If input ends inside a string literal
            TokenTooLongError: If a name or string exceeds the length cap
            SourceReadError: If the stream cannot be read
        """
        if self._exhausted:
            return self._make_token(TokenType.EOF, None, self._line, self._column)

        while True:
            line = self._line
            column = self._column
            char = self._advance()

            if char in PUNCTUATION:
                return self._make_token(PUNCTUATION[char], None, line, column)

            if char == "/":
                if self._peek() == "/":
                    self._skip_line_comment(line, column)
                    continue
                raise InvalidCharacterError(
                    char,
                    SourceLocation(self.filename, line, column),
                    self._current_line(),
                )

            if char in self.WHITESPACE:
                continue

            if char in self.QUOTES:
                return self._scan_string(char, line, column)

            if char in self.IDENT_START:
                return self._scan_identifier(char, line, column)

            if char in self.DIGITS:
                return self._scan_number(char, line, column)

            if not char:
                self._exhausted = True
                return self._make_token(TokenType.EOF, None, line, column)

            raise InvalidCharacterError(
                char,
                SourceLocation(self.filename, line, column),
                self._current_line(),
            )

    def _skip_line_comment(self, line: int, column: int) -> None:
        """Skip a // comment, leaving the terminating newline unconsumed."""
        self._advance()  # consume second /
        while self._peek() not in ("\n", ""):
            self._advance()
        logger.debug("%s:%d:%d: skipped comment", self.filename, line, column)

    def _scan_identifier(self, first: str, line: int, column: int) -> Token:
        """
        Scan an identifier or keyword.

        Consumes letters, digits and underscores; the first other
        character is left in the lookahead slot.
        """
        chars = [first]
        while self._peek() in self.IDENT_CHARS:
            chars.append(self._advance())
            self._check_length(chars, "identifier", line, column)

        name = "".join(chars)

        if name in KEYWORDS:
            return self._make_token(KEYWORDS[name], None, line, column)

        return self._make_token(TokenType.IDENTIFIER, name, line, column)

    def _scan_number(self, first: str, line: int, column: int) -> Token:
        """
        Scan a decimal number.

        Underscores are skipped wherever they appear in the run.
        """
        value = int(first)
        while self._peek() in self.NUMBER_CHARS:
            char = self._advance()
            if char == "_":
                continue
            value = value * 10 + int(char)

        return self._make_token(TokenType.NUMBER, value, line, column)

    def _scan_string(self, quote: str, line: int, column: int) -> Token:
        """
        Scan a string literal opened by ``quote``.

        Only the same quote character closes the literal. Newlines are
        allowed inside it.
        """
        start_line_text = self._current_line()
        chars = []
        escaping = False

        while True:
            char = self._advance()

            if not char:
                if self._line == line:
                    start_line_text = self._current_line()
                raise UnterminatedStringError(
                    quote,
                    SourceLocation(self.filename, line, column),
                    start_line_text,
                )

            if escaping:
                chars.append(self.ESCAPE_SEQUENCES.get(char, char))
                escaping = False
            elif char == "\\":
                escaping = True
                continue
            elif char == quote:
                break
            else:
                chars.append(char)

            self._check_length(chars, "string literal", line, column)

        return self._make_token(TokenType.STRING, "".join(chars), line, column)


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(
    source: str,
    filename: str = DEFAULT_FILENAME,
    options: Optional[LexerOptions] = None,
) -> list[Token]:
    """Tokenize a string and return all tokens, ending with EOF."""
    return list(Lexer.from_string(source, filename, options).tokenize())
