"""
Error Handling Test Suite
=========================

Tests for the minilex exception hierarchy, message formatting, and the
error conditions the lexer reports.
"""

import io

import pytest
from minilex.config import LexerOptions
from minilex.errors import (
    InvalidCharacterError,
    LexerError,
    MinilexError,
    SourceLocation,
    SourceReadError,
    TokenTooLongError,
    UnterminatedStringError,
)
from minilex.lexer import Lexer, TokenType, tokenize


class FailingStream:
    """Text stream whose reads fail after a few characters."""

    def __init__(self, text: str):
        self._text = io.StringIO(text)
        self.name = "broken.ml"

    def read(self, size=-1):
        data = self._text.read(size)
        if not data:
            raise OSError(5, "Input/output error")
        return data


# =============================================================================
# Hierarchy and Formatting Tests
# =============================================================================

class TestErrorHierarchy:
    """Tests for exception classes and message formatting."""

    def test_hierarchy(self):
        assert issubclass(LexerError, MinilexError)
        assert issubclass(InvalidCharacterError, LexerError)
        assert issubclass(UnterminatedStringError, LexerError)
        assert issubclass(TokenTooLongError, LexerError)
        assert issubclass(SourceReadError, MinilexError)
        assert not issubclass(SourceReadError, LexerError)

    def test_source_location_str(self):
        assert str(SourceLocation("prog.ml", 3, 9)) == "prog.ml:3:9"

    def test_message_without_location(self):
        error = LexerError("something broke")
        assert str(error) == "error: something broke"

    def test_message_with_context(self):
        error = LexerError(
            "bad thing",
            SourceLocation("prog.ml", 2, 5),
            hint="do something else",
            source_line="let @",
        )
        assert str(error) == (
            "prog.ml:2:5: error: bad thing\n"
            "    let @\n"
            "        ^\n"
            "hint: do something else"
        )

    def test_source_read_error_message(self):
        error = SourceReadError("prog.ml", "disk on fire")
        assert str(error) == "cannot read 'prog.ml': disk on fire"
        assert error.filename == "prog.ml"


# =============================================================================
# Invalid Character Tests
# =============================================================================

class TestInvalidCharacter:
    """Characters that cannot start a token."""

    @pytest.mark.parametrize("char", ["@", "#", "*", ",", "!", "é", "\x00"])
    def test_invalid_characters(self, char):
        with pytest.raises(InvalidCharacterError) as exc_info:
            tokenize(char)
        assert exc_info.value.char == char

    def test_location_and_context(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            tokenize("let x = @5;", "prog.ml")
        error = exc_info.value
        assert error.location == SourceLocation("prog.ml", 1, 9)
        assert error.source_line == "let x = @"
        assert "invalid character '@' (0x40)" in str(error)
        assert str(error).splitlines()[2] == " " * 12 + "^"

    def test_location_on_later_line(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            tokenize("x\n  y ?")
        assert exc_info.value.location.line == 2
        assert exc_info.value.location.column == 5

    def test_single_slash(self):
        """A lone '/' is not a comment and not a token."""
        with pytest.raises(InvalidCharacterError) as exc_info:
            tokenize("a / b")
        assert exc_info.value.char == "/"
        assert "//" in exc_info.value.hint

    def test_slash_at_end_of_input(self):
        with pytest.raises(InvalidCharacterError):
            tokenize("/")

    def test_tokens_before_error_are_returned(self):
        lexer = Lexer.from_string("x + $")
        assert lexer.next_token().type == TokenType.IDENTIFIER
        assert lexer.next_token().type == TokenType.PLUS
        with pytest.raises(InvalidCharacterError):
            lexer.next_token()


# =============================================================================
# Unterminated String Tests
# =============================================================================

class TestUnterminatedString:
    """End of input inside a string literal."""

    def test_unterminated_double_quote(self):
        with pytest.raises(UnterminatedStringError) as exc_info:
            tokenize('"hello', "prog.ml")
        error = exc_info.value
        assert error.quote == '"'
        assert error.location == SourceLocation("prog.ml", 1, 1)
        assert error.source_line == '"hello'
        assert "unterminated string literal" in str(error)

    def test_unterminated_single_quote(self):
        with pytest.raises(UnterminatedStringError) as exc_info:
            tokenize("x = 'abc")
        assert exc_info.value.quote == "'"
        assert exc_info.value.location.column == 5

    def test_other_quote_does_not_close(self):
        with pytest.raises(UnterminatedStringError):
            tokenize("\"abc'")
        with pytest.raises(UnterminatedStringError):
            tokenize("'abc\"")

    def test_escaped_closing_quote(self):
        """An escaped quote does not close the literal."""
        with pytest.raises(UnterminatedStringError):
            tokenize('"abc\\"')

    def test_end_after_backslash(self):
        with pytest.raises(UnterminatedStringError):
            tokenize('"abc\\')

    def test_multiline_unterminated_reports_start(self):
        with pytest.raises(UnterminatedStringError) as exc_info:
            tokenize('let s = "one\ntwo\nthree')
        error = exc_info.value
        assert (error.location.line, error.location.column) == (1, 9)
        assert error.source_line == 'let s = "'


# =============================================================================
# Length Cap Tests
# =============================================================================

class TestTokenTooLong:
    """The defensive length cap on identifiers and strings."""

    def test_identifier_at_limit(self):
        options = LexerOptions(max_token_length=3)
        assert tokenize("abc", options=options)[0].value == "abc"

    def test_identifier_over_limit(self):
        options = LexerOptions(max_token_length=3)
        with pytest.raises(TokenTooLongError) as exc_info:
            tokenize("abcd", options=options)
        assert exc_info.value.kind == "identifier"
        assert exc_info.value.limit == 3
        assert exc_info.value.location.column == 1

    def test_string_over_limit(self):
        options = LexerOptions(max_token_length=3)
        with pytest.raises(TokenTooLongError) as exc_info:
            tokenize('"abcd"', options=options)
        assert exc_info.value.kind == "string literal"

    def test_escapes_count_once(self):
        """The cap applies to decoded characters."""
        options = LexerOptions(max_token_length=2)
        assert tokenize('"\\n\\t"', options=options)[0].value == "\n\t"

    def test_numbers_are_not_capped(self):
        options = LexerOptions(max_token_length=2)
        assert tokenize("1_000_000", options=options)[0].value == 1000000


# =============================================================================
# Read Failure Tests
# =============================================================================

class TestSourceReadError:
    """Failures of the underlying stream."""

    def test_os_error_is_wrapped(self):
        lexer = Lexer(FailingStream("ab"))
        with pytest.raises(SourceReadError) as exc_info:
            list(lexer.tokenize())
        assert exc_info.value.filename == "broken.ml"
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_decode_error_is_wrapped(self, tmp_path):
        path = tmp_path / "latin.ml"
        path.write_bytes(b"let s = '\xff\xfe';\n")
        with path.open(encoding="utf-8") as f:
            with pytest.raises(SourceReadError) as exc_info:
                list(Lexer(f, "latin.ml").tokenize())
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_catch_all_with_base_class(self):
        with pytest.raises(MinilexError):
            tokenize("%")
