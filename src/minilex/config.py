"""
minilex Configuration
=====================

Scanner options. Values come from:
- Default values (defined here)
- Environment variables (LexerOptions.from_env)
- Command-line flags, which the CLI applies on top

Environment variables (all optional):
    MINILEX_MAX_TOKEN_LENGTH: Maximum identifier/string length; 0 or a
        negative value disables the cap
    MINILEX_ENCODING: Text encoding used when the CLI opens source files
"""

from dataclasses import dataclass
from typing import Optional
import codecs
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKEN_LENGTH = 65536
DEFAULT_ENCODING = "utf-8"


@dataclass
class LexerOptions:
    """
    Scanner configuration options.

    Attributes:
        max_token_length: Upper bound on the length of an identifier or
                          decoded string literal. None means unbounded.
        encoding: Encoding used when opening source files from the CLI.
    """
    max_token_length: Optional[int] = DEFAULT_MAX_TOKEN_LENGTH
    encoding: str = DEFAULT_ENCODING

    def __post_init__(self):
        if self.max_token_length is not None and self.max_token_length <= 0:
            self.max_token_length = None

    @classmethod
    def from_env(cls) -> "LexerOptions":
        """
        Create LexerOptions from environment variables.

        Invalid values are logged and ignored.
        """
        options = cls()

        if max_length := os.environ.get("MINILEX_MAX_TOKEN_LENGTH"):
            try:
                value = int(max_length)
            except ValueError:
                logger.warning(
                    "ignoring MINILEX_MAX_TOKEN_LENGTH=%r: not an integer", max_length
                )
            else:
                options.max_token_length = value if value > 0 else None

        if encoding := os.environ.get("MINILEX_ENCODING"):
            try:
                codecs.lookup(encoding)
            except LookupError:
                logger.warning("ignoring MINILEX_ENCODING=%r: unknown encoding", encoding)
            else:
                options.encoding = encoding

        return options
