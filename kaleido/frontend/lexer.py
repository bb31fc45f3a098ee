"""
Lexer module for kaleido.

This module converts a character stream into a lazy stream of tokens for the
parser. It reads one character at a time from its source and keeps a single
character of lookahead, so it works equally on strings, files and an
interactive stdin.
"""

import io
import logging
import re
import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, TextIO, Union

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    """Token kinds for the kaleido language."""
    EOF = auto()         # End of input

    # Keywords
    DEF = auto()         # def
    EXTERN = auto()      # extern
    IF = auto()          # if
    THEN = auto()        # then
    ELSE = auto()        # else

    # Primary
    IDENTIFIER = auto()  # [A-Za-z][A-Za-z0-9]*
    NUMBER = auto()      # [0-9.]+

    # Any other character stands for itself: operators, parentheses, comma, ';'
    CHAR = auto()


KEYWORDS = {
    "def": TokenKind.DEF,
    "extern": TokenKind.EXTERN,
    "if": TokenKind.IF,
    "then": TokenKind.THEN,
    "else": TokenKind.ELSE,
}

# C isspace() in the "C" locale
_WHITESPACE = frozenset(" \t\n\r\v\f")
_LETTERS = frozenset(string.ascii_letters)
_ALNUM = frozenset(string.ascii_letters + string.digits)
_NUMERIC = frozenset(string.digits + ".")

# Longest prefix strtod() accepts from a run of digits and dots
_DECIMAL_PREFIX = re.compile(r"\d+\.?\d*|\.\d+")

# A string or any text stream; read(1) returns "" at end of input
CharSource = Union[str, TextIO]


@dataclass(frozen=True)
class Token:
    """Represents a token in the source code.

    Attributes:
        kind: The token kind
        text: The source text of the token ("" for EOF)
        value: Numeric value, only meaningful for NUMBER tokens
        lineno: Line number (1-indexed)
        col_offset: Column offset (0-indexed)
    """
    kind: TokenKind
    text: str = ""
    value: float = 0.0
    lineno: int = 0
    col_offset: int = 0

    def is_char(self, char: str) -> bool:
        """Check whether this is the single-character token ``char``."""
        return self.kind is TokenKind.CHAR and self.text == char

    def describe(self) -> str:
        """Human-readable form used in diagnostics."""
        if self.kind is TokenKind.EOF:
            return "end of input"
        return repr(self.text)

    def __repr__(self) -> str:
        if self.kind is TokenKind.NUMBER:
            return f"Token({self.kind.name}, {self.value!r}, line={self.lineno})"
        return f"Token({self.kind.name}, {self.text!r}, line={self.lineno})"


def parse_number(text: str) -> float:
    """Parse a run of digits and dots the way C strtod() does.

    Only the longest valid decimal prefix is used, so "1.2.3" gives 1.2 and
    "." gives 0.0. Malformed literals are never rejected.

    Args:
        text: Lexeme made of digits and "." characters

    Returns:
        float: The parsed value
    """
    match = _DECIMAL_PREFIX.match(text)
    if match is None:
        logger.debug("Numeric literal %r has no decimal prefix, using 0.0", text)
        return 0.0
    if match.end() != len(text):
        logger.debug("Numeric literal %r truncated to %r", text, match.group())
    return float(match.group())


class Lexer:
    """Lexer for tokenizing kaleido source code.

    A strict forward cursor over its source: each call to ``next_token``
    consumes input, and once the source is exhausted every further call
    returns an EOF token.

    Example:
        >>> lexer = Lexer("def f(x) x + 1")
        >>> lexer.next_token()
        Token(DEF, 'def', line=1)
    """

    def __init__(self, source: CharSource = ""):
        """Initialize the lexer.

        Args:
            source: Source string or text stream
        """
        if isinstance(source, str):
            source = io.StringIO(source)
        self._source = source
        self._last_char = " "
        self._at_eof = False
        # Position of self._last_char
        self._lineno = 1
        self._col = -1

    def _advance(self) -> str:
        """Read the next character into the lookahead buffer."""
        if self._at_eof:
            self._last_char = ""
            return ""
        if self._last_char == "\n":
            self._lineno += 1
            self._col = 0
        else:
            self._col += 1
        char = self._source.read(1)
        if not char:
            self._at_eof = True
        self._last_char = char
        return char

    def _make(self, kind: TokenKind, text: str, lineno: int, col: int,
              value: float = 0.0) -> Token:
        return Token(kind=kind, text=text, value=value, lineno=lineno, col_offset=col)

    def next_token(self) -> Token:
        """Scan and return the next token.

        Returns:
            Token: The next token, or an EOF token once input is exhausted
        """
        while True:
            while self._last_char in _WHITESPACE:
                self._advance()

            char = self._last_char
            lineno, col = self._lineno, max(self._col, 0)

            if char in _LETTERS:
                chars = [char]
                while self._advance() in _ALNUM:
                    chars.append(self._last_char)
                text = "".join(chars)
                return self._make(KEYWORDS.get(text, TokenKind.IDENTIFIER), text, lineno, col)

            if char in _NUMERIC:
                chars = [char]
                while self._advance() in _NUMERIC:
                    chars.append(self._last_char)
                text = "".join(chars)
                return self._make(TokenKind.NUMBER, text, lineno, col, parse_number(text))

            if char == "#":
                while self._advance() not in ("\n", ""):
                    pass
                continue

            if char == "":
                return self._make(TokenKind.EOF, "", lineno, col)

            self._advance()
            return self._make(TokenKind.CHAR, char, lineno, col)

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the first EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return


def tokenize_source(source: CharSource) -> List[Token]:
    """Convenience function to tokenize source code.

    Args:
        source: Source string or text stream

    Returns:
        List of Token objects, ending with a single EOF token
    """
    return list(Lexer(source))
