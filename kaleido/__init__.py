"""
kaleido - Kaleidoscope Language Front End

Turns Kaleidoscope source text into abstract syntax trees: numeric
expressions, calls, conditionals, function definitions and extern
declarations. Each top-level construct is parsed on its own, so a caller
can consume them one at a time.

Example:
    >>> from kaleido import Parser
    >>> parser = Parser("def add(a b) a + b")
    >>> fn = parser.parse_definition()
    >>> fn.prototype.name
    'add'

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "kaleido Team"

from .frontend import Lexer, Parser, ParseError, Token, TokenKind
from .core import Driver, DriverResult, parse_source
from .utils import Settings

__all__ = [
    "__version__",
    "__author__",
    "Lexer",
    "Parser",
    "ParseError",
    "Token",
    "TokenKind",
    "Driver",
    "DriverResult",
    "parse_source",
    "Settings",
]
