"""
Frontend module for kaleido.

This module provides the lexer and parser components of the front end.
"""

from .lexer import Lexer, Token, TokenKind, tokenize_source
from .parser import Parser, ParseError

__all__ = [
    # Lexer components
    "Lexer",
    "Token",
    "TokenKind",
    "tokenize_source",
    # Parser components
    "Parser",
    "ParseError",
]
