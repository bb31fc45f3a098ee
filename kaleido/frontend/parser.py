"""
Parser module for kaleido.

This module provides a recursive descent parser with one token of lookahead.
Binary operators are handled by precedence climbing: ``parse_bin_op_rhs``
folds operators of equal precedence to the left and recurses only when a
tighter-binding operator follows.

The parser owns a lexer and pulls tokens from it on demand. Each public
``parse_*`` entry point parses exactly one top-level construct and either
returns its AST or raises ``ParseError``.
"""

import logging
from typing import List, Optional, Union

from ..ast import (
    NumberLiteral, Identifier, BinaryOp, Call, Conditional, Expr,
    Prototype, FunctionDefinition,
)
from ..utils.settings import Settings, DEFAULT_SETTINGS
from .lexer import Lexer, Token, TokenKind, CharSource

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Exception raised for syntax errors."""

    def __init__(self, message: str, lineno: int = 0, col_offset: int = 0):
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.lineno > 0:
            return f"Line {self.lineno}, col {self.col_offset}: {self.message}"
        return self.message


class Parser:
    """Recursive descent parser for kaleido.

    Example:
        >>> parser = Parser("def add(a b) a + b")
        >>> fn = parser.parse_definition()
        >>> fn.prototype.params
        ('a', 'b')
    """

    def __init__(self, source: Union[Lexer, CharSource] = "",
                 settings: Optional[Settings] = None):
        """Initialize the parser.

        Args:
            source: A Lexer, or a source string / text stream to lex
            settings: Front-end settings (defaults to DEFAULT_SETTINGS)
        """
        self._lexer = source if isinstance(source, Lexer) else Lexer(source)
        self._settings = settings or DEFAULT_SETTINGS
        self._precedence = self._settings.precedence
        self._current: Optional[Token] = None
        self._depth = 0

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def current(self) -> Token:
        """The lookahead token. The first access reads the first token."""
        if self._current is None:
            self.next_token()
        return self._current

    def next_token(self) -> Token:
        """Advance the lookahead to the next token and return it."""
        self._current = self._lexer.next_token()
        return self._current

    # ==================== Helpers ====================

    def _error(self, message: str, token: Optional[Token] = None) -> ParseError:
        token = token or self.current
        logger.debug("Parse error at %r: %s", token, message)
        return ParseError(message, token.lineno, token.col_offset)

    def _match(self, kind: TokenKind) -> bool:
        return self.current.kind is kind

    def _match_char(self, char: str) -> bool:
        return self.current.is_char(char)

    def _expect_char(self, char: str, message: str) -> None:
        if not self._match_char(char):
            raise self._error(message)
        self.next_token()

    def _expect(self, kind: TokenKind, message: str) -> None:
        if not self._match(kind):
            raise self._error(message)
        self.next_token()

    def _token_precedence(self) -> int:
        """Precedence of the lookahead as a binary operator, or -1."""
        token = self.current
        if token.kind is not TokenKind.CHAR:
            return -1
        return self._precedence.get(token.text, -1)

    def _enter_nested(self) -> None:
        self._depth += 1
        limit = self._settings.max_nesting_depth
        if limit is not None and self._depth > limit:
            raise self._error(f"Expression nesting exceeds maximum depth of {limit}")

    def _leave_nested(self) -> None:
        self._depth -= 1

    # ==================== Expressions ====================

    def parse_expression(self) -> Expr:
        """expression := primary (binop primary)*

        Raises:
            ParseError: On a syntax error, or when the input nests deeper
                than the interpreter stack allows
        """
        try:
            return self._parse_expression()
        except RecursionError:
            # The stack is unwound here, so reporting is safe
            raise self._error("Expression nesting exceeds the interpreter recursion limit") from None

    def _parse_expression(self) -> Expr:
        self._enter_nested()
        try:
            lhs = self.parse_primary()
            return self.parse_bin_op_rhs(0, lhs)
        finally:
            self._leave_nested()

    def parse_primary(self) -> Expr:
        """Dispatch on the lookahead to the rule for a primary expression."""
        token = self.current
        if token.kind is TokenKind.NUMBER:
            return self.parse_number_expr()
        if token.kind is TokenKind.IDENTIFIER:
            return self.parse_identifier_expr()
        if token.is_char("("):
            return self.parse_paren_expr()
        if token.kind is TokenKind.IF and self._settings.enable_conditionals:
            return self.parse_conditional()
        raise self._error(f"Unknown token when expecting an expression, got {token.describe()}")

    def parse_number_expr(self) -> NumberLiteral:
        node = NumberLiteral(self.current.value)
        self.next_token()
        return node

    def parse_paren_expr(self) -> Expr:
        """paren := "(" expression ")"

        Parentheses only group; the inner expression is returned as-is.
        """
        self.next_token()  # '('
        node = self._parse_expression()
        self._expect_char(")", "Expected ')'")
        return node

    def parse_identifier_expr(self) -> Expr:
        """identifier | identifier "(" (expression ("," expression)*)? ")" """
        name = self.current.text
        self.next_token()

        if not self._match_char("("):
            return Identifier(name)

        self.next_token()  # '('
        args: List[Expr] = []
        if not self._match_char(")"):
            while True:
                args.append(self._parse_expression())
                if self._match_char(")"):
                    break
                if not self._match_char(","):
                    raise self._error("Expected ')' or ',' in argument list")
                self.next_token()
        self.next_token()  # ')'

        return Call(name, tuple(args))

    def parse_conditional(self) -> Conditional:
        """conditional := "if" expression "then" expression "else" expression"""
        self.next_token()  # 'if'
        condition = self._parse_expression()

        self._expect(TokenKind.THEN, "Expected 'then'")
        then_branch = self._parse_expression()

        self._expect(TokenKind.ELSE, "Expected 'else'")
        else_branch = self._parse_expression()

        return Conditional(condition, then_branch, else_branch)

    def parse_bin_op_rhs(self, min_precedence: int, lhs: Expr) -> Expr:
        """Extend ``lhs`` with binary operators binding at least ``min_precedence``.

        Args:
            min_precedence: Lowest operator precedence this call may consume
            lhs: Expression parsed so far

        Returns:
            Expr: ``lhs`` folded with every operator it could absorb
        """
        while True:
            op_precedence = self._token_precedence()

            # Also stops on any non-operator, whose precedence is -1
            if op_precedence < min_precedence:
                return lhs

            op = self.current.text
            self.next_token()

            rhs = self.parse_primary()

            # A tighter operator after rhs takes rhs as its own left operand
            if op_precedence < self._token_precedence():
                self._enter_nested()
                try:
                    rhs = self.parse_bin_op_rhs(op_precedence + 1, rhs)
                finally:
                    self._leave_nested()

            lhs = BinaryOp(op, lhs, rhs)

    # ==================== Declarations ====================

    def parse_prototype(self) -> Prototype:
        """prototype := identifier "(" identifier* ")" """
        if not self._match(TokenKind.IDENTIFIER):
            raise self._error("Expected function name in prototype")
        name = self.current.text
        self.next_token()

        if not self._match_char("("):
            raise self._error("Expected '(' in prototype")

        params: List[str] = []
        while self.next_token().kind is TokenKind.IDENTIFIER:
            params.append(self.current.text)

        if not self._match_char(")"):
            raise self._error("Expected ')' in prototype")
        self.next_token()

        return Prototype(name, tuple(params))

    def parse_definition(self) -> FunctionDefinition:
        """definition := "def" prototype expression"""
        self._expect(TokenKind.DEF, "Expected 'def'")
        prototype = self.parse_prototype()
        body = self.parse_expression()
        return FunctionDefinition(prototype, body)

    def parse_extern(self) -> Prototype:
        """extern := "extern" prototype"""
        self._expect(TokenKind.EXTERN, "Expected 'extern'")
        return self.parse_prototype()

    def parse_top_level_expr(self) -> FunctionDefinition:
        """Parse a bare expression, wrapped in an anonymous function."""
        body = self.parse_expression()
        return FunctionDefinition(Prototype("", ()), body)
