"""
Top-level driver for kaleido.

This module provides the read-parse-print loop that sits on top of the parser.
It looks at the lookahead token to decide which kind of top-level construct
comes next, hands it to the matching parser entry point, and reports the
result. After a syntax error it skips one token and carries on, so a single
bad construct never stops the rest of the input from being parsed.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, TextIO, Union

from ..ast import FunctionDefinition, Prototype, format_node
from ..frontend import Lexer, Parser, ParseError, TokenKind
from ..frontend.lexer import CharSource
from ..utils.settings import Settings, DEFAULT_SETTINGS

logger = logging.getLogger(__name__)


class ConstructKind(Enum):
    """Kinds of top-level construct."""
    DEFINITION = "definition"
    EXTERN = "extern"
    TOP_LEVEL_EXPR = "top-level expression"


# Success line written for each construct kind
_REPORTS = {
    ConstructKind.DEFINITION: "Parsed a function definition.",
    ConstructKind.EXTERN: "Parsed an extern.",
    ConstructKind.TOP_LEVEL_EXPR: "Parsed a top-level expression.",
}


@dataclass(frozen=True)
class ParsedItem:
    """One successfully parsed top-level construct.

    Attributes:
        kind: Which kind of construct was parsed
        node: The resulting tree (a Prototype for externs)
    """
    kind: ConstructKind
    node: Union[FunctionDefinition, Prototype]


@dataclass
class DriverResult:
    """Result of running the driver over a whole input.

    Attributes:
        items: Parsed constructs, in source order
        errors: Syntax errors, in the order they were reported
    """
    items: List[ParsedItem] = field(default_factory=list)
    errors: List[ParseError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Whether every construct parsed without error."""
        return not self.errors


class Driver:
    """Read-parse-print loop over one input.

    Example:
        >>> import io
        >>> out = io.StringIO()
        >>> result = Driver("def id(x) x; id(4)", out=out).run()
        >>> len(result.items)
        2
    """

    def __init__(
        self,
        source: Union[Lexer, CharSource],
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        settings: Optional[Settings] = None,
        interactive: bool = False,
    ):
        """Initialize the driver.

        Args:
            source: A Lexer, or a source string / text stream
            out: Stream for prompts and success reports (defaults to stdout)
            err: Stream for diagnostics (defaults to stderr)
            settings: Front-end settings (defaults to DEFAULT_SETTINGS)
            interactive: Whether to write settings.prompt before each construct
        """
        self._settings = settings or DEFAULT_SETTINGS
        self._parser = Parser(source, self._settings)
        self._out = out if out is not None else sys.stdout
        self._err = err if err is not None else sys.stderr
        self._interactive = interactive

    def run(self) -> DriverResult:
        """Parse top-level constructs until end of input.

        Returns:
            DriverResult: Everything parsed and every error reported
        """
        result = DriverResult()

        while True:
            if self._interactive:
                self._out.write(self._settings.prompt)
                self._out.flush()

            token = self._parser.current
            if token.kind is TokenKind.EOF:
                break

            if token.is_char(";"):
                # Top-level semicolons are separators only
                self._parser.next_token()
                continue

            if token.kind is TokenKind.DEF:
                self._handle(ConstructKind.DEFINITION, result)
            elif token.kind is TokenKind.EXTERN:
                self._handle(ConstructKind.EXTERN, result)
            else:
                self._handle(ConstructKind.TOP_LEVEL_EXPR, result)

        if self._interactive:
            self._out.write("\n")
        logger.debug("Driver finished: %d parsed, %d errors",
                     len(result.items), len(result.errors))
        return result

    def _handle(self, kind: ConstructKind, result: DriverResult) -> None:
        """Parse one construct of the given kind and report the outcome."""
        logger.debug("Dispatching %s at %r", kind.value, self._parser.current)
        try:
            node = self._parse(kind)
        except ParseError as e:
            result.errors.append(e)
            self._err.write(f"Error: {e}\n")
            # Skip the offending token for error recovery
            self._parser.next_token()
            return

        result.items.append(ParsedItem(kind, node))
        self._out.write(f"{_REPORTS[kind]}\n")
        self._out.write(f"{format_node(node)}\n")

    def _parse(self, kind: ConstructKind) -> Union[FunctionDefinition, Prototype]:
        if kind is ConstructKind.DEFINITION:
            return self._parser.parse_definition()
        if kind is ConstructKind.EXTERN:
            return self._parser.parse_extern()
        return self._parser.parse_top_level_expr()


def parse_source(
    source: CharSource,
    settings: Optional[Settings] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> DriverResult:
    """Convenience function to run the driver over a whole source.

    Args:
        source: Source string or text stream
        settings: Front-end settings
        out: Stream for success reports (defaults to stdout)
        err: Stream for diagnostics (defaults to stderr)

    Returns:
        DriverResult: Everything parsed and every error reported
    """
    return Driver(source, out=out, err=err, settings=settings).run()
