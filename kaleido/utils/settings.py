"""
Configuration settings for kaleido.

This module contains the default operator precedence table and the parser
settings used throughout the front end.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from ..ast.nodes import BINARY_OPERATORS


# Binary operator precedences. Higher binds tighter.
DEFAULT_PRECEDENCE: Mapping[str, int] = MappingProxyType({
    "<": 10,
    "+": 20,
    "-": 20,
    "*": 40,
    "/": 40,
})


def freeze_precedence(table: Mapping[str, int]) -> Mapping[str, int]:
    """Validate a precedence table and return a read-only copy.

    Args:
        table: Mapping from operator to precedence

    Returns:
        Mapping[str, int]: A read-only copy of the table

    Raises:
        ValueError: If a key is not in BINARY_OPERATORS or a value is not
            a positive integer
    """
    for op, prec in table.items():
        if op not in BINARY_OPERATORS:
            raise ValueError(f"Unknown binary operator {op!r}")
        if isinstance(prec, bool) or not isinstance(prec, int) or prec <= 0:
            raise ValueError(f"Precedence for {op!r} must be a positive integer, got {prec!r}")
    return MappingProxyType(dict(table))


@dataclass(frozen=True)
class Settings:
    """Front-end settings and configuration.

    Attributes:
        precedence: Binary operator precedence table
        enable_conditionals: Whether "if/then/else" expressions are accepted
        max_nesting_depth: Maximum expression nesting depth, or None for no limit
        prompt: Prompt written before each top-level construct in interactive mode
    """
    precedence: Mapping[str, int] = field(default_factory=lambda: DEFAULT_PRECEDENCE)
    enable_conditionals: bool = True
    max_nesting_depth: Optional[int] = 100
    prompt: str = "ready> "

    def __post_init__(self):
        object.__setattr__(self, "precedence", freeze_precedence(self.precedence))
        if self.max_nesting_depth is not None and self.max_nesting_depth < 1:
            raise ValueError(f"max_nesting_depth must be at least 1, got {self.max_nesting_depth}")


# Global default settings instance
DEFAULT_SETTINGS = Settings()
