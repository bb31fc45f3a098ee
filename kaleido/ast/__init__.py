"""
Abstract syntax tree module for kaleido.

This module defines the AST data structures produced by the parser, and a
printer that renders them as text.
"""

from .nodes import (
    BINARY_OPERATORS,
    # Expressions
    NumberLiteral,
    Identifier,
    BinaryOp,
    Call,
    Conditional,
    Expr,
    # Declarations
    Prototype,
    FunctionDefinition,
    Node,
)
from .printer import format_node

__all__ = [
    "BINARY_OPERATORS",
    # Expressions
    "NumberLiteral",
    "Identifier",
    "BinaryOp",
    "Call",
    "Conditional",
    "Expr",
    # Declarations
    "Prototype",
    "FunctionDefinition",
    "Node",
    # Rendering
    "format_node",
]
