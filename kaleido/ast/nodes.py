"""
AST node definitions for kaleido.

This module contains the data classes that make up the abstract syntax tree
produced by the parser. The node set is closed: consumers dispatch on it with
``isinstance`` checks rather than through methods on the nodes.
"""

from dataclasses import dataclass
from typing import Tuple, Union


# Operators a BinaryOp may carry
BINARY_OPERATORS = frozenset("<+-*/")


# ==================== Expressions ====================

@dataclass(frozen=True)
class NumberLiteral:
    """Numeric literal expression.

    Attributes:
        value: The literal value (C double precision)
    """
    value: float


@dataclass(frozen=True)
class Identifier:
    """Variable reference expression.

    Attributes:
        name: The referenced name
    """
    name: str

    def __post_init__(self):
        if not self.name:
            raise ValueError("Identifier name must be non-empty")


@dataclass(frozen=True)
class BinaryOp:
    """Binary operation expression.

    Attributes:
        op: The operator, one of BINARY_OPERATORS
        left: Left operand expression
        right: Right operand expression
    """
    op: str
    left: "Expr"
    right: "Expr"

    def __post_init__(self):
        if self.op not in BINARY_OPERATORS:
            raise ValueError(f"Unknown binary operator {self.op!r}")
        if self.left is None or self.right is None:
            raise ValueError("Binary operation requires both operands")


@dataclass(frozen=True)
class Call:
    """Function call expression.

    Attributes:
        callee: Name of the called function
        args: Argument expressions, in source order
    """
    callee: str
    args: Tuple["Expr", ...] = ()

    def __post_init__(self):
        if not self.callee:
            raise ValueError("Call callee must be non-empty")
        # Accept any sequence, store a tuple so the node stays immutable.
        object.__setattr__(self, "args", tuple(self.args))


@dataclass(frozen=True)
class Conditional:
    """Conditional expression (if/then/else).

    Attributes:
        condition: Condition expression
        then_branch: Expression evaluated when the condition holds
        else_branch: Expression evaluated otherwise
    """
    condition: "Expr"
    then_branch: "Expr"
    else_branch: "Expr"

    def __post_init__(self):
        if self.condition is None or self.then_branch is None or self.else_branch is None:
            raise ValueError("Conditional requires condition, then and else branches")


# Union type for all expressions
Expr = Union[
    NumberLiteral,
    Identifier,
    BinaryOp,
    Call,
    Conditional,
]


# ==================== Declarations ====================

@dataclass(frozen=True)
class Prototype:
    """Function signature: a name and its parameter names.

    An empty name denotes the anonymous prototype synthesized for a bare
    top-level expression.

    Attributes:
        name: Function name (may be empty)
        params: Parameter names, in source order
    """
    name: str
    params: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "params", tuple(self.params))

    @property
    def is_anonymous(self) -> bool:
        """Whether this prototype wraps a top-level expression."""
        return self.name == ""


@dataclass(frozen=True)
class FunctionDefinition:
    """Function definition: a prototype and a single body expression.

    Attributes:
        prototype: The function signature
        body: The body expression
    """
    prototype: Prototype
    body: Expr

    def __post_init__(self):
        if self.prototype is None or self.body is None:
            raise ValueError("Function definition requires a prototype and a body")


# Any node the parser can hand back to its caller
Node = Union[
    NumberLiteral,
    Identifier,
    BinaryOp,
    Call,
    Conditional,
    Prototype,
    FunctionDefinition,
]
