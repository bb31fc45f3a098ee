"""
Textual rendering of AST nodes.

Produces compact one-line S-expressions, used by the driver to report what it
parsed. The output is meant for people; nothing reads it back.
"""

from .nodes import (
    NumberLiteral, Identifier, BinaryOp, Call, Conditional,
    Prototype, FunctionDefinition, Node,
)


def format_number(value: float) -> str:
    """Format a float, dropping the trailing ".0" of integral values."""
    text = repr(value)
    if text.endswith(".0"):
        return text[:-2]
    return text


def format_node(node: Node) -> str:
    """Render a node and its children as an S-expression.

    Args:
        node: Any AST node

    Returns:
        str: e.g. "(+ (num 1) (* (num 2) (var x)))"

    Raises:
        TypeError: If node is not an AST node
    """
    if isinstance(node, NumberLiteral):
        return f"(num {format_number(node.value)})"
    if isinstance(node, Identifier):
        return f"(var {node.name})"
    if isinstance(node, BinaryOp):
        return f"({node.op} {format_node(node.left)} {format_node(node.right)})"
    if isinstance(node, Call):
        parts = ["call", node.callee] + [format_node(arg) for arg in node.args]
        return "(" + " ".join(parts) + ")"
    if isinstance(node, Conditional):
        return (
            f"(if {format_node(node.condition)} "
            f"{format_node(node.then_branch)} {format_node(node.else_branch)})"
        )
    if isinstance(node, Prototype):
        # Anonymous prototypes keep a visible placeholder for the name.
        name = node.name if node.name else '""'
        return "(" + " ".join(["prototype", name] + list(node.params)) + ")"
    if isinstance(node, FunctionDefinition):
        return f"(def {format_node(node.prototype)} {format_node(node.body)})"
    raise TypeError(f"Not an AST node: {type(node).__name__}")
