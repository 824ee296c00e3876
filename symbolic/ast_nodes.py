# symbolic/ast_nodes.py
"""
Expression tree node types.

An expression is a tree of four node kinds: number literals, variable
references, unary calls (named functions and negation) and binary operators.
Nodes are immutable and hashable so trees can be shared between the parser
cache, the evaluator and the differentiator.
"""
from dataclasses import dataclass
from typing import FrozenSet, Optional, Union

# Unary call name used for prefix minus.
NEGATE = "neg"

BINARY_OPERATORS = ("+", "-", "*", "/", "%", "^")

# Binding strength used when rendering; higher binds tighter.
_PRECEDENCE = {"+": 1, "-": 1, "*": 2, "/": 2, "%": 2, NEGATE: 3, "^": 4}
_ATOM = 5


@dataclass(frozen=True)
class Number:
    value: float
    label: Optional[str] = None  # set for named constants such as pi


@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class UnaryCall:
    func: str
    arg: "Node"


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"


Node = Union[Number, Variable, UnaryCall, BinaryOp]


def free_variables(node: Node) -> FrozenSet[str]:
    """Names of all variables referenced by the tree."""
    if isinstance(node, Variable):
        return frozenset((node.name,))
    if isinstance(node, UnaryCall):
        return free_variables(node.arg)
    if isinstance(node, BinaryOp):
        return free_variables(node.left) | free_variables(node.right)
    return frozenset()


def _format_number(value: float) -> str:
    if float(value).is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(float(value))


def _precedence(node: Node) -> int:
    if isinstance(node, BinaryOp):
        return _PRECEDENCE[node.op]
    if isinstance(node, UnaryCall) and node.func == NEGATE:
        return _PRECEDENCE[NEGATE]
    if isinstance(node, Number) and node.label is None and node.value < 0:
        return _PRECEDENCE[NEGATE]
    return _ATOM


def to_text(node: Node) -> str:
    """Render a tree back to parseable source text with minimal parentheses."""
    if isinstance(node, Number):
        return node.label if node.label is not None else _format_number(node.value)
    if isinstance(node, Variable):
        return node.name
    if isinstance(node, UnaryCall):
        if node.func == NEGATE:
            inner = to_text(node.arg)
            if _precedence(node.arg) < _PRECEDENCE[NEGATE]:
                inner = f"({inner})"
            return f"-{inner}"
        return f"{node.func}({to_text(node.arg)})"

    prec = _PRECEDENCE[node.op]
    left, right = to_text(node.left), to_text(node.right)
    if node.op == "^":
        # right associative: the base needs parentheses at equal strength
        if _precedence(node.left) <= prec:
            left = f"({left})"
        if _precedence(node.right) < prec:
            right = f"({right})"
        return f"{left}^{right}"
    if _precedence(node.left) < prec:
        left = f"({left})"
    if _precedence(node.right) < prec or (
            _precedence(node.right) == prec and node.op in ("-", "/", "%")):
        right = f"({right})"
    if _precedence(node.right) == _PRECEDENCE[NEGATE] and node.op in ("+", "-"):
        right = f"({right})"
    return f"{left} {node.op} {right}"


def tree_depth(node: Node) -> int:
    """Number of levels in the tree (a single leaf has depth 1). Walks iteratively."""
    depth = 0
    stack = [(node, 1)]
    while stack:
        current, level = stack.pop()
        depth = max(depth, level)
        if isinstance(current, UnaryCall):
            stack.append((current.arg, level + 1))
        elif isinstance(current, BinaryOp):
            stack.append((current.left, level + 1))
            stack.append((current.right, level + 1))
    return depth
