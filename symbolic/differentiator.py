# symbolic/differentiator.py
"""
Structural differentiation over expression trees.

The derivative is built from the sum, product, quotient, power and chain
rules for the fixed function set understood by the parser. The result is an
ordinary expression tree that evaluates exactly like a parsed one. Trig rules
are the radian forms; angle mode is applied only when the result is evaluated.
"""
import math
from typing import Union

from core.exceptions import DifferentiationError
from symbolic.ast_nodes import NEGATE, BinaryOp, Node, Number, UnaryCall, Variable, free_variables
from symbolic.expressions import Expression, as_expression
from utils.logging_config import get_logger

logger = get_logger(__name__)

ZERO = Number(0.0)
ONE = Number(1.0)
TWO = Number(2.0)


def _num(node: Node) -> bool:
    return isinstance(node, Number) and node.label is None


def _is(node: Node, value: float) -> bool:
    return _num(node) and node.value == value


def _fold(op: str, a: Node, b: Node, value: float) -> Node:
    # a folded constant must stay finite so the rendered source parses back
    return Number(value) if math.isfinite(value) else BinaryOp(op, a, b)


def _neg(a: Node) -> Node:
    if _num(a):
        return Number(-a.value)
    if isinstance(a, UnaryCall) and a.func == NEGATE:
        return a.arg
    return UnaryCall(NEGATE, a)


def _add(a: Node, b: Node) -> Node:
    if _is(a, 0):
        return b
    if _is(b, 0):
        return a
    if _num(a) and _num(b):
        return _fold("+", a, b, a.value + b.value)
    return BinaryOp("+", a, b)


def _sub(a: Node, b: Node) -> Node:
    if _is(b, 0):
        return a
    if _is(a, 0):
        return _neg(b)
    if _num(a) and _num(b):
        return _fold("-", a, b, a.value - b.value)
    return BinaryOp("-", a, b)


def _mul(a: Node, b: Node) -> Node:
    if _is(a, 0) or _is(b, 0):
        return ZERO
    if _is(a, 1):
        return b
    if _is(b, 1):
        return a
    if _is(a, -1):
        return _neg(b)
    if _is(b, -1):
        return _neg(a)
    if _num(a) and _num(b):
        return _fold("*", a, b, a.value * b.value)
    return BinaryOp("*", a, b)


def _div(a: Node, b: Node) -> Node:
    if _is(a, 0):
        return ZERO
    if _is(b, 1):
        return a
    return BinaryOp("/", a, b)


def _pow(a: Node, b: Node) -> Node:
    if _is(b, 0):
        return ONE
    if _is(b, 1):
        return a
    return BinaryOp("^", a, b)


def _call(func: str, arg: Node) -> Node:
    return UnaryCall(func, arg)


def _derive_call(node: UnaryCall, variable: str) -> Node:
    u = node.arg
    du = derive_tree(u, variable)
    func = node.func
    if func == NEGATE:
        return _neg(du)
    if func == "sin":
        return _mul(_call("cos", u), du)
    if func == "cos":
        return _mul(_neg(_call("sin", u)), du)
    if func == "tan":
        return _div(du, _pow(_call("cos", u), TWO))
    if func == "asin":
        return _div(du, _call("sqrt", _sub(ONE, _pow(u, TWO))))
    if func == "acos":
        return _neg(_div(du, _call("sqrt", _sub(ONE, _pow(u, TWO)))))
    if func == "atan":
        return _div(du, _add(ONE, _pow(u, TWO)))
    if func == "ln":
        return _div(du, u)
    if func == "log":
        return _div(du, _mul(u, Number(math.log(10.0))))
    if func == "sqrt":
        return _div(du, _mul(TWO, _call("sqrt", u)))
    raise DifferentiationError(f"Cannot differentiate function '{func}'.")


def _derive_binary(node: BinaryOp, variable: str) -> Node:
    u, v, op = node.left, node.right, node.op
    if op == "%":
        raise DifferentiationError("Cannot differentiate the modulo operator '%'.")
    du = derive_tree(u, variable)
    dv = derive_tree(v, variable)
    if op == "+":
        return _add(du, dv)
    if op == "-":
        return _sub(du, dv)
    if op == "*":
        return _add(_mul(du, v), _mul(u, dv))
    if op == "/":
        return _div(_sub(_mul(du, v), _mul(u, dv)), _pow(v, TWO))
    if op == "^":
        if variable not in free_variables(v):
            # power rule: d(u^n) = n * u^(n-1) * du
            return _mul(_mul(v, _pow(u, _sub(v, ONE))), du)
        if variable not in free_variables(u):
            # exponential rule: d(a^v) = a^v * ln(a) * dv
            return _mul(_mul(node, _call("ln", u)), dv)
        # general case: d(u^v) = u^v * (dv * ln(u) + v * du / u)
        return _mul(node, _add(_mul(dv, _call("ln", u)), _div(_mul(v, du), u)))
    raise DifferentiationError(f"Cannot differentiate operator '{op}'.")


def derive_tree(node: Node, variable: str) -> Node:
    """Derivative of an expression tree with respect to ``variable``."""
    if variable not in free_variables(node):
        return ZERO
    if isinstance(node, Variable):
        return ONE
    if isinstance(node, UnaryCall):
        return _derive_call(node, variable)
    if isinstance(node, BinaryOp):
        return _derive_binary(node, variable)
    raise DifferentiationError(f"Cannot differentiate node {node!r}.")


def derive(expr: Union[str, Expression], variable: str = "x") -> Expression:
    """
    Symbolically differentiate an expression.

    :param expr: Formula source string or compiled Expression.
    :param variable: Name of the variable to differentiate with respect to.
    :return: A new Expression representing the derivative.
    :raises ParseError: If ``expr`` is a malformed string.
    :raises DifferentiationError: If the expression contains an unsupported construct.
    """
    compiled = as_expression(expr)
    try:
        result = Expression.from_tree(derive_tree(compiled.root, variable))
    except RecursionError as e:
        logger.error("Could not differentiate '%s': expression nested too deeply", compiled.source)
        raise DifferentiationError("Expression nested too deeply to differentiate.") from e
    except DifferentiationError as e:
        logger.error("Could not differentiate '%s' with respect to '%s': %s", compiled.source, variable, e)
        raise
    logger.debug("d/d%s [%s] = %s", variable, compiled.source, result.source)
    return result
