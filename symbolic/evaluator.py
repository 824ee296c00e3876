# symbolic/evaluator.py
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union
import math
import numpy as np

from core.evaluation_types import AngleMode
from core.exceptions import EvaluationError
from symbolic.ast_nodes import NEGATE, BinaryOp, Node, Number, UnaryCall, Variable

if TYPE_CHECKING:
    from symbolic.expressions import Expression

_FORWARD_TRIG = {"sin": np.sin, "cos": np.cos, "tan": np.tan}
_INVERSE_TRIG = {"asin": np.arcsin, "acos": np.arccos, "atan": np.arctan}
_PLAIN_FUNCS = {"ln": np.log, "log": np.log10, "sqrt": np.sqrt, NEGATE: np.negative}

_BINARY_FUNCS = {
    "+": np.add,
    "-": np.subtract,
    "*": np.multiply,
    "/": np.true_divide,
    "%": np.mod,
    "^": np.power,
}


def evaluate_tree(node: Node, bindings: Mapping[str, Any], mode: AngleMode) -> Any:
    """
    Walk an expression tree and compute its value with numpy semantics.

    Bindings may be scalars or arrays; arrays broadcast. Domain errors
    (sqrt of a negative, division by zero, overflow) yield NaN or inf
    rather than raising, so callers can decide what to do with them.

    :raises EvaluationError: If a variable in the tree has no binding.
    """
    if isinstance(node, Number):
        return np.float64(node.value)
    if isinstance(node, Variable):
        if node.name not in bindings:
            raise EvaluationError(f"Variable '{node.name}' not found in bindings.")
        return np.asarray(bindings[node.name], dtype=np.float64)
    if isinstance(node, UnaryCall):
        arg = evaluate_tree(node.arg, bindings, mode)
        if node.func in _FORWARD_TRIG:
            if mode is AngleMode.DEGREES:
                arg = np.deg2rad(arg)
            return _FORWARD_TRIG[node.func](arg)
        if node.func in _INVERSE_TRIG:
            result = _INVERSE_TRIG[node.func](arg)
            return np.rad2deg(result) if mode is AngleMode.DEGREES else result
        if node.func in _PLAIN_FUNCS:
            return _PLAIN_FUNCS[node.func](arg)
        raise EvaluationError(f"Unsupported function '{node.func}'.")
    if isinstance(node, BinaryOp):
        left = evaluate_tree(node.left, bindings, mode)
        right = evaluate_tree(node.right, bindings, mode)
        return _BINARY_FUNCS[node.op](left, right)
    raise EvaluationError(f"Unsupported expression node {node!r}.")


def _walk(node: Node, bindings: Mapping[str, Any], mode: AngleMode) -> Any:
    with np.errstate(all="ignore"):
        try:
            return evaluate_tree(node, bindings, mode)
        except RecursionError as e:
            raise EvaluationError("Expression nested too deeply to evaluate.") from e


def evaluate_node(node: Node, bindings: Mapping[str, Any], mode: AngleMode) -> Optional[float]:
    """Scalar evaluation. Non-finite results are returned as None."""
    result = _walk(node, bindings, mode)
    if np.ndim(result) != 0:
        raise EvaluationError("Scalar evaluation received array bindings; use evaluate_array instead.")
    value = float(result)
    return value if math.isfinite(value) else None


def evaluate_node_array(node: Node, bindings: Mapping[str, Any], mode: AngleMode) -> np.ndarray:
    """Vectorised evaluation. Non-finite entries are kept as NaN/inf."""
    return np.asarray(_walk(node, bindings, mode), dtype=np.float64)


def evaluate(expr: Union[str, "Expression"], bindings: Optional[Mapping[str, float]] = None,
             mode: Union[AngleMode, str] = AngleMode.RADIANS) -> Optional[float]:
    """
    Evaluate an expression against variable bindings.

    :param expr: Formula source string or an already compiled Expression.
    :param bindings: Mapping of variable name to finite real value.
    :param mode: Angle convention for trig and inverse trig calls.
    :return: The value as a float, or None if the result is NaN or infinite.
    :raises ParseError: If ``expr`` is a malformed string.
    :raises EvaluationError: If a referenced variable is missing from ``bindings``.
    """
    from symbolic.expressions import as_expression
    return evaluate_node(as_expression(expr).root, bindings or {}, AngleMode.from_value(mode))
