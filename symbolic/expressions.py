# symbolic/expressions.py
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, FrozenSet, Mapping, Optional, Union
import numpy as np

from core.evaluation_types import AngleMode
from symbolic.ast_nodes import Node, free_variables, to_text
from symbolic.constants import EXPRESSION_CACHE_SIZE
from symbolic.evaluator import evaluate_node, evaluate_node_array
from symbolic.parser import parse

# Process-wide LRU cache of compiled expressions keyed by source string.
_EXPR_CACHE: "OrderedDict[str, Expression]" = OrderedDict()
_EXPR_CACHE_LOCK = threading.Lock()


@dataclass(frozen=True)
class Expression:
    """
    Immutable compiled formula.

    Attributes:
        source: The text the expression was compiled from (or rendered text for derived trees).
        root: Root node of the expression tree.
    """
    source: str
    root: Node

    @classmethod
    def from_tree(cls, root: Node) -> "Expression":
        return cls(to_text(root), root)

    @property
    def variables(self) -> FrozenSet[str]:
        return free_variables(self.root)

    def evaluate(self, bindings: Optional[Mapping[str, float]] = None,
                 mode: Union[AngleMode, str] = AngleMode.RADIANS) -> Optional[float]:
        """Scalar value at ``bindings``, or None when the result is not finite."""
        return evaluate_node(self.root, bindings or {}, AngleMode.from_value(mode))

    def evaluate_array(self, bindings: Mapping[str, Any],
                       mode: Union[AngleMode, str] = AngleMode.RADIANS) -> np.ndarray:
        return evaluate_node_array(self.root, bindings, AngleMode.from_value(mode))

    def __str__(self) -> str:
        return to_text(self.root)


def compile_expression(source: str) -> Expression:
    """
    Compile a formula string into an Expression, reusing a cached instance when available.

    :raises ParseError: If the source is malformed.
    """
    with _EXPR_CACHE_LOCK:
        if source in _EXPR_CACHE:
            _EXPR_CACHE.move_to_end(source)
            return _EXPR_CACHE[source]

    expr = Expression(source, parse(source))
    with _EXPR_CACHE_LOCK:
        _EXPR_CACHE[source] = expr
        while len(_EXPR_CACHE) > EXPRESSION_CACHE_SIZE:
            _EXPR_CACHE.popitem(last=False)
    return expr


def as_expression(expr: Union[str, Expression]) -> Expression:
    return expr if isinstance(expr, Expression) else compile_expression(expr)


def clear_expression_cache() -> None:
    """Clears the compiled expression cache."""
    with _EXPR_CACHE_LOCK:
        _EXPR_CACHE.clear()


def cache_size() -> int:
    with _EXPR_CACHE_LOCK:
        return len(_EXPR_CACHE)
