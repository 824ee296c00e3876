# symbolic/sympy_bridge.py
from typing import Dict, Union
import sympy

from symbolic.ast_nodes import NEGATE, Node, Number, UnaryCall, Variable
from symbolic.expressions import Expression, as_expression
from utils.logging_config import get_logger

logger = get_logger(__name__)

_SYMPY_FUNCS = {
    "sin": sympy.sin, "cos": sympy.cos, "tan": sympy.tan,
    "asin": sympy.asin, "acos": sympy.acos, "atan": sympy.atan,
    "ln": sympy.log, "log": lambda u: sympy.log(u, 10), "sqrt": sympy.sqrt,
    NEGATE: lambda u: -u,
}

_SYMPY_CONSTANTS = {"pi": sympy.pi, "π": sympy.pi, "e": sympy.E}


def to_sympy(node: Node, symbols: Dict[str, sympy.Symbol] = None) -> sympy.Expr:
    """
    Convert an expression tree into an equivalent sympy expression.

    Variables become real sympy symbols; named constants map to their exact
    sympy counterparts. Integral literals stay exact so simplification can
    cancel terms.
    """
    symbols = {} if symbols is None else symbols
    if isinstance(node, Number):
        if node.label in _SYMPY_CONSTANTS:
            return _SYMPY_CONSTANTS[node.label]
        value = node.value
        return sympy.Integer(int(value)) if float(value).is_integer() else sympy.Float(value)
    if isinstance(node, Variable):
        if node.name not in symbols:
            symbols[node.name] = sympy.Symbol(node.name, real=True)
        return symbols[node.name]
    if isinstance(node, UnaryCall):
        return _SYMPY_FUNCS[node.func](to_sympy(node.arg, symbols))
    left, right = to_sympy(node.left, symbols), to_sympy(node.right, symbols)
    if node.op == "+":
        return left + right
    if node.op == "-":
        return left - right
    if node.op == "*":
        return left * right
    if node.op == "/":
        return left / right
    if node.op == "%":
        return sympy.Mod(left, right)
    return sympy.Pow(left, right)


def simplified_text(expr: Union[str, Expression]) -> str:
    """Human readable, simplified rendering of an expression (used to display derivatives)."""
    compiled = as_expression(expr)
    sym_expr = to_sympy(compiled.root)
    try:
        sym_expr = sympy.simplify(sym_expr)
    except (TypeError, ValueError, NotImplementedError) as e:
        logger.debug("sympy could not simplify '%s': %s", compiled.source, e)
    return str(sym_expr).replace("**", "^")
