# evaluation/tangent.py
import math
from typing import List, Optional, Tuple, Union

from core.evaluation_types import AngleMode, Domain, Point2D, TangentInfo
from core.exceptions import EvaluationError
from evaluation.sampler import x_values
from symbolic.differentiator import derive
from symbolic.expressions import Expression, as_expression
from utils.logging_config import get_logger

logger = get_logger(__name__)


def tangent_at(expr: Union[str, Expression], x0: float, domain: Domain,
               mode: Union[AngleMode, str] = AngleMode.RADIANS
               ) -> Tuple[List[Point2D], Optional[TangentInfo]]:
    """
    Build the tangent line to ``expr`` at ``x0`` over the Sampler x-grid of ``domain``.

    Returns ``([], None)`` when ``x0`` is not a finite real or when either the
    function or its derivative cannot be evaluated at ``x0``.

    :raises ParseError: If ``expr`` is a malformed string.
    :raises DifferentiationError: If ``expr`` cannot be differentiated.
    """
    try:
        x0 = float(x0)
    except (TypeError, ValueError):
        return [], None
    if not math.isfinite(x0):
        return [], None

    compiled = as_expression(expr)
    mode = AngleMode.from_value(mode)
    derivative = derive(compiled, "x")
    try:
        slope = derivative.evaluate({"x": x0}, mode)
        y0 = compiled.evaluate({"x": x0}, mode)
    except EvaluationError as e:
        logger.warning("Tangent of '%s' at x=%g unavailable: %s", compiled.source, x0, e)
        return [], None
    if slope is None or y0 is None:
        logger.warning("Tangent of '%s' at x=%g unavailable: non-finite value", compiled.source, x0)
        return [], None

    line = [Point2D(float(x), slope * (float(x) - x0) + y0) for x in x_values(domain)]
    return line, TangentInfo(x0=x0, y0=y0, slope=slope)
