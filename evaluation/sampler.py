# evaluation/sampler.py
import time
from typing import Dict, List, Mapping, Optional, Union
import numpy as np

from core.evaluation_types import AngleMode, Domain, Point2D, PointResult
from core.exceptions import EvaluationError
from symbolic.expressions import Expression, as_expression
from utils.logging_config import get_logger

logger = get_logger(__name__)


def x_values(domain: Domain) -> np.ndarray:
    """``domain.steps`` evenly spaced x-values over [min, max], both ends included."""
    return np.linspace(domain.min, domain.max, domain.steps)


def _evaluate_point(expr: Expression, x: float, bindings: Dict[str, float], mode: AngleMode) -> PointResult:
    local_bindings = dict(bindings, x=x)
    try:
        value = expr.evaluate(local_bindings, mode)
    except EvaluationError as e:
        return PointResult(x=x, error=str(e))
    if value is None:
        return PointResult(x=x, error="non-finite result")
    return PointResult(x=x, value=value)


class SampleResult:
    def __init__(self, points: List[Point2D], errors: List[str], stats: Optional[dict] = None):
        self.points = points
        self.errors = errors
        self.stats = stats or {}

    def xs(self) -> np.ndarray:
        return np.array([p.x for p in self.points], dtype=float)

    def ys(self) -> np.ndarray:
        return np.array([p.y for p in self.points], dtype=float)

    def to_dataframe(self):
        import pandas as pd
        return pd.DataFrame({"x": self.xs(), "y": self.ys()})


def sample_with_report(expr: Union[str, Expression], domain: Domain,
                       bindings_template: Optional[Mapping[str, float]] = None,
                       mode: Union[AngleMode, str] = AngleMode.RADIANS) -> SampleResult:
    """
    Evaluate ``expr`` at each Sampler x-value, keeping a record of dropped points.

    Points whose evaluation fails or is non-finite are left out of the
    sequence; their error messages are collected in ``SampleResult.errors``.

    :raises ParseError: If ``expr`` is a malformed string.
    """
    compiled = as_expression(expr)
    mode = AngleMode.from_value(mode)
    template = dict(bindings_template or {})
    start_time = time.time()

    points: List[Point2D] = []
    errors: List[str] = []
    for x in x_values(domain):
        result = _evaluate_point(compiled, float(x), template, mode)
        if result.ok:
            points.append(Point2D(result.x, result.value))
        else:
            logger.debug("Dropping x=%.6g for '%s': %s", result.x, compiled.source, result.error)
            errors.append(f"x={result.x:.6g}: {result.error}")

    elapsed = time.time() - start_time
    stats = {"points": domain.steps, "kept": len(points), "elapsed": elapsed}
    if errors:
        logger.debug("Sampled '%s': kept %d of %d points", compiled.source, len(points), domain.steps)
    return SampleResult(points, errors, stats)


def sample(expr: Union[str, Expression], domain: Domain,
           bindings_template: Optional[Mapping[str, float]] = None,
           mode: Union[AngleMode, str] = AngleMode.RADIANS) -> List[Point2D]:
    """Ascending-x point sequence of ``expr`` over ``domain``; failed points are omitted."""
    return sample_with_report(expr, domain, bindings_template, mode).points
