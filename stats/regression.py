# stats/regression.py
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple, Union
import numpy as np

from core.evaluation_types import Point2D


@dataclass(frozen=True)
class RegressionLine:
    """
    Least-squares fit y = slope * x + intercept.

    ``endpoints`` holds the fitted line at the smallest and largest sample x,
    or is empty when the sample was too small to fit.
    """
    slope: float
    intercept: float
    endpoints: Tuple[Point2D, ...] = field(default_factory=tuple)

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept


def _as_arrays(points: Iterable[Union[Point2D, Sequence[float]]]) -> Tuple[np.ndarray, np.ndarray]:
    pairs: List[Tuple[float, float]] = []
    for p in points:
        if isinstance(p, Point2D):
            pairs.append((p.x, p.y))
        else:
            x, y = p
            pairs.append((float(x), float(y)))
    if not pairs:
        return np.empty(0), np.empty(0)
    data = np.asarray(pairs, dtype=float)
    return data[:, 0], data[:, 1]


def linear_regression(points: Iterable[Union[Point2D, Sequence[float]]]) -> RegressionLine:
    """
    Ordinary least squares over (x, y) pairs.

    With fewer than two points the result is slope 0, intercept 0 and no
    endpoints. When every x is equal the slope denominator is replaced by 1.
    """
    xs, ys = _as_arrays(points)
    n = xs.size
    if n < 2:
        return RegressionLine(0.0, 0.0, ())

    sum_x, sum_y = float(xs.sum()), float(ys.sum())
    sum_xy, sum_xx = float((xs * ys).sum()), float((xs * xs).sum())
    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        denominator = 1.0
    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = sum_y / n - slope * sum_x / n

    x_lo, x_hi = float(xs.min()), float(xs.max())
    endpoints = (Point2D(x_lo, slope * x_lo + intercept), Point2D(x_hi, slope * x_hi + intercept))
    return RegressionLine(slope, intercept, endpoints)
