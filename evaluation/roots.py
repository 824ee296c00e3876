# evaluation/roots.py
from typing import List, Sequence

from core.evaluation_types import Point2D
from symbolic.constants import ROOT_TOLERANCE
from utils.logging_config import get_logger

logger = get_logger(__name__)


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def find_roots(points: Sequence[Point2D], tolerance: float = ROOT_TOLERANCE) -> List[float]:
    """
    Locate zero crossings in an ascending-x point sequence.

    Exact zeros are reported at the sample's x; sign changes between
    neighbours are refined by linear interpolation. Values within
    ``tolerance`` of their predecessor are collapsed into one root.
    The input is expected in ascending x order and is not re-sorted.
    """
    candidates: List[float] = []
    for p0, p1 in zip(points, points[1:]):
        if p0.y == 0:
            candidates.append(p0.x)
        elif p1.y == 0:
            candidates.append(p1.x)
        elif _sign(p0.y) != _sign(p1.y):
            t = -p0.y / (p1.y - p0.y)
            candidates.append(p0.x + t * (p1.x - p0.x))

    ordered = sorted(candidates)
    roots = [x for i, x in enumerate(ordered) if i == 0 or abs(x - ordered[i - 1]) > tolerance]
    logger.debug("Found %d root(s) in %d points", len(roots), len(points))
    return roots
