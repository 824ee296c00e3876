# stats/descriptive.py
"""
Descriptive statistics over comma separated numeric samples.

Quartiles use zero-based nearest-rank indexing into the sorted sample
(``sorted[floor(n * 0.25)]`` and ``sorted[floor(n * 0.75)]``), not an
interpolated percentile, and the variance is the population variance.
"""
import math
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional
import numpy as np

from utils.logging_config import get_logger

logger = get_logger(__name__)

# Leading numeric prefix of a token, the way a lenient float reader accepts "12abc" as 12.
_FLOAT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class DescriptiveStats:
    mean: float
    median: float
    variance: float
    std_dev: float
    min: float
    max: float
    q1: float
    q3: float


@dataclass(frozen=True)
class HistogramBin:
    range_label: str
    count: int


def _parse_token(token: str) -> Optional[float]:
    match = _FLOAT_PREFIX.match(token.strip())
    if match is None:
        return None
    value = float(match.group())
    return value if math.isfinite(value) else None


def parse_sample(text: str) -> List[float]:
    """Split ``text`` on commas and keep every token that reads as a finite number."""
    values: List[float] = []
    for token in text.split(","):
        value = _parse_token(token)
        if value is None:
            if token.strip():
                logger.debug("Discarding non-numeric token '%s'", token.strip())
            continue
        values.append(value)
    return values


def descriptive_stats(sample: Iterable[float]) -> Optional[DescriptiveStats]:
    """Summary statistics of ``sample``, or None when it is empty."""
    values = np.asarray(list(sample), dtype=float)
    n = values.size
    if n == 0:
        return None
    ordered = np.sort(values)
    mean = float(values.sum() / n)
    if n % 2 == 0:
        median = float((ordered[n // 2 - 1] + ordered[n // 2]) / 2)
    else:
        median = float(ordered[n // 2])
    variance = float(((values - mean) ** 2).sum() / n)
    return DescriptiveStats(
        mean=mean,
        median=median,
        variance=variance,
        std_dev=math.sqrt(variance),
        min=float(ordered[0]),
        max=float(ordered[-1]),
        q1=float(ordered[int(math.floor(n * 0.25))]),
        q3=float(ordered[int(math.floor(n * 0.75))]),
    )


def histogram(sample: Iterable[float], bins: int) -> List[HistogramBin]:
    """
    Equal-width histogram over [min, max] of ``sample``.

    A single-valued sample uses a bin width of 1. Values are assigned to bin
    floor((v - min) / width), clamped into the valid bin range, so the counts
    always sum to the number of values.
    """
    if bins < 1:
        raise ValueError(f"Histogram needs at least one bin, got {bins}")
    values = np.asarray([v for v in sample if not math.isnan(v)], dtype=float)
    if values.size == 0:
        return []
    low, high = float(values.min()), float(values.max())
    width = (high - low) / bins or 1.0

    idx = np.clip(np.floor((values - low) / width).astype(np.int64), 0, bins - 1)
    counts = np.bincount(idx, minlength=bins)
    return [
        HistogramBin(f"{low + i * width:.2f}-{low + (i + 1) * width:.2f}", int(counts[i]))
        for i in range(bins)
    ]
