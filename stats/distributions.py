# stats/distributions.py
import math
from typing import List, Tuple

# Slack when comparing the accumulated offset against the +4 sigma end point.
_END_SLACK = 1e-9


def normal_density(x: float, mean: float, std_dev: float) -> float:
    return (1.0 / (std_dev * math.sqrt(2 * math.pi))) * math.exp(-0.5 * ((x - mean) / std_dev) ** 2)


def normal_curve(mean: float, std_dev: float, sample_size: float) -> List[Tuple[float, float]]:
    """
    Gaussian density sampled from mean - 4 sigma to mean + 4 sigma.

    The offset i runs from -4 to 4 in steps of 8 / sample_size and each point
    is (mean + i * std_dev, density). Offsets are computed from the step
    index, so an integral sample size always ends exactly at +4.
    """
    if std_dev <= 0:
        raise ValueError(f"Standard deviation must be positive, got {std_dev}")
    if sample_size <= 0:
        raise ValueError(f"Sample size must be positive, got {sample_size}")

    step = 8.0 / sample_size
    curve: List[Tuple[float, float]] = []
    k = 0
    while True:
        i = -4.0 + k * step
        if i > 4.0 + _END_SLACK:
            break
        x = mean + i * std_dev
        curve.append((x, normal_density(x, mean, std_dev)))
        k += 1
    return curve
