# core/evaluation_types.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union
import math
import numpy as np

from core.exceptions import DomainError


class AngleMode(Enum):
    """Convention used by trig (input) and inverse trig (output) calls."""
    DEGREES = "degrees"
    RADIANS = "radians"

    @classmethod
    def from_value(cls, value: Union[str, "AngleMode"]) -> "AngleMode":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        aliases = {"deg": cls.DEGREES, "degrees": cls.DEGREES, "rad": cls.RADIANS, "radians": cls.RADIANS}
        if key not in aliases:
            raise ValueError(f"Unknown angle mode '{value}'. Allowed values are: degrees, radians")
        return aliases[key]


@dataclass(frozen=True)
class Domain:
    """
    Sampling range and resolution.

    Attributes:
        min: Lower bound (inclusive).
        max: Upper bound (inclusive), must be greater than min.
        steps: Resolution; values below 2 are clamped to 2.
    """
    min: float
    max: float
    steps: int = 200

    def __post_init__(self):
        lo, hi = float(self.min), float(self.max)
        if not (math.isfinite(lo) and math.isfinite(hi)):
            raise DomainError(f"Domain bounds must be finite, got [{self.min}, {self.max}]")
        if lo >= hi:
            raise DomainError(f"Domain requires min < max, got [{self.min}, {self.max}]")
        object.__setattr__(self, "min", lo)
        object.__setattr__(self, "max", hi)
        object.__setattr__(self, "steps", max(2, int(self.steps)))


@dataclass(frozen=True)
class Point2D:
    x: float
    y: float


@dataclass(frozen=True)
class PointResult:
    """
    Outcome of evaluating an expression at a single sample point.

    Exactly one of ``value`` or ``error`` is set.
    """
    x: float
    value: Optional[float] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.value is not None


@dataclass(frozen=True)
class TangentInfo:
    x0: float
    y0: float
    slope: float


@dataclass
class SurfaceMesh:
    """
    Indexed triangle mesh of z = f(x, y).

    Attributes:
        vertices: (steps+1)**2 x 3 array of positions.
        indices: flat triangle index buffer of length steps**2 * 6.
        normals: per-vertex unit normals, same shape as vertices.
        steps: grid resolution the mesh was built with.
    """
    vertices: np.ndarray
    indices: np.ndarray
    normals: np.ndarray
    steps: int
    stats: dict = field(default_factory=dict)

    @property
    def vertex_count(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def index_count(self) -> int:
        return int(self.indices.shape[0])

    def triangles(self) -> np.ndarray:
        """Index buffer reshaped to one row per triangle."""
        return self.indices.reshape(-1, 3)

    def bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        return self.vertices.min(axis=0), self.vertices.max(axis=0)
