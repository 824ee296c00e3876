# evaluation/surface.py
import time
from typing import Union
import numpy as np

from core.evaluation_types import AngleMode, Domain, SurfaceMesh
from core.exceptions import EvaluationError
from symbolic.expressions import Expression, as_expression
from utils.logging_config import get_logger

logger = get_logger(__name__)


def grid_indices(steps: int) -> np.ndarray:
    """
    Triangle index buffer for a (steps+1) x (steps+1) vertex grid.

    Cell (i, j) with a = i*(steps+1)+j, b = a+1, c = a+(steps+1), d = c+1
    contributes triangles (a, b, c) and (b, d, c).
    """
    row = steps + 1
    i, j = np.meshgrid(np.arange(steps), np.arange(steps), indexing="ij")
    a = (i * row + j).ravel()
    b = a + 1
    c = a + row
    d = c + 1
    return np.stack([a, b, c, b, d, c], axis=1).ravel().astype(np.int64)


def vertex_normals(vertices: np.ndarray, indices: np.ndarray) -> np.ndarray:
    """
    Smooth-shading normals: each triangle's face normal is added to its three
    vertices, then the sums are normalised. Vertices with a zero sum keep a
    zero normal.
    """
    tris = indices.reshape(-1, 3)
    v0, v1, v2 = vertices[tris[:, 0]], vertices[tris[:, 1]], vertices[tris[:, 2]]
    face_normals = np.cross(v1 - v0, v2 - v0)

    normals = np.zeros_like(vertices)
    for k in range(3):
        np.add.at(normals, tris[:, k], face_normals)

    lengths = np.linalg.norm(normals, axis=1, keepdims=True)
    np.divide(normals, lengths, out=normals, where=lengths > 0)
    return normals


def build_surface(expr: Union[str, Expression], domain: Domain,
                  mode: Union[AngleMode, str] = AngleMode.RADIANS) -> SurfaceMesh:
    """
    Mesh z = f(x, y) over the square grid [min, max]^2 with ``domain.steps`` cells per side.

    Vertex (i, j) sits at x = min + i*delta, y = min + j*delta with
    delta = (max - min) / steps. Where f cannot be evaluated or is not
    finite, z is set to 0 so the mesh keeps every vertex.

    :raises ParseError: If ``expr`` is a malformed string.
    """
    compiled = as_expression(expr)
    mode = AngleMode.from_value(mode)
    steps = domain.steps
    start_time = time.time()

    axis = domain.min + np.arange(steps + 1) * ((domain.max - domain.min) / steps)
    xs, ys = np.meshgrid(axis, axis, indexing="ij")
    try:
        zs = np.broadcast_to(compiled.evaluate_array({"x": xs, "y": ys}, mode), xs.shape)
    except EvaluationError as e:
        logger.warning("Surface '%s' could not be evaluated, using z=0: %s", compiled.source, e)
        zs = np.zeros_like(xs)
    invalid = ~np.isfinite(zs)
    zs = np.where(invalid, 0.0, zs)

    vertices = np.column_stack([xs.ravel(), ys.ravel(), zs.ravel()])
    indices = grid_indices(steps)
    normals = vertex_normals(vertices, indices)

    stats = {
        "vertices": vertices.shape[0],
        "indices": indices.shape[0],
        "substituted": int(invalid.sum()),
        "elapsed": time.time() - start_time,
    }
    logger.debug("Surface '%s': %d vertices, %d indices, %d substituted",
                 compiled.source, stats["vertices"], stats["indices"], stats["substituted"])
    return SurfaceMesh(vertices=vertices, indices=indices, normals=normals, steps=steps, stats=stats)
