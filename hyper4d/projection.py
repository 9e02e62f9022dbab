"""
4D -> 3D projection.

Two modes are available:

``PARALLEL`` (default)
    Shears w into the visible axes: ``(p - o)[:3] + shear * (p.w - o.w)``.
    Never singular.

``PERSPECTIVE``
    Pinhole divide along the hidden axis:
    ``local[:3] * focal / (focal - local.w)`` with ``local = p - o``.
    When ``|focal - local.w| < epsilon`` the divide is skipped and the
    unscaled ``local[:3]`` is returned instead.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

import numpy as np


class ProjectionMode(Enum):
    PARALLEL = "parallel"
    PERSPECTIVE = "perspective"


@dataclass(frozen=True)
class ProjectionParams:
    shear: float = 0.7
    focal_distance: float = 4.0
    epsilon: float = 1e-6


def project(point, observer, mode: ProjectionMode = ProjectionMode.PARALLEL,
            params: ProjectionParams = ProjectionParams()) -> np.ndarray:
    local = np.asarray(point, dtype=float) - np.asarray(observer, dtype=float)
    if mode is ProjectionMode.PARALLEL:
        return local[:3] + params.shear * local[3]

    denom = params.focal_distance - local[3]
    if abs(denom) < params.epsilon:
        return local[:3].copy()
    return local[:3] * (params.focal_distance / denom)


def project_edges(vertices: np.ndarray, edges: List[Tuple[int, int]], state,
                  mode: ProjectionMode = ProjectionMode.PARALLEL,
                  params: ProjectionParams = ProjectionParams()) -> np.ndarray:
    """
    Line-segment buffer for one frame, shape ``(2 * len(edges), 3)``.

    Rows 2k and 2k+1 are the endpoints of ``edges[k]``. Orientation and
    observer are both read from the single ``state`` snapshot.
    """
    orientation = state.orientation.matrix
    observer = state.observer
    rotated = np.dot(np.asarray(vertices, dtype=float), orientation.T)

    out = np.empty((2 * len(edges), 3))
    for k, (i, j) in enumerate(edges):
        out[2 * k] = project(rotated[i], observer, mode, params)
        out[2 * k + 1] = project(rotated[j], observer, mode, params)
    return out
