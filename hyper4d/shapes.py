import json
import numpy as np
from dataclasses import dataclass
from typing import List, Tuple

Edge = Tuple[int, int]

AXES = ("x", "y", "z", "w")


def generate_vertices(size: float = 1.0) -> np.ndarray:
    """
    Vertices of a tesseract centred on the origin.

    Every coordinate is -size/2 or +size/2. The order is the nested product
    with x outermost and w innermost, so vertex i has bit (3 - axis) of i set
    when that axis is positive.
    """
    if size < 0:
        raise ValueError(f"Tesseract size must be non-negative, got {size}")
    s = size / 2
    vertices = np.array([
        [x, y, z, w] for x in [-s, s]
                    for y in [-s, s]
                    for z in [-s, s]
                    for w in [-s, s]
    ], dtype=float)
    vertices.setflags(write=False)
    return vertices


def generate_edges(vertices: np.ndarray) -> List[Edge]:
    """
    Two vertices share an edge if they differ in exactly one coordinate.
    Pairs come out in ascending (i, j) order.
    """
    edges = []
    n = len(vertices)
    for i in range(n):
        for j in range(i + 1, n):
            if np.count_nonzero(vertices[i] != vertices[j]) == 1:
                edges.append((i, j))
    return edges


def edge_axes(vertices: np.ndarray, edges: List[Edge]) -> List[int]:
    """Axis index (0..3) each edge runs along, in edge order."""
    axes = []
    for i, j in edges:
        diff = np.flatnonzero(vertices[i] != vertices[j])
        axes.append(int(diff[0]) if len(diff) else -1)
    return axes


@dataclass(frozen=True, eq=False)
class Shape4D:
    vertices: np.ndarray
    edges: List[Edge]

    @classmethod
    def tesseract(cls, size: float = 1.0) -> "Shape4D":
        vertices = generate_vertices(size)
        return cls(vertices, generate_edges(vertices))

    @property
    def axes(self) -> List[int]:
        return edge_axes(self.vertices, self.edges)

    def save(self, filename: str):
        data = {
            'vertices': self.vertices.tolist(),
            'edges': [list(e) for e in self.edges],
        }
        with open(filename, 'w') as f:
            json.dump(data, f, indent=2)


def load_shape(filename: str) -> Shape4D:
    with open(filename, 'r') as f:
        data = json.load(f)

    vertices = np.array(data['vertices'], dtype=float)
    if vertices.ndim != 2 or vertices.shape[1] != 4:
        raise ValueError(f"{filename}: vertices must be a list of 4D points")
    vertices.setflags(write=False)
    edges = [tuple(e) for e in data.get('edges', [])] or generate_edges(vertices)
    for i, j in edges:
        if not (0 <= i < j < len(vertices)):
            raise ValueError(f"{filename}: bad edge {(i, j)}")

    return Shape4D(vertices, edges)
