"""
4D rotations as 4x4 row-major matrices.

A rotation lives in a plane spanned by two axes (x=0, y=1, z=2, w=3).
``elementary_rotation(a, b, angle)`` turns axis ``a`` towards axis ``b``
for positive angles:

    R[a, a] = cos   R[a, b] = -sin
    R[b, a] = sin   R[b, b] = cos

Orientation increments are folded in world space by left multiplication,
``orientation' = increment @ orientation``. When one input event yields
several increments they are folded in the order given, so for
``fold(h, v)`` the result is ``v @ h @ orientation``.
"""
import logging
from dataclasses import dataclass
from math import cos, sin
from typing import Sequence

import numpy as np

logger = logging.getLogger(__name__)


def identity() -> np.ndarray:
    return np.eye(4)


def from_row_major(values: Sequence[float]) -> np.ndarray:
    m = np.array(values, dtype=float)
    if m.size != 16:
        raise ValueError(f"Mat4 needs 16 values, got {m.size}")
    return m.reshape(4, 4)


def to_row_major(m: np.ndarray) -> list:
    return [float(v) for v in np.asarray(m).reshape(16)]


def elementary_rotation(a: int, b: int, angle: float) -> np.ndarray:
    if a not in range(4) or b not in range(4):
        raise ValueError(f"Rotation axes must be in 0..3, got ({a}, {b})")
    if a == b:
        raise ValueError(f"Rotation plane needs two distinct axes, got ({a}, {b})")
    rot = np.eye(4)
    c, s = cos(angle), sin(angle)
    rot[[a, b], [a, b]] = c
    rot[[a, b], [b, a]] = [-s, s]
    return rot


def compose(m1: np.ndarray, m2: np.ndarray) -> np.ndarray:
    """m1 @ m2: applying the result equals applying m2, then m1."""
    return np.dot(m1, m2)


def apply(m: np.ndarray, v) -> np.ndarray:
    return np.dot(m, np.asarray(v, dtype=float))


def orthonormality_error(m: np.ndarray) -> float:
    """Largest deviation of m @ m.T from the identity."""
    return float(np.max(np.abs(np.dot(m, m.T) - np.eye(4))))


def orthonormalize(m: np.ndarray) -> np.ndarray:
    """
    Gram-Schmidt across the four rows. Row 0 keeps its direction, each later
    row loses its components along the rows before it.
    """
    basis = []
    for row in np.asarray(m, dtype=float):
        v = row.copy()
        for b in basis:
            v -= np.dot(v, b) * b
        norm = np.linalg.norm(v)
        if norm < 1e-12:
            # Collapsed row: fall back to the first axis not yet spanned.
            for candidate in np.eye(4):
                v = candidate.copy()
                for b in basis:
                    v -= np.dot(v, b) * b
                norm = np.linalg.norm(v)
                if norm > 1e-6:
                    break
        basis.append(v / norm)
    return np.array(basis)


@dataclass(frozen=True, eq=False)
class Orientation:
    """
    Cumulative rotation plus the number of compositions since the last
    re-orthonormalization. Instances are immutable; ``fold`` returns a new one.
    """
    matrix: np.ndarray
    since_correction: int = 0
    reorthonormalize_every: int = 64
    drift_tolerance: float = 1e-9

    def __post_init__(self):
        if self.reorthonormalize_every < 1:
            raise ValueError("reorthonormalize_every must be at least 1")
        m = np.array(self.matrix, dtype=float).reshape(4, 4)
        m.setflags(write=False)
        object.__setattr__(self, "matrix", m)

    @classmethod
    def identity(cls, reorthonormalize_every: int = 64,
                 drift_tolerance: float = 1e-9) -> "Orientation":
        return cls(np.eye(4), 0, reorthonormalize_every, drift_tolerance)

    def reset(self) -> "Orientation":
        return Orientation.identity(self.reorthonormalize_every, self.drift_tolerance)

    def fold(self, *increments: np.ndarray) -> "Orientation":
        m = self.matrix
        count = self.since_correction
        for inc in increments:
            m = compose(inc, m)
            count += 1
        if count >= self.reorthonormalize_every:
            m, count = self._corrected(m, "cadence"), 0
        else:
            error = orthonormality_error(m)
            if error > self.drift_tolerance:
                m, count = self._corrected(m, f"drift {error:.3g}"), 0
        return Orientation(m, count, self.reorthonormalize_every, self.drift_tolerance)

    def apply(self, v) -> np.ndarray:
        return apply(self.matrix, v)

    def basis(self, axis: int) -> np.ndarray:
        """World-space direction of the local axis (column of the matrix)."""
        return self.matrix[:, axis].copy()

    @staticmethod
    def _corrected(m: np.ndarray, reason: str) -> np.ndarray:
        logger.debug("re-orthonormalizing orientation (%s)", reason)
        return orthonormalize(m)
