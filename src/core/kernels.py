# core/kernels.py

import math
from typing import Iterable, List

import numpy as np
from numba import njit

from core.point import Matrix4d, Point


def points_to_array(points: Iterable[Point]) -> np.ndarray:
    """
    Pack points into a contiguous (N, 3) float64 array, one row per point.
    """
    points = list(points)
    vertices = np.zeros((len(points), 3), dtype=np.float64)
    for i, p in enumerate(points):
        vertices[i] = p.xyz
    return vertices


def array_to_points(vertices) -> List[Point]:
    """Inverse of points_to_array()."""
    vertices = _as_vertices(vertices)
    return [Point(row[0], row[1], row[2]) for row in vertices]


def _as_vertices(vertices) -> np.ndarray:
    vertices = np.ascontiguousarray(vertices, dtype=np.float64)
    if vertices.ndim != 2 or vertices.shape[1] != 3:
        raise ValueError(f"Expected an (N, 3) vertex array, got shape {vertices.shape}")
    return vertices


def _as_matrix(m: Matrix4d) -> np.ndarray:
    m = np.ascontiguousarray(m, dtype=np.float64)
    if m.shape != (4, 4):
        raise ValueError(f"Expected a 4x4 matrix, got shape {m.shape}")
    return m


@njit
def _transform_rows(vertices, m, out):
    # Same rule as Point.transform: weight 1, bottom row of m unused.
    for i in range(vertices.shape[0]):
        x = vertices[i, 0]
        y = vertices[i, 1]
        z = vertices[i, 2]
        out[i, 0] = x * m[0, 0] + y * m[0, 1] + z * m[0, 2] + m[0, 3]
        out[i, 1] = x * m[1, 0] + y * m[1, 1] + z * m[1, 2] + m[1, 3]
        out[i, 2] = x * m[2, 0] + y * m[2, 1] + z * m[2, 2] + m[2, 3]


@njit
def _row_norms2(vertices, out):
    for i in range(vertices.shape[0]):
        x = vertices[i, 0]
        y = vertices[i, 1]
        z = vertices[i, 2]
        out[i] = math.sqrt(x * x + y * y + z * z)


def transform_vertices(vertices, m: Matrix4d) -> np.ndarray:
    """
    Apply a 4x4 affine matrix to every row of an (N, 3) vertex array.

    Returns a new array; the input is left untouched. As with
    Point.transform, row 3 of m is never read.
    """
    vertices = _as_vertices(vertices)
    out = np.empty_like(vertices)
    _transform_rows(vertices, _as_matrix(m), out)
    return out


def norms2(vertices) -> np.ndarray:
    """Euclidean norm of each row of an (N, 3) vertex array."""
    vertices = _as_vertices(vertices)
    out = np.empty(vertices.shape[0], dtype=np.float64)
    _row_norms2(vertices, out)
    return out
