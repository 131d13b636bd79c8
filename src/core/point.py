# core/point.py
import math
from math import pi
from typing import Iterator, List, Sequence, Tuple

import numpy as np

Vertex = Tuple[float, float, float]
Face = List[int]
Matrix4d = Sequence[Sequence[float]]

# Defaults for Point.isclose().
REL_TOL = 1e-9
ABS_TOL = 1e-12

__all__ = ["Point", "Vertex", "Face", "Matrix4d", "REL_TOL", "ABS_TOL", "pi"]


def _div(a: float, d: float) -> float:
    # Float division with IEEE-754 results (inf/nan) instead of ZeroDivisionError.
    with np.errstate(all="ignore"):
        return float(np.float64(a) / d)


class Point:
    """
    A 3D point that doubles as a 3D vector.

    Coordinates are kept in a 3-slot list so that lists of points map
    directly onto (N, 3) arrays (see core.kernels). A Point built from two
    points is the displacement between them:

        Point()             -> (0, 0, 0)
        Point(x, y, z)      -> (x, y, z)
        Point([x, y, z])    -> (x, y, z)
        Point(a, b)         -> b - a
    """
    __slots__ = ("xyz",)

    def __init__(self, *args):
        if not args:
            self.xyz = [0.0, 0.0, 0.0]
        elif len(args) == 3:
            self.xyz = [float(args[0]), float(args[1]), float(args[2])]
        elif len(args) == 1:
            coords = list(args[0])
            if len(coords) != 3:
                raise ValueError(f"Point needs 3 coordinates, got {len(coords)}")
            self.xyz = [float(c) for c in coords]
        elif len(args) == 2:
            a, b = args
            if not isinstance(a, Point) or not isinstance(b, Point):
                raise TypeError("Point(a, b) expects two Point instances")
            self.xyz = [b.xyz[0] - a.xyz[0], b.xyz[1] - a.xyz[1], b.xyz[2] - a.xyz[2]]
        else:
            raise TypeError(f"Point takes 0, 1, 2 or 3 arguments ({len(args)} given)")

    @classmethod
    def between(cls, a: "Point", b: "Point") -> "Point":
        """Vector going from a to b."""
        return cls(a, b)

    def copy(self) -> "Point":
        return Point(self.xyz[0], self.xyz[1], self.xyz[2])

    # Operators

    def __add__(self, other: "Point") -> "Point":
        return Point(self.xyz[0] + other.xyz[0], self.xyz[1] + other.xyz[1], self.xyz[2] + other.xyz[2])

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.xyz[0] - other.xyz[0], self.xyz[1] - other.xyz[1], self.xyz[2] - other.xyz[2])

    def __neg__(self) -> "Point":
        return Point(-self.xyz[0], -self.xyz[1], -self.xyz[2])

    def __mul__(self, d: float) -> "Point":
        d = float(d)
        return Point(self.xyz[0] * d, self.xyz[1] * d, self.xyz[2] * d)

    def __rmul__(self, d: float) -> "Point":
        return self.__mul__(d)

    def __truediv__(self, d: float) -> "Point":
        return Point(_div(self.xyz[0], d), _div(self.xyz[1], d), _div(self.xyz[2], d))

    def __iadd__(self, other: "Point") -> "Point":
        self.xyz[0] += other.xyz[0]
        self.xyz[1] += other.xyz[1]
        self.xyz[2] += other.xyz[2]
        return self

    def __isub__(self, other: "Point") -> "Point":
        self.xyz[0] -= other.xyz[0]
        self.xyz[1] -= other.xyz[1]
        self.xyz[2] -= other.xyz[2]
        return self

    def __imul__(self, d: float) -> "Point":
        d = float(d)
        self.xyz[0] *= d
        self.xyz[1] *= d
        self.xyz[2] *= d
        return self

    def __itruediv__(self, d: float) -> "Point":
        self.xyz[0] = _div(self.xyz[0], d)
        self.xyz[1] = _div(self.xyz[1], d)
        self.xyz[2] = _div(self.xyz[2], d)
        return self

    def __eq__(self, other) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        # Componentwise, so a NaN coordinate never compares equal.
        return all(a == b for a, b in zip(self.xyz, other.xyz))

    # Mutable value, so not hashable.
    __hash__ = None

    # Keep numpy scalars from treating Point as an array: np.float64(d) * p
    # must reach __rmul__.
    __array_ufunc__ = None

    # Component access

    @property
    def x(self) -> float:
        return self.xyz[0]

    @x.setter
    def x(self, value: float):
        self.xyz[0] = float(value)

    @property
    def y(self) -> float:
        return self.xyz[1]

    @y.setter
    def y(self, value: float):
        self.xyz[1] = float(value)

    @property
    def z(self) -> float:
        return self.xyz[2]

    @z.setter
    def z(self, value: float):
        self.xyz[2] = float(value)

    def __getitem__(self, i: int) -> float:
        if not 0 <= i < 3:
            raise IndexError(f"Point index out of range: {i}")
        return self.xyz[i]

    def __setitem__(self, i: int, value: float):
        if not 0 <= i < 3:
            raise IndexError(f"Point index out of range: {i}")
        self.xyz[i] = float(value)

    def get_unchecked(self, i: int) -> float:
        """Positional read without range validation on i."""
        return self.xyz[i]

    def set_unchecked(self, i: int, value: float):
        """Positional write without range validation on i."""
        self.xyz[i] = float(value)

    def __len__(self) -> int:
        return 3

    def __iter__(self) -> Iterator[float]:
        return iter(self.xyz)

    def __array__(self, dtype=None, copy=None):
        if copy is False:
            raise ValueError("Point coordinates cannot be viewed as an array without a copy")
        return np.array(self.xyz, dtype=dtype if dtype is not None else np.float64)

    # Methods

    def dot(self, other: "Point") -> float:
        return self.xyz[0] * other.xyz[0] + self.xyz[1] * other.xyz[1] + self.xyz[2] * other.xyz[2]

    def cross(self, other: "Point") -> "Point":
        return Point(
            self.xyz[1] * other.xyz[2] - other.xyz[1] * self.xyz[2],
            self.xyz[2] * other.xyz[0] - other.xyz[2] * self.xyz[0],
            self.xyz[0] * other.xyz[1] - other.xyz[0] * self.xyz[1]
        )

    def norm1(self) -> float:
        """Manhattan norm."""
        return abs(self.xyz[0]) + abs(self.xyz[1]) + abs(self.xyz[2])

    def norm2(self) -> float:
        """Euclidean norm."""
        return math.sqrt(self.xyz[0] * self.xyz[0] + self.xyz[1] * self.xyz[1] + self.xyz[2] * self.xyz[2])

    def normInf(self) -> float:
        """Maximum (infinity) norm."""
        return max(abs(self.xyz[0]), abs(self.xyz[1]), abs(self.xyz[2]))

    def transform(self, m: Matrix4d) -> "Point":
        """
        Apply a 4x4 affine matrix to this point in place and return it.

        The point is treated as (x, y, z, 1). Only rows 0-2 of m are read:
        the bottom row is ignored and no homogeneous divide happens, so a
        perspective matrix gives a wrong result rather than an error.
        """
        x, y, z = self.xyz
        new_x = x * m[0][0] + y * m[0][1] + z * m[0][2] + m[0][3]
        new_y = x * m[1][0] + y * m[1][1] + z * m[1][2] + m[1][3]
        new_z = x * m[2][0] + y * m[2][1] + z * m[2][2] + m[2][3]
        self.xyz[0], self.xyz[1], self.xyz[2] = float(new_x), float(new_y), float(new_z)
        return self

    def transformed(self, m: Matrix4d) -> "Point":
        """Same as transform() but on a copy."""
        return self.copy().transform(m)

    def isclose(self, other: "Point", rel_tol: float = REL_TOL, abs_tol: float = ABS_TOL) -> bool:
        return all(
            math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)
            for a, b in zip(self.xyz, other.xyz)
        )

    def __repr__(self) -> str:
        return f"Point({self.xyz[0]}, {self.xyz[1]}, {self.xyz[2]})"

    def __str__(self) -> str:
        return f"({self.xyz[0]}, {self.xyz[1]}, {self.xyz[2]})"
