"""Basic 2D value types: points, rectangles, infinite/finite lines and affine matrices."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Union

import numpy as np

from .numerical import EPSILON, TRIGONOMETRIC_EPSILON, is_machine_zero, is_zero

PointLike = Union["Point", Sequence[float], Mapping[str, float]]


@dataclass(frozen=True)
class Point:
    """Immutable 2D point/vector."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def read(cls, value: Optional[PointLike]) -> "Point":
        """Coerce a point, an ``(x, y)`` pair or an ``{"x", "y"}`` mapping."""

        if value is None:
            return cls()
        if isinstance(value, Point):
            return value
        if isinstance(value, Mapping):
            try:
                return cls(float(value["x"]), float(value["y"]))
            except KeyError as exc:
                raise ValueError(f"point mapping requires 'x' and 'y' keys, got {sorted(value)}") from exc
        if isinstance(value, Sequence) and not isinstance(value, str) and len(value) == 2:
            return cls(float(value[0]), float(value[1]))
        raise ValueError(f"cannot interpret {value!r} as a point")

    @classmethod
    def from_polar(cls, length: float, angle: float) -> "Point":
        radians = math.radians(angle)
        return cls(math.cos(radians) * length, math.sin(radians) * length)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: Any) -> "Point":
        other = Point.read(other)
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Any) -> "Point":
        other = Point.read(other)
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, factor: float) -> "Point":
        return Point(self.x / factor, self.y / factor)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    @property
    def length(self) -> float:
        return math.hypot(self.x, self.y)

    @property
    def angle(self) -> float:
        """Angle of the vector in degrees, measured from the positive x axis."""

        return math.degrees(self.angle_in_radians)

    @property
    def angle_in_radians(self) -> float:
        return math.atan2(self.y, self.x)

    def dot(self, other: PointLike) -> float:
        other = Point.read(other)
        return self.x * other.x + self.y * other.y

    def cross(self, other: PointLike) -> float:
        other = Point.read(other)
        return self.x * other.y - self.y * other.x

    def get_distance(self, other: PointLike, squared: bool = False) -> float:
        other = Point.read(other)
        dx = other.x - self.x
        dy = other.y - self.y
        dist_sq = dx * dx + dy * dy
        return dist_sq if squared else math.sqrt(dist_sq)

    def get_angle_between(self, other: PointLike) -> float:
        """Unsigned angle in degrees between this vector and ``other``."""

        other = Point.read(other)
        div = self.length * other.length
        if is_zero(div):
            return math.nan
        return math.degrees(math.acos(max(-1.0, min(1.0, self.dot(other) / div))))

    def get_directed_angle(self, other: PointLike) -> float:
        """Signed angle in degrees needed to rotate this vector onto ``other``."""

        other = Point.read(other)
        return math.degrees(math.atan2(self.cross(other), self.dot(other)))

    def normalize(self, length: float = 1.0) -> "Point":
        current = self.length
        scale = length / current if current != 0 else 0.0
        return Point(self.x * scale, self.y * scale)

    def rotate(self, angle: float, center: Optional[PointLike] = None) -> "Point":
        """Rotate by ``angle`` degrees around ``center`` (the origin by default)."""

        if angle == 0:
            return self
        radians = math.radians(angle)
        s = math.sin(radians)
        c = math.cos(radians)
        origin = Point.read(center) if center is not None else Point()
        x = self.x - origin.x
        y = self.y - origin.y
        return Point(x * c - y * s + origin.x, x * s + y * c + origin.y)

    def transform(self, matrix: Optional["Matrix"]) -> "Point":
        return matrix.transform_point(self) if matrix is not None else self

    def is_zero(self) -> bool:
        return is_zero(self.x) and is_zero(self.y)

    def is_nan(self) -> bool:
        return math.isnan(self.x) or math.isnan(self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def is_close(self, other: PointLike, tolerance: float) -> bool:
        return self.get_distance(other) <= tolerance

    def is_collinear(self, other: PointLike) -> bool:
        other = Point.read(other)
        return is_collinear(self.x, self.y, other.x, other.y)

    def is_orthogonal(self, other: PointLike) -> bool:
        other = Point.read(other)
        return is_orthogonal(self.x, self.y, other.x, other.y)

    def equals(self, other: Any) -> bool:
        try:
            other = Point.read(other)
        except ValueError:
            return False
        return self.x == other.x and self.y == other.y


def is_collinear(x1: float, y1: float, x2: float, y2: float) -> bool:
    """True when the vectors ``(x1, y1)`` and ``(x2, y2)`` are parallel within tolerance."""

    return abs(x1 * y2 - y1 * x2) <= math.sqrt((x1 * x1 + y1 * y1) * (x2 * x2 + y2 * y2)) * TRIGONOMETRIC_EPSILON


def is_orthogonal(x1: float, y1: float, x2: float, y2: float) -> bool:
    return abs(x1 * x2 + y1 * y2) <= math.sqrt((x1 * x1 + y1 * y1) * (x2 * x2 + y2 * y2)) * TRIGONOMETRIC_EPSILON


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle stored as origin plus size."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_points(cls, a: PointLike, b: PointLike) -> "Rectangle":
        a = Point.read(a)
        b = Point.read(b)
        left, right = min(a.x, b.x), max(a.x, b.x)
        top, bottom = min(a.y, b.y), max(a.y, b.y)
        return cls(left, top, right - left, bottom - top)

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    @property
    def top_left(self) -> Point:
        return Point(self.left, self.top)

    @property
    def bottom_right(self) -> Point:
        return Point(self.right, self.bottom)

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def contains(self, point: PointLike) -> bool:
        p = Point.read(point)
        return self.left <= p.x <= self.right and self.top <= p.y <= self.bottom

    def intersects(self, other: "Rectangle", epsilon: float = 0.0) -> bool:
        return (
            other.left < self.right + epsilon
            and other.top < self.bottom + epsilon
            and other.right > self.left - epsilon
            and other.bottom > self.top - epsilon
        )

    def unite(self, other: "Rectangle") -> "Rectangle":
        left = min(self.left, other.left)
        top = min(self.top, other.top)
        return Rectangle(left, top, max(self.right, other.right) - left, max(self.bottom, other.bottom) - top)

    def include(self, point: PointLike) -> "Rectangle":
        p = Point.read(point)
        left = min(self.left, p.x)
        top = min(self.top, p.y)
        return Rectangle(left, top, max(self.right, p.x) - left, max(self.bottom, p.y) - top)

    def expand(self, dx: float, dy: Optional[float] = None) -> "Rectangle":
        dy = dx if dy is None else dy
        return Rectangle(self.x - dx / 2, self.y - dy / 2, self.width + dx, self.height + dy)

    def with_center(self, center: PointLike) -> "Rectangle":
        c = Point.read(center)
        return Rectangle(c.x - self.width / 2, c.y - self.height / 2, self.width, self.height)


class Line:
    """A line through ``point`` along ``vector``; finite unless queried as infinite."""

    __slots__ = ("px", "py", "vx", "vy")

    def __init__(self, point: PointLike, vector: PointLike, as_vector: bool = False) -> None:
        p = Point.read(point)
        v = Point.read(vector)
        self.px, self.py = p.x, p.y
        if as_vector:
            self.vx, self.vy = v.x, v.y
        else:
            self.vx, self.vy = v.x - p.x, v.y - p.y

    def __repr__(self) -> str:
        return f"Line(point=({self.px:g}, {self.py:g}), vector=({self.vx:g}, {self.vy:g}))"

    @property
    def point(self) -> Point:
        return Point(self.px, self.py)

    @property
    def vector(self) -> Point:
        return Point(self.vx, self.vy)

    @property
    def length(self) -> float:
        return math.hypot(self.vx, self.vy)

    def intersect(self, other: "Line", is_infinite: bool = False) -> Optional[Point]:
        return line_intersect(
            self.px, self.py, self.vx, self.vy, other.px, other.py, other.vx, other.vy, True, is_infinite
        )

    def get_side(self, point: PointLike, is_infinite: bool = False) -> int:
        p = Point.read(point)
        return line_side(self.px, self.py, self.vx, self.vy, p.x, p.y, True, is_infinite)

    def get_signed_distance(self, point: PointLike) -> float:
        p = Point.read(point)
        return line_signed_distance(self.px, self.py, self.vx, self.vy, p.x, p.y, True)

    def get_distance(self, point: PointLike) -> float:
        return abs(self.get_signed_distance(point))

    def is_collinear(self, other: "Line") -> bool:
        return is_collinear(self.vx, self.vy, other.vx, other.vy)

    def is_orthogonal(self, other: "Line") -> bool:
        return is_orthogonal(self.vx, self.vy, other.vx, other.vy)


def line_intersect(
    p1x: float,
    p1y: float,
    v1x: float,
    v1y: float,
    p2x: float,
    p2y: float,
    v2x: float,
    v2y: float,
    as_vector: bool = False,
    is_infinite: bool = False,
) -> Optional[Point]:
    """Intersection point of two lines, or ``None`` when parallel or out of range.

    Finite lines accept parameters within ``EPSILON`` of ``[0, 1]``; the
    result is clamped onto the first line.
    """

    if not as_vector:
        v1x -= p1x
        v1y -= p1y
        v2x -= p2x
        v2y -= p2y
    cross = v1x * v2y - v1y * v2x
    if is_machine_zero(cross):
        return None
    dx = p1x - p2x
    dy = p1y - p2y
    u1 = (v2x * dy - v2y * dx) / cross
    u2 = (v1x * dy - v1y * dx) / cross
    u_min = -EPSILON
    u_max = 1 + EPSILON
    if is_infinite or (u_min < u1 < u_max and u_min < u2 < u_max):
        if not is_infinite:
            u1 = 0.0 if u1 <= 0 else 1.0 if u1 >= 1 else u1
        return Point(p1x + u1 * v1x, p1y + u1 * v1y)
    return None


def line_side(
    px: float,
    py: float,
    vx: float,
    vy: float,
    x: float,
    y: float,
    as_vector: bool = False,
    is_infinite: bool = False,
) -> int:
    """-1, 0 or 1 depending on which side of the line ``(x, y)`` lies."""

    if not as_vector:
        vx -= px
        vy -= py
    v2x = x - px
    v2y = y - py
    ccw = v2x * vy - v2y * vx
    if not is_infinite and is_machine_zero(ccw):
        # On the carrier line: report 0 only when within the segment.
        ccw = (v2x * vx + v2y * vy) / (vx * vx + vy * vy)
        if 0 <= ccw <= 1:
            ccw = 0
    return -1 if ccw < 0 else 1 if ccw > 0 else 0


def line_signed_distance(
    px: float, py: float, vx: float, vy: float, x: float, y: float, as_vector: bool = False
) -> float:
    if not as_vector:
        vx -= px
        vy -= py
    if vx == 0:
        return x - px if vy > 0 else px - x
    if vy == 0:
        return y - py if vx < 0 else py - y
    denominator = vy * math.sqrt(1 + (vx * vx) / (vy * vy)) if vy > vx else vx * math.sqrt(1 + (vy * vy) / (vx * vx))
    return ((x - px) * vy - (y - py) * vx) / denominator


def line_distance(
    px: float, py: float, vx: float, vy: float, x: float, y: float, as_vector: bool = False
) -> float:
    return abs(line_signed_distance(px, py, vx, vy, x, y, as_vector))


class Matrix:
    """2D affine transform ``[a c tx; b d ty; 0 0 1]`` backed by a numpy array."""

    __slots__ = ("_m",)

    def __init__(
        self,
        a: float = 1.0,
        b: float = 0.0,
        c: float = 0.0,
        d: float = 1.0,
        tx: float = 0.0,
        ty: float = 0.0,
    ) -> None:
        self._m = np.array([[a, c, tx], [b, d, ty], [0.0, 0.0, 1.0]], dtype=float)

    @classmethod
    def _from_array(cls, array: np.ndarray) -> "Matrix":
        matrix = cls()
        matrix._m = np.asarray(array, dtype=float)
        return matrix

    @classmethod
    def translation(cls, dx: float, dy: float) -> "Matrix":
        return cls(tx=dx, ty=dy)

    @classmethod
    def scaling(cls, sx: float, sy: Optional[float] = None, center: Optional[PointLike] = None) -> "Matrix":
        return cls().scale(sx, sy, center)

    @classmethod
    def rotation(cls, angle: float, center: Optional[PointLike] = None) -> "Matrix":
        return cls().rotate(angle, center)

    def __repr__(self) -> str:
        a, b, c, d, tx, ty = self.values
        return f"Matrix({a:g}, {b:g}, {c:g}, {d:g}, {tx:g}, {ty:g})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Matrix) and bool(np.array_equal(self._m, other._m))

    __hash__ = None  # type: ignore[assignment]

    @property
    def values(self) -> List[float]:
        m = self._m
        return [m[0, 0], m[1, 0], m[0, 1], m[1, 1], m[0, 2], m[1, 2]]

    def append(self, other: "Matrix") -> "Matrix":
        """Return ``self * other``: ``other`` is applied first."""

        return Matrix._from_array(self._m @ other._m)

    def prepend(self, other: "Matrix") -> "Matrix":
        return Matrix._from_array(other._m @ self._m)

    def translate(self, dx: float, dy: float) -> "Matrix":
        return self.append(Matrix.translation(dx, dy))

    def scale(self, sx: float, sy: Optional[float] = None, center: Optional[PointLike] = None) -> "Matrix":
        sy = sx if sy is None else sy
        scaled = Matrix(sx, 0.0, 0.0, sy)
        if center is not None:
            c = Point.read(center)
            scaled = Matrix.translation(c.x, c.y).append(scaled).append(Matrix.translation(-c.x, -c.y))
        return self.append(scaled)

    def rotate(self, angle: float, center: Optional[PointLike] = None) -> "Matrix":
        radians = math.radians(angle)
        cos = math.cos(radians)
        sin = math.sin(radians)
        rotated = Matrix(cos, sin, -sin, cos)
        if center is not None:
            c = Point.read(center)
            rotated = Matrix.translation(c.x, c.y).append(rotated).append(Matrix.translation(-c.x, -c.y))
        return self.append(rotated)

    def is_identity(self) -> bool:
        return bool(np.array_equal(self._m, np.eye(3)))

    def is_invertible(self) -> bool:
        det = self._m[0, 0] * self._m[1, 1] - self._m[0, 1] * self._m[1, 0]
        return math.isfinite(det) and not is_zero(det)

    def inverted(self) -> Optional["Matrix"]:
        if not self.is_invertible():
            return None
        return Matrix._from_array(np.linalg.inv(self._m))

    def transform_point(self, point: PointLike) -> Point:
        p = Point.read(point)
        m = self._m
        return Point(
            m[0, 0] * p.x + m[0, 1] * p.y + m[0, 2],
            m[1, 0] * p.x + m[1, 1] * p.y + m[1, 2],
        )

    def transform_vector(self, vector: PointLike) -> Point:
        v = Point.read(vector)
        m = self._m
        return Point(m[0, 0] * v.x + m[0, 1] * v.y, m[1, 0] * v.x + m[1, 1] * v.y)

    def transform_coordinates(self, coords: Sequence[float]) -> List[float]:
        """Transform a flat ``[x0, y0, x1, y1, ...]`` coordinate list."""

        pts = np.asarray(coords, dtype=float).reshape(-1, 2)
        out = pts @ self._m[:2, :2].T + self._m[:2, 2]
        return [float(value) for value in out.reshape(-1)]


__all__ = [
    "Line",
    "Matrix",
    "Point",
    "PointLike",
    "Rectangle",
    "is_collinear",
    "is_orthogonal",
    "line_distance",
    "line_intersect",
    "line_side",
    "line_signed_distance",
]
