"""Cubic Bezier curves.

Most algorithms operate on *curve values*: a tuple of 8 absolute coordinates
``(x0, y0, x1, y1, x2, y2, x3, y3)`` holding the first anchor, the two control
points and the second anchor. :class:`Curve` is a view over two segments that
derives its values on demand and caches its length and bounds.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Tuple, Union

from . import numerical
from .bounds import add_bounds, get_handle_bounds, get_segments_bounds, get_stroke_bounds
from .geometry import Line, Matrix, Point, PointLike, is_collinear, line_distance
from .segment import Segment
from .types import CurveValues, EvaluationKind

if TYPE_CHECKING:  # pragma: no cover
    from .geometry import Rectangle
    from .location import CurveLocation
    from .path import Path

_KIND_CODES = {"point": 0, "tangent": 1, "normal": 2, "curvature": 3}


@dataclass(frozen=True)
class CurveClassification:
    """Shape of a cubic: ``line``, ``quadratic``, ``serpentine``, ``cusp``, ``loop`` or ``arch``.

    ``roots`` holds the sorted curve-times of the inflections, the cusp or the
    loop's self-intersection that fall inside ``(0, 1)``, or ``None``.
    """

    type: str
    roots: Optional[Tuple[float, ...]] = None


def get_values(
    segment1: Segment,
    segment2: Segment,
    matrix: Optional[Matrix] = None,
    straight: bool = False,
) -> CurveValues:
    p1 = segment1.point
    p2 = segment2.point
    x1, y1, x2, y2 = p1.x, p1.y, p2.x, p2.y
    if straight:
        values = [x1, y1, x1, y1, x2, y2, x2, y2]
    else:
        h1 = segment1.handle_out
        h2 = segment2.handle_in
        values = [x1, y1, x1 + h1.x, y1 + h1.y, x2 + h2.x, y2 + h2.y, x2, y2]
    if matrix is not None:
        values = matrix.transform_coordinates(values)
    return tuple(values)  # type: ignore[return-value]


def subdivide(v: Sequence[float], t: float = 0.5) -> Tuple[CurveValues, CurveValues]:
    """Split ``v`` at ``t`` with De Casteljau's algorithm."""

    x0, y0, x1, y1, x2, y2, x3, y3 = v
    u = 1 - t
    x4 = u * x0 + t * x1
    y4 = u * y0 + t * y1
    x5 = u * x1 + t * x2
    y5 = u * y1 + t * y2
    x6 = u * x2 + t * x3
    y6 = u * y2 + t * y3
    x7 = u * x4 + t * x5
    y7 = u * y4 + t * y5
    x8 = u * x5 + t * x6
    y8 = u * y5 + t * y6
    x9 = u * x7 + t * x8
    y9 = u * y7 + t * y8
    return (x0, y0, x4, y4, x7, y7, x9, y9), (x9, y9, x8, y8, x6, y6, x3, y3)


def get_part(v: Sequence[float], start: float, end: float) -> CurveValues:
    """Sub-curve between two curve-times; reversed when ``start > end``."""

    flip = start > end
    if flip:
        start, end = end, start
    part = tuple(v)
    if start > 0:
        part = subdivide(part, start)[1]
    if end < 1:
        part = subdivide(part, (end - start) / (1 - start))[0]
    if flip:
        return (part[6], part[7], part[4], part[5], part[2], part[3], part[0], part[1])
    return part  # type: ignore[return-value]


def get_mono_curves(v: Sequence[float], horizontal: bool = False) -> List[CurveValues]:
    """Split ``v`` into parts monotonic in y (or in x when ``horizontal``)."""

    io = 0 if horizontal else 1
    o0, o1, o2, o3 = v[io], v[io + 2], v[io + 4], v[io + 6]
    if ((o0 >= o1) == (o1 >= o2) and (o1 >= o2) == (o2 >= o3)) or is_straight(v):
        return [tuple(v)]  # type: ignore[list-item]
    a = 3 * (o1 - o2) - o0 + o3
    b = 2 * (o0 + o2) - 4 * o1
    c = o1 - o0
    t_min = numerical.CURVETIME_EPSILON
    roots = sorted(numerical.solve_quadratic(a, b, c, t_min, 1 - t_min))
    if not roots:
        return [tuple(v)]  # type: ignore[list-item]
    curves: List[CurveValues] = []
    t = roots[0]
    parts = subdivide(v, t)
    curves.append(parts[0])
    if len(roots) > 1:
        parts = subdivide(parts[1], (roots[1] - t) / (1 - t))
        curves.append(parts[0])
    curves.append(parts[1])
    return curves


def solve_cubic(
    v: Sequence[float],
    coord: int,
    value: float,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
) -> List[float]:
    """Curve-times where coordinate ``coord`` (0 = x, 1 = y) of ``v`` equals ``value``."""

    v0, v1, v2, v3 = v[coord], v[coord + 2], v[coord + 4], v[coord + 6]
    if (v0 < value and v3 < value and v1 < value and v2 < value) or (
        v0 > value and v3 > value and v1 > value and v2 > value
    ):
        return []
    c = 3 * (v1 - v0)
    b = 3 * (v2 - v1) - c
    a = v3 - v0 - c - b
    return numerical.solve_cubic(a, b, c, v0 - value, lower, upper)


def get_time_of(v: Sequence[float], point: PointLike) -> Optional[float]:
    """Curve-time of ``point`` on ``v``, or ``None`` when it is not on the curve."""

    point = Point.read(point)
    p0 = Point(v[0], v[1])
    p3 = Point(v[6], v[7])
    epsilon = numerical.EPSILON
    geom_epsilon = numerical.GEOMETRIC_EPSILON
    if point.is_close(p0, epsilon):
        return 0.0
    if point.is_close(p3, epsilon):
        return 1.0
    coords = (point.x, point.y)
    for c in range(2):
        for u in solve_cubic(v, c, coords[c], 0.0, 1.0):
            if point.is_close(get_point(v, u), geom_epsilon):
                return u
    if point.is_close(p0, geom_epsilon):
        return 0.0
    if point.is_close(p3, geom_epsilon):
        return 1.0
    return None


def get_nearest_time(v: Sequence[float], point: PointLike) -> float:
    point = Point.read(point)
    if is_straight(v):
        x0, y0, x3, y3 = v[0], v[1], v[6], v[7]
        vx = x3 - x0
        vy = y3 - y0
        det = vx * vx + vy * vy
        if det == 0:
            return 0.0
        u = ((point.x - x0) * vx + (point.y - y0) * vy) / det
        if u < numerical.EPSILON:
            return 0.0
        if u > 1 - numerical.EPSILON:
            return 1.0
        t = get_time_of(v, Point(x0 + u * vx, y0 + u * vy))
        return u if t is None else t

    count = 100
    min_dist = math.inf
    min_t = 0.0

    def refine(t: float) -> bool:
        nonlocal min_dist, min_t
        if 0 <= t <= 1:
            dist = point.get_distance(get_point(v, t), squared=True)
            if dist < min_dist:
                min_dist = dist
                min_t = t
                return True
        return False

    for i in range(count + 1):
        refine(i / count)
    step = 1 / (count * 2)
    while step > numerical.CURVETIME_EPSILON:
        if not refine(min_t - step) and not refine(min_t + step):
            step /= 2
    return min_t


def is_flat_enough(v: Sequence[float], flatness: float) -> bool:
    """True when ``v`` deviates from its chord by at most ``flatness``."""

    x0, y0, x1, y1, x2, y2, x3, y3 = v
    ux = 3 * x1 - 2 * x0 - x3
    uy = 3 * y1 - 2 * y0 - y3
    vx = 3 * x2 - 2 * x3 - x0
    vy = 3 * y2 - 2 * y3 - y0
    return max(ux * ux, vx * vx) + max(uy * uy, vy * vy) <= 16 * flatness * flatness


def get_area(v: Sequence[float]) -> float:
    """Signed area between the curve and its chord's origin (shoelace contribution)."""

    x0, y0, x1, y1, x2, y2, x3, y3 = v
    return (
        3
        * (
            (y3 - y0) * (x1 + x2)
            - (x3 - x0) * (y1 + y2)
            + y1 * (x0 - x2)
            - x1 * (y0 - y2)
            + y3 * (x2 + x0 / 3)
            - x3 * (y2 + y0 / 3)
        )
        / 20
    )


def get_bounds(v: Sequence[float]) -> "Rectangle":
    from .geometry import Rectangle

    lower = [v[0], v[1]]
    upper = [v[0], v[1]]
    for i in range(2):
        add_bounds(v[i], v[i + 2], v[i + 4], v[i + 6], i, 0.0, lower, upper)
    return Rectangle(lower[0], lower[1], upper[0] - lower[0], upper[1] - lower[1])


def _is_straight(
    p1x: float, p1y: float, h1x: float, h1y: float, h2x: float, h2y: float, p2x: float, p2y: float
) -> bool:
    if numerical.is_zero(h1x) and numerical.is_zero(h1y) and numerical.is_zero(h2x) and numerical.is_zero(h2y):
        return True
    vx = p2x - p1x
    vy = p2y - p1y
    if numerical.is_zero(vx) and numerical.is_zero(vy):
        return False
    if is_collinear(vx, vy, h1x, h1y) and is_collinear(vx, vy, h2x, h2y):
        epsilon = numerical.GEOMETRIC_EPSILON
        if (
            line_distance(p1x, p1y, vx, vy, p1x + h1x, p1y + h1y, True) < epsilon
            and line_distance(p1x, p1y, vx, vy, p2x + h2x, p2y + h2y, True) < epsilon
        ):
            # Handles on the chord: straight only if they stay within it.
            div = vx * vx + vy * vy
            s1 = (vx * h1x + vy * h1y) / div
            s2 = (vx * h2x + vy * h2y) / div
            return 0 <= s1 <= 1 and -1 <= s2 <= 0
    return False


def is_straight(v: Sequence[float]) -> bool:
    x0, y0, x3, y3 = v[0], v[1], v[6], v[7]
    return _is_straight(x0, y0, v[2] - x0, v[3] - y0, v[4] - x3, v[5] - y3, x3, y3)


def is_linear(v: Sequence[float]) -> bool:
    """True when the handles sit exactly at the thirds of the chord."""

    x0, y0, x3, y3 = v[0], v[1], v[6], v[7]
    third_x = (x3 - x0) / 3
    third_y = (y3 - y0) / 3
    return (
        v[2] - x0 == third_x
        and v[3] - y0 == third_y
        and -(v[4] - x3) == third_x
        and -(v[5] - y3) == third_y
    )


def _length_integrand(v: Sequence[float]) -> Callable[[float], float]:
    x0, y0, x1, y1, x2, y2, x3, y3 = v
    ax = 9 * (x1 - x2) + 3 * (x3 - x0)
    bx = 6 * (x0 + x2) - 12 * x1
    cx = 3 * (x1 - x0)
    ay = 9 * (y1 - y2) + 3 * (y3 - y0)
    by = 6 * (y0 + y2) - 12 * y1
    cy = 3 * (y1 - y0)

    def ds(t: float) -> float:
        dx = (ax * t + bx) * t + cx
        dy = (ay * t + by) * t + cy
        return math.sqrt(dx * dx + dy * dy)

    return ds


def _iterations(a: float, b: float) -> int:
    return max(2, min(16, math.ceil(abs(b - a) * 32)))


def get_length(
    v: Sequence[float],
    a: float = 0.0,
    b: float = 1.0,
    ds: Optional[Callable[[float], float]] = None,
) -> float:
    """Arc length of ``v`` between curve-times ``a`` and ``b``."""

    if is_straight(v):
        c = tuple(v)
        if b < 1:
            c = subdivide(c, b)[0]
            a = a / b if b else 0.0
        if a > 0:
            c = subdivide(c, a)[1]
        return math.hypot(c[6] - c[0], c[7] - c[1])
    return numerical.integrate(ds or _length_integrand(v), a, b, _iterations(a, b))


def get_time_at(v: Sequence[float], offset: float, start: Optional[float] = None) -> Optional[float]:
    """Curve-time reached by travelling ``offset`` along ``v`` from ``start``.

    Negative offsets travel backwards (``start`` defaults to 1 then). Returns
    ``None`` when the offset exceeds the remaining length.
    """

    if start is None:
        start = 1.0 if offset < 0 else 0.0
    if offset == 0:
        return start
    epsilon = numerical.EPSILON
    forward = offset > 0
    a = start if forward else 0.0
    b = 1.0 if forward else start
    ds = _length_integrand(v)
    range_length = get_length(v, a, b, ds)
    diff = abs(offset) - range_length
    if abs(diff) < epsilon:
        return b if forward else a
    if diff > epsilon:
        return None

    guess = offset / range_length
    length = 0.0
    position = start

    def f(t: float) -> float:
        nonlocal length, position
        length += numerical.integrate(ds, position, t, _iterations(position, t))
        position = t
        return length - offset

    return numerical.find_root(f, ds, start + guess, a, b, 32, numerical.EPSILON)


def evaluate(
    v: Sequence[float], t: Optional[float], kind: EvaluationKind = "point", normalized: bool = False
) -> Optional[Point]:
    """Point, tangent, normal or curvature of ``v`` at ``t``.

    Curvature is returned in the ``x`` component. Returns ``None`` for times
    outside ``[0, 1]``.
    """

    if t is None or t < 0 or t > 1:
        return None
    code = _KIND_CODES[kind]
    x0, y0, x1, y1, x2, y2, x3, y3 = v
    is_zero = numerical.is_zero
    if is_zero(x1 - x0) and is_zero(y1 - y0):
        x1, y1 = x0, y0
    if is_zero(x2 - x3) and is_zero(y2 - y3):
        x2, y2 = x3, y3
    cx = 3 * (x1 - x0)
    bx = 3 * (x2 - x1) - cx
    ax = x3 - x0 - cx - bx
    cy = 3 * (y1 - y0)
    by = 3 * (y2 - y1) - cy
    ay = y3 - y0 - cy - by
    if code == 0:
        x = x0 if t == 0 else x3 if t == 1 else ((ax * t + bx) * t + cx) * t + x0
        y = y0 if t == 0 else y3 if t == 1 else ((ay * t + by) * t + cy) * t + y0
        return Point(x, y)

    t_min = numerical.CURVETIME_EPSILON
    t_max = 1 - t_min
    if t < t_min:
        x, y = cx, cy
    elif t > t_max:
        x, y = 3 * (x3 - x2), 3 * (y3 - y2)
    else:
        x = (3 * ax * t + 2 * bx) * t + cx
        y = (3 * ay * t + 2 * by) * t + cy
    if normalized:
        if x == 0 and y == 0 and (t < t_min or t > t_max):
            # Both handles collapsed at this end: use the direction between them.
            x, y = x2 - x1, y2 - y1
        length = math.sqrt(x * x + y * y)
        if length:
            x /= length
            y /= length
    if code == 3:
        ddx = 6 * ax * t + 2 * bx
        ddy = 6 * ay * t + 2 * by
        d = math.pow(x * x + y * y, 1.5)
        x = (x * ddy - y * ddx) / d if d != 0 else 0.0
        y = 0.0
    if code == 2:
        return Point(y, -x)
    return Point(x, y)


def get_point(v: Sequence[float], t: Optional[float]) -> Optional[Point]:
    return evaluate(v, t, "point", False)


def get_tangent(v: Sequence[float], t: Optional[float]) -> Optional[Point]:
    return evaluate(v, t, "tangent", True)


def get_weighted_tangent(v: Sequence[float], t: Optional[float]) -> Optional[Point]:
    return evaluate(v, t, "tangent", False)


def get_normal(v: Sequence[float], t: Optional[float]) -> Optional[Point]:
    return evaluate(v, t, "normal", True)


def get_weighted_normal(v: Sequence[float], t: Optional[float]) -> Optional[Point]:
    return evaluate(v, t, "normal", False)


def get_curvature(v: Sequence[float], t: Optional[float]) -> Optional[float]:
    result = evaluate(v, t, "curvature", False)
    return result.x if result is not None else None


def classify(v: Sequence[float]) -> CurveClassification:
    """Classify the inflection structure of ``v`` (Loop & Blinn discriminants)."""

    x0, y0, x1, y1, x2, y2, x3, y3 = v
    a1 = x0 * (y3 - y2) + y0 * (x2 - x3) + x3 * y2 - y3 * x2
    a2 = x1 * (y0 - y3) + y1 * (x3 - x0) + x0 * y3 - y0 * x3
    a3 = x2 * (y1 - y0) + y2 * (x0 - x1) + x1 * y0 - y1 * x0
    d3 = 3 * a3
    d2 = d3 - a2
    d1 = d2 - a2 + a1
    length = math.sqrt(d1 * d1 + d2 * d2 + d3 * d3)
    scale = 1 / length if length != 0 else 0.0
    d1 *= scale
    d2 *= scale
    d3 *= scale
    is_zero = numerical.is_zero

    def result(kind: str, t1: Optional[float] = None, t2: Optional[float] = None) -> CurveClassification:
        has_roots = t1 is not None
        t1_ok = has_roots and 0 < t1 < 1  # type: ignore[operator]
        t2_ok = has_roots and t2 is not None and 0 < t2 < 1
        if has_roots and (not (t1_ok or t2_ok) or (kind == "loop" and not (t1_ok and t2_ok))):
            kind = "arch"
            t1_ok = t2_ok = False
        if t1_ok and t2_ok:
            roots: Optional[Tuple[float, ...]] = tuple(sorted((t1, t2)))  # type: ignore[arg-type]
        elif t1_ok:
            roots = (t1,)  # type: ignore[assignment]
        elif t2_ok:
            roots = (t2,)  # type: ignore[assignment]
        else:
            roots = None
        return CurveClassification(kind, roots)

    if is_zero(d1):
        if is_zero(d2):
            return result("line" if is_zero(d3) else "quadratic")
        return result("serpentine", d3 / (3 * d2))
    d = 3 * d2 * d2 - 4 * d1 * d3
    if is_zero(d):
        return result("cusp", d2 / (2 * d1))
    f1 = math.sqrt(d / 3) if d > 0 else math.sqrt(-d)
    f2 = 2 * d1
    return result("serpentine" if d > 0 else "loop", (d2 + f1) / f2, (d2 - f1) / f2)


def get_peaks(v: Sequence[float]) -> List[float]:
    """Curve-times of maximum curvature magnitude (tangent ⟂ second derivative)."""

    x0, y0, x1, y1, x2, y2, x3, y3 = v
    ax = -x0 + 3 * x1 - 3 * x2 + x3
    bx = 3 * x0 - 6 * x1 + 3 * x2
    cx = -3 * x0 + 3 * x1
    ay = -y0 + 3 * y1 - 3 * y2 + y3
    by = 3 * y0 - 6 * y1 + 3 * y2
    cy = -3 * y0 + 3 * y1
    t_min = numerical.CURVETIME_EPSILON
    roots = numerical.solve_cubic(
        9 * (ax * ax + ay * ay),
        9 * (ax * bx + by * ay),
        2 * (bx * bx + by * by) + 3 * (cx * ax + cy * ay),
        cx * bx + by * cy,
        t_min,
        1 - t_min,
    )
    return sorted(roots)


def get_times_with_tangent(v: Sequence[float], tangent: PointLike) -> List[float]:
    """Curve-times where the tangent of ``v`` is parallel to ``tangent``."""

    x0, y0, x1, y1, x2, y2, x3, y3 = v
    normalized = Point.read(tangent).normalize()
    tx, ty = normalized.x, normalized.y
    ax = 3 * x3 - 9 * x2 + 9 * x1 - 3 * x0
    ay = 3 * y3 - 9 * y2 + 9 * y1 - 3 * y0
    bx = 6 * x2 - 12 * x1 + 6 * x0
    by = 6 * y2 - 12 * y1 + 6 * y0
    cx = 3 * x1 - 3 * x0
    cy = 3 * y1 - 3 * y0
    den = 2 * ax * ty - 2 * ay * tx
    times: List[float] = []
    if abs(den) < numerical.CURVETIME_EPSILON:
        num = ax * cy - ay * cx
        den = ax * by - ay * bx
        if den != 0:
            t = -num / den
            if 0 <= t <= 1:
                times.append(t)
    else:
        delta = (
            (bx * bx - 4 * ax * cx) * ty * ty
            + (-2 * bx * by + 4 * ay * cx + 4 * ax * cy) * tx * ty
            + (by * by - 4 * ay * cy) * tx * tx
        )
        k = bx * ty - by * tx
        if delta >= 0 and den != 0:
            d = math.sqrt(delta)
            t0 = -(k + d) / den
            t1 = (-k + d) / den
            if 0 <= t0 <= 1:
                times.append(t0)
            if 0 <= t1 <= 1:
                times.append(t1)
    return times


class Curve:
    """View of two consecutive segments as one cubic Bezier curve.

    Curves of a path are created and patched by the path itself; the view
    never owns its segments. Free curves (``path is None``) own private
    segments created by the factories below.
    """

    def __init__(
        self,
        segment1: Optional[Segment] = None,
        segment2: Optional[Segment] = None,
        path: Optional["Path"] = None,
    ) -> None:
        self._path = path
        self._segment1 = segment1 if segment1 is not None else Segment()
        self._segment2 = segment2 if segment2 is not None else Segment()
        self._length: Optional[float] = None
        self._bounds: Optional[dict] = None

    @classmethod
    def from_points(
        cls,
        point1: PointLike,
        handle1: Optional[PointLike],
        handle2: Optional[PointLike],
        point2: PointLike,
    ) -> "Curve":
        """Free curve from anchors and handles relative to their anchors."""

        return cls(Segment(point1, None, handle1), Segment(point2, handle2, None))

    @classmethod
    def from_values(cls, values: Sequence[float]) -> "Curve":
        """Free curve from 8 absolute coordinates."""

        if len(values) != 8:
            raise ValueError(f"curve values need 8 coordinates, got {len(values)}")
        x0, y0, x1, y1, x2, y2, x3, y3 = (float(value) for value in values)
        return cls.from_points((x0, y0), (x1 - x0, y1 - y0), (x2 - x3, y2 - y3), (x3, y3))

    def __repr__(self) -> str:
        return f"Curve({self._segment1!r}, {self._segment2!r})"

    def _changed(self) -> None:
        self._length = None
        self._bounds = None

    # Segments, anchors and handles

    @property
    def segment1(self) -> Segment:
        return self._segment1

    @property
    def segment2(self) -> Segment:
        return self._segment2

    @property
    def path(self) -> Optional["Path"]:
        return self._path

    @property
    def index(self) -> Optional[int]:
        return self._segment1.index

    @property
    def point1(self) -> Point:
        return self._segment1.point

    @point1.setter
    def point1(self, value: PointLike) -> None:
        self._segment1.point = value

    @property
    def point2(self) -> Point:
        return self._segment2.point

    @point2.setter
    def point2(self, value: PointLike) -> None:
        self._segment2.point = value

    @property
    def handle1(self) -> Point:
        return self._segment1.handle_out

    @handle1.setter
    def handle1(self, value: PointLike) -> None:
        self._segment1.handle_out = value

    @property
    def handle2(self) -> Point:
        return self._segment2.handle_in

    @handle2.setter
    def handle2(self, value: PointLike) -> None:
        self._segment2.handle_in = value

    @property
    def next(self) -> Optional["Curve"]:
        path = self._path
        index = self._segment1.index
        if path is None or index is None:
            return None
        curves = path._get_curves()
        if index + 1 < len(curves):
            return curves[index + 1]
        return curves[0] if path._closed and curves else None

    @property
    def previous(self) -> Optional["Curve"]:
        path = self._path
        index = self._segment1.index
        if path is None or index is None:
            return None
        curves = path._get_curves()
        if index > 0:
            return curves[index - 1]
        return curves[-1] if path._closed and curves else None

    def is_first(self) -> bool:
        return not self._segment1.index

    def is_last(self) -> bool:
        path = self._path
        return path is not None and self._segment1.index == len(path._get_curves()) - 1

    # Geometry

    @property
    def values(self) -> CurveValues:
        return get_values(self._segment1, self._segment2)

    def get_values(self, matrix: Optional[Matrix] = None) -> CurveValues:
        return get_values(self._segment1, self._segment2, matrix)

    @property
    def points(self) -> List[Point]:
        v = self.values
        return [Point(v[i], v[i + 1]) for i in range(0, 8, 2)]

    @property
    def length(self) -> float:
        if self._length is None:
            self._length = get_length(self.values, 0.0, 1.0)
        return self._length

    @property
    def area(self) -> float:
        return get_area(self.values)

    @property
    def line(self) -> Line:
        return Line(self._segment1.point, self._segment2.point)

    def get_part(self, start: float, end: float) -> "Curve":
        return Curve.from_values(get_part(self.values, start, end))

    def get_part_length(self, start: float, end: float) -> float:
        return get_length(self.values, start, end)

    def subdivide(self, t: float = 0.5) -> Tuple[CurveValues, CurveValues]:
        return subdivide(self.values, t)

    def classify(self) -> CurveClassification:
        return classify(self.values)

    def get_peaks(self) -> List[float]:
        return get_peaks(self.values)

    def get_mono_curves(self, horizontal: bool = False) -> List[CurveValues]:
        return get_mono_curves(self.values, horizontal)

    def _cached_bounds(self, key: str, compute: Callable[[], "Rectangle"]) -> "Rectangle":
        if self._bounds is None:
            self._bounds = {}
        bounds = self._bounds.get(key)
        if bounds is None:
            bounds = self._bounds[key] = compute()
        return bounds

    @property
    def bounds(self) -> "Rectangle":
        return self._cached_bounds(
            "bounds", lambda: get_segments_bounds([self._segment1, self._segment2], False)
        )

    def get_stroke_bounds(self) -> "Rectangle":
        style = self._path.style if self._path is not None else None
        return self._cached_bounds(
            "stroke", lambda: get_stroke_bounds([self._segment1, self._segment2], False, style)
        )

    def get_handle_bounds(self) -> "Rectangle":
        return self._cached_bounds(
            "handle", lambda: get_handle_bounds([self._segment1, self._segment2])
        )

    def has_handles(self) -> bool:
        return not self._segment1.handle_out.is_zero() or not self._segment2.handle_in.is_zero()

    def has_length(self, epsilon: float = 0.0) -> bool:
        return (self.point1 != self.point2 or self.has_handles()) and self.length > epsilon

    def is_straight(self) -> bool:
        return is_straight(self.values)

    def is_linear(self) -> bool:
        return is_linear(self.values)

    def is_collinear(self, curve: Optional["Curve"]) -> bool:
        return (
            curve is not None
            and self.is_straight()
            and curve.is_straight()
            and self.line.is_collinear(curve.line)
        )

    def is_horizontal(self) -> bool:
        return self.is_straight() and abs(self.get_tangent_at_time(0.5).y) < numerical.TRIGONOMETRIC_EPSILON

    def is_vertical(self) -> bool:
        return self.is_straight() and abs(self.get_tangent_at_time(0.5).x) < numerical.TRIGONOMETRIC_EPSILON

    # Offsets, times and locations

    def get_time_at(self, offset: float, start: Optional[float] = None) -> Optional[float]:
        return get_time_at(self.values, offset, start)

    def get_time_of(self, point: PointLike) -> Optional[float]:
        return get_time_of(self.values, point)

    def get_times_with_tangent(self, tangent: PointLike) -> List[float]:
        tangent = Point.read(tangent)
        return [] if tangent.is_zero() else get_times_with_tangent(self.values, tangent)

    def get_offset_at_time(self, t: float) -> float:
        return self.get_part_length(0.0, t)

    def get_location_at_time(self, t: Optional[float]) -> Optional["CurveLocation"]:
        from .location import CurveLocation

        if t is None or t < 0 or t > 1:
            return None
        return CurveLocation(self, t)

    def get_location_at(self, offset: float) -> Optional["CurveLocation"]:
        return self.get_location_at_time(self.get_time_at(offset))

    def get_location_of(self, point: PointLike) -> Optional["CurveLocation"]:
        return self.get_location_at_time(self.get_time_of(point))

    def get_offset_of(self, point: PointLike) -> Optional[float]:
        location = self.get_location_of(point)
        return location.offset if location is not None else None

    def get_nearest_location(self, point: PointLike) -> "CurveLocation":
        from .location import CurveLocation

        point = Point.read(point)
        values = self.values
        t = get_nearest_time(values, point)
        nearest = get_point(values, t)
        return CurveLocation(self, t, nearest, distance=point.get_distance(nearest))

    def get_nearest_point(self, point: PointLike) -> Point:
        return self.get_nearest_location(point).point

    def _time_for(self, offset: float) -> Optional[float]:
        return get_time_at(self.values, offset)

    def get_point_at(self, offset: float) -> Optional[Point]:
        return get_point(self.values, self._time_for(offset))

    def get_tangent_at(self, offset: float) -> Optional[Point]:
        return get_tangent(self.values, self._time_for(offset))

    def get_normal_at(self, offset: float) -> Optional[Point]:
        return get_normal(self.values, self._time_for(offset))

    def get_weighted_tangent_at(self, offset: float) -> Optional[Point]:
        return get_weighted_tangent(self.values, self._time_for(offset))

    def get_weighted_normal_at(self, offset: float) -> Optional[Point]:
        return get_weighted_normal(self.values, self._time_for(offset))

    def get_curvature_at(self, offset: float) -> Optional[float]:
        return get_curvature(self.values, self._time_for(offset))

    def get_point_at_time(self, t: float) -> Optional[Point]:
        return get_point(self.values, t)

    def get_tangent_at_time(self, t: float) -> Optional[Point]:
        return get_tangent(self.values, t)

    def get_normal_at_time(self, t: float) -> Optional[Point]:
        return get_normal(self.values, t)

    def get_weighted_tangent_at_time(self, t: float) -> Optional[Point]:
        return get_weighted_tangent(self.values, t)

    def get_weighted_normal_at_time(self, t: float) -> Optional[Point]:
        return get_weighted_normal(self.values, t)

    def get_curvature_at_time(self, t: float) -> Optional[float]:
        return get_curvature(self.values, t)

    # Mutation

    def divide_at_time(self, t: float, set_handles: bool = False) -> Optional["Curve"]:
        """Insert a segment at ``t`` and return the curve that starts at it.

        Returns ``None`` when ``t`` is too close to either end to produce a
        useful segment.
        """

        t_min = numerical.CURVETIME_EPSILON
        if not t_min <= t <= 1 - t_min:
            return None
        left, right = subdivide(self.values, t)
        set_handles = set_handles or self.has_handles()
        seg1 = self._segment1
        seg2 = self._segment2
        if set_handles:
            seg1.handle_out = (left[2] - left[0], left[3] - left[1])
            seg2.handle_in = (right[4] - right[6], right[5] - right[7])
        x, y = left[6], left[7]
        segment = Segment(
            (x, y),
            (left[4] - x, left[5] - y) if set_handles else None,
            (right[2] - x, right[3] - y) if set_handles else None,
        )
        path = self._path
        if path is not None:
            path.insert(seg1.index + 1, segment)
            return self.next
        self._segment2 = segment
        self._changed()
        return Curve(segment, seg2)

    def divide_at(self, location: Union[float, "CurveLocation"]) -> Optional["Curve"]:
        from .location import CurveLocation

        if isinstance(location, CurveLocation):
            # A location on another curve has no time on this one.
            t = location.time if location.curve is self else None
        else:
            t = self.get_time_at(float(location))
        return self.divide_at_time(t) if t is not None else None

    def split_at(self, location: Union[float, "CurveLocation"]) -> Optional["Path"]:
        path = self._path
        return path.split_at(location) if path is not None else None

    def split_at_time(self, t: float) -> Optional["Path"]:
        location = self.get_location_at_time(t)
        return self.split_at(location) if location is not None else None

    def reversed(self) -> "Curve":
        return Curve(self._segment2.reversed(), self._segment1.reversed())

    def clear_handles(self) -> None:
        self._segment1.handle_out = Point()
        self._segment2.handle_in = Point()

    def remove(self) -> bool:
        """Remove ``segment2`` from the path, keeping its outgoing handle on ``segment1``."""

        if self._path is None:
            return False
        segment2 = self._segment2
        handle_out = segment2.handle_out
        removed = segment2.remove()
        if removed:
            self._segment1.handle_out = handle_out
        return removed

    def get_intersections(self, curve: Optional["Curve"] = None) -> List["CurveLocation"]:
        """Intersections with ``curve``, or the self-intersection when omitted."""

        from .intersections import get_curve_intersections, get_self_intersection

        v1 = self.values
        if curve is None or curve is self:
            return get_self_intersection(v1, self, [])
        return get_curve_intersections(v1, curve.values, self, curve, [])


__all__ = [
    "Curve",
    "CurveClassification",
    "classify",
    "evaluate",
    "get_area",
    "get_bounds",
    "get_curvature",
    "get_length",
    "get_mono_curves",
    "get_nearest_time",
    "get_normal",
    "get_part",
    "get_peaks",
    "get_point",
    "get_tangent",
    "get_time_at",
    "get_time_of",
    "get_times_with_tangent",
    "get_values",
    "get_weighted_normal",
    "get_weighted_tangent",
    "is_flat_enough",
    "is_linear",
    "is_straight",
    "solve_cubic",
    "subdivide",
]
