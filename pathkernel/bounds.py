"""Bounding boxes of segment lists, with optional stroke padding."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Tuple

from . import numerical
from .geometry import Line, Matrix, Point, Rectangle
from .types import StrokeStyle

if TYPE_CHECKING:  # pragma: no cover
    from .segment import Segment


def add_bounds(
    v0: float,
    v1: float,
    v2: float,
    v3: float,
    coord: int,
    padding: float,
    lower: List[float],
    upper: List[float],
) -> None:
    """Grow ``lower``/``upper`` along ``coord`` to include the curve ``v0..v3``.

    Only the end point ``v3`` and interior extrema are added; the start point
    is expected to be included by the caller already.
    """

    def add(value: float, pad: float) -> None:
        left = value - pad
        right = value + pad
        if left < lower[coord]:
            lower[coord] = left
        if right > upper[coord]:
            upper[coord] = right

    padding /= 2
    min_pad = lower[coord] + padding
    max_pad = upper[coord] - padding
    if not (
        v0 < min_pad
        or v1 < min_pad
        or v2 < min_pad
        or v3 < min_pad
        or v0 > max_pad
        or v1 > max_pad
        or v2 > max_pad
        or v3 > max_pad
    ):
        return
    if (v1 < v0) != (v1 < v3) and (v2 < v0) != (v2 < v3):
        # Both handles lie between the end points: no interior extrema.
        add(v0, 0.0)
        add(v3, 0.0)
        return
    a = 3 * (v1 - v2) - v0 + v3
    b = 2 * (v0 + v2) - 4 * v1
    c = v1 - v0
    t_min = numerical.CURVETIME_EPSILON
    t_max = 1 - t_min
    add(v3, 0.0)
    for t in numerical.solve_quadratic(a, b, c):
        if t_min <= t <= t_max:
            u = 1 - t
            add(u * u * u * v0 + 3 * u * u * t * v1 + 3 * u * t * t * v2 + t * t * t * v3, padding)


def get_segments_bounds(
    segments: Sequence["Segment"],
    closed: bool,
    matrix: Optional[Matrix] = None,
    stroke_padding: Optional[Tuple[float, float]] = None,
) -> Rectangle:
    if not segments:
        return Rectangle()
    prev = segments[0]._transform_coordinates(matrix)
    lower = prev[0:2]
    upper = list(lower)

    def process(segment: "Segment") -> None:
        nonlocal prev
        coords = segment._transform_coordinates(matrix)
        for i in range(2):
            add_bounds(
                prev[i],
                prev[i + 4],
                coords[i + 2],
                coords[i],
                i,
                stroke_padding[i] if stroke_padding else 0.0,
                lower,
                upper,
            )
        prev = coords

    for segment in segments[1:]:
        process(segment)
    if closed:
        process(segments[0])
    return Rectangle(lower[0], lower[1], upper[0] - lower[0], upper[1] - lower[1])


def get_stroke_padding(radius: float, matrix: Optional[Matrix] = None) -> Tuple[float, float]:
    """Axis-aligned half extents of a stroke circle of ``radius`` under ``matrix``."""

    if matrix is None:
        return radius, radius
    hor = matrix.transform_vector(Point(radius, 0))
    ver = matrix.transform_vector(Point(0, radius))
    phi = hor.angle_in_radians
    a = hor.length
    b = ver.length
    sin = math.sin(phi)
    cos = math.cos(phi)
    tan = math.tan(phi)
    tx = math.atan2(b * tan, a)
    ty = math.atan2(b, tan * a)
    return (
        abs(a * math.cos(tx) * cos + b * math.sin(tx) * sin),
        abs(b * math.sin(ty) * cos + a * math.cos(ty) * sin),
    )


def _transform_vector(vector: Point, matrix: Optional[Matrix]) -> Point:
    return matrix.transform_vector(vector) if matrix is not None else vector


def add_bevel_join(
    segment: "Segment",
    join: str,
    radius: float,
    miter_limit: float,
    matrix: Optional[Matrix],
    add_point: Callable[[Point], None],
) -> None:
    curve2 = segment.curve
    curve1 = curve2.previous if curve2 is not None else None
    if curve2 is None or curve1 is None:
        return
    point = curve2.point1.transform(matrix)
    normal1 = _transform_vector(curve1.get_normal_at_time(1.0) * radius, matrix)
    normal2 = _transform_vector(curve2.get_normal_at_time(0.0) * radius, matrix)
    angle = normal1.get_directed_angle(normal2)
    if angle < 0 or angle >= 180:
        normal1 = -normal1
        normal2 = -normal2
    add_point(point + normal1)
    if join == "miter":
        corner = Line(point + normal1, Point(-normal1.y, normal1.x), True).intersect(
            Line(point + normal2, Point(-normal2.y, normal2.x), True), True
        )
        if corner is not None and point.get_distance(corner) <= miter_limit * radius:
            add_point(corner)
    add_point(point + normal2)


def add_square_cap(
    segment: "Segment",
    cap: str,
    radius: float,
    matrix: Optional[Matrix],
    add_point: Callable[[Point], None],
) -> None:
    location = segment.location
    if location is None:
        return
    point = segment.point.transform(matrix)
    normal = _transform_vector(location.normal * (radius if location.time == 0 else -radius), matrix)
    if cap == "square":
        point = point + normal.rotate(-90)
    add_point(point + normal)
    add_point(point - normal)


def get_stroke_bounds(
    segments: Sequence["Segment"],
    closed: bool,
    style: Optional[StrokeStyle],
    matrix: Optional[Matrix] = None,
) -> Rectangle:
    if style is None or not style.has_stroke():
        return get_segments_bounds(segments, closed, matrix)
    radius = style.width / 2
    padding = get_stroke_padding(radius, matrix)
    bounds = get_segments_bounds(segments, closed, matrix, padding)
    join_box = Rectangle(0.0, 0.0, padding[0] * 2, padding[1] * 2)

    def add_point(point: Point) -> None:
        nonlocal bounds
        bounds = bounds.include(point)

    def add_round(segment: "Segment") -> None:
        nonlocal bounds
        bounds = bounds.unite(join_box.with_center(segment.point.transform(matrix)))

    def add_join(segment: "Segment") -> None:
        if style.join == "round" or segment.is_smooth():
            add_round(segment)
        else:
            add_bevel_join(segment, style.join, radius, style.miter_limit, matrix, add_point)

    def add_cap(segment: "Segment") -> None:
        if style.cap == "round":
            add_round(segment)
        else:
            add_square_cap(segment, style.cap, radius, matrix, add_point)

    count = len(segments) - (0 if closed else 1)
    if count > 0:
        for segment in segments[1:count]:
            add_join(segment)
        if closed:
            add_join(segments[0])
        else:
            add_cap(segments[0])
            add_cap(segments[-1])
    return bounds


def get_handle_bounds(
    segments: Sequence["Segment"],
    style: Optional[StrokeStyle] = None,
    matrix: Optional[Matrix] = None,
    stroke: bool = False,
) -> Rectangle:
    """Bounds of all anchors and handles, padded for the stroke when ``stroke`` is set."""

    stroke_padding: Optional[Tuple[float, float]] = None
    join_padding: Optional[Tuple[float, float]] = None
    if stroke and style is not None and style.has_stroke():
        stroke_radius = style.width / 2
        join_radius = stroke_radius
        if style.join == "miter":
            join_radius = stroke_radius * style.miter_limit
        if style.cap == "square":
            join_radius = max(join_radius, stroke_radius * math.sqrt(2))
        stroke_padding = get_stroke_padding(stroke_radius, matrix)
        join_padding = get_stroke_padding(join_radius, matrix)
    x1 = y1 = math.inf
    x2 = y2 = -math.inf
    for segment in segments:
        coords = segment._transform_coordinates(matrix)
        for j in range(0, 6, 2):
            padding = join_padding if j == 0 else stroke_padding
            pad_x, pad_y = padding if padding else (0.0, 0.0)
            x = coords[j]
            y = coords[j + 1]
            x1 = min(x1, x - pad_x)
            x2 = max(x2, x + pad_x)
            y1 = min(y1, y - pad_y)
            y2 = max(y2, y + pad_y)
    if not segments:
        return Rectangle()
    return Rectangle(x1, y1, x2 - x1, y2 - y1)


__all__ = [
    "add_bounds",
    "get_handle_bounds",
    "get_segments_bounds",
    "get_stroke_bounds",
    "get_stroke_padding",
]
