"""Curve/curve intersection search.

Pairs of curves are dispatched by shape: overlapping (collinear or
coincident) pairs report the ends of the shared range, straight pairs use a
closed-form line intersection, straight/curved pairs solve a cubic in a
rotated frame and curved pairs go through Bezier fat-line clipping.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional, Sequence, Tuple

from . import numerical
from .collision import find_curve_bounds_collisions
from .config import IntersectionConfig, get_intersection_config
from .curve import Curve, classify, get_part, get_point, get_time_of, is_straight, solve_cubic, subdivide
from .geometry import Matrix, Point, line_distance, line_intersect, line_signed_distance
from .location import CurveLocation
from .logging_utils import apply_debug_logging

logger = logging.getLogger(__name__)

IncludePredicate = Callable[[CurveLocation], bool]
Hull = List[Tuple[float, float]]


def add_location(
    locations: List[CurveLocation],
    include: Optional[IncludePredicate],
    c1: Curve,
    t1: Optional[float],
    c2: Curve,
    t2: Optional[float],
    overlap: bool = False,
) -> None:
    """Record the linked pair ``(c1, t1)``/``(c2, t2)`` unless it is a shared joint."""

    exclude_start = not overlap and c1.previous is c2
    exclude_end = not overlap and c1 is not c2 and c1.next is c2
    t_min = numerical.CURVETIME_EPSILON
    t_max = 1 - t_min
    if t1 is None or not (t_min if exclude_start else 0) <= t1 <= (t_max if exclude_end else 1):
        return
    if t2 is None or not (t_min if exclude_end else 0) <= t2 <= (t_max if exclude_start else 1):
        return
    loc1 = CurveLocation(c1, t1, None, overlap)
    loc2 = CurveLocation(c2, t2, None, overlap)
    loc1.intersection = loc2
    loc2.intersection = loc1
    if include is None or include(loc1):
        CurveLocation.insert(locations, loc1, True)


def get_convex_hull(dq0: float, dq1: float, dq2: float, dq3: float) -> Tuple[Hull, Hull]:
    """Top and bottom of the convex hull of the distance curve ``(i/3, dq_i)``."""

    p0 = (0.0, dq0)
    p1 = (1 / 3, dq1)
    p2 = (2 / 3, dq2)
    p3 = (1.0, dq3)
    dist1 = dq1 - (2 * dq0 + dq3) / 3
    dist2 = dq2 - (dq0 + 2 * dq3) / 3
    if dist1 * dist2 < 0:
        # p1 and p2 on opposite sides of the chord.
        hull = ([p0, p1, p3], [p0, p2, p3])
    else:
        ratio = dist1 / dist2 if dist2 else math.copysign(math.inf, dist1) if dist1 else math.nan
        if ratio >= 2:
            top = [p0, p1, p3]
        elif ratio <= 0.5:
            top = [p0, p2, p3]
        else:
            top = [p0, p1, p2, p3]
        hull = (top, [p0, p3])
    if (dist1 or dist2) < 0:
        return hull[1], hull[0]
    return hull


def clip_convex_hull_part(part: Hull, top: bool, threshold: float) -> Optional[float]:
    px, py = part[0]
    for qx, qy in part[1:]:
        if (qy >= threshold) if top else (qy <= threshold):
            if qy == threshold:
                return qx
            return px + (threshold - py) * (qx - px) / (qy - py)
        px, py = qx, qy
    return None


def clip_convex_hull(top: Hull, bottom: Hull, d_min: float, d_max: float) -> Optional[float]:
    if top[0][1] < d_min:
        return clip_convex_hull_part(top, True, d_min)
    if bottom[0][1] > d_max:
        return clip_convex_hull_part(bottom, False, d_max)
    return top[0][0]


def add_curve_intersections(
    v1: Sequence[float],
    v2: Sequence[float],
    c1: Curve,
    c2: Curve,
    locations: List[CurveLocation],
    include: Optional[IncludePredicate],
    flip: bool,
    recursion: int,
    calls: int,
    t_min: float,
    t_max: float,
    u_min: float,
    u_max: float,
    config: IntersectionConfig,
) -> int:
    """Fat-line clipping of ``v1`` against ``v2``; returns the updated call count.

    ``[t_min, t_max]`` and ``[u_min, u_max]`` are the ranges of the original
    curves that ``v1`` and ``v2`` currently represent. The roles of the two
    curves swap on every level.
    """

    calls += 1
    recursion += 1
    if calls >= config.max_calls or recursion >= config.max_recursion:
        logger.debug(
            "Fat-line clipping budget exhausted (calls=%d, recursion=%d)", calls, recursion
        )
        return calls

    epsilon = config.fat_line_epsilon
    q0x, q0y, q3x, q3y = v2[0], v2[1], v2[6], v2[7]
    d1 = line_signed_distance(q0x, q0y, q3x, q3y, v2[2], v2[3])
    d2 = line_signed_distance(q0x, q0y, q3x, q3y, v2[4], v2[5])
    factor = 3 / 4 if d1 * d2 > 0 else 4 / 9
    d_min = factor * min(0.0, d1, d2)
    d_max = factor * max(0.0, d1, d2)
    dp0 = line_signed_distance(q0x, q0y, q3x, q3y, v1[0], v1[1])
    dp1 = line_signed_distance(q0x, q0y, q3x, q3y, v1[2], v1[3])
    dp2 = line_signed_distance(q0x, q0y, q3x, q3y, v1[4], v1[5])
    dp3 = line_signed_distance(q0x, q0y, q3x, q3y, v1[6], v1[7])

    if d1 == 0 and d2 == 0 and dp0 == 0 and dp1 == 0 and dp2 == 0 and dp3 == 0:
        return calls
    top, bottom = get_convex_hull(dp0, dp1, dp2, dp3)
    t_min_clip = clip_convex_hull(top, bottom, d_min, d_max)
    if t_min_clip is None:
        return calls
    t_max_clip = clip_convex_hull(top[::-1], bottom[::-1], d_min, d_max)
    if t_max_clip is None:
        return calls

    t_min_new = t_min + (t_max - t_min) * t_min_clip
    t_max_new = t_min + (t_max - t_min) * t_max_clip
    if max(u_max - u_min, t_max_new - t_min_new) < epsilon:
        t = (t_min_new + t_max_new) / 2
        u = (u_min + u_max) / 2
        add_location(
            locations,
            include,
            c2 if flip else c1,
            u if flip else t,
            c1 if flip else c2,
            t if flip else u,
        )
        return calls

    v1 = get_part(v1, t_min_clip, t_max_clip)
    u_diff = u_max - u_min
    if t_max_clip - t_min_clip > config.clip_shrink_threshold:
        # Clipping made too little progress: subdivide the longer range.
        if t_max_new - t_min_new > u_diff:
            first, second = subdivide(v1, 0.5)
            t = (t_min_new + t_max_new) / 2
            calls = add_curve_intersections(
                v2, first, c2, c1, locations, include, not flip,
                recursion, calls, u_min, u_max, t_min_new, t, config,
            )
            calls = add_curve_intersections(
                v2, second, c2, c1, locations, include, not flip,
                recursion, calls, u_min, u_max, t, t_max_new, config,
            )
        else:
            first, second = subdivide(v2, 0.5)
            u = (u_min + u_max) / 2
            calls = add_curve_intersections(
                first, v1, c2, c1, locations, include, not flip,
                recursion, calls, u_min, u, t_min_new, t_max_new, config,
            )
            calls = add_curve_intersections(
                second, v1, c2, c1, locations, include, not flip,
                recursion, calls, u, u_max, t_min_new, t_max_new, config,
            )
    elif u_diff == 0 or u_diff >= epsilon:
        calls = add_curve_intersections(
            v2, v1, c2, c1, locations, include, not flip,
            recursion, calls, u_min, u_max, t_min_new, t_max_new, config,
        )
    else:
        # v2 has already converged: keep clipping v1.
        calls = add_curve_intersections(
            v1, v2, c1, c2, locations, include, flip,
            recursion, calls, t_min_new, t_max_new, u_min, u_max, config,
        )
    return calls


def get_curve_line_intersections(
    v: Sequence[float], px: float, py: float, vx: float, vy: float
) -> List[float]:
    """Curve-times where ``v`` meets the infinite line through ``(px, py)`` along ``(vx, vy)``."""

    if numerical.is_zero(vx) and numerical.is_zero(vy):
        t = get_time_of(v, Point(px, py))
        return [] if t is None else [t]
    angle = math.atan2(-vy, vx)
    sin = math.sin(angle)
    cos = math.cos(angle)
    rotated: List[float] = []
    for i in range(0, 8, 2):
        x = v[i] - px
        y = v[i + 1] - py
        rotated.extend((x * cos - y * sin, x * sin + y * cos))
    return solve_cubic(rotated, 1, 0.0, 0.0, 1.0)


def add_curve_line_intersections(
    v1: Sequence[float],
    v2: Sequence[float],
    c1: Curve,
    c2: Curve,
    locations: List[CurveLocation],
    include: Optional[IncludePredicate],
    flip: bool,
) -> None:
    """``v1`` is the curve, ``v2`` the straight line."""

    x1, y1, x2, y2 = v2[0], v2[1], v2[6], v2[7]
    for t1 in get_curve_line_intersections(v1, x1, y1, x2 - x1, y2 - y1):
        p1 = get_point(v1, t1)
        t2 = get_time_of(v2, p1)
        if t2 is not None:
            add_location(
                locations,
                include,
                c2 if flip else c1,
                t2 if flip else t1,
                c1 if flip else c2,
                t1 if flip else t2,
            )


def add_line_intersection(
    v1: Sequence[float],
    v2: Sequence[float],
    c1: Curve,
    c2: Curve,
    locations: List[CurveLocation],
    include: Optional[IncludePredicate],
) -> None:
    point = line_intersect(v1[0], v1[1], v1[6], v1[7], v2[0], v2[1], v2[6], v2[7])
    if point is not None:
        add_location(locations, include, c1, get_time_of(v1, point), c2, get_time_of(v2, point))


def get_overlaps(v1: Sequence[float], v2: Sequence[float]) -> Optional[List[Tuple[float, float]]]:
    """Curve-time pairs bounding the range where ``v1`` and ``v2`` coincide, if any."""

    def squared_line_length(v: Sequence[float]) -> float:
        x = v[6] - v[0]
        y = v[7] - v[1]
        return x * x + y * y

    time_epsilon = numerical.CURVETIME_EPSILON
    geom_epsilon = numerical.GEOMETRIC_EPSILON
    straight1 = is_straight(v1)
    straight2 = is_straight(v2)
    straight_both = straight1 and straight2
    flip = squared_line_length(v1) < squared_line_length(v2)
    l1 = v2 if flip else v1
    l2 = v1 if flip else v2
    px, py = l1[0], l1[1]
    vx = l1[6] - px
    vy = l1[7] - py

    def near_line(x: float, y: float) -> bool:
        return line_distance(px, py, vx, vy, x, y, True) < geom_epsilon

    if near_line(l2[0], l2[1]) and near_line(l2[6], l2[7]):
        if (
            not straight_both
            and near_line(l1[2], l1[3])
            and near_line(l1[4], l1[5])
            and near_line(l2[2], l2[3])
            and near_line(l2[4], l2[5])
        ):
            straight1 = straight2 = straight_both = True
    elif straight_both:
        return None
    if straight1 != straight2:
        return None

    curves = (v1, v2)
    pairs: List[Tuple[float, float]] = []
    for i in range(4):
        if len(pairs) >= 2:
            break
        i1 = i & 1
        i2 = i1 ^ 1
        end = i >> 1
        other = curves[i2]
        t2 = get_time_of(curves[i1], Point(other[6], other[7]) if end else Point(other[0], other[1]))
        if t2 is not None:
            pair = (float(end), t2) if i1 else (t2, float(end))
            if not pairs or (
                abs(pair[0] - pairs[0][0]) > time_epsilon and abs(pair[1] - pairs[0][1]) > time_epsilon
            ):
                pairs.append(pair)
        if i > 2 and not pairs:
            break
    if len(pairs) != 2:
        return None
    if not straight_both:
        o1 = get_part(v1, pairs[0][0], pairs[1][0])
        o2 = get_part(v2, pairs[0][1], pairs[1][1])
        if any(abs(o2[k] - o1[k]) > geom_epsilon for k in (2, 3, 4, 5)):
            return None
    return pairs


def get_curve_intersections(
    v1: Sequence[float],
    v2: Sequence[float],
    c1: Curve,
    c2: Curve,
    locations: List[CurveLocation],
    include: Optional[IncludePredicate] = None,
    config: Optional[IntersectionConfig] = None,
) -> List[CurveLocation]:
    """Add the intersections of two distinct curves to ``locations`` and return it."""

    epsilon = numerical.EPSILON
    if not (
        max(v1[0], v1[2], v1[4], v1[6]) + epsilon > min(v2[0], v2[2], v2[4], v2[6])
        and min(v1[0], v1[2], v1[4], v1[6]) - epsilon < max(v2[0], v2[2], v2[4], v2[6])
        and max(v1[1], v1[3], v1[5], v1[7]) + epsilon > min(v2[1], v2[3], v2[5], v2[7])
        and min(v1[1], v1[3], v1[5], v1[7]) - epsilon < max(v2[1], v2[3], v2[5], v2[7])
    ):
        return locations

    overlaps = get_overlaps(v1, v2)
    if overlaps is not None:
        for t1, t2 in overlaps:
            add_location(locations, include, c1, t1, c2, t2, True)
        return locations

    straight1 = is_straight(v1)
    straight2 = is_straight(v2)
    straight = straight1 and straight2
    flip = straight1 and not straight2
    before = len(locations)
    a, b = (v2, v1) if flip else (v1, v2)
    ca, cb = (c2, c1) if flip else (c1, c2)
    if straight:
        add_line_intersection(a, b, ca, cb, locations, include)
    elif straight1 or straight2:
        add_curve_line_intersections(a, b, ca, cb, locations, include, flip)
    else:
        add_curve_intersections(
            a, b, ca, cb, locations, include, flip, 0, 0, 0.0, 1.0, 0.0, 1.0,
            config or get_intersection_config(),
        )

    if not straight or len(locations) == before:
        # Curves meeting only at their end points can be missed above.
        for i in range(4):
            t1 = i >> 1
            t2 = i & 1
            i1 = t1 * 6
            i2 = t2 * 6
            p1 = Point(v1[i1], v1[i1 + 1])
            p2 = Point(v2[i2], v2[i2 + 1])
            if p1.is_close(p2, epsilon):
                add_location(locations, include, c1, float(t1), c2, float(t2))
    return locations


def get_self_intersection(
    v1: Sequence[float],
    c1: Curve,
    locations: List[CurveLocation],
    include: Optional[IncludePredicate] = None,
) -> List[CurveLocation]:
    info = classify(v1)
    if info.type == "loop" and info.roots is not None:
        add_location(locations, include, c1, info.roots[0], c1, info.roots[1])
    return locations


def get_intersections(
    curves1: Sequence[Curve],
    curves2: Optional[Sequence[Curve]] = None,
    include: Optional[IncludePredicate] = None,
    matrix1: Optional[Matrix] = None,
    matrix2: Optional[Matrix] = None,
    return_first: bool = False,
    config: Optional[IntersectionConfig] = None,
) -> List[CurveLocation]:
    """All intersections between two curve lists, or within one list when ``curves2`` is omitted.

    Results are sorted by path and position and contain each location once.
    """

    config = config or get_intersection_config()
    self_test = curves2 is None
    values1 = [curve.get_values(matrix1) for curve in curves1]
    if self_test:
        curves2 = curves1
        values2 = values1
    else:
        values2 = [curve.get_values(matrix2) for curve in curves2]  # type: ignore[union-attr]
    collisions = find_curve_bounds_collisions(
        values1, None if self_test else values2, numerical.GEOMETRIC_EPSILON
    )
    locations: List[CurveLocation] = []
    for index1, curve1 in enumerate(curves1):
        v1 = values1[index1]
        if self_test:
            get_self_intersection(v1, curve1, locations, include)
        for index2 in collisions[index1] if index1 < len(collisions) else ():
            if return_first and locations:
                return locations
            if not self_test or index2 > index1:
                get_curve_intersections(
                    v1, values2[index2], curve1, curves2[index2], locations, include, config  # type: ignore[index]
                )
    logger.debug(
        "Found %d intersection(s) among %d x %d curves",
        len(locations),
        len(curves1),
        len(curves2),  # type: ignore[arg-type]
    )
    return locations


apply_debug_logging(
    globals(),
    logger=logger,
    skip={
        "add_location",
        "add_curve_intersections",
        "get_convex_hull",
        "clip_convex_hull",
        "clip_convex_hull_part",
    },
)


__all__ = [
    "add_location",
    "get_curve_intersections",
    "get_curve_line_intersections",
    "get_intersections",
    "get_overlaps",
    "get_self_intersection",
]
