"""Least-squares fitting of cubic Bezier segments to a polyline.

The fitter follows Schneider's algorithm ("An Algorithm for Automatically
Fitting Digitized Curves", Graphics Gems, 1990): chord-length
parameterization, a 2x2 least-squares solve for the handle lengths, Newton
reparameterization and recursive splitting at the point of maximum error.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

import numpy as np

from . import numerical
from .geometry import Point, PointLike
from .logging_utils import apply_debug_logging
from .segment import Segment

if TYPE_CHECKING:  # pragma: no cover
    from .path import Path

logger = logging.getLogger(__name__)

_MAX_ITERATIONS = 4


def _normalize(vector: np.ndarray, length: float = 1.0) -> np.ndarray:
    norm = float(np.hypot(vector[0], vector[1]))
    if norm == 0:
        return np.zeros(2)
    return vector * (length / norm)


def _evaluate(control: np.ndarray, t: np.ndarray) -> np.ndarray:
    """De Casteljau evaluation of a Bezier of any degree at each of ``t``."""

    tmp = np.repeat(control[np.newaxis, :, :], len(t), axis=0)
    tt = t[:, np.newaxis, np.newaxis]
    for _ in range(len(control) - 1):
        tmp = tmp[:, :-1] * (1 - tt) + tmp[:, 1:] * tt
    return tmp[:, 0]


def _to_point(row: np.ndarray) -> Point:
    return Point(float(row[0]), float(row[1]))


class PathFitter:
    """Fits smooth segments through the anchor points of a path or a point list.

    Consecutive duplicate points are dropped. For closed input the last point
    is prepended and the second appended so the fit wraps around smoothly.
    """

    def __init__(self, points: Sequence[PointLike], closed: bool = False) -> None:
        unique: List[Tuple[float, float]] = []
        for value in points:
            point = Point.read(value)
            if not unique or unique[-1] != (point.x, point.y):
                unique.append((point.x, point.y))
        if closed and len(unique) > 1:
            unique.insert(0, unique[-1])
            unique.append(unique[1])
        self.points = np.asarray(unique, dtype=float).reshape(-1, 2)
        self.closed = closed

    @classmethod
    def for_path(cls, path: "Path") -> "PathFitter":
        return cls([segment.point for segment in path.segments], path.closed)

    def fit(self, error: float = 2.5) -> Optional[List[Segment]]:
        """Segments approximating the points within a maximum squared ``error``.

        Returns ``None`` when there are no points.
        """

        points = self.points
        length = len(points)
        if length == 0:
            return None
        segments = [Segment(_to_point(points[0]))]
        if length > 1:
            self._fit_cubic(
                segments,
                error,
                0,
                length - 1,
                points[1] - points[0],
                points[length - 2] - points[length - 1],
            )
            if self.closed:
                segments.pop(0)
                segments.pop()
        logger.debug("Fitted %d points into %d segments (error=%g)", length, len(segments), error)
        return segments

    def _fit_cubic(
        self,
        segments: List[Segment],
        error: float,
        first: int,
        last: int,
        tan1: np.ndarray,
        tan2: np.ndarray,
    ) -> None:
        points = self.points
        if last - first == 1:
            pt1 = points[first]
            pt2 = points[last]
            dist = float(np.hypot(*(pt2 - pt1))) / 3
            self._add_curve(
                segments,
                np.array([pt1, pt1 + _normalize(tan1, dist), pt2 + _normalize(tan2, dist), pt2]),
            )
            return

        u_prime = self._chord_length_parameterize(first, last)
        max_error = max(error, error * error)
        split = first
        in_order = True
        for _ in range(_MAX_ITERATIONS + 1):
            curve = self._generate_bezier(first, last, u_prime, tan1, tan2)
            worst, split = self._find_max_error(first, last, curve, u_prime)
            if worst < error and in_order:
                self._add_curve(segments, curve)
                return
            if worst >= max_error:
                break
            in_order = self._reparameterize(first, last, u_prime, curve)
            max_error = worst

        tan_center = points[split - 1] - points[split + 1]
        self._fit_cubic(segments, error, first, split, tan1, tan_center)
        self._fit_cubic(segments, error, split, last, -tan_center, tan2)

    @staticmethod
    def _add_curve(segments: List[Segment], curve: np.ndarray) -> None:
        segments[-1].handle_out = _to_point(curve[1] - curve[0])
        segments.append(Segment(_to_point(curve[3]), _to_point(curve[2] - curve[3])))

    def _generate_bezier(
        self,
        first: int,
        last: int,
        u_prime: np.ndarray,
        tan1: np.ndarray,
        tan2: np.ndarray,
    ) -> np.ndarray:
        epsilon = numerical.EPSILON
        points = self.points[first:last + 1]
        pt1 = self.points[first]
        pt2 = self.points[last]
        u = u_prime
        t = 1 - u
        b = 3 * u * t
        b0 = t * t * t
        b1 = b * t
        b2 = b * u
        b3 = u * u * u
        a1 = np.outer(b1, _normalize(tan1))
        a2 = np.outer(b2, _normalize(tan2))
        tmp = points - np.outer(b0 + b1, pt1) - np.outer(b2 + b3, pt2)
        c01 = float(np.sum(a1 * a2))
        c = np.array([[np.sum(a1 * a1), c01], [c01, np.sum(a2 * a2)]])
        x = np.array([np.sum(a1 * tmp), np.sum(a2 * tmp)])

        det = c[0, 0] * c[1, 1] - c[1, 0] * c[0, 1]
        if abs(det) > epsilon:
            alpha1, alpha2 = (float(value) for value in np.linalg.solve(c, x))
        else:
            # Singular system: use a single scale for both handles.
            c0 = c[0, 0] + c[0, 1]
            c1 = c[1, 0] + c[1, 1]
            if abs(c0) > epsilon:
                alpha1 = alpha2 = float(x[0] / c0)
            elif abs(c1) > epsilon:
                alpha1 = alpha2 = float(x[1] / c1)
            else:
                alpha1 = alpha2 = 0.0

        seg_length = float(np.hypot(*(pt2 - pt1)))
        eps = epsilon * seg_length
        handle1: Optional[np.ndarray] = None
        handle2: Optional[np.ndarray] = None
        if alpha1 < eps or alpha2 < eps:
            alpha1 = alpha2 = seg_length / 3
        else:
            line = pt2 - pt1
            handle1 = _normalize(tan1, alpha1)
            handle2 = _normalize(tan2, alpha2)
            if float(np.dot(handle1, line) - np.dot(handle2, line)) > seg_length * seg_length:
                # Overlapping handles would produce a loop.
                alpha1 = alpha2 = seg_length / 3
                handle1 = handle2 = None

        return np.array(
            [
                pt1,
                pt1 + (handle1 if handle1 is not None else _normalize(tan1, alpha1)),
                pt2 + (handle2 if handle2 is not None else _normalize(tan2, alpha2)),
                pt2,
            ]
        )

    def _reparameterize(self, first: int, last: int, u: np.ndarray, curve: np.ndarray) -> bool:
        """One Newton step per point towards its nearest curve-time; ``u`` is updated in place.

        Returns whether the parameters are still strictly increasing.
        """

        curve1 = 3 * (curve[1:] - curve[:-1])
        curve2 = 2 * (curve1[1:] - curve1[:-1])
        pt = _evaluate(curve, u)
        pt1 = _evaluate(curve1, u)
        pt2 = _evaluate(curve2, u)
        diff = pt - self.points[first:last + 1]
        df = np.sum(pt1 * pt1, axis=1) + np.sum(diff * pt2, axis=1)
        numerator = np.sum(diff * pt1, axis=1)
        stalled = np.abs(df) < numerical.MACHINE_EPSILON
        u[:] = np.where(stalled, u, u - numerator / np.where(stalled, 1.0, df))
        return bool(np.all(np.diff(u) > 0))

    def _chord_length_parameterize(self, first: int, last: int) -> np.ndarray:
        steps = np.diff(self.points[first:last + 1], axis=0)
        u = np.concatenate([[0.0], np.cumsum(np.hypot(steps[:, 0], steps[:, 1]))])
        return u / u[-1]

    def _find_max_error(
        self, first: int, last: int, curve: np.ndarray, u: np.ndarray
    ) -> Tuple[float, int]:
        """Largest squared distance of an inner point from ``curve`` and that point's index."""

        diff = _evaluate(curve, u[1:-1]) - self.points[first + 1:last]
        dist = np.sum(diff * diff, axis=1)
        # Ties resolve to the later point.
        offset = len(dist) - 1 - int(np.argmax(dist[::-1]))
        return float(dist[offset]), first + 1 + offset


apply_debug_logging(
    globals(),
    logger=logger,
    skip={
        "_normalize",
        "_evaluate",
        "_to_point",
        "PathFitter._fit_cubic",
        "PathFitter._add_curve",
        "PathFitter._generate_bezier",
        "PathFitter._reparameterize",
        "PathFitter._chord_length_parameterize",
        "PathFitter._find_max_error",
    },
)


__all__ = ["PathFitter"]
