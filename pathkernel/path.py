"""Editable paths.

A :class:`Path` owns an ordered list of :class:`~pathkernel.segment.Segment`
objects. The list of :class:`~pathkernel.curve.Curve` views over consecutive
segments is built lazily and afterwards patched in place on every structural
edit, so curve objects held by callers stay valid where the edit did not touch
them. Structural edits bump :attr:`Path.version`; moving points or handles of
existing segments only invalidates the cached length, area and bounds.
"""

from __future__ import annotations

import itertools
import logging
import math
from typing import Callable, Iterable, List, Optional, Union

import numpy as np
from scipy.linalg import solve_banded

from . import numerical
from .bounds import get_handle_bounds, get_segments_bounds, get_stroke_bounds
from .curve import Curve, get_area, get_values
from .fitter import PathFitter
from .flattener import PathFlattener
from .geometry import Line, Matrix, Point, PointLike, Rectangle
from .intersections import get_intersections
from .location import CurveLocation
from .segment import Segment, SegmentLike
from .types import (
    ArcConstructionError,
    CurveConstructionError,
    DrawingSurface,
    GeometryError,
    SegmentOwnershipError,
    SmoothType,
    StrokeStyle,
)

logger = logging.getLogger(__name__)

_path_ids = itertools.count(1)

LocationLike = Union[float, CurveLocation]


class Path:
    """An open or closed sequence of cubic Bezier curves."""

    def __init__(
        self,
        segments: Optional[Iterable[SegmentLike]] = None,
        closed: bool = False,
        style: Optional[StrokeStyle] = None,
    ) -> None:
        self.id = next(_path_ids)
        self.version = 0
        self.style = style
        self._segments: List[Segment] = []
        self._curves: Optional[List[Curve]] = None
        self._closed = False
        self._length: Optional[float] = None
        self._area: Optional[float] = None
        self._bounds: Optional[dict] = None
        if segments is not None:
            self._add([Segment.read(segment) for segment in segments])
        if closed:
            self.closed = True

    def __repr__(self) -> str:
        return f"Path(id={self.id}, segments={len(self._segments)}, closed={self._closed})"

    # Factories

    @classmethod
    def from_points(cls, points: Iterable[PointLike], closed: bool = False) -> "Path":
        return cls([Segment(point) for point in points], closed)

    @classmethod
    def rectangle(cls, x: float, y: float, width: float, height: float) -> "Path":
        """Closed rectangle starting at the bottom-left corner (y axis pointing down)."""

        return cls.from_points(
            [(x, y + height), (x, y), (x + width, y), (x + width, y + height)], closed=True
        )

    @classmethod
    def circle(cls, center: PointLike, radius: float) -> "Path":
        """Closed four-segment circle approximation using :data:`~pathkernel.numerical.KAPPA` handles."""

        center = Point.read(center)
        kappa = numerical.KAPPA * radius
        unit = [
            ((-1.0, 0.0), (0.0, kappa), (0.0, -kappa)),
            ((0.0, -1.0), (-kappa, 0.0), (kappa, 0.0)),
            ((1.0, 0.0), (0.0, -kappa), (0.0, kappa)),
            ((0.0, 1.0), (kappa, 0.0), (-kappa, 0.0)),
        ]
        return cls(
            [Segment(center + Point(*point) * radius, handle_in, handle_out) for point, handle_in, handle_out in unit],
            closed=True,
        )

    def clone(self) -> "Path":
        return Path([segment.clone() for segment in self._segments], self._closed, self.style)

    # Change tracking

    def _geometry_changed(self) -> None:
        self._length = None
        self._area = None
        self._bounds = None

    def _structure_changed(self) -> None:
        self.version += 1
        self._geometry_changed()

    # Segments and curves

    @property
    def segments(self) -> List[Segment]:
        return list(self._segments)

    @segments.setter
    def segments(self, segments: Iterable[SegmentLike]) -> None:
        self.remove_segments()
        self._curves = None
        self._add([Segment.read(segment) for segment in segments])

    def _count_curves(self) -> int:
        length = len(self._segments)
        return length - 1 if not self._closed and length > 0 else length

    def _get_curves(self) -> List[Curve]:
        if self._curves is None:
            segments = self._segments
            count = len(segments)
            self._curves = [
                Curve(segments[i], segments[i + 1] if i + 1 < count else segments[0], self)
                for i in range(self._count_curves())
            ]
        return self._curves

    @property
    def curves(self) -> List[Curve]:
        return list(self._get_curves())

    @property
    def first_segment(self) -> Optional[Segment]:
        return self._segments[0] if self._segments else None

    @property
    def last_segment(self) -> Optional[Segment]:
        return self._segments[-1] if self._segments else None

    @property
    def first_curve(self) -> Optional[Curve]:
        curves = self._get_curves()
        return curves[0] if curves else None

    @property
    def last_curve(self) -> Optional[Curve]:
        curves = self._get_curves()
        return curves[-1] if curves else None

    @property
    def closed(self) -> bool:
        return self._closed

    @closed.setter
    def closed(self, closed: bool) -> None:
        closed = bool(closed)
        if self._closed == closed:
            return
        self._closed = closed
        curves = self._curves
        if curves is not None:
            length = self._count_curves()
            if closed:
                if length > len(curves):
                    curves.append(Curve(self._segments[length - 1], self._segments[0], self))
            else:
                for curve in curves[length:]:
                    curve._path = None
                del curves[length:]
        self._structure_changed()

    def is_empty(self) -> bool:
        return not self._segments

    def _add(self, segs: List[Segment], index: Optional[int] = None) -> List[Segment]:
        segments = self._segments
        curves = self._curves
        amount = len(segs)
        if index is None:
            index = len(segments)
        for i, segment in enumerate(segs):
            if segment._path is not None:
                segment = segs[i] = segment.clone()
            segment._path = self
            segment._index = index + i
        segments[index:index] = segs
        for i in range(index + amount, len(segments)):
            segments[i]._index = i
        if curves is not None:
            total = self._count_curves()
            # Appending to an open path extends the last curve slot instead.
            start = index - 1 if index > 0 and index + amount - 1 == total else index
            end = min(start + amount, total)
            for i in range(start, end):
                curves.insert(i, Curve(None, None, self))
            self._adjust_curves(start, end)
        self._structure_changed()
        return segs

    def _adjust_curves(self, start: int, end: int) -> None:
        segments = self._segments
        curves = self._curves
        if curves is None:
            return
        count = len(segments)
        for i in range(start, end):
            curve = curves[i]
            curve._path = self
            curve._segment1 = segments[i]
            curve._segment2 = segments[i + 1] if i + 1 < count else segments[0]
            curve._changed()
        previous = count - 1 if self._closed and not start else start - 1
        if 0 <= previous < len(curves):
            curve = curves[previous]
            curve._segment2 = segments[start] if start < count else segments[0]
            curve._changed()
        if end < len(curves):
            curve = curves[end]
            curve._segment1 = segments[end]
            curve._changed()

    def add(self, *segments: SegmentLike) -> List[Segment]:
        """Append segments; segments owned by another path are cloned first."""

        return self._add([Segment.read(segment) for segment in segments])

    def insert(self, index: int, *segments: SegmentLike) -> List[Segment]:
        return self._add([Segment.read(segment) for segment in segments], index)

    def add_segments(self, segments: Iterable[SegmentLike]) -> List[Segment]:
        return self.add(*segments)

    def insert_segments(self, index: int, segments: Iterable[SegmentLike]) -> List[Segment]:
        return self.insert(index, *segments)

    def remove_segment(self, index: int) -> Optional[Segment]:
        removed = self.remove_segments(index, index + 1)
        return removed[0] if removed else None

    def remove_segments(self, start: int = 0, end: Optional[int] = None) -> List[Segment]:
        """Remove the segments in ``[start, end)`` and return them detached."""

        segments = self._segments
        curves = self._curves
        count = len(segments)
        if end is None:
            end = count
        removed = segments[start:end]
        if not removed:
            return []
        del segments[start:end]
        amount = len(removed)
        for segment in removed:
            segment._path = None
            segment._index = None
        for i in range(start, len(segments)):
            segments[i]._index = i
        if curves is not None:
            index = start - 1 if start > 0 and end == count + (1 if self._closed else 0) else start
            for curve in curves[index:index + amount]:
                curve._path = None
            del curves[index:index + amount]
            self._adjust_curves(index, index)
        self._structure_changed()
        return removed

    def clear(self) -> List[Segment]:
        return self.remove_segments()

    # Derived values

    @property
    def length(self) -> float:
        if self._length is None:
            self._length = sum(curve.length for curve in self._get_curves())
        return self._length

    @property
    def area(self) -> float:
        """Signed area; open paths are treated as closed by a straight line."""

        if self._area is None:
            segments = self._segments
            count = len(segments)
            area = 0.0
            for i, segment in enumerate(segments):
                last = i + 1 == count
                area += get_area(
                    get_values(segment, segments[0] if last else segments[i + 1], None, last and not self._closed)
                )
            self._area = area
        return self._area

    @property
    def is_clockwise(self) -> bool:
        return self.area >= 0

    @is_clockwise.setter
    def is_clockwise(self, clockwise: bool) -> None:
        if self.is_clockwise != bool(clockwise):
            self.reverse()

    def has_handles(self) -> bool:
        return any(segment.has_handles() for segment in self._segments)

    def clear_handles(self) -> None:
        for segment in self._segments:
            segment.clear_handles()

    # Bounds

    def _cached_bounds(self, key: str, compute: Callable[[], Rectangle]) -> Rectangle:
        if self._bounds is None:
            self._bounds = {}
        bounds = self._bounds.get(key)
        if bounds is None:
            bounds = self._bounds[key] = compute()
        return bounds

    @property
    def bounds(self) -> Rectangle:
        return self.get_bounds()

    def get_bounds(self, matrix: Optional[Matrix] = None) -> Rectangle:
        if matrix is not None and not matrix.is_identity():
            return get_segments_bounds(self._segments, self._closed, matrix)
        return self._cached_bounds("bounds", lambda: get_segments_bounds(self._segments, self._closed))

    def get_stroke_bounds(self, matrix: Optional[Matrix] = None) -> Rectangle:
        if matrix is not None and not matrix.is_identity():
            return get_stroke_bounds(self._segments, self._closed, self.style, matrix)
        return self._cached_bounds(
            "stroke", lambda: get_stroke_bounds(self._segments, self._closed, self.style)
        )

    def get_handle_bounds(self, matrix: Optional[Matrix] = None, stroke: bool = False) -> Rectangle:
        if matrix is not None and not matrix.is_identity():
            return get_handle_bounds(self._segments, self.style, matrix, stroke)
        return self._cached_bounds(
            "stroke-handle" if stroke else "handle",
            lambda: get_handle_bounds(self._segments, self.style, None, stroke),
        )

    # Positional queries

    def get_location_at(self, offset: LocationLike) -> Optional[CurveLocation]:
        """Location at arc-length ``offset`` from the start, or ``None`` when out of range.

        A :class:`CurveLocation` on this path is returned unchanged.
        """

        if isinstance(offset, CurveLocation):
            return offset if offset.path is self else None
        if offset < 0:
            return None
        curves = self._get_curves()
        length = 0.0
        for curve in curves:
            start = length
            length += curve.length
            if length > offset:
                return curve.get_location_at(offset - start)
        if curves and offset <= self.length:
            return CurveLocation(curves[-1], 1.0)
        return None

    def get_location_of(self, point: PointLike) -> Optional[CurveLocation]:
        point = Point.read(point)
        for curve in self._get_curves():
            location = curve.get_location_of(point)
            if location is not None:
                return location
        return None

    def get_offset_of(self, point: PointLike) -> Optional[float]:
        location = self.get_location_of(point)
        return location.offset if location is not None else None

    def get_point_at(self, offset: LocationLike) -> Optional[Point]:
        location = self.get_location_at(offset)
        return location.point if location is not None else None

    def get_tangent_at(self, offset: LocationLike) -> Optional[Point]:
        location = self.get_location_at(offset)
        return location.tangent if location is not None else None

    def get_normal_at(self, offset: LocationLike) -> Optional[Point]:
        location = self.get_location_at(offset)
        return location.normal if location is not None else None

    def get_weighted_tangent_at(self, offset: LocationLike) -> Optional[Point]:
        location = self.get_location_at(offset)
        return location.weighted_tangent if location is not None else None

    def get_weighted_normal_at(self, offset: LocationLike) -> Optional[Point]:
        location = self.get_location_at(offset)
        return location.weighted_normal if location is not None else None

    def get_curvature_at(self, offset: LocationLike) -> Optional[float]:
        location = self.get_location_at(offset)
        return location.curvature if location is not None else None

    def get_offsets_with_tangent(self, tangent: PointLike) -> List[float]:
        """Path offsets where the tangent is parallel to ``tangent``."""

        tangent = Point.read(tangent)
        if tangent.is_zero():
            return []
        offsets: List[float] = []
        curve_start = 0.0
        for curve in self._get_curves():
            for t in curve.get_times_with_tangent(tangent):
                offset = curve_start + curve.get_offset_at_time(t)
                if offset not in offsets:
                    offsets.append(offset)
            curve_start += curve.length
        return offsets

    def get_nearest_location(self, point: PointLike) -> Optional[CurveLocation]:
        point = Point.read(point)
        nearest: Optional[CurveLocation] = None
        min_distance = math.inf
        for curve in self._get_curves():
            location = curve.get_nearest_location(point)
            if location.distance is not None and location.distance < min_distance:
                min_distance = location.distance
                nearest = location
        return nearest

    def get_nearest_point(self, point: PointLike) -> Optional[Point]:
        location = self.get_nearest_location(point)
        return location.point if location is not None else None

    # Intersections

    def get_intersections(
        self,
        other: Optional["Path"] = None,
        include: Optional[Callable[[CurveLocation], bool]] = None,
        matrix: Optional[Matrix] = None,
        return_first: bool = False,
    ) -> List[CurveLocation]:
        """Intersections with ``other`` (transformed by ``matrix``), or self-intersections."""

        if other is None or other is self:
            return get_intersections(self._get_curves(), None, include, return_first=return_first)
        if not self.get_bounds().intersects(other.get_bounds(matrix), numerical.EPSILON):
            return []
        return get_intersections(
            self._get_curves(), other._get_curves(), include, None, matrix, return_first
        )

    def get_crossings(self, other: Optional["Path"] = None) -> List[CurveLocation]:
        return self.get_intersections(other, lambda location: location.is_crossing())

    # Structural mutations

    def divide_at(self, location: LocationLike) -> Optional[Segment]:
        """Insert a segment at ``location`` and return it."""

        loc = self.get_location_at(location)
        if loc is None or loc.curve is None or loc.time is None:
            return None
        curve = loc.curve.divide_at_time(loc.time)
        return curve.segment1 if curve is not None else None

    def split_at(self, location: LocationLike) -> Optional["Path"]:
        """Split at ``location``.

        A closed path is opened so that it starts and ends at the split point
        and is returned itself. An open path keeps the first part and the
        remainder is returned as a new path.
        """

        loc = self.get_location_at(location)
        if loc is None:
            return None
        index = loc.index
        time = loc.time
        if index is None or time is None:
            return None
        t_min = numerical.CURVETIME_EPSILON
        if time > 1 - t_min:
            index += 1
            time = 0.0
        curves = self._get_curves()
        if not 0 <= index < len(curves):
            return None
        if time >= t_min:
            curves[index].divide_at_time(time)
            index += 1
        segs = self.remove_segments(index, len(self._segments))
        if self._closed:
            self.closed = False
            path = self
        else:
            path = Path(style=self.style)
        path._add(segs, 0)
        self.add(segs[0])
        logger.debug("Split path %d at curve %d, t=%.6g into path %d", self.id, index, time, path.id)
        return path

    def join(self, other: Optional["Path"] = None, tolerance: float = 0.0) -> "Path":
        """Append the segments of ``other`` where the end points meet, closing when both ends do.

        ``other`` itself is left untouched; its segments are cloned into this
        path. Without ``other`` the path is only closed if its ends meet.
        """

        epsilon = tolerance
        if other is not None and other is not self:
            other = other.clone()
            last1 = self.last_segment
            last2 = other.last_segment
            if last2 is None:
                return self
            if last1 is not None and last1.point.is_close(last2.point, epsilon):
                other.reverse()
            first2 = other.first_segment
            if last1 is not None and last1.point.is_close(first2.point, epsilon):
                last1.handle_out = first2.handle_out
                self._add(other.segments[1:])
            else:
                first1 = self.first_segment
                if first1 is not None and first1.point.is_close(first2.point, epsilon):
                    other.reverse()
                last2 = other.last_segment
                if first1 is not None and first1.point.is_close(last2.point, epsilon):
                    first1.handle_in = last2.handle_in
                    self._add(other.segments[:-1], 0)
                else:
                    self._add(other.segments)
            if other.closed:
                self._add([other._segments[0]])
            logger.debug("Joined path %d into path %d", other.id, self.id)

        first = self.first_segment
        last = self.last_segment
        if first is not None and first is not last and first.point.is_close(last.point, epsilon):
            first.handle_in = last.handle_in
            last.remove()
            self.closed = True
        return self

    def reduce(self, simplify: bool = False) -> "Path":
        """Remove zero-length straight curves and, with ``simplify``, merge collinear ones."""

        tolerance = numerical.GEOMETRIC_EPSILON if simplify else 0.0
        curves = self._get_curves()
        for curve in reversed(list(curves)):
            if not curve.has_handles() and (
                not curve.has_length(tolerance) or (simplify and curve.is_collinear(curve.next))
            ):
                curve.remove()
        return self

    def reverse(self) -> None:
        segments = self._segments
        segments.reverse()
        for i, segment in enumerate(segments):
            segment._handle_in, segment._handle_out = segment._handle_out, segment._handle_in
            segment._index = i
        if self._curves is not None:
            for curve in self._curves:
                curve._path = None
        self._curves = None
        self._structure_changed()

    def transform(self, matrix: Matrix) -> None:
        for segment in self._segments:
            segment.transform(matrix)

    def smooth(
        self,
        type: SmoothType = "asymmetric",
        factor: Optional[float] = None,
        from_: Optional[Union[int, Segment, Curve]] = None,
        to: Optional[Union[int, Segment, Curve]] = None,
    ) -> None:
        """Smooth the handles of the segments in the range ``from_``..``to``.

        ``asymmetric`` and ``continuous`` solve for curvature-continuous knots
        across the whole range; ``catmull-rom`` and ``geometric`` smooth each
        segment from its neighbours. Ranges may be given as indices (negative
        ones count from the end), segments or curves of this path. On a closed
        path without a range the solve wraps around.
        """

        segments = self._segments
        length = len(segments)
        closed = self._closed
        if not length:
            return

        def get_index(value: Optional[Union[int, Segment, Curve]], default: int, is_end: bool) -> int:
            if isinstance(value, (Segment, Curve)):
                owner = value.path
                index = value.index
                if owner is not self or index is None:
                    raise SegmentOwnershipError(f"{value.__class__.__name__} {index} is not part of {self!r}")
                if is_end and isinstance(value, Curve):
                    index += 1
            else:
                index = default if value is None else int(value)
            if index < 0:
                index = int(math.fmod(index, length)) if closed else index + length
            return min(index, length - 1)

        loop = closed and from_ is None and to is None
        start = get_index(from_, 0, False)
        end = get_index(to, length - 1, True)
        if start > end:
            if closed:
                start -= length
            else:
                start, end = end, start

        if type in ("asymmetric", "continuous"):
            self._smooth_knots(type == "asymmetric", start, end, loop)
        elif type in ("catmull-rom", "geometric"):
            for i in range(start, end + 1):
                segments[i + length if i < 0 else i].smooth(
                    type, factor, not loop and i == start, not loop and i == end
                )
        else:
            raise ValueError(f"Smoothing method {type!r} not supported")

    def _smooth_knots(self, asymmetric: bool, start: int, end: int, loop: bool) -> None:
        segments = self._segments
        length = len(segments)
        amount = end - start + 1
        n = amount - 1
        padding = min(amount, 4) if loop else 1
        padding_left = padding_right = padding
        if not self._closed:
            padding_left = min(1, start)
            padding_right = min(1, length - end - 1)
        n += padding_left + padding_right
        if n <= 1:
            return
        knots = []
        j = start - padding_left
        for _ in range(n + 1):
            knots.append(segments[(j + length if j < 0 else j) % length].point)
            j += 1

        # Tridiagonal system for the first control point of every curve. Rows
        # are (1, 4, 1) inside; the end rows depend on the smoothing type.
        pts = np.array([(knot.x, knot.y) for knot in knots], dtype=float)
        n_1 = n - 1
        banded = np.zeros((3, n))
        banded[0, 1:] = 1.0
        banded[1, :] = 4.0
        banded[2, :-1] = 1.0
        rhs = 4.0 * pts[:n] + 2.0 * pts[1:n + 1]
        banded[1, 0] = 2.0
        rhs[0] = pts[0] + 2.0 * pts[1]
        if asymmetric:
            banded[2, n_1 - 1] = 1.0
            banded[1, n_1] = 2.0
            rhs[n_1] = 3.0 * pts[n_1]
        else:
            banded[2, n_1 - 1] = 2.0
            banded[1, n_1] = 7.0
            rhs[n_1] = 8.0 * pts[n_1] + pts[n]
        solved = solve_banded((1, 1), banded, rhs)
        last_point = (3.0 * pts[n] - solved[n_1]) / 2.0
        px = [float(value) for value in solved[:, 0]] + [float(last_point[0])]
        py = [float(value) for value in solved[:, 1]] + [float(last_point[1])]

        j = start
        last = n - padding_right
        for i in range(padding_left, last + 1):
            segment = segments[j + length if j < 0 else j]
            point = segment.point
            hx = px[i] - point.x
            hy = py[i] - point.y
            if loop or i < last:
                segment.handle_out = (hx, hy)
            if loop or i > padding_left:
                segment.handle_in = (-hx, -hy)
            j += 1

    def simplify(self, tolerance: float = 2.5) -> bool:
        """Replace the segments with a smooth fit within ``tolerance``."""

        before = len(self._segments)
        segments = PathFitter.for_path(self).fit(tolerance)
        if segments is None:
            return False
        self.segments = segments
        logger.debug("Simplified path %d from %d to %d segments", self.id, before, len(segments))
        return True

    def flatten(self, flatness: float = 0.25) -> None:
        """Replace the curves with straight lines within ``flatness``."""

        flattener = PathFlattener(self, flatness, 256, True)
        parts = flattener.parts
        segments = [Segment((part.values[0], part.values[1])) for part in parts]
        if not self._closed and parts:
            segments.append(Segment((parts[-1].values[6], parts[-1].values[7])))
        self.segments = segments
        logger.debug("Flattened path %d into %d segments", self.id, len(segments))

    def draw(self, surface: DrawingSurface, matrix: Optional[Matrix] = None) -> None:
        """Emit the path as drawing commands on ``surface``.

        Curves without handles are drawn with ``line_to``. Closed paths, even
        with a single segment, draw back to the first segment and then close.
        """

        segments = self._segments
        if not segments:
            return
        previous: Optional[List[float]] = None
        previous_out_zero = True

        def draw_segment(segment: Segment) -> None:
            nonlocal previous, previous_out_zero
            coords = segment._transform_coordinates(matrix)
            if previous is None:
                surface.move_to(coords[0], coords[1])
            elif previous_out_zero and segment.handle_in.is_zero():
                surface.line_to(coords[0], coords[1])
            else:
                surface.bezier_curve_to(previous[4], previous[5], coords[2], coords[3], coords[0], coords[1])
            previous = coords
            previous_out_zero = segment.handle_out.is_zero()

        for segment in segments:
            draw_segment(segment)
        if self._closed:
            draw_segment(segments[0])
            surface.close_path()

    # Construction helpers

    def _current_segment(self) -> Segment:
        if not self._segments:
            raise GeometryError("use move_to() first to create a current point")
        return self._segments[-1]

    def move_to(self, point: PointLike) -> None:
        if len(self._segments) == 1:
            self.remove_segment(0)
        if not self._segments:
            self._add([Segment(point)])

    def line_to(self, point: PointLike) -> None:
        self._add([Segment(point)])

    def cubic_curve_to(self, handle1: PointLike, handle2: PointLike, to: PointLike) -> None:
        """Cubic curve with absolute control points ``handle1``/``handle2``."""

        current = self._current_segment()
        to = Point.read(to)
        current.handle_out = Point.read(handle1) - current.point
        self._add([Segment(to, Point.read(handle2) - to)])

    def quadratic_curve_to(self, handle: PointLike, to: PointLike) -> None:
        current = self._current_segment().point
        handle = Point.read(handle)
        to = Point.read(to)
        self.cubic_curve_to(handle + (current - handle) / 3, handle + (to - handle) / 3, to)

    def curve_to(self, through: PointLike, to: PointLike, time: float = 0.5) -> None:
        """Quadratic curve passing through ``through`` at curve-time ``time``."""

        through = Point.read(through)
        to = Point.read(to)
        t = time
        t1 = 1 - t
        current = self._current_segment().point
        denominator = 2 * t * t1
        handle = (
            (through - current * (t1 * t1) - to * (t * t)) / denominator if denominator else Point(math.nan, math.nan)
        )
        if handle.is_nan() or not handle.is_finite():
            raise CurveConstructionError(f"cannot put a curve through points with parameter = {t}")
        self.quadratic_curve_to(handle, to)

    def arc_to(self, point: PointLike, to: Optional[PointLike] = None, clockwise: bool = True) -> None:
        """Circular arc from the current point.

        ``arc_to(through, to)`` passes through ``through``; ``arc_to(to,
        clockwise=...)`` draws a half circle whose direction is picked by
        ``clockwise``.
        """

        current = self._current_segment()
        start = current.point
        if to is None:
            to = Point.read(point)
            middle = (start + to) / 2
            through = middle + (middle - start).rotate(-90 if clockwise else 90)
        else:
            through = Point.read(point)
            to = Point.read(to)

        l1 = Line((start + through) / 2, (through - start).rotate(90), True)
        l2 = Line((through + to) / 2, (to - through).rotate(90), True)
        line = Line(start, to)
        through_side = line.get_side(through)
        center = l1.intersect(l2, True)
        if center is None:
            if not through_side:
                self.line_to(to)
                return
            raise ArcConstructionError(
                f"cannot create an arc from {tuple(start)} through {tuple(through)} to {tuple(to)}"
            )
        vector = start - center
        extent = vector.get_directed_angle(to - center)
        center_side = line.get_side(center, True)
        if center_side == 0:
            extent = through_side * abs(extent)
        elif through_side == center_side:
            extent += 360 if extent < 0 else -360
        if not extent:
            return

        ext = abs(extent)
        count = 4 if ext >= 360 else math.ceil((ext - numerical.EPSILON) / 90)
        inc = extent / count
        half = inc * math.pi / 360
        z = 4 / 3 * math.sin(half) / (1 + math.cos(half))
        segments: List[Segment] = []
        for i in range(count + 1):
            pt = to
            out: Optional[Point] = None
            if i < count:
                out = vector.rotate(90) * z
                pt = center + vector
            if not i:
                current.handle_out = out
            else:
                segments.append(Segment(pt, vector.rotate(-90) * z, out))
            vector = vector.rotate(inc)
        self._add(segments)

    def close_path(self, tolerance: float = 0.0) -> None:
        self.closed = True
        self.join(self, tolerance)


__all__ = ["LocationLike", "Path"]
