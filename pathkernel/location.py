"""Locations on curves and paths, including intersection results."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from . import numerical
from .curve import Curve, classify, get_length, get_peaks
from .geometry import Point
from .segment import Segment

if TYPE_CHECKING:  # pragma: no cover
    from .path import Path


def _path_key(path: Optional["Path"]) -> int:
    return path.id if path is not None else -1


class CurveLocation:
    """A curve-time on a curve, with lazily derived point, offset and tangents.

    Times at the very end of a curve are canonicalized to time 0 on the next
    curve of the same path. When the owning path is structurally edited
    (its ``version`` changes) the curve and time are re-resolved from the
    cached point and the segments the location was created on.
    """

    def __init__(
        self,
        curve: Curve,
        time: Optional[float],
        point: Optional[Point] = None,
        overlap: bool = False,
        distance: Optional[float] = None,
    ) -> None:
        if time is not None and time >= 1 - numerical.CURVETIME_EPSILON:
            following = curve.next
            if following is not None:
                time = 0.0
                curve = following
        self._path: Optional["Path"] = None
        self._version = 0
        self._curve: Optional[Curve] = None
        self._segment: Optional[Segment] = None
        self._segment1: Optional[Segment] = None
        self._segment2: Optional[Segment] = None
        self._set_curve(curve)
        self._time = time
        self._point = point if point is not None else curve.get_point_at_time(time)
        self._overlap = overlap
        self._distance = distance
        self._offset: Optional[float] = None
        self._curve_offset: Optional[float] = None
        self._intersection: Optional["CurveLocation"] = None

    def __repr__(self) -> str:
        parts = []
        if self._point is not None:
            parts.append(f"point=({self._point.x:g}, {self._point.y:g})")
        index = self.index
        if index is not None:
            parts.append(f"index={index}")
        time = self.time
        if time is not None:
            parts.append(f"time={time:.6g}")
        if self._distance is not None:
            parts.append(f"distance={self._distance:.6g}")
        return "CurveLocation(" + ", ".join(parts) + ")"

    def _set_path(self, path: Optional["Path"]) -> None:
        self._path = path
        self._version = path.version if path is not None else 0

    def _set_curve(self, curve: Curve) -> None:
        self._set_path(curve.path)
        self._curve = curve
        self._segment = None
        self._segment1 = curve.segment1
        self._segment2 = curve.segment2

    def _set_segment(self, segment: Segment) -> None:
        curve = segment.curve
        if curve is not None:
            self._set_curve(curve)
        else:
            self._set_path(segment.path)
            self._segment1 = segment
            self._segment2 = None
        self._segment = segment
        self._time = 0.0 if segment is self._segment1 else 1.0
        self._point = segment.point
        self._offset = self._curve_offset = None

    def _try_segment(self, segment: Optional[Segment]) -> Optional[Curve]:
        curve = segment.curve if segment is not None else None
        if curve is None:
            return None
        time = curve.get_time_of(self._point)
        if time is None:
            return None
        self._set_curve(curve)
        self._time = time
        return curve

    @property
    def curve(self) -> Optional[Curve]:
        path = self._path
        if path is not None and path.version != self._version:
            self._time = None
            self._offset = None
            self._curve_offset = None
            self._curve = None
        if self._curve is not None:
            return self._curve
        previous = self._segment2.previous if self._segment2 is not None else None
        return self._try_segment(self._segment) or self._try_segment(self._segment1) or self._try_segment(previous)

    @property
    def segment(self) -> Optional[Segment]:
        """The segment nearest to this location along its curve."""

        if self._segment is None:
            curve = self.curve
            time = self.time
            if curve is None or time is None:
                return None
            if time == 0:
                self._segment = curve.segment1
            elif time == 1:
                self._segment = curve.segment2
            else:
                nearer_start = curve.get_part_length(0.0, time) < curve.get_part_length(time, 1.0)
                self._segment = curve.segment1 if nearer_start else curve.segment2
        return self._segment

    @property
    def path(self) -> Optional["Path"]:
        curve = self.curve
        return curve.path if curve is not None else None

    @property
    def index(self) -> Optional[int]:
        curve = self.curve
        return curve.index if curve is not None else None

    @property
    def time(self) -> Optional[float]:
        curve = self.curve
        if curve is not None and self._time is None:
            self._time = curve.get_time_of(self._point)
        return self._time

    @property
    def point(self) -> Point:
        return self._point

    @property
    def offset(self) -> float:
        """Arc length from the start of the path to this location."""

        if self._offset is None:
            offset = 0.0
            path = self.path
            index = self.index
            if path is not None and index is not None:
                curves = path._get_curves()
                for i in range(index):
                    offset += curves[i].length
            self._offset = offset + (self.curve_offset or 0.0)
        return self._offset

    @property
    def curve_offset(self) -> Optional[float]:
        """Arc length from the start of the curve to this location."""

        if self._curve_offset is None:
            curve = self.curve
            time = self.time
            if curve is not None and time is not None:
                self._curve_offset = curve.get_part_length(0.0, time)
        return self._curve_offset

    @property
    def intersection(self) -> Optional["CurveLocation"]:
        return self._intersection

    @intersection.setter
    def intersection(self, value: Optional["CurveLocation"]) -> None:
        self._intersection = value

    @property
    def overlap(self) -> bool:
        return self._overlap

    @overlap.setter
    def overlap(self, value: bool) -> None:
        self._overlap = bool(value)

    @property
    def distance(self) -> Optional[float]:
        return self._distance

    @property
    def tangent(self) -> Optional[Point]:
        curve = self.curve
        time = self.time
        return curve.get_tangent_at_time(time) if curve is not None and time is not None else None

    @property
    def normal(self) -> Optional[Point]:
        curve = self.curve
        time = self.time
        return curve.get_normal_at_time(time) if curve is not None and time is not None else None

    @property
    def weighted_tangent(self) -> Optional[Point]:
        curve = self.curve
        time = self.time
        return curve.get_weighted_tangent_at_time(time) if curve is not None and time is not None else None

    @property
    def weighted_normal(self) -> Optional[Point]:
        curve = self.curve
        time = self.time
        return curve.get_weighted_normal_at_time(time) if curve is not None and time is not None else None

    @property
    def curvature(self) -> Optional[float]:
        curve = self.curve
        time = self.time
        return curve.get_curvature_at_time(time) if curve is not None and time is not None else None

    def has_overlap(self) -> bool:
        return self._overlap

    def divide(self) -> Optional[Curve]:
        curve = self.curve
        time = self.time
        if curve is None or time is None:
            return None
        result = curve.divide_at_time(time)
        if result is not None:
            self._set_segment(result.segment1)
        return result

    def split(self) -> Optional["Path"]:
        curve = self.curve
        time = self.time
        if curve is None or time is None:
            return None
        path = curve.path
        result = curve.split_at_time(time)
        if result is not None and path is not None:
            self._set_segment(path.last_segment)
        return result

    def equals(self, other: object, ignore_other: bool = False) -> bool:
        """True when both locations sit at the same offset of the same path.

        Unless ``ignore_other`` is set, paired intersections must match too.
        """

        if self is other:
            return True
        if not isinstance(other, CurveLocation):
            return False
        c1 = self.curve
        c2 = other.curve
        p1 = c1.path if c1 is not None else None
        p2 = c2.path if c2 is not None else None
        if p1 is not p2:
            return False
        epsilon = numerical.GEOMETRIC_EPSILON
        diff = abs(self.offset - other.offset)
        same_offset = diff < epsilon or (p1 is not None and abs(p1.length - diff) < epsilon)
        if not same_offset:
            return False
        i1 = None if ignore_other else self._intersection
        i2 = None if ignore_other else other._intersection
        if i1 is None and i2 is None:
            return True
        return i1 is not None and i2 is not None and i1.equals(i2, True)

    def is_touching(self) -> bool:
        """True when both curves share the tangent direction here without crossing lines."""

        inter = self._intersection
        if inter is None:
            return False
        t1 = self.tangent
        t2 = inter.tangent
        if t1 is None or t2 is None or not t1.is_collinear(t2):
            return False
        curve1 = self.curve
        curve2 = inter.curve
        return not (
            curve1.is_straight()
            and curve2.is_straight()
            and curve1.line.intersect(curve2.line) is not None
        )

    def is_crossing(self) -> bool:
        """True when the two paths cross (rather than touch) at this intersection."""

        inter = self._intersection
        if inter is None:
            return False
        t1 = self.time
        t2 = inter.time
        if t1 is None or t2 is None:
            return False
        t_min = numerical.CURVETIME_EPSILON
        t_max = 1 - t_min
        t1_inside = t_min <= t1 <= t_max
        t2_inside = t_min <= t2 <= t_max
        if t1_inside and t2_inside:
            return not self.is_touching()

        c2 = self.curve
        c1 = c2.previous if c2 is not None and t1 < t_min else c2
        c4 = inter.curve
        c3 = c4.previous if c4 is not None and t2 < t_min else c4
        if t1 > t_max and c2 is not None:
            c2 = c2.next
        if t2 > t_max and c4 is not None:
            c4 = c4.next
        if c1 is None or c2 is None or c3 is None or c4 is None:
            return False

        offsets: List[float] = []

        def add_offsets(curve: Curve, end: bool) -> None:
            # Largest offset with unambiguous direction, bounded by the first
            # loop, cusp, inflection or curvature peak from the joint.
            v = curve.values
            roots = list(classify(v).roots or get_peaks(v))
            count = len(roots)
            offset = get_length(
                v,
                roots[-1] if end and count else 0.0,
                roots[0] if not end and count else 1.0,
            )
            offsets.append(offset if count else offset / 32)

        def in_range(angle: float, lower: float, upper: float) -> bool:
            if lower < upper:
                return lower < angle < upper
            return angle > lower or angle < upper

        if not t1_inside:
            add_offsets(c1, True)
            add_offsets(c2, False)
        if not t2_inside:
            add_offsets(c3, True)
            add_offsets(c4, False)
        pt = self._point
        offset = min(offsets)
        v2 = c2.get_tangent_at_time(t1) if t1_inside else c2.get_point_at(offset) - pt
        v1 = -v2 if t1_inside else c1.get_point_at(-offset) - pt
        v4 = c4.get_tangent_at_time(t2) if t2_inside else c4.get_point_at(offset) - pt
        v3 = -v4 if t2_inside else c3.get_point_at(-offset) - pt
        a1, a2, a3, a4 = v1.angle, v2.angle, v3.angle, v4.angle
        if t1_inside:
            return (in_range(a1, a3, a4) != in_range(a2, a3, a4)) and (
                in_range(a1, a4, a3) != in_range(a2, a4, a3)
            )
        return (in_range(a3, a1, a2) != in_range(a4, a1, a2)) and (
            in_range(a3, a2, a1) != in_range(a4, a2, a1)
        )

    @staticmethod
    def insert(locations: List["CurveLocation"], location: "CurveLocation", merge: bool = False) -> "CurveLocation":
        """Insert ``location`` into the sorted ``locations`` list.

        The list is ordered by path id, then by curve index plus time. With
        ``merge`` set, a location equal to an existing entry is not inserted
        and the existing entry is returned instead (inheriting the overlap
        flag).
        """

        length = len(locations)
        point = location.point

        def search(index: int, step: int) -> Optional["CurveLocation"]:
            i = index + step
            while -1 <= i <= length:
                other = locations[i % length]
                if not point.is_close(other.point, numerical.GEOMETRIC_EPSILON):
                    break
                if location.equals(other):
                    return other
                i += step
            return None

        lo = 0
        hi = length - 1
        while lo <= hi:
            mid = (lo + hi) // 2
            other = locations[mid]
            if merge:
                found = other if location.equals(other) else (search(mid, -1) or search(mid, 1))
                if found is not None:
                    if location._overlap:
                        found._overlap = True
                        if found._intersection is not None:
                            found._intersection._overlap = True
                    return found
            path1 = location.path
            path2 = other.path
            if path1 is not path2:
                diff = float(_path_key(path1) - _path_key(path2))
            else:
                diff = ((location.index or 0) + (location.time or 0.0)) - (
                    (other.index or 0) + (other.time or 0.0)
                )
            if diff < 0:
                hi = mid - 1
            else:
                lo = mid + 1
        locations.insert(lo, location)
        return location

    @staticmethod
    def expand(locations: List["CurveLocation"]) -> List["CurveLocation"]:
        """Return ``locations`` plus their paired intersections, kept sorted."""

        expanded = list(locations)
        for location in reversed(locations):
            if location.intersection is not None:
                CurveLocation.insert(expanded, location.intersection, False)
        return expanded


__all__ = ["CurveLocation"]
