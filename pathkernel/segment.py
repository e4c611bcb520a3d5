"""Path segments: an anchor point with incoming and outgoing handles."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Union

from .geometry import Matrix, Point, PointLike
from .types import SmoothType

if TYPE_CHECKING:  # pragma: no cover
    from .curve import Curve
    from .location import CurveLocation
    from .path import Path

SegmentLike = Union["Segment", PointLike, Mapping[str, Any]]


class Segment:
    """Anchor ``point`` plus ``handle_in``/``handle_out`` stored relative to it.

    A segment belongs to at most one :class:`~pathkernel.path.Path`. Assigning
    a point or handle invalidates the cached length and bounds of the adjacent
    curves without bumping the path version.
    """

    __slots__ = ("_point", "_handle_in", "_handle_out", "_path", "_index")

    def __init__(
        self,
        point: Optional[PointLike] = None,
        handle_in: Optional[PointLike] = None,
        handle_out: Optional[PointLike] = None,
    ) -> None:
        self._point = Point.read(point)
        self._handle_in = Point.read(handle_in)
        self._handle_out = Point.read(handle_out)
        self._path: Optional["Path"] = None
        self._index: Optional[int] = None

    @classmethod
    def read(cls, value: SegmentLike) -> "Segment":
        """Build a segment from a segment, a point or a ``{"point", "handle_in", "handle_out"}`` mapping."""

        if isinstance(value, Segment):
            return value
        if isinstance(value, Mapping) and "point" in value:
            return cls(value["point"], value.get("handle_in"), value.get("handle_out"))
        return cls(Point.read(value))

    def __repr__(self) -> str:
        parts = [f"point=({self._point.x:g}, {self._point.y:g})"]
        if not self._handle_in.is_zero():
            parts.append(f"handle_in=({self._handle_in.x:g}, {self._handle_in.y:g})")
        if not self._handle_out.is_zero():
            parts.append(f"handle_out=({self._handle_out.x:g}, {self._handle_out.y:g})")
        return "Segment(" + ", ".join(parts) + ")"

    def _changed(self, which: Optional[str] = None) -> None:
        path = self._path
        if path is None:
            return
        curves = path._curves
        index = self._index
        if curves is not None and index is not None:
            if which in (None, "point", "handle_in"):
                if index > 0:
                    previous = curves[index - 1] if index - 1 < len(curves) else None
                elif path._closed and curves:
                    previous = curves[-1]
                else:
                    previous = None
                if previous is not None:
                    previous._changed()
            if which in (None, "point", "handle_out") and index < len(curves):
                curves[index]._changed()
        path._geometry_changed()

    @property
    def point(self) -> Point:
        return self._point

    @point.setter
    def point(self, value: PointLike) -> None:
        self._point = Point.read(value)
        self._changed("point")

    @property
    def handle_in(self) -> Point:
        return self._handle_in

    @handle_in.setter
    def handle_in(self, value: Optional[PointLike]) -> None:
        self._handle_in = Point.read(value)
        self._changed("handle_in")

    @property
    def handle_out(self) -> Point:
        return self._handle_out

    @handle_out.setter
    def handle_out(self, value: Optional[PointLike]) -> None:
        self._handle_out = Point.read(value)
        self._changed("handle_out")

    @property
    def path(self) -> Optional["Path"]:
        return self._path

    @property
    def index(self) -> Optional[int]:
        return self._index

    def has_handles(self) -> bool:
        return not self._handle_in.is_zero() or not self._handle_out.is_zero()

    def is_smooth(self) -> bool:
        handle_in = self._handle_in
        handle_out = self._handle_out
        return not handle_in.is_zero() and not handle_out.is_zero() and handle_in.is_collinear(handle_out)

    def clear_handles(self) -> None:
        self._handle_in = Point()
        self._handle_out = Point()
        self._changed()

    @property
    def curve(self) -> Optional["Curve"]:
        """The curve that starts at this segment (the last curve for the last segment of an open path)."""

        path = self._path
        if path is None or self._index is None:
            return None
        index = self._index
        if index > 0 and not path._closed and index == len(path._segments) - 1:
            index -= 1
        curves = path._get_curves()
        return curves[index] if index < len(curves) else None

    @property
    def location(self) -> Optional["CurveLocation"]:
        from .location import CurveLocation

        curve = self.curve
        if curve is None:
            return None
        return CurveLocation(curve, 0.0 if self is curve.segment1 else 1.0)

    @property
    def next(self) -> Optional["Segment"]:
        path = self._path
        if path is None or self._index is None:
            return None
        segments = path._segments
        if self._index + 1 < len(segments):
            return segments[self._index + 1]
        return segments[0] if path._closed and segments else None

    @property
    def previous(self) -> Optional["Segment"]:
        path = self._path
        if path is None or self._index is None:
            return None
        segments = path._segments
        if self._index > 0:
            return segments[self._index - 1]
        return segments[-1] if path._closed and segments else None

    def is_first(self) -> bool:
        return self._index == 0

    def is_last(self) -> bool:
        path = self._path
        return path is not None and self._index == len(path._segments) - 1

    def reverse(self) -> None:
        """Swap the two handles in place."""

        self._handle_in, self._handle_out = self._handle_out, self._handle_in
        self._changed()

    def reversed(self) -> "Segment":
        return Segment(self._point, self._handle_out, self._handle_in)

    def clone(self) -> "Segment":
        return Segment(self._point, self._handle_in, self._handle_out)

    def remove(self) -> bool:
        if self._path is None or self._index is None:
            return False
        return bool(self._path.remove_segment(self._index))

    def _transform_coordinates(self, matrix: Optional[Matrix] = None) -> List[float]:
        """Absolute ``[x, y, in_x, in_y, out_x, out_y]``, optionally transformed."""

        x, y = self._point.x, self._point.y
        coords = [
            x,
            y,
            x + self._handle_in.x,
            y + self._handle_in.y,
            x + self._handle_out.x,
            y + self._handle_out.y,
        ]
        if matrix is not None:
            coords = matrix.transform_coordinates(coords)
        return coords

    def transform(self, matrix: Matrix) -> None:
        x, y, in_x, in_y, out_x, out_y = self._transform_coordinates(matrix)
        self._point = Point(x, y)
        self._handle_in = Point(in_x - x, in_y - y)
        self._handle_out = Point(out_x - x, out_y - y)
        self._changed()

    def smooth(
        self,
        type: SmoothType = "catmull-rom",
        factor: Optional[float] = None,
        first: bool = False,
        last: bool = False,
    ) -> None:
        """Set the handles from the neighbouring anchors.

        ``catmull-rom`` uses the parametrisation exponent ``factor`` (0.5 is
        centripetal); ``geometric`` scales the neighbour chord by ``factor``.
        ``first``/``last`` leave the outer handle of a range untouched.
        """

        prev = self.previous
        nxt = self.next
        p0 = (prev or self)._point
        p1 = self._point
        p2 = (nxt or self)._point
        d1 = p0.get_distance(p1)
        d2 = p1.get_distance(p2)
        if type == "catmull-rom":
            a = 0.5 if factor is None else factor
            d1_a = math.pow(d1, a)
            d1_2a = d1_a * d1_a
            d2_a = math.pow(d2, a)
            d2_2a = d2_a * d2_a
            if not first and prev is not None:
                big_a = 2 * d2_2a + 3 * d2_a * d1_a + d1_2a
                n = 3 * d2_a * (d2_a + d1_a)
                self.handle_in = (
                    Point(
                        (d2_2a * p0.x + big_a * p1.x - d1_2a * p2.x) / n - p1.x,
                        (d2_2a * p0.y + big_a * p1.y - d1_2a * p2.y) / n - p1.y,
                    )
                    if n != 0
                    else Point()
                )
            if not last and nxt is not None:
                big_a = 2 * d1_2a + 3 * d1_a * d2_a + d2_2a
                n = 3 * d1_a * (d1_a + d2_a)
                self.handle_out = (
                    Point(
                        (d1_2a * p2.x + big_a * p1.x - d2_2a * p0.x) / n - p1.x,
                        (d1_2a * p2.y + big_a * p1.y - d2_2a * p0.y) / n - p1.y,
                    )
                    if n != 0
                    else Point()
                )
        elif type == "geometric":
            if prev is not None and nxt is not None:
                vector = p0 - p2
                t = 0.4 if factor is None else factor
                k = t * d1 / (d1 + d2) if d1 + d2 else 0.0
                if not first:
                    self.handle_in = vector * k
                if not last:
                    self.handle_out = vector * (k - t)
        else:
            raise ValueError(f"Smoothing method {type!r} not supported")


__all__ = ["Segment", "SegmentLike"]
