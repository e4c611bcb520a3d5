"""Arc-length lookup tables built by recursively flattening a path."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple, TypeVar

from .curve import (
    get_curvature,
    get_normal,
    get_part,
    get_point,
    get_tangent,
    get_values,
    get_weighted_normal,
    get_weighted_tangent,
    is_flat_enough,
    is_straight,
    subdivide,
)
from .geometry import Matrix, Point
from .logging_utils import apply_debug_logging
from .types import CurveValues, DrawingSurface

if TYPE_CHECKING:  # pragma: no cover
    from .path import Path
    from .segment import Segment

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class FlattenedPart:
    """One flat piece of a source curve.

    ``offset`` is the cumulative chord length at the end of the piece,
    ``index`` the source curve and ``time`` the curve-time where the piece ends.
    """

    offset: float
    values: CurveValues
    index: int
    time: float


class PathFlattener:
    """Monotonic table of flat curve pieces for fast arc-length traversal.

    Lookups interpolate curve-time linearly between the two bracketing table
    entries, which trades a little accuracy for cheap sequential queries.
    """

    def __init__(
        self,
        path: "Path",
        flatness: float = 0.25,
        max_recursion: int = 32,
        ignore_straight: bool = False,
        matrix: Optional[Matrix] = None,
    ) -> None:
        self.flatness = flatness
        self.ignore_straight = ignore_straight
        self.curves: List[CurveValues] = []
        self.parts: List[FlattenedPart] = []
        self.length = 0.0
        self.index = 0
        self._min_span = 1 / (max_recursion or 32)

        segments = path.segments
        if not segments:
            return
        for segment1, segment2 in zip(segments, segments[1:]):
            self._add_curve(segment1, segment2, matrix)
        if path.closed:
            self._add_curve(segments[-1], segments[0], matrix)
        logger.debug(
            "Flattened %d curves into %d parts (length=%.6g)", len(self.curves), len(self.parts), self.length
        )

    def _add_curve(self, segment1: "Segment", segment2: "Segment", matrix: Optional[Matrix]) -> None:
        values = get_values(segment1, segment2, matrix)
        self.curves.append(values)
        self._compute_parts(values, len(self.curves) - 1, 0.0, 1.0)

    def _compute_parts(self, values: CurveValues, index: int, t1: float, t2: float) -> None:
        if (
            t2 - t1 > self._min_span
            and not (self.ignore_straight and is_straight(values))
            and not is_flat_enough(values, self.flatness)
        ):
            left, right = subdivide(values, 0.5)
            t_mid = (t1 + t2) / 2
            self._compute_parts(left, index, t1, t_mid)
            self._compute_parts(right, index, t_mid, t2)
            return
        dx = values[6] - values[0]
        dy = values[7] - values[1]
        dist = (dx * dx + dy * dy) ** 0.5
        if dist > 0:
            self.length += dist
            self.parts.append(FlattenedPart(self.length, values, index, t2))

    def _get(self, offset: float) -> Optional[Tuple[int, float]]:
        """``(curve index, curve-time)`` at ``offset``, scanning from the last hit."""

        parts = self.parts
        if not parts:
            return None
        j = self.index
        while True:
            i = j
            if j == 0:
                break
            j -= 1
            if parts[j].offset < offset:
                break
        for i in range(i, len(parts)):
            part = parts[i]
            if part.offset >= offset:
                self.index = i
                prev = parts[i - 1] if i > 0 else None
                prev_time = prev.time if prev is not None and prev.index == part.index else 0.0
                prev_offset = prev.offset if prev is not None else 0.0
                time = prev_time + (part.time - prev_time) * (offset - prev_offset) / (part.offset - prev_offset)
                return part.index, time
        return parts[-1].index, 1.0

    def _evaluate(self, offset: float, evaluate: Callable[[CurveValues, float], Optional[T]]) -> Optional[T]:
        found = self._get(offset)
        if found is None:
            return None
        index, time = found
        return evaluate(self.curves[index], time)

    def get_point_at(self, offset: float) -> Optional[Point]:
        return self._evaluate(offset, get_point)

    def get_tangent_at(self, offset: float) -> Optional[Point]:
        return self._evaluate(offset, get_tangent)

    def get_normal_at(self, offset: float) -> Optional[Point]:
        return self._evaluate(offset, get_normal)

    def get_weighted_tangent_at(self, offset: float) -> Optional[Point]:
        return self._evaluate(offset, get_weighted_tangent)

    def get_weighted_normal_at(self, offset: float) -> Optional[Point]:
        return self._evaluate(offset, get_weighted_normal)

    def get_curvature_at(self, offset: float) -> Optional[float]:
        return self._evaluate(offset, get_curvature)

    def draw_part(self, surface: DrawingSurface, from_: float, to: float) -> None:
        """Emit the stretch between offsets ``from_`` and ``to`` as cubic curves."""

        start = self._get(from_)
        end = self._get(to)
        if start is None or end is None:
            return
        start_index, start_time = start
        end_index, end_time = end
        for i in range(start_index, end_index + 1):
            v = get_part(
                self.curves[i],
                start_time if i == start_index else 0.0,
                end_time if i == end_index else 1.0,
            )
            if i == start_index:
                surface.move_to(v[0], v[1])
            surface.bezier_curve_to(v[2], v[3], v[4], v[5], v[6], v[7])


apply_debug_logging(
    globals(),
    logger=logger,
    skip={
        "PathFlattener._add_curve",
        "PathFlattener._compute_parts",
        "PathFlattener._get",
        "PathFlattener._evaluate",
    },
)


__all__ = ["FlattenedPart", "PathFlattener"]
