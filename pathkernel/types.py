"""Shared type aliases, collaborator protocols and geometry exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol, Tuple

CurveValues = Tuple[float, float, float, float, float, float, float, float]
StrokeJoin = Literal["miter", "round", "bevel"]
StrokeCap = Literal["butt", "round", "square"]
EvaluationKind = Literal["point", "tangent", "normal", "curvature"]
SmoothType = Literal["asymmetric", "continuous", "catmull-rom", "geometric"]


class GeometryError(ValueError):
    """Raised when a geometric construction is requested with degenerate input."""


class ArcConstructionError(GeometryError):
    """Raised when no circular arc passes through the requested points."""


class CurveConstructionError(GeometryError):
    """Raised when a curve cannot be put through the requested point."""


class SegmentOwnershipError(GeometryError):
    """Raised when a segment or curve of another path is passed to a path operation."""


@dataclass
class StrokeStyle:
    """Stroke attributes consulted by stroke-bounds computations."""

    width: float = 0.0
    join: StrokeJoin = "miter"
    cap: StrokeCap = "butt"
    miter_limit: float = 10.0

    def has_stroke(self) -> bool:
        return self.width > 0


class DrawingSurface(Protocol):
    """Sink for path drawing commands, e.g. a canvas context or an SVG writer."""

    def move_to(self, x: float, y: float) -> None:
        ...

    def line_to(self, x: float, y: float) -> None:
        ...

    def bezier_curve_to(
        self, h1x: float, h1y: float, h2x: float, h2y: float, x: float, y: float
    ) -> None:
        ...

    def close_path(self) -> None:
        ...


__all__ = [
    "ArcConstructionError",
    "CurveConstructionError",
    "CurveValues",
    "DrawingSurface",
    "EvaluationKind",
    "GeometryError",
    "SegmentOwnershipError",
    "SmoothType",
    "StrokeCap",
    "StrokeJoin",
    "StrokeStyle",
]
