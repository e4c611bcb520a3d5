from .numerical import (
    CURVETIME_EPSILON,
    EPSILON,
    GEOMETRIC_EPSILON,
    KAPPA,
    MACHINE_EPSILON,
    TRIGONOMETRIC_EPSILON,
)
from .geometry import Line, Matrix, Point, Rectangle
from .types import (
    ArcConstructionError,
    CurveConstructionError,
    DrawingSurface,
    GeometryError,
    SegmentOwnershipError,
    StrokeStyle,
)
from .config import IntersectionConfig, get_intersection_config, set_intersection_config
from .segment import Segment
from .curve import Curve, CurveClassification
from .location import CurveLocation
from .intersections import get_intersections
from .fitter import PathFitter
from .flattener import FlattenedPart, PathFlattener
from .path import Path
from .logging_utils import apply_debug_logging, debug_log_call

__all__ = [
    'CURVETIME_EPSILON',
    'EPSILON',
    'GEOMETRIC_EPSILON',
    'KAPPA',
    'MACHINE_EPSILON',
    'TRIGONOMETRIC_EPSILON',
    'Line',
    'Matrix',
    'Point',
    'Rectangle',
    'ArcConstructionError',
    'CurveConstructionError',
    'DrawingSurface',
    'GeometryError',
    'SegmentOwnershipError',
    'StrokeStyle',
    'IntersectionConfig',
    'get_intersection_config',
    'set_intersection_config',
    'Segment',
    'Curve',
    'CurveClassification',
    'CurveLocation',
    'get_intersections',
    'PathFitter',
    'FlattenedPart',
    'PathFlattener',
    'Path',
    'apply_debug_logging',
    'debug_log_call',
]
