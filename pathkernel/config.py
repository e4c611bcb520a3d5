"""Configuration helpers for the intersection engine."""

from __future__ import annotations

import copy
from dataclasses import dataclass


@dataclass
class IntersectionConfig:
    """Work budget of the fat-line clipping search.

    Exhausting ``max_recursion`` or ``max_calls`` ends the search for the
    current curve pair; intersections found up to that point are kept.
    """

    max_recursion: int = 40
    max_calls: int = 4096
    fat_line_epsilon: float = 1e-9
    clip_shrink_threshold: float = 0.8


_INTERSECTION_CONFIG = IntersectionConfig()


def get_intersection_config() -> IntersectionConfig:
    return copy.deepcopy(_INTERSECTION_CONFIG)


def set_intersection_config(config: IntersectionConfig) -> None:
    global _INTERSECTION_CONFIG
    _INTERSECTION_CONFIG = copy.deepcopy(config)


__all__ = ["IntersectionConfig", "get_intersection_config", "set_intersection_config"]
