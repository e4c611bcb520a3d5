"""Sweep-and-prune detection of overlapping bounding boxes."""

from __future__ import annotations

from bisect import bisect_left
from typing import List, Optional, Sequence

import numpy as np


def curve_bounds(values: Sequence[Sequence[float]]) -> np.ndarray:
    """``(n, 4)`` array of ``[left, top, right, bottom]`` control-polygon bounds."""

    coords = np.asarray(values, dtype=float).reshape(-1, 4, 2)
    return np.concatenate([coords.min(axis=1), coords.max(axis=1)], axis=1)


def find_bounds_collisions(
    bounds_a: np.ndarray,
    bounds_b: Optional[np.ndarray] = None,
    tolerance: float = 0.0,
    sweep_vertical: bool = False,
) -> List[List[int]]:
    """For each box in ``bounds_a``, the sorted indices of colliding boxes in ``bounds_b``.

    Without ``bounds_b`` the boxes of ``bounds_a`` are tested against each
    other and every box is reported as colliding with itself.
    """

    self_test = bounds_b is None or bounds_b is bounds_a
    bounds_a = np.asarray(bounds_a, dtype=float).reshape(-1, 4)
    all_bounds = bounds_a if self_test else np.concatenate([bounds_a, np.asarray(bounds_b, dtype=float).reshape(-1, 4)])
    length_a = len(bounds_a)
    pri0 = 1 if sweep_vertical else 0
    pri1 = pri0 + 2
    sec0 = 0 if sweep_vertical else 1
    sec1 = sec0 + 2

    order = np.argsort(all_bounds[:, pri0], kind="stable")
    # Active boxes sorted by their far edge on the sweep axis.
    active_keys: List[float] = []
    active_indices: List[int] = []
    collisions: List[Optional[List[int]]] = [None] * length_a

    for cur_index in (int(i) for i in order):
        cur = all_bounds[cur_index]
        orig_index = cur_index if self_test else cur_index - length_a
        is_cur_a = cur_index < length_a
        is_cur_b = self_test or not is_cur_a
        cur_collisions: List[int] = []
        if active_indices:
            prune = bisect_left(active_keys, cur[pri0] - tolerance)
            del active_keys[:prune]
            del active_indices[:prune]
            for active_index in active_indices:
                active = all_bounds[active_index]
                is_active_a = active_index < length_a
                is_active_b = self_test or active_index >= length_a
                if not ((is_cur_a and is_active_b) or (is_cur_b and is_active_a)):
                    continue
                if cur[sec1] >= active[sec0] - tolerance and cur[sec0] <= active[sec1] + tolerance:
                    if is_cur_a and is_active_b:
                        cur_collisions.append(active_index if self_test else active_index - length_a)
                    if is_cur_b and is_active_a:
                        collisions[active_index].append(orig_index)  # type: ignore[union-attr]
        if is_cur_a:
            if self_test:
                cur_collisions.append(cur_index)
            collisions[cur_index] = cur_collisions
        key = float(cur[pri1])
        position = bisect_left(active_keys, key)
        active_keys.insert(position, key)
        active_indices.insert(position, cur_index)

    return [sorted(found) if found else [] for found in collisions]


def find_curve_bounds_collisions(
    values1: Sequence[Sequence[float]],
    values2: Optional[Sequence[Sequence[float]]] = None,
    tolerance: float = 0.0,
) -> List[List[int]]:
    """Candidate curve pairs whose control-polygon bounds overlap within ``tolerance``."""

    if len(values1) == 0:
        return []
    bounds1 = curve_bounds(values1)
    if values2 is None or values2 is values1:
        return find_bounds_collisions(bounds1, None, tolerance)
    if len(values2) == 0:
        return [[] for _ in values1]
    return find_bounds_collisions(bounds1, curve_bounds(values2), tolerance)


__all__ = ["curve_bounds", "find_bounds_collisions", "find_curve_bounds_collisions"]
