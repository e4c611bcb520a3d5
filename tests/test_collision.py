import numpy as np
import pytest

from pathkernel import collision


def test_self_collisions_include_each_box():
    bounds = [[0, 0, 1, 1], [0.5, 0.5, 2, 2], [3, 3, 4, 4]]
    assert collision.find_bounds_collisions(bounds) == [[0, 1], [0, 1], [2]]


def test_collisions_between_two_sets():
    assert collision.find_bounds_collisions([[0, 0, 1, 1]], [[0.5, 0.5, 2, 2]]) == [[0]]
    assert collision.find_bounds_collisions([[0, 0, 1, 1]], [[5, 5, 6, 6]]) == [[]]


@pytest.mark.parametrize('tolerance, expected', [(0.0, [[]]), (0.1, [[0]])])
def test_tolerance_widens_boxes(tolerance, expected):
    found = collision.find_bounds_collisions([[0, 0, 1, 1]], [[1.05, 0, 2, 1]], tolerance)
    assert found == expected


def test_vertical_sweep_matches_horizontal():
    rng = np.random.default_rng(7)
    corners = rng.uniform(0, 100, size=(30, 2))
    sizes = rng.uniform(1, 20, size=(30, 2))
    bounds = np.hstack([corners, corners + sizes])
    horizontal = collision.find_bounds_collisions(bounds)
    vertical = collision.find_bounds_collisions(bounds, sweep_vertical=True)
    assert horizontal == vertical


def test_sweep_matches_brute_force():
    rng = np.random.default_rng(11)
    a = rng.uniform(0, 50, size=(20, 2))
    a = np.hstack([a, a + rng.uniform(1, 10, size=(20, 2))])
    b = rng.uniform(0, 50, size=(15, 2))
    b = np.hstack([b, b + rng.uniform(1, 10, size=(15, 2))])
    expected = [
        [j for j in range(len(b)) if box[0] <= b[j][2] and box[2] >= b[j][0] and box[1] <= b[j][3] and box[3] >= b[j][1]]
        for box in a
    ]
    assert collision.find_bounds_collisions(a, b) == expected


def test_curve_bounds_use_control_polygon():
    arch = (0.0, 0.0, 0.0, 10.0, 10.0, 10.0, 10.0, 0.0)
    assert collision.curve_bounds([arch]).tolist() == [[0.0, 0.0, 10.0, 10.0]]


def test_curve_collisions_edge_cases():
    line = (0.0, 0.0, 0.0, 0.0, 10.0, 0.0, 10.0, 0.0)
    assert collision.find_curve_bounds_collisions([]) == []
    assert collision.find_curve_bounds_collisions([line], []) == [[]]
    assert collision.find_curve_bounds_collisions([line]) == [[0]]
