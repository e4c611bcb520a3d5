import pytest

from pathkernel import Curve, Path, Point, Rectangle
from pathkernel import curve as curve_mod

ARCH = (0.0, 0.0, 0.0, 10.0, 10.0, 10.0, 10.0, 0.0)
LOOP = (0.0, 0.0, 300.0, 100.0, -200.0, 100.0, 100.0, 0.0)
S_CURVE = (0.0, 0.0, 10.0, 10.0, 20.0, -10.0, 30.0, 0.0)
LINE = (0.0, 0.0, 0.0, 0.0, 10.0, 0.0, 10.0, 0.0)


def _assert_point(actual, expected, abs_tol=1e-9):
    assert actual is not None
    assert actual.x == pytest.approx(expected[0], abs=abs_tol)
    assert actual.y == pytest.approx(expected[1], abs=abs_tol)


def test_evaluate_points_and_derivatives():
    _assert_point(curve_mod.get_point(ARCH, 0.0), (0, 0))
    _assert_point(curve_mod.get_point(ARCH, 1.0), (10, 0))
    _assert_point(curve_mod.get_point(ARCH, 0.5), (5, 7.5))
    _assert_point(curve_mod.get_tangent(ARCH, 0.5), (1, 0))
    _assert_point(curve_mod.get_weighted_tangent(ARCH, 0.5), (15, 0))
    _assert_point(curve_mod.get_normal(ARCH, 0.5), (0, -1))
    assert abs(curve_mod.get_curvature(ARCH, 0.5)) == pytest.approx(4.0 / 15.0)


@pytest.mark.parametrize('t', [-0.1, 1.1, None])
def test_evaluate_outside_range_returns_none(t):
    assert curve_mod.get_point(ARCH, t) is None
    assert curve_mod.get_tangent(ARCH, t) is None
    assert curve_mod.get_curvature(ARCH, t) is None


def test_tangent_falls_back_to_handle_direction_when_handles_collapse():
    _assert_point(curve_mod.get_tangent(LINE, 0.0), (1, 0))
    _assert_point(curve_mod.get_tangent(LINE, 1.0), (1, 0))


@pytest.mark.parametrize('t', [0.1, 0.3, 0.5, 0.9])
def test_subdivide_left_part_ends_at_split_point(t):
    left, right = curve_mod.subdivide(S_CURVE, t)
    expected = curve_mod.get_point(S_CURVE, t)
    _assert_point(Point(left[6], left[7]), (expected.x, expected.y))
    assert (right[0], right[1]) == (left[6], left[7])
    halfway = curve_mod.get_point(left, 0.5)
    _assert_point(halfway, tuple(curve_mod.get_point(S_CURVE, t * 0.5)))


def test_get_part_reverses_when_start_after_end():
    part = curve_mod.get_part(ARCH, 0.75, 0.25)
    _assert_point(Point(part[0], part[1]), tuple(curve_mod.get_point(ARCH, 0.75)))
    _assert_point(Point(part[6], part[7]), tuple(curve_mod.get_point(ARCH, 0.25)))


@pytest.mark.parametrize('t', [0.2, 0.5, 0.8])
def test_length_is_additive(t):
    total = curve_mod.get_length(ARCH)
    assert total == pytest.approx(
        curve_mod.get_length(ARCH, 0.0, t) + curve_mod.get_length(ARCH, t, 1.0), rel=1e-5
    )


def test_straight_curve_length_is_chord_length():
    assert Curve.from_points((0, 0), None, None, (3, 4)).length == pytest.approx(5.0)
    assert curve_mod.get_length(LINE, 0.0, 0.0) == 0.0


@pytest.mark.parametrize('t', [0.1, 0.25, 0.5, 0.8])
def test_time_at_inverts_length(t):
    offset = curve_mod.get_length(ARCH, 0.0, t)
    assert curve_mod.get_time_at(ARCH, offset) == pytest.approx(t, abs=1e-6)


def test_time_at_edges():
    length = curve_mod.get_length(ARCH)
    assert curve_mod.get_time_at(ARCH, 0.0) == 0.0
    assert curve_mod.get_time_at(ARCH, length) == pytest.approx(1.0)
    assert curve_mod.get_time_at(ARCH, length + 1.0) is None
    assert curve_mod.get_time_at(ARCH, -length / 2) == pytest.approx(0.5, abs=1e-6)


def test_time_of_point():
    assert curve_mod.get_time_of(ARCH, (5, 7.5)) == pytest.approx(0.5)
    assert curve_mod.get_time_of(ARCH, (0, 0)) == 0.0
    assert curve_mod.get_time_of(ARCH, (5, 20)) is None


def test_nearest_time():
    assert curve_mod.get_nearest_time(LINE, (5, 5)) == pytest.approx(0.5)
    assert curve_mod.get_nearest_time(LINE, (-5, 1)) == 0.0
    assert curve_mod.get_nearest_time(ARCH, (5, 20)) == pytest.approx(0.5, abs=1e-6)


def test_bounds_include_extrema():
    assert curve_mod.get_bounds(ARCH) == Rectangle(0.0, 0.0, 10.0, 7.5)
    curve = Curve.from_values(ARCH)
    assert curve.bounds is curve.bounds


@pytest.mark.parametrize(
    'values, kind, roots',
    [
        (LINE, 'line', None),
        (ARCH, 'arch', None),
        (S_CURVE, 'serpentine', (0.5,)),
    ],
)
def test_classify(values, kind, roots):
    result = curve_mod.classify(values)
    assert result.type == kind
    if roots is None:
        assert result.roots is None
    else:
        assert result.roots == pytest.approx(roots)


def test_classify_loop_reports_self_intersection_times():
    result = curve_mod.classify(LOOP)
    assert result.type == 'loop'
    t1, t2 = result.roots
    assert t1 + t2 == pytest.approx(1.0)
    _assert_point(curve_mod.get_point(LOOP, t1), tuple(curve_mod.get_point(LOOP, t2)), abs_tol=1e-7)


def test_peaks_and_tangent_times():
    assert any(abs(t - 0.5) < 1e-6 for t in curve_mod.get_peaks(ARCH))
    assert curve_mod.get_times_with_tangent(ARCH, (1, 0)) == pytest.approx([0.5])
    assert Curve.from_values(ARCH).get_times_with_tangent((0, 0)) == []


def test_mono_curves_split_at_vertical_extremum():
    parts = curve_mod.get_mono_curves(ARCH)
    assert len(parts) == 2
    assert parts[0][7] == pytest.approx(7.5)
    assert curve_mod.get_mono_curves(ARCH, horizontal=True) == [ARCH]


def test_straightness_predicates():
    assert curve_mod.is_straight(LINE)
    assert not curve_mod.is_straight(ARCH)
    linear = (0.0, 0.0, 1.0, 0.0, 2.0, 0.0, 3.0, 0.0)
    assert curve_mod.is_linear(linear)
    assert curve_mod.is_straight(linear)
    overshooting = (0.0, 0.0, 5.0, 0.0, 2.0, 0.0, 3.0, 0.0)
    assert not curve_mod.is_straight(overshooting)
    assert curve_mod.is_flat_enough(linear, 0.25)
    assert not curve_mod.is_flat_enough(ARCH, 0.25)


def test_curve_from_values_round_trips():
    curve = Curve.from_values(ARCH)
    assert curve.values == ARCH
    assert curve.handle1 == Point(0, 10)
    assert curve.handle2 == Point(0, 10)
    assert curve.points[3] == Point(10, 0)
    assert curve.reversed().values == (10.0, 0.0, 10.0, 10.0, 0.0, 10.0, 0.0, 0.0)
    with pytest.raises(ValueError):
        Curve.from_values((0, 0, 1, 1))


def test_free_curve_divide_at_time():
    curve = Curve.from_values(ARCH)
    expected = curve.get_point_at_time(0.5)
    second = curve.divide_at_time(0.5)
    assert second is not None
    assert curve.point2 == second.point1 == expected
    assert second.point2 == Point(10, 0)
    assert curve.divide_at_time(1e-10) is None


def test_divide_at_time_inserts_segment_into_path():
    path = Path.from_points([(0, 0), (10, 0)])
    curve = path.curves[0]
    second = curve.divide_at_time(0.5)
    assert len(path.segments) == 3
    assert second is path.curves[1]
    assert second.segment1.point == Point(5, 0)
    assert curve.segment2 is second.segment1


def test_divide_at_location_or_offset():
    path = Path.from_points([(0, 0), (10, 0), (20, 0)])
    first, second = path.curves
    assert first.divide_at(second.get_location_at(5)) is None
    assert len(path.segments) == 3

    rest = first.divide_at(first.get_location_at(4))
    assert rest is not None
    assert len(path.segments) == 4
    _assert_point(rest.point1, (4, 0), abs_tol=1e-6)

    assert path.curves[-1].divide_at(25) is None
    assert path.curves[2].divide_at(5) is not None
    assert len(path.segments) == 5


def test_nearest_location_on_curve():
    curve = Curve.from_values(ARCH)
    location = curve.get_nearest_location((5, 20))
    _assert_point(location.point, (5, 7.5), abs_tol=1e-6)
    assert location.distance == pytest.approx(12.5, abs=1e-6)


def test_offset_queries_on_free_curve():
    curve = Curve.from_points((0, 0), None, None, (10, 0))
    _assert_point(curve.get_point_at(2.5), (2.5, 0))
    assert curve.get_offset_of((4, 0)) == pytest.approx(4.0)
    assert curve.get_offset_of((4, 1)) is None
    assert curve.is_horizontal()
    assert not curve.is_vertical()

